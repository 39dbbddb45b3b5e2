"""Transition table state machine"""
from .base import StateMachine, equal_machines
from .const import HandleTransition, NIL_STATE
from .errors import StateMachineError, IllegalTransitionError, ConstructionError, UnresolvedHandlerError
from .handler import Handler, Transition, new_handler, new_transition
from .interface import IStateMachine
from .registry import HandlerRegistry, get_registry, reset_registry


__all__ = [
    # Machine
    "IStateMachine", "StateMachine", "equal_machines",
    # Handlers and transitions
    "HandleTransition", "Handler", "Transition", "new_handler", "new_transition", "NIL_STATE",
    # Registry
    "HandlerRegistry", "get_registry", "reset_registry",
    # Errors
    "StateMachineError", "IllegalTransitionError", "ConstructionError", "UnresolvedHandlerError",
]
