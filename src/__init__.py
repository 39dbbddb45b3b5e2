"""statetable: finite state machines built on a transition table"""
from .core.state_machine import (
    IStateMachine,
    StateMachine,
    equal_machines,
    Handler,
    HandleTransition,
    Transition,
    new_handler,
    new_transition,
    HandlerRegistry,
    get_registry,
    reset_registry,
    StateMachineError,
    IllegalTransitionError,
    ConstructionError,
    UnresolvedHandlerError,
)
from .model import StateMachineSnapshot, Settings, get_settings, reload_settings
from .utils import configure_logging


__version__ = "0.1.0"

__all__ = [
    "IStateMachine", "StateMachine", "equal_machines",
    "Handler", "HandleTransition", "Transition", "new_handler", "new_transition",
    "HandlerRegistry", "get_registry", "reset_registry",
    "StateMachineError", "IllegalTransitionError", "ConstructionError", "UnresolvedHandlerError",
    "StateMachineSnapshot", "Settings", "get_settings", "reload_settings",
    "configure_logging",
]
