from .const import NIL_STATE


class StateMachineError(ValueError):
    """Base class of all errors raised by the state machine."""


class IllegalTransitionError(StateMachineError):
    """IllegalTransitionError is raised when the requested edge or state is not in the transition table.

    The machine is left unchanged, so the caller may retry with another state.

    Attributes:
        current (str):
            The current state of the machine when the transition was attempted.
        next (str):
            The state that was requested.
    """
    current: str
    next: str

    def __init__(self, current: str, next_state: str) -> None:
        """Initialize the IllegalTransitionError.

        Args:
            current (str):
                The current state of the machine.
            next_state (str):
                The state that was requested.
        """
        self.current = current
        self.next = next_state
        super().__init__(current, next_state)

    def __str__(self) -> str:
        """Return the string representation of the IllegalTransitionError.

        Returns:
            str:
                The string representation of the IllegalTransitionError.
        """
        current = self.current or NIL_STATE
        return f"illegal transition: <{current}> -x-> <{self.next}>"


class ConstructionError(StateMachineError):
    """Raised when a machine is built from an empty transition list or an invalid initial state."""


class UnresolvedHandlerError(StateMachineError):
    """Raised by strict decoding when a handler id has no registry entry."""
    name: str
    handler_id: str

    def __init__(self, name: str, handler_id: str) -> None:
        self.name = name
        self.handler_id = handler_id
        super().__init__(name, handler_id)

    def __str__(self) -> str:
        return f"no handler registered for machine '{self.name}' with id '{self.handler_id}'"
