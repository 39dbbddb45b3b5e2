from dataclasses import dataclass, field

from .const import HandleTransition


@dataclass(frozen=True)
class Handler:
    """Identified transition callback.

    The ``id`` is the only part that takes part in equality and serialization.
    The function is attached at runtime and re-resolved through a
    ``HandlerRegistry`` when a machine is decoded.

    Attributes:
        id: Identifier of the handler, unique inside a machine name. Empty for anonymous handlers.
        func: Optional callable invoked as ``func(from_state, to_state, payload)``.
    """
    id: str = ""
    func: HandleTransition | None = field(default=None, compare=False, repr=False)

    def is_identified(self) -> bool:
        """Whether the handler carries an id and can be registered."""
        return self.id != ""


@dataclass(frozen=True)
class Transition:
    """A permitted move from one state to another, with an optional handler."""
    from_state: str
    to_state: str
    handler: Handler = field(default_factory=Handler)


def new_handler(handler_id: str, func: HandleTransition | None = None) -> Handler:
    """Create a handler with the given id and callable.

    Args:
        handler_id: Identifier persisted in snapshots.
        func: Callback invoked on the transition, or None.

    Returns:
        Handler: The new handler value
    """
    return Handler(id=handler_id, func=func)


def new_transition(from_state: str, to_state: str, *handlers: Handler) -> Transition:
    """Create a transition. Only the first handler is used, the zero handler if none is given."""
    handler = handlers[0] if handlers else Handler()
    return Transition(from_state=from_state, to_state=to_state, handler=handler)
