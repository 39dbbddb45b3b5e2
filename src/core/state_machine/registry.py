from loguru import logger

from .handler import Handler
from ...utils.lock import ReadWriteLock


class HandlerRegistry:
    """Maps (machine name, handler id) to live handlers.

    Machines register every identified handler at construction time and the
    snapshot codec resolves ids back to handlers when a machine is decoded.
    Entries are never pruned. Registration and lookup are guarded by a
    reader/writer lock, so machines may be built and decoded from several
    threads at once.
    """
    _handlers: dict[str, dict[str, Handler]]
    _lock: ReadWriteLock

    def __init__(self) -> None:
        self._handlers = {}
        self._lock = ReadWriteLock()

    def register(self, name: str, handler_id: str, handler: Handler) -> None:
        """Register a handler under the machine name. Overwrites an existing entry.

        Args:
            name: Name of the machine, used as namespace.
            handler_id: Identifier of the handler.
            handler: The handler to store.
        """
        with self._lock.write_lock():
            self._handlers.setdefault(name, {})[handler_id] = handler
        logger.debug(f"[{name}] handler '{handler_id}' registered")

    def lookup(self, name: str, handler_id: str) -> Handler | None:
        """Return the handler registered under (name, handler_id), or None if it was never registered."""
        with self._lock.read_lock():
            return self._handlers.get(name, {}).get(handler_id)

    def handlers_for(self, name: str) -> dict[str, Handler]:
        """Return a copy of every handler registered under the machine name.

        The copy is taken inside a single read section, so the result is a
        consistent view even while other threads register handlers.
        """
        with self._lock.read_lock():
            return dict(self._handlers.get(name, {}))

    def names(self) -> list[str]:
        """List the machine names that have at least one handler."""
        with self._lock.read_lock():
            return list(self._handlers)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock.write_lock():
            self._handlers.clear()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        name, handler_id = key
        return self.lookup(name, handler_id) is not None

    def __len__(self) -> int:
        with self._lock.read_lock():
            return sum(len(handlers) for handlers in self._handlers.values())


# Process-wide default registry
_registry: HandlerRegistry | None = None


def get_registry() -> HandlerRegistry:
    """
    Get the process-wide default HandlerRegistry.

    Creates the instance on first call, subsequent calls return the same instance.

    Returns:
        HandlerRegistry: The default registry
    """
    global _registry

    if _registry is None:
        _registry = HandlerRegistry()

    return _registry


def reset_registry() -> HandlerRegistry:
    """
    Replace the process-wide default registry with an empty one.

    This is useful for testing, where handlers registered by one test must not
    leak into the next.

    Returns:
        HandlerRegistry: The new default registry
    """
    global _registry
    _registry = HandlerRegistry()
    return _registry
