from typing import Any, Iterable

from loguru import logger

from .errors import ConstructionError, IllegalTransitionError, UnresolvedHandlerError
from .handler import Handler, Transition
from .interface import IStateMachine
from .registry import HandlerRegistry, get_registry
from ...model.setting import strict_decode_enabled
from ...model.snapshot import StateMachineSnapshot


def _terminate_states(transitions: dict[str, dict[str, Handler]]) -> set[str]:
    """States referenced as a destination but never as a source."""
    return {
        to_state
        for tos in transitions.values()
        for to_state in tos
        if to_state not in transitions
    }


class StateMachine(IStateMachine):
    """Finite state machine driven by a transition table.

    The table maps each state to the states it may move to, each edge carrying
    a ``Handler``. Identified handlers are registered in a ``HandlerRegistry``
    under the machine name, so a machine restored from a snapshot gets its
    handler functions back.

    A handler may redirect a transition by returning another state. The
    override is not checked against the table, and terminal states are only
    computed from the table, so an override can leave the machine in a state
    that has no outgoing edges but is not reported as terminated.

    The machine holds no lock. Concurrent ``transition`` or
    ``set_current_state`` calls on one instance must be synchronized by the
    caller.

    Example:
        >>> sm = StateMachine("door", [
        ...     Transition("closed", "open"),
        ...     Transition("open", "closed"),
        ... ], "closed")
        >>> sm.transition("open")
        >>> sm.get_current_state()
        'open'
    """
    _name: str
    _current_state: str
    _transitions: dict[str, dict[str, Handler]]
    _terminate_states: set[str]

    def __init__(
        self,
        name: str,
        transitions: Iterable[Transition],
        initial_state: str,
        registry: HandlerRegistry | None = None,
    ) -> None:
        """Build the transition table and set the initial state.

        Args:
            name: Name of the machine, used as namespace for handler ids.
            transitions: Transitions to load. Later (from, to) duplicates overwrite earlier ones.
            initial_state: The initial state, it must have at least one outgoing transition.
            registry: Registry for identified handlers. Uses the process default when None.

        Raises:
            ConstructionError: If transitions is empty or initial_state has no outgoing transition.
        """
        registry = registry if registry is not None else get_registry()
        transitions = list(transitions)
        if not transitions:
            raise ConstructionError(f"State machine '{name}' needs at least one transition")

        self._name = name
        self._current_state = ""
        self._transitions = {}

        for t in transitions:
            self._transitions.setdefault(t.from_state, {})[t.to_state] = t.handler
            if t.handler.is_identified():
                registry.register(name, t.handler.id, t.handler)

        self._terminate_states = _terminate_states(self._transitions)

        try:
            self.set_current_state(initial_state)
        except IllegalTransitionError as e:
            raise ConstructionError(
                f"Initial state '{initial_state}' of state machine '{name}' has no outgoing transition"
            ) from e

    # ********** 状态机信息 **********

    def get_name(self) -> str:
        """获取状态机名称

        Returns:
            Name of the machine, also the namespace of its handler ids
        """
        return self._name

    def get_current_state(self) -> str:
        """获取当前状态

        Returns:
            The current state
        """
        return self._current_state

    def set_current_state(self, state: str) -> None:
        """Force the current state without running any handler.

        Args:
            state: The new current state, it must have at least one outgoing transition

        Raises:
            IllegalTransitionError: If the state is not a key of the transition table.
                The current state is left unchanged.
        """
        if state not in self._transitions:
            raise IllegalTransitionError(self._current_state, state)
        self._current_state = state

    def get_transitions(self) -> dict[str, dict[str, Handler]]:
        """Copy both levels of the table. Handlers are shared, they are immutable values."""
        return {from_state: dict(tos) for from_state, tos in self._transitions.items()}

    def get_terminate_states(self) -> set[str]:
        """States that appear only as destinations, computed once from the table.

        Returns:
            A copy of the terminal state set
        """
        return set(self._terminate_states)

    def is_terminated(self) -> bool:
        """Check whether the current state is in the terminal state set."""
        return self._current_state in self._terminate_states

    # ********** 状态转换 **********

    def transition(self, next_state: str, payload: Any = None) -> None:
        """Move to next_state, or to the state returned by the edge handler.

        Args:
            next_state: The requested state
            payload: Opaque value passed to the handler

        Raises:
            IllegalTransitionError: If no edge exists from the current state to next_state.
                The current state is left unchanged.
        """
        handler = self._transitions.get(self._current_state, {}).get(next_state)
        if handler is None:
            logger.debug(f"[{self._name}] rejected transition {self._current_state} -> {next_state}")
            raise IllegalTransitionError(self._current_state, next_state)

        if handler.func is not None:
            override = handler.func(self._current_state, next_state, payload)
            if override:
                logger.debug(
                    f"[{self._name}] handler '{handler.id}' redirected {self._current_state} -> {next_state} "
                    f"to {override}"
                )
                next_state = override

        self._current_state = next_state

    def can_transition(self, next_state: str) -> bool:
        """检查当前状态是否存在到 next_state 的转换

        Args:
            next_state: The state to check

        Returns:
            True if the edge exists, False otherwise
        """
        return next_state in self._transitions.get(self._current_state, {})

    def get_next_states(self) -> list[str]:
        """获取当前状态可转换到的状态

        Returns:
            A new list sorted lexicographically, modifying it does not affect the machine
        """
        return sorted(self._transitions.get(self._current_state, {}))

    # ********** 复制与比较 **********

    def clone(self) -> "StateMachine":
        """Copy the machine.

        The two-level table is copied, handlers are shared and the registry is
        not touched.

        Returns:
            StateMachine: The copy
        """
        clone = self.__class__.__new__(self.__class__)
        clone._name = self._name
        clone._current_state = self._current_state
        clone._transitions = self.get_transitions()
        clone._terminate_states = set(self._terminate_states)
        return clone

    def equals(self, other: IStateMachine | None) -> bool:
        """Compare name, current state and table. Handlers are compared by id only.

        Args:
            other: The machine to compare with, None is never equal

        Returns:
            True if both machines are equal, False otherwise
        """
        if other is None:
            return False
        if self is other:
            return True
        # Handler equality only looks at ids
        return (
            self._name == other.get_name()
            and self._current_state == other.get_current_state()
            and self._transitions == other.get_transitions()
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IStateMachine):
            return NotImplemented
        return self.equals(other)

    def __repr__(self) -> str:
        return f"StateMachine(name={self._name!r}, current={self._current_state!r})"

    # ********** 序列化 **********

    def to_snapshot(self) -> StateMachineSnapshot:
        """Capture name, current state and the table with handler ids only."""
        return StateMachineSnapshot(
            name=self._name,
            current=self._current_state,
            transitions={
                from_state: {to_state: handler.id for to_state, handler in tos.items()}
                for from_state, tos in self._transitions.items()
            },
        )

    def to_json(self) -> str:
        """Serialize as ``{"Name": ..., "Current": ..., "Transitions": {from: {to: handler_id}}}``."""
        return self.to_snapshot().to_json()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: StateMachineSnapshot,
        registry: HandlerRegistry | None = None,
        strict: bool | None = None,
    ) -> "StateMachine":
        """Rebuild a machine from a snapshot, resolving handler ids through the registry.

        The current state is restored as is, without the membership check done
        at construction. A handler id with no registry entry becomes the empty
        handler unless strict decoding is enabled.

        Args:
            snapshot: The snapshot to restore.
            registry: Registry to resolve handler ids. Uses the process default when None.
            strict: Raise on unresolved handler ids. Falls back to the ``STATETABLE_STRICT_DECODE`` setting when None.

        Returns:
            StateMachine: The restored machine

        Raises:
            UnresolvedHandlerError: In strict mode, if a non-empty handler id is not registered.
        """
        registry = registry if registry is not None else get_registry()
        if strict is None:
            strict = strict_decode_enabled()

        handlers = registry.handlers_for(snapshot.name)
        transitions: dict[str, dict[str, Handler]] = {}
        for from_state, tos in snapshot.transitions.items():
            transitions[from_state] = {}
            for to_state, handler_id in tos.items():
                handler = handlers.get(handler_id) if handler_id else Handler()
                if handler is None:
                    if strict:
                        raise UnresolvedHandlerError(snapshot.name, handler_id)
                    logger.warning(
                        f"[{snapshot.name}] handler '{handler_id}' of {from_state} -> {to_state} "
                        f"is not registered, edge restored without handler"
                    )
                    handler = Handler()
                transitions[from_state][to_state] = handler

        sm = cls.__new__(cls)
        sm._name = snapshot.name
        sm._current_state = snapshot.current
        sm._transitions = transitions
        sm._terminate_states = _terminate_states(transitions)
        return sm

    @classmethod
    def from_json(
        cls,
        data: str | bytes,
        registry: HandlerRegistry | None = None,
        strict: bool | None = None,
    ) -> "StateMachine":
        """Decode a machine serialized by ``to_json``.

        Raises:
            pydantic.ValidationError: If the data is malformed
            UnresolvedHandlerError: In strict mode, if a non-empty handler id is not registered.
        """
        return cls.from_snapshot(StateMachineSnapshot.from_json(data), registry=registry, strict=strict)


def equal_machines(a: IStateMachine | None, b: IStateMachine | None) -> bool:
    """Compare two machines that may be None. Two None values are equal."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return a.equals(b)
