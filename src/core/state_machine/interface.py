from abc import ABC, abstractmethod
from typing import Any

from .handler import Handler


class IStateMachine(ABC):
    """状态机接口：基于转换表的有限状态机"""

    # ********** 状态机信息 **********

    @abstractmethod
    def get_name(self) -> str:
        """Get the name of the machine, which namespaces its handler ids.

        Returns:
            Name of the machine
        """
        pass

    @abstractmethod
    def get_current_state(self) -> str:
        """Get the current state.

        Returns:
            The current state
        """
        pass

    @abstractmethod
    def set_current_state(self, state: str) -> None:
        """Force the current state. The state must have at least one outgoing transition.

        Args:
            state: The new current state

        Raises:
            IllegalTransitionError: If the state is not a key of the transition table
        """
        pass

    @abstractmethod
    def get_transitions(self) -> dict[str, dict[str, Handler]]:
        """Get a copy of the transition table.

        Returns:
            Mapping from state to (mapping from next state to handler)
        """
        pass

    @abstractmethod
    def get_terminate_states(self) -> set[str]:
        """Get the states without outgoing transitions.

        Returns:
            A copy of the terminal state set
        """
        pass

    @abstractmethod
    def is_terminated(self) -> bool:
        """Check whether the current state is a terminal state.

        Returns:
            True if the current state is terminal, False otherwise
        """
        pass

    # ********** 状态转换 **********

    @abstractmethod
    def transition(self, next_state: str, payload: Any = None) -> None:
        """Move from the current state to the next state, running the handler of the edge.

        Args:
            next_state: The requested state
            payload: Opaque value passed to the handler

        Raises:
            IllegalTransitionError: If no edge exists from the current state to next_state
        """
        pass

    @abstractmethod
    def can_transition(self, next_state: str) -> bool:
        """Check whether an edge exists from the current state to next_state.

        Returns:
            True if the transition is allowed, False otherwise
        """
        pass

    @abstractmethod
    def get_next_states(self) -> list[str]:
        """Get the states reachable from the current state, sorted.

        Returns:
            A new sorted list, modifying it does not affect the machine
        """
        pass

    # ********** 复制与比较 **********

    @abstractmethod
    def clone(self) -> "IStateMachine":
        """Copy the machine. The copy shares no mutable table with the original.

        Returns:
            The copy
        """
        pass

    @abstractmethod
    def equals(self, other: "IStateMachine | None") -> bool:
        """Compare name, current state and transition table, handlers by id only.

        Returns:
            True if both machines are equal, False otherwise
        """
        pass
