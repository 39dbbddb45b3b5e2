"""
Serialized form of a state machine.

The snapshot stores handler ids only. Handler functions are re-attached from a
HandlerRegistry when the snapshot is turned back into a machine.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StateMachineSnapshot(BaseModel):
    """State machine snapshot, serialized with capitalized keys."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "Name": "installer",
                "Current": "Ready",
                "Transitions": {
                    "Unchecked": {"Ready": ""},
                    "Ready": {"Installing": "start-install", "Damaged": ""},
                },
            }
        },
    )

    name: str = Field(
        default="",
        alias="Name",
        description="Name of the machine, namespace of its handler ids"
    )

    current: str = Field(
        default="",
        alias="Current",
        description="Current state"
    )

    transitions: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        alias="Transitions",
        description="Transition table as from -> to -> handler id (empty string when no handler)"
    )

    @field_validator('name', 'current', mode='before')
    @classmethod
    def validate_null_state(cls, v: Any) -> Any:
        """A null name or state decodes as the empty string."""
        return "" if v is None else v

    @field_validator('transitions', mode='before')
    @classmethod
    def validate_null_transitions(cls, v: Any) -> Any:
        """A null table or row decodes as an empty mapping, a null handler id as the empty id."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        table = {}
        for from_state, tos in v.items():
            if tos is None:
                tos = {}
            elif isinstance(tos, dict):
                tos = {to_state: "" if handler_id is None else handler_id for to_state, handler_id in tos.items()}
            table[from_state] = tos
        return table

    def to_json(self) -> str:
        """Dump the snapshot as JSON using the capitalized keys."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> "StateMachineSnapshot":
        """Parse a snapshot from JSON.

        Raises:
            pydantic.ValidationError: If the data is not valid JSON or does not match the schema
        """
        return cls.model_validate_json(data)
