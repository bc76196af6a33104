"""
Order lifecycle state machine. The transition table is built once and never mutated;
callers swap a whole table to change the rules.
"""
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import TypeAdapter, ValidationError

from order_status.errors import TransitionTableError, UnknownStatusError


class OrderStatus(str, Enum):
    CREATED = "CREATED"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# Current status -> allowed next statuses
DEFAULT_TRANSITIONS: dict[OrderStatus, list[OrderStatus]] = {
    OrderStatus.CREATED: [OrderStatus.CONFIRMED, OrderStatus.CANCELLED],
    OrderStatus.CONFIRMED: [OrderStatus.PREPARING, OrderStatus.CANCELLED],
    OrderStatus.PREPARING: [OrderStatus.OUT_FOR_DELIVERY],
    OrderStatus.OUT_FOR_DELIVERY: [OrderStatus.DELIVERED],
    OrderStatus.DELIVERED: [],  # terminal
    OrderStatus.CANCELLED: [],  # terminal
}

_STATUS_NOTES: dict[OrderStatus, str] = {
    OrderStatus.CREATED: "Order created",
    OrderStatus.CONFIRMED: "Order confirmed by restaurant",
    OrderStatus.PREPARING: "Order is being prepared in the kitchen",
    OrderStatus.OUT_FOR_DELIVERY: "Order is out for delivery",
    OrderStatus.DELIVERED: "Order has been delivered",
    OrderStatus.CANCELLED: "Order has been cancelled",
}

_table_adapter = TypeAdapter(dict[OrderStatus, frozenset[OrderStatus]])


def parse_status(value: OrderStatus | str) -> OrderStatus:
    """Coerce an OrderStatus or its string value; anything else is UnknownStatusError."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except (ValueError, TypeError):
        raise UnknownStatusError(value) from None


@dataclass(frozen=True)
class TransitionTable:
    """
    Immutable directed graph of legal status transitions.
    Every OrderStatus has an entry; statuses with no outgoing edges are terminal.
    """
    transitions: Mapping[OrderStatus, frozenset[OrderStatus]]

    def __post_init__(self):
        # Copy into a read-only view so later edits to the caller's mapping never leak in
        try:
            parsed = _table_adapter.validate_python(self.transitions)
        except ValidationError as e:
            raise TransitionTableError(f"Invalid transition table: {e}") from e
        transitions = {status: parsed.get(status, frozenset()) for status in OrderStatus}
        object.__setattr__(self, "transitions", MappingProxyType(transitions))

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "TransitionTable":
        """Build from {status: [next statuses]}. Keys and targets may be members or names."""
        return cls(transitions=mapping)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "TransitionTable":
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise TransitionTableError(f"Cannot read transition table from {path}: {e}") from e
        if not isinstance(raw, dict):
            raise TransitionTableError(f"Transition table in {path} must be a JSON object")
        return cls.from_mapping(raw)

    @classmethod
    def default(cls) -> "TransitionTable":
        return cls.from_mapping(DEFAULT_TRANSITIONS)

    def allows(self, current: OrderStatus, requested: OrderStatus) -> bool:
        return requested in self.transitions[current]

    def next_statuses(self, status: OrderStatus) -> frozenset[OrderStatus]:
        return self.transitions[status]

    def is_terminal(self, status: OrderStatus) -> bool:
        return not self.transitions[status]

    @property
    def terminal_statuses(self) -> list[OrderStatus]:
        return [s for s in OrderStatus if self.is_terminal(s)]

    def as_dict(self) -> dict[str, list[str]]:
        """Plain {name: [names]} in declaration order, for JSON output."""
        return {
            status.value: [s.value for s in OrderStatus if s in targets]
            for status, targets in self.transitions.items()
        }


def status_change_note(previous: OrderStatus | None, new: OrderStatus) -> str:
    """Human-readable note for an accepted status change, for callers' order history."""
    if previous is None:
        return f"Order created with status {new.value}"
    if previous == new:
        return f"Order status unchanged ({new.value})"
    return _STATUS_NOTES.get(new, f"Status changed from {previous.value} to {new.value}")
