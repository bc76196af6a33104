"""
Order status validator: decides whether an order may move from its current status to a
requested one. Holds no order state; the only shared value is the transition table
reference, which reload() replaces in one assignment.
"""
import logging

from order_status.config import settings
from order_status.errors import InvalidTransitionError, TransitionTableError
from order_status.metrics import (
    transition_table_reloads_total,
    transitions_rejected_total,
    transitions_validated_total,
)
from order_status.order_state import OrderStatus, TransitionTable, parse_status

logger = logging.getLogger(__name__)

_validator: "OrderStatusValidator | None" = None


class OrderStatusValidator:
    def __init__(self, table: TransitionTable | None = None, allow_same_status: bool = True):
        self._table = table if table is not None else TransitionTable.default()
        self.allow_same_status = allow_same_status

    @property
    def table(self) -> TransitionTable:
        return self._table

    def check_transition(self, current: OrderStatus | str, requested: OrderStatus | str) -> InvalidTransitionError | None:
        """
        Return None if current -> requested is allowed, else the InvalidTransitionError
        describing it (not raised). Raises UnknownStatusError for non-status input.
        """
        current = parse_status(current)
        requested = parse_status(requested)
        table = self._table

        if current == requested and self.allow_same_status:
            transitions_validated_total.labels(outcome="noop").inc()
            return None
        if table.allows(current, requested):
            transitions_validated_total.labels(outcome="accepted").inc()
            return None

        transitions_validated_total.labels(outcome="rejected").inc()
        transitions_rejected_total.labels(
            current_status=current.value,
            requested_status=requested.value,
        ).inc()
        logger.info("Rejected order status transition %s -> %s", current.value, requested.value)
        return InvalidTransitionError(current, requested)

    def validate_transition(self, current: OrderStatus | str, requested: OrderStatus | str) -> None:
        """Raise InvalidTransitionError unless current -> requested is allowed."""
        error = self.check_transition(current, requested)
        if error is not None:
            raise error

    def is_valid_transition(self, current: OrderStatus | str, requested: OrderStatus | str) -> bool:
        return self.check_transition(current, requested) is None

    def next_statuses(self, status: OrderStatus | str) -> frozenset[OrderStatus]:
        return self._table.next_statuses(parse_status(status))

    def is_terminal(self, status: OrderStatus | str) -> bool:
        return self._table.is_terminal(parse_status(status))

    def reload(self, table: TransitionTable) -> None:
        self._table = table
        logger.info(
            "Transition table reloaded (terminal: %s)",
            ", ".join(s.value for s in table.terminal_statuses) or "none",
        )


def load_table(path: str | None) -> TransitionTable:
    if path:
        return TransitionTable.from_json_file(path)
    return TransitionTable.default()


def get_validator() -> OrderStatusValidator:
    global _validator
    if _validator is None:
        _validator = OrderStatusValidator(
            load_table(settings.transition_table_path),
            allow_same_status=settings.allow_same_status,
        )
    return _validator


def reload_validator() -> TransitionTable:
    """Reload the table from settings. On error the current table stays in place."""
    validator = get_validator()
    try:
        table = load_table(settings.transition_table_path)
    except TransitionTableError as e:
        transition_table_reloads_total.labels(outcome="error").inc()
        logger.warning("Transition table reload failed, keeping current table: %s", e)
        raise
    validator.reload(table)
    transition_table_reloads_total.labels(outcome="ok").inc()
    return table


def reset_validator() -> None:
    """Drop the process-wide validator; the next get_validator() rebuilds it from settings."""
    global _validator
    _validator = None
