"""
Errors raised by the order status validator.
"""


def _status_name(status) -> str:
    return getattr(status, "value", status)


class OrderStatusError(Exception):
    """Base class for order status errors."""


class InvalidTransitionError(OrderStatusError):
    """Raised when a requested status change is not in the transition table."""
    def __init__(self, current_status, requested_status):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Cannot transition order from {_status_name(current_status)} to {_status_name(requested_status)}"
        )


class UnknownStatusError(OrderStatusError, ValueError):
    """Raised when a value is not a member of OrderStatus."""
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown order status: {value!r}")


class TransitionTableError(OrderStatusError):
    """Raised when a transition table cannot be loaded or parsed."""
