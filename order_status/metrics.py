"""
Prometheus metrics: transition decisions and table reloads.
"""
from prometheus_client import Counter, generate_latest

transitions_validated_total = Counter(
    "transitions_validated_total",
    "Total order status transitions validated, by outcome (accepted, noop, rejected)",
    ["outcome"],
)
transitions_rejected_total = Counter(
    "transitions_rejected_total",
    "Total order status transitions rejected as not allowed by the transition table",
    ["current_status", "requested_status"],
)
transition_table_reloads_total = Counter(
    "transition_table_reloads_total",
    "Total transition table reload attempts, by outcome (ok, error)",
    ["outcome"],
)


def get_metrics_content_type():
    return "text/plain; charset=utf-8; version=0.0.4"


def get_metrics_bytes():
    return generate_latest()
