"""Prometheus metric definitions for CarBlock.

Single source of truth for all custom metrics.
"""

from prometheus_client import Counter

alerts_created_total = Counter(
    "carblock_alerts_created_total",
    "Total alerts created",
)

alerts_rejected_total = Counter(
    "carblock_alerts_rejected_total",
    "Alert submissions rejected by reason",
    ["reason"],
)

alert_transitions_total = Counter(
    "carblock_alert_transitions_total",
    "Alert status transitions by target status",
    ["status"],
)

notifications_sent_total = Counter(
    "carblock_notifications_sent_total",
    "Notification attempts by channel and outcome",
    ["channel", "outcome"],
)
