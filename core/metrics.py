"""
Prometheus metrics for the catalog engine.

Custom metrics for notification delivery and analytics workloads.
"""

from prometheus_client import Counter, Gauge, Histogram

# Notification bus metrics
events_published_total = Counter(
    "catalog_events_published_total",
    "Total events published to the notification bus",
    ["topic"],
)

events_delivered_total = Counter(
    "catalog_events_delivered_total",
    "Total events delivered to subscriber queues",
    ["topic"],
)

events_dropped_total = Counter(
    "catalog_events_dropped_total",
    "Total events that could not be handed to a subscriber",
    ["topic"],
)

active_subscriptions = Gauge(
    "catalog_active_subscriptions",
    "Number of live subscriptions",
    ["topic"],
)

# Analytics metrics
catalog_queries_total = Counter(
    "catalog_queries_total",
    "Total catalog read queries",
    ["operation"],
)

products_aggregated_total = Counter(
    "catalog_products_aggregated_total",
    "Total products reduced into statistics",
)

report_generation_duration_seconds = Histogram(
    "catalog_report_generation_duration_seconds",
    "Sales report generation duration in seconds",
    ["timeframe"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)

report_periods_total = Counter(
    "catalog_report_periods_total",
    "Total report periods generated",
    ["timeframe"],
)
