"""Prometheus metrics for agent turns and spreadsheet exports."""

from prometheus_client import Counter, Histogram

agent_turn_latency_ms = Histogram(
    "agent_turn_latency_ms",
    "Agent turn latency in milliseconds (LLM call + parsing + storage)",
    ["outcome"],
    buckets=[100, 500, 1000, 2000, 5000, 10000, 20000, 40000, 80000],
)

agent_turn_errors_total = Counter(
    "agent_turn_errors_total",
    "Total failed agent turns",
    ["reason"],
)

plan_activities = Histogram(
    "plan_activities",
    "Number of activities per stored plan",
    buckets=[0, 1, 5, 10, 20, 50, 100],
)

excel_exports_total = Counter(
    "excel_exports_total",
    "Total Excel workbooks exported",
    ["source"],
)


class PrometheusAgentMetrics:
    """Prometheus-based agent metrics implementation."""

    def record_turn(self, outcome: str, latency_ms: float, activities: int = 0) -> None:
        """Record one agent turn; successful turns also record their plan size."""
        agent_turn_latency_ms.labels(outcome=outcome).observe(latency_ms)
        if outcome == "success":
            plan_activities.observe(activities)

    def inc_error(self, reason: str) -> None:
        """Increment error counter."""
        agent_turn_errors_total.labels(reason=reason).inc()

    def inc_export(self, source: str) -> None:
        """Increment export counter ("chat" or "sample")."""
        excel_exports_total.labels(source=source).inc()
