"""
Prometheus Metrics Registration.

In-process collectors for tool executions and protocol traffic. The server
only speaks stdio, so nothing is exported; the values are read by tests and
are available to anything embedding the dispatcher.
"""

from prometheus_client import Counter, Histogram

# ============================================================================
# COUNTERS
# ============================================================================

tool_executions_total = Counter(
    "tool_executions_total",
    "Total tool executions",
    ["tool_name", "status"],  # success, error
)

protocol_requests_total = Counter(
    "protocol_requests_total",
    "JSON-RPC messages handled by the dispatcher",
    ["method", "outcome"],  # ok, error, notification
)

# ============================================================================
# HISTOGRAMS
# ============================================================================

tool_execution_duration = Histogram(
    "tool_execution_duration_seconds",
    "Tool execution duration",
    ["tool_name"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)
