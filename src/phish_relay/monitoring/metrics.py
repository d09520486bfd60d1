"""Custom Prometheus metrics for the phishing relay.

Exposed at /metrics when PROMETHEUS_ENABLED is set. Worth alerting on:
- upstream_response_errors_total (model drifting away from the JSON contract)
- phishing_requests_total{status="unavailable"} (no model bound / no key)
"""

from prometheus_client import Counter, Histogram

# === Request Metrics ===

phishing_requests_total = Counter(
    "phishing_requests_total",
    "Classification requests by outcome",
    ["status"],
)
"""
Labels:
- status: success, invalid_input, unavailable, upstream_error, error
"""

upstream_response_errors_total = Counter(
    "upstream_response_errors_total",
    "Model replies the relay could not interpret",
    ["error_type"],
)
"""
Labels:
- error_type: non_json, missing_results
"""

# === LLM Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM generation latency in seconds",
    ["model", "success"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

model_probes_total = Counter(
    "model_probes_total",
    "Startup liveness probes by model and outcome",
    ["model", "success"],
)
