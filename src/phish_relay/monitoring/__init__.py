"""Prometheus metrics for the phishing relay."""

from phish_relay.monitoring.metrics import (
    llm_latency_seconds,
    model_probes_total,
    phishing_requests_total,
    upstream_response_errors_total,
)

__all__ = [
    "llm_latency_seconds",
    "model_probes_total",
    "phishing_requests_total",
    "upstream_response_errors_total",
]
