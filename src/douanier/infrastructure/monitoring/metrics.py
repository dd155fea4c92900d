"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "douanier_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "douanier_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "douanier_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Chain RPC Metrics
# ============================================================

chain_rpc_requests_total = Counter(
    "douanier_chain_rpc_requests_total",
    "Total chain JSON-RPC requests",
    ["chain_id", "operation"],
)

chain_rpc_errors_total = Counter(
    "douanier_chain_rpc_errors_total",
    "Total chain JSON-RPC errors",
    ["chain_id", "error_type"],
)

chain_rpc_duration_seconds = Histogram(
    "douanier_chain_rpc_duration_seconds",
    "Chain JSON-RPC request duration in seconds",
    ["chain_id", "operation"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ============================================================
# Business Metrics
# ============================================================

sessions_created_total = Counter(
    "douanier_sessions_created_total",
    "Verification sessions created",
)

sessions_consumed_total = Counter(
    "douanier_sessions_consumed_total",
    "Verification sessions consumed by outcome",
    ["outcome"],
)

discounts_issued_total = Counter(
    "douanier_discounts_issued_total",
    "Discount redemption attempts by outcome",
    ["outcome"],
)

eligibility_rules_skipped_total = Counter(
    "douanier_eligibility_rules_skipped_total",
    "Rules skipped during eligibility because the balance lookup failed",
    ["reason"],
)
