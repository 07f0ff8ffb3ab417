from addnet_metrics.metrics import (
    _rewrite_metrics_enabled,
    _rewrite_metrics_update,
    _rewrite_trace,
    _rewrite_trace_enabled,
    rewrite_metrics_get,
    rewrite_metrics_reset,
)

__all__ = [
    "_rewrite_metrics_enabled",
    "_rewrite_metrics_update",
    "_rewrite_trace",
    "_rewrite_trace_enabled",
    "rewrite_metrics_get",
    "rewrite_metrics_reset",
]
