import os

# dataflow-bundle: passes, active_pairs, rewrites, template_counts, malformed

_TEMPLATE_SLOTS = 5

_rewrite_metrics_reductions = 0
_rewrite_metrics_passes = 0
_rewrite_metrics_active_pairs = 0
_rewrite_metrics_rewrites = 0
_rewrite_metrics_templates = [0] * _TEMPLATE_SLOTS
_rewrite_metrics_malformed = 0

_TRACE_LABELS = {
    2: "--Doing a Succ/Add reduction--",
    3: "--Doing a Zero/Add reduction--",
    4: "--Doing a Forward reduction--",
}


def _env_flag(name):
    value = os.environ.get(name, "").strip().lower()
    return value in ("1", "true", "yes", "on")


def _rewrite_metrics_enabled():
    return _env_flag("ADDNET_REWRITE_METRICS")


def _rewrite_trace_enabled():
    return _env_flag("ADDNET_TRACE")


def rewrite_metrics_reset():
    global _rewrite_metrics_reductions
    global _rewrite_metrics_passes
    global _rewrite_metrics_active_pairs
    global _rewrite_metrics_rewrites
    global _rewrite_metrics_templates
    global _rewrite_metrics_malformed
    _rewrite_metrics_reductions = 0
    _rewrite_metrics_passes = 0
    _rewrite_metrics_active_pairs = 0
    _rewrite_metrics_rewrites = 0
    _rewrite_metrics_templates = [0] * _TEMPLATE_SLOTS
    _rewrite_metrics_malformed = 0


def rewrite_metrics_get():
    if not _rewrite_metrics_enabled():
        return {
            "reductions": 0,
            "passes": 0,
            "active_pairs": 0,
            "rewrites": 0,
            "templates": [0] * _TEMPLATE_SLOTS,
            "malformed": 0,
        }
    return {
        "reductions": int(_rewrite_metrics_reductions),
        "passes": int(_rewrite_metrics_passes),
        "active_pairs": int(_rewrite_metrics_active_pairs),
        "rewrites": int(_rewrite_metrics_rewrites),
        "templates": list(_rewrite_metrics_templates),
        "malformed": int(_rewrite_metrics_malformed),
    }


def _rewrite_metrics_update(stats):
    global _rewrite_metrics_reductions
    global _rewrite_metrics_passes
    global _rewrite_metrics_active_pairs
    global _rewrite_metrics_rewrites
    global _rewrite_metrics_malformed
    if not _rewrite_metrics_enabled():
        return
    _rewrite_metrics_reductions += 1
    _rewrite_metrics_passes += int(stats.passes)
    _rewrite_metrics_active_pairs += int(stats.active_pairs)
    _rewrite_metrics_rewrites += int(stats.rewrites)
    for i, count in enumerate(stats.template_counts[:_TEMPLATE_SLOTS]):
        _rewrite_metrics_templates[i] += int(count)
    _rewrite_metrics_malformed += len(stats.malformed)


def _rewrite_trace(template, key):
    if not _rewrite_trace_enabled():
        return
    label = _TRACE_LABELS.get(int(template))
    if label is not None:
        print(f"{label} at {key!r}")
