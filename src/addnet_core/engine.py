from __future__ import annotations

from typing import NamedTuple, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from addnet_core.config import DriverConfig, EngineConfig, driver_config_from_env
from addnet_core.domains import NodeId
from addnet_core.errors import (
    AddNetBudgetExhaustedError,
    AddNetMalformedNetworkError,
)
from addnet_core.graph import NodeRecord, record_address
from addnet_core.modes import ValidateMode, coerce_validate_mode
from addnet_core.rules import (
    TEMPLATE_COUNT,
    TEMPLATE_NONE,
    TEMPLATE_STUCK,
    _plan_templates,
    apply_template,
    rule_for_kinds_host,
)
from addnet_dataflow import Arrangement, Collection, iterate
from addnet_metrics import _rewrite_metrics_update, _rewrite_trace

STATUS_CONVERGED = "converged"
STATUS_BUDGET_EXHAUSTED = "budget_exhausted"

REASON_OVER_CONNECTED = "over_connected"
REASON_NO_RULE = "no_rule"

_MIN_BUCKET = 8


class MalformedAddress(NamedTuple):
    address: NodeId
    reason: str
    records: Tuple[NodeRecord, ...]


class PassPlan(NamedTuple):
    keys: Tuple[NodeId, ...]
    arity: np.ndarray
    template: np.ndarray
    swapped: np.ndarray
    over: np.ndarray


class PassStats(NamedTuple):
    active_pairs: int
    rewrites: int
    template_counts: Tuple[int, ...]
    malformed: Tuple[MalformedAddress, ...]


class ReduceStats(NamedTuple):
    passes: int
    active_pairs: int
    rewrites: int
    template_counts: Tuple[int, ...]
    malformed: Tuple[MalformedAddress, ...]


_ZERO_TEMPLATE_COUNTS = (0,) * TEMPLATE_COUNT


def _bucket(count: int) -> int:
    # Power-of-two padding keeps the number of traced shapes small.
    size = _MIN_BUCKET
    while size < count:
        size *= 2
    return size


def plan_pass(arranged: Arrangement) -> PassPlan:
    """Classify every address of a pass in one device call."""
    keys = tuple(arranged.keys())
    key_slots = _bucket(len(keys))
    rec_slots = _bucket(arranged.record_count())
    seg_ids = np.zeros((rec_slots,), dtype=np.int32)
    seg_valid = np.zeros((rec_slots,), dtype=np.bool_)
    kind_a = np.zeros((key_slots,), dtype=np.uint32)
    kind_b = np.zeros((key_slots,), dtype=np.uint32)
    j = 0
    for i, key in enumerate(keys):
        group = arranged.group(key)
        for _ in group:
            seg_ids[j] = i
            seg_valid[j] = True
            j += 1
        if len(group) >= 2:
            kind_a[i] = group[0].node.kind
            kind_b[i] = group[1].node.kind
    arity, template, swapped, over = jax.device_get(
        _plan_templates(
            jnp.asarray(seg_ids),
            jnp.asarray(seg_valid),
            jnp.asarray(kind_a),
            jnp.asarray(kind_b),
        )
    )
    n = len(keys)
    return PassPlan(
        keys=keys,
        arity=np.asarray(arity)[:n],
        template=np.asarray(template)[:n],
        swapped=np.asarray(swapped)[:n],
        over=np.asarray(over)[:n],
    )


DEFAULT_ENGINE_CONFIG = EngineConfig(
    plan_pass_fn=plan_pass,
    apply_template_fn=apply_template,
)


def rewrite_address(
    key: NodeId,
    records: Tuple[NodeRecord, ...],
    *,
    template: int | None = None,
    swapped: bool = False,
    apply_template_fn=apply_template,
) -> Tuple[Tuple[NodeRecord, ...], MalformedAddress | None, int]:
    """Per-address transform: the distinct live records at `key` in, replacements out.

    Returns (outputs, malformed flag or None, template applied). A template
    planned for the pass may be passed in; otherwise the pair is looked up.
    """
    records = tuple(records)
    if len(records) == 0:
        return (), None, TEMPLATE_NONE
    if len(records) == 1:
        return records, None, TEMPLATE_NONE
    if len(records) > 2:
        return records, MalformedAddress(key, REASON_OVER_CONNECTED, records), TEMPLATE_NONE
    rec_a, rec_b = records
    if template is None or int(template) == TEMPLATE_NONE:
        template, swapped = rule_for_kinds_host(rec_a.node.kind, rec_b.node.kind)
    template = int(template)
    outputs = tuple(apply_template_fn(template, bool(swapped), key, rec_a, rec_b))
    malformed = None
    if template == TEMPLATE_STUCK:
        malformed = MalformedAddress(key, REASON_NO_RULE, records)
    return outputs, malformed, template


def apply_pass(
    network: Collection, *, cfg: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> Tuple[Collection, PassStats]:
    """One rule-engine pass over the whole snapshot."""
    arranged = network.arrange_by(record_address)
    plan = cfg.plan_pass_fn(arranged)
    slots = {key: i for i, key in enumerate(plan.keys)}
    template_counts = [0] * TEMPLATE_COUNT
    malformed = []
    active_pairs = 0
    rewrites = 0

    def _logic(key, pairs):
        nonlocal active_pairs, rewrites
        i = slots[key]
        records = tuple(rec for rec, _ in pairs)
        outputs, flag, used = rewrite_address(
            key,
            records,
            template=int(plan.template[i]),
            swapped=bool(plan.swapped[i]),
            apply_template_fn=cfg.apply_template_fn,
        )
        if used != TEMPLATE_NONE:
            active_pairs += 1
            template_counts[used] += 1
            if used != TEMPLATE_STUCK:
                rewrites += 1
                _rewrite_trace(used, key)
        if flag is not None:
            malformed.append(flag)
        if used in (TEMPLATE_NONE, TEMPLATE_STUCK):
            # Untouched records keep their accumulated multiplicity.
            return pairs
        return tuple((rec, 1) for rec in outputs)

    out = arranged.reduce(_logic)
    stats = PassStats(
        active_pairs=active_pairs,
        rewrites=rewrites,
        template_counts=tuple(template_counts),
        malformed=tuple(malformed),
    )
    return out, stats


def default_step_budget(network: Collection) -> int:
    # Addition nets settle in n1 + O(1) passes.
    return 2 * len(network.live()) + 8


def reduce_network(
    network: Collection, *, cfg: DriverConfig | None = None
) -> Tuple[Collection, ReduceStats, str]:
    """Run passes until the network stops changing (normal form)."""
    cfg = cfg or driver_config_from_env()
    engine_cfg = cfg.engine_cfg or DEFAULT_ENGINE_CONFIG
    validate_mode = coerce_validate_mode(cfg.validate_mode, context="reduce_network")
    max_steps = cfg.max_steps
    if max_steps is None:
        max_steps = default_step_budget(network)
    history = []

    def _step(current):
        out, stats = apply_pass(current, cfg=engine_cfg)
        history.append(stats)
        return out

    result = iterate(network, _step, max_steps=max_steps)
    template_counts = list(_ZERO_TEMPLATE_COUNTS)
    for stats in history:
        for i, count in enumerate(stats.template_counts):
            template_counts[i] += count
    stats = ReduceStats(
        passes=result.steps,
        active_pairs=sum(s.active_pairs for s in history),
        rewrites=sum(s.rewrites for s in history),
        template_counts=tuple(template_counts),
        malformed=history[-1].malformed if history else (),
    )
    _rewrite_metrics_update(stats)
    status = STATUS_CONVERGED if result.converged else STATUS_BUDGET_EXHAUSTED
    if validate_mode == ValidateMode.STRICT:
        if not result.converged:
            raise AddNetBudgetExhaustedError(steps=result.steps, context="reduce_network")
        if stats.malformed:
            raise AddNetMalformedNetworkError(
                addresses=tuple(m.address for m in stats.malformed),
                context="reduce_network",
            )
    return result.collection, stats, status


__all__ = [
    "STATUS_CONVERGED",
    "STATUS_BUDGET_EXHAUSTED",
    "REASON_OVER_CONNECTED",
    "REASON_NO_RULE",
    "MalformedAddress",
    "PassPlan",
    "PassStats",
    "ReduceStats",
    "DEFAULT_ENGINE_CONFIG",
    "plan_pass",
    "rewrite_address",
    "apply_pass",
    "default_step_budget",
    "reduce_network",
]
