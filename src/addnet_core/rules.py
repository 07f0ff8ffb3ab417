from __future__ import annotations

from typing import Callable, Dict, Tuple

import jax
import jax.numpy as jnp

from addnet_core.domains import NodeId, _host_int_value
from addnet_core.graph import (
    NodeRecord,
    add,
    fwd,
    suc,
)

TEMPLATE_NONE = 0
TEMPLATE_STUCK = 1
TEMPLATE_SUC_ADD = 2
TEMPLATE_ZERO_ADD = 3
TEMPLATE_FORWARD = 4
TEMPLATE_COUNT = 5

TEMPLATE_NAMES = ("none", "stuck", "suc_add", "zero_add", "forward")

# RULE_TABLE[kind_a, kind_b] = [template_id, swapped]. `swapped` means the
# template's role order is (b, a). Rows/columns: ZERO, SUC, ADD, FWD.
RULE_TABLE = jnp.array(
    [
        # ZERO interactions.
        [[1, 0], [1, 0], [3, 0], [4, 1]],
        # SUC interactions.
        [[1, 0], [1, 0], [2, 0], [4, 1]],
        # ADD interactions.
        [[3, 1], [2, 1], [1, 0], [4, 1]],
        # FWD interactions; FWD/FWD keeps the first forwarder as the splice.
        [[4, 0], [4, 0], [4, 0], [4, 0]],
    ],
    dtype=jnp.uint32,
)


@jax.jit
def rule_for_kinds(kind_a: jnp.ndarray, kind_b: jnp.ndarray) -> jnp.ndarray:
    """Lookup rule vector [template_id, swapped] for a kind pair."""
    a = jnp.asarray(kind_a).astype(jnp.uint32)
    b = jnp.asarray(kind_b).astype(jnp.uint32)
    return RULE_TABLE[a, b]


def rule_for_kinds_host(kind_a: int, kind_b: int) -> Tuple[int, bool]:
    rule = rule_for_kinds(jnp.uint32(kind_a), jnp.uint32(kind_b))
    return _host_int_value(rule[0]), bool(_host_int_value(rule[1]))


@jax.jit
def _plan_templates(
    seg_ids: jnp.ndarray,
    seg_valid: jnp.ndarray,
    kind_a: jnp.ndarray,
    kind_b: jnp.ndarray,
) -> Tuple[jnp.ndarray, jnp.ndarray, jnp.ndarray, jnp.ndarray]:
    """Per-address arity and template selection for one whole pass.

    seg_ids maps each live record to its address slot; padded entries carry
    seg_valid == False. kind_a/kind_b hold the first two kinds per slot.
    """
    num_slots = kind_a.shape[0]
    arity = jax.ops.segment_sum(
        seg_valid.astype(jnp.int32), seg_ids, num_segments=num_slots
    )
    rule = RULE_TABLE[kind_a.astype(jnp.uint32), kind_b.astype(jnp.uint32)]
    redex = arity == 2
    template = jnp.where(redex, rule[:, 0], jnp.uint32(TEMPLATE_NONE))
    swapped = redex & (rule[:, 1] == jnp.uint32(1))
    over = arity > 2
    return arity, template, swapped, over


def apply_suc_add(key: NodeId, suc_rec: NodeRecord, add_rec: NodeRecord):
    """SUC(s) . ADD(l, r) at key.

    Reuses: key as the emitted SUC's next and the smaller ADD's output,
    r as the emitted SUC's address, s as the smaller ADD's address.
    """
    (s,) = suc_rec.node.refs
    l, r = add_rec.node.refs
    return (
        NodeRecord(address=r, node=suc(key)),
        NodeRecord(address=s, node=add(l, key)),
    )


def apply_zero_add(key: NodeId, zero_rec: NodeRecord, add_rec: NodeRecord):
    """ZERO . ADD(l, r): splice r to whatever arrives at l.

    Reuses: l as the forwarder's address, r as its target. Assumes l is the
    next address to receive an active connection, which holds for addition
    nets (l is the right operand's head) but not for general nets.
    """
    l, r = add_rec.node.refs
    return (NodeRecord(address=l, node=fwd(r)),)


def apply_forward(key: NodeId, fwd_rec: NodeRecord, other: NodeRecord):
    """FWD(k) . N: reconnect N at k. Reuses: k."""
    (k,) = fwd_rec.node.refs
    return (NodeRecord(address=k, node=other.node),)


def apply_stuck(key: NodeId, rec_a: NodeRecord, rec_b: NodeRecord):
    """No rule for the pair: both records stay at key."""
    return (
        NodeRecord(address=key, node=rec_a.node),
        NodeRecord(address=key, node=rec_b.node),
    )


TEMPLATE_FNS: Dict[int, Callable] = {
    TEMPLATE_STUCK: apply_stuck,
    TEMPLATE_SUC_ADD: apply_suc_add,
    TEMPLATE_ZERO_ADD: apply_zero_add,
    TEMPLATE_FORWARD: apply_forward,
}


def apply_template(
    template: int,
    swapped: bool,
    key: NodeId,
    rec_a: NodeRecord,
    rec_b: NodeRecord,
) -> Tuple[NodeRecord, ...]:
    fn = TEMPLATE_FNS.get(int(template))
    if fn is None:
        raise ValueError(f"no template for redex: {template!r}")
    if swapped:
        rec_a, rec_b = rec_b, rec_a
    return fn(key, rec_a, rec_b)


def template_name(template: int) -> str:
    return TEMPLATE_NAMES[int(template)]


__all__ = [
    "TEMPLATE_NONE",
    "TEMPLATE_STUCK",
    "TEMPLATE_SUC_ADD",
    "TEMPLATE_ZERO_ADD",
    "TEMPLATE_FORWARD",
    "TEMPLATE_COUNT",
    "TEMPLATE_NAMES",
    "RULE_TABLE",
    "rule_for_kinds",
    "rule_for_kinds_host",
    "_plan_templates",
    "apply_suc_add",
    "apply_zero_add",
    "apply_forward",
    "apply_stuck",
    "TEMPLATE_FNS",
    "apply_template",
    "template_name",
]
