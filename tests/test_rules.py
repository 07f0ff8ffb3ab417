import jax.numpy as jnp
import pytest

import addnet_core as an

pytestmark = pytest.mark.core

KINDS = (an.KIND_ZERO, an.KIND_SUC, an.KIND_ADD, an.KIND_FWD)


def _ids_of(records):
    out = set()
    for rec in records:
        out.add(rec.address)
        out.update(rec.node.refs)
    return out


def test_rule_table_lookup():
    rule = an.rule_for_kinds(jnp.uint32(an.KIND_SUC), jnp.uint32(an.KIND_ADD))
    assert tuple(map(int, rule)) == (an.TEMPLATE_SUC_ADD, 0)
    assert an.rule_for_kinds_host(an.KIND_ADD, an.KIND_ZERO) == (an.TEMPLATE_ZERO_ADD, True)
    assert an.rule_for_kinds_host(an.KIND_ADD, an.KIND_ADD) == (an.TEMPLATE_STUCK, False)


@pytest.mark.parametrize("a", KINDS)
@pytest.mark.parametrize("b", KINDS)
def test_rule_table_is_unordered(a, b):
    tmpl_ab, swap_ab = an.rule_for_kinds_host(a, b)
    tmpl_ba, swap_ba = an.rule_for_kinds_host(b, a)
    assert tmpl_ab == tmpl_ba
    if a != b and tmpl_ab != an.TEMPLATE_STUCK:
        assert swap_ab != swap_ba


def test_stuck_pairs():
    for a, b in [
        (an.KIND_ADD, an.KIND_ADD),
        (an.KIND_SUC, an.KIND_SUC),
        (an.KIND_ZERO, an.KIND_ZERO),
        (an.KIND_ZERO, an.KIND_SUC),
    ]:
        assert an.rule_for_kinds_host(a, b)[0] == an.TEMPLATE_STUCK


def test_suc_add_peels_one_increment():
    key = an.NodeId(10)
    suc_rec = an.record(key, an.suc(11))
    add_rec = an.record(key, an.add(20, 30))
    out = an.apply_suc_add(key, suc_rec, add_rec)
    assert out == (
        an.record(30, an.suc(10)),
        an.record(11, an.add(20, 10)),
    )
    assert _ids_of(out) <= _ids_of((suc_rec, add_rec))


def test_zero_add_emits_forwarder_on_left_operand():
    key = an.NodeId(10)
    out = an.apply_zero_add(key, an.record(key, an.zero()), an.record(key, an.add(20, 30)))
    assert out == (an.record(20, an.fwd(30)),)


def test_forward_reconnects_other_party():
    key = an.NodeId(10)
    other = an.record(key, an.suc(4))
    out = an.apply_forward(key, an.record(key, an.fwd(30)), other)
    assert out == (an.record(30, an.suc(4)),)


def test_apply_template_honours_swap():
    key = an.NodeId(1)
    add_rec = an.record(key, an.add(2, 3))
    zero_rec = an.record(key, an.zero())
    direct = an.apply_template(an.TEMPLATE_ZERO_ADD, False, key, zero_rec, add_rec)
    swapped = an.apply_template(an.TEMPLATE_ZERO_ADD, True, key, add_rec, zero_rec)
    assert direct == swapped == (an.record(2, an.fwd(3)),)


def test_apply_template_rejects_none():
    key = an.NodeId(1)
    rec = an.record(key, an.zero())
    with pytest.raises(ValueError):
        an.apply_template(an.TEMPLATE_NONE, False, key, rec, rec)


def test_stuck_template_keeps_both_records():
    key = an.NodeId(1)
    a = an.record(key, an.add(2, 3))
    b = an.record(key, an.add(4, 5))
    assert an.apply_stuck(key, a, b) == (a, b)
    assert an.template_name(an.TEMPLATE_STUCK) == "stuck"
