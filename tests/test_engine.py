import pytest

import addnet_core as an
from addnet_dataflow import Collection
from tests import harness

pytestmark = pytest.mark.core


def test_rewrite_address_arity_cases():
    key = an.NodeId(1)
    single = (an.record(key, an.zero()),)
    assert an.rewrite_address(key, ()) == ((), None, an.TEMPLATE_NONE)
    assert an.rewrite_address(key, single) == (single, None, an.TEMPLATE_NONE)


def test_rewrite_address_looks_up_unplanned_pair():
    key = an.NodeId(1)
    add_rec = an.record(key, an.add(2, 3))
    suc_rec = an.record(key, an.suc(4))
    outputs, flag, used = an.rewrite_address(key, (add_rec, suc_rec))
    assert flag is None
    assert used == an.TEMPLATE_SUC_ADD
    assert outputs == (an.record(3, an.suc(1)), an.record(4, an.add(2, 1)))


def test_rewrite_address_flags_stuck_pair():
    key = an.NodeId(1)
    records = (an.record(key, an.add(2, 3)), an.record(key, an.add(4, 5)))
    outputs, flag, used = an.rewrite_address(key, records)
    assert outputs == records
    assert used == an.TEMPLATE_STUCK
    assert flag.reason == an.REASON_NO_RULE
    assert flag.address == key


def test_rewrite_address_over_connected():
    key = an.NodeId(1)
    records = (
        an.record(key, an.zero()),
        an.record(key, an.suc(2)),
        an.record(key, an.add(3, 4)),
    )
    outputs, flag, used = an.rewrite_address(key, records)
    assert outputs == records
    assert used == an.TEMPLATE_NONE
    assert flag == an.MalformedAddress(key, an.REASON_OVER_CONNECTED, records)


def test_plan_pass_classifies_addresses():
    network, nat1, _, adder = harness.build_add(1, 1)
    arranged = network.arrange_by(an.record_address)
    plan = an.plan_pass(arranged)
    slot = plan.keys.index(adder.address)
    assert int(plan.arity[slot]) == 2
    assert int(plan.template[slot]) == an.TEMPLATE_SUC_ADD
    assert not bool(plan.swapped[slot])
    others = [i for i in range(len(plan.keys)) if i != slot]
    assert all(int(plan.arity[i]) == 1 for i in others)
    assert all(int(plan.template[i]) == an.TEMPLATE_NONE for i in others)
    assert not plan.over.any()


def test_plan_pass_empty_network():
    plan = an.plan_pass(Collection.empty().arrange_by(an.record_address))
    assert plan.keys == ()
    assert plan.arity.shape == (0,)


def test_apply_pass_single_step():
    network, nat1, nat2, adder = harness.build_add(3, 4)
    out, stats = an.apply_pass(network)
    assert stats.active_pairs == 1
    assert stats.rewrites == 1
    assert stats.template_counts[an.TEMPLATE_SUC_ADD] == 1
    assert stats.malformed == ()
    key = adder.address
    assert an.record(harness.OUTPUT_ID, an.suc(key)) in out
    assert an.record(nat1[-2].address, an.add(adder.node.refs[0], key)) in out
    assert adder not in out
    assert nat1[-1] not in out


def test_over_connected_address_is_reemitted_and_flagged():
    key = an.NodeId(1000)
    crowd = [
        an.record(key, an.zero()),
        an.record(key, an.suc(1001)),
        an.record(key, an.add(1002, 1003)),
    ]
    network, _, _, _ = harness.build_add(2, 2)
    network = network.concat((rec, 1) for rec in crowd)
    out, stats = an.apply_pass(network)
    for rec in crowd:
        assert out.multiplicity(rec) == 1
    assert len(stats.malformed) == 1
    flag = stats.malformed[0]
    assert flag.address == key
    assert flag.reason == an.REASON_OVER_CONNECTED
    assert flag.records == tuple(sorted(crowd))
    # The rest of the network still reduces.
    assert stats.rewrites == 1
    normal, reduce_stats, status = harness.normalize(network)
    assert status == an.STATUS_CONVERGED
    assert an.decode_nat(normal, harness.OUTPUT_ID) == 4
    assert [m.address for m in reduce_stats.malformed] == [key]


def test_forwarder_pair_splices_second_forwarder():
    key = an.NodeId(1)
    a = an.record(key, an.fwd(5))
    b = an.record(key, an.fwd(7))
    out, stats = an.apply_pass(Collection.from_records([b, a]))
    assert out == Collection.from_records([an.record(5, an.fwd(7))])
    assert stats.template_counts[an.TEMPLATE_FORWARD] == 1


def test_single_record_keeps_its_multiplicity():
    rec = an.record(1, an.suc(2))
    network = Collection.from_updates([(rec, 2)])
    out, stats = an.apply_pass(network)
    assert out == network
    assert out.multiplicity(rec) == 2
    assert stats.active_pairs == 0


def test_stuck_and_over_connected_records_keep_multiplicity():
    key = an.NodeId(1)
    stuck = [an.record(key, an.add(2, 3)), an.record(key, an.add(4, 5))]
    crowd_key = an.NodeId(50)
    crowd = [
        an.record(crowd_key, an.zero()),
        an.record(crowd_key, an.suc(51)),
        an.record(crowd_key, an.suc(52)),
    ]
    updates = [(stuck[0], 3), (stuck[1], 1), (crowd[0], 2), (crowd[1], 1), (crowd[2], 1)]
    network = Collection.from_updates(updates)
    out, stats = an.apply_pass(network)
    assert out == network
    reasons = {m.reason for m in stats.malformed}
    assert reasons == {an.REASON_NO_RULE, an.REASON_OVER_CONNECTED}
