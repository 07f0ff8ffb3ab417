import pytest

import addnet_core as an
from addnet_dataflow import Collection

pytestmark = pytest.mark.core


def test_construct_nat_zero_is_single_zero(id_gen):
    head, records = an.construct_nat(0, id_gen=id_gen)
    assert head == an.NodeId(1)
    assert records == [an.record(1, an.zero())]


def test_construct_nat_chain(id_gen):
    head, records = an.construct_nat(3, id_gen=id_gen)
    assert head == an.NodeId(4)
    assert records == [
        an.record(1, an.zero()),
        an.record(2, an.suc(1)),
        an.record(3, an.suc(2)),
        an.record(4, an.suc(3)),
    ]


@pytest.mark.parametrize("n", [0, 1, 2, 5])
def test_construct_nat_decodes(id_gen, n):
    head, records = an.construct_nat(n, id_gen=id_gen)
    assert an.decode_nat(Collection.from_records(records), head) == n


def test_construct_add_places_adder_on_left_head(id_gen):
    nat1, nat2, adder = an.construct_add(2, 1, 0, id_gen=id_gen)
    assert [r.address for r in nat1] == [an.NodeId(1), an.NodeId(2), an.NodeId(3)]
    assert [r.address for r in nat2] == [an.NodeId(4), an.NodeId(5)]
    assert adder == an.record(3, an.add(5, 0))
    assert an.addition_records(nat1, nat2, adder)[-1] == adder


def test_construct_add_is_pure():
    first = an.construct_add(2, 3, 0, id_gen=an.SequentialIdGenerator(start=1))
    second = an.construct_add(2, 3, 0, id_gen=an.SequentialIdGenerator(start=1))
    assert first == second


def test_negative_operand_rejected(id_gen):
    with pytest.raises(an.AddNetBuildError):
        an.construct_nat(-1, id_gen=id_gen)


def test_id_gen_must_generate():
    with pytest.raises(TypeError):
        an.construct_nat(1, id_gen=object())
