from __future__ import annotations

from typing import List, Tuple

from addnet_core.domains import NodeId, _node_id
from addnet_core.errors import AddNetBuildError
from addnet_core.graph import NodeRecord, add, record, suc, zero
from addnet_core.ids import default_id_generator
from addnet_core.protocols import IdGenerator

# dataflow-bundle: nat1, nat2, adder


def construct_nat(n: int, *, id_gen=None) -> Tuple[NodeId, List[NodeRecord]]:
    """Build a unary chain ZERO <- SUC <- ... <- SUC with n successors.

    Returns the head id (the last record created; the ZERO's id when n == 0)
    and the records in creation order.
    """
    n = int(n)
    if n < 0:
        raise AddNetBuildError(f"natural number must be >= 0, got {n}")
    id_gen = id_gen or default_id_generator()
    if not isinstance(id_gen, IdGenerator):
        raise TypeError("id_gen must provide generate()")
    prev_id = id_gen.generate()
    records = [record(prev_id, zero())]
    for _ in range(n):
        node_id = id_gen.generate()
        records.append(record(node_id, suc(prev_id)))
        prev_id = node_id
    return prev_id, records


def construct_add(
    n1: int, n2: int, output_id, *, id_gen=None
) -> Tuple[List[NodeRecord], List[NodeRecord], NodeRecord]:
    """Build both operand chains and ADDER(head2, output_id) at head1."""
    output_id = _node_id(output_id)
    head1, nat1 = construct_nat(n1, id_gen=id_gen)
    head2, nat2 = construct_nat(n2, id_gen=id_gen)
    return nat1, nat2, record(head1, add(head2, output_id))


def addition_records(
    nat1: List[NodeRecord], nat2: List[NodeRecord], adder: NodeRecord
) -> List[NodeRecord]:
    return list(nat1) + list(nat2) + [adder]


__all__ = ["construct_nat", "construct_add", "addition_records"]
