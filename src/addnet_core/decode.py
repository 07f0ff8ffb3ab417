from __future__ import annotations

from addnet_core.domains import _node_id
from addnet_core.errors import AddNetDecodeError
from addnet_core.graph import KIND_SUC, KIND_ZERO, kind_name, record_address
from addnet_dataflow import Collection


def decode_nat(network: Collection, address, *, max_hops: int | None = None) -> int:
    """Count SUC hops from `address` down to a ZERO."""
    current = _node_id(address)
    arranged = network.arrange_by(record_address)
    if max_hops is None:
        max_hops = arranged.record_count() + 1
    seen = set()
    count = 0
    while True:
        if current in seen:
            raise AddNetDecodeError("cycle while decoding", address=current)
        if len(seen) > max_hops:
            raise AddNetDecodeError(f"more than {max_hops} hops", address=current)
        seen.add(current)
        group = arranged.group(current)
        if not group:
            raise AddNetDecodeError("no live record", address=current)
        if len(group) > 1:
            raise AddNetDecodeError(
                f"{len(group)} live records (not in normal form)", address=current
            )
        node = group[0].node
        if node.kind == KIND_ZERO:
            return count
        if node.kind != KIND_SUC:
            raise AddNetDecodeError(
                f"unexpected {kind_name(node.kind)} record", address=current
            )
        count += 1
        current = node.refs[0]


__all__ = ["decode_nat"]
