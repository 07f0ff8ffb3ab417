from __future__ import annotations

from typing import NamedTuple, Tuple

from addnet_core.domains import NodeId, _node_id, _require_node_id

# Addition-net node model. A record's address is the id its active port
# terminates on; passive ports are NodeId values carried in `refs`.

KIND_ZERO = 0
KIND_SUC = 1
KIND_ADD = 2
KIND_FWD = 3
KIND_COUNT = 4

KIND_NAMES = ("ZERO", "SUC", "ADD", "FWD")

# Passive-port count per kind.
KIND_ARITY = (0, 1, 2, 1)


class Node(NamedTuple):
    kind: int
    refs: Tuple[NodeId, ...] = ()

    def __repr__(self) -> str:
        if not self.refs:
            return KIND_NAMES[self.kind]
        inner = ", ".join(repr(r) for r in self.refs)
        return f"{KIND_NAMES[self.kind]}({inner})"


class NodeRecord(NamedTuple):
    address: NodeId
    node: Node


def make_node(kind: int, *refs) -> Node:
    if kind not in range(KIND_COUNT):
        raise ValueError(f"unknown node kind: {kind!r}")
    if len(refs) != KIND_ARITY[kind]:
        raise ValueError(
            f"{KIND_NAMES[kind]} expects {KIND_ARITY[kind]} refs, got {len(refs)}"
        )
    return Node(kind=kind, refs=tuple(_node_id(r) for r in refs))


def zero() -> Node:
    return Node(kind=KIND_ZERO)


def suc(next_id) -> Node:
    return Node(kind=KIND_SUC, refs=(_node_id(next_id),))


def add(left_operand, output_target) -> Node:
    return Node(kind=KIND_ADD, refs=(_node_id(left_operand), _node_id(output_target)))


def fwd(target) -> Node:
    return Node(kind=KIND_FWD, refs=(_node_id(target),))


def record(address, node: Node) -> NodeRecord:
    return NodeRecord(address=_node_id(address), node=node)


def record_address(rec: NodeRecord) -> NodeId:
    return rec.address


def validate_record(rec, label: str = "record") -> NodeRecord:
    """Check shape, kind and port arity of a NodeRecord."""
    if not isinstance(rec, NodeRecord):
        raise TypeError(f"{label} expected NodeRecord, got {type(rec).__name__}")
    _require_node_id(rec.address, f"{label}.address")
    node = rec.node
    if not isinstance(node, Node) or node.kind not in range(KIND_COUNT):
        raise ValueError(f"{label} has unknown node kind")
    if len(node.refs) != KIND_ARITY[node.kind]:
        raise ValueError(f"{label} has wrong port arity for {KIND_NAMES[node.kind]}")
    for ref in node.refs:
        _require_node_id(ref, f"{label}.refs")
    return rec


def kind_name(kind: int) -> str:
    return KIND_NAMES[kind]


__all__ = [
    "KIND_ZERO",
    "KIND_SUC",
    "KIND_ADD",
    "KIND_FWD",
    "KIND_COUNT",
    "KIND_NAMES",
    "KIND_ARITY",
    "Node",
    "NodeRecord",
    "make_node",
    "zero",
    "suc",
    "add",
    "fwd",
    "record",
    "record_address",
    "validate_record",
    "kind_name",
]
