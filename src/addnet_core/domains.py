from __future__ import annotations

from dataclasses import dataclass

import jax

NODE_ID_BITS = 128
NODE_ID_LIMIT = 1 << NODE_ID_BITS


@dataclass(frozen=True, order=True)
class NodeId:
    i: int

    def __int__(self) -> int:
        return int(self.i)

    def __index__(self) -> int:
        return int(self.i)

    def __repr__(self) -> str:
        return f"NodeId({self.i:#x})"


@dataclass(frozen=True)
class HostInt:
    v: int

    def __int__(self) -> int:
        return int(self.v)

    def __index__(self) -> int:
        return int(self.v)


def _node_id(value) -> NodeId:
    if isinstance(value, NodeId):
        return value
    if isinstance(value, (bool, HostInt)):
        raise TypeError("expected NodeId, got different value domain")
    i = int(value)
    if i < 0 or i >= NODE_ID_LIMIT:
        raise ValueError(f"node id out of range: {i}")
    return NodeId(i)


def _require_node_id(ptr: NodeId, label: str) -> NodeId:
    if not isinstance(ptr, NodeId):
        raise TypeError(f"{label} expected NodeId")
    return ptr


def _host_int(value) -> HostInt:
    if isinstance(value, HostInt):
        return value
    return HostInt(int(jax.device_get(value)))


def _host_int_value(value) -> int:
    return int(_host_int(value))


__all__ = [
    "NODE_ID_BITS",
    "NODE_ID_LIMIT",
    "NodeId",
    "HostInt",
    "_node_id",
    "_require_node_id",
    "_host_int",
    "_host_int_value",
]
