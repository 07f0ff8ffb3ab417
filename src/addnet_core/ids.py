from __future__ import annotations

import uuid
from typing import Set

from addnet_core.domains import NodeId, _node_id
from addnet_core.errors import AddNetIdCollisionError


class UuidIdGenerator:
    """Random 128-bit ids (uuid4), checked against every id issued so far."""

    def __init__(self):
        self._issued: Set[NodeId] = set()

    def reserve(self, node_id) -> NodeId:
        node_id = _node_id(node_id)
        self._issued.add(node_id)
        return node_id

    def _next_value(self) -> int:
        return uuid.uuid4().int

    def generate(self) -> NodeId:
        node_id = _node_id(self._next_value())
        if node_id in self._issued:
            raise AddNetIdCollisionError(node_id=node_id)
        self._issued.add(node_id)
        return node_id


class SequentialIdGenerator(UuidIdGenerator):
    """Deterministic ids counting up from `start` (tests and demos)."""

    def __init__(self, start: int = 1):
        super().__init__()
        self._cursor = int(start)

    def _next_value(self) -> int:
        value = self._cursor
        self._cursor += 1
        return value


_DEFAULT_ID_GENERATOR = UuidIdGenerator()


def default_id_generator() -> UuidIdGenerator:
    return _DEFAULT_ID_GENERATOR


def generate_id() -> NodeId:
    return _DEFAULT_ID_GENERATOR.generate()


__all__ = [
    "UuidIdGenerator",
    "SequentialIdGenerator",
    "default_id_generator",
    "generate_id",
]
