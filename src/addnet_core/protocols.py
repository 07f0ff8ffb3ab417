from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, Tuple, runtime_checkable

if TYPE_CHECKING:
    from addnet_core.domains import NodeId
    from addnet_core.graph import NodeRecord
    from addnet_dataflow.collection import Arrangement


@runtime_checkable
class IdGenerator(Protocol):
    def generate(self) -> NodeId:
        ...


@runtime_checkable
class PlanPassFn(Protocol):
    # dataflow-bundle: arranged
    def __call__(self, arranged: Arrangement):
        ...


@runtime_checkable
class ApplyTemplateFn(Protocol):
    # dataflow-bundle: template, swapped, key, rec_a, rec_b
    def __call__(
        self,
        template: int,
        swapped: bool,
        key: NodeId,
        rec_a: NodeRecord,
        rec_b: NodeRecord,
    ) -> Tuple[NodeRecord, ...]:
        ...


@runtime_checkable
class DeltaSink(Protocol):
    def __call__(
        self, revision: int, delta: Sequence[Tuple[NodeRecord, int]]
    ) -> None:
        ...


__all__ = [
    "IdGenerator",
    "PlanPassFn",
    "ApplyTemplateFn",
    "DeltaSink",
]
