from __future__ import annotations

from collections import defaultdict
from typing import Iterable, List, NamedTuple, Sequence, Tuple

from addnet_core.config import DriverConfig, driver_config_from_env
from addnet_core.decode import decode_nat
from addnet_core.errors import AddNetInvalidEditError
from addnet_core.graph import (
    KIND_SUC,
    KIND_ZERO,
    NodeRecord,
    record,
    record_address,
    suc,
    validate_record,
    zero,
)
from addnet_core.engine import ReduceStats, reduce_network
from addnet_core.protocols import DeltaSink
from addnet_dataflow import Collection, InputSession

OP_INSERT = "insert"
OP_REMOVE = "remove"


class EditOp(NamedTuple):
    op: str
    record: NodeRecord


class RevisionResult(NamedTuple):
    revision: int
    delta: Tuple[Tuple[NodeRecord, int], ...]
    stats: ReduceStats
    status: str


def insert_op(rec: NodeRecord) -> EditOp:
    return EditOp(op=OP_INSERT, record=rec)


def remove_op(rec: NodeRecord) -> EditOp:
    return EditOp(op=OP_REMOVE, record=rec)


def validate_batch(
    inputs: Collection, ops: Sequence[EditOp]
) -> Tuple[Collection, Tuple[Tuple[NodeRecord, int], ...]]:
    """Check a whole batch against `inputs`; return the edited collection and its updates.

    Raises AddNetInvalidEditError without touching `inputs`.
    """
    overlay = defaultdict(int)
    updates: List[Tuple[NodeRecord, int]] = []
    inserted_at = {}
    for i, op in enumerate(ops):
        if not isinstance(op, EditOp):
            raise AddNetInvalidEditError("expected EditOp", op_index=i, record=op)
        rec = op.record
        try:
            validate_record(rec, label=f"ops[{i}].record")
        except (TypeError, ValueError) as exc:
            raise AddNetInvalidEditError(str(exc), op_index=i, record=rec) from exc
        current = inputs.multiplicity(rec) + overlay[rec]
        if op.op == OP_REMOVE:
            if current <= 0:
                raise AddNetInvalidEditError(
                    "remove of a record that is not live", op_index=i, record=rec
                )
            diff = -1
        elif op.op == OP_INSERT:
            diff = 1
            inserted_at[rec.address] = i
        else:
            raise AddNetInvalidEditError(
                f"unknown edit op {op.op!r}", op_index=i, record=rec
            )
        overlay[rec] += diff
        updates.append((rec, diff))
    edited = inputs.concat(updates)
    arranged = edited.arrange_by(record_address)
    for address in sorted(inserted_at):
        group = arranged.group(address)
        if len(group) > 2:
            raise AddNetInvalidEditError(
                f"insert leaves {len(group)} live records at {address!r}",
                op_index=inserted_at[address],
                record=group,
            )
    return edited, tuple(updates)


class NetworkSession:
    """Input network at a revision plus its normal form.

    Batches are validated and reduced before anything is committed, so a
    rejected batch leaves inputs, normal form and revision untouched.
    """

    def __init__(self, *, cfg: DriverConfig | None = None, sinks: Iterable = ()):
        self._cfg = cfg
        self._sinks = []
        for sink in sinks:
            self.add_sink(sink)
        self._input = InputSession(time=0)
        self._normal = Collection.empty()
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def inputs(self) -> Collection:
        return self._input.collection()

    @property
    def normal_form(self) -> Collection:
        return self._normal

    def add_sink(self, sink: DeltaSink) -> None:
        if not isinstance(sink, DeltaSink):
            raise TypeError("sink must be callable as sink(revision, delta)")
        self._sinks.append(sink)

    def load(self, records: Iterable[NodeRecord]) -> RevisionResult:
        return self.apply_batch([insert_op(rec) for rec in records])

    def apply_batch(self, ops: Iterable[EditOp]) -> RevisionResult:
        ops = tuple(ops)
        edited, updates = validate_batch(self.inputs, ops)
        cfg = self._cfg or driver_config_from_env()
        normal, stats, status = reduce_network(edited, cfg=cfg)
        delta = tuple(self._normal.delta_to(normal))
        revision = self._revision + 1
        for rec, diff in updates:
            self._input.update(rec, diff)
        self._input.advance_to(revision)
        self._normal = normal
        self._revision = revision
        for sink in self._sinks:
            sink(revision, delta)
        return RevisionResult(revision=revision, delta=delta, stats=stats, status=status)

    def inputs_at(self, revision: int) -> Collection:
        # Updates for revision r are staged while the session time is r - 1.
        return self._input.collection_at(revision - 1)

    def decode(self, address) -> int:
        return decode_nat(self._normal, address)


def decrement_ops(zero_rec: NodeRecord, suc_rec: NodeRecord) -> List[EditOp]:
    """Drop the ZERO and the SUC on it; a new ZERO takes the SUC's address."""
    if zero_rec.node.kind != KIND_ZERO:
        raise AddNetInvalidEditError("decrement expects a ZERO record", record=zero_rec)
    if suc_rec.node.kind != KIND_SUC or suc_rec.node.refs[0] != zero_rec.address:
        raise AddNetInvalidEditError(
            "decrement expects the SUC record referencing the ZERO", record=suc_rec
        )
    return [
        remove_op(zero_rec),
        remove_op(suc_rec),
        insert_op(record(suc_rec.address, zero())),
    ]


def increment_ops(zero_rec: NodeRecord, new_id) -> List[EditOp]:
    """Replace ZERO at X by SUC(new_id) at X and a ZERO at new_id."""
    if zero_rec.node.kind != KIND_ZERO:
        raise AddNetInvalidEditError("increment expects a ZERO record", record=zero_rec)
    return [
        remove_op(zero_rec),
        insert_op(record(zero_rec.address, suc(new_id))),
        insert_op(record(new_id, zero())),
    ]


__all__ = [
    "OP_INSERT",
    "OP_REMOVE",
    "EditOp",
    "RevisionResult",
    "insert_op",
    "remove_op",
    "validate_batch",
    "NetworkSession",
    "decrement_ops",
    "increment_ops",
]
