from __future__ import annotations

from dataclasses import dataclass

# Errors are plain (non-frozen) dataclasses: contextlib assigns __traceback__
# on exceptions leaving a generator context manager.


@dataclass(eq=False)
class AddNetMalformedNetworkError(RuntimeError):
    addresses: tuple = ()
    context: str | None = None

    def __str__(self) -> str:
        shown = ", ".join(repr(a) for a in self.addresses[:4])
        more = "" if len(self.addresses) <= 4 else f" (+{len(self.addresses) - 4} more)"
        return f"malformed network at {shown}{more}"


@dataclass(eq=False)
class AddNetInvalidEditError(ValueError):
    message: str
    op_index: int | None = None
    record: object = None

    def __str__(self) -> str:
        if self.op_index is None:
            return f"invalid edit batch: {self.message}"
        return f"invalid edit batch (op {self.op_index}): {self.message}"


@dataclass(eq=False)
class AddNetIdCollisionError(RuntimeError):
    node_id: object

    def __str__(self) -> str:
        return f"id generator yielded an id already in use: {self.node_id!r}"


@dataclass(eq=False)
class AddNetBuildError(ValueError):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class AddNetDecodeError(ValueError):
    message: str
    address: object = None

    def __str__(self) -> str:
        return f"{self.message} at {self.address!r}"


@dataclass(eq=False)
class AddNetBudgetExhaustedError(RuntimeError):
    steps: int
    context: str | None = None

    def __str__(self) -> str:
        return f"reduction did not converge within {self.steps} passes"


@dataclass(eq=False)
class AddNetValidateModeError(ValueError):
    mode: object
    allowed: tuple[str, ...] = ("none", "strict")
    context: str | None = None

    def __str__(self) -> str:
        return f"unknown validate_mode={self.mode!r}"


__all__ = [
    "AddNetMalformedNetworkError",
    "AddNetInvalidEditError",
    "AddNetIdCollisionError",
    "AddNetBuildError",
    "AddNetDecodeError",
    "AddNetBudgetExhaustedError",
    "AddNetValidateModeError",
]
