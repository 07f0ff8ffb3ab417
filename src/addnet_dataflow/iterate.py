from __future__ import annotations

from typing import Callable, NamedTuple

from addnet_dataflow.collection import Collection


class IterateResult(NamedTuple):
    collection: Collection
    steps: int
    converged: bool


def iterate(
    collection: Collection,
    step_fn: Callable[[Collection], Collection],
    *,
    max_steps: int,
) -> IterateResult:
    """Re-apply step_fn until its output equals its input.

    The confirming step (output == input) is counted in `steps`.
    """
    current = collection
    steps = 0
    while steps < max_steps:
        nxt = step_fn(current)
        steps += 1
        if nxt == current:
            return IterateResult(collection=nxt, steps=steps, converged=True)
        current = nxt
    return IterateResult(collection=current, steps=steps, converged=False)


__all__ = ["IterateResult", "iterate"]
