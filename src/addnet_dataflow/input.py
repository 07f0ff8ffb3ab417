from __future__ import annotations

from typing import Hashable, List, Tuple

from addnet_dataflow.collection import Collection


class InputSession:
    """Staged (value, diff) updates committed at revision boundaries.

    Updates are staged at the current time and become visible once the time
    advances past it, so readers never observe a partial batch. Every
    committed batch is kept for the life of the session so `collection_at`
    can rebuild any earlier time; history is never compacted.
    """

    def __init__(self, time: int = 0):
        self._time = int(time)
        self._committed = Collection.empty()
        self._staged: List[Tuple[Hashable, int]] = []
        self._history: List[Tuple[int, Tuple[Tuple[Hashable, int], ...]]] = []

    @property
    def time(self) -> int:
        return self._time

    def update(self, value: Hashable, diff: int) -> None:
        self._staged.append((value, int(diff)))

    def insert(self, value: Hashable) -> None:
        self.update(value, 1)

    def remove(self, value: Hashable) -> None:
        self.update(value, -1)

    def staged(self) -> Tuple[Tuple[Hashable, int], ...]:
        return tuple(self._staged)

    def advance_to(self, time: int) -> None:
        time = int(time)
        if time <= self._time:
            raise ValueError(f"time must advance: {time} <= {self._time}")
        staged = tuple(self._staged)
        self._history.append((self._time, staged))
        self._committed = self._committed.concat(staged)
        self._staged = []
        self._time = time

    def flush(self) -> Collection:
        """Settled view: every update staged before the last advance_to."""
        return self._committed

    def collection(self) -> Collection:
        return self._committed

    def collection_at(self, time: int) -> Collection:
        updates = [u for t, batch in self._history if t <= time for u in batch]
        return Collection.from_updates(updates)


__all__ = ["InputSession"]
