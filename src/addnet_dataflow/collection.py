from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, Hashable, Iterable, List, Tuple

# Multiset collections with signed multiplicities. A value is live while its
# accumulated multiplicity is positive; zero entries are dropped eagerly so
# two collections compare equal iff they hold the same (value, count) pairs.

# dataflow-bundle: key, values


class Collection:
    __slots__ = ("_counts",)

    def __init__(self, counts: Dict[Hashable, int] | None = None):
        self._counts = {v: int(c) for v, c in (counts or {}).items() if c}

    @classmethod
    def empty(cls) -> "Collection":
        return cls()

    @classmethod
    def from_records(cls, values: Iterable[Hashable], diff: int = 1) -> "Collection":
        return cls.from_updates((v, diff) for v in values)

    @classmethod
    def from_updates(cls, updates: Iterable[Tuple[Hashable, int]]) -> "Collection":
        counts: Dict[Hashable, int] = defaultdict(int)
        for value, diff in updates:
            counts[value] += int(diff)
        return cls(counts)

    def updates(self) -> List[Tuple[Hashable, int]]:
        return sorted(self._counts.items())

    def live(self) -> List[Hashable]:
        return sorted(v for v, c in self._counts.items() if c > 0)

    def multiplicity(self, value: Hashable) -> int:
        return self._counts.get(value, 0)

    def concat(self, other: "Collection | Iterable[Tuple[Hashable, int]]") -> "Collection":
        counts: Dict[Hashable, int] = defaultdict(int, self._counts)
        pairs = other._counts.items() if isinstance(other, Collection) else other
        for value, diff in pairs:
            counts[value] += int(diff)
        return Collection(counts)

    def negate(self) -> "Collection":
        return Collection({v: -c for v, c in self._counts.items()})

    def delta_to(self, newer: "Collection") -> List[Tuple[Hashable, int]]:
        """Consolidated updates turning this collection into `newer`."""
        return newer.concat(self.negate()).updates()

    def arrange_by(self, key_fn: Callable[[Hashable], Hashable]) -> "Arrangement":
        groups: Dict[Hashable, List[Tuple[Hashable, int]]] = defaultdict(list)
        for value in self.live():
            groups[key_fn(value)].append((value, self._counts[value]))
        return Arrangement({k: tuple(vs) for k, vs in groups.items()})

    def __contains__(self, value) -> bool:
        return self._counts.get(value, 0) > 0

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Collection):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None

    def __repr__(self) -> str:
        return f"Collection({self.updates()!r})"


class Arrangement:
    """Live (value, count) pairs grouped by key; each group is sorted by value."""

    __slots__ = ("_groups",)

    def __init__(self, groups: Dict[Hashable, Tuple[Tuple[Hashable, int], ...]]):
        self._groups = dict(groups)

    def keys(self) -> List[Hashable]:
        return sorted(self._groups)

    def group(self, key: Hashable) -> Tuple[Hashable, ...]:
        """Distinct live values at `key`."""
        return tuple(v for v, _ in self._groups.get(key, ()))

    def weighted(self, key: Hashable) -> Tuple[Tuple[Hashable, int], ...]:
        return self._groups.get(key, ())

    def items(self) -> List[Tuple[Hashable, Tuple[Tuple[Hashable, int], ...]]]:
        return [(k, self._groups[k]) for k in self.keys()]

    def record_count(self) -> int:
        return sum(len(vs) for vs in self._groups.values())

    def reduce(
        self,
        logic: Callable[
            [Hashable, Tuple[Tuple[Hashable, int], ...]],
            Iterable[Tuple[Hashable, int]],
        ],
    ) -> Collection:
        """Replace every group by the (value, diff) pairs `logic` emits for it."""
        counts: Dict[Hashable, int] = defaultdict(int)
        for key, pairs in self.items():
            for out, diff in logic(key, pairs):
                counts[out] += int(diff)
        return Collection(counts)

    def __len__(self) -> int:
        return len(self._groups)


__all__ = ["Collection", "Arrangement"]
