# memo.py
# State fingerprints, visited-state memo and solution deduplication

from __future__ import annotations

from board import Grid

FNV_OFFSET_64 = 14695981039346656037
FNV_PRIME_64 = 1099511628211
MASK_64 = (1 << 64) - 1


def fingerprint(grid: Grid, used_mask: int) -> int:
    """
    64-bit FNV-1a style digest of a search state.

    Folds every cell in row-major order, then the used-piece mask. Negative
    cell values are folded as their 64-bit two's complement.
    """
    h = FNV_OFFSET_64
    for row in grid:
        for value in row:
            h ^= value & MASK_64
            h = (h * FNV_PRIME_64) & MASK_64
    h ^= used_mask & MASK_64
    h = (h * FNV_PRIME_64) & MASK_64
    return h


class VisitedStates:
    """
    Fingerprints of states already entered during one solve.

    This is an approximation of an exact state cache: two different states
    sharing a fingerprint are treated as one, so a collision can skip a
    state that was never expanded.
    """

    def __init__(self) -> None:
        self._seen: set[int] = set()
        self.hits = 0

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, fp: int) -> bool:
        return fp in self._seen

    def check_and_add(self, fp: int) -> bool:
        """Record ``fp``; True if it had been seen before."""
        if fp in self._seen:
            self.hits += 1
            return True
        self._seen.add(fp)
        return False


class SolutionStore:
    """Accepted solutions bucketed by fingerprint, compared cell by cell."""

    def __init__(self) -> None:
        self._buckets: dict[int, list[tuple[tuple[int, ...], ...]]] = {}
        self.duplicates = 0

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def add(self, fp: int, grid: Grid) -> bool:
        """Store ``grid`` unless an identical grid is already stored."""
        frozen = tuple(tuple(row) for row in grid)
        bucket = self._buckets.setdefault(fp, [])
        if frozen in bucket:
            self.duplicates += 1
            return False
        bucket.append(frozen)
        return True
