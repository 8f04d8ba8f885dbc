# solver.py
# Backtracking search for a given date: modes, collector and solve()

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from board import (
    BOARD_ROWS,
    BOARD_COLS,
    FREE,
    MONTH_LABELS,
    Grid,
    free_cell_count,
    in_bounds,
    init_grid,
    is_blocked,
    month_label,
)
from config import CFG
from memo import SolutionStore, VisitedStates, fingerprint
from pieces import (
    ALL_PIECES_MASK,
    NUM_PIECES,
    PIECE_AREAS,
    PIECE_ORIENTATIONS,
    TOTAL_AREA,
    Shape,
    normalize,
)
from placements import feasible_placements

logger = logging.getLogger(__name__)

ProgressSink = Callable[[int, Grid], None]


class SolveMode(Enum):
    FIRST_ONLY = "first"
    BOUNDED = "bounded"
    EXHAUSTIVE = "all"


@dataclass(frozen=True)
class SolveConfig:
    mode: SolveMode = SolveMode.BOUNDED
    max_solutions: Optional[int] = 10
    prune_regions: bool = True

    def __post_init__(self) -> None:
        if self.mode is SolveMode.BOUNDED:
            if self.max_solutions is None or self.max_solutions < 1:
                raise ValueError(f"bounded mode needs a cap >= 1, got {self.max_solutions}")

    @classmethod
    def first_only(cls, prune_regions: bool = True) -> "SolveConfig":
        return cls(SolveMode.FIRST_ONLY, None, prune_regions)

    @classmethod
    def bounded(cls, max_solutions: int, prune_regions: bool = True) -> "SolveConfig":
        return cls(SolveMode.BOUNDED, max_solutions, prune_regions)

    @classmethod
    def exhaustive(cls, prune_regions: bool = True) -> "SolveConfig":
        return cls(SolveMode.EXHAUSTIVE, None, prune_regions)

    @classmethod
    def from_settings(cls) -> "SolveConfig":
        try:
            mode = SolveMode(CFG.MODE)
        except ValueError:
            raise ValueError(f"unknown solve mode {CFG.MODE!r}") from None
        cap = CFG.MAX_SOLUTIONS if mode is SolveMode.BOUNDED else None
        return cls(mode, cap, CFG.PRUNE_REGIONS)

    @property
    def cap(self) -> Optional[int]:
        """Number of solutions after which the search halts, None for no cap."""
        if self.mode is SolveMode.FIRST_ONLY:
            return 1
        if self.mode is SolveMode.BOUNDED:
            return self.max_solutions
        return None


@dataclass
class SearchStats:
    nodes: int = 0
    memo_hits: int = 0
    pruned: int = 0
    duplicates: int = 0


@dataclass
class SolveResult:
    month: str
    day: str
    solutions: List[Grid]
    elapsed: float
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def count(self) -> int:
        return len(self.solutions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "day": int(self.day) if self.day.isdigit() else self.day,
            "solutions": self.count,
            "grids": self.solutions,
            "time": round(self.elapsed, 6),
        }


class ResultCollector:
    """Accepted solutions in discovery order, up to an optional cap."""

    def __init__(self, cap: Optional[int] = None, progress: Optional[ProgressSink] = None):
        self.cap = cap
        self.progress = progress
        self.solutions: List[Grid] = []

    @property
    def full(self) -> bool:
        return self.cap is not None and len(self.solutions) >= self.cap

    def add(self, snapshot: Grid) -> None:
        self.solutions.append(snapshot)
        if self.progress is not None:
            self.progress(len(self.solutions), [row[:] for row in snapshot])

    def result(self, month: str, day: str, elapsed: float, stats: SearchStats) -> SolveResult:
        return SolveResult(month, day, self.solutions, elapsed, stats)


def _reachable_areas(used_mask: int) -> frozenset[int]:
    unused = [PIECE_AREAS[i] for i in range(NUM_PIECES) if not used_mask & (1 << i)]
    sums = {0}
    for area in unused:
        sums |= {s + area for s in sums}
    return frozenset(sums)


# Subset sums of the unused pieces' areas, per used mask.
_REACHABLE_AREAS: tuple[frozenset[int], ...] = tuple(
    _reachable_areas(mask) for mask in range(ALL_PIECES_MASK + 1)
)


def _shape_owners() -> Dict[Shape, int]:
    owners: Dict[Shape, int] = {}
    for index, orientations in enumerate(PIECE_ORIENTATIONS):
        for shape in orientations:
            owners[shape] = owners.get(shape, 0) | (1 << index)
    return owners


# Orientation -> mask of the pieces that have it.
_SHAPE_OWNERS = _shape_owners()
_MAX_PIECE_AREA = max(PIECE_AREAS)


def has_dead_region(grid: Grid, used_mask: int) -> bool:
    """
    True if some connected free region can't be filled by the unused pieces.

    A region's area must be a sum of unused piece areas, and a region no
    larger than one piece must be exactly the shape of an unused piece.
    """
    reachable = _REACHABLE_AREAS[used_mask]
    unused = ALL_PIECES_MASK & ~used_mask
    seen = [[False] * BOARD_COLS for _ in range(BOARD_ROWS)]
    for r in range(BOARD_ROWS):
        for c in range(BOARD_COLS):
            if grid[r][c] != FREE or seen[r][c]:
                continue
            seen[r][c] = True
            queue = deque([(r, c)])
            cells = []
            while queue:
                cr, cc = queue.popleft()
                cells.append((cr, cc))
                for nr, nc in ((cr + 1, cc), (cr - 1, cc), (cr, cc + 1), (cr, cc - 1)):
                    if in_bounds(nr, nc) and grid[nr][nc] == FREE and not seen[nr][nc]:
                        seen[nr][nc] = True
                        queue.append((nr, nc))
            if len(cells) not in reachable:
                return True
            if len(cells) <= _MAX_PIECE_AREA and not _SHAPE_OWNERS.get(normalize(cells), 0) & unused:
                return True
    return False


def export_grid(grid: Grid) -> Grid:
    """Independent copy in output form: permanently blocked cells become 0."""
    return [
        [FREE if is_blocked(r, c) else grid[r][c] for c in range(BOARD_COLS)]
        for r in range(BOARD_ROWS)
    ]


class SearchEngine:
    """
    Depth-first placement search over one request's grid.

    The lowest unused piece is always placed next, trying its orientations
    in order and anchors row-major. The grid is mutated in place; each
    recursion runs inside a ``Placement.placed()`` block, so the cells are
    freed again before siblings are tried, even if the search raises.
    """

    def __init__(
        self,
        grid: Grid,
        config: SolveConfig,
        collector: ResultCollector,
    ):
        self.grid = grid
        self.config = config
        self.collector = collector
        self.visited = VisitedStates()
        self.store = SolutionStore()
        self.stats = SearchStats()
        self._halted = False

    @property
    def halted(self) -> bool:
        return self._halted

    def run(self, used_mask: int = 0) -> None:
        """Search from the current grid with ``used_mask`` pieces already on it."""
        self._search(used_mask)
        self.stats.memo_hits = self.visited.hits
        self.stats.duplicates = self.store.duplicates

    def _accept(self, fp: int) -> None:
        if not self.store.add(fp, self.grid):
            logger.debug("Duplicate tiling skipped")
            return
        self.collector.add(export_grid(self.grid))
        logger.debug("Tiling #%d accepted", len(self.collector.solutions))
        if self.collector.full:
            self._halted = True

    def _search(self, used_mask: int) -> None:
        grid = self.grid
        self.stats.nodes += 1

        fp = fingerprint(grid, used_mask)
        if self.visited.check_and_add(fp):
            return

        if used_mask == ALL_PIECES_MASK:
            self._accept(fp)
            return

        if self.config.prune_regions and has_dead_region(grid, used_mask):
            self.stats.pruned += 1
            return

        piece_index = 0
        while used_mask & (1 << piece_index):
            piece_index += 1
        next_mask = used_mask | (1 << piece_index)

        for placement in feasible_placements(grid, piece_index + 1):
            with placement.placed(grid):
                self._search(next_mask)
            if self._halted:
                return


def solve(
    month: str | int,
    day: str | int,
    config: Optional[SolveConfig] = None,
    progress: Optional[ProgressSink] = None,
) -> SolveResult:
    """
    Solve the board for one date.

    ``progress`` is called as ``progress(count, grid)`` for every accepted
    tiling; anything it raises propagates to the caller. Labels that don't
    name a board cell, and month numbers outside 1..12, give an empty
    result, not an error.
    """
    if config is None:
        config = SolveConfig.from_settings()
    if isinstance(month, int):
        # Out-of-range numbers reserve no month cell, like unknown labels.
        label = month_label(month) if 1 <= month <= len(MONTH_LABELS) else ""
        month = label or str(month)
    else:
        label = month
    day = str(day)

    start = time.perf_counter()
    grid = init_grid(label, day)
    collector = ResultCollector(config.cap, progress)
    stats = SearchStats()

    free = free_cell_count(grid)
    if free != TOTAL_AREA:
        logger.warning(
            "%s %s leaves %d free cells for %d cells of pieces; no tiling possible",
            month, day, free, TOTAL_AREA,
        )
    else:
        logger.info("Solving %s %s (mode=%s, cap=%s)", month, day, config.mode.value, config.cap)
        engine = SearchEngine(grid, config, collector)
        engine.run()
        stats = engine.stats

    elapsed = time.perf_counter() - start
    result = collector.result(month, day, elapsed, stats)
    logger.info(
        "%s %s: %d solution(s) in %.3fs (nodes=%d, memo_hits=%d, pruned=%d)",
        month, day, result.count, elapsed, stats.nodes, stats.memo_hits, stats.pruned,
    )
    return result
