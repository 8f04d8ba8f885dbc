# placements.py
# Placement feasibility and the paired place/remove grid mutations

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from board import BOARD_ROWS, BOARD_COLS, FREE, Grid, in_bounds, is_blocked
from pieces import Shape, orientations_for


@dataclass(frozen=True)
class Placement:
    piece: int
    shape: Shape
    row: int
    col: int

    @property
    def cells(self) -> tuple[tuple[int, int], ...]:
        """Board coordinates covered by this placement."""
        return tuple((self.row + dr, self.col + dc) for dr, dc in self.shape)

    @contextmanager
    def placed(self, grid: Grid) -> Iterator[Grid]:
        """Mark the placement on ``grid`` for the duration of the block."""
        place(grid, self.shape, self.row, self.col, self.piece)
        try:
            yield grid
        finally:
            remove(grid, self.shape, self.row, self.col)


def can_place(grid: Grid, shape: Shape, r: int, c: int) -> bool:
    for dr, dc in shape:
        nr, nc = r + dr, c + dc
        if not in_bounds(nr, nc) or is_blocked(nr, nc):
            return False
        if grid[nr][nc] != FREE:
            return False
    return True


def place(grid: Grid, shape: Shape, r: int, c: int, piece_id: int) -> None:
    for dr, dc in shape:
        grid[r + dr][c + dc] = piece_id


def remove(grid: Grid, shape: Shape, r: int, c: int) -> None:
    # Only ever called to undo the matching place(); cells go back to free.
    for dr, dc in shape:
        grid[r + dr][c + dc] = FREE


def feasible_placements(grid: Grid, piece_id: int) -> Iterator[Placement]:
    """Every feasible placement of a piece, orientations first, anchors row-major."""
    for shape in orientations_for(piece_id):
        for r in range(BOARD_ROWS):
            for c in range(BOARD_COLS):
                if can_place(grid, shape, r, c):
                    yield Placement(piece=piece_id, shape=shape, row=r, col=c)
