# pieces.py
# Piece definitions + rotations/flips

from __future__ import annotations

from typing import Iterable

Shape = tuple[tuple[int, int], ...]

# Base piece shapes as (row, col) offsets. Piece ids are 1-based.
RAW_PIECES: dict[int, Shape] = {
    1: ((0, 1), (0, 2), (1, 1), (2, 0), (2, 1)),
    2: ((0, 0), (1, 0), (1, 1), (1, 2), (0, 2)),
    3: ((0, 0), (1, 0), (2, 0), (1, 1), (2, 1)),
    4: ((0, 1), (1, 1), (2, 0), (2, 1), (3, 1)),
    5: ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2)),
    6: ((0, 0), (1, 0), (2, 0), (2, 1), (3, 1)),
    7: ((0, 0), (1, 0), (2, 0), (3, 0), (3, 1)),
    8: ((0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)),
}

PIECE_IDS: tuple[int, ...] = tuple(sorted(RAW_PIECES))
NUM_PIECES = len(PIECE_IDS)
ALL_PIECES_MASK = (1 << NUM_PIECES) - 1


def normalize(shape: Iterable[tuple[int, int]]) -> Shape:
    """Translate to min row/col 0 and sort, so equal shapes compare equal."""
    cells = list(shape)
    min_r = min(r for r, _ in cells)
    min_c = min(c for _, c in cells)
    return tuple(sorted((r - min_r, c - min_c) for r, c in cells))


def rotate90(shape: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    # (r, c) -> (c, -r)
    return [(c, -r) for r, c in shape]


def mirror(shape: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    # (r, c) -> (r, -c)
    return [(r, -c) for r, c in shape]


def generate_orientations(shape: Iterable[tuple[int, int]]) -> tuple[Shape, ...]:
    """
    All unique rotations and mirrored rotations, normalized to (0,0).

    Each of the four quarter turns is followed by its mirror image, and the
    first occurrence of every distinct shape is kept in that order.
    """
    result: list[Shape] = []
    current = list(shape)
    for _ in range(4):
        current = rotate90(current)
        norm = normalize(current)
        if norm not in result:
            result.append(norm)
        flipped = normalize(mirror(norm))
        if flipped not in result:
            result.append(flipped)
    return tuple(result)


def piece_area(piece_id: int) -> int:
    return len(RAW_PIECES[piece_id])


# Computed once; read-only and shared by every solve.
PIECE_ORIENTATIONS: tuple[tuple[Shape, ...], ...] = tuple(
    generate_orientations(RAW_PIECES[pid]) for pid in PIECE_IDS
)

PIECE_AREAS: tuple[int, ...] = tuple(piece_area(pid) for pid in PIECE_IDS)
TOTAL_AREA = sum(PIECE_AREAS)


def orientations_for(piece_id: int) -> tuple[Shape, ...]:
    return PIECE_ORIENTATIONS[piece_id - 1]
