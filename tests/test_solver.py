import pytest

import solver
from board import BLOCKED_CELLS, BOARD_COLS, BOARD_ROWS, FREE, RESERVED, init_grid
from pieces import ALL_PIECES_MASK, PIECE_IDS, piece_area
from solver import (
    ResultCollector,
    SearchEngine,
    SolveConfig,
    SolveMode,
    export_grid,
    has_dead_region,
    solve,
)

# Pieces 1..7 already placed; only the 2x3 bar is left.
ONLY_BAR_LEFT = ALL_PIECES_MASK & ~(1 << 7)


def _bar_pocket():
    """All cells reserved except a 2x4 pocket the bar fits into twice."""
    grid = [[RESERVED] * BOARD_COLS for _ in range(BOARD_ROWS)]
    for r in range(2):
        for c in range(4):
            grid[r][c] = FREE
    return grid


def _run(grid, config, used_mask, progress=None):
    collector = ResultCollector(config.cap, progress)
    engine = SearchEngine(grid, config, collector)
    engine.run(used_mask)
    return engine, collector.solutions


def _internal(solution):
    return [
        [RESERVED if (r, c) in BLOCKED_CELLS else solution[r][c] for c in range(BOARD_COLS)]
        for r in range(BOARD_ROWS)
    ]


def _freed(solution, piece_ids):
    """Internal grid of a solution with the given pieces lifted off."""
    grid = _internal(solution)
    for r in range(BOARD_ROWS):
        for c in range(BOARD_COLS):
            if grid[r][c] in piece_ids:
                grid[r][c] = FREE
    return grid


@pytest.fixture(scope="module")
def jan_first():
    return solve("JAN", 1, SolveConfig.first_only())


def test_config_constructors():
    assert SolveConfig.first_only().cap == 1
    assert SolveConfig.bounded(5).cap == 5
    assert SolveConfig.exhaustive().cap is None
    with pytest.raises(ValueError):
        SolveConfig.bounded(0)


def test_config_from_settings(monkeypatch):
    monkeypatch.setattr(solver.CFG, "MODE", "all")
    assert SolveConfig.from_settings().mode is SolveMode.EXHAUSTIVE

    monkeypatch.setattr(solver.CFG, "MODE", "bounded")
    monkeypatch.setattr(solver.CFG, "MAX_SOLUTIONS", 3)
    monkeypatch.setattr(solver.CFG, "PRUNE_REGIONS", False)
    config = SolveConfig.from_settings()
    assert config.cap == 3
    assert config.prune_regions is False

    monkeypatch.setattr(solver.CFG, "MODE", "sometimes")
    with pytest.raises(ValueError):
        SolveConfig.from_settings()


def test_export_grid_clears_blocked_cells():
    grid = init_grid("JAN", 1)
    exported = export_grid(grid)
    for r, c in BLOCKED_CELLS:
        assert exported[r][c] == 0
    assert exported[0][0] == RESERVED
    assert exported is not grid
    assert grid[0][6] == RESERVED


def test_dead_region_detection():
    assert not has_dead_region(init_grid("JAN", 1), 0)

    grid = [[RESERVED] * BOARD_COLS for _ in range(BOARD_ROWS)]
    grid[3][3] = FREE
    assert has_dead_region(grid, 0)

    pocket = _bar_pocket()
    assert has_dead_region(pocket, ONLY_BAR_LEFT)
    pocket[0][3] = pocket[1][3] = RESERVED
    assert not has_dead_region(pocket, ONLY_BAR_LEFT)


def test_exhaustive_search_finds_every_completion_in_order():
    calls = []
    config = SolveConfig.exhaustive(prune_regions=False)
    engine, solutions = _run(_bar_pocket(), config, ONLY_BAR_LEFT, lambda n, g: calls.append((n, g)))

    assert len(solutions) == 2
    assert solutions[0][0][:4] == [8, 8, 8, FREE]
    assert solutions[1][0][:4] == [FREE, 8, 8, 8]
    assert [n for n, _ in calls] == [1, 2]
    assert [g for _, g in calls] == solutions
    assert not engine.halted


def test_bounded_one_halts_after_first_acceptance():
    config = SolveConfig.bounded(1, prune_regions=False)
    engine, solutions = _run(_bar_pocket(), config, ONLY_BAR_LEFT)

    assert len(solutions) == 1
    assert solutions[0][0][:4] == [8, 8, 8, FREE]
    assert engine.halted
    # The root and its first child only; the sibling anchor is never entered.
    assert engine.stats.nodes == 2


def test_search_restores_the_grid():
    grid = _bar_pocket()
    before = [row[:] for row in grid]
    _run(grid, SolveConfig.exhaustive(prune_regions=False), ONLY_BAR_LEFT)
    assert grid == before


def test_progress_sink_errors_propagate():
    def sink(count, grid):
        raise RuntimeError("display gone")

    grid = _bar_pocket()
    before = [row[:] for row in grid]
    with pytest.raises(RuntimeError):
        _run(grid, SolveConfig.exhaustive(prune_regions=False), ONLY_BAR_LEFT, sink)
    assert grid == before


def test_invalid_labels_give_an_empty_result():
    calls = []
    result = solve("FOO", 1, SolveConfig.exhaustive(), progress=lambda n, g: calls.append(n))
    assert result.solutions == []
    assert calls == []

    assert solve("JAN", 32, SolveConfig.exhaustive()).count == 0


def test_month_number_is_accepted():
    result = solve(1, "32", SolveConfig.first_only())
    assert result.month == "JAN"
    assert result.count == 0


def test_out_of_range_month_number_gives_an_empty_result():
    result = solve(13, 1, SolveConfig.first_only())
    assert result.month == "13"
    assert result.solutions == []


def test_valid_date_has_a_full_tiling(jan_first):
    assert jan_first.count == 1
    assert jan_first.elapsed >= 0
    grid = jan_first.solutions[0]
    assert grid[0][0] == RESERVED
    assert grid[2][0] == RESERVED

    cells = [v for row in grid for v in row]
    assert cells.count(RESERVED) == 2
    for pid in PIECE_IDS:
        assert cells.count(pid) == piece_area(pid)
    for r in range(BOARD_ROWS):
        for c in range(BOARD_COLS):
            if grid[r][c] == 0:
                assert (r, c) in BLOCKED_CELLS


def test_search_is_deterministic_and_free_of_duplicates(jan_first):
    solution = jan_first.solutions[0]
    start = _freed(solution, (6, 7, 8))
    used = 0b00011111

    _, first = _run([row[:] for row in start], SolveConfig.exhaustive(), used)
    _, second = _run([row[:] for row in start], SolveConfig.exhaustive(), used)

    assert first == second
    assert solution in first
    assert len({tuple(map(tuple, g)) for g in first}) == len(first)


def test_result_to_dict(jan_first):
    data = jan_first.to_dict()
    assert data["month"] == "JAN"
    assert data["day"] == 1
    assert data["solutions"] == 1
    assert data["grids"] == jan_first.solutions


def test_region_pruning_keeps_the_solution_list(jan_first):
    start = _freed(jan_first.solutions[0], (4, 5, 6, 7, 8))
    used = 0b00000111

    pruned_engine, pruned = _run([row[:] for row in start], SolveConfig.exhaustive(), used)
    plain_engine, plain = _run(
        [row[:] for row in start], SolveConfig.exhaustive(prune_regions=False), used
    )

    assert pruned == plain
    assert jan_first.solutions[0] in pruned
    assert pruned_engine.stats.pruned > 0
    assert plain_engine.stats.pruned == 0
    assert pruned_engine.stats.nodes < plain_engine.stats.nodes
