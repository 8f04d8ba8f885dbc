# batch.py
# Solve every calendar date and aggregate the results into one document

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from board import calendar_dates
from solver import SolveConfig, SolveResult, solve

logger = logging.getLogger(__name__)

DateProgress = Callable[[int, int, SolveResult], None]


def solve_all_dates(
    config: Optional[SolveConfig] = None,
    dates: Optional[Iterable[tuple[str, int]]] = None,
    progress: Optional[DateProgress] = None,
) -> List[SolveResult]:
    """
    Solve each (month, day) in ``dates``, all 366 dates by default.

    ``progress`` is called as ``progress(index, total, result)`` after each
    date. Every date gets its own independent solve.
    """
    if config is None:
        config = SolveConfig.from_settings()
    todo = list(dates) if dates is not None else list(calendar_dates())
    total = len(todo)
    logger.info("Solving %d dates (mode=%s, cap=%s)", total, config.mode.value, config.cap)

    results: List[SolveResult] = []
    for index, (month, day) in enumerate(todo, start=1):
        result = solve(month, day, config)
        results.append(result)
        logger.debug("[%3d/%d] %s %2s: %d solutions", index, total, month, day, result.count)
        if progress is not None:
            progress(index, total, result)
    return results


def build_document(
    results: List[SolveResult],
    total_time: Optional[float] = None,
    generated_at: Optional[str] = None,
) -> Dict[str, Any]:
    if total_time is None:
        total_time = sum(r.elapsed for r in results)
    if generated_at is None:
        generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    return {
        "generated_at": generated_at,
        "total_time": round(total_time, 6),
        "results": [r.to_dict() for r in results],
    }


def to_json(document: Dict[str, Any], indent: int | None = 2) -> str:
    return json.dumps(document, indent=indent)


def run_batch(
    config: Optional[SolveConfig] = None,
    dates: Optional[Iterable[tuple[str, int]]] = None,
) -> Dict[str, Any]:
    """All dates solved and packaged, timed from start to finish."""
    start = time.perf_counter()
    results = solve_all_dates(config, dates)
    total_time = time.perf_counter() - start
    solved = sum(1 for r in results if r.count)
    logger.info("Complete: %d/%d dates solved in %.2fs", solved, len(results), total_time)
    return build_document(results, total_time=total_time)
