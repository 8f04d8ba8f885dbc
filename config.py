# config.py
# Environment driven solver settings + logging setup

from __future__ import annotations

import logging
import os


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


# ======= Enumeration mode =======
# "first" stops at the first tiling, "bounded" at MAX_SOLUTIONS, "all" never.
MODE          = os.getenv("CP_MODE", "bounded").strip().lower()
MAX_SOLUTIONS = _env_int("CP_MAX_SOLUTIONS", "10")

# ======= Search heuristics =======
PRUNE_REGIONS = _env_int("CP_PRUNE_REGIONS", "1") != 0

# ======= Logging =======
LOG_LEVEL = os.getenv("CP_LOG_LEVEL", "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_DATEFMT = "%H:%M:%S"


class CFG:
    MODE          = MODE
    MAX_SOLUTIONS = MAX_SOLUTIONS
    PRUNE_REGIONS = PRUNE_REGIONS
    LOG_LEVEL     = LOG_LEVEL


def setup_logging(level: str | None = None) -> None:
    """Console logging for the viewer and batch runs."""
    root = logging.getLogger()
    if any(getattr(h, "_calendar_puzzle", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    handler._calendar_puzzle = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level or CFG.LOG_LEVEL)


__all__ = ["CFG", "setup_logging"]
