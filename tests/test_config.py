import importlib
import logging

import pytest

import config as config_module


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CP_MODE", " ALL ")
    monkeypatch.setenv("CP_MAX_SOLUTIONS", "3")
    monkeypatch.setenv("CP_PRUNE_REGIONS", "0")
    cfg = importlib.reload(config_module)
    try:
        assert cfg.CFG.MODE == "all"
        assert cfg.CFG.MAX_SOLUTIONS == 3
        assert cfg.CFG.PRUNE_REGIONS is False
    finally:
        monkeypatch.undo()
        importlib.reload(config_module)


def test_non_integer_setting_is_rejected(monkeypatch):
    monkeypatch.setenv("CP_MAX_SOLUTIONS", "lots")
    try:
        with pytest.raises(ValueError):
            importlib.reload(config_module)
    finally:
        monkeypatch.undo()
        importlib.reload(config_module)


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        config_module.setup_logging("DEBUG")
        config_module.setup_logging("DEBUG")
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        assert root.level == logging.DEBUG
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(level)
