import json
import logging

import pytest

from roomweaver import app, logging_utils
from roomweaver.dungeon import Dungeon, DungeonConfig, InvalidConfigError
from roomweaver.server import _configure_logging


def test_get_logger_is_cached():
    assert logging_utils.get_logger("roomweaver.x") is logging_utils.get_logger("roomweaver.x")
    assert logging_utils.log.name == "roomweaver"


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    logging_utils.get_logger("roomweaver.test").info(event="layout regenerated", rooms=4, skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=layout_regenerated" in out
    assert "rooms=4" in out
    assert "logger=roomweaver.test" in out
    assert "skipped" not in out


def test_json_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    logging_utils.get_logger("roomweaver.test").debug(event="probe", seed=3)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["level"] == "debug"
    assert rec["event"] == "probe" and rec["seed"] == 3
    assert isinstance(rec["ts"], int)


def test_level_gating_and_stderr(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    logger = logging_utils.get_logger("roomweaver.test")
    logger.info(event="hidden")
    logger.error(event="boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=boom" in captured.err


def test_generation_logs_at_debug(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    Dungeon(DungeonConfig(seed=10))
    out = capsys.readouterr().out
    assert "event=dungeon_generated" in out
    assert "seed=10" in out


def test_invalid_config_logs_warning(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    with pytest.raises(InvalidConfigError):
        Dungeon(DungeonConfig(width=2))
    out = capsys.readouterr().out
    assert "level=warn" in out and "event=invalid_config" in out


def test_configure_logging_writes_rotating_file(tmp_path, monkeypatch):
    # Redirect instance path to a temp directory to exercise logging setup
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        # Run twice to ensure handlers are replaced, not duplicated
        _configure_logging()
        path = _configure_logging()
        assert len(root.handlers) == 2
        logging.getLogger("roomweaver.test").info("hello file")
        for h in root.handlers:
            h.flush()
        assert (tmp_path / "app.log").exists()
        assert path == str(tmp_path / "app.log")
        assert "hello file" in (tmp_path / "app.log").read_text()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
