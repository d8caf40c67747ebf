import asyncio
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from modelframe import PendingFile, ShellConfig, build_registry
from modelframe.core import BackgroundTasks
from modelframe.logging_utils import setup_logger
from modelframe.utils import load_html, make_json_safe


def test_build_registry_wires_commands_and_pending_file():
    registry = build_registry(["readme.txt", "part.3mf"])
    assert registry.names() == ["consume_pending_file", "greet", "read_file_bytes"]
    assert registry.state(PendingFile).take() == "part.3mf"


def test_build_registry_without_model_argument():
    assert build_registry(["--dev"]).state(PendingFile).take() is None


def test_shell_config_defaults_and_validation():
    config = ShellConfig()
    assert (config.host, config.port, config.html_path) == ("127.0.0.1", 9000, None)
    with pytest.raises(ValidationError):
        ShellConfig(port=0)
    with pytest.raises(ValidationError):
        ShellConfig(webframe_close_timeout=0)


def test_make_json_safe():
    assert make_json_safe(b"\x00\xff") == [0, 255]
    assert make_json_safe(bytearray(b"ab")) == [97, 98]
    assert make_json_safe(Path("a/b.stl")) == str(Path("a/b.stl"))
    assert make_json_safe({1: (b"x", None)}) == {"1": [[120], None]}


def test_load_html(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "index.html").write_text("<h1>viewer</h1>", encoding="utf-8")
    assert load_html("index.html") == "<h1>viewer</h1>"
    assert "not found" in load_html("missing.html")
    assert "not found" in load_html(None)


def test_setup_logger_does_not_duplicate_handlers():
    logger = setup_logger("modelframe.test", "debug")
    setup_logger("modelframe.test", "warning")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


@pytest.mark.asyncio
async def test_background_tasks_shutdown():
    tasks = BackgroundTasks()
    started = asyncio.Event()

    async def forever():
        started.set()
        await asyncio.Future()

    task = tasks.start(forever())
    await started.wait()
    assert len(tasks) == 1

    await tasks.shutdown()
    assert task.cancelled()
    assert len(tasks) == 0


def test_shell_config_log_level():
    assert ShellConfig(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        ShellConfig(log_level="verbose")


def test_main_logs_interrupt(monkeypatch, caplog):
    from modelframe import __main__ as entry

    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(entry, "launch", interrupted)
    caplog.set_level(logging.INFO, logger="modelframe")
    entry.main()
    assert "Runtime stopped." in caplog.text
