# pylint: disable=missing-module-docstring,missing-function-docstring

import importlib
import json
import sys
from pathlib import Path

import pytest

from observability import logger


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    # create_app reconfigures these; restore them after the test
    monkeypatch.setattr(logger, "_min_level", logger._min_level)  # pylint: disable=protected-access
    monkeypatch.setattr(logger, "_json_lines", logger._json_lines)  # pylint: disable=protected-access
    return lines


def test_module_builds_app_from_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    captured: list[str],
):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("PUBLIC_DIR", str(tmp_path))
    monkeypatch.setenv("DISPATCH_THRESHOLD_CHUNKS", "7")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("ENABLE_JSON_LOGS", "1")
    monkeypatch.delitem(sys.modules, "server.asgi", raising=False)

    asgi = importlib.import_module("server.asgi")

    assert asgi.app.state.config.dispatch_threshold == 7
    assert asgi.app.state.pipeline.threshold == 7

    built = [json.loads(line) for line in captured]
    built = [e for e in built if e["event_type"] == "ASGI_APP_BUILT"]
    assert len(built) == 1
    assert built[0]["openai_key_present"] is True
    assert built[0]["public_dir"] == str(tmp_path)
    assert "sk-test" not in json.dumps(built[0])
