# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from typing import Any

import pytest

from observability import logger
from observability.metrics import timed


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    monkeypatch.setattr(logger, "_min_level", 20)
    monkeypatch.setattr(logger, "_json_lines", True)
    return lines


def test_log_event_emits_valid_jsonl(captured: list[str]) -> None:
    """
    - log_event emits exactly one JSONL line
    - payload is serialized as-is, plus ts_ms
    - output sink is patchable
    """
    payload: dict[str, Any] = {
        "event_type": "TEST",
        "value": 123,
    }

    logger.log_event(payload)

    assert len(captured) == 1
    decoded = json.loads(captured[0])
    assert isinstance(decoded.pop("ts_ms"), int)
    assert decoded == payload


def test_levels_below_minimum_are_dropped(captured: list[str]) -> None:
    logger.log_event({"event_type": "NOISE"}, level="DEBUG")
    logger.log_event({"event_type": "BAD"}, level="ERROR")

    assert len(captured) == 1
    assert json.loads(captured[0])["level"] == "ERROR"


def test_unserializable_payload_never_raises(captured: list[str]) -> None:
    logger.log_event({"event_type": "TEST", "obj": object()})

    assert json.loads(captured[0])["event_type"] == "LOGGER_SERIALIZATION_ERROR"


def test_configure_text_mode(captured: list[str]) -> None:
    logger.configure(level="warning", json_lines=False)

    logger.log_event({"event_type": "SKIPPED"})
    logger.log_event({"event_type": "KEPT", "ts_ms": 1}, level="WARNING")

    assert captured == ["event_type=KEPT ts_ms=1 level=WARNING"]


def test_timed_emits_metric_with_outcome(captured: list[str]) -> None:
    with timed("transcription", session_id="s1") as metric:
        metric["chunks"] = 20

    with pytest.raises(RuntimeError):
        with timed("tts", session_id="s1"):
            raise RuntimeError("boom")

    ok, failed = (json.loads(line) for line in captured)
    assert ok["event_type"] == "METRIC_TIMER"
    assert ok["metric"] == "transcription"
    assert ok["details"] == {"chunks": 20, "outcome": "ok"}
    assert failed["details"] == {"outcome": "RuntimeError"}
