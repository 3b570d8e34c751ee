"""
tests.test_demo

Command-line demo scenarios.
"""

from __future__ import annotations

import json

import pytest

from customer_analytics import demo
from customer_analytics.settings import Settings


@pytest.fixture(autouse=True)
def _quiet_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = Settings(env="test", satisfaction_latency_ms=0, support_latency_ms=0)
    monkeypatch.setattr(demo, "get_settings", lambda: settings)
    monkeypatch.setattr(demo, "configure_logging", lambda **_: None)


def _lines(capsys: pytest.CaptureFixture[str]) -> list[dict]:
    # Log events may share stdout; scenario rows are the JSON objects with a "scenario" key.
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
    return [row for row in rows if "scenario" in row]


def test_single_token_scenario_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert demo.main(["--token", "api_key_readonly_789", "--json", "--limit", "50"]) == 0

    (line,) = _lines(capsys)
    assert line["scenario"] == "Custom credential"
    assert line["status"] == "ok"
    assert len(line["accounts"]) == 10


def test_all_scenarios_report_their_outcome(capsys: pytest.CaptureFixture[str]) -> None:
    assert demo.main(["--json", "--no-reasons"]) == 0

    lines = _lines(capsys)
    assert [line["scenario"] for line in lines] == [title for title, _ in demo.SCENARIOS]
    by_title = {line["scenario"]: line for line in lines}
    assert by_title["Admin"]["status"] == "ok"
    assert len(by_title["Admin"]["accounts"]) == 20
    assert by_title["Unknown key"]["status"] == "unauthenticated"
    assert by_title["Unknown key"]["accounts"] == []


def test_invalid_parameters_exit_with_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert demo.main(["--window-days", "0"]) == 2
    assert "invalid parameters" in capsys.readouterr().err
