"""Tests for the ``autotyper-server`` entry point; uvicorn is never started."""

import pytest
from starlette.applications import Starlette

from autotyper.http import runner


@pytest.fixture
def uvicorn_calls(monkeypatch):
    """Record uvicorn.run() calls instead of serving."""
    calls = []

    def fake_run(app, **kwargs):
        calls.append((app, kwargs))

    monkeypatch.setattr(runner.uvicorn, "run", fake_run)
    return calls


def test_run_http_defaults(uvicorn_calls) -> None:
    runner.run_http()
    app, kwargs = uvicorn_calls[0]
    assert isinstance(app, Starlette)
    assert kwargs == {"host": "127.0.0.1", "port": 3000, "log_level": "info"}


def test_main_parses_arguments(uvicorn_calls) -> None:
    runner.main(["--host", "0.0.0.0", "--port", "8080", "--log-level", "warning"])
    _, kwargs = uvicorn_calls[0]
    assert kwargs == {"host": "0.0.0.0", "port": 8080, "log_level": "warning"}


def test_main_rejects_bad_port(uvicorn_calls) -> None:
    with pytest.raises(SystemExit):
        runner.main(["--port", "http"])
    assert uvicorn_calls == []
