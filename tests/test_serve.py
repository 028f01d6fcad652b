"""Tests for the service runner."""

import pytest

from cli import serve


@pytest.fixture
def uvicorn_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(
        serve.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )
    return calls


@pytest.mark.parametrize(
    ("role", "app", "port"),
    [("provider", "app.main:app", 8081), ("gateway", "app.gateway:app", 8080)],
)
def test_default_ports(uvicorn_calls, role, app, port):
    serve.main([role])

    assert uvicorn_calls == [
        (app, {"host": "127.0.0.1", "port": port, "reload": False, "log_config": None})
    ]


def test_explicit_port_and_host(uvicorn_calls):
    serve.main(["gateway", "--host", "0.0.0.0", "-p", "9000", "--reload"])  # noqa: S104

    app, kwargs = uvicorn_calls[0]
    assert app == "app.gateway:app"
    assert kwargs["host"] == "0.0.0.0"  # noqa: S104
    assert kwargs["port"] == 9000
    assert kwargs["reload"] is True


def test_unknown_role_exits():
    with pytest.raises(SystemExit):
        serve.main(["database"])
