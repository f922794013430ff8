import uvicorn

from eventhub.__main__ import _parse_args, main
from eventhub.config import settings


def test_defaults_come_from_settings() -> None:
    args = _parse_args([])
    assert args.host == settings.HOST
    assert args.port == settings.PORT
    assert args.reload is False


def test_host_and_port_options() -> None:
    args = _parse_args(["--host", "0.0.0.0", "--port", "8080"])
    assert args.host == "0.0.0.0"
    assert args.port == 8080


def test_main_serves_the_app_with_uvicorn(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    main(["--port", "9000"])

    assert len(calls) == 1
    app, kwargs = calls[0]
    assert app == "eventhub.main:app"
    assert kwargs["host"] == settings.HOST
    assert kwargs["port"] == 9000
    assert kwargs["log_level"] == settings.LOG_LEVEL.lower()
