"""Shared test fixtures and configuration for accelsend tests."""

import os
from collections.abc import Awaitable, Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request
from starlette.responses import FileResponse, PlainTextResponse, Response

from accelsend.api.app import create_app
from accelsend.config.settings import Settings
from accelsend.core.logging import setup_logging


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom settings."""
    # Reuse the application logging pipeline so structlog behaves as in production
    setup_logging(json_logs=False, log_level_name="DEBUG", configure_uvicorn=False)


def _make_request(headers: dict[str, str] | None = None) -> Request:
    """Build a bare GET request carrying ``headers``."""
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "raw_path": b"/",
            "query_string": b"",
            "headers": raw_headers,
        }
    )


def _handler_returning(
    response: Response,
) -> Callable[[Request], Awaitable[Response]]:
    """Inner handler that always returns ``response``."""

    async def handler(request: Request) -> Response:
        return response

    return handler


@pytest.fixture
def sendfile_response() -> FileResponse:
    """File-backed response for /tmp/hello.txt; the file need not exist."""
    return FileResponse(
        "/tmp/hello.txt", media_type="text/plain", headers={"X-Custom": "kept"}
    )


@pytest.fixture
def plain_response() -> PlainTextResponse:
    return PlainTextResponse("Not a file...")


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    """Directory with one file to serve."""
    root = tmp_path / "files"
    root.mkdir()
    (root / "hello.txt").write_text("Hello World", encoding="utf-8")
    return root.resolve()


@pytest.fixture
def app_factory(files_root: Path) -> Callable[..., FastAPI]:
    """Create the application serving ``files_root`` with sendfile overrides."""

    def _create(**sendfile: object) -> FastAPI:
        settings = Settings.from_config(
            config_path=None,
            files={"root": files_root},
            sendfile=sendfile,
        )
        return create_app(settings)

    return _create


@pytest.fixture
def client(app_factory: Callable[..., FastAPI]) -> TestClient:
    return TestClient(app_factory())


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return _make_request


@pytest.fixture
def handler_returning() -> Callable[[Response], Callable[[Request], Awaitable[Response]]]:
    return _handler_returning


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user configuration files and variables out of the tests."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    for key in list(os.environ):
        if key.upper().startswith(("SERVER__", "LOGGING__", "SENDFILE__", "FILES__")):
            monkeypatch.delenv(key, raising=False)
