"""Shared test fixtures for natayark.

Provides a scripted Natayark ID (:class:`FakeProvider`) served through
:class:`httpx.MockTransport`, settings pointing at it, an
:class:`~natayark.client.ApiClient` wired to that transport, and isolation
of the XDG directories and global output state.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import httpx
import pytest

from natayark.client import ApiClient
from natayark.models import Endpoints, Settings
from natayark.output import OutputManager, reset_output, set_output


class FakeProvider:
    """Scripted identity provider keyed by request path.

    Every request is recorded in :attr:`requests`. Unscripted paths answer
    404 so that a test fails loudly if the flow calls something unexpected.
    Endpoint paths and URLs are class attributes, reachable from tests
    through the ``provider`` fixture.
    """

    OAUTH2_PATH = "/api/public/login"
    AUTHORIZE_PATH = "/api/oauth2/authorize"
    CALLBACK_PATH = "/oauth2/callback"

    OAUTH2_URL = f"https://id.example.test{OAUTH2_PATH}"
    OAUTH2_CALLBACK_URL = f"https://id.example.test{AUTHORIZE_PATH}?client_id=test"
    LOGIN_CALLBACK_URL = f"https://api.example.test{CALLBACK_PATH}?code="

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, tuple[int, list[tuple[str, Union[str, bytes]]], bytes]] = {}

    def reply(
        self,
        path: str,
        body: Any,
        *,
        cookies: Iterable[Union[str, bytes]] = (),
        headers: Optional[dict[str, str]] = None,
        status_code: int = 200,
    ) -> None:
        """Script the response for *path*.

        Cookies given as ``bytes`` go out as raw header bytes, so a test can
        hand the client non-ASCII ``Set-Cookie`` values.
        """
        if isinstance(body, bytes):
            content = body
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = json.dumps(body).encode("utf-8")
        header_list: list[tuple[str, Union[str, bytes]]] = [("content-type", "application/json")]
        header_list += [("set-cookie", c) for c in cookies]
        header_list += list((headers or {}).items())
        self._routes[path] = (status_code, header_list, content)

    def accept_login(
        self,
        *,
        code: str = "xyz",
        authorization: str = "Bearer tok-123",
        session: str = "session-42",
    ) -> None:
        """Script all three endpoints to accept the login."""
        self.reply(
            self.OAUTH2_PATH,
            {"flag": True, "msg": "登录成功", "data": {"user": "alice"}},
            cookies=["sid=abc123; Path=/; HttpOnly"],
        )
        self.reply(
            self.AUTHORIZE_PATH,
            {"flag": True, "msg": "OK", "data": {"code": code}},
            cookies=["oauth_state=s1; Path=/"],
        )
        self.reply(
            self.CALLBACK_PATH,
            {"flag": True, "msg": "OK", "data": session, "code": 200},
            headers={"Authorization": authorization},
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"flag": False, "msg": "no such route"})
        status_code, headers, content = route
        return httpx.Response(status_code, headers=headers, content=content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def request_to(self, path: str) -> httpx.Request:
        for request in self.requests:
            if request.url.path == path:
                return request
        raise AssertionError(f"No request was sent to {path}; sent: {self.paths}")


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _quiet_output():
    """Install a quiet, colourless OutputManager for every test."""
    set_output(OutputManager(no_color=True, quiet=True))
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Provider / client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return Settings(
        endpoints=Endpoints(
            oauth2_url=FakeProvider.OAUTH2_URL,
            oauth2_callback_url=FakeProvider.OAUTH2_CALLBACK_URL,
            login_callback_url=FakeProvider.LOGIN_CALLBACK_URL,
        )
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def api_client(provider: FakeProvider, settings: Settings):
    """An ApiClient whose transport is the fake provider."""
    http_client = httpx.AsyncClient(transport=provider.transport())
    yield ApiClient(settings, http_client=http_client)
    asyncio.run(http_client.aclose())


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the XDG directories at tmp_path and clear NATAYARK_* variables."""
    monkeypatch.setattr("natayark.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "NATAYARK_OAUTH2_URL",
        "NATAYARK_OAUTH2_CALLBACK_URL",
        "NATAYARK_LOGIN_CALLBACK_URL",
        "NATAYARK_TIMEOUT",
        "NATAYARK_USER",
    ]:
        monkeypatch.delenv(var, raising=False)
    return tmp_path
