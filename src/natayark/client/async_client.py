"""Asynchronous HTTP client shared by the login steps.

This module provides :class:`ApiClient`, a thin wrapper around
:class:`httpx.AsyncClient` that threads the provider's session through
consecutive calls:

1. every request carries ``Content-Type: application/json`` and a
   ``Cookie`` header rendered from the client's :class:`CookieJar`;
2. every ``Set-Cookie`` header of every response is merged back into the
   jar before the response is handed to the caller;
3. network failures surface as :class:`~natayark.exceptions.TransportError`.

No retries are attempted; the timeout configured in
:class:`~natayark.models.RequestConfig` is enforced by httpx.
"""

from __future__ import annotations

from typing import Optional

import httpx

from natayark.cookies import CookieJar
from natayark.exceptions import TransportError
from natayark.models import AuthState, Settings
from natayark.output import debug


class ApiClient:
    """Stateful async client for the Natayark ID login endpoints.

    Owns the transport, the cookie jar and the auth state. Login steps
    mutate the instance in place, so one ``ApiClient`` should drive one
    login at a time.

    Args:
        settings: Endpoint URLs and transport options. Defaults to the
            built-in :class:`~natayark.models.Settings`.
        http_client: An existing :class:`httpx.AsyncClient` to send
            requests with. When given, the caller keeps ownership and it is
            not closed on exit.

    Example::

        async with ApiClient(settings) as client:
            await login(account, client)
            print(client.auth.authorization)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.cookies = CookieJar()
        self.auth = AuthState()
        self._client = http_client
        self._owns_client = http_client is None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> ApiClient:
        if self._client is None:
            config = self.settings.request
            headers = {"User-Agent": config.user_agent} if config.user_agent else None
            self._client = httpx.AsyncClient(
                timeout=config.timeout,
                verify=config.verify_ssl,
                headers=headers,
            )
            self._owns_client = True
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def build_headers(self) -> dict[str, str]:
        """Headers sent with every login request."""
        return {
            "Content-Type": "application/json",
            "Cookie": self.cookies.render(),
        }

    async def request(
        self,
        method: str,
        url: str,
        content: Optional[bytes] = None,
    ) -> httpx.Response:
        """Send a request and merge the response's cookies into the jar.

        Args:
            method: HTTP method.
            url: Absolute URL.
            content: Raw request body. ``None`` sends an empty body.

        Returns:
            The :class:`httpx.Response`, whatever its status code; the
            envelope decides success.

        Raises:
            TransportError: On connection, timeout or protocol errors.
            HeaderParseError: If a ``Set-Cookie`` value is malformed.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        debug(f"{method} {url} (cookies: {len(self.cookies)})")
        try:
            response = await self._client.request(
                method,
                url,
                headers=self.build_headers(),
                content=content if content is not None else b"",
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        merged = self.cookies.update(response.headers.get_list("set-cookie"))
        debug(f"HTTP {response.status_code} from {url}, merged {merged} cookie(s)")
        return response

    async def post(self, url: str, content: Optional[bytes] = None) -> httpx.Response:
        return await self.request("POST", url, content=content)

    async def get(self, url: str) -> httpx.Response:
        return await self.request("GET", url)
