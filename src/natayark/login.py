"""Natayark ID login flow.

Logging in takes three dependent calls, each reusing the cookies gathered
by the previous ones:

1. :func:`login_oauth2` -- submit the :class:`~natayark.models.Account` to
   the OAuth2 login endpoint; the provider answers with session cookies.
2. :func:`oauth2_callback` -- trade that session for an authorization code
   (``data.code``).
3. :func:`login_by_code` -- redeem the code; the response carries the
   ``Authorization`` header and the session id (``data``).

:func:`login` runs the three in order and stops at the first error, which
propagates unchanged. The client's :class:`~natayark.models.AuthState` is
only replaced once step 3 has fully succeeded.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from pydantic import ValidationError

from natayark.client import ApiClient, read_envelope
from natayark.exceptions import DecodeError
from natayark.models import Account, AuthState, CallbackData, LoginEnvelope, Settings
from natayark.output import debug


async def login_oauth2(account: Account, client: ApiClient) -> LoginEnvelope:
    """Submit *account* to the Natayark ID OAuth2 login endpoint.

    Returns:
        The successful envelope, passed on to :func:`oauth2_callback`.

    Raises:
        ProviderError: If the credentials are rejected.
        DecodeError: If the response is not a login envelope.
        TransportError: On network failure.
    """
    debug(f"Signing in to Natayark ID as {account.user}")
    response = await client.post(
        client.settings.endpoints.oauth2_url,
        content=account.model_dump_json().encode("utf-8"),
    )
    return read_envelope(response)


async def oauth2_callback(login_result: LoginEnvelope, client: ApiClient) -> str:
    """Exchange the signed-in session for an authorization code.

    Args:
        login_result: Envelope returned by :func:`login_oauth2`.
        client: The client holding the session cookies.

    Returns:
        The authorization code from ``data.code``.

    Raises:
        DecodeError: If ``data`` is not an object with a string ``code``.
    """
    debug(f"OAuth2 login accepted: {login_result.msg}")
    response = await client.post(client.settings.endpoints.oauth2_callback_url)
    envelope = read_envelope(response)

    if not isinstance(envelope.data, dict):
        raise DecodeError(
            f"OAuth2 callback returned no authorization code (data: {envelope.data!r})"
        )
    try:
        callback = CallbackData.model_validate(envelope.data)
    except ValidationError as exc:
        raise DecodeError(
            f"OAuth2 callback returned a malformed authorization code (data: {envelope.data!r})"
        ) from exc
    return callback.code


async def login_by_code(code: str, client: ApiClient) -> AuthState:
    """Redeem *code* and store the resulting credentials on *client*.

    The code is appended verbatim to the login callback URL.

    Returns:
        The new :class:`~natayark.models.AuthState`, also assigned to
        ``client.auth``.

    Raises:
        DecodeError: If the ``Authorization`` header is missing or ``data``
            is not a string session id.
    """
    url = f"{client.settings.endpoints.login_callback_url}{code}"
    response = await client.post(url)
    envelope = read_envelope(response)

    authorization = response.headers.get("authorization")
    if authorization is None:
        raise DecodeError("Login callback response has no Authorization header")
    if not isinstance(envelope.data, str):
        raise DecodeError(
            f"Login callback returned no session id (data: {envelope.data!r})"
        )

    auth = AuthState(authorization=authorization, session=envelope.data)
    client.auth = auth
    return auth


async def login(account: Account, client: ApiClient) -> AuthState:
    """Run the full three-step login against Natayark ID.

    Raises:
        ProviderError: If any step answers ``flag: false``.
        DecodeError: If any response has an unexpected shape.
        HeaderParseError: If a ``Set-Cookie`` value is malformed.
        TransportError: On network failure.
    """
    login_result = await login_oauth2(account, client)
    code = await oauth2_callback(login_result, client)
    auth = await login_by_code(code, client)
    debug("Natayark ID login complete")
    return auth


def login_sync(account: Account, settings: Optional[Settings] = None) -> AuthState:
    """Blocking wrapper around :func:`login` using a fresh :class:`ApiClient`."""

    async def _run() -> AuthState:
        async with ApiClient(settings) as client:
            return await login(account, client)

    return asyncio.run(_run())
