"""natayark -- log in to Natayark ID from Python or the command line.

Natayark ID signs users in through a three-call OAuth2-style exchange
(credentials, callback, code redemption) that threads session cookies
through every request. This package runs that exchange with
:mod:`httpx` and exposes the resulting ``Authorization`` value and session
id.

Typical usage::

    from natayark import Account, ApiClient, login

    async with ApiClient() as client:
        auth = await login(Account(user="alice", password="..."), client)

Modules:
    login: The three login steps and their composition.
    client: :class:`ApiClient` and envelope decoding.
    cookies: Cookie accumulation across steps.
    models: Pydantic models for wire data and settings.
    config: XDG-aware settings and credential resolution.
    session_store: Saved sessions on disk.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from natayark.client import ApiClient  # noqa: E402
from natayark.cookies import CookieJar  # noqa: E402
from natayark.exceptions import (  # noqa: E402
    DecodeError,
    HeaderParseError,
    NatayarkError,
    ProviderError,
    TransportError,
)
from natayark.login import (  # noqa: E402
    login,
    login_by_code,
    login_oauth2,
    login_sync,
    oauth2_callback,
)
from natayark.models import Account, AuthState, LoginEnvelope, Settings  # noqa: E402

__all__ = [
    "Account",
    "ApiClient",
    "AuthState",
    "CookieJar",
    "DecodeError",
    "HeaderParseError",
    "LoginEnvelope",
    "NatayarkError",
    "ProviderError",
    "Settings",
    "TransportError",
    "login",
    "login_by_code",
    "login_oauth2",
    "login_sync",
    "oauth2_callback",
]
