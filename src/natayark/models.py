"""Canonical Pydantic models shared across all natayark modules.

The models fall into two groups:

**Wire models** -- shapes exchanged with Natayark ID during login:
    :class:`Account`, :class:`LoginEnvelope`, :class:`CallbackData`, and the
    resulting :class:`AuthState`.

**Configuration models** -- serialised as JSON in the user's config
directory: :class:`Endpoints`, :class:`RequestConfig`, and
:class:`Settings`.

All models use Pydantic v2.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

DEFAULT_OAUTH2_URL = "https://openid.17a.ink/api/public/login"
DEFAULT_OAUTH2_CALLBACK_URL = (
    "https://openid.17a.ink/api/oauth2/authorize"
    "?response_type=code"
    "&redirect_uri=https://of-dev-api.bfsea.xyz/oauth_callback"
    "&client_id=openfrp"
)
DEFAULT_LOGIN_CALLBACK_URL = "https://of-dev-api.bfsea.xyz/oauth2/callback?code="


# --- Wire models ---


class Account(BaseModel):
    """Natayark ID credential pair submitted in the first login step.

    Serialised verbatim as the JSON request body, so the field names are
    the provider's wire names.

    Example::

        Account(user="alice@example.com", password="hunter2")
    """

    model_config = ConfigDict(frozen=True)

    user: str = Field(description="Account identifier (username or e-mail)")
    password: str = Field(description="Account secret", repr=False)


class LoginEnvelope(BaseModel):
    """The ``{flag, msg, data, code}`` object every login endpoint returns.

    ``data`` is left untyped here; each login step narrows it to the shape
    it expects. Validation is strict: ``"flag": "true"`` or ``"code": "4001"``
    are rejected rather than coerced.
    """

    model_config = ConfigDict(strict=True)

    flag: bool
    msg: str
    data: Optional[Any] = None
    code: Optional[int] = None


class CallbackData(BaseModel):
    """``data`` payload of a successful OAuth2 callback."""

    model_config = ConfigDict(extra="ignore")

    code: StrictStr


class AuthState(BaseModel):
    """Client-side credentials produced by the final login step.

    Both fields stay empty until a login completes.
    """

    authorization: str = ""
    session: str = ""

    @property
    def is_authenticated(self) -> bool:
        """Whether a completed login populated this state."""
        return bool(self.authorization)

    def headers(self) -> dict[str, str]:
        """Headers to attach to authenticated API calls."""
        if not self.authorization:
            return {}
        return {"Authorization": self.authorization}


# --- Configuration models ---


class Endpoints(BaseModel):
    """URLs of the three login endpoints.

    ``login_callback_url`` is a prefix: the authorization code is appended
    to it as-is.
    """

    oauth2_url: str = Field(default=DEFAULT_OAUTH2_URL)
    oauth2_callback_url: str = Field(default=DEFAULT_OAUTH2_CALLBACK_URL)
    login_callback_url: str = Field(default=DEFAULT_LOGIN_CALLBACK_URL)


class RequestConfig(BaseModel):
    """HTTP settings applied to the transport."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    user_agent: Optional[str] = Field(
        default=None, description="User-Agent header override"
    )


class Settings(BaseModel):
    """User-wide configuration persisted at ``~/.config/natayark/config.json``.

    Loaded by :func:`~natayark.config.load_settings`, which also applies
    ``NATAYARK_*`` environment overrides on top of the file.
    """

    endpoints: Endpoints = Field(default_factory=Endpoints)
    request: RequestConfig = Field(default_factory=RequestConfig)
