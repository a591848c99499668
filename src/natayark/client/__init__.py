"""HTTP client module for natayark.

:class:`ApiClient` wraps :class:`httpx.AsyncClient` and owns the state the
login steps share: the :class:`~natayark.cookies.CookieJar` replayed on
every request and the :class:`~natayark.models.AuthState` written by the
final step. :mod:`natayark.client.response` decodes the provider's
``{flag, msg, data, code}`` envelope.

Example::

    from natayark.client import ApiClient

    async with ApiClient() as client:
        response = await client.post(url)
"""

from natayark.client.async_client import ApiClient
from natayark.client.response import decode_envelope, read_envelope

__all__ = ["ApiClient", "decode_envelope", "read_envelope"]
