"""Envelope decoding -- maps a Natayark ID response body to :class:`LoginEnvelope`.

Every login endpoint answers with the same JSON shape::

    {"flag": true, "msg": "OK", "data": ..., "code": 200}

:func:`decode_envelope` validates that shape and turns ``flag: false``
into a :class:`~natayark.exceptions.ProviderError`. What ``data`` holds is
left to each login step.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from natayark.exceptions import DecodeError, ProviderError
from natayark.models import LoginEnvelope

UNKNOWN_PROVIDER_CODE = -1


def decode_envelope(body: bytes) -> LoginEnvelope:
    """Parse and check a login response body.

    Args:
        body: Raw response bytes.

    Returns:
        The envelope, guaranteed to have ``flag`` set.

    Raises:
        DecodeError: If *body* is not a JSON object with ``flag`` and ``msg``.
        ProviderError: If ``flag`` is false. ``code`` defaults to ``-1``.
    """
    try:
        envelope = LoginEnvelope.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected login response: {_excerpt(body)}") from exc

    if not envelope.flag:
        code = envelope.code if envelope.code is not None else UNKNOWN_PROVIDER_CODE
        raise ProviderError(code, envelope.msg)
    return envelope


def read_envelope(response: httpx.Response) -> LoginEnvelope:
    """Decode the envelope carried by *response*."""
    return decode_envelope(response.content)


def _excerpt(body: bytes, limit: int = 200) -> str:
    text = body.decode("utf-8", errors="replace")
    if not text:
        return "<empty body>"
    return text[:limit]
