"""Cookie accumulation across the login steps.

Natayark ID hands its session over in ``Set-Cookie`` headers, and every
later step must replay all of them in a single ``Cookie`` request header.
:class:`CookieJar` keeps the latest value per cookie name and renders the
header deterministically (first-insertion order).

Attributes such as ``Path``, ``Domain`` or ``Expires`` are ignored; the jar
lives only for the duration of one :class:`~natayark.client.ApiClient`.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from natayark.exceptions import HeaderParseError


class CookieJar:
    """Mapping of cookie name to latest value.

    Example::

        jar = CookieJar()
        jar.add("sid=abc123; Path=/; HttpOnly")
        jar.add("lang=zh")
        jar.render()  # "sid=abc123; lang=zh"
    """

    def __init__(self, cookies: dict[str, str] | None = None) -> None:
        self._cookies: dict[str, str] = dict(cookies or {})

    def add(self, raw_set_cookie: str) -> None:
        """Merge one ``Set-Cookie`` header value into the jar.

        Only the leading ``name=value`` pair is kept. An existing cookie
        with the same name is overwritten in place.

        Args:
            raw_set_cookie: The raw header value.

        Raises:
            HeaderParseError: If the leading pair has no ``=`` or an empty
                name. Non-ASCII pairs are rejected too, since they cannot be
                replayed in a ``Cookie`` request header.
        """
        pair = raw_set_cookie.split(";", 1)[0]
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep or not name or not pair.isascii():
            raise HeaderParseError(f"Malformed Set-Cookie header: {raw_set_cookie!r}")
        self._cookies[name] = value.strip()

    def update(self, raw_values: Iterable[str]) -> int:
        """Merge several ``Set-Cookie`` values and return how many were merged."""
        count = 0
        for raw in raw_values:
            self.add(raw)
            count += 1
        return count

    def get(self, name: str) -> str | None:
        return self._cookies.get(name)

    def render(self) -> str:
        """Return the jar as a ``Cookie`` request header value (``""`` when empty)."""
        return "; ".join(f"{k}={v}" for k, v in self._cookies.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._cookies)

    def __str__(self) -> str:
        return self.render()

    def __len__(self) -> int:
        return len(self._cookies)

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookies)

    def __repr__(self) -> str:
        return f"CookieJar({sorted(self._cookies)!r})"
