"""Persistent storage for completed Natayark ID logins.

Stores sessions in ``~/.local/share/natayark/sessions/<name>.json`` (XDG)
or the platform-equivalent directory. Files are written atomically with
``0o600`` permissions so that tokens are never world-readable, even
momentarily.

Each file holds one :class:`StoredSession`: the
:class:`~natayark.models.AuthState` from the final login step plus the
cookies the provider set along the way.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from natayark.config import atomic_write, get_data_dir
from natayark.exceptions import InvalidUsageError
from natayark.models import AuthState

DEFAULT_SESSION_NAME = "default"

# Names become file names under sessions/, so no separators or leading dot.
_SESSION_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


class StoredSession(BaseModel):
    """A saved login.

    Attributes:
        user: Account identifier the session belongs to.
        auth: Authorization header value and session id.
        cookies: Cookie jar contents at the end of the login.
        saved_at: UTC time the session was written.
    """

    user: str
    auth: AuthState
    cookies: dict[str, str] = Field(default_factory=dict)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def _sessions_dir() -> Path:
    path = get_data_dir() / "sessions"
    path.mkdir(parents=True, exist_ok=True)
    return path


class SessionStore:
    """Read/write one named session file.

    Raises:
        InvalidUsageError: If *name* is not a plain file name.

    Example::

        store = SessionStore("default")
        store.save(StoredSession(user="alice", auth=client.auth))
        store.load().auth.session
    """

    def __init__(self, name: str = DEFAULT_SESSION_NAME) -> None:
        if not _SESSION_NAME_RE.fullmatch(name):
            raise InvalidUsageError(
                f"Invalid session name {name!r}: use letters, digits, '.', '_' or '-'"
            )
        self._name = name
        self._path = _sessions_dir() / f"{name}.json"

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        """The filesystem path of this session file."""
        return self._path

    def save(self, entry: StoredSession) -> None:
        """Persist *entry* atomically with ``0o600`` permissions."""
        text = json.dumps(entry.model_dump(mode="json"), indent=2) + "\n"
        atomic_write(self._path, text, mode=0o600)

    def load(self) -> Optional[StoredSession]:
        """Load the saved session, or ``None`` if absent or unreadable."""
        if not self._path.is_file():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return StoredSession.model_validate(data)
        except (json.JSONDecodeError, ValueError, OSError):
            return None

    def clear(self) -> bool:
        """Delete the session file. Returns whether a file was removed."""
        if self._path.is_file():
            self._path.unlink()
            return True
        return False
