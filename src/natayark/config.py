"""Configuration management with XDG paths, atomic writes, and env overrides.

This module handles all persistent configuration for natayark:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.natayark/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Settings** -- A single :class:`~natayark.models.Settings` JSON file
  holding the login endpoints and transport options, overridable per
  process through ``NATAYARK_*`` environment variables.
* **Credential resolution** -- :func:`resolve_credential` reads the
  account password from an env var, a file, or an interactive prompt.

Precedence (highest first): environment variables, config file, built-in
defaults.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from natayark.exceptions import ConfigError
from natayark.models import Settings

_APP_NAME = "natayark"
_CONFIG_FILENAME = "config.json"

ENV_OAUTH2_URL = "NATAYARK_OAUTH2_URL"
ENV_OAUTH2_CALLBACK_URL = "NATAYARK_OAUTH2_CALLBACK_URL"
ENV_LOGIN_CALLBACK_URL = "NATAYARK_LOGIN_CALLBACK_URL"
ENV_TIMEOUT = "NATAYARK_TIMEOUT"

_ENDPOINT_ENV_VARS = {
    ENV_OAUTH2_URL: "oauth2_url",
    ENV_OAUTH2_CALLBACK_URL: "oauth2_callback_url",
    ENV_LOGIN_CALLBACK_URL: "login_callback_url",
}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/natayark/`` (default ``~/.config/natayark/``).
    On macOS/Windows: ``~/.natayark/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (saved sessions, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/natayark/`` (default ``~/.local/share/natayark/``).
    On macOS/Windows: ``~/.natayark/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write *data* to *path* atomically using a temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX. When *mode* is given the
    permissions are applied before any content is written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Settings ---


def settings_path() -> Path:
    """Path to the settings file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_settings(path: Optional[Path] = None, *, apply_env: bool = True) -> Settings:
    """Load settings from disk and apply ``NATAYARK_*`` environment overrides.

    Args:
        path: Settings file to read. Defaults to :func:`settings_path`.
        apply_env: Apply ``NATAYARK_*`` overrides. Disable to get the file
            contents alone, e.g. before editing and saving them back.

    Returns:
        The effective :class:`~natayark.models.Settings`. A missing file
        yields the built-in defaults.

    Raises:
        ConfigError: If the file contains invalid JSON, fails validation,
            or an environment override is malformed.
    """
    path = path or settings_path()
    settings = Settings()
    if path.is_file():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            settings = Settings.model_validate(data)
        except (json.JSONDecodeError, ValueError) as exc:
            raise ConfigError(f"Invalid settings at {path}: {exc}") from exc

    return _apply_env_overrides(settings) if apply_env else settings


def _apply_env_overrides(settings: Settings) -> Settings:
    endpoint_updates = {
        field: os.environ[var]
        for var, field in _ENDPOINT_ENV_VARS.items()
        if os.environ.get(var)
    }
    request_updates: dict[str, float] = {}
    timeout = os.environ.get(ENV_TIMEOUT)
    if timeout:
        try:
            request_updates["timeout"] = float(timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number of seconds, got {timeout!r}"
            ) from exc

    if not endpoint_updates and not request_updates:
        return settings
    try:
        return Settings.model_validate(
            {
                "endpoints": {**settings.endpoints.model_dump(), **endpoint_updates},
                "request": {**settings.request.model_dump(), **request_updates},
            }
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid environment override: {exc}") from exc


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist *settings* atomically and return the file path."""
    path = path or settings_path()
    atomic_write(path, json.dumps(settings.model_dump(mode="json"), indent=2) + "\n")
    return path


# --- Credential resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Natayark ID password: ")

    raise ConfigError(f"Unknown credential source format: {source}")
