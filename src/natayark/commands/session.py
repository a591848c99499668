"""Session commands -- log in to Natayark ID and manage the saved session.

Typical workflow::

    natayark login --user alice --password-source env:NATAYARK_PASSWORD
    natayark status
    natayark logout
"""

from __future__ import annotations

import asyncio

import typer

from natayark.client import ApiClient
from natayark.exceptions import NatayarkError
from natayark.login import login
from natayark.models import Account, Settings
from natayark.output import error, info, print_record, success, suggest
from natayark.session_store import DEFAULT_SESSION_NAME, SessionStore, StoredSession


def mask_token(value: str) -> str:
    """Hide the middle of a credential for display."""
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


async def _run_login(account: Account, settings: Settings) -> StoredSession:
    async with ApiClient(settings) as client:
        auth = await login(account, client)
        return StoredSession(user=account.user, auth=auth, cookies=client.cookies.as_dict())


def _open_store(name: str) -> SessionStore:
    try:
        return SessionStore(name)
    except NatayarkError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _session_view(entry: StoredSession, show_token: bool) -> dict[str, str]:
    authorization = entry.auth.authorization
    return {
        "user": entry.user,
        "authorization": authorization if show_token else mask_token(authorization),
        "session": entry.auth.session,
        "saved_at": entry.saved_at.isoformat(),
    }


def login_command(
    user: str = typer.Option(
        ..., "--user", "-u", envvar="NATAYARK_USER", help="Natayark ID username or e-mail."
    ),
    password_source: str = typer.Option(
        "prompt",
        "--password-source",
        "-s",
        help="Password source: env:VAR, file:/path, prompt.",
    ),
    save: bool = typer.Option(
        True, "--save/--no-save", help="Save the session for later commands."
    ),
    name: str = typer.Option(
        DEFAULT_SESSION_NAME, "--name", help="Name of the saved session."
    ),
    show_token: bool = typer.Option(
        False, "--show-token", help="Print the full Authorization value."
    ),
) -> None:
    """Log in to Natayark ID and print the resulting session.

    Example::

        natayark login -u alice -s env:NATAYARK_PASSWORD
        natayark --json login -u alice -s file:~/.natayark-pass --show-token
    """
    from natayark.config import load_settings, resolve_credential

    store = _open_store(name) if save else None
    try:
        settings = load_settings()
        account = Account(user=user, password=resolve_credential(password_source))
        info(f"Logging in to Natayark ID as {user}...")
        entry = asyncio.run(_run_login(account, settings))
    except NatayarkError as exc:
        error(f"Login failed: {exc}")
        raise typer.Exit(code=exc.exit_code) from None

    if store is not None:
        store.save(entry)
        info(f"Session saved to {store.path}")
    success(f"Logged in as {user}.")
    print_record(_session_view(entry, show_token))


def status_command(
    name: str = typer.Option(
        DEFAULT_SESSION_NAME, "--name", help="Name of the saved session."
    ),
    show_token: bool = typer.Option(
        False, "--show-token", help="Print the full Authorization value."
    ),
) -> None:
    """Show the saved session."""
    entry = _open_store(name).load()
    if entry is None:
        error(f'No saved session "{name}".')
        suggest("Log in first: natayark login --user <name>")
        raise typer.Exit(code=1)
    print_record(_session_view(entry, show_token))


def logout_command(
    name: str = typer.Option(
        DEFAULT_SESSION_NAME, "--name", help="Name of the saved session."
    ),
) -> None:
    """Delete the saved session.

    Only the local copy is removed; Natayark ID is not contacted.
    """
    if _open_store(name).clear():
        success(f'Session "{name}" removed.')
    else:
        info(f'No saved session "{name}".')
