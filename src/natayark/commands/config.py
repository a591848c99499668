"""Config commands -- view and modify the login settings.

Provides the ``natayark config`` sub-command group for reading, updating
and resetting :class:`~natayark.models.Settings` (endpoint URLs and
transport options) stored in the natayark config directory.
"""

from __future__ import annotations

import typer

from natayark.output import error, info, print_record, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective settings, environment overrides included.

    Example::

        natayark config show
        natayark --json config show
    """
    from natayark.config import load_settings, settings_path
    from natayark.exceptions import ConfigError

    try:
        settings = load_settings()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config file: {settings_path()}")
    print_record(settings.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Settings key in dot notation, e.g. 'endpoints.oauth2_url'."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the existing field's type and the result is
    validated against :class:`~natayark.models.Settings` before saving.

    Example::

        natayark config set request.timeout 10
        natayark config set endpoints.login_callback_url "https://example.com/cb?code="
    """
    from natayark.config import load_settings, save_settings
    from natayark.exceptions import ConfigError
    from natayark.models import Settings

    try:
        settings = load_settings(apply_env=False)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    data = settings.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    current = target[final_key]
    coerced: object
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, (int, float)):
        try:
            coerced = float(value)
        except ValueError:
            error(f"Expected a number for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    else:
        coerced = value

    target[final_key] = coerced

    try:
        new_settings = Settings.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_settings(new_settings)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset settings to the built-in Natayark ID defaults."""
    from natayark.config import save_settings
    from natayark.models import Settings

    if not force:
        confirmed = typer.confirm("Reset all settings to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_settings(Settings())
    success("Settings reset to defaults.")
