"""CLI commands for global configuration management."""

import typer

from tracer import global_config
from tracer.config import API_KEY_ENV_VARS, AnalysisModel, ViewMode, parse_model
from tracer.global_config import GlobalConfigError

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global tracer configuration in ~/.tracer/",
    add_completion=False,
)

_VALID_MODELS = ", ".join(m.value for m in AnalysisModel)


def _mask(api_key: str) -> str:
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        config = global_config.load_global_config()

        typer.echo("Current tracer configuration (~/.tracer/config.yaml):")
        typer.echo()
        typer.echo(f"  Model: {global_config.get_preferred_model().value}")
        typer.echo(f"  View: {global_config.get_view_mode().value}")
        typer.echo(f"  Max File Lines: {global_config.get_max_file_lines()}")

        patterns = global_config.get_ignore_patterns()
        if patterns:
            typer.echo()
            typer.echo("  Ignore Patterns:")
            for pattern in patterns:
                typer.echo(f"    - {pattern}")

        typer.echo()
        for env_var in API_KEY_ENV_VARS.values():
            api_key = global_config.get_credential(env_var)
            shown = _mask(api_key) if api_key else "not set"
            typer.echo(f"  API Key ({env_var}): {shown}")

        if not config:
            typer.echo()
            typer.echo("No configuration file found; defaults are in use.")

    except GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("set-model")
def config_set_model(
    model: str = typer.Argument(..., help=f"Analysis model ({_VALID_MODELS})"),
) -> None:
    """Set the preferred analysis model for intelligent mode."""
    try:
        selected = parse_model(model)
    except ValueError:
        typer.echo(f"Invalid model: {model}", err=True)
        typer.echo(f"Valid models: {_VALID_MODELS}")
        raise typer.Exit(1)

    try:
        global_config.set_preferred_model(selected)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Model set to: {selected.value}")


@config_app.command("set-view")
def config_set_view(
    view: str = typer.Argument(..., help="View mode (split, unified)"),
) -> None:
    """Set the default view mode."""
    try:
        selected = ViewMode(view.strip().lower())
    except ValueError:
        typer.echo(f"Invalid view: {view}", err=True)
        typer.echo("Valid views: split, unified")
        raise typer.Exit(1)

    try:
        global_config.set_view_mode(selected)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ View set to: {selected.value}")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(..., help="Provider name (anthropic, openai)"),
) -> None:
    """Set or update an API key for an API backend."""
    try:
        model = parse_model(provider)
        env_var = API_KEY_ENV_VARS[model]
    except (ValueError, KeyError):
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo("Valid providers: anthropic, openai")
        raise typer.Exit(1)

    typer.echo(f"Setting API key for {model.value}")
    api_key = typer.prompt(f"Enter your {model.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key)
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {model.value}")
