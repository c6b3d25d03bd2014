"""Main entry point for the accelsend CLI."""

import json
import os
from pathlib import Path
from typing import Annotated, Any

import typer
import uvicorn

from accelsend._version import __version__
from accelsend.api.app import create_app
from accelsend.config.settings import ConfigurationError, Settings
from accelsend.core.logging import setup_logging
from accelsend.sendfile.mappings import AccelMapping, AccelMappings

from .helpers import (
    get_rich_toolkit,
    validate_log_level,
    validate_mappings,
    validate_variation,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        toolkit = get_rich_toolkit()
        toolkit.print(f"accelsend {__version__}", tag="version")
        raise typer.Exit()


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        rich_help_panel="Configuration",
    ),
]

MappingOption = Annotated[
    list[str] | None,
    typer.Option(
        "--mapping",
        "-m",
        help="X-Accel-Redirect prefix mapping internal=external (repeatable, first match wins)",
        callback=validate_mappings,
        rich_help_panel="Sendfile",
    ),
]


@app.callback()
def app_main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """accelsend - offload file responses to X-Sendfile / X-Accel-Redirect proxies."""


def _load_settings(config: Path | None, **overrides: Any) -> Settings:
    toolkit = get_rich_toolkit()
    try:
        return Settings.from_config(config_path=config, **overrides)
    except ConfigurationError as e:
        toolkit.print(f"Configuration error: {e.message}", tag="error")
        raise typer.Exit(1) from e


def _mapping_overrides(mappings: list[AccelMapping] | None) -> dict[str, Any]:
    if not mappings:
        return {}
    return {
        "mappings": [{"internal": m.internal, "external": m.external} for m in mappings]
    }


@app.command()
def serve(
    config: ConfigOption = None,
    host: Annotated[
        str | None,
        typer.Option(
            "--host",
            "-h",
            help="Host to bind the server to",
            rich_help_panel="Server Settings",
        ),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(
            "--port",
            "-p",
            help="Port to run the server on",
            min=1,
            max=65535,
            rich_help_panel="Server Settings",
        ),
    ] = None,
    reload: Annotated[
        bool | None,
        typer.Option(
            "--reload/--no-reload",
            help="Enable auto-reload for development",
            rich_help_panel="Server Settings",
        ),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Directory served under /files/",
            exists=True,
            file_okay=False,
            dir_okay=True,
            rich_help_panel="Server Settings",
        ),
    ] = None,
    variation: Annotated[
        str | None,
        typer.Option(
            "--variation",
            help="Offload variant used when requests carry no X-Sendfile-Type header",
            callback=validate_variation,
            rich_help_panel="Sendfile",
        ),
    ] = None,
    mapping: MappingOption = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            callback=validate_log_level,
            rich_help_panel="Server Settings",
        ),
    ] = None,
) -> None:
    """Serve a directory, offloading file bodies to the front-end proxy."""
    overrides: dict[str, Any] = {}
    server_values = {"host": host, "port": port, "reload": reload}
    server_overrides = {k: v for k, v in server_values.items() if v is not None}
    if server_overrides:
        overrides["server"] = server_overrides
    if root is not None:
        overrides["files"] = {"root": root}
    sendfile_overrides = _mapping_overrides(mapping)
    if variation is not None:
        sendfile_overrides["variation"] = variation
    if sendfile_overrides:
        overrides["sendfile"] = sendfile_overrides
    if log_level is not None:
        overrides["logging"] = {"level": log_level}

    settings = _load_settings(config, **overrides)

    setup_logging(
        json_logs=settings.logging.format == "json",
        log_level_name=settings.logging.level,
        log_file=settings.logging.file,
    )

    if settings.server.reload:
        # The reloader imports the app in a fresh process; hand the
        # effective settings over through the environment
        os.environ.update(settings_to_env(settings))
        uvicorn.run(
            app="accelsend.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            reload=True,
            reload_includes=["accelsend", "pyproject.toml"],
            log_config=None,
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


def settings_to_env(settings: Settings) -> dict[str, str]:
    """Render settings as nested environment variables."""
    env = {
        "SERVER__HOST": settings.server.host,
        "SERVER__PORT": str(settings.server.port),
        "LOGGING__LEVEL": settings.logging.level,
        "LOGGING__FORMAT": settings.logging.format,
        "FILES__ROOT": str(settings.files.root),
        "SENDFILE__MAPPINGS": json.dumps(
            [mapping.model_dump() for mapping in settings.sendfile.mappings]
        ),
    }
    if settings.logging.file:
        env["LOGGING__FILE"] = settings.logging.file
    if settings.sendfile.variation is not None:
        env["SENDFILE__VARIATION"] = settings.sendfile.variation.value
    return env


@app.command()
def resolve(
    path: Annotated[
        str,
        typer.Argument(help="Local file path to translate"),
    ],
    config: ConfigOption = None,
    mapping: MappingOption = None,
) -> None:
    """Print the X-Accel-Redirect location a file path maps to."""
    if mapping:
        mappings = AccelMappings.from_pairs(mapping)
    else:
        mappings = _load_settings(config).sendfile.to_mappings()

    location = mappings.resolve(os.path.abspath(path))
    if location is None:
        toolkit = get_rich_toolkit()
        toolkit.print(
            f"No mapping matches {path}; configured: {mappings or 'none'}",
            tag="error",
        )
        raise typer.Exit(1)

    typer.echo(location)


def main() -> None:
    """Entry point for the accelsend console script."""
    app()


if __name__ == "__main__":
    main()
