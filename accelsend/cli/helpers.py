"""CLI helper utilities for accelsend."""

import typer
from rich_toolkit import RichToolkit, RichToolkitTheme
from rich_toolkit.styles import TaggedStyle

from accelsend.sendfile.mappings import AccelMapping, parse_mapping_entry
from accelsend.sendfile.variants import SendfileVariant


def get_rich_toolkit() -> RichToolkit:
    theme = RichToolkitTheme(
        style=TaggedStyle(tag_width=11),
        theme={
            "tag.title": "white on #009485",
            "tag": "white on #007166",
            "placeholder": "grey85",
            "text": "white",
            "selected": "#007166",
            "result": "grey85",
            "progress": "on #007166",
            "error": "bold red",
            "success": "bold green",
            "warning": "bold yellow",
            "info": "blue",
            "version": "cyan",
            "config": "cyan",
            "mapping": "magenta",
        },
    )

    return RichToolkit(theme=theme)


def validate_mappings(value: list[str] | None) -> list[AccelMapping] | None:
    """Parse repeated ``--mapping internal=external`` options."""
    if not value:
        return None
    mappings = []
    for entry in value:
        mapping = parse_mapping_entry(entry)
        if mapping is None:
            raise typer.BadParameter(
                f"Invalid mapping {entry!r}, expected internal=external"
            )
        mappings.append(mapping)
    return mappings


def validate_variation(value: str | None) -> str | None:
    """Check ``--variation`` against the supported header names."""
    if value is None:
        return None
    if SendfileVariant.from_header(value) is None:
        allowed = ", ".join(v.value for v in SendfileVariant)
        raise typer.BadParameter(f"Unknown variation {value!r}, use one of: {allowed}")
    return value


def validate_log_level(value: str | None) -> str | None:
    """Validate log level parameter."""
    if value is None:
        return None
    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if value.upper() not in valid_levels:
        raise typer.BadParameter(f"Log level must be one of: {', '.join(valid_levels)}")
    return value.upper()
