"""Interop capability CLI commands."""

from pathlib import Path
from typing import Optional

import typer

from stellare_types.cli.main import app
from stellare_types.cli.output import OutputFormat, dump
from stellare_types.config import StellareConfig
from stellare_types.errors import CapabilityUnavailableError
from stellare_types.interop import Capability, is_available, is_enabled


@app.command("capabilities")
def capabilities_command(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with a stellare_types section to apply first "
        "(defaults to STELLARE_TYPES_* environment variables)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.HUMAN,
        "--format",
        "-f",
        help="Output format",
    ),
) -> None:
    """
    Show which interop capabilities are installed and enabled.

    Example:
        stellare-types capabilities
        stellare-types capabilities --config stellare.yaml --format json
    """
    try:
        settings = StellareConfig.from_yaml(str(config)) if config else StellareConfig.from_env()
        settings.apply()
    except (FileNotFoundError, ValueError, CapabilityUnavailableError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    rows = [
        {
            "name": capability.value,
            "available": is_available(capability),
            "enabled": is_enabled(capability),
        }
        for capability in Capability
    ]

    if output_format != OutputFormat.HUMAN:
        typer.echo(dump({"capabilities": rows, "strict": settings.strict}, output_format))
        return

    lines = [f"{'CAPABILITY':<12} {'AVAILABLE':<10} ENABLED"]
    for row in rows:
        available = "yes" if row["available"] else "no"
        enabled = "yes" if row["enabled"] else "no"
        lines.append(f"{row['name']:<12} {available:<10} {enabled}")
    typer.echo("\n".join(lines))
