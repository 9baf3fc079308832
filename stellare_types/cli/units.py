"""Unit listing and conversion CLI commands."""

from typing import Any, Dict, List, Optional, Type

import typer

from stellare_types.cli.main import app
from stellare_types.cli.output import OutputFormat, dump
from stellare_types.conversions import (
    convert,
    convert_difference,
    families,
    parse_family,
    parse_unit,
    units_in_family,
)
from stellare_types.errors import IncompatibleUnitsError, UnknownUnitError
from stellare_types.units import Unit


def _describe(unit: Type[Unit]) -> Dict[str, Any]:
    return {
        "name": unit.__name__,
        "symbol": unit.symbol,
        "scale": unit.scale,
        "offset": unit.offset,
        "base": unit is unit.family.base_unit,
    }


@app.command("units")
def units_command(
    family: Optional[str] = typer.Option(
        None,
        "--family",
        help="Only list tags of this family (e.g. Length, Angular)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.HUMAN,
        "--format",
        "-f",
        help="Output format",
    ),
) -> None:
    """
    List dimension tags grouped by family.

    Example:
        stellare-types units
        stellare-types units --family Length --format json
    """
    try:
        selected = [parse_family(family)] if family else families()
    except UnknownUnitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    data = {f.__name__: [_describe(u) for u in units_in_family(f)] for f in selected}

    if output_format != OutputFormat.HUMAN:
        typer.echo(dump(data, output_format))
        return

    lines: List[str] = []
    for fam in selected:
        lines.append(fam.__name__)
        members = data[fam.__name__]
        if not members:
            lines.append("  (no tags declared)")
            continue
        base = fam.base_unit.symbol
        for member in members:
            if member["base"]:
                detail = "(base)"
            else:
                detail = f"1 {member['symbol']} = {member['scale']:g} {base}"
                if member["offset"]:
                    detail += f" + {member['offset']:g}"
            lines.append(f"  {member['symbol']:<8} {member['name']:<14} {detail}")
    typer.echo("\n".join(lines))


@app.command("convert")
def convert_command(
    value: float = typer.Argument(..., help="Value to convert"),
    source: str = typer.Argument(..., metavar="FROM", help="Source unit symbol or name"),
    target: str = typer.Argument(..., metavar="TO", help="Target unit symbol or name"),
    difference: bool = typer.Option(
        False,
        "--difference",
        help="Treat the value as a difference (offsets cancel)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.HUMAN,
        "--format",
        "-f",
        help="Output format",
    ),
) -> None:
    """
    Convert a value between two tags of the same family.

    Example:
        stellare-types convert 1 m ft
        stellare-types convert 100 degC degF
        stellare-types convert 10 degC K --difference
    """
    try:
        source_unit = parse_unit(source)
        target_unit = parse_unit(target)
        fn = convert_difference if difference else convert
        result = fn(value, source_unit, target_unit)
    except (UnknownUnitError, IncompatibleUnitsError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output_format == OutputFormat.HUMAN:
        typer.echo(f"{value:g} {source_unit.symbol} = {result:.10g} {target_unit.symbol}")
        return

    typer.echo(
        dump(
            {
                "value": value,
                "from": source_unit.symbol,
                "to": target_unit.symbol,
                "difference": difference,
                "result": result,
            },
            output_format,
        )
    )
