"""CLI entry point for the flyer extraction tools.

Provides commands:
  - parse: Run a saved vision-model response through the extraction pipeline
  - states: Show the state name to postal code table
  - config show: Display the effective configuration
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from flyerlib.config import ConfigError, ExtractionConfig, load_config
from flyerlib.extraction.orchestrator import assemble_outcome
from flyerlib.extraction.outcome import ExtractionSuccess, to_http_response
from flyerlib.extraction.states import STATE_ABBREVIATIONS

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Flyer extraction - validate vision-model output into event records",
    rich_markup_mode="rich",
)
console = Console()

config_app = typer.Typer(help="Inspect configuration")
app.add_typer(config_app, name="config")


def _load_config_or_exit(config_path: Path | None) -> ExtractionConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


def _fields_table(title: str, fields: dict[str, Any]) -> Table:
    table = Table(title=title)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for name, value in fields.items():
        if value is None or value == [] or value == ():
            table.add_row(name, "[dim]-[/dim]")
        elif isinstance(value, (dict, list)):
            table.add_row(name, json.dumps(value))
        else:
            table.add_row(name, str(value))
    return table


@app.command()
def parse(
    source: Annotated[
        str,
        typer.Argument(help="File containing raw model output, or '-' for stdin"),
    ],
    provider: Annotated[
        Optional[str],
        typer.Option("--provider", "-p", help="Model identifier to record on success"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the HTTP response body as JSON"),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to extraction_config.json"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log each correction applied"),
    ] = False,
) -> None:
    """Validate a saved model response and show the resulting record."""
    config = _load_config_or_exit(config_path)
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if source == "-":
        raw_text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            console.print(f"[red]Error:[/red] File not found: {path}")
            raise typer.Exit(code=1)
        raw_text = path.read_text(encoding="utf-8")

    outcome = assemble_outcome(raw_text, provider or config.provider)
    status_code, body = to_http_response(outcome)

    if as_json:
        typer.echo(json.dumps(body, indent=2))
    elif isinstance(outcome, ExtractionSuccess):
        console.print(
            Panel(
                f"Provider: [bold]{outcome.provider}[/bold]",
                title="[green]Extraction succeeded[/green]",
            )
        )
        if outcome.warning:
            console.print(f"[yellow]Warning:[/yellow] {outcome.warning}")
        console.print(_fields_table("Extracted Record", body["extractedData"]))
    else:
        console.print(
            Panel(
                outcome.message,
                title=f"[red]{outcome.kind.value}[/red]",
            )
        )
        if outcome.partial_record:
            console.print(_fields_table("Partial Data", outcome.partial_record))

    if status_code != 200:
        raise typer.Exit(code=1)


@app.command()
def states() -> None:
    """Show the state name to postal code table used for normalization."""
    table = Table(title="US State Abbreviations")
    table.add_column("State", style="bold")
    table.add_column("Code", justify="center")
    for name, code in sorted(STATE_ABBREVIATIONS.items()):
        table.add_row(name.title(), code)
    console.print(table)


@config_app.command("show")
def show_config(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to extraction_config.json"),
    ] = None,
) -> None:
    """Display the effective configuration (file + environment overrides)."""
    config = _load_config_or_exit(config_path)
    table = Table(title="Extraction Config")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in config.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)
