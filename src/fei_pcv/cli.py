"""
Command-line entry point.

    fei-pcv [--log-level DEBUG] encode PROPOSAL.json --addresses ADDRESSES.json [--json]

Encodes a proposal description against a deployment address table and
prints the resulting calls.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .governance.proposal import EncodedCall, ProposalDescription
from .types import FeiPCVError
from .utils.log import configure_logging

app = typer.Typer(help="Fei PCV tooling", add_completion=False)
console = Console()


def _load_addresses(path: Path) -> dict:
    with open(path) as f:
        addresses = json.load(f)
    if not isinstance(addresses, dict):
        raise FeiPCVError(f"{path} must contain a JSON object of name -> address")
    return addresses


def _render(title: str, calls: List[EncodedCall]) -> None:
    table = Table(title=title, show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Target", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Method", style="green")
    table.add_column("Calldata", overflow="fold")
    table.add_column("Description")
    for index, call in enumerate(calls):
        table.add_row(str(index), call.target, str(call.value), call.method, call.calldata, call.description)
    console.print(table)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"fei-pcv {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (default: FEI_PCV_LOG_LEVEL or WARNING)"
    ),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Fei PCV tooling."""
    configure_logging(log_level)


@app.command()
def encode(
    proposal: Path = typer.Argument(..., help="Proposal description JSON file"),
    addresses: Path = typer.Option(..., "--addresses", help="JSON file mapping contract names to addresses"),
    as_json: bool = typer.Option(False, "--json", help="Print calls as JSON instead of a table"),
) -> None:
    """Encode a proposal description into calldata."""
    try:
        description = ProposalDescription.from_file(proposal)
        calls = description.encode(_load_addresses(addresses))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Cannot read input:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except ValidationError as e:
        console.print(f"[red]Invalid proposal:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except FeiPCVError as e:
        console.print(f"[red]Encoding failed:[/red] {escape(e.message)}")
        raise typer.Exit(code=1)

    if as_json:
        console.out(json.dumps([asdict(call) for call in calls], indent=2), highlight=False)
    else:
        _render(description.title, calls)
    logger.info(f"Encoded {len(calls)} calls from {proposal}")


if __name__ == "__main__":
    app()
