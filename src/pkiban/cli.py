from __future__ import annotations

import pathlib
from typing import Optional

import typer
import structlog
from rich.console import Console
from rich.table import Table

from .config import load_config, PkibanConfig
from .core.builder import IBANBuilder, GenerationResult, compact_iban
from .core.checksum import is_valid_iban
from .engine.session import GeneratorSession

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="pkiban: Pakistan IBAN generator")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"pkiban {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to a pkiban YAML config"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    ctx.obj = {"config": load_config(config) if config else PkibanConfig()}
    if verbose:
        log.info("verbose_enabled")


def _builder(ctx: typer.Context) -> IBANBuilder:
    cfg: PkibanConfig = ctx.obj["config"]
    return IBANBuilder.from_config(cfg)


@app.command()
def generate(
    ctx: typer.Context,
    account: str = typer.Argument(..., help="Bank account number (up to 16 digits)"),
    bank: str = typer.Option("", "--bank", "-b", help="4-character bank code, see `pkiban banks`"),
    compact: bool = typer.Option(False, "--compact", help="Print without spaces"),
):
    """Generate the IBAN for an account number."""
    result: GenerationResult = _builder(ctx).generate(account, bank)
    if not result.ok:
        console.print(f"[red]{result.error.message}[/red]")
        raise typer.Exit(code=1)
    console.print(result.iban if compact else result.formatted)


@app.command()
def banks(ctx: typer.Context):
    """List supported banks and their codes."""
    table = Table(title="Supported banks")
    table.add_column("Bank")
    table.add_column("Code", style="cyan")
    for b in _builder(ctx).banks:
        table.add_row(b.name, b.code)
    console.print(table)


@app.command()
def check(iban: str = typer.Argument(..., help="IBAN to verify (spaces allowed)")):
    """Verify an IBAN with the ISO 13616 mod-97 check."""
    if is_valid_iban(iban):
        console.print(f"[green]valid[/green] {compact_iban(iban).upper()}")
    else:
        console.print(f"[red]invalid[/red] {iban}")
        raise typer.Exit(code=1)


@app.command()
def interactive(ctx: typer.Context):
    """Prompt for account number and bank until you stop."""
    cfg: PkibanConfig = ctx.obj["config"]
    session = GeneratorSession.from_config(cfg)
    codes = ", ".join(b.code for b in session.builder.banks)
    while True:
        session.set_account_number(typer.prompt("Account number"))
        if session.error:
            console.print(f"[yellow]{session.error}[/yellow]")
        session.select_bank(typer.prompt(f"Bank code ({codes})").upper())
        if session.selected_bank:
            console.print(f"Bank: {session.selected_bank.name}")
        if session.generate():
            console.print(f"Your IBAN: [bold green]{session.result}[/bold green]")
        else:
            console.print(f"[red]{session.error}[/red]")
        if not typer.confirm("Generate another?", default=False):
            break
        session.clear()
