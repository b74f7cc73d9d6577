from __future__ import annotations
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box
from .config import PRESETS, NotesConfig, write_default_config
from .errors import NotesError
from .notes import generate_notes
from .parser import read_document
from .utils import word_count

app = typer.Typer(help="Simplify long text into study notes")
console = Console()
err_console = Console(stderr=True)

@app.callback()
def _setup(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )

def _load_config(config_path: Path) -> NotesConfig:
    try:
        return NotesConfig.load(config_path)
    except (ValueError, TypeError) as ex:
        console.print(f"[red]Bad config[/red] {config_path}: {ex}")
        raise typer.Exit(code=2)

def _read_input(source: Optional[Path], text: Optional[str]) -> str:
    if text is not None:
        return text
    if source is None or str(source) == "-":
        return sys.stdin.read()
    try:
        return read_document(source)
    except OSError as ex:
        console.print(f"[red]Cannot read[/red] {source}: {ex.strerror or ex}")
        raise typer.Exit(code=2)

@app.command()
def init(
    config_path: Path = typer.Option("notes.json", exists=False, help="Where to create config"),
):
    """Create default config."""
    try:
        write_default_config(config_path)
    except FileExistsError as ex:
        console.print(f"[red]{ex}[/red]")
        raise typer.Exit(code=2)
    console.print(f"[green]Created[/green] {config_path}")

@app.command()
def simplify(
    source: Optional[Path] = typer.Argument(None, help="Text or HTML file ('-' or omitted reads stdin)"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Inline text instead of a file"),
    config_path: Path = typer.Option("notes.json", "--config", help="Config file (optional)"),
    length: Optional[str] = typer.Option(None, help="short|medium|long"),
    ratio: Optional[float] = typer.Option(None, help="Custom target ratio, keeps the preset bounds"),
    local: bool = typer.Option(False, "--local", help="Never call the remote service"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Turn text into short notes."""
    cfg = _load_config(config_path)
    if length is not None:
        cfg.length = length
    if ratio is not None:
        cfg.ratio = ratio
    try:
        cfg.policy()
    except ValueError as ex:
        console.print(f"[red]{ex}[/red]")
        raise typer.Exit(code=2)

    raw = _read_input(source, text)
    try:
        result = asyncio.run(generate_notes(raw, cfg, local_only=local))
    except NotesError as ex:
        console.print(f"[red]{ex}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return
    if result.degenerate:
        console.print("[yellow]Every sentence is longer than the length budget; no notes produced.[/yellow]")
    else:
        console.print(Panel(result.notes, title=f"Notes ({result.source})", box=box.ROUNDED))
    console.print(f"[bold]{result.stats_line()}[/bold]")

@app.command()
def count(
    source: Optional[Path] = typer.Argument(None, help="Text or HTML file ('-' or omitted reads stdin)"),
    text: Optional[str] = typer.Option(None, "--text", "-t"),
):
    """Count words the way the summarizer does."""
    raw = _read_input(source, text)
    console.print(f"{word_count(raw)} words")

@app.command("presets")
def presets_cmd():
    """Show length presets."""
    table = Table(title="Length Presets", box=box.SIMPLE)
    table.add_column("Preset", style="bold")
    table.add_column("Min words", justify="right")
    table.add_column("Max words", justify="right")
    table.add_column("Ratio", justify="right")
    for name, p in PRESETS.items():
        table.add_row(name, str(p.min_words), str(p.max_words), f"{p.ratio:.1f}")
    console.print(table)

def main():
    app()

if __name__ == "__main__":
    main()
