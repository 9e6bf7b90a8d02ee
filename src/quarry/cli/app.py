# src/quarry/cli/app.py
"""Command-line interface for Quarry.

A thin Typer wrapper around the commands layer: parse args, call
commands.generate, render the result with Rich.
"""

from __future__ import annotations

import contextlib
import json
import logging
from pathlib import Path

try:
    import typer
    from rich.console import Console
    from rich.table import Table
except ImportError as e:
    raise SystemExit(
        "CLI requires additional dependencies.\nInstall with: pip install quarry-rag[cli]"
    ) from e

from quarry import __version__
from quarry.commands import GenerateResult, generate_cmd
from quarry.config import load_env_file
from quarry.logging_config import configure_logging

app = typer.Typer(
    name="quarry",
    help="Quarry - interview questions from documents with retrieval-augmented generation.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"quarry {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Quarry - interview questions from documents."""
    load_env_file()


def _result_payload(result: GenerateResult) -> dict:
    generation = result.generation
    assert generation is not None
    return {
        "source": result.source,
        "mode": generation.mode,
        "requested_count": generation.requested_count,
        "rag_error": generation.error,
        "questions": [q.model_dump() for q in generation.questions],
    }


def _print_table(result: GenerateResult) -> None:
    generation = result.generation
    assert generation is not None

    table = Table(title=f"Questions for {generation.filename} ({len(generation.questions)})")
    table.add_column("#", style="dim", width=3)
    table.add_column("Question", style="cyan")
    table.add_column("Level", style="magenta")
    table.add_column("Answer")

    for i, q in enumerate(generation.questions, 1):
        table.add_row(str(i), q.question, f"{q.difficulty}/{q.cognitive_level}", q.answer)

    console.print(table)


@app.command("generate")
def generate_command(
    path: str = typer.Argument(..., help="UTF-8 text file to generate questions from"),
    count: int = typer.Option(
        None,
        "--count",
        "-n",
        help="Number of questions (default: from settings)",
    ),
    difficulty: str = typer.Option(
        None,
        "--difficulty",
        "-d",
        help="easy, medium or hard (default: from settings)",
    ),
    language: str = typer.Option(
        None,
        "--language",
        "-l",
        help="Output language code, e.g. en, de, tr (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print questions as JSON",
    ),
    output: str = typer.Option(
        None,
        "--output",
        "-o",
        help="Write questions as JSON to this file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log pipeline progress to stderr",
    ),
) -> None:
    """Generate interview questions for a document."""
    if verbose:
        configure_logging(logging.DEBUG)

    show_progress = console.is_terminal and not as_json and not verbose
    progress = (
        console.status("Generating questions...", spinner="dots")
        if show_progress
        else contextlib.nullcontext()
    )
    with progress:
        result = generate_cmd.generate(
            path,
            count=count,
            difficulty=difficulty,
            language=language,
            config_path=config_file,
        )

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        if result.remediation:
            console.print(f"[yellow]{result.remediation}[/yellow]")
        raise typer.Exit(1)

    payload = _result_payload(result)

    if output:
        Path(output).write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        console.print(f"[green]Wrote {len(payload['questions'])} questions to {output}[/green]")
    elif as_json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _print_table(result)

    if result.generation is not None and result.generation.mode == "direct":
        console.print(
            "[yellow]Retrieval failed; questions were generated from the start of the "
            "document only.[/yellow]"
        )
