#!/usr/bin/env python3
"""
Quarto Rendering CLI

Renders a Markdown/Quarto document through Quarto and optionally saves the result.

Commands:
    render - Render a document and print the artifact path
    check  - Report the Quarto version found

Examples:\n

    render_document.py render talk.qmd                       # Render to a temp artifact

    render_document.py render talk.qmd --save out/talk.html  # Render and save a copy

    render_document.py render talk.qmd --ask-save            # Prompt for the save location

    render_document.py render talk.qmd -v                    # Show every candidate tried

    render_document.py check                                 # Is Quarto installed?
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from deckhand.contexts.delivery import DeliveryError, display_name, save_artifact
from deckhand.contexts.rendering import (
    ExecutableResolver,
    QuartoRunner,
    RenderRequest,
    RunnerExhaustedError,
    try_render,
)
from deckhand.contexts.rendering.logger import setup_rendering_logger
from deckhand.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Render Markdown documents with Quarto and save the results",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def prompt_destination(suggested_name: str, filters: List) -> Optional[Path]:
    """Ask for a destination on the terminal; an empty answer cancels."""
    patterns = ", ".join(f"{label} ({' '.join(exts)})" for label, exts in filters)
    typer.echo(f"File types: {patterns}")
    answer = typer.prompt("Save as (leave empty to cancel)", default=suggested_name)
    return Path(answer).expanduser() if answer.strip() else None


@app.command("render")
def render_command(
    document: Annotated[
        Path,
        typer.Argument(help="Markdown or Quarto document with a YAML header", exists=True),
    ],
    save: Annotated[
        Optional[Path],
        typer.Option("--save", "-s", help="Copy the rendered artifact to this path"),
    ] = None,
    ask_save: Annotated[
        bool,
        typer.Option("--ask-save", help="Prompt for where to save the rendered artifact"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show detailed render output (search path, every candidate tried, Quarto stderr)",
        ),
    ] = False,
):
    """
    Render a document with Quarto.

    The header must set a supported format (revealjs, pptx, beamer) and
    embed-resources: true.

    Examples:\n

        $ render_document.py render talk.qmd

        $ render_document.py render talk.qmd --save talk.html

        $ render_document.py render talk.qmd --verbose
    """
    log_dir = LOGS_PATH / f"render_{now()}"
    log_file = setup_rendering_logger(log_dir, verbose=verbose)

    typer.secho(f"\nRendering: {document}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    request = RenderRequest(
        content=document.read_text(encoding="utf-8-sig"), original_name=document.name
    )
    outcome = try_render(request, verbose=verbose)

    typer.echo("")
    if not outcome.success:
        typer.secho("✗ Render failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {outcome.error}", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    typer.secho("✓ Render succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Artifact: {outcome.artifact_path}")

    if save is not None or ask_save:
        picker = (lambda name, filters: save) if save is not None else prompt_destination
        try:
            destination = save_artifact(
                outcome.artifact_path, display_name(outcome.artifact_path), picker
            )
        except DeliveryError as e:
            typer.secho(f"  Save failed: {e}", fg=typer.colors.YELLOW, err=True)
            raise typer.Exit(code=1)
        typer.echo(f"  Saved: {destination}")

    typer.echo(f"  Log: {log_file}")
    typer.echo("")


@app.command("check")
def check_command():
    """
    Report which Quarto version is reachable.

    Tries the bundled copy first, then system installations.
    """
    resolver = ExecutableResolver()
    runner = QuartoRunner(resolver=resolver)

    try:
        version = runner.check_installation(resolver.augmented_search_path())
    except RunnerExhaustedError as e:
        typer.secho("✗ Quarto not found", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Quarto {version}", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
