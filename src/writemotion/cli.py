"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from writemotion.clients.llm_client import LLMClient
from writemotion.config import AppConfig, load_config
from writemotion.errors import GenerationRefused
from writemotion.export.draft_writer import export_draft
from writemotion.library.author_library import AuthorLibrary
from writemotion.library.persona_store import SQLitePersonaStore
from writemotion.models.session import TONE_SHIFTS
from writemotion.models.style import StyleMetrics
from writemotion.pipeline.orchestrator import BlendOrchestrator

app = typer.Typer(
    name="writemotion",
    help="Blend your writing style with reference authors.",
    no_args_is_help=True,
)
console = Console()


def _setup(verbose: bool) -> AppConfig:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return load_config()


def _read(path: Path, label: str) -> str:
    if not path.exists():
        console.print(f"[red]{label} not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _build(config: AppConfig, on_phase=None) -> BlendOrchestrator:
    llm = LLMClient(timeout=config.llm.timeout)
    library = AuthorLibrary(SQLitePersonaStore(config.library.resolved_db_path))
    return BlendOrchestrator(llm, config=config, library=library, on_phase=on_phase)


def _metrics_table(metrics: StyleMetrics) -> Table:
    table = Table(title="Style fingerprint")
    table.add_column("Metric")
    table.add_column("Score", justify="right")
    for key, value in metrics.to_payload().items():
        table.add_row(key, f"{value:.0f}")
    return table


@app.command()
def analyze(
    sample: Path = typer.Argument(help="Writing sample (.txt/.md)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Score a writing sample on the six style axes."""
    config = _setup(verbose)
    text = _read(sample, "Sample")
    orchestrator = _build(config)

    with console.status("Analyzing style..."):
        metrics = asyncio.run(orchestrator.analyze_sample(text))

    if len(text) < config.analysis.min_length:
        console.print(f"[yellow]Sample shorter than {config.analysis.min_length} characters; neutral baseline used.[/yellow]")
    console.print(_metrics_table(metrics))


@app.command()
def persona(
    name: str = typer.Argument(help="Author name to profile"),
    save: bool = typer.Option(False, "--save", help="Save to the persona library"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Generate a reference persona for an author name."""
    config = _setup(verbose)
    orchestrator = _build(config)

    with console.status(f"Profiling {name}..."):
        author = asyncio.run(orchestrator.add_persona(name, persist=save))

    if author is None:
        console.print("[red]Analysis failed for target persona.[/red]")
        raise typer.Exit(1)

    console.print(Panel(
        f"[bold]{author.name}[/bold] ({author.category})\n"
        f"{author.description}\n\n"
        f"Traits: {', '.join(author.traits)}\n"
        f"id: {author.id}",
        title="Persona",
    ))
    if save:
        console.print("[green]Saved to library.[/green]")


@app.command()
def authors(
    query: str = typer.Option("", "--query", "-q", help="Filter by name or description"),
    sort: str = typer.Option("name", "--sort", help="name | category"),
) -> None:
    """List available reference authors."""
    config = load_config()
    library = AuthorLibrary(SQLitePersonaStore(config.library.resolved_db_path))
    if sort not in ("name", "category"):
        console.print("[red]--sort must be 'name' or 'category'[/red]")
        raise typer.Exit(1)

    table = Table()
    for col in ("id", "Name", "Category", "Traits"):
        table.add_column(col)
    for a in library.search(query, sort=sort):
        label = f"{a.name} [dim](custom)[/dim]" if a.is_custom else a.name
        table.add_row(a.id, label, a.category, ", ".join(a.traits))
    console.print(table)


@app.command()
def rewrite(
    draft: Path = typer.Argument(help="Draft to rewrite"),
    author: list[str] = typer.Option(..., "--author", "-a", help="Author id or name (up to 2)"),
    sample: Path = typer.Option(None, "--sample", "-s", help="Writing sample for your baseline"),
    intensity: float = typer.Option(None, "--intensity", "-i", min=0.0, max=1.0, help="0 = your voice, 1 = pure mimicry"),
    tone: str = typer.Option(None, "--tone", "-t", help=" | ".join(TONE_SHIFTS)),
    span: str = typer.Option(None, "--span", help="Only rewrite this passage of the draft"),
    pick: int = typer.Option(None, "--pick", "-p", help="Apply candidate N (1-based) to the draft"),
    output: Path = typer.Option(None, "--output", "-o", help="Where to write the result (.txt/.md/.pdf)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Generate blended rewrites of a draft."""
    config = _setup(verbose)
    text = _read(draft, "Draft")
    sample_text = _read(sample, "Sample") if sample is not None else None
    if tone is not None and tone not in TONE_SHIFTS:
        console.print(f"[red]--tone must be one of {', '.join(TONE_SHIFTS)}[/red]")
        raise typer.Exit(1)
    if span and span not in text:
        console.print("[red]--span text not found in the draft[/red]")
        raise typer.Exit(1)

    async def _session(orchestrator: BlendOrchestrator) -> list:
        for ref in author:
            found = orchestrator.library.get(ref) or next(
                (a for a in orchestrator.library.all() if a.name.lower() == ref.lower()), None
            )
            if found is None:
                if await orchestrator.add_persona(ref, persist=False) is None:
                    console.print(f"[red]Could not build a persona for {ref}[/red]")
                    raise typer.Exit(1)
            elif found.id not in orchestrator.context.settings.target_author_ids:
                orchestrator.toggle_author(found.id)

        if sample_text is not None:
            await orchestrator.analyze_sample(sample_text)
        if intensity is not None:
            orchestrator.set_intensity(intensity)
        if tone is not None:
            orchestrator.set_tone(tone)
        orchestrator.set_document(text)
        if span:
            orchestrator.set_selection(span)
        return await orchestrator.generate()

    with console.status("Preparing...") as status:
        orchestrator = _build(config, on_phase=lambda phase, detail: status.update(detail or phase))
        try:
            suggestions = asyncio.run(_session(orchestrator))
        except GenerationRefused as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    if not suggestions:
        console.print("[yellow]No rewrites were produced. Try again.[/yellow]")
        raise typer.Exit(1)

    for n, s in enumerate(suggestions, start=1):
        console.print(Panel(
            f"{s.rewritten_text}\n\n[dim]{s.rationale}[/dim]",
            title=f"#{n}  voice match {s.similarity_score:.0f}%",
        ))

    if pick is None:
        return
    if not 1 <= pick <= len(suggestions):
        console.print(f"[red]--pick must be between 1 and {len(suggestions)}[/red]")
        raise typer.Exit(1)

    result = orchestrator.commit(suggestions[pick - 1].id)
    if output is not None:
        export_draft(result, output)
        console.print(f"[green]Saved: {output}[/green]")
    else:
        console.print(Panel(result, title="Updated draft"))


@app.command("export")
def export_cmd(
    draft: Path = typer.Argument(help="Draft text file"),
    output: Path = typer.Argument(help="Output path (.txt/.md/.pdf)"),
) -> None:
    """Export a draft as text, markdown or PDF."""
    text = _read(draft, "Draft")
    try:
        export_draft(text, output)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Saved: {output}[/green]")


if __name__ == "__main__":
    app()
