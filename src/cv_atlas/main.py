"""CLI entry point for CV Atlas."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv

# Load environment variables from .env.local
# Path: main.py -> cv_atlas/ -> src/ -> project root
load_dotenv(Path(__file__).parent.parent.parent / ".env.local")

import typer  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.panel import Panel  # noqa: E402
from rich.table import Table  # noqa: E402

from cv_atlas.config import configure_logging, get_settings  # noqa: E402
from cv_atlas.llm.orchestrator import get_orchestrator  # noqa: E402
from cv_atlas.models.llm import LLMConfiguration, ProviderName  # noqa: E402
from cv_atlas.pipeline.processor import CVProcessor, ProcessingResult  # noqa: E402

app = typer.Typer(
    name="cv-atlas",
    help="CV Atlas - structured CV extraction across LLM providers",
    add_completion=False,
)
console = Console()


def read_file(path: Path) -> str:
    """Read file content as text."""
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _cli_config(
    provider: ProviderName | None,
    model: str | None,
    temperature: float | None,
) -> LLMConfiguration | None:
    """Build an ad-hoc configuration record from CLI flags."""
    if provider is None and model is None and temperature is None:
        return None
    return LLMConfiguration(
        id="cli",
        name="cli",
        provider=provider or ProviderName(get_settings().default_provider),
        model=model,
        temperature=temperature,
    )


def _render_result(result: ProcessingResult) -> None:
    cv_data = result.extraction
    if cv_data is None:
        return

    info = cv_data.personal_info
    lines = [
        f"[bold]{info.full_name or 'Unknown candidate'}[/bold]",
        f"[dim]{' | '.join(v for v in (info.email, info.phone, info.location) if v)}[/dim]",
        "",
        f"Seniority:   {cv_data.metadata.seniority_level or '-'}",
        f"Industry:    {cv_data.metadata.industry or '-'}",
        f"Experience:  {cv_data.metadata.total_experience_years or '-'} years, "
        f"{len(cv_data.experience)} roles",
        f"Skills:      {', '.join(cv_data.skills[:12]) or '-'}",
        f"Languages:   {', '.join(lang.language for lang in cv_data.languages) or '-'}",
        f"Confidence:  {cv_data.confidence_score:.0%}",
    ]
    if result.summary:
        lines += ["", result.summary]

    console.print(
        Panel(
            "\n".join(lines),
            title="Extracted CV",
            subtitle=f"{result.provider}/{result.model}",
            border_style="blue",
        )
    )


@app.command()
def extract(
    cv: Annotated[Path, typer.Argument(help="Path to CV text (txt or md)")],
    provider: Annotated[
        ProviderName | None,
        typer.Option("--provider", "-p", help="LLM provider (falls back if unavailable)"),
    ] = None,
    model: Annotated[str | None, typer.Option("--model", "-m", help="Model override")] = None,
    temperature: Annotated[
        float | None, typer.Option("--temperature", "-t", min=0, max=2, help="Sampling temperature")
    ] = None,
    summary: Annotated[
        bool, typer.Option("--summary/--no-summary", help="Generate a professional summary")
    ] = True,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the result as JSON")
    ] = None,
) -> None:
    """Extract structured data from a CV."""
    configure_logging(get_settings().log_level)
    raw_cv = read_file(cv)
    config = _cli_config(provider, model, temperature)

    try:
        processor = CVProcessor(get_orchestrator(), generate_summary=summary)
        result = asyncio.run(processor.process(raw_cv, config))
    except Exception as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    if not result.succeeded:
        console.print(f"[red]Extraction failed:[/red] {result.error}")
        raise typer.Exit(1)

    _render_result(result)

    if output:
        output.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"\n[green]Result saved to:[/green] {output}")


@app.command()
def providers() -> None:
    """List providers and whether they can serve calls."""
    orchestrator = get_orchestrator()
    available = set(orchestrator.available_providers())

    table = Table(title="LLM Providers")
    table.add_column("Provider")
    table.add_column("Status")
    table.add_column("Default")
    for name in ProviderName:
        status = "[green]available[/green]" if name in available else "[red]not configured[/red]"
        default = "*" if name == orchestrator.default_provider else ""
        table.add_row(name.value, status, default)
    console.print(table)

    settings = get_settings()
    if settings.langsmith_enabled:
        console.print(
            f"LangSmith tracing: [bold]{settings.langsmith_project}[/bold] "
            f"[dim]({settings.langsmith_endpoint})[/dim]"
        )
    else:
        console.print("[dim]LangSmith tracing: disabled[/dim]")


@app.command("test-connection")
def test_connection(
    provider: Annotated[
        ProviderName | None, typer.Option("--provider", "-p", help="Provider to test")
    ] = None,
    model: Annotated[str | None, typer.Option("--model", "-m", help="Model override")] = None,
) -> None:
    """Send a trivial prompt to check a provider's credentials and latency."""
    configure_logging(get_settings().log_level)
    config = _cli_config(provider or ProviderName(get_settings().default_provider), model, None)

    result = asyncio.run(get_orchestrator().test_configuration(config))
    if not result.available:
        console.print(f"[red]Connection failed:[/red] {result.error}")
        raise typer.Exit(1)

    console.print(
        f"[green]OK[/green] {result.provider}/{result.model} "
        f"[dim][{result.latency_ms:.0f} ms][/dim] {json.dumps(result.response)}"
    )


@app.command()
def version() -> None:
    """Show version information."""
    from cv_atlas import __version__

    console.print(f"CV Atlas v{__version__}")


if __name__ == "__main__":
    app()
