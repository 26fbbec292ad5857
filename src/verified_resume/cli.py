"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from verified_resume.clients.llm_client import LLMClient
from verified_resume.config import load_config
from verified_resume.errors import (
    InvalidInputError,
    ModelUnavailableError,
    ResumePipelineError,
    SchemaValidationError,
)
from verified_resume.models.verification import Flag
from verified_resume.parsers.jd_parser import load_jd_file
from verified_resume.parsers.resume_parser import parse_resume
from verified_resume.pipeline.orchestrator import PipelineOrchestrator, PipelineResult
from verified_resume.storage.generation_store import GenerationStore

app = typer.Typer(
    name="verified-resume",
    help="Tailor a resume to a job posting and fact-check every claim.",
    no_args_is_help=True,
)
console = Console()

STATUS_COLORS = {
    "STRETCH": "yellow",
    "UNSUPPORTED": "red",
    "MISSING_REQUIREMENT": "cyan",
}


def score_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def generate(
    jd: Path = typer.Option(..., "--jd", help="Job posting text file"),
    resume: Path = typer.Option(..., "--resume", help="Original resume (PDF/DOCX/TXT/MD)"),
    cover_letter: bool = typer.Option(False, "--cover-letter", help="Also write a cover letter"),
    output: Path = typer.Option(None, "--output", "-o", help="Output directory"),
    user: str = typer.Option("anonymous", "--user", help="Owner recorded with the generation"),
    job_url: str = typer.Option(None, "--job-url", help="Where the job posting came from"),
    no_store: bool = typer.Option(False, "--no-store", help="Do not save to the history database"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Generate a tailored resume and verify every claim against the original."""
    _configure_logging(verbose)
    for label, path in (("Job posting", jd), ("Resume", resume)):
        if not path.exists():
            console.print(f"[red]{label} file not found: {path}[/red]")
            raise typer.Exit(1)

    config = load_config()
    jd_text = load_jd_file(jd, max_chars=config.pipeline.max_job_chars)
    try:
        resume_text = parse_resume(resume)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if verbose:
        console.print(f"[dim]Job posting: {len(jd_text)} chars[/dim]")
        console.print(f"[dim]Resume: {len(resume_text)} chars[/dim]")
        console.print(f"[dim]Models: {', '.join(config.llm.model_variants)}[/dim]")

    store = None if no_store else GenerationStore(config.storage.resolved_db_path)
    llm = LLMClient(timeout=config.llm.timeout)
    orchestrator = PipelineOrchestrator(
        llm,
        model_variants=config.llm.model_variants,
        generator_temperature=config.llm.generator_temperature,
        verifier_temperature=config.llm.verifier_temperature,
        max_tokens=config.llm.max_tokens,
        store=store,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Starting...", total=None)

        def on_phase(phase: str, detail: str) -> None:
            progress.update(task, description=detail)

        try:
            result = asyncio.run(
                orchestrator.run(
                    jd_text,
                    resume_text,
                    cover_letter or config.pipeline.include_cover_letter,
                    user_id=user,
                    job_url=job_url,
                    on_phase=on_phase,
                )
            )
        except ResumePipelineError as exc:
            progress.stop()
            _print_pipeline_error(exc)
            raise typer.Exit(1)

    out_dir = output or Path(config.storage.output_dir) / result.generation_id
    write_outputs(result, out_dir)
    console.print(f"\n[green]Saved to {out_dir}[/green]")

    color = score_color(result.truth_score)
    console.print(
        Panel(
            f"[bold {color}]Truth score: {result.truth_score}[/bold {color}]\n"
            f"Claims verified: {len(result.verifications)} | Flags: {len(result.flags)}\n"
            f"Elapsed: {result.elapsed_seconds:.1f}s",
            title=result.generation_id,
        )
    )
    if result.flags:
        console.print(flags_table(result.flags))


@app.command()
def history(
    user: str = typer.Option("anonymous", "--user", help="Whose generations to list"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows"),
    skip: int = typer.Option(0, "--skip", help="Rows to skip"),
) -> None:
    """List stored generations, newest first."""
    config = load_config()
    store = GenerationStore(config.storage.resolved_db_path)
    rows = store.list_generations(user, limit=limit, skip=skip)
    if not rows:
        console.print("[yellow]No generations stored yet.[/yellow]")
        return

    table = Table(title=f"Generations for {user}")
    table.add_column("ID")
    table.add_column("Created")
    table.add_column("Score", justify="right")
    table.add_column("Flags", justify="right")
    table.add_column("Job URL")
    for row in rows:
        color = score_color(row["truth_score"])
        table.add_row(
            row["generation_id"],
            row["created_at"][:19],
            f"[{color}]{row['truth_score']}[/{color}]",
            str(row["flags_count"]),
            row["job_url"] or "",
        )
    console.print(table)


@app.command()
def show(
    generation_id: str = typer.Argument(help="Generation id (gen_...)"),
    as_json: bool = typer.Option(False, "--json", help="Print the full stored record"),
) -> None:
    """Show one stored generation."""
    config = load_config()
    store = GenerationStore(config.storage.resolved_db_path)
    record = store.get(generation_id)
    if record is None:
        console.print(f"[red]Generation not found: {generation_id}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(record.model_dump_json(by_alias=True))
        return

    color = score_color(record.truth_score)
    console.print(
        Panel(
            f"Created: {record.created_at:%Y-%m-%d %H:%M}\n"
            f"Job URL: {record.job_url or '-'}\n"
            f"[bold {color}]Truth score: {record.truth_score}[/bold {color}]",
            title=record.generation_id,
        )
    )
    if record.flags:
        console.print(flags_table(record.flags))


def flags_table(flags: list[Flag]) -> Table:
    table = Table(title="Flags", show_lines=True)
    table.add_column("Status")
    table.add_column("Claim / requirement")
    table.add_column("Reason")
    table.add_column("Suggested fix")
    for flag in flags:
        color = STATUS_COLORS.get(flag.status, "white")
        table.add_row(
            f"[{color}]{flag.status}[/{color}]",
            flag.bullet_text or flag.requirement or "",
            flag.reason,
            flag.suggested_fix or "",
        )
    return table


def write_outputs(result: PipelineResult, out_dir: Path) -> None:
    """Write the tailored resume, verification report and cover letter."""
    out_dir.mkdir(parents=True, exist_ok=True)
    resume = result.output.tailored_resume_json.to_wire()
    (out_dir / "tailored_resume.json").write_text(
        json.dumps(resume, ensure_ascii=False, indent=2), encoding="utf-8"
    )
    (out_dir / "report.json").write_text(
        json.dumps(result.to_response(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    if result.output.cover_letter_text:
        (out_dir / "cover_letter.txt").write_text(
            result.output.cover_letter_text, encoding="utf-8"
        )


def _print_pipeline_error(exc: ResumePipelineError) -> None:
    if isinstance(exc, ModelUnavailableError):
        console.print(
            "[red]No model variant could be used. Check ANTHROPIC_API_KEY and model "
            "access for your account.[/red]"
        )
        console.print(f"[dim]{exc.detail}[/dim]")
    elif isinstance(exc, (SchemaValidationError, InvalidInputError)):
        console.print(f"[red]{exc.detail}[/red]")
        for path, message in exc.issues:
            console.print(f"  - {path}: {message}")
    else:
        console.print(f"[red]{exc.detail}[/red]")


if __name__ == "__main__":
    app()
