"""TalentRank CLI - candidate search for recruiting operations."""

import asyncio
import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from talentrank.config import (
    CANDIDATES_FILE,
    EMBEDDING_MODEL,
    GROQ_MODEL,
    LOG_LEVEL,
    LOOKUP_TABLES_PATH,
)
from talentrank.embeddings.fastembed_client import FastEmbedEmbedder
from talentrank.llm.client import default_generator
from talentrank.lookups import get_lookup_tables
from talentrank.matching.similarity import find_similar_candidates
from talentrank.parsing.requirement_parser import build_default_parser
from talentrank.schemas.job_description import JobDescription, JobDescriptionInputs
from talentrank.schemas.match import ScoredCandidate, SearchPage
from talentrank.schemas.search import ManualFilters, SearchRequest, SearchType
from talentrank.services.candidate_source import JsonFileCandidateSource
from talentrank.services.jd_service import JobDescriptionService
from talentrank.services.search_service import SearchService
from talentrank.utils import InvalidSearchError, JobDescriptionError

app = typer.Typer(help="TalentRank - search and rank candidates for open roles")
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(LOG_LEVEL, "--log-level", help="Logging level"),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _candidate_source(candidates: Path) -> JsonFileCandidateSource:
    if not candidates.exists():
        console.print(f"[red]Error: Candidates file not found: {candidates}[/red]")
        raise typer.Exit(1)
    return JsonFileCandidateSource(candidates)


@app.command()
def search(
    query: str = typer.Argument("", help="Search text"),
    search_type: SearchType = typer.Option(
        SearchType.SMART, "--type", "-t", help="Search mode", case_sensitive=False
    ),
    jd_file: Path | None = typer.Option(
        None, "--jd-file", help="Read the job description from a text file"
    ),
    candidates: Path = typer.Option(
        CANDIDATES_FILE, "--candidates", "-c", help="Path to candidates JSON file"
    ),
    location: str | None = typer.Option(None, "--location", "-l", help="Manual filter: location"),
    education: str | None = typer.Option(None, "--education", help="Manual filter: education"),
    min_experience: float | None = typer.Option(
        None, "--min-experience", help="Manual filter: minimum years"
    ),
    max_experience: float | None = typer.Option(
        None, "--max-experience", help="Manual filter: maximum years"
    ),
    page: int | None = typer.Option(None, "--page", min=1, help="Return one page of results"),
    per_page: int = typer.Option(20, "--per-page", min=1, help="Page size"),
    output_json: bool = typer.Option(
        False, "--json", help="Output results as JSON instead of pretty format"
    ),
) -> None:
    """Search candidates and display them ranked by relevance."""
    source = _candidate_source(candidates)

    job_description = ""
    if jd_file is not None:
        if not jd_file.exists():
            console.print(f"[red]Error: Job description file not found: {jd_file}[/red]")
            raise typer.Exit(1)
        job_description = jd_file.read_text(encoding="utf-8")

    filters = None
    if search_type == SearchType.MANUAL:
        filters = ManualFilters(
            keywords=query or None,
            location=location,
            education=education,
            min_experience=min_experience,
            max_experience=max_experience,
        )

    request = SearchRequest(
        type=search_type,
        query=query,
        job_description=job_description,
        filters=filters,
        paginate=page is not None,
        page=page or 1,
        per_page=per_page,
    )

    generator = default_generator()
    service = SearchService(source, build_default_parser(generator), generator)

    try:
        response = asyncio.run(service.search(request))
    except InvalidSearchError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(response)
        return

    if isinstance(response, SearchPage):
        console.print(
            f"[dim]Page {response.page} of {response.total} results "
            f"({response.per_page} per page)[/dim]"
        )
        _output_results(response.items)
    else:
        _output_results(response)


@app.command()
def parse(
    query: str = typer.Argument(..., help="Requirement text to parse"),
) -> None:
    """Show the structured requirement extracted from a query."""
    parser = build_default_parser()
    requirement = asyncio.run(parser.parse(query))
    json.dump(
        obj=requirement.model_dump(mode="json", by_alias=True, exclude_none=True),
        fp=sys.stdout,
        indent=2,
        ensure_ascii=False,
    )
    sys.stdout.write("\n")


@app.command()
def similar(
    job_title: str = typer.Argument(..., help="Job title to compare roles against"),
    candidates: Path = typer.Option(
        CANDIDATES_FILE, "--candidates", "-c", help="Path to candidates JSON file"
    ),
    no_embeddings: bool = typer.Option(
        False, "--no-embeddings", help="Use text similarity only"
    ),
) -> None:
    """List candidates whose roles resemble a job title."""
    source = _candidate_source(candidates)
    embedder = None if no_embeddings else FastEmbedEmbedder()

    async def _run():
        return await find_similar_candidates(job_title, await source.load(), embedder)

    results = asyncio.run(_run())
    if not results:
        console.print("[yellow]No similar candidates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Candidates similar to '{job_title}'")
    table.add_column("Name", style="cyan")
    table.add_column("Role")
    table.add_column("Similarity", style="green")
    for result in results:
        table.add_row(
            result.candidate.name or "-",
            result.candidate.current_role or "-",
            f"{result.similarity:.0%}",
        )
    console.print(table)


@app.command(name="generate-jd")
def generate_jd(
    title: str = typer.Option(..., "--title", help="Job title"),
    company: str | None = typer.Option(None, "--company", help="Hiring company"),
    location: str | None = typer.Option(None, "--location", "-l", help="Job location"),
    experience: str | None = typer.Option(None, "--experience", help="Experience required"),
    salary_range: str | None = typer.Option(None, "--salary", help="Salary range"),
    additional: str | None = typer.Option(
        None, "--requirements", help="Additional requirements"
    ),
    candidates: Path = typer.Option(
        CANDIDATES_FILE, "--candidates", "-c", help="Path to candidates JSON file"
    ),
    no_embeddings: bool = typer.Option(
        False, "--no-embeddings", help="Use text similarity only"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Draft a job description informed by similar candidates."""
    source = _candidate_source(candidates)
    service = JobDescriptionService(
        source,
        default_generator(),
        None if no_embeddings else FastEmbedEmbedder(),
    )
    inputs = JobDescriptionInputs(
        job_title=title,
        company=company,
        location=location,
        experience=experience,
        salary_range=salary_range,
        additional_requirements=additional,
    )

    try:
        jd = asyncio.run(service.generate(inputs, use_embeddings=not no_embeddings))
    except (InvalidSearchError, JobDescriptionError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(jd)
    else:
        _output_job_description(jd)


@app.command()
def info(
    candidates: Path = typer.Option(
        CANDIDATES_FILE, "--candidates", "-c", help="Path to candidates JSON file"
    ),
) -> None:
    """Display configuration and candidate pool statistics."""
    console.print("[bold cyan]TalentRank System Information[/bold cyan]\n")

    tables = get_lookup_tables()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("LLM", GROQ_MODEL if default_generator() else "Not configured")
    table.add_row("Embedding Model", EMBEDDING_MODEL)
    table.add_row("Lookup Tables", str(LOOKUP_TABLES_PATH))
    table.add_row("Known Roles", str(len(tables.known_roles)))
    table.add_row("Known Locations", str(len(tables.known_locations)))

    if candidates.exists():
        pool = asyncio.run(JsonFileCandidateSource(candidates).load())
        table.add_row("Candidates File", str(candidates))
        table.add_row("Total Candidates", str(len(pool)))
        table.add_row(
            "Unique Locations", str(len({c.location.lower() for c in pool if c.location}))
        )
    else:
        table.add_row("Candidates File", f"{candidates} (missing)")

    console.print(table)


def _output_json(response) -> None:
    """Output results as JSON to stdout."""
    if isinstance(response, list):
        output = [item.model_dump(mode="json", by_alias=True) for item in response]
    else:
        output = response.model_dump(mode="json", by_alias=True)
    json.dump(obj=output, fp=sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def _output_results(results: list[ScoredCandidate]) -> None:
    """Output results in pretty console format."""
    if not results:
        console.print("[yellow]No matching candidates found.[/yellow]")
        return

    console.print(f"\n[bold green]Found {len(results)} candidates![/bold green]\n")

    for i, result in enumerate(iterable=results, start=1):
        candidate = result.candidate

        header = f"[bold]#{i} {candidate.name or candidate.id or 'Unnamed'}[/bold]"
        if candidate.current_role:
            header += f" - {candidate.current_role}"

        content = [f"[cyan]Relevance:[/cyan] {result.match_percentage}%"]
        if candidate.location:
            content.append(f"[cyan]Location:[/cyan] {candidate.location}")
        if candidate.total_experience:
            content.append(f"[cyan]Experience:[/cyan] {candidate.total_experience}")

        if result.matching_criteria:
            content.append("\n[cyan]Why it's a match:[/cyan]")
            for criterion in result.matching_criteria:
                content.append(f"  • {criterion}")
        elif result.search_explanation:
            content.append(f"\n[cyan]Why it's a match:[/cyan] {result.search_explanation}")

        panel = Panel(
            renderable="\n".join(content),
            title=header,
            border_style="green" if i == 1 else "blue",
        )
        console.print(panel)


def _output_job_description(jd: JobDescription) -> None:
    """Output a drafted job description in pretty console format."""
    content = [
        f"[cyan]Company:[/cyan] {jd.company}",
        f"[cyan]Location:[/cyan] {jd.location}",
        f"[cyan]Type:[/cyan] {jd.type}",
        f"[cyan]Experience:[/cyan] {jd.experience}",
    ]
    if jd.salary:
        content.append(f"[cyan]Salary:[/cyan] {jd.salary}")
    content.append(f"\n{jd.description}")

    for heading, items in (
        ("Responsibilities", jd.responsibilities),
        ("Requirements", jd.requirements),
        ("Skills", jd.skills),
        ("Benefits", jd.benefits),
    ):
        if items:
            content.append(f"\n[cyan]{heading}:[/cyan]")
            content.extend(f"  • {item}" for item in items)

    if jd.insights and jd.insights.as_lines():
        content.append(f"\n[yellow]Based on {jd.matched_candidates} similar profiles:[/yellow]")
        content.extend(f"  • {line}" for line in jd.insights.as_lines())

    console.print(Panel(renderable="\n".join(content), title=f"[bold]{jd.title}[/bold]"))


if __name__ == "__main__":
    app()
