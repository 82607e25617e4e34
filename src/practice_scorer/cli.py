"""CLI for the OctoFlow Assessment Engine.

Provides a command-line interface for scoring engineering practice
questionnaires against stage benchmarks.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from practice_catalog.schema import Question, Stage

from .config import find_config_file, load_config
from .engine import AssessmentEngine, validate_catalog, validate_responses
from .schema import AssessmentResult, Response
from .store import JsonFileResponseStore

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
STAGE_CHOICES = [s.value for s in Stage.ordered()]
DEFAULT_STORE_DIR = ".octoflow/sessions"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version="1.0.0", prog_name="octoflow")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    help="Logging verbosity"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to octoflow-config.yaml (default: search standard locations)"
)
def main(log_level: str, config_path: Optional[Path]):
    """OctoFlow Engineering Practice Assessment.

    Scores questionnaire answers against maturity-stage benchmarks and
    returns prioritized recommendations.
    """
    _configure_logging(log_level)
    path = config_path or find_config_file()
    if path:
        load_config(path)
        logging.getLogger(__name__).info("Loaded configuration from %s", path)


def _make_engine(catalog: Optional[str], catalog_url: Optional[str]) -> AssessmentEngine:
    engine = AssessmentEngine()
    if catalog:
        engine.load_catalog(catalog)
    elif catalog_url:
        engine.load_catalog_url(catalog_url)
    return engine


@main.command("assess")
@click.option(
    "--stage", "-s",
    required=True,
    type=click.Choice(STAGE_CHOICES, case_sensitive=False),
    help="Maturity stage to assess against"
)
@click.option(
    "--responses", "-r",
    type=click.Path(exists=True),
    help="Path to a responses JSON file"
)
@click.option(
    "--session",
    help="Stored session id to read (and update with interactive answers)"
)
@click.option(
    "--store-dir",
    type=click.Path(),
    default=DEFAULT_STORE_DIR,
    show_default=True,
    help="Directory of the session store"
)
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to a practice catalog (default: built-in catalog)"
)
@click.option(
    "--catalog-url",
    help="HTTPS URL of a practice catalog"
)
@click.option(
    "--context", "-x",
    type=click.Path(exists=True),
    help="Path to a repository context JSON file"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results (default: stdout)"
)
@click.option(
    "--max-recommendations", "-n",
    default=5,
    type=int,
    help="Maximum number of recommendations to display"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--interactive/--no-interactive", "-i/-I",
    default=False,
    help="Prompt for unanswered questions before scoring"
)
def assess_cmd(
    stage: str,
    responses: Optional[str],
    session: Optional[str],
    store_dir: str,
    catalog: Optional[str],
    catalog_url: Optional[str],
    context: Optional[str],
    out: Optional[str],
    max_recommendations: int,
    json_output: bool,
    interactive: bool,
):
    """Assess questionnaire responses for a stage.

    Examples:
        octoflow assess -s seed -r responses.json
        octoflow assess -s series-a -r responses.json -x repo-context.json -j
        octoflow assess -s seed --session team-a --interactive
    """
    try:
        engine = _make_engine(catalog, catalog_url)
        store = JsonFileResponseStore(store_dir) if session else None

        answers: dict = {}
        if store:
            answers.update({qid: r.model_dump() for qid, r in store.load(session).items()})
        if responses:
            answers.update(_read_responses(responses))

        repo_context = None
        if context:
            with open(context, "r", encoding="utf-8") as f:
                repo_context = json.load(f)

        if interactive and not json_output:
            unanswered = [q for q in engine.get_questions(stage) if q.id not in answers]
            new_answers = prompt_for_answers(unanswered)
            for question_id, value in new_answers.items():
                answers[question_id] = value
                if store:
                    store.record(session, Response(question_id=question_id, value=value))

        result = engine.evaluate(answers, stage, context=repo_context)

        if json_output:
            output_json(result, out)
        else:
            display_result(result, max_recommendations)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("questions")
@click.option(
    "--stage", "-s",
    required=True,
    type=click.Choice(STAGE_CHOICES, case_sensitive=False),
    help="Maturity stage"
)
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to a practice catalog (default: built-in catalog)"
)
def questions_cmd(stage: str, catalog: Optional[str]):
    """List the questions asked at a stage."""
    try:
        engine = _make_engine(catalog, None)
        questions = engine.get_questions(stage)

        console.print(f"\n[bold]Questions for {stage} ({len(questions)}):[/bold]\n")

        for i, q in enumerate(questions, 1):
            console.print(f"[bold cyan]{i}. {q.text}[/bold cyan]")
            console.print(f"   ID: {q.id}  Category: {engine.catalog.category_title(q.category)}  Weight: {q.weight}")
            for opt in q.options:
                console.print(f"     {opt.value}: {opt.text}")
            console.print()

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--catalog", "-c",
    type=click.Path(),
    help="Path to a practice catalog file"
)
@click.option(
    "--responses", "-r",
    type=click.Path(),
    help="Path to a responses JSON file"
)
def validate_cmd(catalog: Optional[str], responses: Optional[str]):
    """Validate catalog and/or responses files.

    Responses are checked against the given catalog, or the built-in
    one when no catalog is given.

    Examples:
        octoflow validate -c catalog.json
        octoflow validate -r responses.json
        octoflow validate -c catalog.yaml -r responses.json
    """
    if not catalog and not responses:
        console.print("[yellow]Please specify --catalog and/or --responses to validate[/yellow]")
        return

    all_valid = True
    loaded_catalog = None

    if catalog:
        is_valid, issues, loaded_catalog = validate_catalog(catalog)
        if is_valid:
            console.print(f"[green]✓ Catalog valid: {catalog}[/green]")
        else:
            console.print(f"[red]✗ Catalog invalid: {catalog}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    if responses:
        is_valid, issues, count = validate_responses(responses, loaded_catalog)
        if is_valid:
            console.print(f"[green]✓ Responses valid: {responses} ({count} answers)[/green]")
        else:
            console.print(f"[red]✗ Responses invalid: {responses}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    sys.exit(0 if all_valid else 1)


@main.command("inspect")
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to a practice catalog (default: built-in catalog)"
)
@click.option(
    "--id", "rec_id",
    help="Show details for a specific recommendation ID"
)
@click.option(
    "--category",
    help="Filter recommendations by category"
)
def inspect_cmd(catalog: Optional[str], rec_id: Optional[str], category: Optional[str]):
    """Inspect the practice catalog.

    Shows categories, stage benchmarks and recommendations.
    """
    try:
        engine = _make_engine(catalog, None)
        cat = engine.catalog

        if rec_id:
            rec = cat.get_recommendation(rec_id)
            if not rec:
                console.print(f"[red]Recommendation not found: {rec_id}[/red]")
                return
            display_recommendation_detail(rec)
            return

        console.print(f"\n[bold blue]Practice Catalog[/bold blue]")
        console.print(f"Version: {cat.version}")
        console.print(f"Questions: {len(cat.questions)}  Recommendations: {len(cat.recommendations)}")
        console.print()

        bench_table = Table(title="Stage Benchmarks", show_header=True, header_style="bold")
        bench_table.add_column("Category", style="cyan")
        for benchmark in cat.benchmarks:
            bench_table.add_column(benchmark.label or benchmark.stage.value, justify="right")
        for c in cat.categories:
            bench_table.add_row(
                c.title,
                *[
                    f"{b.expected_scores[c.id]:.0f}" if c.id in b.expected_scores else "-"
                    for b in cat.benchmarks
                ],
            )
        console.print(bench_table)

        filtered = cat.recommendations
        if category:
            filtered = [r for r in filtered if r.category == category.lower()]

        table = Table(title="Recommendations", show_header=True, header_style="bold")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Category")
        table.add_column("Impact")
        table.add_column("Effort")
        table.add_column("Stage")
        table.add_column("Range")

        for rec in filtered:
            score_range = rec.applicable_score_range
            table.add_row(
                rec.id,
                rec.category,
                rec.impact.value,
                rec.effort.value,
                rec.stage.value if rec.stage else "any",
                f"{score_range.min:.0f}-{score_range.max:.0f}" if score_range else "gap",
            )
        console.print(table)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="octoflow-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default configuration file.

    Example:
        octoflow init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • level_thresholds - Scores needed for Basic/Proactive/Advanced")
        console.print("  • summary_thresholds - When a category is a strength or weakness")
        console.print("  • priority_multipliers - Context boosts for recommendation priority")
        console.print("  • next_steps - How many actions are immediate or short term")
        console.print("\nOctoFlow will look for config in this order:")
        console.print("  1. OCTOFLOW_CONFIG environment variable")
        console.print("  2. ./octoflow-config.yaml (current directory)")
        console.print("  3. ~/.config/octoflow/config.yaml")
    except OSError as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def _read_responses(path: str):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # Accept {"responses": ...} as written by the session store
    if isinstance(data, dict) and "responses" in data:
        data = data["responses"]
    if isinstance(data, list):
        return {
            item.get("question_id"): item
            for item in data
            if isinstance(item, dict) and item.get("question_id")
        }
    return data


def prompt_for_answers(questions: list[Question]) -> dict[str, int]:
    """Interactively prompt for answers to unanswered questions."""
    answers: dict[str, int] = {}
    if not questions:
        return answers

    console.print("\n[bold yellow]━━━ Unanswered Questions ━━━[/bold yellow]")
    console.print("[dim]Press Ctrl+C to stop and score what you have.[/dim]\n")

    for i, q in enumerate(questions, 1):
        console.print(f"[bold cyan]{i}. {q.text}[/bold cyan]")
        for opt in q.options:
            console.print(f"   [bold]{opt.value}[/bold]. {opt.text}")
        console.print()

        try:
            value = click.prompt(
                "   Select [1-4, 0 to skip]",
                type=click.IntRange(0, 4),
                default=0,
            )
        except click.Abort:
            console.print("\n[yellow]Skipping remaining questions...[/yellow]")
            break

        if value:
            answers[q.id] = value
            console.print(f"   [green]✓ Selected: {value}[/green]\n")

    console.print("[bold yellow]━━━━━━━━━━━━━━━━━━━━━━━━━━━━[/bold yellow]\n")
    return answers


def display_result(result: AssessmentResult, max_recommendations: int = 5):
    """Display an assessment result in formatted text."""
    level_color = {
        "Advanced": "green",
        "Proactive": "cyan",
        "Basic": "yellow",
        "Initial": "red",
    }.get(result.level.value, "white")

    console.print(Panel(
        f"Stage: [bold]{result.stage.value}[/bold]\n\n"
        f"Overall Score: [bold]{result.overall_score:.0f}%[/bold]\n"
        f"Level: [{level_color}]{result.level.value}[/{level_color}]\n"
        f"{result.level_description}\n\n"
        f"Answered: {result.answered_count}/{result.applicable_count} "
        f"({result.completion_rate * 100:.0f}%)",
        title="Assessment Summary",
    ))

    if result.category_scores:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Category", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Benchmark", justify="right")
        table.add_column("Gap", justify="right")
        table.add_column("Answered", justify="right")

        for category, score in result.category_scores.items():
            benchmark = result.benchmarks.get(category)
            gap = result.benchmark_gaps.get(category)
            gap_text = "-"
            if gap is not None:
                gap_text = f"[red]{gap:.0f}[/red]" if gap > 0 else f"[green]{gap:.0f}[/green]"
            table.add_row(
                score.title or category,
                f"{score.normalized:.0f}",
                f"{benchmark:.0f}" if benchmark is not None else "-",
                gap_text,
                f"{score.answered}/{score.applicable}",
            )
        console.print(table)

    if result.strengths:
        console.print("\n[bold]Strengths:[/bold]")
        for item in result.strengths:
            console.print(f"  [green]•[/green] {item}")

    if result.weaknesses:
        console.print("\n[bold]Weaknesses:[/bold]")
        for item in result.weaknesses:
            console.print(f"  [yellow]•[/yellow] {item}")

    if result.action_plan:
        console.print("\n[bold]Top Recommendations:[/bold]\n")
        quick_win_ids = {r.id for r in result.quick_wins}
        for i, detail in enumerate(result.action_plan[:max_recommendations], 1):
            badge = " [green]quick win[/green]" if detail.id in quick_win_ids else ""
            console.print(
                f"  [bold cyan]{i}. {detail.title}[/bold cyan] "
                f"[dim]({detail.impact.value} impact, {detail.effort.value} effort)[/dim]{badge}"
            )
            console.print(f"     {detail.business_impact}")
            console.print(f"     [dim]Estimated time: {detail.estimated_time}[/dim]")
            console.print()

        if len(result.action_plan) > max_recommendations:
            console.print(f"[dim]... and {len(result.action_plan) - max_recommendations} more[/dim]")

    if result.implementation_plan.phases:
        titles = {d.id: d.title for d in result.action_plan}
        tree = Tree(f"[bold]{result.implementation_plan.title}[/bold]")
        for phase in result.implementation_plan.phases:
            branch = tree.add(f"[bold]{phase.name}[/bold] [dim]({phase.estimated_effort})[/dim]")
            for rec_id in phase.recommendation_ids:
                branch.add(titles.get(rec_id, rec_id))
        console.print()
        console.print(tree)

    if result.processing_warnings:
        console.print("\n[dim]Warnings:[/dim]")
        for warning in result.processing_warnings:
            console.print(f"  [dim]• {warning}[/dim]")


def display_recommendation_detail(rec):
    """Display detailed recommendation information."""
    tree = Tree(f"[bold cyan]{rec.title}[/bold cyan]")

    identity = tree.add("[bold]Identity[/bold]")
    identity.add(f"ID: {rec.id}")
    identity.add(f"Category: {rec.category}")
    identity.add(f"Impact: {rec.impact.value}")
    identity.add(f"Effort: {rec.effort.value}")
    identity.add(f"Automatable: {'yes' if rec.automatable else 'no'}")

    selection = tree.add("[bold]Selection[/bold]")
    selection.add(f"Stage: {rec.stage.value if rec.stage else 'any'}")
    selection.add("When: category below benchmark")
    if rec.applicable_score_range:
        selection.add(
            f"Or when: score in {rec.applicable_score_range.min:.0f}-{rec.applicable_score_range.max:.0f}"
        )

    if rec.description:
        tree.add(rec.description)

    if rec.action_items:
        steps = tree.add("[bold]Action Items[/bold]")
        for item in rec.action_items:
            steps.add(item)

    if rec.resources:
        resources = tree.add("[bold]Resources[/bold]")
        for resource in rec.resources:
            resources.add(f"{resource.title}: {resource.url}")

    console.print(tree)


def output_json(result: AssessmentResult, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)
