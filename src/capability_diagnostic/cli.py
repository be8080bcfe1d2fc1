"""CLI for the Capability Diagnostic.

Provides command-line interface for evaluating a self-assessment
submission and reviewing the derived gaps and risk signals.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import find_config_file, get_config, load_config, save_default_config
from .domains import DOMAINS, domain_label
from .engine import DiagnosticEngine, load_input, validate_input_file
from .schema import DiagnosticInput, DiagnosticResult

console = Console()

LEVEL_COLORS = {
    "Info": "blue",
    "Watch": "yellow",
    "Concern": "red",
}

BAND_COLORS = {
    "Emerging": "red",
    "Developing": "yellow",
    "Established": "cyan",
    "Leading": "green",
}


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr, at DEBUG when verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("capability_diagnostic")
    logger.setLevel(level)

    for old in list(logger.handlers):
        logger.removeHandler(old)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)


@click.group()
@click.version_option(version="1.0.0", prog_name="capability-diagnostic")
def main():
    """AI Capability Gaps & Risk Diagnostic.

    Interprets a reflective six-domain self-assessment and returns a
    capability band with explainable risk signals for discussion.
    """
    pass


@main.command("evaluate")
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to diagnostic-config.yaml (default: search standard locations)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output and debug logging"
)
def evaluate_cmd(
    input_file: str,
    config: Optional[str],
    out: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Evaluate a diagnostic submission (JSON or YAML).

    Examples:
        capability-diagnostic evaluate team.json
        capability-diagnostic evaluate team.yaml -v
        capability-diagnostic evaluate team.json -j -o result.json
    """
    configure_logging(verbose)

    try:
        config_path = Path(config) if config else find_config_file()
        cfg = load_config(config_path) if config_path else get_config()

        inputs = load_input(input_file)
        result = DiagnosticEngine(cfg).evaluate(inputs)

        if json_output:
            output_json(result, out)
        else:
            display_result(inputs, result, verbose)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {escape(out)}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        issues = getattr(e, "issues", None)
        if issues:
            for issue in issues:
                console.print(f"  - {escape(issue)}")
        sys.exit(1)


@main.command("validate")
@click.argument("input_file", type=click.Path())
def validate_cmd(input_file: str):
    """Validate a submission file without evaluating it.

    Examples:
        capability-diagnostic validate team.json
    """
    is_valid, issues = validate_input_file(input_file)
    if is_valid:
        console.print(f"[green]✓ Submission valid: {escape(input_file)}[/green]")
    else:
        console.print(f"[red]✗ Submission invalid: {escape(input_file)}[/red]")
        for issue in issues:
            console.print(f"  - {escape(issue)}")

    sys.exit(0 if is_valid else 1)


@main.command("domains")
def domains_cmd():
    """List the six capability domains."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Domain")
    table.add_column("Description")

    for d in DOMAINS:
        table.add_row(d.key.value, d.label, d.description)

    console.print(table)


@main.command("init-config")
@click.argument("path", type=click.Path(), default="diagnostic-config.yaml")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init_config_cmd(path: str, force: bool):
    """Write the default configuration to PATH."""
    target = Path(path)
    if target.exists() and not force:
        console.print(f"[yellow]{escape(str(target))} already exists (use --force to overwrite)[/yellow]")
        sys.exit(1)

    save_default_config(target)
    console.print(f"[green]Default configuration written to {escape(str(target))}[/green]")


def output_json(result: DiagnosticResult, out: Optional[str]):
    """Write the result as JSON to a file or stdout."""
    data = result.model_dump(mode="json")
    text = json.dumps(data, indent=2, ensure_ascii=False)

    if out:
        Path(out).write_text(text, encoding="utf-8")
    else:
        click.echo(text)


def display_result(inputs: DiagnosticInput, result: DiagnosticResult, verbose: bool):
    """Display a diagnostic result in formatted text."""
    band_color = BAND_COLORS.get(result.band.value, "white")
    notes = f" [dim]- {escape(inputs.context_notes)}[/dim]" if inputs.context_notes else ""

    console.print(Panel(
        f"[bold]{escape(result.org_name)}[/bold]{notes}\n\n"
        f"Overall band: [{band_color}]{result.band.value}[/{band_color}]\n"
        f"Average score: [bold]{result.average_score}/4[/bold]\n"
        f"Signals: {len(result.signals)} (highest: {result.highest_level().value})",
        title="Diagnostic Summary",
    ))

    # Domain scores
    table = Table(show_header=True, header_style="bold")
    table.add_column("Domain")
    table.add_column("Score", justify="right")
    if inputs.coverage is not None and not inputs.coverage.is_empty():
        table.add_column("Coverage", justify="right")
        for stat in result.domain_stats:
            value = inputs.coverage.get(stat.key)
            table.add_row(stat.label, f"{stat.score}/4", f"{value:g}%" if value is not None else "-")
    else:
        for stat in result.domain_stats:
            table.add_row(stat.label, f"{stat.score}/4")
    console.print(table)

    summary = result.summary
    console.print("\n[bold]Strength signals:[/bold]")
    for item in summary.strengths:
        console.print(f"  [green]•[/green] {item}")

    console.print("\n[bold]Gap signals:[/bold]")
    for item in summary.gaps:
        console.print(f"  [yellow]•[/yellow] {item}")

    if summary.stabilisers:
        console.print("\n[bold]Stabilisers already present:[/bold]")
        for item in summary.stabilisers:
            console.print(f"  [cyan]•[/cyan] {item}")

    console.print("\n[bold]Gaps & risk signals:[/bold]\n")
    for i, signal in enumerate(result.signals, 1):
        color = LEVEL_COLORS.get(signal.level.value, "white")
        console.print(f"  [bold]{i}. [{color}]\\[{signal.level.value}][/{color}] {signal.title}[/bold]")
        console.print(f"     {signal.rationale}")
        if signal.related_domains:
            labels = "; ".join(domain_label(k) for k in signal.related_domains)
            console.print(f"     [dim]Related domains: {labels}[/dim]")
        if verbose:
            console.print(f"     [dim]ID: {signal.id}[/dim]")
        console.print("     Discussion prompts:")
        for prompt in signal.prompts:
            console.print(f"       - {prompt}")
        console.print()

    console.print(
        "[dim]This output is reflective and interpretive. It is not a compliance audit, "
        "risk register, or automated decision system.[/dim]"
    )


if __name__ == "__main__":
    main()
