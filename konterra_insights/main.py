"""
Konterra Network Insights CLI

Command-line interface for analyzing a contact network snapshot.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()

SEVERITY_STYLE = {
    "high": "red",
    "medium": "yellow",
    "low": "dim",
}

TREND_STYLE = {
    "improving": "green",
    "stable": "cyan",
    "declining": "red",
}


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging with rich handler."""
    handlers = [RichHandler(console=console, show_path=False)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


def _load(input_path: str):
    """Load snapshot, exiting with a readable message on failure."""
    from konterra_insights.pipeline.ingest import load_snapshot

    try:
        return load_snapshot(input_path)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]Error loading snapshot: {e}[/red]")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--config", "-c",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to config.yaml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config_path: Optional[str]) -> None:
    """Konterra Network Insights - structure, risks and introductions for your contacts."""
    from konterra_insights.utils.config import load_config

    ctx.ensure_object(dict)

    config = load_config(Path(config_path) if config_path else None)
    ctx.obj["config"] = config

    if verbose:
        ctx.obj["log_level"] = "DEBUG"
    elif quiet:
        ctx.obj["log_level"] = "WARNING"
    else:
        ctx.obj["log_level"] = config.logging.level

    setup_logging(ctx.obj["log_level"], config.logging.file)


@cli.command()
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True),
    help="Snapshot JSON file or directory of CSV files",
)
@click.option(
    "--limit", "-n",
    default=None,
    type=int,
    help="Maximum introduction suggestions to list",
)
@click.option(
    "--json-out",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write the full report as JSON",
)
@click.pass_context
def analyze(
    ctx: click.Context,
    input_path: str,
    limit: Optional[int],
    json_out: Optional[str],
) -> None:
    """Analyze a snapshot and print the network insights."""
    from konterra_insights.insights.engine import NetworkInsightsEngine

    config = ctx.obj["config"]
    if limit is not None:
        config.introductions.limit = limit

    snapshot = _load(input_path)
    report = NetworkInsightsEngine(config).analyze(snapshot)

    console.print("\n[bold blue]Konterra Network Insights[/bold blue]")
    console.print("=" * 50)

    summary = report.summary
    trend = summary.health_trend.value
    console.print(f"\n[bold]{summary.top_insight}[/bold]")
    console.print(
        f"Actionable items: {summary.actionable_count}   "
        f"Trend: [{TREND_STYLE[trend]}]{trend}[/{TREND_STYLE[trend]}]"
    )

    metrics = summary.metrics
    table = Table(show_header=False, title="Network Metrics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Connections", str(metrics.total_connections))
    table.add_row("Density", f"{metrics.network_density:.1%}")
    table.add_row("Average strength", f"{metrics.average_strength:.2f}")
    table.add_row("Bidirectional", f"{metrics.bidirectional_ratio:.0%}")
    table.add_row("Contacts connected", f"{metrics.connected_contacts_ratio:.0%}")
    table.add_row("Clusters", str(len(report.clusters)))
    table.add_row("Isolated contacts", str(len(report.isolated_contacts)))
    table.add_row("Direct reach", str(report.reach.direct_reach))
    console.print(table)

    if report.hubs:
        table = Table(show_header=True, header_style="bold", title="Top Hubs")
        table.add_column("Name")
        table.add_column("Degree", justify="right")
        table.add_column("Avg strength", justify="right")
        table.add_column("Types")
        for hub in report.hubs:
            table.add_row(
                hub.contact.display_name,
                str(hub.degree),
                f"{hub.avg_strength:.1f}",
                ", ".join(t.value for t in hub.connection_types),
            )
        console.print(table)

    if report.risks:
        table = Table(show_header=True, header_style="bold", title="Risks")
        table.add_column("Severity")
        table.add_column("Type")
        table.add_column("Contact")
        table.add_column("Detail")
        for risk in report.risks:
            style = SEVERITY_STYLE[risk.severity.value]
            table.add_row(
                f"[{style}]{risk.severity.value}[/{style}]",
                risk.type.value,
                risk.contact.display_name,
                risk.description,
            )
        console.print(table)

    if report.introductions:
        table = Table(show_header=True, header_style="bold", title="Suggested Introductions")
        table.add_column("#", justify="right")
        table.add_column("Contact A")
        table.add_column("Contact B")
        table.add_column("Score", justify="right")
        table.add_column("Why")
        for i, s in enumerate(report.introductions, 1):
            table.add_row(
                str(i),
                s.contact_a.display_name,
                s.contact_b.display_name,
                str(s.score),
                "; ".join(s.reasons),
            )
        console.print(table)

    if json_out:
        Path(json_out).write_text(report.model_dump_json(indent=2))
        console.print(f"\n[dim]Full report: {json_out}[/dim]")

    console.print()


@cli.command()
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True),
    help="Snapshot JSON file or directory of CSV files",
)
@click.pass_context
def stats(ctx: click.Context, input_path: str) -> None:
    """Show contact-level statistics for a snapshot."""
    from konterra_insights.insights.activity import recent_activity
    from konterra_insights.insights.engine import NetworkInsightsEngine

    snapshot = _load(input_path)
    data = NetworkInsightsEngine(ctx.obj["config"]).dashboard_stats(snapshot)

    console.print("\n[bold blue]Contact Statistics[/bold blue]")
    console.print("=" * 50)

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Contacts", str(data["total_contacts"]))
    table.add_row("Countries", str(data["countries_covered"]))
    table.add_row("Cities", str(data["cities_covered"]))
    table.add_row("Stale contacts", str(data["stale_contacts"]))
    table.add_row("Overdue follow-ups", str(data["overdue_follow_ups"]))
    table.add_row("Health score", f"{data['health_score']}/100")
    console.print(table)

    if data["top_countries"]:
        table = Table(show_header=True, header_style="bold", title="Top Countries")
        table.add_column("Country")
        table.add_column("Contacts", justify="right")
        for row in data["top_countries"]:
            table.add_row(row["country"], str(row["count"]))
        console.print(table)

    table = Table(show_header=True, header_style="bold", title="Monthly Activity")
    table.add_column("Month")
    table.add_column("Interactions", justify="right")
    for row in data["monthly_trend"]:
        table.add_row(row["month"], str(row["count"]))
    console.print(table)

    latest = recent_activity(snapshot.interactions, limit=5)
    if latest:
        console.print("\n[bold]Latest interactions:[/bold]")
        for interaction in latest:
            contact = snapshot.get_contact(interaction.contact_id)
            name = contact.display_name if contact else interaction.contact_id
            console.print(
                f"  • {interaction.date:%Y-%m-%d} {interaction.type.value} with {name}"
            )

    console.print()


@cli.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from konterra_insights import __version__

    console.print(f"Konterra Network Insights v{__version__}")


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
