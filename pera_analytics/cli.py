"""
Command line interface for Pera Analytics.

Usage:
    pera-analytics --data backup.json leaderboard
    pera-analytics --data backup.json athlete <athlete_id>
    pera-analytics --data backup.json records --event 3 --all --year 2025
    pera-analytics --data backup.json report session <session_id>
    pera-analytics standards
"""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from pera_analytics.config import settings
from pera_analytics.features.club import ClubRepository
from pera_analytics.features.events import sort_events_by_distance
from pera_analytics.features.records import RecordFilters, filter_records
from pera_analytics.shared.constants import RecordMode
from pera_analytics.shared.exceptions import PeraAnalyticsError
from pera_analytics.shared.formatters import format_distance, format_time, ordinal

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--data",
    "data_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON snapshot (defaults to PERA_DATA_FILE; standards only when unset)",
)
@click.pass_context
def cli(ctx, data_file):
    """Scoring and ranking tools for the running club."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    path = data_file or settings.data_file
    try:
        ctx.obj = ClubRepository.load(path)
        logger.debug("Loaded club data from %s", path or "default standards")
    except ValidationError as e:
        raise click.ClickException(f"Invalid snapshot {path}: {e}")


@cli.command()
@click.pass_obj
def leaderboard(club):
    """Active athletes ranked by average points."""
    rows = club.rankings().leaderboard()
    if not rows:
        click.echo("No active athletes.")
        return

    click.echo(f"{'#':>3} | {'Athlete':24} | {'Avg':>5} | {'Total':>6} | {'Races':>5}")
    click.echo("-" * 56)
    for row in rows:
        click.echo(
            f"{row.rank:>3} | {row.athlete.name[:24]:24} | {row.average_points:>5} | "
            f"{row.total_points:>6} | {row.races_run:>5}"
        )


@cli.command()
@click.argument("athlete_id")
@click.pass_obj
def athlete(club, athlete_id):
    """Profile statistics for one athlete."""
    try:
        stats = club.rankings().athlete_stats(athlete_id)
    except PeraAnalyticsError as e:
        raise click.ClickException(str(e))

    rank = f"#{stats.rank}" if stats.rank else "unranked"
    best = f"#{stats.career.best_rank}" if stats.career.best_rank else "-"
    click.echo(f"{stats.athlete.name} ({'active' if stats.athlete.is_active else 'retired'})")
    click.echo(f"Rank:          {rank}")
    click.echo(f"Average:       {stats.average_points} pts ({stats.total_points} total)")
    click.echo(f"Races:         {stats.races_run} (wins: {stats.wins}, podiums: {stats.podiums})")
    click.echo(f"Distance:      {format_distance(stats.total_distance_m)}")
    click.echo(f"Peak rank:     {best}")
    click.echo(f"Peak average:  {stats.career.highest_avg} pts")

    if stats.badges:
        click.echo()
        click.echo("Badges:")
        for badge in stats.badges:
            click.echo(f"  - {badge.name}: {badge.description}")

    if stats.recent_results:
        click.echo()
        click.echo("History:")
        for r in stats.recent_results:
            click.echo(
                f"  {r.date}  {r.session_name[:28]:28} {format_time(r.time):>9}  "
                f"{r.points:>5} pts  {ordinal(r.rank):>5}  {', '.join(r.tags)}"
            )


@cli.command()
@click.option("--event", "event_id", default=None, help="Event standard id")
@click.option("--route", "route_id", default=None, help="Route id")
@click.option("--all", "show_all", is_flag=True, help="Every performance instead of one best per athlete")
@click.option("--faculty", default=None, help="Only athletes from this faculty")
@click.option("--batch", default=None, help="Only athletes from this batch")
@click.option("--athlete", "athlete_id", default=None, help="Only this athlete")
@click.option("--year", default=None, help="Only performances from this year")
@click.pass_obj
def records(club, event_id, route_id, show_all, faculty, batch, athlete_id, year):
    """Event or course records leaderboard."""
    if bool(event_id) == bool(route_id):
        raise click.UsageError("Pass exactly one of --event or --route")

    mode = RecordMode.ALL if show_all else RecordMode.BEST
    aggregator = club.records()
    if event_id:
        rows = aggregator.event_records(event_id, mode)
    else:
        rows = aggregator.course_records(route_id, mode)

    rows = filter_records(
        rows, RecordFilters(faculty=faculty, batch=batch, athlete_id=athlete_id, year=year)
    )
    if not rows:
        click.echo("No records found.")
        return

    for position, row in enumerate(rows, start=1):
        points = f"{row.points} pts" if row.points is not None else "-"
        click.echo(
            f"{position:>3}. {row.athlete.name[:24]:24} {format_time(row.time):>9}  "
            f"{row.date or '-':10}  {points:>8}  {row.venue or ''}"
        )


@cli.command()
@click.argument("kind", type=click.Choice(["team", "session", "athlete"]))
@click.argument("subject_id", required=False)
@click.pass_obj
def report(club, kind, subject_id):
    """Coaching report context (team, session or athlete)."""
    builder = club.reports()
    if kind == "team":
        click.echo(builder.team_summary())
        return

    if not subject_id:
        raise click.UsageError(f"{kind} report needs a SUBJECT_ID")
    try:
        if kind == "session":
            click.echo(builder.session_summary(subject_id))
        else:
            click.echo(builder.athlete_summary(subject_id))
    except PeraAnalyticsError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.pass_obj
def standards(club):
    """Event standards, shortest distance first."""
    for standard in sort_events_by_distance(club.standards):
        click.echo(
            f"{standard.id:>4}  {standard.name:12} Gold={format_time(standard.gold_time):>9}  "
            f"k={standard.k_value:g}"
        )


if __name__ == "__main__":
    cli()
