"""CLI for strava-rewriter.

Translates Russian "time of day + sport" Strava activity titles into English
for every activity in a date range.

Usage example:

    strava-rewriter -accessToken <access_token> -from 2021-01-01 -to 2021-12-31
"""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from strava_rewriter.config.settings import settings
from strava_rewriter.core.logger import setup_logger
from strava_rewriter.integrations.strava.client import StravaClient
from strava_rewriter.integrations.strava.errors import InvalidArgumentError, StravaError
from strava_rewriter.integrations.strava.rate_limiter import IntervalRateLimiter
from strava_rewriter.rewrite.service import rewrite_activities
from strava_rewriter.rewrite.types import PageErrorPolicy, RewriteSummary

# Initialize Rich console for output
console = Console()

app = typer.Typer(
    name="strava-rewriter",
    help="Translate Strava activity titles from Russian to English.",
    add_completion=False,
)

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_FROM = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass
class RewriteConfig:
    """Configuration for one rewrite run."""

    access_token: str
    since: datetime
    until: datetime
    debug: bool
    dry_run: bool
    on_page_error: PageErrorPolicy


def _setup_logging(debug: bool = False) -> None:
    """Set up console logging, plus a file sink when LOG_FILE is set."""
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


def _as_utc(value: datetime | None, default: datetime) -> datetime:
    if value is None:
        return default
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _usage_error(ctx: typer.Context, message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}\n")
    typer.echo(ctx.get_help())
    raise typer.Exit(2)


def _build_client(config: RewriteConfig) -> StravaClient:
    return StravaClient(
        config.access_token,
        debug=config.debug,
        rate_limiter=IntervalRateLimiter(settings.strava_rate_limit_interval_seconds),
    )


async def _run_rewrite_async(config: RewriteConfig) -> RewriteSummary:
    async with _build_client(config) as client:
        return await rewrite_activities(
            client,
            since=config.since,
            until=config.until,
            on_page_error=config.on_page_error,
            dry_run=config.dry_run,
        )


def _print_summary(summary: RewriteSummary) -> None:
    athlete = summary.athlete
    who = " ".join(part for part in (athlete.first_name, athlete.last_name) if part) or str(athlete.id)
    verb = "Would rename" if summary.dry_run else "Renamed"
    console.print(
        Panel(
            f"Athlete: {escape(who)}\nActivities fetched: {summary.fetched}\n{verb}: {summary.renamed}",
            title="Dry run" if summary.dry_run else "Done",
        )
    )


@app.command()
def rewrite(
    ctx: typer.Context,
    access_token: str = typer.Option(
        "",
        "--access-token",
        "-accessToken",
        help="Strava access_token with read and write activities permissions.",
    ),
    from_date: datetime | None = typer.Option(
        None, "--from", "-from", formats=[DATE_FORMAT], help="Start date in format 'YYYY-MM-DD'."
    ),
    to_date: datetime | None = typer.Option(
        None, "--to", "-to", formats=[DATE_FORMAT], help="Finish date in format 'YYYY-MM-DD'."
    ),
    debug: bool = typer.Option(False, "--debug", "-debug", help="Print debug information."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only log the renames, do not update Strava."),
    on_page_error: PageErrorPolicy = typer.Option(
        settings.on_page_error,
        "--on-page-error",
        help="Stop paginating (stop) or fail the run (abort) when a page fetch fails.",
    ),
) -> None:
    """Rename activities between --from and --to whose titles can be translated."""
    _setup_logging(debug=debug)

    token = access_token or settings.strava_access_token
    if not token:
        _usage_error(ctx, "Access token is required")

    tomorrow = datetime.now(UTC).replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
    config = RewriteConfig(
        access_token=token,
        since=_as_utc(from_date, DEFAULT_FROM),
        until=_as_utc(to_date, tomorrow),
        debug=debug,
        dry_run=dry_run,
        on_page_error=on_page_error,
    )
    if config.until <= config.since:
        _usage_error(ctx, f"--to ({config.until:%Y-%m-%d}) must be after --from ({config.since:%Y-%m-%d})")

    try:
        summary = asyncio.run(_run_rewrite_async(config))
    except InvalidArgumentError as e:
        logger.error(f"Invalid arguments: {e}")
        raise typer.Exit(2) from e
    except StravaError as e:
        logger.error(f"Rewrite failed: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    _print_summary(summary)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
