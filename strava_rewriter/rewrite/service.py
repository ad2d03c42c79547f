"""Rewrite Strava activity titles for one athlete.

Pages through the athlete's activities in a date range, translates titles
and pushes the changed ones back. Update failures are fail-fast: the first
failed PUT stops the run.
"""

from __future__ import annotations

import datetime as dt

from loguru import logger

from strava_rewriter.integrations.strava.client import StravaClient
from strava_rewriter.integrations.strava.errors import InvalidArgumentError, StravaError
from strava_rewriter.integrations.strava.schemas import SummaryActivity
from strava_rewriter.rewrite.types import PageErrorPolicy, RewriteSummary
from strava_rewriter.translate.translator import Translator


async def collect_activities(
    client: StravaClient,
    *,
    since: dt.datetime,
    until: dt.datetime,
    on_page_error: PageErrorPolicy = PageErrorPolicy.STOP,
) -> list[SummaryActivity]:
    """Fetch every page of activities between since and until.

    Stops on an empty page or when the last page was not full. A failed page
    either ends pagination (STOP) or propagates (ABORT). An invalid range always
    propagates.
    """
    collected: list[SummaryActivity] = []
    page = 1

    while True:
        try:
            activities, has_more = await client.list_activities(since=since, until=until, page=page)
        except InvalidArgumentError:
            raise
        except StravaError as e:
            if on_page_error is PageErrorPolicy.ABORT:
                raise
            logger.warning(f"[REWRITE] Failed to get activities for page={page}: {e}")
            break

        if not activities:
            break

        collected.extend(activities)
        if not has_more:
            break
        page += 1

    return collected


async def rewrite_activity_names(
    client: StravaClient,
    activities: list[SummaryActivity],
    *,
    translator: Translator,
    dry_run: bool = False,
) -> int:
    renamed = 0

    for activity in activities:
        logger.debug(f"[REWRITE] Activity: {activity!r}")

        new_name = translator.activity_name(activity.name)
        if new_name == activity.name:
            continue

        if dry_run:
            logger.info(f"[REWRITE] Would rename activity={activity.id}: {activity.name!r} -> {new_name!r}")
        else:
            logger.info(f"[REWRITE] Renaming activity={activity.id}: {activity.name!r} -> {new_name!r}")
            await client.update_activity(activity.id, new_name)
        renamed += 1

    return renamed


async def rewrite_activities(
    client: StravaClient,
    *,
    since: dt.datetime,
    until: dt.datetime,
    translator: Translator | None = None,
    on_page_error: PageErrorPolicy = PageErrorPolicy.STOP,
    dry_run: bool = False,
) -> RewriteSummary:
    """Translate titles of all activities between since and until.

    Args:
        client: Authenticated Strava client
        since: Range start (exclusive, as Strava's `after`)
        until: Range end (exclusive, as Strava's `before`)
        translator: Title translator, defaults to Russian to English
        on_page_error: What to do when a page fetch fails
        dry_run: Log renames without sending them

    Returns:
        RewriteSummary with the athlete and counters

    Raises:
        StravaError: If the athlete fetch or any update fails, or a page fetch fails under ABORT
    """
    translator = translator or Translator()

    athlete = await client.get_athlete()
    logger.info(f"[REWRITE] Current logged in athlete: {athlete!r}")

    activities = await collect_activities(client, since=since, until=until, on_page_error=on_page_error)
    logger.info(f"[REWRITE] Number of activities from {since} to {until}: {len(activities)}")

    renamed = await rewrite_activity_names(client, activities, translator=translator, dry_run=dry_run)
    logger.info(f"[REWRITE] Number of {'translatable' if dry_run else 'translated'} activities: {renamed}")

    return RewriteSummary(athlete=athlete, fetched=len(activities), renamed=renamed, dry_run=dry_run)
