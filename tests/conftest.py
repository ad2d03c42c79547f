"""Root conftest for all tests.

Shared fixtures: a loguru capture sink, a factory for StravaClient instances
backed by httpx.MockTransport, and an in-memory StravaClient for driver and
CLI tests.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable

import httpx
import pytest
from loguru import logger

from strava_rewriter.integrations.strava.client import PER_PAGE, StravaClient
from strava_rewriter.integrations.strava.errors import InvalidArgumentError, UpstreamError
from strava_rewriter.integrations.strava.rate_limiter import NoopRateLimiter
from strava_rewriter.integrations.strava.schemas import Athlete, SummaryActivity

TEST_BASE_URL = "https://strava.test/api/v3"


class FakeStravaClient(StravaClient):
    """Serves canned pages and records updates; no HTTP involved."""

    def __init__(
        self,
        pages: list[list[SummaryActivity]] | None = None,
        *,
        athlete: Athlete | None = None,
        page_size: int = PER_PAGE,
        fail_pages: set[int] | None = None,
        fail_updates: set[int] | None = None,
    ) -> None:
        self.pages = pages or []
        self.athlete = athlete or Athlete(id=1, first_name="Ivan", last_name="Petrov", city="Moscow")
        self.page_size = page_size
        self.fail_pages = fail_pages or set()
        self.fail_updates = fail_updates or set()
        self.requested_pages: list[int] = []
        self.updated: list[tuple[int, str]] = []
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True

    async def get_athlete(self, *, timeout: float | None = None) -> Athlete:
        return self.athlete

    async def list_activities(
        self,
        *,
        since: dt.datetime,
        until: dt.datetime,
        page: int = 1,
        timeout: float | None = None,
    ) -> tuple[list[SummaryActivity], bool]:
        if until <= since:
            raise InvalidArgumentError("until must be after since")
        self.requested_pages.append(page)
        if page in self.fail_pages:
            raise UpstreamError(500, "500 Internal Server Error")
        activities = self.pages[page - 1] if page <= len(self.pages) else []
        return activities, len(activities) == self.page_size

    async def update_activity(self, activity_id: int, name: str, *, timeout: float | None = None) -> None:
        if activity_id in self.fail_updates:
            raise UpstreamError(403, "403 Forbidden")
        self.updated.append((activity_id, name))


@pytest.fixture
def log_messages():
    """Collect loguru messages (DEBUG and up) emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def make_client() -> Callable[..., StravaClient]:
    """Build a client whose requests are answered by `handler`.

    Rate limiting is disabled unless a limiter is passed explicitly.
    """

    def _make(handler, *, access_token: str = "access_token", **kwargs) -> StravaClient:
        kwargs.setdefault("rate_limiter", NoopRateLimiter())
        return StravaClient(
            access_token,
            transport=httpx.MockTransport(handler),
            base_url=TEST_BASE_URL,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_activity() -> Callable[[int, str], SummaryActivity]:
    def _make(activity_id: int, name: str) -> SummaryActivity:
        return SummaryActivity(id=activity_id, name=name, start_date="2022-01-01T07:00:00Z")

    return _make


@pytest.fixture
def fake_strava_client() -> type[FakeStravaClient]:
    """FakeStravaClient(pages, *, athlete, page_size, fail_pages, fail_updates)."""
    return FakeStravaClient
