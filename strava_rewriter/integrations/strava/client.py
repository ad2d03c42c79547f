from __future__ import annotations

import asyncio
import datetime as dt
from types import TracebackType
from typing import Any

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from strava_rewriter.config.settings import settings
from strava_rewriter.integrations.strava.errors import DecodeError, InvalidArgumentError, TransportError
from strava_rewriter.integrations.strava.rate_limiter import RateLimiter, default_rate_limiter
from strava_rewriter.integrations.strava.schemas import ActivityUpdate, Athlete, SummaryActivity
from strava_rewriter.integrations.strava.transport import StravaTransport

PER_PAGE = 100

_activities_adapter = TypeAdapter(list[SummaryActivity])


def _as_utc(value: dt.datetime) -> dt.datetime:
    """Naive datetimes are taken as UTC."""
    return value.replace(tzinfo=dt.UTC) if value.tzinfo is None else value


def _to_unix(value: dt.datetime) -> int:
    return int(_as_utc(value).timestamp())


class StravaClient:
    """Strava API client authenticated with a pre-obtained access token.

    - One attempt per call, no retries
    - Every request goes through the shared (or injected) rate limiter
    - Errors surface as StravaError subclasses
    """

    def __init__(
        self,
        access_token: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        debug: bool = False,
        base_url: str | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        if not access_token:
            raise InvalidArgumentError("access_token is required")

        self.debug = debug
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.strava_base_url,
            transport=StravaTransport(
                access_token,
                rate_limiter=rate_limiter or default_rate_limiter,
                inner=transport,
                debug=debug,
            ),
            timeout=None,
        )

    async def __aenter__(self) -> StravaClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            async with asyncio.timeout(timeout):
                return await self._http.request(method, path, **kwargs)
        except TimeoutError as e:
            raise TransportError(f"{method} {path}: deadline of {timeout}s exceeded") from e
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path}: {e}") from e

    async def get_athlete(self, *, timeout: float | None = None) -> Athlete:
        """Return the currently authenticated athlete.

        https://developers.strava.com/docs/reference/#api-Athletes-getLoggedInAthlete
        """
        resp = await self._request("GET", "/athlete", timeout=timeout)

        try:
            return Athlete.model_validate_json(resp.content)
        except ValidationError as e:
            raise DecodeError(f"decode athlete response: {e}") from e

    async def list_activities(
        self,
        *,
        since: dt.datetime,
        until: dt.datetime,
        page: int = 1,
        timeout: float | None = None,
    ) -> tuple[list[SummaryActivity], bool]:
        """Fetch ONE page of the athlete's activities between since and until.

        The second element is True when the page was full (PER_PAGE items), which
        means there may be another page. Pagination is controlled by the caller.

        https://developers.strava.com/docs/reference/#api-Activities-getLoggedInAthleteActivities

        Raises:
            InvalidArgumentError: If until is not after since (no request is sent)
        """
        if _as_utc(until) <= _as_utc(since):
            raise InvalidArgumentError(f"until ({until}) must be after since ({since})")
        after = _to_unix(since)
        before = _to_unix(until)

        resp = await self._request(
            "GET",
            "/athlete/activities",
            params={
                "after": after,
                "before": before,
                "page": page,
                "per_page": PER_PAGE,
            },
            timeout=timeout,
        )

        try:
            activities = _activities_adapter.validate_json(resp.content)
        except ValidationError as e:
            raise DecodeError(f"decode activities response: {e}") from e

        logger.debug(f"[STRAVA] page={page} returned {len(activities)} activities")
        return activities, len(activities) == PER_PAGE

    async def update_activity(self, activity_id: int, name: str, *, timeout: float | None = None) -> None:
        """Rename the activity with the given id.

        https://developers.strava.com/docs/reference/#api-Activities-updateActivityById
        """
        await self._request(
            "PUT",
            f"/activities/{activity_id}",
            json=ActivityUpdate(name=name).model_dump(),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
