"""Request-transforming transport for the Strava client.

Wraps any httpx async transport and, for every request:
- waits for a slot from the rate limiter
- clones the request and adds the bearer token
- optionally dumps the response (method, URL, headers, body) to the debug log
- turns every non-200 status into an UpstreamError
"""

from __future__ import annotations

import httpx
from loguru import logger

from strava_rewriter.integrations.strava.errors import UpstreamError
from strava_rewriter.integrations.strava.rate_limiter import RateLimiter


class StravaTransport(httpx.AsyncBaseTransport):
    def __init__(
        self,
        access_token: str,
        *,
        rate_limiter: RateLimiter,
        inner: httpx.AsyncBaseTransport | None = None,
        debug: bool = False,
    ) -> None:
        self._access_token = access_token
        self._rate_limiter = rate_limiter
        self._inner = inner or httpx.AsyncHTTPTransport()
        self._debug = debug

    def _authorize(self, request: httpx.Request) -> httpx.Request:
        headers = request.headers.copy()
        headers["Authorization"] = f"Bearer {self._access_token}"
        return httpx.Request(
            request.method,
            request.url,
            headers=headers,
            stream=request.stream,
            extensions=request.extensions,
        )

    async def _log_response(self, request: httpx.Request, response: httpx.Response) -> None:
        """Buffer the whole body and dump it to the debug log.

        aread() caches the decoded body on the response, so the caller still
        gets the full content afterwards.
        """
        try:
            await response.aread()
        except BaseException:
            await response.aclose()
            raise

        logger.debug(
            f"[STRAVA] Request: `{request.method} {request.url}`, "
            f"Response: Headers: `{dict(response.headers)}`, Body: `{response.text}`"
        )

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await self._rate_limiter.acquire()

        request = self._authorize(request)
        response = await self._inner.handle_async_request(request)

        if self._debug:
            await self._log_response(request, response)

        if response.status_code != httpx.codes.OK:
            await response.aclose()
            # reason_phrase prefers the server's own status line over the canonical one
            status = f"{response.status_code} {response.reason_phrase}".strip()
            raise UpstreamError(response.status_code, status)

        return response

    async def aclose(self) -> None:
        await self._inner.aclose()
