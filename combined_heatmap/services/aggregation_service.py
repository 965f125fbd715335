import asyncio
import logging

import httpx

from combined_heatmap.core.cache import TTLCache
from combined_heatmap.github_api import fetch_contribution_series
from combined_heatmap.services.calendar_renderer import CalendarGeometry
from combined_heatmap.services.calendar_renderer import RenderedCalendar
from combined_heatmap.services.calendar_renderer import render_calendar
from combined_heatmap.services.series import Summary
from combined_heatmap.services.series import merge_series
from combined_heatmap.services.series import summarize_series
from combined_heatmap.services.svg_encoder import encode_svg
from combined_heatmap.settings import Settings


logger = logging.getLogger(__name__)


class InvalidIdentitiesError(ValueError):
    """Raised when the requested identity list is empty or too long."""


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the configured token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def parse_identities(raw: str | None, max_identities: int) -> list[str]:
    """Split a comma separated identity list.

    Names are stripped and lower-cased. Blank entries and repeats are
    dropped, keeping first-seen order.
    """

    identities: list[str] = []
    for part in (raw or "").split(","):
        name = part.strip().lower()
        if name and name not in identities:
            identities.append(name)

    if not identities:
        raise InvalidIdentitiesError(
            "Missing users parameter. Example: ?users=octocat,hubot"
        )
    if len(identities) > max_identities:
        raise InvalidIdentitiesError(
            f"Too many users requested (limit {max_identities})."
        )
    return identities


class ContributionAggregator:
    """Fetches, merges and renders contribution series for several users.

    One instance lives on the application and shares its TTL cache across
    requests. Per-user series, merged summaries and SVG documents are
    cached under separate keys.
    """

    def __init__(
        self,
        settings: Settings,
        cache: TTLCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        if cache is None:
            cache = TTLCache(settings.cache_ttl_seconds)
        self.cache = cache
        self.geometry = CalendarGeometry(
            cell_size=settings.calendar_cell_size,
            cell_gap=settings.calendar_cell_gap,
        )
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.github_timeout_seconds,
            transport=self._transport,
        )

    async def fetch_series(
        self, client: httpx.AsyncClient, username: str
    ) -> dict[str, int]:
        cache_key = f"user:{username}"
        cached = self.cache.get_fresh(cache_key)
        if cached is not None:
            logger.debug("Series cache hit for %s", username)
            return cached

        try:
            series = await fetch_contribution_series(
                client=client,
                username=username,
                token=self.settings.github_token,
                graphql_url=self.settings.github_graphql_url,
            )
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "GitHub returned %s for %s", exc.response.status_code, username
            )
            if exc.response.status_code in {401, 403}:
                raise InvalidGitHubTokenError from exc
            raise GitHubAPIError(f"GitHub API request failed for {username}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("GitHub fetch failed for %s: %s", username, exc)
            raise GitHubAPIError(f"GitHub API request failed for {username}") from exc

        logger.info("Fetched %d contribution days for %s", len(series), username)
        self.cache.put(cache_key, series)
        return series

    async def aggregate(self, identities: list[str]) -> Summary:
        """Fetch every identity concurrently and merge the results.

        All fetches are awaited before anything is merged; a single failure
        fails the whole aggregation.
        """

        cache_key = f"combined:{','.join(identities)}"
        cached = self.cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        async with self._client() as client:
            results = await asyncio.gather(
                *(self.fetch_series(client, name) for name in identities),
                return_exceptions=True,
            )

        for result in results:
            if isinstance(result, BaseException):
                raise result

        summary = summarize_series(merge_series(results))
        logger.info(
            "Aggregated %d users: %s..%s total=%d",
            len(identities),
            summary.start,
            summary.end,
            summary.total,
        )
        self.cache.put(cache_key, summary)
        return summary

    async def render_calendar(self, identities: list[str]) -> RenderedCalendar:
        summary = await self.aggregate(identities)
        return render_calendar(summary, self.geometry)

    async def render_svg(self, identities: list[str]) -> str:
        cache_key = f"combinedsvg:{','.join(identities)}"
        cached = self.cache.get_fresh(cache_key)
        if cached is not None:
            return cached

        calendar = await self.render_calendar(identities)
        svg = encode_svg(calendar, subject=" and ".join(identities))
        self.cache.put(cache_key, svg)
        return svg
