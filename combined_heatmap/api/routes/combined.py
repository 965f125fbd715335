import logging

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Request
from fastapi.responses import Response

from combined_heatmap.api.schemas.combined import CalendarResponse
from combined_heatmap.api.schemas.combined import SummaryResponse
from combined_heatmap.services.aggregation_service import ContributionAggregator
from combined_heatmap.services.aggregation_service import GitHubAPIError
from combined_heatmap.services.aggregation_service import InvalidGitHubTokenError
from combined_heatmap.services.aggregation_service import InvalidIdentitiesError
from combined_heatmap.services.aggregation_service import parse_identities
from combined_heatmap.services.svg_encoder import encode_error_svg


logger = logging.getLogger(__name__)

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"
USERS_QUERY = Query(
    default=None, description="Comma separated GitHub logins, e.g. octocat,hubot"
)


def get_aggregator(request: Request) -> ContributionAggregator:
    return request.app.state.aggregator


def _requested_identities(
    users: str | None, aggregator: ContributionAggregator
) -> list[str]:
    try:
        return parse_identities(users, aggregator.settings.max_identities)
    except InvalidIdentitiesError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _upstream_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, InvalidGitHubTokenError):
        return HTTPException(status_code=502, detail="GitHub token was rejected")
    return HTTPException(status_code=502, detail="GitHub API request failed")


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting with usage hints."""

    return {
        "message": "GitHub contributions aggregator. Use "
        "/api/combined?users=user1,user2 or /api/combined.svg?users=..."
    }


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/api/combined", response_model=SummaryResponse)
async def get_combined_summary(
    users: str | None = USERS_QUERY,
    aggregator: ContributionAggregator = Depends(get_aggregator),
) -> SummaryResponse:
    """Return the merged contribution series of the requested users."""

    identities = _requested_identities(users, aggregator)
    try:
        summary = await aggregator.aggregate(identities)
    except (InvalidGitHubTokenError, GitHubAPIError) as exc:
        raise _upstream_http_error(exc) from exc
    return SummaryResponse.from_summary(summary)


@router.get("/api/combined/calendar", response_model=CalendarResponse)
async def get_combined_calendar(
    users: str | None = USERS_QUERY,
    aggregator: ContributionAggregator = Depends(get_aggregator),
) -> CalendarResponse:
    """Return calendar heatmap geometry for the merged series."""

    identities = _requested_identities(users, aggregator)
    try:
        calendar = await aggregator.render_calendar(identities)
    except (InvalidGitHubTokenError, GitHubAPIError) as exc:
        raise _upstream_http_error(exc) from exc
    return CalendarResponse.from_calendar(identities, calendar)


@router.get("/api/combined.svg")
async def get_combined_svg(
    users: str | None = USERS_QUERY,
    aggregator: ContributionAggregator = Depends(get_aggregator),
) -> Response:
    """Return the merged calendar heatmap as an embeddable SVG image.

    Failures are reported inside an SVG as well, so an `<img>` embedding the
    endpoint shows the reason instead of a broken image.
    """

    try:
        identities = parse_identities(users, aggregator.settings.max_identities)
    except InvalidIdentitiesError as exc:
        return Response(
            content=encode_error_svg(str(exc)),
            status_code=400,
            media_type=SVG_MEDIA_TYPE,
        )

    try:
        svg = await aggregator.render_svg(identities)
    except (InvalidGitHubTokenError, GitHubAPIError) as exc:
        logger.error("SVG rendering failed for %s: %s", identities, exc)
        http_error = _upstream_http_error(exc)
        return Response(
            content=encode_error_svg(str(http_error.detail)),
            status_code=http_error.status_code,
            media_type=SVG_MEDIA_TYPE,
        )

    return Response(content=svg, media_type=SVG_MEDIA_TYPE)
