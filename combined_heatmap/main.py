import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from combined_heatmap.api.routes.combined import router
from combined_heatmap.core.logging import setup_logging
from combined_heatmap.core.middleware import HeatmapRateLimitMiddleware
from combined_heatmap.core.observability import init_sentry
from combined_heatmap.services.aggregation_service import ContributionAggregator
from combined_heatmap.settings import Settings


logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    aggregator: ContributionAggregator | None = None,
) -> FastAPI:
    """Build the FastAPI application with middleware and shared services."""

    app_settings = settings or Settings()
    setup_logging(app_settings.log_level)
    init_sentry(app_settings)

    if not app_settings.github_token:
        logger.warning(
            "GITHUB_TOKEN not set. GitHub GraphQL requests will be rejected "
            "or rate limited."
        )

    app = FastAPI(title="Combined contributions heatmap")
    app.state.settings = app_settings
    app.state.aggregator = aggregator or ContributionAggregator(app_settings)

    app.add_middleware(
        HeatmapRateLimitMiddleware,
        requests_per_window=app_settings.rate_limit_per_minute,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"])
    app.include_router(router)
    return app


app = create_app()
