import logging

import sentry_sdk

from combined_heatmap.settings import Settings


logger = logging.getLogger(__name__)


def init_sentry(app_settings: Settings) -> None:
    """Initialize Sentry SDK when DSN is configured."""

    if not app_settings.sentry_dsn:
        logger.debug("Sentry DSN not configured, error reporting disabled")
        return

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
    logger.info("Sentry initialized for environment %s", app_settings.environment)
