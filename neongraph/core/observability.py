import logging
import sys

import sentry_sdk

from neongraph.settings import Settings


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(app_settings: Settings) -> None:
    """Send log records to stderr at the configured level."""

    logging.basicConfig(
        level=app_settings.log_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def init_sentry(app_settings: Settings) -> None:
    """Initialize Sentry SDK when DSN is configured."""

    if not app_settings.sentry_dsn:
        return

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
