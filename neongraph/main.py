import logging
import sys
from pathlib import Path

import sentry_sdk
from pydantic import ValidationError
from sentry_sdk.utils import BadDsn

from neongraph.core.observability import configure_logging
from neongraph.core.observability import init_sentry
from neongraph.services.aggregation import build_series
from neongraph.services.chart_renderer import render_chart
from neongraph.services.contribution_service import GitHubAPIError
from neongraph.services.contribution_service import InvalidGitHubTokenError
from neongraph.services.contribution_service import MissingCredentialError
from neongraph.services.contribution_service import load_contribution_weeks
from neongraph.services.output_writer import write_image
from neongraph.settings import Settings


logger = logging.getLogger(__name__)


def chart_title(settings: Settings) -> str:
    period = "Daily" if settings.chart_granularity == "daily" else "Weekly"
    return f"{settings.gh_user}'s {period} Contributions"


def generate_chart(settings: Settings) -> Path:
    """Fetch, aggregate, color, render and write one contribution chart."""

    weeks = load_contribution_weeks(settings)
    series = build_series(
        weeks,
        granularity=settings.chart_granularity,
        style=settings.chart_style,
        title=chart_title(settings),
    )
    image = render_chart(series, mode=settings.chart_mode)
    return write_image(image, settings.output_path)


def main(settings: Settings | None = None) -> None:
    """Console entry point. Exits with status 1 on any failure."""

    if settings is None:
        try:
            settings = Settings()
        except ValidationError as exc:
            sys.exit(f"Invalid configuration: {exc}")

    configure_logging(settings)
    try:
        init_sentry(settings)
    except BadDsn as exc:
        logger.error("Invalid SENTRY_DSN: %s", exc)
        sys.exit(1)

    try:
        output_path = generate_chart(settings)
    except MissingCredentialError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except (InvalidGitHubTokenError, GitHubAPIError) as exc:
        logger.error("%s", exc)
        sentry_sdk.capture_exception(exc)
        sys.exit(1)
    except Exception as exc:
        logger.exception("Error generating chart")
        sentry_sdk.capture_exception(exc)
        sys.exit(1)

    logger.info("Chart for %s written to %s", settings.gh_user, output_path)


if __name__ == "__main__":
    main()
