from collections.abc import Callable
from datetime import date
from datetime import timedelta

import httpx
import pytest

from neongraph.settings import Settings


ENV_VARS = (
    "GITHUB_TOKEN",
    "GH_USER",
    "GITHUB_GRAPHQL_URL",
    "CHART_MODE",
    "CHART_GRANULARITY",
    "CHART_STYLE",
    "OUTPUT_DIR",
    "OUTPUT_FILENAME",
    "LOG_LEVEL",
    "SENTRY_DSN",
    "ENVIRONMENT",
    "RELEASE",
    "SENTRY_TRACES_SAMPLE_RATE",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings(tmp_path) -> Callable[..., Settings]:
    def factory(**overrides: object) -> Settings:
        values: dict[str, object] = {
            "github_token": "test-token",
            "gh_user": "octocat",
            "output_dir": tmp_path / "dist",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return factory


def calendar_payload(weeks: list[list[int]], start: date = date(2025, 1, 5)) -> dict:
    """Build a GraphQL contribution calendar payload from week counts."""

    day = start
    raw_weeks = []
    for counts in weeks:
        contribution_days = []
        for count in counts:
            contribution_days.append(
                {"date": day.isoformat(), "contributionCount": count}
            )
            day += timedelta(days=1)
        raw_weeks.append({"contributionDays": contribution_days})

    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {"weeks": raw_weeks}
                }
            }
        }
    }


def graphql_response(payload: object, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json=payload,
        request=httpx.Request("POST", "https://api.github.com/graphql"),
    )
