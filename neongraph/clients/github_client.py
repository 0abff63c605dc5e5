import logging
from collections.abc import Mapping
from datetime import date
from datetime import timedelta
from typing import Any

import httpx

from neongraph.schemas.contributions import ContributionDay
from neongraph.schemas.contributions import ContributionWeek


logger = logging.getLogger(__name__)

CONTRIBUTIONS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def _parse_day(item: object) -> ContributionDay | None:
    if not isinstance(item, Mapping):
        return None

    raw_count = item.get("contributionCount")
    if isinstance(raw_count, bool) or not isinstance(raw_count, int) or raw_count < 0:
        return None

    raw_date = item.get("date")
    parsed_day: date | None = None
    if isinstance(raw_date, str):
        try:
            parsed_day = date.fromisoformat(raw_date)
        except ValueError:
            parsed_day = None

    return ContributionDay(date=parsed_day, count=raw_count)


def fetch_contribution_weeks(
    username: str,
    token: str,
    graphql_url: str,
) -> list[ContributionWeek]:
    """Fetch the one-year contribution calendar of a user as week buckets.

    Raises:
        httpx.HTTPStatusError: If GitHub answers with a non-2xx status.
        ValueError: If the response does not have the expected shape.
    """

    to_day = date.today()
    from_day = to_day - timedelta(days=364)

    variables = {
        "login": username,
        "from": f"{from_day.isoformat()}T00:00:00Z",
        "to": f"{to_day.isoformat()}T23:59:59Z",
    }
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": "neongraph",
    }

    logger.debug("POST %s for %s", graphql_url, username)
    response = httpx.post(
        graphql_url,
        json={"query": CONTRIBUTIONS_QUERY, "variables": variables},
        headers=headers,
        timeout=20.0,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    if payload.get("errors"):
        raise ValueError(f"GitHub GraphQL returned errors: {payload['errors']}")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError(f"GitHub user {username!r} not found")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    buckets: list[ContributionWeek] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue
        days = [day for day in map(_parse_day, contribution_days) if day is not None]
        buckets.append(ContributionWeek(days=days))

    return buckets
