import logging

import httpx

from neongraph.clients.github_client import fetch_contribution_weeks
from neongraph.schemas.contributions import ContributionWeek
from neongraph.settings import Settings


logger = logging.getLogger(__name__)


class MissingCredentialError(Exception):
    """Raised when no GitHub token is configured."""


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def load_contribution_weeks(settings: Settings) -> list[ContributionWeek]:
    """Fetch the contribution calendar for the configured account.

    The credential is checked before any request is made.
    """

    if not settings.github_token:
        raise MissingCredentialError("GITHUB_TOKEN is required in env")

    logger.info("Fetching contributions for %s", settings.gh_user)
    try:
        weeks = fetch_contribution_weeks(
            username=settings.gh_user,
            token=settings.github_token,
            graphql_url=settings.github_graphql_url,
        )
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError("GitHub token is invalid") from exc
        raise GitHubAPIError(
            f"GitHub API request failed with status {exc.response.status_code}"
        ) from exc
    except ValueError as exc:
        raise GitHubAPIError(f"Failed to fetch contributions: {exc}") from exc
    except httpx.HTTPError as exc:
        raise GitHubAPIError(f"GitHub API request failed: {exc}") from exc

    logger.info("Fetched %d weeks of contributions", len(weeks))
    return weeks
