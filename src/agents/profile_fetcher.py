"""GitHub Profile Fetcher.

Retrieves a user's public profile and most recently updated repositories from
the GitHub REST API, then augments the newest few repositories with README
text. This is the only component that talks to GitHub.

Sequence (no retry at any step):
    1. GET /users/{handle}                       -> profile (404/403/other mapped)
    2. GET /users/{handle}/repos?sort=updated     -> repositories (capped)
    3. GET /repos/{handle}/{repo}/readme  x N     -> README text, concurrently,
                                                     each failure isolated
"""

import asyncio
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from src.models.config import GitHubSettings, Timeouts
from src.models.profile import GitHubProfile
from src.models.repository import PortfolioData, Repository
from src.utils.errors import FetchFailure, InvalidInput, NotFound, RateLimited
from src.utils.logger import get_logger

RAW_CONTENT_MEDIA_TYPE = "application/vnd.github.v3.raw"
JSON_MEDIA_TYPE = "application/vnd.github+json"


def path_segment(value: str) -> str:
    """Escape a handle or repository name as a single URL path segment."""
    return quote(value, safe="")


class GitHubProfileFetcher:
    """Fetches a profile plus README-augmented repositories for one handle."""

    def __init__(
        self,
        settings: Optional[GitHubSettings] = None,
        timeouts: Optional[Timeouts] = None,
        correlation_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize fetcher.

        Args:
            settings: GitHub API settings (defaults apply when omitted)
            timeouts: Request timeouts
            correlation_id: Correlation ID for logging
            transport: Optional httpx transport (used to fake the API in tests)
        """
        self.settings = settings or GitHubSettings()
        self.timeouts = timeouts or Timeouts()
        self.transport = transport
        self.logger: Any = get_logger(
            correlation_id=correlation_id,
            phase="github_fetch",
            component="profile_fetcher",
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            headers={
                "Accept": JSON_MEDIA_TYPE,
                "User-Agent": self.settings.user_agent,
            },
            timeout=self.timeouts.github_request,
            transport=self.transport,
            follow_redirects=True,
        )

    async def fetch_portfolio(self, handle: str) -> PortfolioData:
        """Fetch profile and repositories for a handle.

        Args:
            handle: Normalized, non-empty GitHub handle

        Returns:
            PortfolioData whose first ``readme_fetch_count`` repositories carry
            a README string (possibly empty); the rest keep ``readme=None``.

        Raises:
            InvalidInput: If handle is empty
            NotFound: Profile request returned 404
            RateLimited: Profile request returned 403
            FetchFailure: Any other failed profile or repository request
        """
        if not handle:
            raise InvalidInput()

        async with self._client() as client:
            profile = await self.fetch_profile(client, handle)
            repositories = await self.fetch_repositories(client, handle)
            repositories = await self.attach_readmes(client, handle, repositories)

        self.logger.info(
            "Portfolio fetched",
            handle=handle,
            repo_count=len(repositories),
            readme_count=sum(1 for r in repositories if r.readme),
        )
        return PortfolioData(profile=profile, repositories=repositories)

    async def fetch_profile(
        self, client: httpx.AsyncClient, handle: str
    ) -> GitHubProfile:
        """Fetch ``/users/{handle}`` and map failures onto the error taxonomy."""
        self.logger.debug("Fetching profile", handle=handle)
        try:
            response = await client.get(f"/users/{path_segment(handle)}")
        except httpx.HTTPError as e:
            self.logger.error("Profile request failed", handle=handle, error=str(e))
            raise FetchFailure("Failed to fetch profile") from e

        if response.status_code == 404:
            self.logger.warning("Profile not found", handle=handle)
            raise NotFound()
        if response.status_code == 403:
            self.logger.warning("GitHub rate limit hit", handle=handle)
            raise RateLimited()
        if not response.is_success:
            self.logger.error(
                "Profile request unsuccessful",
                handle=handle,
                status_code=response.status_code,
            )
            raise FetchFailure("Failed to fetch profile")

        try:
            return GitHubProfile.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self.logger.error("Malformed profile payload", handle=handle, error=str(e))
            raise FetchFailure("Failed to fetch profile") from e

    async def fetch_repositories(
        self, client: httpx.AsyncClient, handle: str
    ) -> list[Repository]:
        """Fetch the most recently updated repositories, capped to ``repo_limit``."""
        limit = self.settings.repo_limit
        self.logger.debug("Fetching repositories", handle=handle, repo_limit=limit)
        try:
            response = await client.get(
                f"/users/{path_segment(handle)}/repos",
                params={"sort": "updated", "per_page": limit},
            )
        except httpx.HTTPError as e:
            self.logger.error(
                "Repository request failed", handle=handle, error=str(e)
            )
            raise FetchFailure("Failed to fetch repositories") from e

        if not response.is_success:
            self.logger.error(
                "Repository request unsuccessful",
                handle=handle,
                status_code=response.status_code,
            )
            raise FetchFailure("Failed to fetch repositories")

        try:
            payload = response.json()
            if not isinstance(payload, list):
                raise ValueError(
                    f"Expected a list of repositories, got {type(payload).__name__}"
                )
            return [Repository.model_validate(item) for item in payload[:limit]]
        except (ValueError, ValidationError) as e:
            self.logger.error(
                "Malformed repository payload", handle=handle, error=str(e)
            )
            raise FetchFailure("Failed to fetch repositories") from e

    async def fetch_readme(
        self, client: httpx.AsyncClient, handle: str, repo_name: str
    ) -> str:
        """Fetch one raw README, degrading every failure to an empty string."""
        try:
            response = await client.get(
                f"/repos/{path_segment(handle)}/{path_segment(repo_name)}/readme",
                headers={"Accept": RAW_CONTENT_MEDIA_TYPE},
            )
        except Exception as e:
            self.logger.warning(
                "README fetch failed", repo=repo_name, error=str(e)
            )
            return ""

        if not response.is_success:
            self.logger.warning(
                "README unavailable", repo=repo_name, status_code=response.status_code
            )
            return ""

        return response.text[: self.settings.readme_max_chars]

    async def attach_readmes(
        self,
        client: httpx.AsyncClient,
        handle: str,
        repositories: list[Repository],
    ) -> list[Repository]:
        """Augment the newest repositories with README text.

        All README requests run concurrently and are joined before returning.
        Each task owns one output slot; a failed task yields "" for its own
        repository only.

        Returns:
            New list with the same order and length as ``repositories``
        """
        count = self.settings.readme_fetch_count
        head, tail = repositories[:count], repositories[count:]

        results = await asyncio.gather(
            *(self.fetch_readme(client, handle, repo.name) for repo in head),
            return_exceptions=True,
        )

        augmented: list[Repository] = []
        for repo, readme in zip(head, results):
            if isinstance(readme, BaseException):
                self.logger.warning(
                    "Unexpected README task failure", repo=repo.name, error=str(readme)
                )
                readme = ""
            augmented.append(repo.model_copy(update={"readme": readme}))

        return augmented + tail
