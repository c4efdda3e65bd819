"""Repository metadata and the combined fetch result."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.profile import GitHubProfile


class Repository(BaseModel):
    """Represents one public repository of the audited user.

    Attributes:
        name: Repository name (unique within the owner)
        description: Short description, if any
        stargazers_count: Star count
        forks_count: Fork count
        language: Primary language reported by GitHub
        topics: Topic tags
        updated_at: Last-updated timestamp (ISO 8601 string)
        html_url: Repository page URL
        homepage: Project homepage URL, if any
        size: Repository size in KB
        readme: README excerpt. ``None`` outside the deep-inspection subset,
            a (possibly empty) string inside it.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    description: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    language: Optional[str] = None
    topics: list[str] = Field(default_factory=list)
    updated_at: str = ""
    html_url: str = ""
    homepage: Optional[str] = None
    size: int = 0
    readme: Optional[str] = None


class PortfolioData(BaseModel):
    """Output of the profile fetcher: one profile plus its recent repositories."""

    profile: GitHubProfile
    repositories: list[Repository] = Field(default_factory=list)

    def repository_names(self) -> set[str]:
        return {repo.name for repo in self.repositories}

    def languages(self, limit: Optional[int] = None) -> list[str]:
        """Distinct primary languages in repository order."""
        seen: list[str] = []
        for repo in self.repositories:
            if repo.language and repo.language not in seen:
                seen.append(repo.language)
        return seen[:limit] if limit is not None else seen
