"""GitHub user profile snapshot."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class GitHubProfile(BaseModel):
    """Public profile returned by ``GET /users/{handle}``.

    Fetched once per audit run and never mutated afterwards. Fields the
    GitHub API sends that are not listed here are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    login: str
    name: Optional[str] = None
    avatar_url: str = ""
    bio: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: str = ""
    html_url: str = ""

    @property
    def display_name(self) -> str:
        """Name shown in reports, falling back to the handle."""
        return self.name or self.login
