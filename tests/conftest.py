"""
Shared test fixtures.

Provides a fake GitHub REST API (served through httpx.MockTransport), sample
repository payloads, and a schema-valid analysis document.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Iterator, Optional, Union

import httpx
import pytest
import structlog

from src.utils.logger import configure_logging


def make_repo_payload(index: int, language: Optional[str] = "Python") -> dict[str, Any]:
    return {
        "id": 1000 + index,
        "name": f"repo-{index:02d}",
        "full_name": f"octocat/repo-{index:02d}",
        "description": f"Sample project number {index}",
        "stargazers_count": index * 3,
        "forks_count": index,
        "language": language,
        "topics": ["sample", f"topic-{index}"],
        "updated_at": f"2024-01-{index:02d}T12:00:00Z",
        "html_url": f"https://github.com/octocat/repo-{index:02d}",
        "homepage": None,
        "size": 120 + index,
        "private": False,
    }


class FakeGitHub:
    """In-memory stand-in for the GitHub endpoints the fetcher calls.

    README values may be a string (served as raw text), None (404), or an
    exception instance (raised as a transport error). ``repos_body`` and
    ``profile_body`` replace the JSON served on a 200.
    """

    def __init__(
        self,
        login: str = "octocat",
        profile_status: int = 200,
        repos_status: int = 200,
        repos: Optional[list[dict[str, Any]]] = None,
        readmes: Optional[dict[str, Union[str, Exception, None]]] = None,
        repos_body: Any = None,
        profile_body: Any = None,
    ):
        self.login = login
        self.profile_status = profile_status
        self.repos_status = repos_status
        self.repos = repos if repos is not None else [make_repo_payload(i) for i in range(1, 4)]
        self.readmes = readmes or {}
        self.repos_body = repos_body
        self.profile_body = profile_body
        self.requests: list[httpx.Request] = []

    @property
    def profile(self) -> dict[str, Any]:
        return {
            "login": self.login,
            "id": 583231,
            "name": "The Octocat",
            "avatar_url": "https://avatars.githubusercontent.com/u/583231",
            "bio": "Mascot of GitHub",
            "public_repos": len(self.repos),
            "followers": 1000,
            "following": 9,
            "created_at": "2011-01-25T18:44:36Z",
            "html_url": f"https://github.com/{self.login}",
        }

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/readme"):
            repo_name = path.split("/")[3]
            readme = self.readmes.get(repo_name)
            if isinstance(readme, Exception):
                raise readme
            if readme is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, text=readme)

        if path.endswith("/repos"):
            if self.repos_status != 200:
                return httpx.Response(self.repos_status, json={"message": "error"})
            return httpx.Response(
                200, json=self.repos if self.repos_body is None else self.repos_body
            )

        if path == f"/users/{self.login}":
            if self.profile_status != 200:
                return httpx.Response(self.profile_status, json={"message": "error"})
            return httpx.Response(
                200, json=self.profile if self.profile_body is None else self.profile_body
            )

        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def twelve_repo_github() -> FakeGitHub:
    """Octocat with twelve repositories and READMEs for the first five."""
    repos = [
        make_repo_payload(i, language=["Python", "TypeScript", "Go", None][i % 4])
        for i in range(1, 13)
    ]
    readmes: dict[str, Union[str, Exception, None]] = {
        f"repo-{i:02d}": f"# repo-{i:02d}\n\nREADME body {i}." for i in range(1, 6)
    }
    return FakeGitHub(repos=repos, readmes=readmes)


VALID_ANALYSIS_DOCUMENT: dict[str, Any] = {
    "overallScore": 72,
    "recruiterConfidence": 65,
    "projectedScoreAfterFixes": 85,
    "subScores": {
        "documentation": 60,
        "codeStructure": 75,
        "activityConsistency": 80,
        "organization": 70,
        "impact": 55,
        "technicalDepth": 78,
    },
    "strengths": ["Consistent commit history", "Clear module boundaries"],
    "redFlags": ["Several repositories lack READMEs"],
    "recommendations": [
        {
            "title": "Write READMEs",
            "description": "Explain the problem each project solves.",
            "priority": "High",
        },
        {
            "title": "Add tests",
            "description": "Show engineering discipline with CI.",
            "priority": "Medium",
        },
    ],
    "repoSummaries": [
        {
            "name": "repo-01",
            "suggestedName": "Sample Service",
            "summary": "A small HTTP service.",
            "score": 81,
            "elevatorPitch": "Ships a typed REST API in minutes.",
            "isFakeOrTutorial": False,
            "storytelling": {
                "problemSolved": True,
                "targetAudience": True,
                "valueProposition": False,
                "differentiation": True,
            },
        },
        {
            "name": "repo-02",
            "suggestedName": "Todo Clone",
            "summary": "A todo list from a course.",
            "score": 30,
            "elevatorPitch": "Yet another todo app.",
            "isFakeOrTutorial": True,
            "fakeReason": "Matches a well-known course project.",
            "storytelling": {
                "problemSolved": False,
                "targetAudience": False,
                "valueProposition": False,
                "differentiation": False,
            },
        },
    ],
    "careerBenchmark": "Mid-level Backend Engineer",
    "recruiterSummary": {
        "hireSignals": ["Ships working services"],
        "risks": ["Thin documentation"],
        "verdict": "Promising mid-level candidate",
        "quickSummary": "Solid fundamentals with room to polish presentation.",
    },
    "impactHeatmap": {
        "documentation": "Red",
        "codeDepth": "Green",
        "consistency": "Yellow",
        "realWorldImpact": "Yellow",
    },
    "archiveStrategy": {
        "toArchive": ["repo-02"],
        "toPin": ["repo-01"],
        "toImprove": ["repo-03"],
    },
    "growthRoadmap": {
        "sevenDays": ["Add READMEs to pinned repositories"],
        "thirtyDays": ["Set up CI for repo-01"],
        "ninetyDays": ["Publish one end-to-end project"],
    },
}


@pytest.fixture
def analysis_document() -> dict[str, Any]:
    """A fresh, schema-valid analysis document naming repo-01..repo-03."""
    return copy.deepcopy(VALID_ANALYSIS_DOCUMENT)


@pytest.fixture
def file_logging(tmp_path) -> Iterator[Path]:
    """Real file-only logging into tmp_path, undone after the test."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    log_file = tmp_path / "logs" / "audit.log"

    configure_logging(log_file=str(log_file))
    yield log_file

    for handler in root.handlers:
        handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    structlog.reset_defaults()
