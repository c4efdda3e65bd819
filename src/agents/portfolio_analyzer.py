"""Portfolio Analyzer.

Builds the audit prompt from fetched GitHub data, sends it to Gemini together
with the declared output schema, and turns the reply into a validated
AnalysisResult.

The model boundary is treated as untrusted input:
    raw text -> JSON object -> JSON Schema check -> pydantic model
             -> cross-check against the fetched repository names
Any failure after the text arrives surfaces as SchemaViolation.
"""

import copy
import json
from typing import Any, Optional

from pydantic import ValidationError

from src.models.analysis import AnalysisResult, DeveloperRole
from src.models.config import LLMSettings, Timeouts
from src.models.repository import PortfolioData, Repository
from src.utils import llm_helpers
from src.utils.errors import SchemaViolation
from src.utils.logger import get_logger
from src.utils.prompt_loader import render_prompt
from src.utils.validator import ANALYSIS_RESULT_SCHEMA, SchemaValidator

PROMPT_TEMPLATE = "analysis/portfolio_audit.j2"
NO_README_PLACEHOLDER = "No README provided"


def project_repository(repo: Repository, readme_max_chars: int) -> dict[str, Any]:
    """Compact repository view embedded in the prompt."""
    return {
        "name": repo.name,
        "desc": repo.description,
        "stars": repo.stargazers_count,
        "lang": repo.language,
        "topics": repo.topics,
        "readmeSnippet": (
            repo.readme[:readme_max_chars] if repo.readme else NO_README_PLACEHOLDER
        ),
    }


def check_repository_references(
    result: AnalysisResult, repository_names: set[str]
) -> list[str]:
    """Return problems with repository names referenced by the verdict.

    Summaries and triage entries must name fetched repositories, and the
    archive/pin/improve lists must not overlap.
    """
    problems = []

    for summary in result.repo_summaries:
        if summary.name not in repository_names:
            problems.append(f"repoSummaries references unknown repository '{summary.name}'")

    strategy = result.archive_strategy
    for name in strategy.all_names():
        if name not in repository_names:
            problems.append(f"archiveStrategy references unknown repository '{name}'")

    buckets = {
        "toArchive": set(strategy.to_archive),
        "toPin": set(strategy.to_pin),
        "toImprove": set(strategy.to_improve),
    }
    keys = list(buckets)
    for i, first in enumerate(keys):
        for second in keys[i + 1 :]:
            for name in sorted(buckets[first] & buckets[second]):
                problems.append(
                    f"archiveStrategy lists '{name}' in both {first} and {second}"
                )

    return problems


class PortfolioAnalyzer:
    """Requests and validates the AI verdict for one portfolio."""

    def __init__(
        self,
        api_key: str,
        settings: Optional[LLMSettings] = None,
        timeouts: Optional[Timeouts] = None,
        validator: Optional[SchemaValidator] = None,
        correlation_id: Optional[str] = None,
    ):
        self.api_key = api_key
        self.settings = settings or LLMSettings()
        self.timeouts = timeouts or Timeouts()
        self.validator = validator or SchemaValidator()
        self.correlation_id = correlation_id
        self.logger: Any = get_logger(
            correlation_id=correlation_id,
            phase="analysis",
            component="portfolio_analyzer",
        )

    def build_prompt(self, portfolio: PortfolioData, role: DeveloperRole) -> str:
        """Render the audit prompt for a portfolio and role."""
        projections = [
            project_repository(repo, self.settings.prompt_readme_max_chars)
            for repo in portfolio.repositories
        ]
        return render_prompt(
            PROMPT_TEMPLATE,
            correlation_id=self.correlation_id,
            role=role.value,
            profile=portfolio.profile,
            repositories_json=json.dumps(projections, ensure_ascii=False),
        )

    @property
    def response_schema(self) -> dict[str, Any]:
        """Declared output shape sent to the model (a copy; the SDK may rewrite it)."""
        return copy.deepcopy(self.validator.load_schema(ANALYSIS_RESULT_SCHEMA))

    async def analyze(
        self,
        portfolio: PortfolioData,
        role: DeveloperRole = DeveloperRole.GENERAL,
    ) -> AnalysisResult:
        """
        Run the AI audit for a fetched portfolio.

        Args:
            portfolio: Profile and repositories from the profile fetcher
            role: Specialization lens for the prompt

        Returns:
            Validated AnalysisResult

        Raises:
            EmptyModelResponse: Model returned no content
            SchemaViolation: Model content does not match the declared shape
            AuditError: The model request itself failed
        """
        prompt = self.build_prompt(portfolio, role)
        self.logger.info(
            "Requesting portfolio analysis",
            handle=portfolio.profile.login,
            role=role.value,
            repo_count=len(portfolio.repositories),
            prompt_length=len(prompt),
        )

        text = await llm_helpers.call_gemini(
            prompt,
            response_schema=self.response_schema,
            model=self.settings.model,
            api_key=self.api_key,
            timeout_seconds=self.timeouts.llm_request,
            correlation_id=self.correlation_id,
        )

        result = self.parse_result(text, portfolio.repository_names())
        self.logger.info(
            "Portfolio analysis complete",
            overall_score=result.overall_score,
            recruiter_confidence=result.recruiter_confidence,
            repo_summaries=len(result.repo_summaries),
        )
        return result

    def parse_result(self, text: str, repository_names: set[str]) -> AnalysisResult:
        """
        Convert raw model text into a validated AnalysisResult.

        Args:
            text: Raw model response text
            repository_names: Names of the repositories sent in the prompt

        Returns:
            Validated AnalysisResult

        Raises:
            SchemaViolation: On unparseable text, schema errors, or references
                to repositories outside the fetched set
        """
        document = llm_helpers.parse_json_response(text, self.correlation_id)
        self.validator.validate(document, ANALYSIS_RESULT_SCHEMA)

        try:
            result = AnalysisResult.model_validate(document)
        except ValidationError as e:
            messages = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            self.logger.warning("Analysis model validation failed", errors=messages)
            raise SchemaViolation(errors=messages) from e

        problems = check_repository_references(result, repository_names)
        if problems:
            self.logger.warning("Analysis references unknown repositories", errors=problems)
            raise SchemaViolation(errors=problems)

        return result
