"""
Analysis Models

Typed rendition of the structured verdict returned by the generative model.
Field aliases are the camelCase names the model emits; Python code uses the
snake_case attribute names. Instances are only ever created from a response
that already passed JSON Schema validation (see src/utils/validator.py), so
the bounds declared here are a second line of checking, not the first.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


HeatLevel = Literal["Green", "Yellow", "Red"]
Priority = Literal["High", "Medium", "Low"]


class DeveloperRole(str, Enum):
    """Specialization lens that biases the analysis prompt."""

    GENERAL = "General"
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    FULLSTACK = "Fullstack"
    AI_ML = "AI/ML"
    MOBILE = "Mobile"

    @classmethod
    def parse(cls, value: "str | DeveloperRole") -> "DeveloperRole":
        """Resolve a role from its display value, case-insensitively.

        Raises:
            ValueError: If value names no known role
        """
        if isinstance(value, cls):
            return value
        for role in cls:
            if role.value.lower() == str(value).strip().lower():
                return role
        valid = ", ".join(r.value for r in cls)
        raise ValueError(f"Unknown role '{value}'. Must be one of: {valid}")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class SubScores(_CamelModel):
    documentation: int = Field(ge=0, le=100)
    code_structure: int = Field(ge=0, le=100)
    activity_consistency: int = Field(ge=0, le=100)
    organization: int = Field(ge=0, le=100)
    impact: int = Field(ge=0, le=100)
    technical_depth: int = Field(ge=0, le=100)


class RecruiterSummary(_CamelModel):
    hire_signals: list[str]
    risks: list[str]
    verdict: str
    quick_summary: str


class ImpactHeatmap(_CamelModel):
    documentation: HeatLevel
    code_depth: HeatLevel
    consistency: HeatLevel
    real_world_impact: HeatLevel


class ArchiveStrategy(_CamelModel):
    """Archive/pin/improve triage. The three lists never share a name."""

    to_archive: list[str]
    to_pin: list[str]
    to_improve: list[str]

    def all_names(self) -> list[str]:
        return [*self.to_archive, *self.to_pin, *self.to_improve]


class GrowthRoadmap(_CamelModel):
    seven_days: list[str]
    thirty_days: list[str]
    ninety_days: list[str]


class Recommendation(_CamelModel):
    title: str
    description: str
    priority: Priority


class Storytelling(_CamelModel):
    """Four narrative-quality flags evaluated per repository."""

    problem_solved: bool
    target_audience: bool
    value_proposition: bool
    differentiation: bool


class RepoSummary(_CamelModel):
    name: str
    suggested_name: str
    summary: str
    score: int = Field(ge=0, le=100)
    elevator_pitch: str
    is_fake_or_tutorial: bool
    fake_reason: Optional[str] = None
    storytelling: Storytelling


class AnalysisResult(_CamelModel):
    """Structured verdict for one audited portfolio.

    Produced once per analysis request and held by the coordinator until the
    next reset. ``model_dump(by_alias=True, exclude_none=True)`` returns the
    exact camelCase document the model sent.
    """

    overall_score: int = Field(ge=0, le=100)
    recruiter_confidence: int = Field(ge=0, le=100)
    projected_score_after_fixes: int = Field(ge=0, le=100)
    sub_scores: SubScores
    strengths: list[str]
    red_flags: list[str]
    recommendations: list[Recommendation]
    repo_summaries: list[RepoSummary]
    career_benchmark: str
    recruiter_summary: RecruiterSummary
    impact_heatmap: ImpactHeatmap
    archive_strategy: ArchiveStrategy
    growth_roadmap: GrowthRoadmap
