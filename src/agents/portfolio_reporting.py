"""Portfolio Reporting.

Rendering surfaces for a finished audit:
- Assessment view: scores, skill matrix, heatmap, recommendations, roadmap
- Recruiter view: verdict, hiring signals/risks, project integrity, triage
- Resume snapshot: Markdown document for print/PDF export

Pure consumers of PortfolioData and AnalysisResult; nothing here changes state.
"""

import re
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.models.analysis import AnalysisResult, DeveloperRole, RepoSummary
from src.models.repository import PortfolioData

HEAT_STYLES = {"Green": "green", "Yellow": "yellow", "Red": "red"}
HEAT_MARKERS = {"Green": "🟢", "Yellow": "🟡", "Red": "🔴"}
PRIORITY_STYLES = {"High": "red", "Medium": "yellow", "Low": "green"}
DEFAULT_TUTORIAL_REASON = (
    "This project shows low original activity or matches known tutorial patterns."
)
RESUME_HIGHLIGHT_COUNT = 3
RESUME_TECH_STACK_LIMIT = 8


def humanize_key(key: str) -> str:
    """'realWorldImpact' / 'real_world_impact' -> 'Real World Impact'."""
    spaced = re.sub(r"([A-Z])", r" \1", key).replace("_", " ")
    return " ".join(word.capitalize() for word in spaced.split())


def score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def heatmap_items(result: AnalysisResult) -> list[tuple[str, str]]:
    return [
        (humanize_key(key), level)
        for key, level in result.impact_heatmap.model_dump().items()
    ]


def storytelling_items(summary: RepoSummary) -> list[tuple[str, bool]]:
    return [
        (humanize_key(key), flag)
        for key, flag in summary.storytelling.model_dump().items()
    ]


def language_breakdown(data: PortfolioData) -> Counter:
    return Counter(repo.language for repo in data.repositories if repo.language)


def _bullets(items: list[str], empty: str = "None") -> str:
    return "\n".join(f"• {item}" for item in items) if items else empty


# ---------- Terminal views ----------


def render_assessment_view(
    console: Console,
    data: PortfolioData,
    result: AnalysisResult,
    role: DeveloperRole,
) -> None:
    """Print the assessment ("student") dashboard."""
    profile = data.profile
    style = score_style(result.overall_score)

    console.print(
        Panel(
            f"[bold {style}]{result.overall_score}[/bold {style}]/100\n"
            f"{result.career_benchmark}",
            title=f"{profile.display_name} · {role.value} Professional",
            subtitle="Portfolio Score",
        )
    )

    matrix = Table(title="Skill Matrix")
    matrix.add_column("Dimension")
    matrix.add_column("Score", justify="right")
    for key, value in result.sub_scores.model_dump().items():
        matrix.add_row(humanize_key(key), f"[{score_style(value)}]{value}[/]")
    console.print(matrix)

    languages = Table(title="Stack Diversity")
    languages.add_column("Language")
    languages.add_column("Repos", justify="right")
    for language, count in language_breakdown(data).most_common():
        languages.add_row(language, str(count))
    console.print(languages)

    console.print(
        Panel(
            f"Current [bold]{result.overall_score}[/bold] → "
            f"Simulated [bold green]{result.projected_score_after_fixes}[/bold green]\n"
            "By fixing identified red flags, your hireability score could jump significantly.",
            title="Growth Potential",
        )
    )

    heatmap = Table(title="Impact Heatmap")
    heatmap.add_column("Dimension")
    heatmap.add_column("Level")
    for label, level in heatmap_items(result):
        heatmap.add_row(label, f"[{HEAT_STYLES[level]}]{level}[/]")
    console.print(heatmap)

    recommendations = Table(title="Actionable Next Steps", show_lines=True)
    recommendations.add_column("Priority")
    recommendations.add_column("Recommendation")
    for rec in result.recommendations:
        recommendations.add_row(
            f"[{PRIORITY_STYLES[rec.priority]}]{rec.priority}[/]",
            f"[bold]{rec.title}[/bold]\n{rec.description}",
        )
    console.print(recommendations)

    console.print(Panel(_bullets(result.strengths), title="Key Strengths"))
    console.print(Panel(_bullets(result.red_flags), title="Red Flags & Risks"))

    roadmap = result.growth_roadmap
    console.print(Panel(_bullets(roadmap.seven_days), title="Immediate (7 Days)"))
    console.print(Panel(_bullets(roadmap.thirty_days), title="Short-term (30 Days)"))
    console.print(Panel(_bullets(roadmap.ninety_days), title="Long-term (90 Days)"))


def render_recruiter_view(
    console: Console, data: PortfolioData, result: AnalysisResult
) -> None:
    """Print the recruiter-framed dashboard."""
    summary = result.recruiter_summary

    console.print(
        Panel(
            f"{summary.quick_summary}\n\n"
            f"[bold]Hiring Signals[/bold]\n{_bullets(summary.hire_signals)}\n\n"
            f"[bold]Hiring Risks[/bold]\n{_bullets(summary.risks)}\n\n"
            f"Recruiter Confidence: [bold]{result.recruiter_confidence}%[/bold]\n"
            f"Verdict: [bold]{summary.verdict}[/bold]",
            title=f"Recruiter Verdict · {data.profile.display_name}",
        )
    )

    integrity = Table(title="Project Integrity Audit", show_lines=True)
    integrity.add_column("Repository")
    integrity.add_column("Impact", justify="right")
    integrity.add_column("Pitch")
    integrity.add_column("Storytelling")
    for repo in result.repo_summaries:
        name = f"[bold]{repo.name}[/bold]\nAI Pitch: {repo.suggested_name}"
        pitch = f'"{repo.elevator_pitch}"'
        if repo.is_fake_or_tutorial:
            name += "\n[red]Tutorial detected[/red]"
            pitch += f"\n[red]{repo.fake_reason or DEFAULT_TUTORIAL_REASON}[/red]"
        flags = "\n".join(
            f"{'✔' if flag else '✘'} {label}" for label, flag in storytelling_items(repo)
        )
        integrity.add_row(name, str(repo.score), pitch, flags)
    console.print(integrity)

    strategy = result.archive_strategy
    triage = Table(title="Archive Engine")
    triage.add_column("Bucket")
    triage.add_column("Repositories")
    triage.add_row(
        "High Noise (Archive)", ", ".join(strategy.to_archive) or "None suggested"
    )
    triage.add_row("High Signal (Pin)", ", ".join(strategy.to_pin))
    triage.add_row("Needs Polish", ", ".join(strategy.to_improve))
    console.print(triage)

    heatmap = Table(title="Resume Heatmap")
    heatmap.add_column("Dimension")
    heatmap.add_column("Level")
    for label, level in heatmap_items(result):
        heatmap.add_row(label, f"[{HEAT_STYLES[level]}]{level}[/]")
    console.print(heatmap)


# ---------- Resume snapshot ----------


def build_resume_markdown(
    data: PortfolioData,
    result: AnalysisResult,
    role: DeveloperRole,
    generated_on: Optional[date] = None,
) -> str:
    """Build the resume-shaped Markdown snapshot of an audit."""
    profile = data.profile
    generated_on = generated_on or date.today()
    languages_by_repo = {repo.name: repo.language for repo in data.repositories}

    lines = [
        f"# {profile.display_name}",
        "",
        f"**{role.value} Developer**  ",
        f"github.com/{profile.login}",
    ]
    if profile.bio:
        lines[-1] += "  "
        lines.append(profile.bio)
    lines.extend(
        [
            "",
            f"**Verification Score:** {result.overall_score}/100  ",
            f"**Benchmark:** {result.career_benchmark}",
            "",
            "## Recruiter Verdict",
            "",
            f'> "{result.recruiter_summary.verdict}"',
            "",
            result.recruiter_summary.quick_summary,
            "",
            "## Project Highlights",
            "",
        ]
    )

    for repo in result.repo_summaries[:RESUME_HIGHLIGHT_COUNT]:
        badges = []
        if repo.storytelling.problem_solved:
            badges.append("Problem Solved")
        if repo.storytelling.differentiation:
            badges.append("Unique Edge")
        badges.append(languages_by_repo.get(repo.name) or "GitHub Topic")

        lines.extend(
            [
                f"### {repo.suggested_name}",
                "",
                f"*Impact Score: {repo.score}*",
                "",
                repo.elevator_pitch,
                "",
                repo.summary,
                "",
                " · ".join(f"`{badge}`" for badge in badges),
                "",
            ]
        )

    lines.extend(
        [
            "## Growth Potential",
            "",
            f"{result.overall_score} → {result.projected_score_after_fixes}",
            "",
            "Simulated score after recommended AI optimizations",
            "",
            "## Portfolio Health",
            "",
        ]
    )
    for label, level in heatmap_items(result):
        lines.append(f"- {HEAT_MARKERS[level]} {label}")

    lines.extend(["", "## Tech Stack", ""])
    tech_stack = data.languages(limit=RESUME_TECH_STACK_LIMIT)
    lines.append(", ".join(tech_stack) if tech_stack else "Not detected")

    lines.extend(
        [
            "",
            "---",
            "",
            f"Verified GitHub Professional Audit · {generated_on.isoformat()} · "
            f"Recruiter Confidence: {result.recruiter_confidence}%",
            "",
        ]
    )
    return "\n".join(lines)


def write_resume(
    path: Path,
    data: PortfolioData,
    result: AnalysisResult,
    role: DeveloperRole,
) -> Path:
    """Write the resume snapshot to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(build_resume_markdown(data, result, role), encoding="utf-8")
    return path
