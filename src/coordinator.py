"""
Audit Coordinator Module

Owns the audit state and is the only place it changes. The state moves
through a small set of actions:

    submit(raw_input, role)  input -> loading -> results | error
    reset()                  back to the input view
    toggle_mode()            assessment <-> recruiter framing
    export_resume(path)      resume-shaped Markdown snapshot of the result

Only one run may be in flight: submit() is ignored while loading.
"""

import uuid
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel
from rich.console import Console

from src.agents import portfolio_reporting
from src.agents.portfolio_analyzer import PortfolioAnalyzer
from src.agents.profile_fetcher import GitHubProfileFetcher
from src.models.analysis import AnalysisResult, DeveloperRole
from src.models.config import SystemParams
from src.models.repository import PortfolioData
from src.utils.errors import AuditError, InvalidInput
from src.utils.logger import get_logger
from src.utils.progress_tracker import ProgressTracker
from src.utils.username import extract_username

INITIAL_LOADING_MESSAGE = "Initializing analysis..."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class AuditState(BaseModel):
    """Everything the presentation layer shows, in one place."""

    query: str = ""
    role: DeveloperRole = DeveloperRole.GENERAL
    loading: bool = False
    loading_message: str = INITIAL_LOADING_MESSAGE
    error: Optional[str] = None
    data: Optional[PortfolioData] = None
    result: Optional[AnalysisResult] = None
    recruiter_mode: bool = False

    @property
    def has_results(self) -> bool:
        return self.data is not None and self.result is not None and not self.loading


class AuditCoordinator:
    """
    Runs the fetch -> analyze pipeline and manages the resulting state.
    """

    def __init__(
        self,
        api_key: str,
        system_params: Optional[SystemParams] = None,
        progress_tracker: Optional[ProgressTracker] = None,
        console: Optional[Console] = None,
        transport: Any = None,
    ):
        """
        Initialize Audit Coordinator.

        Args:
            api_key: Gemini API key
            system_params: Loaded configuration (defaults apply when omitted)
            progress_tracker: Loading indicator (a silent one is used if omitted)
            console: Console used by render()
            transport: Optional httpx transport passed to the GitHub fetcher
        """
        self.api_key = api_key
        self.system_params = system_params or SystemParams()
        self.console = console or Console()
        self.progress_tracker = progress_tracker or ProgressTracker(
            console=Console(quiet=True)
        )
        self.transport = transport
        self.state = AuditState()
        self.logger: Any = get_logger(phase="coordinator", component="audit_coordinator")

    def _set_loading_message(self, message: str) -> None:
        self.state.loading_message = message
        self.progress_tracker.set_description(message)

    async def submit(
        self, raw_input: str, role: "DeveloperRole | str | None" = None
    ) -> AuditState:
        """
        Run one audit for a handle or profile URL.

        Args:
            raw_input: Bare handle or GitHub profile URL
            role: Role facet; keeps the current selection when None

        Returns:
            The updated state. On failure ``state.error`` holds the message and
            ``state.data``/``state.result`` stay empty.
        """
        if self.state.loading:
            self.logger.warning("Audit already in progress, ignoring submit")
            return self.state

        self.state.query = raw_input
        if role is not None:
            self.state.role = DeveloperRole.parse(role)

        handle = extract_username(raw_input)
        if not handle:
            self.state.error = str(InvalidInput())
            return self.state

        correlation_id = str(uuid.uuid4())
        log = self.logger.bind(correlation_id=correlation_id, handle=handle)

        self.state.loading = True
        self.state.error = None
        self.state.data = None
        self.state.result = None
        self.progress_tracker.start_phase(INITIAL_LOADING_MESSAGE, total_items=2)
        log.info("Audit started", role=self.state.role.value)

        try:
            self._set_loading_message(f"Accessing GitHub API for @{handle}...")
            fetcher = GitHubProfileFetcher(
                settings=self.system_params.github,
                timeouts=self.system_params.timeouts,
                correlation_id=correlation_id,
                transport=self.transport,
            )
            data = await fetcher.fetch_portfolio(handle)
            self.state.data = data
            self.progress_tracker.increment()

            self._set_loading_message(
                f"AI is auditing your portfolio for {self.state.role.value} standards..."
            )
            analyzer = PortfolioAnalyzer(
                api_key=self.api_key,
                settings=self.system_params.llm,
                timeouts=self.system_params.timeouts,
                correlation_id=correlation_id,
            )
            self.state.result = await analyzer.analyze(data, self.state.role)
            self.progress_tracker.increment()
            log.info("Audit finished", overall_score=self.state.result.overall_score)

        except AuditError as e:
            log.warning("Audit failed", error_type=type(e).__name__, error=str(e))
            self.state.error = str(e)
            self.state.data = None
        except Exception as e:
            log.exception("Unexpected audit failure", error=str(e))
            self.state.error = UNEXPECTED_ERROR_MESSAGE
            self.state.data = None
        finally:
            self.state.loading = False
            self.progress_tracker.complete_phase()

        return self.state

    def reset(self) -> AuditState:
        """Return to the input view, discarding fetched data and the result."""
        self.state.data = None
        self.state.result = None
        self.state.query = ""
        self.logger.info("Audit state reset")
        return self.state

    def toggle_mode(self) -> bool:
        """Flip between assessment and recruiter framing.

        Returns:
            True when recruiter framing is now active
        """
        self.state.recruiter_mode = not self.state.recruiter_mode
        return self.state.recruiter_mode

    def render(self) -> None:
        """Print the dashboard for the current mode."""
        if self.state.error:
            self.console.print(f"[bold red]{self.state.error}[/bold red]")
            return
        data, result = self.state.data, self.state.result
        if data is None or result is None or self.state.loading:
            return

        if self.state.recruiter_mode:
            portfolio_reporting.render_recruiter_view(self.console, data, result)
        else:
            portfolio_reporting.render_assessment_view(
                self.console, data, result, self.state.role
            )

    def export_resume(self, path: "Path | str | None" = None) -> Path:
        """
        Write the resume snapshot of the current result.

        Args:
            path: Output file (defaults to <resume_dir>/<login>-portfolio-resume.md)

        Returns:
            Path of the written file

        Raises:
            InvalidInput: If there is no result to export
        """
        data, result = self.state.data, self.state.result
        if data is None or result is None or self.state.loading:
            raise InvalidInput("Run an audit before exporting a resume")

        if path is None:
            path = (
                Path(self.system_params.output.resume_dir)
                / f"{data.profile.login}-portfolio-resume.md"
            )

        output_path = portfolio_reporting.write_resume(
            Path(path), data, result, self.state.role
        )
        self.logger.info("Resume exported", path=str(output_path))
        return output_path
