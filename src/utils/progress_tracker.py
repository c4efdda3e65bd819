"""
Progress Tracker Module

Wraps rich library for the loading state shown while an audit run is in
flight. An audit has a fixed number of stages (GitHub fetch, AI analysis);
the status text rotates as each stage starts.

Example Usage:
    from src.utils.progress_tracker import ProgressTracker

    tracker = ProgressTracker()
    tracker.start_phase("Initializing analysis...", total_items=2)
    tracker.set_description("Accessing GitHub API for @octocat...")
    tracker.increment()
    tracker.set_description("AI is auditing your portfolio for Backend standards...")
    tracker.increment()
    tracker.complete_phase()
"""

from rich.progress import (
    Progress,
    SpinnerColumn,
    BarColumn,
    TextColumn,
    TimeElapsedColumn,
    TaskID,
)
from rich.console import Console
from typing import Optional


class ProgressTracker:
    """Manages the loading spinner for audit runs using rich library."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.progress: Optional[Progress] = None
        self.task_id: Optional[TaskID] = None
        self.total_items: int = 0
        self.completed_items: int = 0

    def start_phase(self, description: str, total_items: int) -> None:
        """
        Start the spinner for a new run.

        Args:
            description: Initial status text
            total_items: Number of stages in the run
        """
        if self.is_active():
            self.complete_phase()

        self.total_items = total_items
        self.completed_items = 0

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TextColumn("({task.completed}/{task.total})"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self.progress.start()
        self.task_id = self.progress.add_task(description=description, total=total_items)

    def set_description(self, description: str) -> None:
        """Replace the status text."""
        if self.progress is None or self.task_id is None:
            return

        self.progress.update(self.task_id, description=description)

    def increment(self, amount: int = 1) -> None:
        """Mark ``amount`` more stages as finished."""
        if self.progress is None or self.task_id is None:
            return

        self.completed_items += amount
        self.progress.update(self.task_id, advance=amount)

    def complete_phase(self) -> None:
        """Stop the spinner and reset state."""
        if self.progress is None or self.task_id is None:
            return

        self.progress.stop()

        self.progress = None
        self.task_id = None
        self.total_items = 0
        self.completed_items = 0

    def is_active(self) -> bool:
        """
        Check if progress tracker is currently active.

        Returns:
            True if progress tracking is active, False otherwise
        """
        return self.progress is not None and self.task_id is not None
