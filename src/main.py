"""Command-line entry point for the GitHub portfolio audit."""

import argparse
import asyncio
from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt

from src.coordinator import AuditCoordinator
from src.models.analysis import DeveloperRole
from src.models.config import SystemParams
from src.utils.credential_manager import CredentialManager
from src.utils.errors import AuditError
from src.utils.logger import configure_logging
from src.utils.progress_tracker import ProgressTracker

console = Console()

ROLE_CHOICES = [role.value for role in DeveloperRole]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-portfolio-audit",
        description="Recruiter-ready AI audit of a public GitHub portfolio.",
    )
    parser.add_argument(
        "profile",
        nargs="?",
        help="GitHub username or profile URL (prompted for when omitted)",
    )
    parser.add_argument(
        "--role",
        choices=ROLE_CHOICES,
        default=DeveloperRole.GENERAL.value,
        help="Role the portfolio is assessed for",
    )
    parser.add_argument(
        "--recruiter",
        action="store_true",
        help="Show the recruiter view instead of the assessment view",
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        help="Write the resume snapshot to PATH after the audit",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to system_params.json (default: config/system_params.json)",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level",
    )
    return parser


async def run_once(
    coordinator: AuditCoordinator, profile: str, role: str, export: Optional[str]
) -> int:
    """Audit one profile non-interactively. Returns the process exit code."""
    state = await coordinator.submit(profile, role)
    coordinator.render()
    if state.error:
        return 1

    if export:
        path = coordinator.export_resume(export)
        console.print(f"[green]✓[/green] Resume snapshot written to {path}")
    return 0


async def run_interactive(coordinator: AuditCoordinator, default_role: str) -> int:
    """Prompt-driven loop: submit, toggle mode, export, reset."""
    while True:
        query = Prompt.ask(
            "GitHub username or profile URL", default=coordinator.state.query or None
        )
        role = Prompt.ask(
            "Focus role", choices=ROLE_CHOICES, default=default_role
        )
        await coordinator.submit(query or "", role)
        default_role = role
        coordinator.render()

        while coordinator.state.has_results:
            action = Prompt.ask(
                "Next", choices=["toggle", "export", "reset", "quit"], default="toggle"
            )
            if action == "toggle":
                coordinator.toggle_mode()
                coordinator.render()
            elif action == "export":
                try:
                    path = coordinator.export_resume()
                except AuditError as e:
                    console.print(f"[red]{e}[/red]")
                    continue
                console.print(f"[green]✓[/green] Resume snapshot written to {path}")
            elif action == "reset":
                coordinator.reset()
            else:
                return 0

        if not Confirm.ask("Audit another profile?", default=True):
            return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    system_params = SystemParams.load(args.config)
    configure_logging(log_level=args.log_level or system_params.log_level)

    credentials = CredentialManager()
    api_key = credentials.get_gemini_api_key()

    coordinator = AuditCoordinator(
        api_key=api_key,
        system_params=system_params,
        progress_tracker=ProgressTracker(console=console),
        console=console,
    )
    if args.recruiter:
        coordinator.toggle_mode()

    if args.profile:
        return asyncio.run(run_once(coordinator, args.profile, args.role, args.export))

    return asyncio.run(run_interactive(coordinator, args.role))


if __name__ == "__main__":
    raise SystemExit(main())
