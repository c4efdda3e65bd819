"""
Structured Logger Module

JSON logging through structlog on top of the stdlib ``logging`` package. Every
audit run binds its own correlation ID so the GitHub fetch, the README fan-out
and the model call of one run can be traced together in the log file.

The terminal belongs to the rich dashboard and the progress spinner, so
``configure_logging`` attaches a file handler only. Until it is called, records
go through stdlib logging with no handlers, which prints WARNING and above to
stderr and drops the rest.

Example Usage:
    from src.utils.logger import configure_logging, get_logger

    configure_logging(log_level="DEBUG")
    logger = get_logger(phase="github_fetch", component="profile_fetcher")
    logger.info("Fetching repositories", handle="octocat", repo_limit=10)
"""

import logging
import uuid
from pathlib import Path
from typing import Optional
import structlog
from structlog.types import BindableLogger, EventDict, WrappedLogger

DEFAULT_LOG_FILE = "logs/portfolio-audit.log"
MASK = "***MASKED***"
SENSITIVE_FIELDS = ("password", "api_key", "token", "secret", "credential", "auth")


def mask_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Replace the value of any credential-like field with ``***MASKED***``.

    A key matches when it equals a sensitive name or carries it as a
    ``_``/``-`` delimited prefix or suffix, so ``gemini_api_key`` is masked
    while ``author`` is not.
    """
    for key in list(event_dict.keys()):
        key_lower = key.lower()
        for sensitive in SENSITIVE_FIELDS:
            if key_lower == sensitive or any(
                key_lower.startswith(f"{sensitive}{sep}")
                or key_lower.endswith(f"{sep}{sensitive}")
                for sep in ("_", "-")
            ):
                event_dict[key] = MASK
                break

    return event_dict


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_credentials,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    log_file: str = DEFAULT_LOG_FILE, log_level: str = "INFO"
) -> None:
    """
    Send JSON log lines to ``log_file`` and nowhere else.

    Args:
        log_file: Path to log file, parent directories are created
        log_level: Logging level name, case-insensitive

    Log Format (one JSON object per line):
        {"correlation_id": "a1b2...", "phase": "github_fetch",
         "component": "profile_fetcher", "event": "Portfolio fetched",
         "handle": "octocat", "level": "info", "timestamp": "..."}
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        handlers=[logging.FileHandler(log_path, encoding="utf-8")],
        force=True,
    )
    _configure_structlog()


def get_logger(
    correlation_id: Optional[str] = None,
    phase: Optional[str] = None,
    component: Optional[str] = None,
) -> BindableLogger:
    """
    Get structured logger with bound context.

    Args:
        correlation_id: Correlation ID for run tracing (generates UUID if not provided)
        phase: Pipeline phase (e.g., "github_fetch", "analysis")
        component: Component name (e.g., "profile_fetcher", "portfolio_analyzer")
    """
    if not structlog.is_configured():
        _configure_structlog()

    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    logger = structlog.get_logger().bind(correlation_id=correlation_id)
    if phase:
        logger = logger.bind(phase=phase)
    if component:
        logger = logger.bind(component=component)

    return logger
