"""
Jinja2 rendering of the prompt templates under src/prompts/.

Templates render with ``StrictUndefined``: a variable the caller forgot is an
error, never an empty string silently sent to the model.

Usage:
    from src.utils.prompt_loader import render_prompt

    prompt = render_prompt(
        "analysis/portfolio_audit.j2",
        role="Backend",
        profile=profile,
        repositories_json=repositories_json,
    )
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from src.utils.logger import get_logger

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


@lru_cache(maxsize=None)
def get_environment(template_dir: Path = PROMPTS_DIR) -> Environment:
    """One shared environment per template directory."""
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,  # Prompts are text, not HTML
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_prompt(
    template_name: str,
    correlation_id: Optional[str] = None,
    template_dir: Path = PROMPTS_DIR,
    **variables: Any,
) -> str:
    """
    Render a prompt template.

    Args:
        template_name: Path relative to the template directory
            (e.g., "analysis/portfolio_audit.j2")
        correlation_id: Optional correlation ID for logging
        template_dir: Template root, src/prompts unless overridden
        **variables: Template variables

    Raises:
        TemplateNotFound: If the template file doesn't exist
        TemplateSyntaxError: If the template has syntax errors
        UndefinedError: If a variable the template uses is missing
    """
    log = get_logger(
        correlation_id=correlation_id, phase="analysis", component="prompt_loader"
    ).bind(template_name=template_name)

    try:
        rendered = get_environment(template_dir).get_template(template_name).render(
            **variables
        )
    except TemplateError as e:
        log.error(
            "Prompt render failed",
            error_type=type(e).__name__,
            error=str(e),
            variables_provided=sorted(variables),
        )
        raise

    log.debug("Template rendered", rendered_length=len(rendered))
    return rendered
