"""
LLM Helpers Module

Single integration point for the Gemini generative-language service. All model
calls go through this module; business code never touches the SDK directly.

Example Usage:
    from src.utils.llm_helpers import call_gemini, parse_json_response

    text = await call_gemini(
        prompt,
        response_schema=schema,
        model="gemini-3-flash-preview",
        api_key=api_key,
    )
    document = parse_json_response(text)
"""

import json
from typing import Any, Optional

import structlog

from src.utils.errors import AuditError, EmptyModelResponse, SchemaViolation

logger = structlog.get_logger(__name__)


def _extract_json_from_markdown(response_text: str) -> str:
    """Extract JSON from LLM response, removing markdown code block markers if present.

    Args:
        response_text: Raw text response from LLM

    Returns:
        Clean JSON string with code block markers removed
    """
    json_text = response_text.strip()

    if json_text.startswith("```json"):
        json_text = json_text[7:]
    elif json_text.startswith("```"):
        json_text = json_text[3:]

    if json_text.endswith("```"):
        json_text = json_text[:-3]

    return json_text.strip()


async def call_gemini(
    prompt: str,
    response_schema: dict[str, Any],
    model: str,
    api_key: str,
    timeout_seconds: Optional[int] = None,
    correlation_id: Optional[str] = None,
) -> str:
    """
    Send one structured-output request to Gemini.

    Args:
        prompt: The rendered analysis prompt
        response_schema: Declared output shape (JSON Schema subset)
        model: Gemini model name
        api_key: Gemini API key
        timeout_seconds: Request timeout (transport default when None)
        correlation_id: Optional correlation ID for logging

    Returns:
        Raw response text

    Raises:
        EmptyModelResponse: If the model returned no text
        AuditError: If the request itself failed

    Note:
        - Single attempt, no retry
        - Logs prompt and response sizes at DEBUG level
    """
    from google import genai
    from google.genai import types

    log = logger.bind(correlation_id=correlation_id) if correlation_id else logger
    log.debug("LLM call initiated", model=model, prompt_length=len(prompt))

    http_options = (
        types.HttpOptions(timeout=timeout_seconds * 1000) if timeout_seconds else None
    )
    client = genai.Client(api_key=api_key, http_options=http_options)

    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=response_schema,
            ),
        )
    except Exception as e:
        log.error("LLM call failed", error=str(e), prompt_length=len(prompt))
        raise AuditError(f"AI analysis request failed: {e}") from e
    finally:
        await client.aio.aclose()

    text = response.text
    if not text:
        log.error("LLM returned empty response", model=model)
        raise EmptyModelResponse()

    log.debug("LLM call succeeded", response_length=len(text))
    return text.strip()


def parse_json_response(
    response_text: str, correlation_id: Optional[str] = None
) -> dict[str, Any]:
    """
    Parse model output into a JSON object.

    Args:
        response_text: Raw model text, optionally wrapped in a code fence
        correlation_id: Optional correlation ID for logging

    Returns:
        Parsed JSON object

    Raises:
        SchemaViolation: If the text is not a JSON object
    """
    try:
        document = json.loads(_extract_json_from_markdown(response_text))
    except json.JSONDecodeError as e:
        logger.warning(
            "Failed to parse JSON from LLM response",
            error=str(e),
            response=response_text[:200],
            correlation_id=correlation_id,
        )
        raise SchemaViolation(errors=[f"Response is not valid JSON: {e}"]) from e

    if not isinstance(document, dict):
        logger.warning(
            "LLM response is not a JSON object",
            response_type=type(document).__name__,
            correlation_id=correlation_id,
        )
        raise SchemaViolation(
            errors=[f"Expected a JSON object, got {type(document).__name__}"]
        )

    return document
