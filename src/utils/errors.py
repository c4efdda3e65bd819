"""
Audit Error Taxonomy

Every stage of the audit pipeline fails fast with one of these exceptions.
The message of each exception is the human-readable text shown to the user,
so the coordinator can forward ``str(error)`` straight into its error slot.

Hierarchy:
    AuditError
    ├── InvalidInput         empty/unparseable handle, export without a result
    ├── NotFound             GET /users/{handle} returned 404
    ├── RateLimited          GET /users/{handle} returned 403
    ├── FetchFailure         any other unsuccessful GitHub response
    ├── EmptyModelResponse   Gemini returned no text
    └── SchemaViolation      Gemini text does not match the analysis schema
"""

from typing import Optional


class AuditError(Exception):
    """Base class for all user-facing audit failures."""

    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class InvalidInput(AuditError):
    default_message = "Please enter a valid GitHub username or URL"


class NotFound(AuditError):
    default_message = "User not found"


class RateLimited(AuditError):
    default_message = "GitHub API Rate Limit exceeded. Please try again later."


class FetchFailure(AuditError):
    default_message = "Failed to fetch profile"


class EmptyModelResponse(AuditError):
    default_message = "Empty response from AI"


class SchemaViolation(AuditError):
    """Raised when the model response parses but breaks the declared shape.

    Attributes:
        errors: Per-field validation messages (may be empty for parse errors)
    """

    default_message = "AI response did not match the expected analysis format"

    def __init__(
        self, message: Optional[str] = None, errors: Optional[list[str]] = None
    ) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors or [])
