"""
Response Validator Module
Validates model-produced JSON documents against the declared JSON schemas.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
from jsonschema import Draft7Validator, SchemaError, ValidationError

from src.utils.errors import SchemaViolation

logger = structlog.get_logger(__name__)

DEFAULT_SCHEMA_DIR = Path(__file__).parent.parent / "schemas"
ANALYSIS_RESULT_SCHEMA = "analysis_result_schema.json"


class ConfigurationError(Exception):
    """Raised when a schema file is missing or unreadable."""

    pass


class SchemaValidator:
    """Validates untrusted documents against JSON schemas."""

    def __init__(self, schema_dir: Optional[Path] = None):
        """
        Initialize validator with schema directory.

        Args:
            schema_dir: Path to directory containing JSON schemas
                (defaults to src/schemas)
        """
        self.schema_dir = schema_dir or DEFAULT_SCHEMA_DIR
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load JSON schema from file.

        Args:
            schema_name: Schema filename (e.g., "analysis_result_schema.json")

        Returns:
            Loaded schema dictionary

        Raises:
            ConfigurationError: If schema file not found or invalid
        """
        if schema_name in self._schemas:
            logger.debug("schema_loaded_from_cache", schema_name=schema_name)
            return self._schemas[schema_name]

        schema_path = self.schema_dir / schema_name
        if not schema_path.exists():
            logger.error(
                "schema_not_found",
                schema_name=schema_name,
                schema_path=str(schema_path),
            )
            raise ConfigurationError(f"Schema file not found: {schema_path}")

        try:
            with open(schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
            Draft7Validator.check_schema(schema)
        except json.JSONDecodeError as e:
            logger.error("schema_invalid_json", schema_name=schema_name, error=str(e))
            raise ConfigurationError(f"Invalid JSON in schema {schema_name}: {e}")
        except SchemaError as e:
            logger.error("schema_invalid", schema_name=schema_name, error=e.message)
            raise ConfigurationError(f"Invalid schema {schema_name}: {e.message}")

        self._schemas[schema_name] = schema
        logger.debug(
            "schema_loaded", schema_name=schema_name, schema_path=str(schema_path)
        )
        return schema

    def validate(self, document: Dict[str, Any], schema_name: str) -> None:
        """
        Validate a document against a schema.

        Args:
            document: Parsed JSON document to validate
            schema_name: Schema filename to validate against

        Raises:
            SchemaViolation: If validation fails, with one message per error
        """
        schema = self.load_schema(schema_name)
        validator = Draft7Validator(schema)

        errors = sorted(
            validator.iter_errors(document),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        if not errors:
            logger.debug("validation_passed", schema_name=schema_name)
            return

        logger.warning(
            "validation_failed", schema_name=schema_name, error_count=len(errors)
        )
        raise SchemaViolation(errors=self._format_validation_errors(errors))

    def _format_validation_errors(self, errors: List[ValidationError]) -> List[str]:
        """
        Format validation errors into readable messages.

        Args:
            errors: List of validation errors from jsonschema

        Returns:
            List of formatted error messages
        """
        messages = []

        for error in errors:
            path = ".".join(str(p) for p in error.absolute_path) or "(root)"

            if error.validator == "required":
                missing_field = error.message.split("'")[1]
                messages.append(f"Missing required field '{missing_field}' at {path}")
            elif error.validator == "type":
                messages.append(
                    f"Type mismatch at '{path}': expected {error.validator_value}"
                )
            elif error.validator == "enum":
                messages.append(
                    f"Invalid value at '{path}': {error.instance!r} "
                    f"(allowed: {', '.join(map(str, error.validator_value))})"
                )
            elif error.validator in ("minimum", "maximum"):
                messages.append(f"Value out of range at '{path}': {error.message}")
            else:
                messages.append(f"Validation error at '{path}': {error.message}")

        return messages
