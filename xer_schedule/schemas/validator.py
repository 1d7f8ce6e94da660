"""
Schema validation for schedule payloads.

Validates that a payload conforms to ScheduleSchema before it is handed to
persistence or rendering collaborators.
"""

from typing import Any, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError

from .primavera import ScheduleSchema


class SchemaValidationError(Exception):
    """Raised when schema validation fails."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


def _format_error(error: Dict[str, Any]) -> str:
    location = '.'.join(str(part) for part in error.get('loc', ()))
    return f"{location}: {error.get('msg', 'invalid value')}"


def validate_schedule_payload(payload: Dict[str, Any]) -> ScheduleSchema:
    """
    Validate a serialized schedule payload.

    Args:
        payload: Output of ScheduleData.to_dict() (or equivalent JSON)

    Returns:
        Parsed ScheduleSchema

    Raises:
        SchemaValidationError: listing every problem found
    """
    try:
        return ScheduleSchema.model_validate(payload)
    except PydanticValidationError as e:
        errors = [_format_error(err) for err in e.errors()]
        raise SchemaValidationError(
            f"Schedule payload failed validation with {len(errors)} error(s)",
            errors=errors,
        ) from e
