"""
Output data schemas for validation.

This module defines Pydantic models for the schedule payload handed to
persistence and rendering collaborators, so the JSON shape stays stable
for downstream readers.

Usage:
    from xer_schedule.schemas import validate_schedule_payload

    schedule = validate_schedule_payload(data.to_dict())
"""

from .primavera import (
    ProjectSchema,
    TaskSchema,
    WBSSchema,
    RelationshipSchema,
    CalendarSchema,
    ScheduleSchema,
)
from .validator import validate_schedule_payload, SchemaValidationError

__all__ = [
    'ProjectSchema',
    'TaskSchema',
    'WBSSchema',
    'RelationshipSchema',
    'CalendarSchema',
    'ScheduleSchema',
    'validate_schedule_payload',
    'SchemaValidationError',
]
