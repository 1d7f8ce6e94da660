"""
Schedule Model Builder.

Maps the raw PROJECT, TASK, PROJWBS, TASKPRED and CALENDAR tables of an XER
export into typed schedule entities. Only type coercion is applied: missing
tables become empty lists, missing fields fall back to defaults, and
duplicate ids or dangling references are passed through untouched.
"""

import logging
from typing import Optional

from xer_schedule.utils.coercion import (
    parse_optional_date,
    parse_optional_float,
    parse_optional_int,
    parse_optional_str,
)
from .models import (
    Calendar,
    FINISH_TO_START,
    Project,
    RELATIONSHIP_TYPES,
    Relationship,
    ScheduleData,
    Task,
    WBSNode,
)
from .xer_parser import RawRecord, RawTables

logger = logging.getLogger(__name__)


def _first(record: RawRecord, *names: str) -> Optional[str]:
    """First non-empty value among the given fields."""
    for name in names:
        value = parse_optional_str(record.get(name))
        if value is not None:
            return value
    return None


def build_project(tables: RawTables) -> Optional[Project]:
    """Build the project from the first PROJECT row, or None if absent."""
    rows = tables.get('PROJECT') or []
    if not rows:
        return None

    row = rows[0]
    return Project(
        project_id=row.get('proj_id') or '',
        project_name=_first(row, 'proj_short_name', 'proj_name') or '',
        data_date=parse_optional_date(row.get('last_recalc_date')),
        start_date=parse_optional_date(row.get('plan_start_date')),
        finish_date=parse_optional_date(row.get('plan_end_date')),
    )


def build_task(row: RawRecord) -> Task:
    """Build a Task from a TASK row."""
    # Actual dates win over target (baseline) dates
    start_date = parse_optional_date(_first(row, 'act_start_date', 'target_start_date'))
    finish_date = parse_optional_date(_first(row, 'act_end_date', 'target_end_date'))

    return Task(
        task_id=row.get('task_id') or '',
        task_code=row.get('task_code') or '',
        task_name=row.get('task_name') or '',
        start_date=start_date,
        finish_date=finish_date,
        duration_hours=parse_optional_float(row.get('target_drtn_hr_cnt')),
        percent_complete=parse_optional_float(row.get('phys_complete_pct')),
        wbs_id=parse_optional_str(row.get('wbs_id')),
        calendar_id=parse_optional_str(row.get('clndr_id')),
        task_type=parse_optional_str(row.get('task_type')),
        status=parse_optional_str(row.get('status_code')),
        constraint_type=parse_optional_str(row.get('cstr_type')),
        constraint_date=parse_optional_str(row.get('cstr_date')),
        imported_total_float_hours=parse_optional_float(row.get('total_float_hr_cnt')),
    )


def build_tasks(tables: RawTables) -> list[Task]:
    """Build every TASK row, including rows without an id."""
    return [build_task(row) for row in tables.get('TASK') or []]


def build_wbs(tables: RawTables) -> list[WBSNode]:
    """Build WBS nodes from PROJWBS rows."""
    return [
        WBSNode(
            wbs_id=row.get('wbs_id') or '',
            wbs_name=row.get('wbs_name') or '',
            wbs_short_name=row.get('wbs_short_name') or '',
            parent_wbs_id=parse_optional_str(row.get('parent_wbs_id')),
            seq_num=parse_optional_int(row.get('seq_num')),
        )
        for row in tables.get('PROJWBS') or []
    ]


def _relationship_type(value: Optional[str]) -> str:
    if value in RELATIONSHIP_TYPES:
        return value
    if value:
        logger.debug("Unknown relationship type %r treated as %s", value, FINISH_TO_START)
    return FINISH_TO_START


def build_relationships(tables: RawTables) -> list[Relationship]:
    """Build relationships from TASKPRED rows (blank or unknown type becomes PR_FS)."""
    return [
        Relationship(
            pred_task_id=row.get('pred_task_id') or '',
            task_id=row.get('task_id') or '',
            pred_type=_relationship_type(row.get('pred_type')),
            lag_hours=parse_optional_float(row.get('lag_hr_cnt')),
        )
        for row in tables.get('TASKPRED') or []
    ]


def build_calendars(tables: RawTables) -> list[Calendar]:
    """Build calendar references from CALENDAR rows."""
    return [
        Calendar(
            calendar_id=row.get('clndr_id') or '',
            calendar_name=row.get('clndr_name') or '',
        )
        for row in tables.get('CALENDAR') or []
    ]


def build_schedule(tables: RawTables) -> ScheduleData:
    """
    Build all schedule entities from a raw table map.

    Args:
        tables: Table map from the XER parser

    Returns:
        ScheduleData with float not yet calculated
    """
    schedule = ScheduleData(
        project=build_project(tables),
        tasks=build_tasks(tables),
        wbs=build_wbs(tables),
        relationships=build_relationships(tables),
        calendars=build_calendars(tables),
    )

    logger.debug(
        "Built schedule: %d tasks, %d WBS nodes, %d relationships, %d calendars",
        len(schedule.tasks), len(schedule.wbs),
        len(schedule.relationships), len(schedule.calendars),
    )
    return schedule
