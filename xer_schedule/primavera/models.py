"""
Data models for imported P6 schedules.

Defines dataclasses for the project, tasks, WBS nodes, relationships and
calendars built from an XER export. Entities are immutable; the critical
path engine returns updated task copies instead of mutating them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

FINISH_TO_START = 'PR_FS'
START_TO_START = 'PR_SS'
FINISH_TO_FINISH = 'PR_FF'
START_TO_FINISH = 'PR_SF'

RELATIONSHIP_TYPES = (FINISH_TO_START, START_TO_START, FINISH_TO_FINISH, START_TO_FINISH)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Project:
    """Project header (first PROJECT row of the export)."""

    project_id: str
    project_name: str
    data_date: Optional[datetime] = None
    start_date: Optional[datetime] = None
    finish_date: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'projectId': self.project_id,
            'projectName': self.project_name,
            'dataDate': _isoformat(self.data_date),
            'startDate': _isoformat(self.start_date),
            'finishDate': _isoformat(self.finish_date),
        }


@dataclass(frozen=True)
class Task:
    """Represents a schedule task/activity."""

    task_id: str
    task_code: str
    task_name: str

    # Actual dates when present, otherwise target (baseline) dates.
    # Treated as the task's early dates by the CPM engine.
    start_date: Optional[datetime] = None
    finish_date: Optional[datetime] = None

    duration_hours: Optional[float] = None        # target_drtn_hr_cnt
    percent_complete: Optional[float] = None      # phys_complete_pct
    total_float_hours: Optional[float] = None     # written by the CPM engine only

    wbs_id: Optional[str] = None
    calendar_id: Optional[str] = None
    task_type: Optional[str] = None               # TT_Task, TT_Mile, TT_FinMile, TT_LOE, TT_Rsrc
    status: Optional[str] = None                  # TK_NotStart, TK_Active, TK_Complete
    constraint_type: Optional[str] = None
    constraint_date: Optional[str] = None

    # P6 reference value (for comparison reports only)
    imported_total_float_hours: Optional[float] = field(default=None, compare=False)

    def has_dates(self) -> bool:
        """Check if the task has both start and finish dates."""
        return self.start_date is not None and self.finish_date is not None

    def is_critical(self) -> bool:
        """Check if the task is on the critical path (float <= 0)."""
        return self.total_float_hours is not None and self.total_float_hours <= 0

    def is_milestone(self) -> bool:
        """Check if task is a milestone."""
        return self.task_type in ('TT_FinMile', 'TT_Mile')

    def is_completed(self) -> bool:
        """Check if task is completed."""
        return self.status == 'TK_Complete'

    def display_name(self) -> str:
        return self.task_name or self.task_code or self.task_id

    def to_dict(self) -> dict[str, Any]:
        return {
            'taskId': self.task_id,
            'taskCode': self.task_code,
            'taskName': self.task_name,
            'startDate': _isoformat(self.start_date),
            'finishDate': _isoformat(self.finish_date),
            'duration': self.duration_hours,
            'percentComplete': self.percent_complete,
            'totalFloat': self.total_float_hours,
            'wbsId': self.wbs_id,
            'calendarId': self.calendar_id,
            'taskType': self.task_type,
            'status': self.status,
            'cstrType': self.constraint_type,
            'cstrDate': self.constraint_date,
        }


@dataclass(frozen=True)
class WBSNode:
    """Work breakdown structure node (PROJWBS row)."""

    wbs_id: str
    wbs_name: str
    wbs_short_name: str
    parent_wbs_id: Optional[str] = None
    seq_num: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'wbsId': self.wbs_id,
            'wbsName': self.wbs_name,
            'wbsShortName': self.wbs_short_name,
            'parentWbsId': self.parent_wbs_id,
            'seqNum': self.seq_num,
        }


@dataclass(frozen=True)
class Relationship:
    """Represents a predecessor-successor relationship (TASKPRED row)."""

    pred_task_id: str
    task_id: str                 # successor
    pred_type: str = FINISH_TO_START
    lag_hours: Optional[float] = None

    @property
    def succ_task_id(self) -> str:
        return self.task_id

    def effective_lag_hours(self) -> float:
        return self.lag_hours or 0.0

    def is_finish_to_start(self) -> bool:
        return self.pred_type == FINISH_TO_START

    def is_start_to_start(self) -> bool:
        return self.pred_type == START_TO_START

    def is_finish_to_finish(self) -> bool:
        return self.pred_type == FINISH_TO_FINISH

    def is_start_to_finish(self) -> bool:
        return self.pred_type == START_TO_FINISH

    def to_dict(self) -> dict[str, Any]:
        return {
            'predTaskId': self.pred_task_id,
            'taskId': self.task_id,
            'predType': self.pred_type,
            'lag': self.lag_hours,
        }


@dataclass(frozen=True)
class Calendar:
    """Calendar reference (CALENDAR row). Not used in float calculation."""

    calendar_id: str
    calendar_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            'calendarId': self.calendar_id,
            'calendarName': self.calendar_name,
        }


@dataclass
class ScheduleData:
    """Everything built from one XER import."""

    project: Optional[Project]
    tasks: list[Task] = field(default_factory=list)
    wbs: list[WBSNode] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)
    calendars: list[Calendar] = field(default_factory=list)

    def get_task(self, task_id: str) -> Optional[Task]:
        """Get the first task with the given id."""
        for task in self.tasks:
            if task.task_id == task_id:
                return task
        return None

    def get_critical_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.is_critical()]

    def to_dict(self) -> dict[str, Any]:
        """Plain payload for persistence and rendering collaborators."""
        return {
            'project': self.project.to_dict() if self.project else None,
            'tasks': [t.to_dict() for t in self.tasks],
            'wbs': [w.to_dict() for w in self.wbs],
            'relationships': [r.to_dict() for r in self.relationships],
            'calendars': [c.to_dict() for c in self.calendars],
        }
