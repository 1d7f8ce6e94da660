"""
Schedule quality insights.

Scores an imported schedule on common logic problems: open starts and
finishes, unlinked activities, long durations and hard constraints. Also
lists the activities on the critical path.

Score starts at 100 and loses 1 point per open end, 1 per long duration,
3 per hard constraint and 2 per unlinked activity, never going below 0.
"""

from collections import defaultdict
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Optional

from xer_schedule.config.settings import settings
from ..models import Relationship, ScheduleData, Task

CONSTRAINT_LABELS = {
    'CS': 'Start On (Must Start On)',
    'CF': 'Finish On (Must Finish On)',
    'MS': 'Start On or After (Mandatory Start)',
    'MF': 'Finish On or Before (Mandatory Finish)',
    'SNET': 'Start No Earlier Than',
    'FNLT': 'Finish No Later Than',
}
HARD_CONSTRAINTS = frozenset(CONSTRAINT_LABELS)

OPEN_END_PENALTY = 1
LONG_DURATION_PENALTY = 1
HARD_CONSTRAINT_PENALTY = 3
UNLINKED_PENALTY = 2


@dataclass
class InsightDetail:
    type: str
    severity: str          # info, warn, error
    message: str
    ref: dict[str, Any] = field(default_factory=dict)


@dataclass
class ScheduleInsights:
    score: int
    summary: str
    open_ends: list[InsightDetail] = field(default_factory=list)
    long_durations: list[InsightDetail] = field(default_factory=list)
    hard_constraints: list[InsightDetail] = field(default_factory=list)
    missing_logic: list[InsightDetail] = field(default_factory=list)
    critical_path: list[InsightDetail] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'score': self.score,
            'summary': self.summary,
            'details': {
                'openEnds': [asdict(d) for d in self.open_ends],
                'longDurations': [asdict(d) for d in self.long_durations],
                'hardConstraints': [asdict(d) for d in self.hard_constraints],
                'missingLogic': [asdict(d) for d in self.missing_logic],
                'criticalPathAnalysis': [asdict(d) for d in self.critical_path],
            },
        }


def get_constraint_label(code: str) -> str:
    return CONSTRAINT_LABELS.get(code, code)


def compute_insights(
    tasks: Iterable[Task],
    relationships: Iterable[Relationship],
    long_duration_hours: Optional[float] = None,
    hours_per_day: Optional[float] = None,
) -> ScheduleInsights:
    """
    Compute quality insights for a schedule.

    Args:
        tasks: Tasks, ideally after the float calculation
        relationships: Schedule relationships
        long_duration_hours: Duration above which an activity is flagged
            (default: settings.LONG_DURATION_THRESHOLD_HOURS)
        hours_per_day: Work hours per day used in messages

    Returns:
        ScheduleInsights with score, summary and per-category details
    """
    if long_duration_hours is None:
        long_duration_hours = settings.LONG_DURATION_THRESHOLD_HOURS
    if hours_per_day is None:
        hours_per_day = settings.HOURS_PER_DAY

    tasks = list(tasks)

    # Each end of a link counts on its own, even when the other id is blank
    successors = defaultdict(list)
    predecessors = defaultdict(list)
    for rel in relationships:
        successors[rel.pred_task_id].append(rel.succ_task_id)
        predecessors[rel.succ_task_id].append(rel.pred_task_id)

    insights = ScheduleInsights(score=100, summary='')

    for task in tasks:
        tid = task.task_id
        name = task.display_name()
        ref = {'taskId': tid, 'taskCode': task.task_code}
        has_preds = bool(predecessors.get(tid))
        has_succs = bool(successors.get(tid))

        if not has_preds:
            insights.open_ends.append(InsightDetail(
                type='openStart',
                severity='warn',
                message=f'Activity "{name}" has no predecessors (open start)',
                ref=dict(ref),
            ))

        if not has_succs:
            insights.open_ends.append(InsightDetail(
                type='openFinish',
                severity='warn',
                message=f'Activity "{name}" has no successors (open finish)',
                ref=dict(ref),
            ))

        duration = task.duration_hours or 0
        if duration > long_duration_hours:
            days = round(duration / hours_per_day)
            insights.long_durations.append(InsightDetail(
                type='longDuration',
                severity='warn',
                message=(f'Activity "{name}" has long duration (~{days} working days). '
                         f'Consider breaking down.'),
                ref={**ref, 'hours': duration},
            ))

        if task.constraint_type in HARD_CONSTRAINTS:
            insights.hard_constraints.append(InsightDetail(
                type='hardConstraint',
                severity='error',
                message=f'Hard constraint ({get_constraint_label(task.constraint_type)}) on "{name}"',
                ref={**ref, 'constraintType': task.constraint_type,
                     'constraintDate': task.constraint_date},
            ))

        if not has_preds and not has_succs:
            insights.missing_logic.append(InsightDetail(
                type='noLogic',
                severity='error',
                message=f'Activity "{name}" is completely unlinked (no predecessors or successors)',
                ref=dict(ref),
            ))

        if task.is_critical():
            insights.critical_path.append(InsightDetail(
                type='criticalPath',
                severity='info',
                message=f'Activity "{name}" is on the critical path (TF: {task.total_float_hours:g})',
                ref={**ref, 'totalFloat': task.total_float_hours},
            ))

    score = 100
    score -= len(insights.open_ends) * OPEN_END_PENALTY
    score -= len(insights.long_durations) * LONG_DURATION_PENALTY
    score -= len(insights.hard_constraints) * HARD_CONSTRAINT_PENALTY
    score -= len(insights.missing_logic) * UNLINKED_PENALTY
    insights.score = max(score, 0)

    insights.summary = (
        f"Quality Score: {insights.score}/100 | Open Ends: {len(insights.open_ends)} | "
        f"Long Durations: {len(insights.long_durations)} | "
        f"Hard Constraints: {len(insights.hard_constraints)} | "
        f"Unlinked: {len(insights.missing_logic)} | "
        f"Critical Path: {len(insights.critical_path)} activities"
    )
    return insights


def compute_schedule_insights(schedule: ScheduleData, **kwargs) -> ScheduleInsights:
    """Compute insights for an imported schedule."""
    return compute_insights(schedule.tasks, schedule.relationships, **kwargs)
