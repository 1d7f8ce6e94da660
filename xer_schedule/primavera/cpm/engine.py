"""
CPM (Critical Path Method) Engine.

Computes late dates and total float with a backward pass over the
relationship network.

The imported dates are taken as the early dates: actual dates for started
or finished work, target dates otherwise. There is no forward pass, so a
schedule whose dates disagree with its own logic network produces float
that reflects the disagreement. Durations are wall-clock deltas between
start and finish, not working hours.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional

from xer_schedule.config.settings import settings
from ..models import Relationship, Task
from .network import TaskNetwork

logger = logging.getLogger(__name__)

_IN_PROGRESS = 1
_DONE = 2


@dataclass(frozen=True)
class LateDates:
    """Late start/finish for one task."""

    late_start: datetime
    late_finish: datetime


@dataclass
class FloatResult:
    """Results from a float calculation."""

    tasks: list[Task]                       # input order, float populated
    late_dates: dict[str, LateDates]
    project_end: Optional[datetime]
    cycles: list[list[str]] = field(default_factory=list)

    @property
    def cycle_task_ids(self) -> set[str]:
        """Task ids that sit on at least one relationship cycle."""
        return {tid for cycle in self.cycles for tid in cycle}

    @property
    def critical_task_ids(self) -> list[str]:
        """Task ids with total float <= 0, in input order."""
        return [t.task_id for t in self.tasks if t.is_critical()]

    def get_tasks_by_float(self, max_float_hours: float = None) -> list[Task]:
        """Get tasks sorted by float (ascending)."""
        tasks = [t for t in self.tasks if t.total_float_hours is not None]
        if max_float_hours is not None:
            tasks = [t for t in tasks if t.total_float_hours <= max_float_hours]
        return sorted(tasks, key=lambda t: t.total_float_hours)


def _hours(delta: timedelta) -> float:
    return delta.total_seconds() / 3600


class CPMEngine:
    """
    Backward-pass float engine.

    Late dates are resolved lazily, one task at a time, with an explicit
    stack instead of recursion. Each task is marked in-progress while its
    successors are being resolved and done once its late dates are known.
    A relationship leading back to an in-progress task closes a cycle; it is
    skipped for that evaluation and the cycle is recorded.
    """

    def __init__(self, tasks: Iterable[Task], relationships: Iterable[Relationship]):
        """
        Initialize CPM engine.

        Args:
            tasks: Tasks with start/finish dates (treated as early dates)
            relationships: Predecessor relationships between the tasks
        """
        self.input_tasks: list[Task] = list(tasks)
        self.network = TaskNetwork.build(self.input_tasks, relationships)
        self.project_end: Optional[datetime] = None
        self.late_dates: dict[str, LateDates] = {}
        self.cycles: list[list[str]] = []
        self._state: dict[str, int] = {}

    def _get_project_end(self) -> Optional[datetime]:
        """Get the latest finish date across all tasks."""
        finishes = [t.finish_date for t in self.input_tasks if t.finish_date is not None]
        return max(finishes) if finishes else None

    def _is_resolvable(self, task_id: str) -> bool:
        task = self.network.get_task(task_id)
        return task is not None and task.has_dates()

    def _successor_ids(self, task_id: str) -> Iterator[str]:
        for rel in self.network.get_successors(task_id):
            yield rel.succ_task_id

    def _calculate_late_dates(self, task: Task, successors: list[Relationship]) -> LateDates:
        """
        Calculate late dates for a task from its resolved successors.

        Successors without late dates (unknown, undated, or closing a cycle)
        are ignored; with none left the project end governs.
        """
        duration = task.finish_date - task.start_date
        candidates = []

        for rel in successors:
            succ = self.late_dates.get(rel.succ_task_id)
            if succ is None:
                continue

            try:
                lag = timedelta(hours=rel.effective_lag_hours())

                if rel.is_start_to_start():
                    # SS: pred late start <= succ late start - lag
                    late_finish = succ.late_start - lag + duration
                elif rel.is_finish_to_finish():
                    # FF: pred late finish <= succ late finish - lag
                    late_finish = succ.late_finish - lag
                elif rel.is_start_to_finish():
                    # SF: pred late start <= succ late finish - lag
                    late_finish = succ.late_finish - lag + duration
                else:
                    # FS (and unknown types): pred late finish <= succ late start - lag
                    late_finish = succ.late_start - lag
                candidates.append(LateDates(late_start=late_finish - duration, late_finish=late_finish))
            except (OverflowError, ValueError):
                # Lag pushes the date outside the datetime range
                logger.debug("Ignoring relationship %s -> %s with unusable lag %r",
                             rel.pred_task_id, rel.succ_task_id, rel.lag_hours)

        if candidates:
            return min(candidates, key=lambda dates: dates.late_finish)
        return LateDates(late_start=self.project_end - duration, late_finish=self.project_end)

    def _record_cycle(self, path: list[str], positions: dict[str, int], back_to: str) -> None:
        cycle = path[positions[back_to]:]
        self.cycles.append(cycle)
        logger.debug("Relationship cycle skipped: %s -> %s", ' -> '.join(cycle), back_to)

    def resolve(self, task_id: str) -> Optional[LateDates]:
        """
        Resolve late dates for a task and every successor it depends on.

        Returns None when the task is unknown, undated, or no project end
        could be established.
        """
        if self.project_end is None or not self._is_resolvable(task_id):
            return None
        if self._state.get(task_id) == _DONE:
            return self.late_dates[task_id]

        path = [task_id]
        positions = {task_id: 0}
        pending = [self._successor_ids(task_id)]
        self._state[task_id] = _IN_PROGRESS

        while path:
            current = path[-1]
            descended = False

            for succ_id in pending[-1]:
                state = self._state.get(succ_id)
                if state == _IN_PROGRESS:
                    self._record_cycle(path, positions, succ_id)
                    continue
                if state is None and self._is_resolvable(succ_id):
                    self._state[succ_id] = _IN_PROGRESS
                    positions[succ_id] = len(path)
                    path.append(succ_id)
                    pending.append(self._successor_ids(succ_id))
                    descended = True
                    break

            if descended:
                continue

            # All successors handled; finalize this task
            task = self.network.get_task(current)
            self.late_dates[current] = self._calculate_late_dates(
                task, self.network.get_successors(current)
            )
            self._state[current] = _DONE
            path.pop()
            pending.pop()
            del positions[current]

        return self.late_dates[task_id]

    def _task_float(self, task: Task) -> Optional[float]:
        if not task.has_dates():
            return None

        if task.task_id:
            late = self.resolve(task.task_id)
        else:
            # Tasks without an id cannot take part in relationships
            late = self._calculate_late_dates(task, [])

        if late is None:
            return None

        # Later duplicates own the id; each task still measures float from its own start
        return _hours(late.late_start - task.start_date)

    def run(self) -> FloatResult:
        """
        Execute the float calculation.

        Returns:
            FloatResult with a copy of every dated task carrying its total
            float; undated tasks are returned unchanged
        """
        self.project_end = self._get_project_end()
        self.late_dates = {}
        self.cycles = []
        self._state = {}

        if self.project_end is None:
            logger.warning("No task has a finish date; float not calculated for %d tasks",
                           len(self.input_tasks))
            return FloatResult(tasks=list(self.input_tasks), late_dates={}, project_end=None)

        updated = []
        for task in self.input_tasks:
            total_float = self._task_float(task)
            if total_float is None:
                updated.append(task)
            else:
                updated.append(replace(task, total_float_hours=total_float))

        if self.cycles:
            cycle_ids = {tid for cycle in self.cycles for tid in cycle}
            logger.warning("Skipped %d relationship cycle(s) involving %d tasks",
                           len(self.cycles), len(cycle_ids))

        return FloatResult(
            tasks=updated,
            late_dates=dict(self.late_dates),
            project_end=self.project_end,
            cycles=list(self.cycles),
        )


def compute_float(tasks: Iterable[Task], relationships: Iterable[Relationship]) -> list[Task]:
    """
    Recompute total float for every task.

    Args:
        tasks: Tasks to evaluate
        relationships: Relationships between them

    Returns:
        All input tasks in order; dated tasks carry total_float_hours
    """
    return CPMEngine(tasks, relationships).run().tasks


def compare_with_imported(tasks: Iterable[Task], tolerance_hours: float = None) -> dict:
    """
    Compare calculated float with P6's stored float values.

    Args:
        tasks: Tasks after the float calculation
        tolerance_hours: Allowed difference (default: settings.FLOAT_MATCH_TOLERANCE_HOURS)

    Returns:
        Dict with comparison statistics and up to 10 sample differences
    """
    if tolerance_hours is None:
        tolerance_hours = settings.FLOAT_MATCH_TOLERANCE_HOURS

    comparisons = {
        'total_compared': 0,
        'float_match': 0,
        'float_diff': 0,
        'critical_match': 0,
        'critical_diff': 0,
        'differences': [],
    }

    for task in tasks:
        if task.total_float_hours is None or task.imported_total_float_hours is None:
            continue

        comparisons['total_compared'] += 1

        diff = abs(task.total_float_hours - task.imported_total_float_hours)
        if diff <= tolerance_hours:
            comparisons['float_match'] += 1
        else:
            comparisons['float_diff'] += 1
            if len(comparisons['differences']) < 10:
                comparisons['differences'].append({
                    'task_id': task.task_id,
                    'task_name': task.task_name[:50],
                    'calculated': task.total_float_hours,
                    'imported': task.imported_total_float_hours,
                    'diff_hours': diff,
                })

        if task.is_critical() == (task.imported_total_float_hours <= 0):
            comparisons['critical_match'] += 1
        else:
            comparisons['critical_diff'] += 1

    return comparisons
