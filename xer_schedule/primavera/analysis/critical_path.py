"""
Critical Path Analysis.

Classifies tasks by total float once the CPM engine has run: critical,
near-critical and non-critical counts, float distribution buckets, and the
critical task list in schedule order.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from xer_schedule.config.settings import settings
from ..models import Task


@dataclass
class FloatSummary:
    """Float classification counts for one schedule."""

    total: int
    critical: int          # float <= 0
    near_critical: int     # 0 < float <= threshold
    non_critical: int      # float > threshold
    no_float: int          # float not calculated
    near_critical_threshold_hours: float

    def as_dict(self) -> dict:
        return {
            'total': self.total,
            'critical': self.critical,
            'nearCritical': self.near_critical,
            'nonCritical': self.non_critical,
            'noFloat': self.no_float,
        }

    def get_risk_summary(self) -> str:
        """Get summary of schedule risk."""
        days = self.near_critical_threshold_hours / settings.HOURS_PER_DAY
        return (f"{self.critical} critical tasks, {self.near_critical} near-critical "
                f"(<= {days:.0f} days float), {self.no_float} without float")


def summarize_float(
    tasks: Iterable[Task],
    near_critical_threshold_hours: float = None,
) -> FloatSummary:
    """
    Count tasks by float category.

    Args:
        tasks: Tasks after the float calculation
        near_critical_threshold_hours: Upper float bound for near-critical
            (default: settings.NEAR_CRITICAL_THRESHOLD_HOURS)
    """
    if near_critical_threshold_hours is None:
        near_critical_threshold_hours = settings.NEAR_CRITICAL_THRESHOLD_HOURS

    total = critical = near_critical = non_critical = no_float = 0
    for task in tasks:
        total += 1
        tf = task.total_float_hours
        if tf is None:
            no_float += 1
        elif tf <= 0:
            critical += 1
        elif tf <= near_critical_threshold_hours:
            near_critical += 1
        else:
            non_critical += 1

    return FloatSummary(
        total=total,
        critical=critical,
        near_critical=near_critical,
        non_critical=non_critical,
        no_float=no_float,
        near_critical_threshold_hours=near_critical_threshold_hours,
    )


def float_distribution(tasks: Iterable[Task], hours_per_day: float = None) -> dict[str, int]:
    """
    Bucket tasks by float in work days.

    Returns:
        Dict mapping bucket label to task count (empty buckets omitted)
    """
    if hours_per_day is None:
        hours_per_day = settings.HOURS_PER_DAY

    buckets = defaultdict(int)
    for task in tasks:
        tf = task.total_float_hours
        if tf is None:
            buckets['unknown'] += 1
            continue

        days = tf / hours_per_day
        if tf <= 0:
            buckets['0 (critical)'] += 1
        elif days < 1:
            buckets['< 1 day'] += 1
        elif days <= 5:
            buckets['1-5 days'] += 1
        elif days <= 10:
            buckets['5-10 days'] += 1
        elif days <= 20:
            buckets['10-20 days'] += 1
        else:
            buckets['> 20 days'] += 1

    return dict(buckets)


def critical_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Critical tasks sorted by start date (undated last)."""
    result = [t for t in tasks if t.is_critical()]
    result.sort(key=lambda t: t.start_date or datetime.max)
    return result


def near_critical_tasks(tasks: Iterable[Task], threshold_hours: float = None) -> list[Task]:
    """Tasks with 0 < float <= threshold, sorted by float."""
    if threshold_hours is None:
        threshold_hours = settings.NEAR_CRITICAL_THRESHOLD_HOURS

    result = [
        t for t in tasks
        if t.total_float_hours is not None and 0 < t.total_float_hours <= threshold_hours
    ]
    result.sort(key=lambda t: t.total_float_hours)
    return result
