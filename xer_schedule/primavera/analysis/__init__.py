"""
Schedule analysis built on calculated float.
"""

from .critical_path import FloatSummary, summarize_float, float_distribution, critical_tasks, near_critical_tasks
from .insights import ScheduleInsights, InsightDetail, compute_insights, compute_schedule_insights

__all__ = [
    'FloatSummary',
    'summarize_float',
    'float_distribution',
    'critical_tasks',
    'near_critical_tasks',
    'ScheduleInsights',
    'InsightDetail',
    'compute_insights',
    'compute_schedule_insights',
]
