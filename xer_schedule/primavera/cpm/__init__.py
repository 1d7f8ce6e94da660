"""
CPM (Critical Path Method) float calculation for imported P6 schedules.

This module provides:
- Task network construction with dependency handling
- Backward pass late dates over FS/SS/FF/SF relationships with lag
- Total float and critical path identification
"""

from .network import TaskNetwork
from .engine import CPMEngine, FloatResult, LateDates, compute_float, compare_with_imported

__all__ = [
    'TaskNetwork',
    'CPMEngine',
    'FloatResult',
    'LateDates',
    'compute_float',
    'compare_with_imported',
]
