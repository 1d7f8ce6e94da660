"""
Primavera P6 schedule import.

Provides:
- XER table extraction and serialization
- Typed schedule entities built from the extracted tables
- Backward-pass CPM float and critical path identification
- Float analysis and schedule quality insights
"""

from .xer_parser import XERParser, extract_tables, dump_tables, write_tables
from .models import Project, Task, WBSNode, Relationship, Calendar, ScheduleData
from .builder import build_schedule
from .cpm import CPMEngine, FloatResult, LateDates, TaskNetwork, compute_float
from .importer import parse_xer_file, parse_xer_buffer, parse_xer_stream

__all__ = [
    # Parsing
    'XERParser',
    'extract_tables',
    'dump_tables',
    'write_tables',
    # Models
    'Project',
    'Task',
    'WBSNode',
    'Relationship',
    'Calendar',
    'ScheduleData',
    'build_schedule',
    # Core
    'TaskNetwork',
    'CPMEngine',
    'FloatResult',
    'LateDates',
    'compute_float',
    # Import
    'parse_xer_file',
    'parse_xer_buffer',
    'parse_xer_stream',
]
