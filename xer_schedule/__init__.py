"""
XER schedule import.

Parses Primavera P6 XER exports into typed schedule entities and computes
total float / critical path membership for every activity.
"""

from .primavera.importer import parse_xer_file, parse_xer_buffer
from .primavera.models import ScheduleData

__all__ = [
    'parse_xer_file',
    'parse_xer_buffer',
    'ScheduleData',
]

__version__ = '0.1.0'
