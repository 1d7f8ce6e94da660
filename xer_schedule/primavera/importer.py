"""
XER schedule import pipeline.

bytes / file -> XERParser -> raw tables -> build_schedule -> CPMEngine
-> ScheduleData with total float populated.

Each call allocates its own tables, network and late-date cache, so imports
can run side by side.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .analysis.critical_path import summarize_float
from .builder import build_schedule
from .cpm.engine import CPMEngine, FloatResult
from .models import ScheduleData
from .xer_parser import XERParser, RawTables

logger = logging.getLogger(__name__)


def schedule_from_tables(tables: RawTables) -> tuple[ScheduleData, FloatResult]:
    """
    Build schedule entities from raw tables and calculate float.

    Returns:
        Tuple of (ScheduleData with float, FloatResult with late dates and cycles)
    """
    schedule = build_schedule(tables)
    result = CPMEngine(schedule.tasks, schedule.relationships).run()
    schedule.tasks = result.tasks

    summary = summarize_float(schedule.tasks)
    logger.info("Float calculation: %s", summary.as_dict())
    if logger.isEnabledFor(logging.DEBUG):
        for task in schedule.tasks[:5]:
            logger.debug("Sample activity %s %.30s float=%s",
                         task.task_code, task.task_name, task.total_float_hours)

    return schedule, result


def parse_xer_parser(parser: XERParser) -> ScheduleData:
    """Run the pipeline over a prepared parser."""
    tables = parser.parse()
    if parser.skipped_lines:
        logger.info("Skipped %d malformed lines", parser.skipped_lines)
    schedule, _ = schedule_from_tables(tables)
    return schedule


def parse_xer_file(file_path: Union[str, Path], encoding: Optional[str] = None) -> ScheduleData:
    """
    Parse an XER file into schedule entities with recalculated float.

    Args:
        file_path: Path to the XER file
        encoding: Text encoding (default: settings.XER_ENCODING)

    Raises:
        FileNotFoundError / OSError when the file cannot be read
    """
    logger.info("Importing schedule from %s", file_path)
    return parse_xer_parser(XERParser(file_path, encoding=encoding))


def parse_xer_buffer(data: Union[bytes, bytearray, str], encoding: Optional[str] = None) -> ScheduleData:
    """
    Parse an in-memory XER export into schedule entities with recalculated float.

    Args:
        data: Uploaded file content
        encoding: Text encoding for byte input
    """
    return parse_xer_parser(XERParser.from_buffer(data, encoding=encoding))


def parse_xer_stream(stream: BinaryIO, encoding: Optional[str] = None) -> ScheduleData:
    """Parse an open XER stream (read once, not closed)."""
    return parse_xer_parser(XERParser.from_stream(stream, encoding=encoding))
