"""Pytest configuration and fixtures."""
from datetime import datetime, timedelta
from typing import List, Optional

import pytest

from xer_schedule.primavera.models import Relationship, Task


def xer_lines(*rows: List[str]) -> str:
    """Join token lists into tab-delimited XER text."""
    return ''.join('\t'.join(row) + '\n' for row in rows)


SAMPLE_XER = xer_lines(
    ['ERMHDR', '19.12', '2024-01-20', 'Project', 'admin', 'Administrator', 'dbxDatabaseNoName', 'Project Management', 'USD'],
    ['%T', 'PROJECT'],
    ['%F', 'proj_id', 'proj_short_name', 'proj_name', 'last_recalc_date', 'plan_start_date', 'plan_end_date'],
    ['%R', '100', 'DEMO', 'Demo Project', '2024-01-02 08:00', '2024-01-01 00:00', '2024-01-10 00:00'],
    ['%T', 'CALENDAR'],
    ['%F', 'clndr_id', 'clndr_name'],
    ['%R', '1', 'Standard 5 Day'],
    ['%T', 'PROJWBS'],
    ['%F', 'wbs_id', 'proj_id', 'parent_wbs_id', 'wbs_short_name', 'wbs_name', 'seq_num'],
    ['%R', '10', '100', '', 'DEMO', 'Demo Project', '0'],
    ['%R', '11', '100', '10', 'CIV', 'Civil Works', '1'],
    ['%T', 'TASK'],
    ['%F', 'task_id', 'proj_id', 'wbs_id', 'clndr_id', 'task_code', 'task_name', 'task_type',
     'status_code', 'phys_complete_pct', 'target_drtn_hr_cnt', 'total_float_hr_cnt',
     'act_start_date', 'act_end_date', 'target_start_date', 'target_end_date', 'cstr_type', 'cstr_date'],
    ['%R', '1001', '100', '11', '1', 'A1000', 'Excavation', 'TT_Task', 'TK_Active', '50', '96', '0',
     '2024-01-01 00:00', '', '2024-01-02 00:00', '2024-01-05 00:00', '', ''],
    ['%R', '1002', '100', '11', '1', 'A1010', 'Foundations', 'TT_Task', 'TK_NotStart', '0', '168', '16',
     '', '', '2024-01-03 00:00', '2024-01-10 00:00', '', ''],
    ['%R', '1003', '100', '11', '1', 'A1020', 'Unscheduled Survey', 'TT_Task', 'TK_NotStart', '', '', '40',
     '', '', '', '', 'CS_MSO', '2024-01-04 00:00'],
    ['%T', 'TASKPRED'],
    ['%F', 'task_pred_id', 'task_id', 'pred_task_id', 'proj_id', 'pred_proj_id', 'pred_type', 'lag_hr_cnt'],
    ['%R', '5001', '1002', '1001', '100', '100', 'PR_FS', '0'],
    ['%E'],
)


@pytest.fixture
def sample_xer_text() -> str:
    """Small two-activity schedule: A (Jan 1-5) -> FS -> B (Jan 3-10), plus an undated activity."""
    return SAMPLE_XER


@pytest.fixture
def sample_xer_bytes(sample_xer_text) -> bytes:
    return sample_xer_text.encode('utf-8')


@pytest.fixture
def sample_xer_file(tmp_path, sample_xer_bytes):
    path = tmp_path / 'demo.xer'
    path.write_bytes(sample_xer_bytes)
    return path


JAN_1 = datetime(2024, 1, 1)


def day(n: float) -> datetime:
    """Date n days after 2024-01-01 (day(0) == Jan 1)."""
    return JAN_1 + timedelta(days=n)


def make_task(task_id: str, start: Optional[datetime], finish: Optional[datetime], **kwargs) -> Task:
    """Build a Task with sensible defaults for engine tests."""
    return Task(
        task_id=task_id,
        task_code=kwargs.pop('task_code', task_id),
        task_name=kwargs.pop('task_name', f'Task {task_id}'),
        start_date=start,
        finish_date=finish,
        **kwargs,
    )


def make_rel(pred: str, succ: str, pred_type: str = 'PR_FS', lag: Optional[float] = None) -> Relationship:
    return Relationship(pred_task_id=pred, task_id=succ, pred_type=pred_type, lag_hours=lag)


def float_by_id(tasks) -> dict:
    return {t.task_id: t.total_float_hours for t in tasks}
