"""
Unit tests for mapping raw XER tables onto schedule entities.
"""

from datetime import datetime

from xer_schedule.primavera.builder import (
    build_calendars,
    build_project,
    build_relationships,
    build_schedule,
    build_task,
    build_wbs,
)
from xer_schedule.primavera.models import FINISH_TO_START, START_TO_START
from xer_schedule.primavera.xer_parser import extract_tables


class TestBuildProject:
    """Test PROJECT mapping."""

    def test_sample_project(self, sample_xer_bytes):
        project = build_project(extract_tables(sample_xer_bytes))
        assert project.project_id == '100'
        assert project.project_name == 'DEMO'
        assert project.data_date == datetime(2024, 1, 2, 8, 0)
        assert project.finish_date == datetime(2024, 1, 10)

    def test_name_falls_back_to_full_name(self):
        project = build_project({'PROJECT': [{'proj_id': '1', 'proj_short_name': '', 'proj_name': 'Full'}]})
        assert project.project_name == 'Full'

    def test_first_row_wins(self):
        project = build_project({'PROJECT': [{'proj_id': '1'}, {'proj_id': '2'}]})
        assert project.project_id == '1'

    def test_missing_table(self):
        assert build_project({}) is None
        assert build_project({'PROJECT': []}) is None


class TestBuildTask:
    """Test TASK mapping."""

    def test_actual_dates_win_over_target(self):
        task = build_task({
            'task_id': '1', 'act_start_date': '2024-01-01 00:00',
            'target_start_date': '2024-01-02 00:00', 'target_end_date': '2024-01-05 00:00',
        })
        assert task.start_date == datetime(2024, 1, 1)
        assert task.finish_date == datetime(2024, 1, 5)

    def test_blank_actual_falls_back_to_target(self):
        task = build_task({'task_id': '1', 'act_start_date': '', 'target_start_date': '2024-01-02'})
        assert task.start_date == datetime(2024, 1, 2)

    def test_numeric_fields(self):
        task = build_task({'task_id': '1', 'target_drtn_hr_cnt': '96',
                           'phys_complete_pct': '50', 'total_float_hr_cnt': '-8'})
        assert task.duration_hours == 96.0
        assert task.percent_complete == 50.0
        assert task.imported_total_float_hours == -8.0

    def test_imported_float_is_not_total_float(self):
        """P6's stored float is kept for comparison only."""
        task = build_task({'task_id': '1', 'total_float_hr_cnt': '16'})
        assert task.total_float_hours is None

    def test_missing_fields_default(self):
        task = build_task({})
        assert task.task_id == ''
        assert task.task_name == ''
        assert task.start_date is None
        assert task.duration_hours is None
        assert task.constraint_type is None

    def test_unparseable_values_become_none(self):
        task = build_task({'task_id': '1', 'target_start_date': 'soon', 'target_drtn_hr_cnt': 'long'})
        assert task.start_date is None
        assert task.duration_hours is None

    def test_constraint_fields(self, sample_xer_bytes):
        tasks = build_schedule(extract_tables(sample_xer_bytes)).tasks
        assert tasks[2].constraint_type == 'CS_MSO'
        assert tasks[2].constraint_date == '2024-01-04 00:00'


class TestBuildRelationships:
    """Test TASKPRED mapping."""

    def test_fields(self):
        rels = build_relationships({'TASKPRED': [
            {'task_id': '2', 'pred_task_id': '1', 'pred_type': 'PR_SS', 'lag_hr_cnt': '-8'},
        ]})
        assert rels[0].pred_task_id == '1'
        assert rels[0].succ_task_id == '2'
        assert rels[0].pred_type == START_TO_START
        assert rels[0].lag_hours == -8.0

    def test_blank_or_unknown_type_is_finish_to_start(self):
        rels = build_relationships({'TASKPRED': [
            {'task_id': '2', 'pred_task_id': '1', 'pred_type': ''},
            {'task_id': '3', 'pred_task_id': '2', 'pred_type': 'PR_XX'},
            {'task_id': '4', 'pred_task_id': '3'},
        ]})
        assert [r.pred_type for r in rels] == [FINISH_TO_START] * 3

    def test_type_predicates(self):
        rels = build_relationships({'TASKPRED': [
            {'task_id': '2', 'pred_task_id': '1', 'pred_type': pred_type}
            for pred_type in ('PR_FS', 'PR_SS', 'PR_FF', 'PR_SF')
        ]})
        assert [r.is_finish_to_start() for r in rels] == [True, False, False, False]
        assert [r.is_start_to_start() for r in rels] == [False, True, False, False]
        assert [r.is_finish_to_finish() for r in rels] == [False, False, True, False]
        assert [r.is_start_to_finish() for r in rels] == [False, False, False, True]

    def test_dangling_references_kept(self):
        rels = build_relationships({'TASKPRED': [{'task_id': '999', 'pred_task_id': '1'}]})
        assert len(rels) == 1


class TestBuildSchedule:
    """Test the full table map."""

    def test_sample(self, sample_xer_bytes):
        schedule = build_schedule(extract_tables(sample_xer_bytes))
        assert [t.task_id for t in schedule.tasks] == ['1001', '1002', '1003']
        assert len(schedule.relationships) == 1
        assert schedule.calendars[0].calendar_name == 'Standard 5 Day'
        assert schedule.wbs[1].parent_wbs_id == '10'
        assert schedule.wbs[1].seq_num == 1
        assert schedule.wbs[0].parent_wbs_id is None

    def test_empty_tables(self):
        schedule = build_schedule({})
        assert schedule.project is None
        assert schedule.tasks == []
        assert schedule.relationships == []

    def test_duplicate_task_ids_kept(self):
        schedule = build_schedule({'TASK': [{'task_id': '1'}, {'task_id': '1'}]})
        assert len(schedule.tasks) == 2

    def test_wbs_and_calendars(self):
        assert build_wbs({'PROJWBS': [{'wbs_id': '5', 'seq_num': 'x'}]})[0].seq_num is None
        assert build_calendars({'CALENDAR': [{'clndr_id': '7'}]})[0].calendar_name == ''
