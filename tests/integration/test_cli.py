"""
Integration tests for the command line interface.
"""

import json

import pandas as pd

from xer_schedule.cli import build_parser, main


class TestArguments:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(['schedule.xer'])
        assert args.xer_file.name == 'schedule.xer'
        assert args.json is False
        assert args.output is None
        assert args.near_critical_hours == 40.0


class TestMain:
    """Test command execution against a sample export."""

    def test_report(self, sample_xer_file, capsys):
        assert main([str(sample_xer_file)]) == 0
        out = capsys.readouterr().out
        assert 'CRITICAL PATH REPORT' in out
        assert 'Demo' in out or 'DEMO' in out
        assert 'A1000' in out
        assert '2 critical tasks' in out

    def test_json_output(self, sample_xer_file, capsys):
        assert main([str(sample_xer_file), '--json']) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload['tasks'][1]['totalFloat'] == 0.0

    def test_output_file(self, sample_xer_file, tmp_path):
        output = tmp_path / 'out' / 'schedule.json'
        assert main([str(sample_xer_file), '--output', str(output)]) == 0
        payload = json.loads(output.read_text(encoding='utf-8'))
        assert payload['project']['projectId'] == '100'

    def test_csv_export(self, sample_xer_file, tmp_path, capsys):
        csv_dir = tmp_path / 'csv'
        assert main([str(sample_xer_file), '--csv-dir', str(csv_dir)]) == 0
        df = pd.read_csv(csv_dir / 'taskpred.csv', dtype=str)
        assert list(df['pred_task_id']) == ['1001']

    def test_insights_and_compare(self, sample_xer_file, capsys):
        assert main([str(sample_xer_file), '--insights', '--compare']) == 0
        out = capsys.readouterr().out
        assert 'Quality Score: 93/100' in out
        assert 'Calculated vs Imported Float' in out
        assert 'Tasks compared: 2' in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / 'missing.xer')]) == 1
