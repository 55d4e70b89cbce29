# tests/integration_tests/test_cli.py
# This file is part of Causeway - Causal Log Motif Search
#
# Command-line interface exit codes and output

"""Integration tests for run_visualizer.py.

Each test writes a log to a temporary directory, runs ``main()`` with a
patched argument vector and checks the exit code and printed output.
"""

import sys

import pytest
import run_visualizer


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["run_visualizer.py", *argv])
    return run_visualizer.main()


@pytest.fixture
def log_file(tmp_path, request_response_log):
    path = tmp_path / "run.log"
    path.write_text(request_response_log, encoding="utf-8")
    return path


class TestVisualizerCLI:
    """Exit codes and printed results."""

    def test_summary(self, monkeypatch, capsys, log_file):
        assert _run(monkeypatch, "-l", str(log_file)) == 0

        out = capsys.readouterr().out
        assert "Hosts (length): A, B" in out
        assert "8 nodes, 4 messages over 2 hosts" in out

    def test_query_results(self, monkeypatch, capsys, log_file):
        assert _run(monkeypatch, "-l", str(log_file), "-q", "request", "--show", "1") == 0

        out = capsys.readouterr().out
        assert "Query 'request': 2 instance(s)" in out
        assert "#1 (view 0, offset 0)" in out
        assert "#2" not in out

    def test_serialize_to_file(self, monkeypatch, tmp_path, log_file, request_response_log):
        target = tmp_path / "canonical.log"

        assert _run(monkeypatch, "-l", str(log_file), "--serialize", str(target)) == 0
        assert target.read_text(encoding="utf-8").splitlines() == [
            'A request {"A":1}',
            'B handle {"A":1,"B":1}',
            'B reply {"A":1,"B":2}',
            'A response {"A":2,"B":2}',
            'A request {"A":3,"B":2}',
            'B handle {"A":3,"B":3}',
            'B reply {"A":3,"B":4}',
            'A response {"A":4,"B":4}',
        ]

    def test_parse_error_exit_code(self, monkeypatch, tmp_path):
        path = tmp_path / "bad.log"
        path.write_text("no clocks in this log\n", encoding="utf-8")

        assert _run(monkeypatch, "-l", str(path)) == 1

    def test_clock_error_exit_code(self, monkeypatch, tmp_path):
        path = tmp_path / "backwards.log"
        path.write_text('A x {"A":2}\nA y {"A":1}\n', encoding="utf-8")

        assert _run(monkeypatch, "-l", str(path)) == 2

    def test_invalid_query_exit_code(self, monkeypatch, log_file):
        assert _run(monkeypatch, "-l", str(log_file), "-q", "#nonsense") == 3

    def test_missing_file_exit_code(self, monkeypatch, tmp_path):
        assert _run(monkeypatch, "-l", str(tmp_path / "missing.log")) == 4

    def test_undecodable_file_exit_code(self, monkeypatch, tmp_path):
        path = tmp_path / "binary.log"
        path.write_bytes(b'A x {"A":1}\n\xff\xfe\n')

        assert _run(monkeypatch, "-l", str(path)) == 4

    def test_unwritable_serialize_target_exit_code(self, monkeypatch, tmp_path, log_file):
        target = tmp_path / "missing" / "canonical.log"

        assert _run(monkeypatch, "-l", str(log_file), "--serialize", str(target)) == 4

    def test_value_error_after_reading_is_not_a_file_error(self, monkeypatch, log_file):
        def fail(self, query, labels=None):
            raise ValueError("At most two labels can be searched together, got 3")

        monkeypatch.setattr(run_visualizer.VisualizationSession, "search", fail)

        assert _run(monkeypatch, "-l", str(log_file), "-q", "request") == 6

    def test_no_match_query(self, monkeypatch, capsys, log_file):
        assert _run(monkeypatch, "-l", str(log_file), "-q", "missing") == 0

        assert "Query 'missing': 0 instance(s)" in capsys.readouterr().out

    def test_unknown_sort_rejected_by_argparse(self, monkeypatch, log_file):
        with pytest.raises(SystemExit):
            _run(monkeypatch, "-l", str(log_file), "--sort", "alphabetical")
