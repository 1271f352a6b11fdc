#!/usr/bin/env python3
"""Tests for collaborator execution and outcome translation."""

import subprocess
import sys
from unittest.mock import patch

import pytest

from tracebuild.core.executor import ProcessOutcome, run_collaborator


class TestProcessOutcome:
    def test_success_exit_code(self):
        assert ProcessOutcome(success=True, returncode=0).exit_code == 0

    def test_failure_uses_child_code(self):
        assert ProcessOutcome(success=False, returncode=2).exit_code == 2

    def test_failure_without_code_defaults_to_one(self):
        assert ProcessOutcome(success=False, returncode=None).exit_code == 1

    def test_signal_killed_child_exits_one(self):
        """Negative codes (killed by signal) carry no status to forward."""
        assert ProcessOutcome(success=False, returncode=-9).exit_code == 1

    def test_failure_with_zero_code_still_fails(self):
        """A failed outcome must never map to a successful exit."""
        assert ProcessOutcome(success=False, returncode=0).exit_code == 1

    def test_str(self):
        ok = ProcessOutcome(success=True, returncode=0, command=["node"], duration_seconds=1.5)
        bad = ProcessOutcome(success=False, error="Exit code 2", command=["node"])
        assert str(ok) == "node: ok in 1.5s"
        assert "FAILED (Exit code 2)" in str(bad)


class TestRunCollaborator:
    @patch("subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["node", "x.js"], 0)

        outcome = run_collaborator(["node", "x.js"])

        assert outcome.success is True
        assert outcome.exit_code == 0
        assert outcome.command == ["node", "x.js"]

    @patch("subprocess.run")
    def test_stdio_is_inherited(self, mock_run, tmp_path):
        """Output must stream to the terminal, not be captured."""
        mock_run.return_value = subprocess.CompletedProcess(["node"], 0)

        run_collaborator(["node", "x.js"], cwd=tmp_path)

        args, kwargs = mock_run.call_args
        assert args[0] == ["node", "x.js"]
        assert kwargs.get("cwd") == tmp_path
        for key in ("capture_output", "stdout", "stderr", "stdin", "timeout", "shell"):
            assert key not in kwargs

    @patch("subprocess.run")
    def test_nonzero_exit(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["node"], 2)

        outcome = run_collaborator(["node", "x.js"])

        assert outcome.success is False
        assert outcome.returncode == 2
        assert outcome.exit_code == 2
        assert outcome.error == "Exit code 2"

    @patch("subprocess.run")
    def test_killed_by_signal(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["node"], -9)

        outcome = run_collaborator(["node", "x.js"])

        assert outcome.success is False
        assert outcome.returncode == -9
        assert outcome.exit_code == 1
        assert outcome.error == "Killed by signal 9"

    @patch("subprocess.run")
    def test_flushes_streams_before_child_starts(self, mock_run):
        order = []

        def fake_run(*args, **kwargs):
            order.append("run")
            return subprocess.CompletedProcess(["node"], 0)

        mock_run.side_effect = fake_run

        with patch.object(sys, "stdout") as mock_stdout, \
                patch.object(sys, "stderr") as mock_stderr:
            mock_stdout.flush.side_effect = lambda: order.append("stdout")
            mock_stderr.flush.side_effect = lambda: order.append("stderr")
            run_collaborator(["node", "x.js"])

        assert order == ["stdout", "stderr", "run"]

    @patch("subprocess.run")
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file", "node")

        outcome = run_collaborator(["node", "x.js"])

        assert outcome.success is False
        assert outcome.returncode is None
        assert outcome.exit_code == 1
        assert "node" in outcome.error

    @patch("subprocess.run")
    def test_permission_error(self, mock_run):
        mock_run.side_effect = PermissionError(13, "Permission denied")

        outcome = run_collaborator(["./build.sh"])

        assert outcome.success is False
        assert outcome.exit_code == 1

    @patch("subprocess.run")
    def test_called_exactly_once(self, mock_run):
        """No retry on failure."""
        mock_run.return_value = subprocess.CompletedProcess(["node"], 1)

        run_collaborator(["node", "x.js"])

        assert mock_run.call_count == 1


@pytest.mark.integration
class TestRunCollaboratorReal:
    """Spawns the current interpreter as a stand-in collaborator."""

    def test_real_success(self):
        outcome = run_collaborator([sys.executable, "-c", "pass"])
        assert outcome.success is True

    def test_real_exit_code(self):
        outcome = run_collaborator([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert outcome.success is False
        assert outcome.exit_code == 3

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    def test_real_signal_kill_exits_one(self):
        outcome = run_collaborator(
            [sys.executable, "-c", "import os, signal; os.kill(os.getpid(), signal.SIGKILL)"]
        )
        assert outcome.success is False
        assert outcome.returncode < 0
        assert outcome.exit_code == 1

    def test_real_missing_executable(self, tmp_path):
        outcome = run_collaborator([str(tmp_path / "does-not-exist")])
        assert outcome.success is False
        assert outcome.exit_code == 1
