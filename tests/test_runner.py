"""Tests for the command executor."""

import pytest

from xgit.git.runner import ProcessError, run_command, run_git


class TestRunGit:

    def test_captures_stdout(self, tmp_path):
        result = run_git(["--version"], tmp_path)
        assert result.returncode == 0
        assert result.stdout.startswith("git version")

    def test_failure_raises_process_error(self, tmp_path):
        with pytest.raises(ProcessError) as exc_info:
            run_git(["rev-parse", "--show-toplevel"], tmp_path)
        err = exc_info.value
        assert err.returncode != 0
        assert "not a git repository" in err.stderr.lower()
        assert err.command[:2] == ["git", "rev-parse"]
        assert "git rev-parse --show-toplevel" in str(err)

    def test_check_false_returns_result(self, tmp_path):
        result = run_git(["rev-parse", "--show-toplevel"], tmp_path, check=False)
        assert result.returncode != 0

    def test_runs_in_given_directory(self, tmp_path):
        (tmp_path / "marker.txt").write_text("x")
        result = run_command(["ls"], tmp_path)
        assert "marker.txt" in result.stdout

    def test_verbose_echoes_command(self, tmp_path, capsys):
        run_git(["--version"], tmp_path, verbose=True)
        assert "+ git --version" in capsys.readouterr().err

    def test_quiet_by_default(self, tmp_path, capsys):
        run_git(["--version"], tmp_path)
        assert capsys.readouterr().err == ""
