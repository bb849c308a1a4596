"""
CLI tests: output contract, exit codes, --cores fallback, and deletion safety flags.
"""
import os
import signal
from unittest import mock
import pytest
from flatdedup.cli import CLIApplication, EXIT_SCAN_ERROR, EXIT_CANCELLED
from flatdedup.commands import DeduplicationCommand
from flatdedup.core.hasher import HasherImpl
from flatdedup.core.models import RunResult, DeduplicationStats
from flatdedup.services.file_service import FileService


def remaining(directory):
    return sorted(p.name for p in directory.iterdir() if p.is_file())


class TestOutputContract:

    def test_prints_single_entries_line(self, example_dir, capsys):
        CLIApplication().run(["--cores", "4", "-i", str(example_dir)])

        out = capsys.readouterr().out
        assert out == "Entries: 2\n"
        assert remaining(example_dir) == ["first_a", "first_b", "first_c"]

    @pytest.mark.parametrize("cores", ["1", "8"])
    def test_core_count_does_not_change_outcome(self, test_files, temp_dir, capsys, cores):
        CLIApplication().run(["--cores", cores, "-i", str(temp_dir)])

        assert capsys.readouterr().out == "Entries: 2\n"
        assert remaining(temp_dir) == [
            "dup1_a.txt", "dup2_a.txt", "same_size_1.txt", "same_size_2.txt", "unique.txt"]

    def test_second_run_reports_zero(self, example_dir, capsys):
        CLIApplication().run(["-i", str(example_dir)])
        CLIApplication().run(["-i", str(example_dir)])

        assert capsys.readouterr().out.splitlines() == ["Entries: 2", "Entries: 0"]

    def test_defaults_to_current_directory(self, example_dir, capsys, monkeypatch):
        monkeypatch.chdir(example_dir)

        CLIApplication().run([])

        assert capsys.readouterr().out == "Entries: 2\n"

    def test_dry_run_shows_plan_and_keeps_files(self, example_dir, capsys):
        CLIApplication().run(["-i", str(example_dir), "--dry-run"])

        out = capsys.readouterr().out
        assert "[KEEP] " + str(example_dir.resolve() / "first_a") in out
        assert "[DEL]  " + str(example_dir.resolve() / "third_c") in out
        assert out.splitlines()[-1] == "Entries: 2"
        assert len(remaining(example_dir)) == 7

    def test_verbose_prints_statistics(self, example_dir, capsys):
        CLIApplication().run(["-i", str(example_dir), "--verbose"])

        out = capsys.readouterr().out
        assert "Deduplication Statistics" in out
        assert "remaining files: 3" in out
        assert out.splitlines()[-1] == "Entries: 2"


class TestExitCodes:

    def test_missing_directory_exits_with_scan_error(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(["-i", str(temp_dir / "missing")])

        assert exc_info.value.code == EXIT_SCAN_ERROR
        captured = capsys.readouterr()
        assert "Entries" not in captured.out
        assert "does not exist" in captured.err

    def test_delete_failures_do_not_change_exit_code(self, example_dir, capsys):
        with mock.patch("flatdedup.services.file_service.os.remove",
                        side_effect=PermissionError(13, "Permission denied")):
            CLIApplication().run(["-i", str(example_dir)])

        captured = capsys.readouterr()
        assert captured.out == "Entries: 2\n"
        assert "4 file(s) could not be processed" in captured.err
        assert len(remaining(example_dir)) == 7

    def test_cancelled_run_exits_130(self, example_dir):
        cancelled = RunResult(cancelled=True)
        with mock.patch.object(DeduplicationCommand, "execute", return_value=(cancelled, DeduplicationStats())):
            with pytest.raises(SystemExit) as exc_info:
                CLIApplication().run(["-i", str(example_dir)])

        assert exc_info.value.code == EXIT_CANCELLED

    def test_sigint_during_hashing_cancels_run(self, example_dir, capsys):
        """Ctrl+C mid-hash: workers stop, nothing is deleted, exit 130, handler restored."""
        app = CLIApplication()
        previous = signal.getsignal(signal.SIGINT)
        installed = []
        real_compute = HasherImpl.compute_fingerprint

        def compute(hasher, entry):
            installed.append(signal.getsignal(signal.SIGINT) == app._on_sigint)
            app._on_sigint(signal.SIGINT, None)
            return real_compute(hasher, entry)

        with mock.patch.object(HasherImpl, "compute_fingerprint", compute):
            with pytest.raises(SystemExit) as exc_info:
                app.run(["--cores", "2", "-i", str(example_dir)])

        assert exc_info.value.code == EXIT_CANCELLED
        assert installed and all(installed)
        assert app.stopped_flag()
        assert len(remaining(example_dir)) == 7
        assert "Entries" not in capsys.readouterr().out
        assert signal.getsignal(signal.SIGINT) == previous


class TestCoresArgument:

    def test_valid_value(self):
        assert CLIApplication().resolve_cores("6") == 6

    def test_missing_value_uses_cpu_count(self):
        with mock.patch("flatdedup.cli.os.cpu_count", return_value=12):
            assert CLIApplication().resolve_cores(None) == 12

    @pytest.mark.parametrize("value", ["0", "-3", "many", ""])
    def test_invalid_value_falls_back_with_warning(self, value, capsys):
        with mock.patch("flatdedup.cli.os.cpu_count", return_value=3):
            assert CLIApplication().resolve_cores(value) == 3
        assert "Invalid --cores value" in capsys.readouterr().err

    def test_unknown_cpu_count_falls_back_to_one(self):
        with mock.patch("flatdedup.cli.os.cpu_count", return_value=None):
            assert CLIApplication().resolve_cores(None) == 1

    def test_invalid_cores_still_runs(self, example_dir, capsys):
        CLIApplication().run(["--cores", "zero", "-i", str(example_dir)])
        assert capsys.readouterr().out == "Entries: 2\n"


class TestDeletionModes:

    def test_trash_flag_moves_instead_of_deleting(self, example_dir, capsys):
        with mock.patch.object(FileService, "move_to_trash") as mock_trash:
            with mock.patch("flatdedup.services.file_service.os.remove") as mock_remove:
                CLIApplication().run(["-i", str(example_dir), "--trash"])

        trashed = sorted(os.path.basename(call.args[0]) for call in mock_trash.call_args_list)
        assert trashed == ["second_a", "second_c", "third_a", "third_c"]
        mock_remove.assert_not_called()

    def test_keep_option(self, example_dir, capsys):
        CLIApplication().run(["-i", str(example_dir), "--keep", "name-desc"])
        assert remaining(example_dir) == ["first_b", "third_a", "third_c"]

    def test_algorithm_option(self, example_dir, capsys):
        CLIApplication().run(["-i", str(example_dir), "--algorithm", "blake2b"])
        assert capsys.readouterr().out == "Entries: 2\n"


class TestMain:

    def test_unexpected_error_exits_1(self, monkeypatch, capsys):
        from flatdedup import cli
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, "run", side_effect=ValueError("boom")):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()

        assert exc_info.value.code == 1
        assert "Unexpected error: boom" in capsys.readouterr().err
