"""
Unit tests for FlatScannerImpl.
Verifies the non-recursive entry policy and fatal scan errors.
"""
import os
import pytest
from pathlib import Path
from flatdedup.core.scanner import FlatScannerImpl
from flatdedup.core.errors import ScanError


class TestFlatScannerImpl:
    """Test directory listing and filtering."""

    def test_lists_regular_files_only_at_top_level(self, test_files, temp_dir):
        """Subdirectories are skipped and never entered."""
        files = FlatScannerImpl(str(temp_dir)).scan()

        names = {f.name for f in files}
        assert "dup_in_subdir.txt" not in names
        assert "subdir" not in names
        assert len(files) == 8

    def test_entries_are_sorted_by_name_with_absolute_paths(self, test_files, temp_dir):
        files = FlatScannerImpl(str(temp_dir)).scan()

        assert [f.name for f in files] == sorted(f.name for f in files)
        assert all(os.path.isabs(f.path) for f in files)

    def test_entries_carry_size_and_file_id(self, temp_dir):
        target = temp_dir / "x.bin"
        target.write_bytes(b"12345")
        st = target.stat()

        [entry] = FlatScannerImpl(str(temp_dir)).scan()

        assert entry.size == 5
        assert entry.file_id == (st.st_dev, st.st_ino)
        assert entry.fingerprint is None

    def test_empty_files_included_by_default(self, temp_dir):
        (temp_dir / "empty").write_bytes(b"")

        files = FlatScannerImpl(str(temp_dir)).scan()

        assert [f.name for f in files] == ["empty"]

    def test_skip_empty_excludes_zero_byte_files(self, temp_dir):
        (temp_dir / "empty").write_bytes(b"")
        (temp_dir / "full").write_bytes(b"x")

        files = FlatScannerImpl(str(temp_dir), skip_empty=True).scan()

        assert [f.name for f in files] == ["full"]

    def test_scanner_skips_symlinks(self, temp_dir):
        """Symbolic links are never followed and never become candidates."""
        real_file = temp_dir / "real.txt"
        real_file.write_bytes(b"content")
        try:
            (temp_dir / "link.txt").symlink_to(real_file)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported on this platform")

        files = FlatScannerImpl(str(temp_dir)).scan()

        assert [f.name for f in files] == ["real.txt"]

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs not supported")
    def test_scanner_skips_fifos(self, temp_dir):
        os.mkfifo(temp_dir / "pipe")
        (temp_dir / "file").write_bytes(b"x")

        files = FlatScannerImpl(str(temp_dir)).scan()

        assert [f.name for f in files] == ["file"]

    def test_empty_directory_returns_empty_list(self, temp_dir):
        assert FlatScannerImpl(str(temp_dir)).scan() == []

    def test_missing_directory_raises_scan_error(self, temp_dir):
        with pytest.raises(ScanError) as exc_info:
            FlatScannerImpl(str(temp_dir / "missing")).scan()
        assert "does not exist" in str(exc_info.value)

    def test_file_instead_of_directory_raises_scan_error(self, temp_dir):
        target = temp_dir / "file.txt"
        target.write_bytes(b"x")

        with pytest.raises(ScanError):
            FlatScannerImpl(str(target)).scan()

    def test_cancelled_before_start_returns_nothing(self, test_files, temp_dir):
        files = FlatScannerImpl(str(temp_dir)).scan(stopped_flag=lambda: True)
        assert files == []

    def test_reports_progress_once(self, test_files, temp_dir):
        calls = []
        FlatScannerImpl(str(temp_dir)).scan(progress_callback=lambda *a: calls.append(a))

        # 8 files + 1 subdirectory listed
        assert calls == [("scanning", 9, 9)]
