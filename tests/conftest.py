"""
Shared fixtures for deduplication tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'flatdedup' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def example_dir(temp_dir) -> Path:
    """
    The documented scenario:
    - first_a, second_a, third_a hold "a"
    - first_b holds "b"
    - first_c, second_c, third_c hold "c"
    """
    for name in ("first_a", "second_a", "third_a"):
        (temp_dir / name).write_bytes(b"a")
    (temp_dir / "first_b").write_bytes(b"b")
    for name in ("first_c", "second_c", "third_c"):
        (temp_dir / name).write_bytes(b"c")
    return temp_dir


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for deduplication scenarios:
    - 3 identical files (one group)
    - 2 identical files of another size (second group)
    - 2 same-size files with different content (not duplicates)
    - 1 file with a unique size
    - 1 subdirectory holding a copy of the first group's content (must be ignored)
    """
    files = {}

    content_a = b"A" * 1024
    for name in ("dup1_a.txt", "dup1_b.txt", "dup1_c.txt"):
        files[name] = temp_dir / name
        files[name].write_bytes(content_a)

    content_b = b"B" * 2048
    for name in ("dup2_a.txt", "dup2_b.txt"):
        files[name] = temp_dir / name
        files[name].write_bytes(content_b)

    files["same_size_1.txt"] = temp_dir / "same_size_1.txt"
    files["same_size_1.txt"].write_bytes(b"C" * 1500)
    files["same_size_2.txt"] = temp_dir / "same_size_2.txt"
    files["same_size_2.txt"].write_bytes(b"D" * 1500)

    files["unique.txt"] = temp_dir / "unique.txt"
    files["unique.txt"].write_bytes(b"E" * 2500)

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files
