"""Tests for file discovery."""

import re

import pytest

from notes_publisher.core.discovery import find_files_recursively
from notes_publisher.core.models import DiscoveryError, FilesystemError


class TestFindFilesRecursively:
    """Tests for find_files_recursively."""

    @pytest.fixture
    def source(self, tmp_path):
        """Create a source tree with notes, assets and nested directories."""
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "image.png").write_bytes(b"\x89PNG")
        (tmp_path / "notes.md.bak").write_text("backup")
        nested = tmp_path / "sub" / "deeper"
        nested.mkdir(parents=True)
        (tmp_path / "sub" / "c.md").write_text("c")
        (nested / "d.md").write_text("d")
        (tmp_path / "empty").mkdir()
        return tmp_path

    def test_finds_markdown_recursively(self, source):
        files = find_files_recursively(source)
        names = [f.name for f in files]
        assert sorted(names) == ["a.md", "b.md", "c.md", "d.md"]

    def test_lexicographic_depth_first_order(self, source):
        files = find_files_recursively(source)
        relative = [f.relative_to(source).as_posix() for f in files]
        assert relative == ["a.md", "b.md", "sub/c.md", "sub/deeper/d.md"]

    def test_order_is_stable(self, source):
        assert find_files_recursively(source) == find_files_recursively(source)

    def test_no_filter(self, source):
        files = find_files_recursively(source, match=None)
        assert len(files) == 6

    def test_string_pattern(self, source):
        files = find_files_recursively(source, match=r"\.png$")
        assert [f.name for f in files] == ["image.png"]

    def test_compiled_pattern(self, source):
        files = find_files_recursively(source, match=re.compile(r"^[ab]\."))
        assert [f.name for f in files] == ["a.md", "b.md"]

    def test_paths_built_on_directory(self, source):
        files = find_files_recursively(source)
        assert all(f.parent == source or source in f.parents for f in files)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DiscoveryError):
            find_files_recursively(tmp_path / "nonexistent")

    def test_file_instead_of_directory(self, tmp_path):
        path = tmp_path / "file.md"
        path.write_text("x")
        with pytest.raises(DiscoveryError):
            find_files_recursively(path)

    def test_discovery_error_is_filesystem_error(self, tmp_path):
        with pytest.raises(FilesystemError):
            find_files_recursively(tmp_path / "nonexistent")

    def test_empty_directory(self, tmp_path):
        assert find_files_recursively(tmp_path) == []
