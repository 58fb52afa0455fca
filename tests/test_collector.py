"""Tests for the file collector."""

import os
import pytest

from codeguard.collector import CollectOptions, collect_files


def _paths(result):
    return [cf.path for cf in result.files]


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class TestCollectErrors:
    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            collect_files(str(tmp_path / "missing"))

    def test_not_a_directory(self, tmp_path):
        f = tmp_path / "file.py"
        f.write_text("x = 1\n")
        with pytest.raises(NotADirectoryError):
            collect_files(str(f))


# ---------------------------------------------------------------------------
# Selection rules
# ---------------------------------------------------------------------------

class TestCollectSelection:
    def test_collects_source_files(self, source_tree):
        result = collect_files(str(source_tree))
        assert _paths(result) == ["Dockerfile", "src/app.py", "src/db.js"]

    def test_content_is_read(self, source_tree):
        result = collect_files(str(source_tree))
        by_path = {cf.path: cf.content for cf in result.files}
        assert by_path["src/app.py"] == "import os\n"

    def test_prunes_excluded_dirs(self, source_tree):
        paths = _paths(collect_files(str(source_tree)))
        assert not any(p.startswith(".git/") for p in paths)
        assert not any("node_modules" in p for p in paths)

    def test_pruned_dirs_are_not_walked(self, source_tree, monkeypatch):
        visited = []
        real_walk = os.walk

        def spy_walk(top, *args, **kwargs):
            for dirpath, dirnames, filenames in real_walk(top, *args, **kwargs):
                visited.append(os.path.basename(dirpath))
                yield dirpath, dirnames, filenames

        monkeypatch.setattr("codeguard.collector.file_collector.os.walk", spy_walk)
        collect_files(str(source_tree))
        assert ".git" not in visited
        assert "node_modules" not in visited
        assert "lib" not in visited

    def test_extra_exclude_dirs(self, source_tree):
        options = CollectOptions(exclude_dirs=frozenset({"src"}))
        paths = _paths(collect_files(str(source_tree), options))
        assert "src/app.py" not in paths
        # only the configured set applies
        assert ".git/config.py" in paths

    def test_empty_extensions_means_every_file(self, source_tree):
        options = CollectOptions(extensions=frozenset())
        paths = _paths(collect_files(str(source_tree), options))
        assert "README.md" in paths

    def test_custom_extensions(self, source_tree):
        options = CollectOptions(extensions=frozenset({".js"}), filenames=frozenset())
        assert _paths(collect_files(str(source_tree), options)) == ["src/db.js"]

    def test_extension_match_is_case_insensitive(self, tmp_path):
        (tmp_path / "Main.PY").write_text("pass\n")
        assert _paths(collect_files(str(tmp_path))) == ["Main.PY"]

    def test_dotenv_files_not_collected(self, tmp_path):
        (tmp_path / ".env").write_text("API_KEY=secret\n")
        (tmp_path / "prod.env").write_text("API_KEY=secret\n")
        (tmp_path / "app.py").write_text("pass\n")
        assert _paths(collect_files(str(tmp_path))) == ["app.py"]

    def test_exclude_patterns(self, source_tree):
        options = CollectOptions(exclude=["src/*.js"])
        paths = _paths(collect_files(str(source_tree), options))
        assert "src/db.js" not in paths
        assert "src/app.py" in paths

    def test_symlinks_not_followed(self, source_tree):
        link = source_tree / "linked.py"
        try:
            os.symlink(source_tree / "src" / "app.py", link)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        assert "linked.py" not in _paths(collect_files(str(source_tree)))

    def test_undecodable_bytes_are_replaced(self, tmp_path):
        (tmp_path / "latin.py").write_bytes(b"name = '\xe9'\n")
        content = collect_files(str(tmp_path)).files[0].content
        assert content.startswith("name = '")
        assert "�" in content

    def test_empty_directory(self, tmp_path):
        result = collect_files(str(tmp_path))
        assert result.files == []
        assert result.skipped_files == 0


# ---------------------------------------------------------------------------
# Size ceiling
# ---------------------------------------------------------------------------

class TestCollectSizeLimit:
    def test_large_files_skipped_and_counted(self, tmp_path):
        (tmp_path / "small.py").write_text("x" * 10)
        (tmp_path / "big.py").write_text("x" * 101)
        (tmp_path / "huge.js").write_text("x" * 500)
        result = collect_files(str(tmp_path), CollectOptions(max_file_size=100))
        assert _paths(result) == ["small.py"]
        assert result.skipped_files == 2

    def test_file_at_limit_is_kept(self, tmp_path):
        (tmp_path / "exact.py").write_text("x" * 100)
        result = collect_files(str(tmp_path), CollectOptions(max_file_size=100))
        assert _paths(result) == ["exact.py"]
        assert result.skipped_files == 0

    def test_ineligible_large_files_not_counted(self, tmp_path):
        (tmp_path / "video.mp4").write_bytes(b"\0" * 500)
        result = collect_files(str(tmp_path), CollectOptions(max_file_size=100))
        assert result.skipped_files == 0


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

class TestCollectOrdering:
    def test_sorted_by_relative_path(self, tmp_path):
        for rel in ["b.py", "a/z.py", "a.py", "a/b/c.py", "C.py"]:
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("pass\n")
        paths = _paths(collect_files(str(tmp_path)))
        assert paths == sorted(paths)
        assert paths == ["C.py", "a.py", "a/b/c.py", "a/z.py", "b.py"]

    def test_deterministic(self, source_tree):
        assert _paths(collect_files(str(source_tree))) == _paths(collect_files(str(source_tree)))
