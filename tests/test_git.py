"""
Tests for the git layer: GitRepository, DiffCollector and side actions.

Most tests build a real throwaway repository, so git must be installed.

Run with:
    pytest tests/test_git.py -v
"""

import logging
import subprocess

import pytest

from conftest import requires_git, run_git
from aicommit.git import (
    CollectionError, CommitError, DiffCollector, GitError, GitRepository, NotARepositoryError,
    PushError, SideActionError, TRUNCATION_MARKER, clasp_push, git_push, is_clasp_project,
    wrangler_deploy,
)
from aicommit.git.collector import MODIFIED_MARKER, NEW_FILES_MARKER


class FakeRepo:
    """Just enough of GitRepository for DiffCollector."""

    def __init__(self, tracked="", untracked=None, cwd=None):
        self.cwd = cwd
        self._tracked = tracked
        self._untracked = untracked or []

    def verify(self):
        pass

    def tracked_diff(self):
        return self._tracked

    def tracked_files(self):
        return ["app.py"] if self._tracked else []

    def untracked_files(self):
        return list(self._untracked)


# ---------------------------------------------------------------------------
# DiffCollector
# ---------------------------------------------------------------------------

@requires_git
class TestDiffCollector:
    """DiffCollector.collect() against real repositories."""

    def test_not_a_repository(self, tmp_path):
        repo = GitRepository(cwd=str(tmp_path))
        with pytest.raises(NotARepositoryError):
            DiffCollector(repo).collect()

    def test_clean_repository_is_empty(self, committed_repo):
        bundle = DiffCollector(committed_repo).collect()
        assert bundle.is_empty
        assert bundle.text == ""
        assert bundle.total_files == 0

    def test_untracked_file_rendered_as_additions(self, git_repo, tmp_path):
        (tmp_path / "foo.txt").write_text("hello\n")

        bundle = DiffCollector(git_repo).collect()

        assert not bundle.is_empty
        assert bundle.untracked_files == ["foo.txt"]
        assert NEW_FILES_MARKER in bundle.text
        assert MODIFIED_MARKER not in bundle.text
        assert "--- New file: foo.txt ---" in bundle.text
        assert "+hello" in bundle.text.split("\n")

    def test_modified_tracked_file(self, committed_repo, tmp_path):
        (tmp_path / "app.py").write_text("def main():\n    return 2\n")

        bundle = DiffCollector(committed_repo).collect()

        assert bundle.text.startswith(MODIFIED_MARKER + "\n")
        assert "-    return 1" in bundle.text
        assert "+    return 2" in bundle.text
        assert bundle.tracked_files == ["app.py"]
        assert NEW_FILES_MARKER not in bundle.text

    def test_staged_and_unstaged_both_included(self, committed_repo, tmp_path):
        (tmp_path / "app.py").write_text("def main():\n    return 2\n")
        run_git(tmp_path, "add", "app.py")
        (tmp_path / "app.py").write_text("def main():\n    return 3\n")

        bundle = DiffCollector(committed_repo).collect()
        assert "+    return 3" in bundle.text

    def test_staged_file_without_any_commit(self, git_repo, tmp_path):
        (tmp_path / "first.py").write_text("print('hi')\n")
        run_git(tmp_path, "add", "first.py")

        bundle = DiffCollector(git_repo).collect()

        assert MODIFIED_MARKER in bundle.text
        assert "+print('hi')" in bundle.text
        assert bundle.untracked_files == []

    def test_tracked_section_precedes_new_files(self, committed_repo, tmp_path):
        (tmp_path / "app.py").write_text("changed\n")
        (tmp_path / "new.py").write_text("fresh\n")

        text = DiffCollector(committed_repo).collect().text
        assert text.index(MODIFIED_MARKER) < text.index(NEW_FILES_MARKER)
        assert "+fresh" in text

    def test_ignored_files_excluded(self, git_repo, tmp_path):
        (tmp_path / ".gitignore").write_text("*.log\n")
        (tmp_path / "debug.log").write_text("noise\n")

        bundle = DiffCollector(git_repo).collect()
        assert bundle.untracked_files == [".gitignore"]
        assert "debug.log" not in bundle.text

    def test_non_ascii_untracked_name_is_read(self, git_repo, tmp_path):
        (tmp_path / "café.txt").write_text("hello\n", encoding="utf-8")

        bundle = DiffCollector(git_repo).collect()

        assert bundle.untracked_files == ["café.txt"]
        assert "--- New file: café.txt ---" in bundle.text
        assert "+hello" in bundle.text.split("\n")
        assert "Could not read file" not in bundle.text

    def test_non_ascii_tracked_name_listed_unquoted(self, git_repo, tmp_path):
        (tmp_path / "naïve.py").write_text("x = 1\n", encoding="utf-8")
        run_git(tmp_path, "add", ".")

        bundle = DiffCollector(git_repo).collect()
        assert bundle.tracked_files == ["naïve.py"]

    def test_truncates_and_warns(self, git_repo, tmp_path, caplog):
        (tmp_path / "big.txt").write_text("line\n" * 100)

        with caplog.at_level(logging.WARNING, logger="aicommit"):
            bundle = DiffCollector(git_repo, max_length=50).collect()

        assert bundle.truncated
        assert len(bundle.text) == 50 + len(TRUNCATION_MARKER)
        assert bundle.text.endswith(TRUNCATION_MARKER)
        assert bundle.original_length > 50
        assert "truncated" in caplog.text


class TestDiffCollectorWithoutGit:

    def test_tracked_diff_failure_is_collection_error(self, monkeypatch):
        def failing_git(self, *args):
            raise GitError(f"Git command failed: git {' '.join(args)}")

        monkeypatch.setattr(GitRepository, "_run_git", failing_git)
        with pytest.raises(CollectionError, match="tracked changes"):
            GitRepository().tracked_diff()

    def test_unreadable_untracked_file_gets_placeholder(self, tmp_path):
        repo = FakeRepo(untracked=["ghost.txt", "real.txt"], cwd=str(tmp_path))
        (tmp_path / "real.txt").write_text("ok\n")

        bundle = DiffCollector(repo).collect()

        assert "--- New file: ghost.txt ---\n[Could not read file:" in bundle.text
        assert "+ok" in bundle.text

    def test_output_equals_concatenation_when_under_bound(self):
        repo = FakeRepo(tracked="diff --git a/app.py b/app.py\n+x\n")
        bundle = DiffCollector(repo, max_length=10_000).collect()
        assert bundle.text == f"{MODIFIED_MARKER}\ndiff --git a/app.py b/app.py\n+x\n\n\n"
        assert not bundle.truncated

    def test_output_is_prefix_plus_marker_when_over_bound(self):
        tracked = "diff --git a/app.py b/app.py\n" + "+x\n" * 50
        full = DiffCollector(FakeRepo(tracked=tracked), max_length=10_000).collect().text

        bundle = DiffCollector(FakeRepo(tracked=tracked), max_length=40).collect()
        assert bundle.text == full[:40] + TRUNCATION_MARKER


# ---------------------------------------------------------------------------
# GitRepository
# ---------------------------------------------------------------------------

@requires_git
class TestGitRepository:

    def test_is_repository(self, git_repo, tmp_path_factory):
        assert git_repo.is_repository()
        outside = tmp_path_factory.mktemp("plain")
        assert not GitRepository(cwd=str(outside)).is_repository()

    def test_stage_commit_and_last_commit(self, git_repo, tmp_path):
        (tmp_path / "a.txt").write_text("a\n")
        git_repo.stage_all()
        git_repo.commit("Add a\n\nFirst file")

        assert git_repo.last_commit().endswith("Add a")
        assert git_repo.untracked_files() == []

    def test_last_commit_empty_without_commits(self, git_repo):
        assert git_repo.last_commit() == ""

    def test_commit_with_nothing_staged_fails(self, committed_repo):
        with pytest.raises(CommitError):
            committed_repo.commit("Nothing here")

    def test_has_remote(self, committed_repo):
        assert committed_repo.has_remote() is False


# ---------------------------------------------------------------------------
# Side actions
# ---------------------------------------------------------------------------

class TestSideActions:

    def test_is_clasp_project(self, tmp_path):
        assert not is_clasp_project(str(tmp_path))
        (tmp_path / ".clasp.json").write_text("{}")
        assert is_clasp_project(str(tmp_path))

    def test_missing_tool(self, monkeypatch):
        monkeypatch.setattr("aicommit.git.actions.shutil.which", lambda name: None)
        with pytest.raises(SideActionError, match="clasp is not installed"):
            clasp_push(GitRepository())

    def test_tool_invoked_in_repo_dir(self, monkeypatch, tmp_path):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs["cwd"]))
            return subprocess.CompletedProcess(cmd, 0, "", "")

        monkeypatch.setattr("aicommit.git.actions.shutil.which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr("aicommit.git.actions.subprocess.run", fake_run)

        wrangler_deploy(GitRepository(cwd=str(tmp_path)))
        assert calls == [(["wrangler", "deploy"], str(tmp_path))]

    def test_tool_failure_reports_stderr(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd, output="", stderr="not logged in")

        monkeypatch.setattr("aicommit.git.actions.shutil.which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr("aicommit.git.actions.subprocess.run", fake_run)

        with pytest.raises(SideActionError, match="not logged in"):
            clasp_push(GitRepository())

    @requires_git
    def test_git_push_without_remote(self, committed_repo):
        with pytest.raises(PushError, match="No git remote configured"):
            git_push(committed_repo)
