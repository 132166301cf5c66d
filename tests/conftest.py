"""Shared fixtures: throwaway git repositories and canned provider output."""

import shutil
import subprocess

import pytest

from aicommit.git import GitRepository

requires_git = pytest.mark.skipif(shutil.which('git') is None, reason="git not installed")


def run_git(path, *args):
    subprocess.run(['git', *args], cwd=path, check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path):
    """Empty repository with an identity configured. Returns a GitRepository."""
    run_git(tmp_path, 'init', '-q')
    run_git(tmp_path, 'config', 'user.email', 'dev@example.com')
    run_git(tmp_path, 'config', 'user.name', 'Dev')
    run_git(tmp_path, 'config', 'commit.gpgsign', 'false')
    return GitRepository(cwd=str(tmp_path))


@pytest.fixture
def committed_repo(git_repo, tmp_path):
    """Repository with one commit containing app.py."""
    (tmp_path / 'app.py').write_text("def main():\n    return 1\n")
    run_git(tmp_path, 'add', '.')
    run_git(tmp_path, 'commit', '-q', '-m', 'Initial commit')
    return git_repo


@pytest.fixture
def raw_response():
    return "HEADER: Fix bug\nDESCRIPTION: Resolves off-by-one\n"
