"""Post-commit side actions: git push, clasp push, wrangler deploy."""

import os
import shutil
import subprocess

from aicommit.git.repository import GitError, GitRepository


class SideActionError(Exception):
    """Raised when a post-commit action fails. Never fatal to the run."""
    pass


class PushError(SideActionError):
    pass


def is_clasp_project(cwd: str | None = None) -> bool:
    return os.path.exists(os.path.join(cwd or '.', '.clasp.json'))


def _run_tool(tool: str, *args: str, cwd: str | None = None) -> None:
    if shutil.which(tool) is None:
        raise SideActionError(f"{tool} is not installed")
    try:
        subprocess.run(
            [tool, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            encoding='utf-8',
            errors='replace'
        )
    except subprocess.CalledProcessError as e:
        raise SideActionError(f"{tool} {' '.join(args)} failed: {e.stderr.strip() or e}")
    except OSError as e:
        raise SideActionError(f"{tool} {' '.join(args)} failed: {e}")


def git_push(repo: GitRepository) -> None:
    if not repo.has_remote():
        raise PushError("No git remote configured")
    try:
        repo.push()
    except GitError as e:
        raise PushError(str(e))


def clasp_push(repo: GitRepository) -> None:
    _run_tool('clasp', 'push', cwd=repo.cwd)


def wrangler_deploy(repo: GitRepository) -> None:
    _run_tool('wrangler', 'deploy', cwd=repo.cwd)
