"""Git Operations Package"""

from aicommit.git.repository import (
    GitRepository, GitError, NotARepositoryError, CollectionError, StageError, CommitError,
)
from aicommit.git.collector import DiffCollector, DiffBundle, truncate_diff, TRUNCATION_MARKER
from aicommit.git.actions import SideActionError, PushError, git_push, clasp_push, wrangler_deploy, is_clasp_project

__all__ = [
    "GitRepository",
    "GitError",
    "NotARepositoryError",
    "CollectionError",
    "StageError",
    "CommitError",
    "DiffCollector",
    "DiffBundle",
    "truncate_diff",
    "TRUNCATION_MARKER",
    "SideActionError",
    "PushError",
    "git_push",
    "clasp_push",
    "wrangler_deploy",
    "is_clasp_project",
]
