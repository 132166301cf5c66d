"""Git Repository - Thin wrapper around the git executable."""

import subprocess


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class NotARepositoryError(GitError):
    """Raised when the working directory is not inside a git repository."""
    pass


class CollectionError(GitError):
    """Raised when the working changes cannot be collected."""
    pass


class StageError(GitError):
    pass


class CommitError(GitError):
    pass


def _split_paths(output: str) -> list[str]:
    # -z output: raw paths, NUL separated, never C-quoted
    return [path for path in output.split('\0') if path]


class GitRepository:
    """Runs git commands against the repository containing `cwd`."""

    def __init__(self, cwd: str | None = None):
        self.cwd = cwd

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def is_repository(self) -> bool:
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            return False
        return True

    def verify(self) -> None:
        """Fail fast if we're not in a git repository."""
        if not self.is_repository():
            raise NotARepositoryError("Not in a git repository")

    def tracked_diff(self) -> str:
        """Diff of all tracked changes, staged and unstaged, against HEAD.

        Falls back to the staged diff when there is no commit yet.
        """
        try:
            return self._run_git('diff', 'HEAD')
        except GitError:
            try:
                return self._run_git('diff', '--cached')
            except GitError as e:
                raise CollectionError(f"Failed to get tracked changes: {e}")

    def tracked_files(self) -> list[str]:
        try:
            output = self._run_git('diff', 'HEAD', '--name-only', '-z')
        except GitError:
            try:
                output = self._run_git('diff', '--cached', '--name-only', '-z')
            except GitError:
                return []
        return _split_paths(output)

    def untracked_files(self) -> list[str]:
        """Untracked files not excluded by .gitignore."""
        try:
            output = self._run_git('ls-files', '-z', '--others', '--exclude-standard')
        except GitError as e:
            raise CollectionError(f"Failed to get untracked files: {e}")
        return _split_paths(output)

    def stage_all(self) -> None:
        try:
            self._run_git('add', '.')
        except GitError as e:
            raise StageError(f"Failed to stage changes: {e}")

    def commit(self, message: str) -> None:
        try:
            self._run_git('commit', '-m', message)
        except GitError as e:
            raise CommitError(f"Failed to commit: {e}")

    def push(self) -> None:
        self._run_git('push')

    def last_commit(self) -> str:
        """Short hash and subject of HEAD, or '' if there is none."""
        try:
            return self._run_git('log', '-1', '--oneline').strip()
        except GitError:
            return ""

    def has_remote(self) -> bool:
        try:
            return bool(self._run_git('remote').strip())
        except GitError:
            return False
