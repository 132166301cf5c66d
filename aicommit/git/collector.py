"""Diff Collector - Turn the working tree into one LLM-ready diff."""

import logging
import os
from dataclasses import dataclass, field

from aicommit.git.repository import GitRepository

logger = logging.getLogger(__name__)

MODIFIED_MARKER = "=== MODIFIED FILES ==="
NEW_FILES_MARKER = "=== NEW FILES ==="
TRUNCATION_MARKER = "\n... (diff truncated)"

DEFAULT_MAX_LENGTH = 30000


def truncate_diff(text: str, max_length: int) -> str:
    """Keep the first `max_length` characters and mark the cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_MARKER


def render_new_file(path: str, content: str) -> str:
    """Render an untracked file as an addition-only patch."""
    lines = [f"\n--- New file: {path} ---"]
    lines.extend(f"+{line}" for line in content.split('\n'))
    return '\n'.join(lines) + '\n\n'


def render_unreadable_file(path: str, reason: str) -> str:
    return f"\n--- New file: {path} ---\n[Could not read file: {reason}]\n"


@dataclass
class DiffBundle:
    """All pending changes, tracked and untracked, as a single text blob."""
    text: str = ""
    tracked_files: list[str] = field(default_factory=list)
    untracked_files: list[str] = field(default_factory=list)
    truncated: bool = False
    original_length: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def total_files(self) -> int:
        return len(self.tracked_files) + len(self.untracked_files)

    def __str__(self) -> str:
        return self.text


class DiffCollector:
    """Collects tracked and untracked changes from a repository."""

    def __init__(self, repo: GitRepository, max_length: int = DEFAULT_MAX_LENGTH):
        self.repo = repo
        self.max_length = max_length

    def collect(self) -> DiffBundle:
        """Main entry point: repository state -> DiffBundle."""
        self.repo.verify()

        tracked_diff = self.repo.tracked_diff()
        tracked_files = self.repo.tracked_files() if tracked_diff else []
        untracked_files = self.repo.untracked_files()

        parts = []
        if tracked_diff:
            parts.append(f"{MODIFIED_MARKER}\n")
            parts.append(tracked_diff)
            parts.append("\n\n")

        if untracked_files:
            parts.append(f"{NEW_FILES_MARKER}\n")
            for path in untracked_files:
                parts.append(self._render_untracked(path))

        text = ''.join(parts)
        if not text:
            return DiffBundle()

        bounded = truncate_diff(text, self.max_length)
        truncated = bounded != text
        if truncated:
            logger.warning(
                "Diff is %d characters, truncated to %d", len(text), self.max_length
            )

        return DiffBundle(
            text=bounded,
            tracked_files=tracked_files,
            untracked_files=untracked_files,
            truncated=truncated,
            original_length=len(text),
        )

    def _render_untracked(self, path: str) -> str:
        full_path = os.path.join(self.repo.cwd, path) if self.repo.cwd else path
        try:
            with open(full_path, 'r', encoding='utf-8', errors='replace') as f:
                content = f.read()
        except OSError as e:
            logger.debug("Could not read %s: %s", path, e)
            return render_unreadable_file(path, str(e))
        return render_new_file(path, content)
