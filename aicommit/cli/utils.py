"""CLI Utility Functions"""

import os
import shlex
import subprocess
import sys
import tempfile

from aicommit.llm import CommitMessage, parse_edited_message
from aicommit.output import info, print_box

EDIT_TEMPLATE_FOOTER = """
# Please edit the commit message above.
# Lines starting with '#' will be ignored.
# The first line should be the header (max 72 chars).
# The description can be multiple lines.
"""


class EditorError(Exception):
    """Raised when the external editor cannot be run or read back."""
    pass


def get_editor() -> list[str]:
    default = 'notepad' if sys.platform == 'win32' else 'vi'
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR') or ''
    return shlex.split(editor, posix=sys.platform != 'win32') or [default]


def display_message(message: CommitMessage) -> None:
    """Show the suggested message in a box."""
    print()
    print(info("--- SUGGESTED COMMIT MESSAGE ---"))
    lines = [f"HEADER: {message.header}"]
    if message.description:
        lines.append(f"DESCRIPTION: {message.description}")
    print_box('\n'.join(lines))


def edit_message(message: CommitMessage) -> CommitMessage:
    """Open the message in the user's editor and parse it back.

    Fields left empty keep their previous value.
    """
    content = f"HEADER: {message.header}\n\nDESCRIPTION: {message.description}\n{EDIT_TEMPLATE_FOOTER}"

    tmp = tempfile.NamedTemporaryFile(mode='w', prefix='commit-', suffix='.txt', delete=False, encoding='utf-8')
    try:
        tmp.write(content)
        tmp.close()
        subprocess.run([*get_editor(), tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read()
    except (subprocess.CalledProcessError, OSError) as e:
        raise EditorError(f"Failed to open editor: {e}")
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)

    return parse_edited_message(edited, fallback=message)


def confirm(question: str, default: bool = False, ask=input) -> bool:
    """Yes/no question. EOF and Ctrl-C count as 'no'."""
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        answer = ask(f"{question} {suffix}: ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    if not answer:
        return default
    return answer in ('y', 'yes')
