"""Review Session - accept / edit / cancel loop for a suggested message.

The loop is an explicit state machine so it can be driven by scripted
input in tests:

    PRESENTING -> ACCEPTED | EDITING | CANCELLED
    EDITING    -> PRESENTING
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from aicommit.llm import CommitMessage
from aicommit.output import dim, print_error
from aicommit.cli.utils import EditorError, display_message, edit_message


class ReviewState(Enum):
    PRESENTING = "presenting"
    EDITING = "editing"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (ReviewState.ACCEPTED, ReviewState.CANCELLED)


ACCEPT_CHOICES = {'', 'y', 'yes'}
EDIT_CHOICES = {'e', 'edit'}
CANCEL_CHOICES = {'c', 'cancel', 'n', 'no', 'q', 'quit'}


@dataclass
class ReviewResult:
    state: ReviewState
    message: CommitMessage

    @property
    def accepted(self) -> bool:
        return self.state is ReviewState.ACCEPTED


class ReviewSession:
    """Drives one message through the review state machine."""

    PROMPT = "Use this message? [Y]es / (e)dit / (c)ancel: "

    def __init__(self,
                 ask: Callable[[str], str] = input,
                 edit: Callable[[CommitMessage], CommitMessage] = edit_message,
                 show: Callable[[CommitMessage], None] = display_message):
        self.ask = ask
        self.edit = edit
        self.show = show

    def run(self, message: CommitMessage) -> ReviewResult:
        state = ReviewState.PRESENTING
        while not state.is_terminal:
            state, message = self.step(state, message)
        return ReviewResult(state=state, message=message)

    def step(self, state: ReviewState, message: CommitMessage) -> tuple[ReviewState, CommitMessage]:
        """Advance one transition."""
        if state is ReviewState.PRESENTING:
            self.show(message)
            return self._read_choice(), message

        if state is ReviewState.EDITING:
            try:
                message = self.edit(message)
            except EditorError as e:
                print_error(str(e))
            return ReviewState.PRESENTING, message

        return state, message

    def _read_choice(self) -> ReviewState:
        while True:
            try:
                choice = self.ask(self.PROMPT).strip().lower()
            except (KeyboardInterrupt, EOFError):
                print()
                return ReviewState.CANCELLED

            if choice in ACCEPT_CHOICES:
                return ReviewState.ACCEPTED
            if choice in EDIT_CHOICES:
                return ReviewState.EDITING
            if choice in CANCEL_CHOICES:
                return ReviewState.CANCELLED
            print(dim("Enter y, e or c"))
