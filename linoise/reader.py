"""Line readers used to collect answers and edited lines.

A reader takes a rendered PromptLine and returns one completed line.
Ctrl-C and Ctrl-D surface as KeyboardInterrupt and EOFError; callers let
them propagate to end the current question.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.history import DummyHistory, History

from .history import HistoryStore


@dataclass(frozen=True, slots=True)
class PromptLine:
    """A rendered prompt.

    Attributes:
        text: The prompt as written to the terminal, escapes included.
        ansi_len: Number of characters in ``text`` that are styling
            escapes rather than visible glyphs.
    """

    text: str
    ansi_len: int = 0

    @property
    def visible_len(self) -> int:
        return len(self.text) - self.ansi_len


class LineReader(Protocol):
    """Anything that can read one line for a prompt."""

    def read(self, prompt: PromptLine) -> str: ...

    def restore(self) -> None: ...


class RingHistory(History):
    """prompt_toolkit history backed by a HistoryStore.

    Recall walks the store's entries; every accepted line is added to the
    store, so it is persisted on the next ``HistoryStore.save()``.
    """

    def __init__(self, store: HistoryStore) -> None:
        super().__init__()
        self.store = store

    def load_history_strings(self) -> Iterable[str]:
        # prompt_toolkit expects the most recent entry first.
        return reversed(self.store.entries())

    def store_string(self, string: str) -> None:
        self.store.add(string)


class PromptToolkitReader:
    """LineReader on top of a prompt_toolkit PromptSession.

    Prompts are passed as ANSI formatted text, so the bold escapes around
    defaults render as styling and do not shift the cursor.

    Args:
        history: Optional HistoryStore offered for recall with the arrow
            keys. Questions are asked without history.
        session: PromptSession to use; one is created on first read when
            omitted.
    """

    def __init__(
        self,
        history: HistoryStore | None = None,
        *,
        session: PromptSession | None = None,
    ) -> None:
        self.history = history
        self._session = session

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            if self.history is not None:
                self._session = PromptSession(history=RingHistory(self.history))
            else:
                self._session = PromptSession(history=DummyHistory())
        return self._session

    def read(self, prompt: PromptLine) -> str:
        return self.session.prompt(ANSI(prompt.text))

    def restore(self) -> None:
        # prompt_toolkit leaves raw mode after every prompt; nothing to undo.
        pass
