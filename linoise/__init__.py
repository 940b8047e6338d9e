"""linoise — typed terminal questions and persistent line history.

Two pieces sit on top of a line reader (prompt_toolkit by default):

    Question      asks for strings, numbers, booleans and choices, shows
                  the default in bold and re-prompts on bad input.
    HistoryStore  keeps the last N entered lines in a ring buffer and
                  persists them to a text file between sessions.
"""

from .coercion import ParseError, coerce_bool
from .config import QuestionConfig
from .history import HistoryClosedError, HistorySizeError, HistoryStore
from .question import ChoiceIndexError, ConfigError, DefaultKind, Question
from .reader import LineReader, PromptLine, PromptToolkitReader, RingHistory

__version__ = "0.1.0"

__all__ = [
    "ChoiceIndexError",
    "ConfigError",
    "DefaultKind",
    "HistoryClosedError",
    "HistorySizeError",
    "HistoryStore",
    "LineReader",
    "ParseError",
    "PromptLine",
    "PromptToolkitReader",
    "Question",
    "QuestionConfig",
    "RingHistory",
    "coerce_bool",
]
