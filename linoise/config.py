"""Configuration values and terminal styling constants for questions.

Everything the prompter can be tuned with lives in a single frozen
QuestionConfig, built once per session and handed to Question.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


# --- ANSI graphic modes ---

SET_OFF = "\x1b[0m"  # All attributes off
SET_BOLD = "\x1b[1m"  # Bold on

# Bytes the two escapes add to a prompt; none of them are visible glyphs.
HIGHLIGHT_LEN = len(SET_BOLD) + len(SET_OFF)

# --- Defaults ---

QUESTION_PREFIX = " + "
QUESTION_ERR_PREFIX = "  "
QUESTION_TRUE_STRING = "y"
QUESTION_FALSE_STRING = "n"

QUESTION_FLOAT_FMT = "g"
QUESTION_FLOAT_PREC: int | None = None  # None: shortest round-trip form


@dataclass(frozen=True, slots=True)
class QuestionConfig:
    """Settings for a Question session.

    Attributes:
        question_prefix: String placed before every question.
        error_prefix: String placed before every validation message.
        true_string: Literal offered for 'true' in boolean questions.
        false_string: Literal offered for 'false' in boolean questions.
        float_format: Presentation type used to display float defaults
            ("g", "f", "e", ...).
        float_precision: Precision for float defaults, or None for the
            shortest representation that round-trips.
        extra_bools: Additional spellings accepted as booleans, e.g.
            {"si": True} for Spanish input.
    """

    question_prefix: str = QUESTION_PREFIX
    error_prefix: str = QUESTION_ERR_PREFIX
    true_string: str = QUESTION_TRUE_STRING
    false_string: str = QUESTION_FALSE_STRING
    float_format: str = QUESTION_FLOAT_FMT
    float_precision: int | None = QUESTION_FLOAT_PREC
    extra_bools: Mapping[str, bool] = field(default_factory=dict)
