"""Typed questions with default answers and inline re-prompting.

A Question renders a prompt such as ``" + Port [8080]: "``, reads a line,
and converts it to the requested type. Bad input prints a short message
and asks again; an empty line picks the default when there is one.
Interrupts raised by the reader are never caught here.
"""

import enum
import math
import re
import sys
from collections.abc import Sequence
from typing import TextIO

from .coercion import ParseError, coerce_bool
from .config import HIGHLIGHT_LEN, SET_BOLD, SET_OFF, QuestionConfig
from .reader import LineReader, PromptLine, PromptToolkitReader

_INT_RE = re.compile(r"[+-]?[0-9]+")


class ConfigError(Exception):
    """Raised when a Question is configured with unusable boolean literals."""


class ChoiceIndexError(IndexError):
    """Raised when the default of a choice is not one of its options."""


class DefaultKind(enum.Enum):
    """How the default answer is shown in a prompt."""

    NONE = "none"          # No default
    SINGLE = "single"      # One value, shown in bold
    MULTIPLE = "multiple"  # Options string with the default already highlighted


# --- Parsing helpers ---


def parse_int(text: str) -> int:
    """Parse a base-10 integer with an optional sign and nothing else."""
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def parse_float(text: str) -> float:
    """Parse a float, refusing the padding and underscores float() allows.

    Finite literals too large for a double are out of range, so "1e400" is
    rejected while "inf" is accepted.
    """
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid float: {text!r}")
    value = float(text)
    if math.isinf(value) and text.lstrip("+-").lower() not in ("inf", "infinity"):
        raise ValueError(f"float out of range: {text!r}")
    return value


def is_numeric(text: str) -> bool:
    """Return True if ``text`` reads as an integer or a float."""
    try:
        parse_int(text)
        return True
    except ValueError:
        pass
    try:
        parse_float(text)
        return True
    except ValueError:
        return False


def _shortest_digits(value: float) -> tuple[str, int]:
    """Return the shortest round-trip digits of ``abs(value)`` and the
    position of the decimal point, so value == 0.<digits> * 10**point.
    """
    mantissa, _, exp = repr(abs(value)).partition("e")
    whole, _, frac = mantissa.partition(".")
    combined = whole + frac
    digits = combined.lstrip("0").rstrip("0")
    if not digits:
        return "0", 1
    point = len(whole) + int(exp or 0) - (len(combined) - len(combined.lstrip("0")))
    return digits, point


def _exponent_form(digits: str, point: int) -> str:
    exp = point - 1
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    sign = "-" if exp < 0 else "+"
    return f"{mantissa}e{sign}{abs(exp):02d}"


def _fixed_form(digits: str, point: int) -> str:
    if point <= 0:
        return "0." + "0" * -point + digits
    if point >= len(digits):
        return digits + "0" * (point - len(digits))
    return digits[:point] + "." + digits[point:]


def format_float(value: float, fmt: str = "g", precision: int | None = None) -> str:
    """Format a float for display.

    With ``precision`` None every format uses the fewest digits that read
    back as the same float: "f" gives 1.5, "e" gives 1.5e+00, and "g"
    switches to exponent form below 1e-4 or from 1e6 on ("7", "1e+06").
    """
    if precision is not None:
        return format(value, f".{precision}{fmt}")
    if fmt.lower() not in ("e", "f", "g"):
        raise ValueError(f"unknown float format: {fmt!r}")

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    digits, point = _shortest_digits(value)
    kind = fmt.lower()
    if kind == "g":
        exp = point - 1
        kind = "e" if exp < -4 or exp >= 6 else "f"

    text = _exponent_form(digits, point) if kind == "e" else _fixed_form(digits, point)
    if math.copysign(1.0, value) < 0:
        text = "-" + text
    return text.upper() if fmt.isupper() else text


class Question:
    """Asks questions and returns typed answers.

    Usage::

        with Question() as q:
            name = q.read_string("Name")
            port = q.read_int_default("Port", 8080)
            debug = q.read_bool("Debug mode?", False)

    Args:
        config: Session settings; defaults to QuestionConfig().
        reader: LineReader used for every answer; defaults to a
            prompt_toolkit reader without history.
        output: Stream receiving validation messages; defaults to stdout.

    Raises:
        ConfigError: If ``config.true_string`` or ``config.false_string``
            is not a boolean literal.
    """

    def __init__(
        self,
        config: QuestionConfig | None = None,
        *,
        reader: LineReader | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.config = config if config is not None else QuestionConfig()

        for literal, meaning in (
            (self.config.true_string, "true"),
            (self.config.false_string, "false"),
        ):
            try:
                coerce_bool(literal, self.config.extra_bools)
            except ParseError as exc:
                raise ConfigError(
                    f"the string {literal!r} does not represent a boolean {meaning!r}"
                ) from exc

        self.true_string = self.config.true_string.lower()
        self.false_string = self.config.false_string.lower()
        self.reader = reader if reader is not None else PromptToolkitReader()
        self.output = output if output is not None else sys.stdout

    def __enter__(self) -> "Question":
        return self

    def __exit__(self, *exc_info) -> None:
        self.restore_term()

    def restore_term(self) -> None:
        """Restore the terminal settings changed by the reader."""
        self.reader.restore()

    # --- Prompt ---

    def build_prompt(
        self,
        prompt: str,
        default_display: str = "",
        kind: DefaultKind = DefaultKind.NONE,
    ) -> PromptLine:
        """Render a question with its prefix, default and separator."""
        text = self.config.question_prefix + prompt

        if kind is DefaultKind.SINGLE:
            text = f"{text} [{SET_BOLD}{default_display}{SET_OFF}]"
        elif kind is DefaultKind.MULTIPLE:
            text = f"{text} [{default_display}]"

        if text.endswith("?"):
            text += " "
        else:
            text += ": "

        ansi_len = HIGHLIGHT_LEN if kind is not DefaultKind.NONE else 0
        return PromptLine(text, ansi_len)

    def _error(self, message: str) -> None:
        # '\r\n' so the message starts at column 0 under raw mode.
        self.output.write(f"{self.config.error_prefix}{message}\r\n")
        self.output.flush()

    # --- Strings ---

    def read(self, prompt: str) -> str:
        """Ask until a non-empty line is entered."""
        line = self.build_prompt(prompt)

        while True:
            answer = self.reader.read(line)
            if answer:
                return answer

    def _read_string(self, prompt: str, default: str, has_default: bool) -> str:
        kind = DefaultKind.SINGLE if has_default else DefaultKind.NONE
        line = self.build_prompt(prompt, default, kind)

        while True:
            answer = self.reader.read(line)
            if answer:
                if is_numeric(answer):
                    self._error(f"{answer}: the value has to be a string")
                    continue
                return answer

            if has_default:
                return default

    def read_string(self, prompt: str) -> str:
        """Ask for a non-numeric, non-empty string."""
        return self._read_string(prompt, "", has_default=False)

    def read_string_default(self, prompt: str, default: str) -> str:
        """Ask for a non-numeric string; an empty line returns ``default``."""
        return self._read_string(prompt, default, has_default=True)

    # --- Numbers ---

    def _read_int(self, prompt: str, default: int, has_default: bool) -> int:
        kind = DefaultKind.SINGLE if has_default else DefaultKind.NONE
        line = self.build_prompt(prompt, str(default), kind)

        while True:
            answer = self.reader.read(line)
            if not answer and has_default:
                return default

            try:
                return parse_int(answer)
            except ValueError:
                self._error(f'"{answer}": the value has to be an integer')

    def read_int(self, prompt: str) -> int:
        """Ask for an integer."""
        return self._read_int(prompt, 0, has_default=False)

    def read_int_default(self, prompt: str, default: int) -> int:
        """Ask for an integer; an empty line returns ``default``."""
        return self._read_int(prompt, default, has_default=True)

    def _read_float(self, prompt: str, default: float, has_default: bool) -> float:
        kind = DefaultKind.SINGLE if has_default else DefaultKind.NONE
        display = format_float(
            default, self.config.float_format, self.config.float_precision
        )
        line = self.build_prompt(prompt, display, kind)

        while True:
            answer = self.reader.read(line)
            if not answer and has_default:
                return default

            try:
                return parse_float(answer)
            except ValueError:
                self._error(f'"{answer}": the value has to be a float')

    def read_float(self, prompt: str) -> float:
        """Ask for a float."""
        return self._read_float(prompt, 0.0, has_default=False)

    def read_float_default(self, prompt: str, default: float) -> float:
        """Ask for a float; an empty line returns ``default``."""
        return self._read_float(prompt, default, has_default=True)

    # --- Booleans ---

    def read_bool(self, prompt: str, default: bool) -> bool:
        """Ask a yes/no question.

        The options are shown as ``true/false`` with the default in bold.
        Besides the configured literals, any spelling accepted by
        coerce_bool works (1/0, true/false, yes/no, extra_bools).
        """
        if default:
            options = f"{SET_BOLD}{self.true_string}{SET_OFF}/{self.false_string}"
        else:
            options = f"{self.true_string}/{SET_BOLD}{self.false_string}{SET_OFF}"

        line = self.build_prompt(prompt, options, DefaultKind.MULTIPLE)

        while True:
            answer = self.reader.read(line)
            if not answer:
                return default

            try:
                return coerce_bool(answer, self.config.extra_bools)
            except ParseError:
                self._error(f"{answer}: the value does not represent a boolean")

    # --- Choices ---

    def _read_choice(self, prompt: str, options: Sequence[str], default_index: int) -> str:
        if not 0 <= default_index < len(options):
            raise ChoiceIndexError(
                f"read_choice_default: element {default_index} is not in the options"
            )

        default = options[default_index]
        shown = list(options)
        shown[default_index] = f"{SET_BOLD}{default}{SET_OFF}"

        line = self.build_prompt(prompt, ",".join(shown), DefaultKind.MULTIPLE)

        while True:
            answer = self.reader.read(line)
            if not answer:
                return default

            # Unknown choices are asked again without a message.
            if answer in options:
                return answer

    def read_choice(self, prompt: str, options: Sequence[str]) -> str:
        """Ask for one of ``options``; an empty line returns the first one."""
        return self._read_choice(prompt, options, 0)

    def read_choice_default(
        self, prompt: str, options: Sequence[str], default_index: int
    ) -> str:
        """Ask for one of ``options``; an empty line returns
        ``options[default_index]``.

        Raises:
            ChoiceIndexError: If ``default_index`` is out of range.
        """
        return self._read_choice(prompt, options, default_index)
