"""Boolean coercion for free-form answers."""

from collections.abc import Mapping

_CANONICAL = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}

_YES = {"y", "Y", "yes", "YES", "Yes"}
_NO = {"n", "N", "no", "NO", "No"}


class ParseError(ValueError):
    """Raised when a string does not represent a boolean."""


def parse_bool(value: str) -> bool:
    """Parse one of the canonical boolean literals only."""
    try:
        return _CANONICAL[value]
    except KeyError:
        raise ParseError(f"parsing {value!r}: invalid syntax") from None


def coerce_bool(value: str, extra: Mapping[str, bool] | None = None) -> bool:
    """Return the boolean represented by ``value``.

    Accepts the canonical literals (1/0, t/f, true/false in their usual
    casings), then y/yes and n/no spellings, then any key of ``extra``.

    Raises:
        ParseError: If no rule matches. It is the error of the canonical
            parse, so the message names the rejected input.
    """
    try:
        return parse_bool(value)
    except ParseError as exc:
        error = exc

    if value in _YES:
        return True
    if value in _NO:
        return False

    if extra and value in extra:
        return extra[value]

    raise error
