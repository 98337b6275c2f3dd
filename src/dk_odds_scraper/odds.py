"""Normalization of American odds and point-line text.

Sportsbook pages render the same signed number in several ways (``+150``,
``-110``, ``−110`` with a Unicode minus, or an empty cell). Everything is
reduced to a signed float.
"""

import logging
import re

from .exceptions import OddsParseError

logger = logging.getLogger(__name__)

UNICODE_MINUS = "−"

# Recognized sign prefixes and whether each marks a negative value
SIGN_PREFIXES: dict[str, bool] = {
    "+": False,
    "-": True,
    UNICODE_MINUS: True,
}

# Unsigned decimal magnitude, e.g. "110", "3.5", ".5"
DECIMAL_PATTERN = re.compile(r"\d+(\.\d*)?|\.\d+")


def split_sign(text: str) -> tuple[bool, str]:
    """Strip a single sign prefix from already-trimmed text.

    Args:
        text: Trimmed odds or line text.

    Returns:
        Tuple of (is_negative, remaining_text).
    """
    for prefix, negative in SIGN_PREFIXES.items():
        if text.startswith(prefix):
            return negative, text[len(prefix):]
    return False, text


def parse_odds_strict(text: str) -> float:
    """Parse odds or line text, raising on anything that is not a number.

    Blank text is a valid "no value" and returns 0.0.

    Raises:
        OddsParseError: If the magnitude is not a decimal number.
    """
    text = text.strip()
    if not text:
        return 0.0

    negative, magnitude_text = split_sign(text)

    # At most one sign marker is allowed
    if magnitude_text[:1] in SIGN_PREFIXES:
        raise OddsParseError(f"Multiple sign markers in {text!r}", text=text)

    if not DECIMAL_PATTERN.fullmatch(magnitude_text):
        raise OddsParseError(f"Not a number: {text!r}", text=text)

    magnitude = float(magnitude_text)

    return -magnitude if negative else magnitude


def parse_odds(text: str | None) -> float:
    """Parse odds or line text, falling back to 0.0 when it is not a number.

    Args:
        text: Raw node text, possibly padded with whitespace.

    Returns:
        Signed value, or 0.0 for blank or unparseable text.

    Example:
        >>> parse_odds("+150")
        150.0
        >>> parse_odds("−110")
        -110.0
        >>> parse_odds("abc")
        0.0
    """
    if text is None:
        return 0.0
    try:
        return parse_odds_strict(text)
    except OddsParseError as e:
        logger.debug(f"Unparseable odds text, using 0.0: {e}")
        return 0.0
