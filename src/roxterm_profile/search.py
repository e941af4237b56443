"""Search parameters accepted from the terminal's search dialog.

The dialog hands over a pattern and a bitmask of SearchFlags. Only
validation and bookkeeping happen here; matching against terminal text is
done by the terminal's own search engine.
"""

import re
from dataclasses import dataclass
from enum import IntFlag

from roxterm_profile.exceptions import InvalidPatternError


class SearchFlags(IntFlag):
    """Options for a terminal text search."""

    MATCH_CASE = 1
    ENTIRE_WORD = 2
    AS_REGEX = 4
    BACKWARDS = 8
    WRAP = 16


ALL_SEARCH_FLAGS = (
    SearchFlags.MATCH_CASE
    | SearchFlags.ENTIRE_WORD
    | SearchFlags.AS_REGEX
    | SearchFlags.BACKWARDS
    | SearchFlags.WRAP
)

# Used by the dialog until a search has been applied
DEFAULT_SEARCH_FLAGS = SearchFlags.BACKWARDS | SearchFlags.WRAP


@dataclass(frozen=True)
class SearchState:
    """Pattern and flags of the last accepted search."""

    pattern: str | None = None
    flags: SearchFlags = DEFAULT_SEARCH_FLAGS


def coerce_flags(flags: int) -> SearchFlags:
    """Convert an integer bitmask to SearchFlags.

    Raises:
        InvalidPatternError: If the bitmask holds unknown bits

    """
    if isinstance(flags, bool) or not isinstance(flags, int):
        msg = f"search flags must be an integer, got {type(flags).__name__}"
        raise InvalidPatternError(msg)
    unknown = int(flags) & ~int(ALL_SEARCH_FLAGS)
    if flags < 0 or unknown:
        msg = f"unknown search flag bits: {flags:#x}"
        raise InvalidPatternError(msg)
    return SearchFlags(flags)


def build_search_regex(pattern: str, flags: int) -> re.Pattern[str]:
    """Compile the expression a search engine should look for.

    Literal patterns are escaped; ENTIRE_WORD anchors the expression at word
    boundaries and case is ignored unless MATCH_CASE is set.

    Raises:
        InvalidPatternError: If the flags are invalid or a regex pattern
            does not compile

    """
    search_flags = coerce_flags(flags)
    if not isinstance(pattern, str):
        msg = f"pattern must be text, got {type(pattern).__name__}"
        raise InvalidPatternError(msg)

    re_flags = 0 if search_flags & SearchFlags.MATCH_CASE else re.IGNORECASE
    if search_flags & SearchFlags.AS_REGEX:
        # Compile unwrapped first; the word anchors could balance a stray ")"
        try:
            re.compile(pattern, re_flags)
        except re.error as e:
            raise InvalidPatternError(str(e), target=pattern) from e
        expression = pattern
    else:
        expression = re.escape(pattern)
    if search_flags & SearchFlags.ENTIRE_WORD:
        expression = rf"\b(?:{expression})\b"

    return re.compile(expression, re_flags)


def validate_search(pattern: str, flags: int) -> SearchState:
    """Check search parameters and return the state to remember.

    Only patterns flagged AS_REGEX are compiled; any literal text, including
    an empty string, is accepted.

    Raises:
        InvalidPatternError: If the flags are invalid or the regex does not
            compile

    """
    search_flags = coerce_flags(flags)
    if not isinstance(pattern, str):
        msg = f"pattern must be text, got {type(pattern).__name__}"
        raise InvalidPatternError(msg)
    if search_flags & SearchFlags.AS_REGEX:
        build_search_regex(pattern, search_flags)
    return SearchState(pattern=pattern, flags=search_flags)
