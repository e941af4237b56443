"""Key file parsing and formatting for profile backing files.

This module reads and writes the sectioned ``key = value`` text format used
for profiles, converts raw text to typed values and back, and keeps the
comment lines of a file so they survive a load, modify and save cycle.
"""

import configparser
import re
from dataclasses import dataclass, field

from roxterm_profile.constants import (
    BOOLEAN_FALSE,
    BOOLEAN_STATES,
    BOOLEAN_TRUE,
    COMMENT_PREFIXES,
    INT_MAX,
    INT_MIN,
)
from roxterm_profile.exceptions import ValidationError
from roxterm_profile.types import Domain, Value

# Keys under [DEFAULT] belong to an ordinary section in profile files, so
# configparser's default section gets a name no header can spell.
_NO_DEFAULT_SECTION = "\x00defaults"

_INTEGER_RE = re.compile(r"[+-]?\d+")
_HEX4_RE = re.compile(r"[0-9A-Fa-f]{4}")

_TEXT_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}
_TEXT_UNESCAPES = {
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "s": " ",
}

# Comment block owner: (section, None) for a header, (section, key) for a key
CommentAnchor = tuple[str, str | None]


class KeyFileParser(configparser.ConfigParser):
    """ConfigParser configured for profile key files.

    Keys are case-sensitive, values are taken literally (no interpolation,
    no inline comments) and duplicate keys keep the last value.
    """

    def __init__(self) -> None:
        """Initialize parser with key file settings."""
        super().__init__(
            delimiters=("=",),
            comment_prefixes=COMMENT_PREFIXES,
            inline_comment_prefixes=None,
            strict=False,
            empty_lines_in_values=False,
            default_section=_NO_DEFAULT_SECTION,
            interpolation=None,
        )

    def optionxform(self, optionstr: str) -> str:
        """Keep key case as written."""
        return optionstr


@dataclass
class KeyFileLayout:
    """Comment lines of a key file, anchored to what follows them."""

    comments: dict[CommentAnchor, list[str]] = field(default_factory=dict)
    trailing: list[str] = field(default_factory=list)


@dataclass
class ParsedKeyFile:
    """Raw section tables plus layout of a parsed key file."""

    sections: dict[str, dict[str, str]]
    layout: KeyFileLayout


def _is_comment(stripped: str) -> bool:
    return stripped.startswith(COMMENT_PREFIXES)


def collect_layout(text: str) -> KeyFileLayout:
    """Collect comment lines and attach each block to the next entry.

    Args:
        text: Key file contents

    Returns:
        Layout with comment blocks keyed by the header or key they precede

    """
    layout = KeyFileLayout()
    pending: list[str] = []
    section: str | None = None

    # Lines end at \n only, as configparser reads them
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if _is_comment(stripped):
            pending.append(stripped)
            continue
        if stripped.startswith("[") and stripped.endswith("]"):
            section = stripped[1:-1]
            anchor: CommentAnchor = (section, None)
        elif section is not None and "=" in stripped and not line[0].isspace():
            anchor = (section, stripped.split("=", 1)[0].strip())
        else:
            continue
        if pending:
            layout.comments.setdefault(anchor, []).extend(pending)
            pending = []

    layout.trailing = pending
    return layout


def parse_key_file(text: str) -> ParsedKeyFile:
    """Parse key file text into raw section tables.

    Args:
        text: Key file contents

    Returns:
        Parsed sections (raw, still escaped values) and comment layout

    Raises:
        configparser.Error: If the text is not a valid key file

    """
    parser = KeyFileParser()
    parser.read_string(text)
    sections = {
        section: dict(parser.items(section, raw=True))
        for section in parser.sections()
    }
    # configparser joins indented lines onto the previous value; key files
    # have no continuation lines and such a value could not be written back
    for section, entries in sections.items():
        for key, raw in entries.items():
            if "\n" in raw:
                msg = (
                    f"indented continuation line after key '{key}' "
                    f"in section [{section}]"
                )
                raise configparser.Error(msg)
    return ParsedKeyFile(sections=sections, layout=collect_layout(text))


def format_key_file(
    sections: dict[str, dict[str, str]], layout: KeyFileLayout
) -> str:
    """Render raw section tables back to key file text.

    Args:
        sections: Section name to raw key/value mapping, in output order
        layout: Comment lines to restore

    Returns:
        Key file text ending with a newline (empty string for no sections)

    """
    lines: list[str] = []
    for index, (section, entries) in enumerate(sections.items()):
        if index:
            lines.append("")
        lines.extend(layout.comments.get((section, None), ()))
        lines.append(f"[{section}]")
        for key, raw in entries.items():
            lines.extend(layout.comments.get((section, key), ()))
            lines.append(f"{key} = {raw}".rstrip())

    if layout.trailing:
        if lines:
            lines.append("")
        lines.extend(layout.trailing)

    return "\n".join(lines) + "\n" if lines else ""


# =============================================================================
# Value codecs
# =============================================================================


def _escape_edge(ch: str) -> str:
    if ch == " ":
        return "\\s"
    if ch in _TEXT_ESCAPES:
        return _TEXT_ESCAPES[ch]
    # Every str.isspace() character is in the BMP
    return f"\\u{ord(ch):04x}"


def escape_text(value: str) -> str:
    """Escape text so it fits on one line and keeps edge whitespace.

    The parser strips any whitespace around a value, so leading and
    trailing whitespace characters are all written as escapes.
    """
    start = len(value) - len(value.lstrip())
    end = len(value.rstrip())
    if end <= start:
        return "".join(_escape_edge(ch) for ch in value)
    return (
        "".join(_escape_edge(ch) for ch in value[:start])
        + "".join(_TEXT_ESCAPES.get(ch, ch) for ch in value[start:end])
        + "".join(_escape_edge(ch) for ch in value[end:])
    )


def unescape_text(raw: str) -> str:
    """Reverse escape_text(); unknown escapes are kept as written."""
    chars: list[str] = []
    index = 0
    while index < len(raw):
        ch = raw[index]
        if ch == "\\" and index + 1 < len(raw):
            nxt = raw[index + 1]
            digits = raw[index + 2 : index + 6]
            if nxt == "u" and _HEX4_RE.fullmatch(digits):
                chars.append(chr(int(digits, 16)))
                index += 6
                continue
            if nxt in _TEXT_UNESCAPES:
                chars.append(_TEXT_UNESCAPES[nxt])
                index += 2
                continue
        chars.append(ch)
        index += 1
    return "".join(chars)


def encode_value(domain: Domain, value: Value) -> str:
    """Convert a typed value to its raw text form.

    Args:
        domain: Domain the value is stored under
        value: Value to encode

    Returns:
        Raw text suitable for a key file line

    Raises:
        ValidationError: If the value does not belong to the domain

    """
    if domain is Domain.TEXT:
        if not isinstance(value, str):
            msg = f"expected text, got {type(value).__name__}"
            raise ValidationError(msg)
        return escape_text(value)

    if domain is Domain.BOOLEAN:
        if not isinstance(value, bool):
            msg = f"expected boolean, got {type(value).__name__}"
            raise ValidationError(msg)
        return BOOLEAN_TRUE if value else BOOLEAN_FALSE

    if domain is Domain.INTEGER:
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"expected integer, got {type(value).__name__}"
            raise ValidationError(msg)
        if not INT_MIN <= value <= INT_MAX:
            msg = f"integer {value} is outside the signed 64-bit range"
            raise ValidationError(msg)
        return str(value)

    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"expected float, got {type(value).__name__}"
        raise ValidationError(msg)
    try:
        return repr(float(value))
    except OverflowError as e:
        msg = "integer is too large for a float"
        raise ValidationError(msg) from e


def decode_value(domain: Domain, raw: str) -> Value:
    """Convert raw key file text to a typed value.

    Args:
        domain: Domain the text was stored under
        raw: Raw value text

    Returns:
        Decoded value

    Raises:
        ValueError: If the text is not a valid value of the domain

    """
    if domain is Domain.TEXT:
        return unescape_text(raw)

    text = raw.strip()
    if domain is Domain.BOOLEAN:
        state = BOOLEAN_STATES.get(text.lower())
        if state is None:
            msg = f"not a boolean: {raw!r}"
            raise ValueError(msg)
        return state

    if domain is Domain.INTEGER:
        if not _INTEGER_RE.fullmatch(text):
            msg = f"not an integer: {raw!r}"
            raise ValueError(msg)
        number = int(text)
        if not INT_MIN <= number <= INT_MAX:
            msg = f"integer out of range: {raw!r}"
            raise ValueError(msg)
        return number

    if "_" in text:
        msg = f"not a float: {raw!r}"
        raise ValueError(msg)
    return float(text)
