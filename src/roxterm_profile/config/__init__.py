"""Configuration file support - directory lookup and key file format.

This package provides:
- Paths: XDG base directory defaults
- DirectoryResolver: Profile name to backing file lookup
- KeyFileParser and helpers: Key file parsing, formatting and value codecs
"""

from roxterm_profile.config.parser import (
    KeyFileLayout,
    KeyFileParser,
    ParsedKeyFile,
    decode_value,
    encode_value,
    format_key_file,
    parse_key_file,
)
from roxterm_profile.config.paths import DirectoryResolver, Paths

__all__ = [
    "DirectoryResolver",
    "KeyFileLayout",
    "KeyFileParser",
    "ParsedKeyFile",
    "Paths",
    "decode_value",
    "encode_value",
    "format_key_file",
    "parse_key_file",
]
