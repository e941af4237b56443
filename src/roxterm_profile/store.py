"""In-memory sectioned key/value table mirrored to a profile file."""

import configparser

from roxterm_profile.config.parser import (
    KeyFileLayout,
    decode_value,
    encode_value,
    format_key_file,
    parse_key_file,
)
from roxterm_profile.constants import COMMENT_PREFIXES, FORBIDDEN_KEY_CHARS
from roxterm_profile.exceptions import LoadParseError, ValidationError
from roxterm_profile.types import Domain, ProfileSnapshot, Value


def validate_key(key: str) -> None:
    """Check that ``key`` can be written to and read back from a key file.

    Raises:
        ValidationError: If the key is empty, has edge whitespace, starts
            like a comment or contains ``=``, brackets or line breaks

    """
    if not isinstance(key, str) or not key:
        msg = "key must be a non-empty string"
        raise ValidationError(msg, target=str(key))
    if key != key.strip():
        msg = "key must not start or end with whitespace"
        raise ValidationError(msg, target=key)
    if key.startswith(COMMENT_PREFIXES):
        msg = "key must not start with a comment character"
        raise ValidationError(msg, target=key)
    if FORBIDDEN_KEY_CHARS.intersection(key):
        msg = "key must not contain '=', '[', ']' or line breaks"
        raise ValidationError(msg, target=key)


class BackingStore:
    """Four typed sections of raw key file entries.

    Values are kept in their raw text form and decoded on read, so an
    entry that does not parse as its domain's type simply reads as the
    domain's zero value. Sections other than the four domain sections are
    kept as loaded and written back unchanged.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._sections: dict[str, dict[str, str]] = {}
        self._layout = KeyFileLayout()

    @classmethod
    def loads(cls, text: str, source: str | None = None) -> "BackingStore":
        """Build a store from key file text.

        Args:
            text: Key file contents
            source: File name used in error messages

        Returns:
            Store holding the parsed entries and comments

        Raises:
            LoadParseError: If the text is not a valid key file

        """
        try:
            parsed = parse_key_file(text)
        except configparser.Error as e:
            raise LoadParseError(str(e), target=source) from e

        store = cls()
        store._sections = parsed.sections
        store._layout = parsed.layout
        return store

    def dumps(self) -> str:
        """Render the store as key file text."""
        return format_key_file(self._sections, self._layout)

    def get(self, domain: Domain, key: str) -> Value:
        """Read a decoded value.

        Returns:
            The stored value, or the domain's zero value when the key is
            missing or its text does not decode

        """
        raw = self._sections.get(domain.section, {}).get(key)
        if raw is None:
            return domain.zero
        try:
            return decode_value(domain, raw)
        except ValueError:
            return domain.zero

    def set(self, domain: Domain, key: str, value: Value) -> None:
        """Store ``value`` under ``key``, replacing any earlier entry.

        Raises:
            ValidationError: If the key or value is not valid for the domain

        """
        validate_key(key)
        raw = encode_value(domain, value)
        self._sections.setdefault(domain.section, {})[key] = raw

    def has_key(self, domain: Domain, key: str) -> bool:
        """Whether ``key`` has an entry in the domain's section."""
        return key in self._sections.get(domain.section, {})

    def keys(self, domain: Domain) -> list[str]:
        """Keys of the domain's section in file order."""
        return list(self._sections.get(domain.section, {}))

    def items(self, domain: Domain) -> dict[str, Value]:
        """Decoded entries of the domain's section."""
        return {key: self.get(domain, key) for key in self.keys(domain)}

    def as_dict(self) -> ProfileSnapshot:
        """Decoded snapshot of all four domain sections."""
        return ProfileSnapshot(
            strings=self.items(Domain.TEXT),  # type: ignore[typeddict-item]
            ints=self.items(Domain.INTEGER),  # type: ignore[typeddict-item]
            booleans=self.items(Domain.BOOLEAN),  # type: ignore[typeddict-item]
            floats=self.items(Domain.FLOAT),  # type: ignore[typeddict-item]
        )

    def __len__(self) -> int:
        return sum(len(self._sections.get(d.section, {})) for d in Domain)
