"""Centralized type definitions for roxterm-profile.

This module contains the value domains a profile can hold, the change
events published when a value is set, and the TypedDict shapes used for
snapshots and import/export documents.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypedDict

from roxterm_profile.constants import (
    SECTION_BOOLEANS,
    SECTION_FLOATS,
    SECTION_INTS,
    SECTION_STRINGS,
)

# A decoded profile value; bool must be tested before int
Value = str | int | bool | float

# =============================================================================
# Value Domains
# =============================================================================


class Domain(Enum):
    """Closed set of value kinds, each persisted in its own section.

    The enum value is the section name used in the backing file.
    """

    TEXT = SECTION_STRINGS
    INTEGER = SECTION_INTS
    BOOLEAN = SECTION_BOOLEANS
    FLOAT = SECTION_FLOATS

    @property
    def section(self) -> str:
        """Section name holding this domain's keys."""
        return self.value

    @property
    def zero(self) -> Value:
        """Value returned for a missing or undecodable key."""
        return _ZERO_VALUES[self]

    @property
    def event_type(self) -> type["ChangeEvent"]:
        """Change event class published when a key in this domain is set."""
        return _EVENT_TYPES[self]


_ZERO_VALUES: dict[Domain, Value] = {
    Domain.TEXT: "",
    Domain.INTEGER: 0,
    Domain.BOOLEAN: False,
    Domain.FLOAT: 0.0,
}

# =============================================================================
# Change Events
# =============================================================================


@dataclass(frozen=True)
class StringChanged:
    """A text value was set."""

    domain: ClassVar[Domain] = Domain.TEXT

    key: str
    value: str


@dataclass(frozen=True)
class IntChanged:
    """An integer value was set."""

    domain: ClassVar[Domain] = Domain.INTEGER

    key: str
    value: int


@dataclass(frozen=True)
class BooleanChanged:
    """A boolean value was set."""

    domain: ClassVar[Domain] = Domain.BOOLEAN

    key: str
    value: bool


@dataclass(frozen=True)
class FloatChanged:
    """A floating point value was set."""

    domain: ClassVar[Domain] = Domain.FLOAT

    key: str
    value: float


ChangeEvent = StringChanged | IntChanged | BooleanChanged | FloatChanged

_EVENT_TYPES: dict[Domain, type[ChangeEvent]] = {
    Domain.TEXT: StringChanged,
    Domain.INTEGER: IntChanged,
    Domain.BOOLEAN: BooleanChanged,
    Domain.FLOAT: FloatChanged,
}


def make_event(domain: Domain, key: str, value: Value) -> ChangeEvent:
    """Build the change event for ``domain``."""
    return domain.event_type(key, value)  # type: ignore[arg-type]


# =============================================================================
# Snapshot Types
# =============================================================================


class ProfileSnapshot(TypedDict):
    """Decoded contents of all four sections."""

    strings: dict[str, str]
    ints: dict[str, int]
    booleans: dict[str, bool]
    floats: dict[str, float]


class ProfileDocumentData(ProfileSnapshot):
    """Exported profile document."""

    name: str
