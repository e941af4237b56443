"""JSON schema backed import and export of profiles."""

from roxterm_profile.schemas.validator import (
    PROFILE_DOCUMENT_SCHEMA_PATH,
    ProfileDocument,
    SchemaValidationError,
)

__all__ = [
    "PROFILE_DOCUMENT_SCHEMA_PATH",
    "ProfileDocument",
    "SchemaValidationError",
]
