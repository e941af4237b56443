"""JSON import and export of profiles.

Exported documents hold the profile name and the decoded contents of the
four sections. Imported documents are checked against the bundled JSON
schema before any value is applied.
"""

import math
from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft7Validator
from jsonschema import ValidationError as JsonSchemaError
from jsonschema.exceptions import best_match

from roxterm_profile.constants import EXPORT_KEY_NAME
from roxterm_profile.exceptions import ValidationError
from roxterm_profile.logger import get_logger
from roxterm_profile.profile import Profile
from roxterm_profile.types import Domain, ProfileDocumentData, Value

logger = get_logger(__name__)

SCHEMA_DIR = Path(__file__).parent
PROFILE_DOCUMENT_SCHEMA_PATH = SCHEMA_DIR / "profile_document.schema.json"

_NON_FINITE = {"inf": math.inf, "-inf": -math.inf, "nan": math.nan}


class SchemaValidationError(ValidationError):
    """Raised when an imported document does not match the schema."""

    error_prefix = "Schema validation failed"

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize schema validation error.

        Args:
            message: Error message
            path: JSON path where the error occurred

        """
        super().__init__(message, target=path)
        self.path = path


def _load_schema(schema_path: Path) -> dict[str, Any]:
    """Load JSON schema from file.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        ValueError: If schema JSON is invalid

    """
    if not schema_path.exists():
        msg = f"Schema file not found: {schema_path}"
        raise FileNotFoundError(msg)

    try:
        return orjson.loads(schema_path.read_bytes())  # type: ignore[no-any-return]
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in schema file {schema_path}: {e}"
        raise ValueError(msg) from e


def _format_path(error: JsonSchemaError) -> str | None:
    if not error.absolute_path:
        return None
    return ".".join(str(part) for part in error.absolute_path)


def _export_float(value: float) -> float | str:
    # JSON has no spelling for infinities or NaN
    if math.isfinite(value):
        return value
    return repr(value)


def _import_value(domain: Domain, value: Any) -> Value:  # noqa: ANN401
    if domain is Domain.FLOAT:
        if isinstance(value, str):
            return _NON_FINITE[value]
        return float(value)
    if domain is Domain.INTEGER:
        # Draft 7 counts 3.0 as an integer
        return int(value)
    return value  # type: ignore[no-any-return]


class ProfileDocument:
    """Converts profiles to and from JSON documents."""

    def __init__(self, schema_path: Path = PROFILE_DOCUMENT_SCHEMA_PATH) -> None:
        """Initialize with the document schema.

        Args:
            schema_path: JSON schema for imported documents

        """
        self._schema = _load_schema(schema_path)
        self._validator = Draft7Validator(self._schema)

    def validate(self, document: Any) -> None:  # noqa: ANN401
        """Validate a decoded document.

        Raises:
            SchemaValidationError: With the most relevant schema error

        """
        error = best_match(self._validator.iter_errors(document))
        if error is not None:
            raise SchemaValidationError(error.message, path=_format_path(error))

    def export_profile(self, profile: Profile) -> bytes:
        """Serialize ``profile`` as an indented JSON document."""
        snapshot = profile.as_dict()
        document = ProfileDocumentData(
            name=profile.name,
            strings=snapshot["strings"],
            ints=snapshot["ints"],
            booleans=snapshot["booleans"],
            floats={
                key: _export_float(value)  # type: ignore[misc]
                for key, value in snapshot["floats"].items()
            },
        )
        return orjson.dumps(
            document, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS
        )

    def import_profile(self, profile: Profile, data: bytes | str) -> int:
        """Apply the values of a JSON document to ``profile``.

        Every value goes through the profile's typed setters, so each one is
        saved and announced to subscribers. The document's ``name`` is
        informational and need not match the profile.

        Returns:
            Number of values applied

        Raises:
            SchemaValidationError: If the document is not valid JSON or does
                not match the schema

        """
        try:
            document = orjson.loads(data)
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON: {e}"
            raise SchemaValidationError(msg) from e

        self.validate(document)

        source_name = document.get(EXPORT_KEY_NAME)
        if source_name and source_name != profile.name:
            logger.info(
                "Importing values exported from '%s' into '%s'",
                source_name,
                profile.name,
            )

        applied = 0
        for domain in Domain:
            for key, value in document.get(domain.section, {}).items():
                profile.set(domain, key, _import_value(domain, value))
                applied += 1
        return applied
