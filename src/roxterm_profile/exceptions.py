"""Exception classes for roxterm-profile operations."""


class ProfileError(Exception):
    """Base exception for profile operations."""

    error_prefix: str = "Profile operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the profile or file that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class LoadParseError(ProfileError):
    """Raised when a profile file cannot be read or parsed."""

    error_prefix = "Error loading profile"


class SaveIoError(ProfileError):
    """Raised when a profile file cannot be written."""

    error_prefix = "Error saving profile"


class InvalidPatternError(ProfileError):
    """Raised when search parameters are rejected."""

    error_prefix = "Invalid search expression"

    def __str__(self) -> str:
        """Return the human-readable message shown to the user."""
        return f"{self.error_prefix}: {self.message}"


class ValidationError(ProfileError):
    """Raised when a profile name, key or value is invalid."""

    error_prefix = "Validation failed"
