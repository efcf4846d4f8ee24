"""Exceptions raised by tabprofile."""

from __future__ import annotations


class TabprofileError(Exception):
    """Base class for tabprofile errors."""


class EmptyDatasetError(TabprofileError, ValueError):
    """Raised when a dataset has no records to profile."""


class ProfileValidationError(TabprofileError):
    """Raised when a persisted profile payload does not match the schema."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(
            f"Invalid profile payload ({len(errors)} errors): " + "; ".join(errors)
        )


__all__ = ["EmptyDatasetError", "ProfileValidationError", "TabprofileError"]
