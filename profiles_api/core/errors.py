"""Error taxonomy shared by the store, the services and the HTTP layer."""

from __future__ import annotations


class ProfileError(Exception):
    """Base class for every failure the profiles core reports."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or ""


class NotFoundError(ProfileError):
    """Profile or relationship does not exist."""


class DuplicateRelationshipError(ProfileError):
    """Subscription edge already exists."""


class ConstraintViolationError(ProfileError):
    """Uniqueness or integrity constraint violated."""


class InvalidProfileError(ProfileError):
    """Profile payload failed validation."""


class StoreUnavailableError(ProfileError):
    """Database could not be reached or the connection broke."""


class UnauthenticatedError(ProfileError):
    """Bearer credential missing or invalid."""
