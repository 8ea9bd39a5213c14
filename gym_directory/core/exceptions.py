"""Domain-level exception hierarchy shared by the stores and services."""

from __future__ import annotations

from collections.abc import Iterable


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class ConflictError(DomainError):
    """Raised when a uniqueness invariant would be violated (duplicate email, review, favorite)."""


class ValidationError(DomainError):
    """Raised when a payload violates one or more field rules.

    ``messages`` lists every violation so the caller can fix them in one go.
    """

    def __init__(self, messages: Iterable[str] | str) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages: list[str] = list(messages)
        super().__init__("; ".join(self.messages) or "validation failed")


class InvalidIdError(DomainError):
    """Raised when an identifier is not well-formed for the active backend."""


class InfrastructureError(DomainError):
    """Raised when infrastructure (DB or external service) is unavailable."""
