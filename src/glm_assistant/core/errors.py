"""Failure taxonomy shared by the preference store and the generation client."""

from __future__ import annotations

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Identifiable kind of a failed assistant operation."""

    MISSING_CREDENTIAL = "missing_credential"
    NETWORK_FAILURE = "network_failure"
    MALFORMED_RESPONSE = "malformed_response"
    STORAGE_FAILURE = "storage_failure"


class AssistantError(Exception):
    """Base class for failures surfaced to the caller."""

    kind: FailureKind


class MissingCredentialError(AssistantError):
    """Raised when no API key is stored."""

    kind = FailureKind.MISSING_CREDENTIAL

    def __init__(self, message: str = "API key not found") -> None:
        super().__init__(message)


class NetworkFailureError(AssistantError):
    """Raised on transport-level failures (DNS, refused connection, timeout)."""

    kind = FailureKind.NETWORK_FAILURE


class MalformedResponseError(AssistantError):
    """Raised when the API response lacks ``choices[0].message.content``."""

    kind = FailureKind.MALFORMED_RESPONSE

    def __init__(
        self,
        message: str = "Invalid API response",
        *,
        status_code: int | None = None,
        details: Any = None,  # noqa: ANN401
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class StorageFailureError(AssistantError):
    """Raised when preferences cannot be read or written."""

    kind = FailureKind.STORAGE_FAILURE


class EmptyPromptError(ValueError):
    """Raised when a blank prompt is submitted."""


__all__ = [
    "AssistantError",
    "EmptyPromptError",
    "FailureKind",
    "MalformedResponseError",
    "MissingCredentialError",
    "NetworkFailureError",
    "StorageFailureError",
]
