"""Custom exception hierarchy for pybluelink."""

from __future__ import annotations


class BlueLinkError(Exception):
    """Base exception for all pybluelink errors."""


class BlueLinkConfigError(BlueLinkError):
    """Invalid or missing configuration."""


class BlueLinkInvalidDescriptorError(BlueLinkError, ValueError):
    """A command descriptor cannot produce a request.

    Raised when a static descriptor has no payload for the active
    protocol generation, or when a catalog lookup names a command that
    does not exist.  Both indicate a catalog authoring bug rather than
    bad runtime data, so callers should not retry.
    """


class BlueLinkTransportError(BlueLinkError):
    """HTTP-level failure (network, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class BlueLinkCommandError(BlueLinkTransportError):
    """Remote command was rejected with a non-2xx status."""
