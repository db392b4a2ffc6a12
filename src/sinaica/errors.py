"""
Exceptions raised by the SINAICA client.

Only `TransportError` is ever retried, and only inside the extractor. The
others mean the portal answered with something we cannot use, or the caller
asked for something that does not exist; they propagate untouched.
"""

from typing import Any, Optional


class SinaicaError(Exception):
    """Base exception for all SINAICA client errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TransportError(SinaicaError):
    """Network or HTTP failure that outlived the retry policy."""

    def __init__(self, url: str, attempts: int, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            f"request to {url} failed after {attempts} attempt(s)",
            {"url": url, "attempts": attempts, "cause": repr(cause) if cause else None},
        )
        self.url = url
        self.attempts = attempts


class ExtractionError(SinaicaError):
    """The embedded data literal could not be located or parsed."""


class SchemaError(SinaicaError):
    """A catalog entry lacks a required field or has the wrong shape."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"invalid catalog entry at {path}: {reason}", {"path": path})
        self.path = path


class NotFoundError(SinaicaError):
    """No state in the catalog matches the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"state not found: {name!r}", {"name": name})
        self.name = name
