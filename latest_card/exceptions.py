"""
Exception hierarchy for the card service.

Each error carries a human-readable message plus a context dict that is
handy for log lines.
"""

from typing import Any


class CardError(Exception):
    """Base exception for all card service errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ArticleFetchError(CardError):
    """The blog homepage could not be fetched."""

    def __init__(self, url: str, original_error: Exception):
        super().__init__(
            f"Failed to fetch latest article from {url}",
            context={"url": url, "original_error": str(original_error)},
        )
        self.original_error = original_error


class CacheError(CardError):
    """The on-disk card cache could not be written."""

    def __init__(self, path: str, original_error: Exception):
        super().__init__(
            f"Failed to write card cache at {path}",
            context={"path": path, "original_error": str(original_error)},
        )
