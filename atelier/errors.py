"""Error codes and error handling utilities for Atelier."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
import socket
from typing import Any
from urllib.error import HTTPError, URLError


class ErrorCode(Enum):
    """Standardized error codes for Atelier operations."""

    # Validation errors
    VALIDATION_EMPTY_URL = auto()
    VALIDATION_INVALID_URL = auto()
    VALIDATION_EMPTY_NAME = auto()
    VALIDATION_INVALID_MODE = auto()

    # Theme errors
    THEME_NOT_FOUND = auto()
    THEME_INVALID_FORMAT = auto()
    PRESET_NOT_FOUND = auto()

    # Network errors
    NETWORK_TIMEOUT = auto()
    NETWORK_UNAVAILABLE = auto()
    NETWORK_HTTP_ERROR = auto()
    NETWORK_NOT_FOUND = auto()
    NETWORK_RATE_LIMITED = auto()

    # Settings errors
    SETTINGS_READ_FAILED = auto()
    SETTINGS_WRITE_FAILED = auto()

    # Operation errors
    OPERATION_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_EMPTY_URL: "Enter a theme URL to import.",
    ErrorCode.VALIDATION_INVALID_URL: "Only http:// and https:// theme URLs can be imported.",
    ErrorCode.VALIDATION_EMPTY_NAME: "Theme name cannot be empty.",
    ErrorCode.VALIDATION_INVALID_MODE: "Unknown color mode. Choose system, light or dark.",

    ErrorCode.THEME_NOT_FOUND: "Theme not found. It may have been deleted.",
    ErrorCode.THEME_INVALID_FORMAT: "Invalid theme format. Expected :root and .dark CSS blocks.",
    ErrorCode.PRESET_NOT_FOUND: "Preset not found.",

    ErrorCode.NETWORK_TIMEOUT: "The theme request timed out. Check your internet connection.",
    ErrorCode.NETWORK_UNAVAILABLE: "Could not reach the theme registry. Check your internet connection.",
    ErrorCode.NETWORK_HTTP_ERROR: "The theme registry returned an error response.",
    ErrorCode.NETWORK_NOT_FOUND: "No theme was found at that URL.",
    ErrorCode.NETWORK_RATE_LIMITED: "Rate limited by the theme registry. Wait a moment and try again.",

    ErrorCode.SETTINGS_READ_FAILED: "Could not load appearance settings. Using defaults.",
    ErrorCode.SETTINGS_WRITE_FAILED: "Could not save appearance settings. Changes apply only to this session.",

    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",
}


@dataclass
class AtelierError(Exception):
    """Base exception for Atelier with error code and context."""

    code: ErrorCode
    message: str = ""
    url: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"\nURL: {self.url}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "url": self.url,
            "details": self.details,
            "suggestion": self.suggestion,
        }


def classify_exception(exc: Exception, url: str | None = None) -> AtelierError:
    """Classify a generic exception into an AtelierError with appropriate code."""
    if isinstance(exc, AtelierError):
        return exc
    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, HTTPError):
        details = {"status": exc.code}
        if exc.code == 404:
            return AtelierError(ErrorCode.NETWORK_NOT_FOUND, url=url, details=details)
        if exc.code == 429:
            return AtelierError(ErrorCode.NETWORK_RATE_LIMITED, url=url, details=details)
        return AtelierError(
            ErrorCode.NETWORK_HTTP_ERROR,
            message=f"The theme registry responded with HTTP {exc.code}.",
            url=url,
            details=details,
        )
    if isinstance(exc, (socket.timeout, TimeoutError)) or "timed out" in exc_str:
        return AtelierError(ErrorCode.NETWORK_TIMEOUT, url=url, details={"original": exc_str})
    if isinstance(exc, URLError):
        reason = str(getattr(exc, "reason", exc)).lower()
        if "timed out" in reason:
            return AtelierError(ErrorCode.NETWORK_TIMEOUT, url=url, details={"original": reason})
        return AtelierError(ErrorCode.NETWORK_UNAVAILABLE, url=url, details={"original": reason})
    if "connection" in exc_str or "unreachable" in exc_str or "network" in exc_str:
        return AtelierError(ErrorCode.NETWORK_UNAVAILABLE, url=url, details={"original": exc_str})
    if isinstance(exc, (UnicodeDecodeError, ValueError)):
        return AtelierError(ErrorCode.THEME_INVALID_FORMAT, url=url, details={"original": exc_str})

    return AtelierError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        url=url,
        details={"original": exc_str},
    )


def format_error_for_user(error: AtelierError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, AtelierError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        if error.url:
            parts.append(f"\n\nURL: {error.url}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
