"""
Custom exception hierarchy for the clinic scraper.

Provides a structured exception hierarchy for different error scenarios:
- AppException: Base for all application errors
- ConfigError: Configuration-related errors
- ScraperError: Page fetching and parsing errors
- StorageError: CSV export/import errors

Each exception includes:
- Descriptive message
- Optional error code for programmatic handling
- Optional context dictionary for debugging

Example:
    >>> from src.utils.exceptions import NetworkError
    >>> raise NetworkError("Connection refused", url=url, page=3)
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# ============================================
# Base Exception
# ============================================


class AppException(Exception):
    """
    Base exception for all clinic scraper errors.

    Attributes:
        message: Human-readable error description.
        code: Optional error code for programmatic handling.
        context: Optional dictionary with debugging context.

    Example:
        >>> try:
        ...     raise AppException("Something went wrong", code="APP_001")
        ... except AppException as e:
        ...     print(f"Error {e.code}: {e.message}")
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self._default_code()
        self.context = context or {}
        super().__init__(self.message)

    def _default_code(self) -> str:
        """Generate default error code from class name."""
        # CamelCase -> UPPER_SNAKE_CASE
        name = self.__class__.__name__
        code = ""
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                code += "_"
            code += char.upper()
        return code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
        }


# ============================================
# Configuration Errors
# ============================================


class ConfigError(AppException):
    """
    Base exception for configuration-related errors.

    Raised when there are issues with:
    - Loading configuration files
    - Parsing YAML
    - Validating configuration values
    """

    pass


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """Raised when a required configuration file is not found.

    Also a FileNotFoundError, so callers catching the builtin still work.
    """

    def __init__(
        self,
        message: str = "Configuration file not found",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="CONFIG_FILE_NOT_FOUND", context=context, **kwargs)


class ConfigValidationError(ConfigError, ValueError):
    """
    Raised when configuration values fail validation.

    Also a ValueError, like the pydantic error it wraps.

    Example:
        >>> raise ConfigValidationError(
        ...     "max_parallel must be positive",
        ...     field="scraper.max_parallel",
        ...     value=0
        ... )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = value
        super().__init__(message, code="CONFIG_VALIDATION", context=context, **kwargs)


# ============================================
# Scraper Errors
# ============================================


class ScraperError(AppException):
    """
    Base exception for scraping errors.

    Raised when there are issues with:
    - HTTP requests (transport level)
    - Listing markup that no longer matches the expected structure
    """

    pass


class NetworkError(ScraperError):
    """
    Raised when a page request fails at the transport level.

    Non-success HTTP statuses are not network errors; the fetcher
    reports them as empty pages instead.

    Example:
        >>> raise NetworkError(
        ...     "Connection refused",
        ...     url="https://www.local.ch/en/q/Switzerland/clinique?page=4",
        ...     page=4
        ... )
    """

    def __init__(
        self,
        message: str = "Network request failed",
        url: Optional[str] = None,
        page: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if url:
            context["url"] = url
        if page is not None:
            context["page"] = page
        super().__init__(message, code="NETWORK_ERROR", context=context, **kwargs)


class PageParsingError(ScraperError):
    """
    Raised when a listing entry lacks an expected element.

    Example:
        >>> raise PageParsingError(
        ...     "Listing entry has no title",
        ...     selector="h2.card-info-title",
        ...     page=2
        ... )
    """

    def __init__(
        self,
        message: str = "Failed to parse page content",
        selector: Optional[str] = None,
        page: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if selector:
            context["selector"] = selector
        if page is not None:
            context["page"] = page
        super().__init__(message, code="PAGE_PARSE", context=context, **kwargs)


# ============================================
# Storage Errors
# ============================================


class StorageError(AppException):
    """Base exception for reading or writing scraped records."""

    pass


class ExportError(StorageError):
    """Raised when records cannot be written to their destination."""

    def __init__(
        self,
        message: str = "Failed to export records",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="EXPORT_FAILED", context=context, **kwargs)
