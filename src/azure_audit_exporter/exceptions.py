"""
Exception hierarchy for the Azure audit exporter.

Errors are split in two families: fatal startup errors, which stop the
process before the first scrape, and recoverable fetch errors, which are
contained inside a single collection cycle.
"""

from typing import Any, Dict, Optional


class ExporterError(Exception):
    """Base exception for all exporter errors."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        result = self.message
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" ({context_str})"
        if self.cause:
            result += f": {self.cause}"
        return result


class ConfigurationError(ExporterError):
    """Raised when the exporter configuration is invalid."""


class AuthenticationError(ExporterError):
    """Raised when the Azure credential cannot be bootstrapped."""


class AccountDiscoveryError(ExporterError):
    """Raised when the subscriptions under audit cannot be enumerated."""


class FetchError(ExporterError):
    """Raised when a single category fetch for a single account fails."""

    def __init__(
        self,
        category: str,
        account_id: str,
        region: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        context = {"subscription": account_id, "category": category}
        if region:
            context["location"] = region
        super().__init__("fetch failed", context=context, cause=cause)
        self.category = category
        self.account_id = account_id
        self.region = region
