"""
Custom exceptions for better error handling.
"""
from typing import Any, Dict, Optional


class EarningsParserException(Exception):
    """Base exception for all earnings paste analyzer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParsingError(EarningsParserException):
    """Raised when a logical row cannot be turned into a transaction."""
    pass


class ClassificationError(EarningsParserException):
    """Raised when a transaction description matches no revenue rule."""
    pass


class ValidationError(EarningsParserException):
    """Raised when input data validation fails."""
    pass


class ExportError(EarningsParserException):
    """Raised when Excel export fails."""
    pass


class ConfigurationError(EarningsParserException):
    """Raised when configuration is invalid."""
    pass
