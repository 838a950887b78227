"""
Error Handling Module for AoC Example Extractor

This module provides custom exceptions, error classification and reporting for the
errors that can occur while parsing puzzle pages, fetching them and writing results.

Heuristic misses are NOT errors: the extractor returns ``None`` for those. Everything
in here describes conditions that abort an operation.
"""

import logging
import time
import traceback
import functools
import socket
from typing import Dict, Any, Optional, Callable, List, Tuple
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime
from requests.exceptions import (
    Timeout, ConnectionError, HTTPError, ChunkedEncodingError
)
from urllib3.exceptions import MaxRetryError, NewConnectionError

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification"""
    NETWORK = "network"
    URL_VALIDATION = "url_validation"
    CONTENT_MISSING = "content_missing"
    RATE_LIMITING = "rate_limiting"
    MARKUP_PARSING = "markup_parsing"
    FILE_SYSTEM = "file_system"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Structured error information"""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    original_exception: Optional[Exception] = None
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: Optional[str] = None
    recovery_suggestions: List[str] = field(default_factory=list)
    user_message: Optional[str] = None


# =============================================================================
# Custom Exception Classes
# =============================================================================

class ExtractorError(Exception):
    """Base exception for all AoC Example Extractor specific errors"""

    def __init__(self, message: str, error_info: Optional[ErrorInfo] = None):
        super().__init__(message)
        self.error_info = error_info or ErrorInfo(
            message=message,
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.MEDIUM
        )


class MarkupParseError(ExtractorError):
    """Page markup could not be turned into a node tree"""

    def __init__(self, message: str, original_exception: Optional[Exception] = None,
                 year: Optional[int] = None, day: Optional[int] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.MARKUP_PARSING,
            severity=ErrorSeverity.HIGH,
            original_exception=original_exception,
            context={"year": year, "day": day},
            recovery_suggestions=[
                "Check that the page was saved as HTML text",
                "Re-download the puzzle page",
            ],
            user_message="The puzzle page could not be parsed as HTML."
        )
        super().__init__(message, error_info)


class NetworkError(ExtractorError):
    """Network-related errors (timeouts, connection failures, etc.)"""

    def __init__(self, message: str, original_exception: Optional[Exception] = None,
                 url: Optional[str] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.HIGH,
            original_exception=original_exception,
            context={"url": url} if url else {},
            recovery_suggestions=[
                "Check internet connection",
                "Verify URL is accessible",
                "Try again after a few minutes"
            ]
        )
        super().__init__(message, error_info)


class URLValidationError(ExtractorError):
    """Invalid or unsupported puzzle URL"""

    def __init__(self, message: str, url: Optional[str] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.URL_VALIDATION,
            severity=ErrorSeverity.MEDIUM,
            context={"url": url} if url else {},
            recovery_suggestions=[
                "Check URL format",
                "Use a URL like https://adventofcode.com/2022/day/7"
            ],
            user_message="Please check the URL format and ensure it points to a puzzle page."
        )
        super().__init__(message, error_info)


class ContentMissingError(ExtractorError):
    """Missing puzzle page, 404 errors, etc."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.CONTENT_MISSING,
            severity=ErrorSeverity.MEDIUM,
            context={"url": url, "status_code": status_code},
            recovery_suggestions=[
                "Verify the puzzle exists",
                "Puzzles unlock at midnight EST, check the release time",
                "Try the URL in a web browser"
            ],
            user_message="The requested puzzle could not be found. Please verify the URL."
        )
        super().__init__(message, error_info)


class RateLimitError(ExtractorError):
    """Rate limiting errors from servers"""

    def __init__(self, message: str, retry_after: Optional[int] = None, url: Optional[str] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.RATE_LIMITING,
            severity=ErrorSeverity.MEDIUM,
            context={"url": url, "retry_after": retry_after},
            recovery_suggestions=[
                f"Wait {retry_after} seconds before retrying" if retry_after else "Wait before retrying",
                "Increase delay between requests"
            ],
            user_message=f"Rate limit exceeded. Please wait {retry_after} seconds." if retry_after
                        else "Rate limit exceeded. Please wait before retrying."
        )
        super().__init__(message, error_info)


class FileSystemError(ExtractorError):
    """File system related errors (permissions, missing input files, etc.)"""

    def __init__(self, message: str, path: Optional[str] = None,
                 original_exception: Optional[Exception] = None):
        error_info = ErrorInfo(
            message=message,
            category=ErrorCategory.FILE_SYSTEM,
            severity=ErrorSeverity.HIGH,
            original_exception=original_exception,
            context={"path": path} if path else {},
            recovery_suggestions=[
                "Check file/directory permissions",
                "Verify the path exists"
            ],
            user_message="File system error occurred. Please check the path and permissions."
        )
        super().__init__(message, error_info)


# =============================================================================
# Error Detection Utilities
# =============================================================================

class ErrorDetector:
    """Utilities for detecting specific types of errors"""

    @staticmethod
    def is_network_error(exception: Exception) -> bool:
        """Check if exception is a network-related error"""
        network_exceptions = (
            ConnectionError, Timeout, socket.timeout, socket.gaierror,
            MaxRetryError, NewConnectionError, ChunkedEncodingError
        )
        return isinstance(exception, network_exceptions)

    @staticmethod
    def is_http_error(exception: Exception) -> Tuple[bool, Optional[int]]:
        """Check if exception is an HTTP error and return status code"""
        if isinstance(exception, HTTPError):
            response = exception.response
            return True, response.status_code if response is not None else None
        return False, None

    @staticmethod
    def retry_after_seconds(headers: Dict[str, str], default: Optional[int] = None) -> Optional[int]:
        """Read an integer Retry-After header"""
        value = headers.get('Retry-After')
        if value:
            try:
                return int(value)
            except ValueError:
                pass
        return default


# =============================================================================
# Retry Decorator
# =============================================================================

def retry_on_error(max_attempts: int = 3, delay: float = 1.0,
                   backoff_factor: float = 2.0,
                   retryable_errors: Optional[List[type]] = None):
    """
    Decorator for automatic retry on specific errors

    Args:
        max_attempts: Maximum retry attempts
        delay: Initial delay between retries (seconds)
        backoff_factor: Multiplier for delay on each retry
        retryable_errors: List of exception types to retry on; defaults to
            the network errors recognised by ErrorDetector.is_network_error
    """
    if retryable_errors is None:
        is_retryable = ErrorDetector.is_network_error
    else:
        retryable = tuple(retryable_errors)

        def is_retryable(exception: Exception) -> bool:
            return isinstance(exception, retryable)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None
            current_delay = delay

            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    last_exception = e

                    if not is_retryable(e):
                        raise

                    # Don't retry on last attempt
                    if attempt == max_attempts - 1:
                        break

                    logger.warning(f"Attempt {attempt + 1}/{max_attempts} failed: {str(e)}. "
                                   f"Retrying in {current_delay} seconds...")
                    time.sleep(current_delay)
                    current_delay *= backoff_factor

            if last_exception:
                raise last_exception
            raise RuntimeError("All retry attempts failed but no exception was captured")

        return wrapper
    return decorator


# =============================================================================
# Error Reporting
# =============================================================================

class ErrorReporter:
    """Centralized error reporting and logging"""

    def __init__(self):
        self.error_history: List[ErrorInfo] = []

    def report_error(self, error_info: ErrorInfo, context: Optional[Dict[str, Any]] = None):
        """Report an error with full context"""
        self.error_history.append(error_info)

        # Log based on severity
        if error_info.severity == ErrorSeverity.CRITICAL:
            logger.critical(f"CRITICAL ERROR: {error_info.message}")
        elif error_info.severity == ErrorSeverity.HIGH:
            logger.error(f"ERROR: {error_info.message}")
        elif error_info.severity == ErrorSeverity.MEDIUM:
            logger.warning(f"WARNING: {error_info.message}")
        else:
            logger.info(f"INFO: {error_info.message}")

        if error_info.context:
            logger.debug(f"Context: {error_info.context}")

        if context:
            logger.debug(f"Additional context: {context}")

        if error_info.traceback_str:
            logger.debug(f"Traceback: {error_info.traceback_str}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all reported errors"""
        if not self.error_history:
            return {"total_errors": 0, "categories": {}, "severity_counts": {}}

        categories = {}
        severity_counts = {}

        for error in self.error_history:
            cat = error.category.value
            categories[cat] = categories.get(cat, 0) + 1

            sev = error.severity.value
            severity_counts[sev] = severity_counts.get(sev, 0) + 1

        return {
            "total_errors": len(self.error_history),
            "categories": categories,
            "severity_counts": severity_counts,
            "recent_errors": [
                {
                    "message": e.message,
                    "category": e.category.value,
                    "severity": e.severity.value,
                    "timestamp": e.timestamp.isoformat()
                }
                for e in self.error_history[-10:]
            ]
        }

    def clear(self):
        self.error_history.clear()


# =============================================================================
# Global Error Handler Instance
# =============================================================================

error_reporter = ErrorReporter()


def handle_exception(func: Callable) -> Callable:
    """Decorator to handle exceptions and report them"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ExtractorError as e:
            error_reporter.report_error(e.error_info)
            raise
        except Exception as e:
            error_info = ErrorInfo(
                message=f"Unexpected error in {func.__name__}: {str(e)}",
                category=ErrorCategory.UNKNOWN,
                severity=ErrorSeverity.MEDIUM,
                original_exception=e,
                traceback_str=traceback.format_exc()
            )
            error_reporter.report_error(error_info)
            raise ExtractorError(f"Unexpected error: {str(e)}", error_info) from e
    return wrapper
