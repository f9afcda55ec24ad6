"""Custom exceptions for postline.

Exception Hierarchy:
    PostlineException (base)
    ├── UsageError
    │   ├── UnknownMethodError
    │   ├── UnknownContentTypeError
    │   └── InvalidHeaderError
    ├── RequestError
    │   └── RequestTimeoutError
    └── ConfigurationError
"""


class PostlineException(Exception):
    """Base exception for all postline errors.

    Attributes:
        message: Descriptive error message
        error_code: Machine-readable error identifier
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Initialize postline exception.

        Args:
            message: Descriptive error message for users
            error_code: Machine-readable error code (e.g., 'unknown_method')
            details: Additional context dict for debugging

        Example:
            >>> raise RequestError(
            ...     message="Connection refused",
            ...     error_code="connect_failed",
            ...     details={"url": "http://localhost:9"}
            ... )
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to a dictionary for structured log output."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details if self.details else None,
        }


# ============================================================================
# USAGE ERRORS
# ============================================================================


class UsageError(PostlineException):
    """Raised when command-line input cannot be turned into a request."""

    pass


class UnknownMethodError(UsageError):
    """Raised when the HTTP method is not one of the supported methods.

    Example:
        >>> HttpMethod.parse("TRACE")
        Traceback (most recent call last):
        ...
        UnknownMethodError: Unknown HTTP method: TRACE
    """

    def __init__(self, method: str) -> None:
        super().__init__(
            message=f"Unknown HTTP method: {method}",
            error_code="unknown_method",
            details={"method": method},
        )


class UnknownContentTypeError(UsageError):
    """Raised when the content type is not a known name or MIME type."""

    def __init__(self, content_type: str) -> None:
        super().__init__(
            message=f"Unknown Content-Type: {content_type}",
            error_code="unknown_content_type",
            details={"content_type": content_type},
        )


class InvalidHeaderError(UsageError):
    """Raised when a header argument is not in ``Name: value`` form."""

    def __init__(self, header: str) -> None:
        super().__init__(
            message=f"Invalid header (expected 'Name: value'): {header}",
            error_code="invalid_header",
            details={"header": header},
        )


# ============================================================================
# REQUEST ERRORS
# ============================================================================


class RequestError(PostlineException):
    """Raised when a request could not be completed.

    Reasons might include:
    - DNS resolution failure
    - Connection refused or reset
    - TLS handshake failure
    - Too many redirects

    An HTTP error status (4xx, 5xx) is a completed request and does not
    raise this exception.
    """

    pass


class RequestTimeoutError(RequestError):
    """Raised when the request exceeds the configured timeout."""

    pass


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================


class ConfigurationError(PostlineException):
    """Raised when settings are missing or invalid.

    Example:
        >>> if settings.timeout_ms <= 0:
        ...     raise ConfigurationError(
        ...         message="Timeout must be positive",
        ...         error_code="invalid_timeout",
        ...         details={"timeout_ms": settings.timeout_ms}
        ...     )
    """

    pass
