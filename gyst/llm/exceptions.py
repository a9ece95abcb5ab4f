"""LLM-related exception classes.

Contains all exception classes for backend operations:
- LLMError: Base exception for LLM-related errors
- ConfigError: Direct mode requested without an API key
- NetworkError: Connection failure or timeout (retryable)
- AuthError: 401/403 from either backend
- RateLimitedError: 429, with an optional retry-after hint (retryable)
- ServerError: 5xx from the backend (retryable)
- BadRequestError: Any other 4xx; the request itself was rejected
- MalformedResponseError: Response empty or unparseable after normalization
- ValidationError: Normalization had to repair the message (strict mode only)
"""

from typing import Optional


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    retryable = False


class ConfigError(LLMError):
    """Raised when the backend configuration cannot be used."""

    pass


class NetworkError(LLMError):
    """Raised when the backend cannot be reached or the request times out."""

    retryable = True


class AuthError(LLMError):
    """Raised when the backend rejects the credentials."""

    pass


class RateLimitedError(LLMError):
    """Raised on HTTP 429."""

    retryable = True

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class ServerError(LLMError):
    """Raised on a 5xx response."""

    retryable = True

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BadRequestError(LLMError):
    """Raised when the backend rejects the request (4xx other than 401/403/429)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(LLMError):
    """Raised when the response is empty or cannot be parsed."""

    pass


class ValidationError(LLMError):
    """Raised in strict mode when a message needed repair to be well-formed."""

    def __init__(self, message: str, issues: tuple = ()):
        super().__init__(message)
        self.issues = issues
