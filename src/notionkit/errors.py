"""Error hierarchy for notionkit.

Every error raised by the HTTP layer inherits from :class:`NotionKitError`
and carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict and an
optional ``cause``.

The converters and property helpers never raise these errors: their
failures are local and value-returning.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"


class NotionKitError(Exception):
    """Base exception for all notionkit errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` identifying the error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Structured diagnostic data (status code, path, attempt, ...).
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class _CodedError(NotionKitError):
    """Base for subclasses whose code is fixed per class."""

    error_code: ErrorCode

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=self.error_code,
            message=message,
            context=context,
            cause=cause,
        )


class NotionKitValidationError(_CodedError):
    """The API returned 400 (or another non-retryable 4xx).

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    error_code = ErrorCode.VALIDATION_ERROR


class NotionKitAuthError(_CodedError):
    """The API returned 401: the integration token is invalid."""

    error_code = ErrorCode.AUTH_ERROR


class NotionKitPermissionError(_CodedError):
    """The API returned 403: the integration cannot access the resource.

    Context keys: ``status_code``, ``operation``.
    """

    error_code = ErrorCode.PERMISSION_ERROR


class NotionKitNotFoundError(_CodedError):
    """The API returned 404.

    Context keys: ``status_code``, ``path``.
    """

    error_code = ErrorCode.NOT_FOUND


class NotionKitConflictError(_CodedError):
    """The API returned 409: a concurrent edit conflicted with the request."""

    error_code = ErrorCode.CONFLICT


class NotionKitRetryExhaustedError(_CodedError):
    """All retry attempts for a retryable request failed.

    Context keys: ``attempts``, ``last_status_code``.
    """

    error_code = ErrorCode.RETRY_EXHAUSTED


class NotionKitNetworkError(_CodedError):
    """A transport-level failure (timeout, DNS, connection reset).

    Context keys: ``url``, ``attempt``.
    """

    error_code = ErrorCode.NETWORK_ERROR
