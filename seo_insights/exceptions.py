"""
Error types for the invocation layer.

Every failure an invocation can end in is an ``InvocationError`` subclass with
an ``ErrorKind`` tag. The session stores the error object itself, so callers
can branch on ``error.kind`` without isinstance checks.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    UNKNOWN_TOOL = "UnknownTool"
    MISSING_CREDENTIAL = "MissingCredential"
    EMPTY_INPUT = "EmptyInput"
    NETWORK_FAILURE = "NetworkFailure"
    HTTP_ERROR = "HttpError"
    EXHAUSTED_RETRIES = "ExhaustedRetries"
    EMPTY_RESPONSE_BODY = "EmptyResponseBody"
    MALFORMED_SCHEMA_RESPONSE = "MalformedSchemaResponse"


class SeoInsightsError(Exception):
    """Base class for all package errors."""


class InvocationError(SeoInsightsError):
    """
    A classified, user-facing invocation failure.

    ``tool_id`` may be empty for errors raised below the coordinator (transport,
    schema parsing); the coordinator fills it in before surfacing the error.
    """

    kind: ErrorKind = ErrorKind.NETWORK_FAILURE

    def __init__(self, message: str, tool_id: str = "", cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.tool_id = tool_id
        self.cause = cause

    def for_tool(self, tool_id: str) -> "InvocationError":
        self.tool_id = tool_id
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, tool_id={self.tool_id!r}, message={self.message!r})"


class UnknownToolError(InvocationError):
    kind = ErrorKind.UNKNOWN_TOOL


class MissingCredentialError(InvocationError):
    kind = ErrorKind.MISSING_CREDENTIAL


class EmptyInputError(InvocationError):
    kind = ErrorKind.EMPTY_INPUT


class NetworkFailureError(InvocationError):
    kind = ErrorKind.NETWORK_FAILURE


class HttpStatusError(InvocationError):
    kind = ErrorKind.HTTP_ERROR

    def __init__(self, status_code: int, body: str = "", tool_id: str = "") -> None:
        super().__init__(f"HTTP {status_code}: {body[:300]}", tool_id=tool_id)
        self.status_code = status_code
        self.body = body


class ExhaustedRetriesError(InvocationError):
    kind = ErrorKind.EXHAUSTED_RETRIES

    def __init__(self, attempts: int, cause: Optional[BaseException] = None, tool_id: str = "") -> None:
        super().__init__(f"Request failed after {attempts} attempt(s): {cause}", tool_id=tool_id, cause=cause)
        self.attempts = attempts


class EmptyResponseBodyError(InvocationError):
    kind = ErrorKind.EMPTY_RESPONSE_BODY


class MalformedSchemaResponseError(InvocationError):
    kind = ErrorKind.MALFORMED_SCHEMA_RESPONSE


class InvocationInProgressError(SeoInsightsError):
    """Raised when a submission arrives while the session is already loading."""


__all__ = [
    "ErrorKind",
    "SeoInsightsError",
    "InvocationError",
    "UnknownToolError",
    "MissingCredentialError",
    "EmptyInputError",
    "NetworkFailureError",
    "HttpStatusError",
    "ExhaustedRetriesError",
    "EmptyResponseBodyError",
    "MalformedSchemaResponseError",
    "InvocationInProgressError",
]
