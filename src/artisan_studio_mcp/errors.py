"""Generation error taxonomy and the structured error model returned by tools."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ValidationError


class GenerationError(Exception):
    """A single provider call failed (non-success response, bad payload, safety block)."""

    def __init__(self, message: str, *, cause: object | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class PollTimeoutError(GenerationError):
    """A long-running operation never reported ``done`` within the attempt budget."""

    def __init__(self, operation_handle: str, attempts: int) -> None:
        super().__init__(
            f"Operation {operation_handle} not done after {attempts} status checks"
        )
        self.operation_handle = operation_handle
        self.attempts = attempts


class EmptyResultError(GenerationError):
    """An operation reported ``done`` but carried neither a response nor an error."""

    def __init__(self, operation_handle: str) -> None:
        super().__init__(f"Operation {operation_handle} finished without a result")
        self.operation_handle = operation_handle


class AllTasksFailedError(Exception):
    """Every task in a generation request failed.

    Attributes:
        per_task_errors: Terminal error per variation name, in request order.
    """

    def __init__(self, per_task_errors: dict[str, Exception]) -> None:
        self.per_task_errors = dict(per_task_errors)
        names = ", ".join(self.per_task_errors)
        super().__init__(f"All {len(self.per_task_errors)} generation tasks failed ({names})")

    def summary(self) -> str:
        """One line per task: ``name: message``."""
        return "; ".join(f"{name}: {err}" for name, err in self.per_task_errors.items())


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    INPUT_INVALID = "INPUT_INVALID"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    API_PERMISSION_DENIED = "API_PERMISSION_DENIED"
    API_QUOTA_EXCEEDED = "API_QUOTA_EXCEEDED"
    API_INVALID_ARGUMENT = "API_INVALID_ARGUMENT"
    CONTENT_BLOCKED = "CONTENT_BLOCKED"
    NETWORK_ERROR = "NETWORK_ERROR"
    GENERATION_FAILED = "GENERATION_FAILED"
    GENERATION_TIMEOUT = "GENERATION_TIMEOUT"
    EMPTY_RESULT = "EMPTY_RESULT"
    ALL_TASKS_FAILED = "ALL_TASKS_FAILED"
    UNKNOWN = "UNKNOWN"


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    hint: str
    retryable: bool = False
    retry_after_seconds: int | None = None
    details: str | None = None


def _categorize_message(s: str) -> tuple[ErrorCategory, str] | None:
    """Map provider error text to a category, or None when nothing matches."""
    if "403" in s or "permission" in s:
        return (
            ErrorCategory.API_PERMISSION_DENIED,
            "API key lacks permission for this model — check GEMINI_API_KEY and model access",
        )
    if "429" in s or "quota" in s or "resource_exhausted" in s:
        return (
            ErrorCategory.API_QUOTA_EXCEEDED,
            "Rate limit hit — wait and retry, or switch models with infra_configure(preset='fast')",
        )
    if "safety" in s or "blocked" in s or "prohibited" in s:
        return (
            ErrorCategory.CONTENT_BLOCKED,
            "The provider rejected the request on content-safety grounds — adjust the image or text",
        )
    if "400" in s or "invalid argument" in s:
        return (
            ErrorCategory.API_INVALID_ARGUMENT,
            "Bad request — check media format and parameters",
        )
    if "timeout" in s or "timed out" in s:
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out — try again or check connectivity",
        )
    return None


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    if isinstance(error, AllTasksFailedError):
        return (
            ErrorCategory.ALL_TASKS_FAILED,
            "Every requested variation failed — see details for per-variation causes",
        )
    if isinstance(error, PollTimeoutError):
        return (
            ErrorCategory.GENERATION_TIMEOUT,
            "The video job did not finish in time — check quotas and try again later",
        )
    if isinstance(error, EmptyResultError):
        return (
            ErrorCategory.EMPTY_RESULT,
            "The provider finished without returning media — try a different prompt or image",
        )
    if isinstance(error, FileNotFoundError):
        return ErrorCategory.FILE_NOT_FOUND, "File not found — check the path"
    if isinstance(error, PermissionError):
        return (
            ErrorCategory.PERMISSION_DENIED,
            "Path is outside LOCAL_FILE_ACCESS_ROOT or not readable",
        )
    if isinstance(error, TimeoutError):
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out — try again or check connectivity",
        )

    s = str(error).lower()
    if isinstance(error, (ValueError, ValidationError)):
        if "exceeds" in s and "limit" in s:
            return ErrorCategory.FILE_TOO_LARGE, "Media exceeds the size limit — use a smaller file"
        return ErrorCategory.INPUT_INVALID, str(error)

    matched = _categorize_message(s)
    if matched:
        return matched
    if isinstance(error, GenerationError):
        return ErrorCategory.GENERATION_FAILED, "Generation failed — see error for the provider message"
    return ErrorCategory.UNKNOWN, str(error)


_RETRYABLE = {
    ErrorCategory.API_QUOTA_EXCEEDED,
    ErrorCategory.NETWORK_ERROR,
    ErrorCategory.GENERATION_TIMEOUT,
}


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    details = error.summary() if isinstance(error, AllTasksFailedError) else None
    return ToolError(
        error=str(error),
        category=cat.value,
        hint=hint,
        retryable=cat in _RETRYABLE,
        retry_after_seconds=60 if cat == ErrorCategory.API_QUOTA_EXCEEDED else None,
        details=details,
    ).model_dump(mode="json")
