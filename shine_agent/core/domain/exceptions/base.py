"""Base exception classes for the Shine agent.

Every error raised by the pipeline derives from :class:`ShineAgentError`, which
carries:
- a stable error code for quick identification in logs and API responses
- the location (class, method, file, line) where it was raised
- an optional underlying cause
- a JSON-friendly ``to_dict`` for structured logging
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class ExceptionContext:
    """Where an exception was raised."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


class ShineAgentError(Exception):
    """Base exception for all Shine agent errors.

    Example:
        try:
            client.upsert(...)
        except Exception as e:
            raise StoreWriteError(
                "Failed to write knowledge chunks",
                cause=e,
                context={"collection": collection},
            ) from e
    """

    error_code: str = "SHN_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            cause: The underlying exception, if any.
            context: Extra key-value pairs for debugging.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        self.location = self._capture_location()
        self.stack_trace = traceback.format_exc() if cause else None

    def _capture_location(self) -> ExceptionContext:
        """Find the frame that constructed this exception."""
        frame = inspect.currentframe()
        # Skip frames owned by this exception (_capture_location and the __init__ chain)
        while frame is not None and frame.f_locals.get("self") is self:
            frame = frame.f_back

        if frame is None:
            return ExceptionContext("<unknown>", "<unknown>", "<unknown>", 0)

        owner = frame.f_locals.get("self")
        return ExceptionContext(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=frame.f_code.co_filename.replace("\\", "/").rsplit("/", 1)[-1],
            line_number=frame.f_lineno,
        )

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Structured representation for JSON logs and API error bodies.

        Args:
            include_trace: Include the captured stack trace (debug mode).
        """
        result: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }

        if self.extra_context:
            result["context"] = self.extra_context

        if include_trace and self.stack_trace:
            result["stack_trace"] = [line for line in self.stack_trace.split("\n") if line.strip()]

        if self.cause:
            result["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }

        return result
