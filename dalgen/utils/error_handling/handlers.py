"""Standardized error handling for dalgen compilation.

Provides consistent error logging and JSON-ready error responses that carry
the parse diagnostics alongside the error itself.
"""

from typing import TYPE_CHECKING, Dict, Any, Optional, Sequence
from dataclasses import dataclass, field
from datetime import datetime
import logging
import traceback

from dalgen.errors import InvalidAction, UnexpectedPair
from dalgen.utils.logging import get_logger

if TYPE_CHECKING:
    from dalgen.utils.dsl.models import Diagnostic

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """Context information for error handling."""
    stage: str  # "parse", "render", "io"
    file_name: Optional[str] = None
    format: Optional[str] = None
    additional_context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CompileError(Exception):
    """Standardized error for compile failures."""
    message: str
    context: ErrorContext
    original_exception: Optional[Exception] = None
    error_type: str = "compile_error"

    def __str__(self) -> str:
        return f"[{self.context.stage}] {self.message}"


def log_error_with_context(
    error: Exception,
    context: ErrorContext,
    level: str = "error"
) -> None:
    """
    Log error with full context information.

    Args:
        error: The exception that occurred
        context: Error context information
        level: Log level ("error", "warning", "critical")
    """
    log_msg_parts = [f"Error during {context.stage}"]

    if context.file_name:
        log_msg_parts.append(f"File: {context.file_name}")
    if context.format:
        log_msg_parts.append(f"Format: {context.format}")

    log_msg = " | ".join(log_msg_parts)
    # Tracebacks only at DEBUG
    exc_info = logger.isEnabledFor(logging.DEBUG)

    if level == "critical":
        logger.critical(f"{log_msg}: {error}", exc_info=exc_info)
    elif level == "warning":
        logger.warning(f"{log_msg}: {error}", exc_info=exc_info)
    else:
        logger.error(f"{log_msg}: {error}", exc_info=exc_info)

    if context.additional_context:
        logger.debug(f"Additional context: {context.additional_context}")


def create_error_response(
    error: Exception,
    context: ErrorContext,
    diagnostics: Optional[Sequence["Diagnostic"]] = None,
) -> Dict[str, Any]:
    """
    Create standardized error response dictionary.

    Args:
        error: The exception that occurred
        context: Error context information
        diagnostics: Diagnostics collected before the error, if any

    Returns:
        JSON-ready dictionary with error information and diagnostics
    """
    error_response = {
        "success": False,
        "error": {
            "type": type(error).__name__,
            "message": str(error),
            "stage": context.stage,
            "timestamp": datetime.now().isoformat(),
        }
    }

    if context.file_name:
        error_response["error"]["file_name"] = context.file_name
    if context.format:
        error_response["error"]["format"] = context.format

    # Error-specific payloads
    if isinstance(error, UnexpectedPair):
        error_response["error"]["span"] = error.span.model_dump()
    elif isinstance(error, InvalidAction):
        error_response["error"]["token"] = error.token

    error_response["error"]["diagnostics"] = [
        diagnostic.model_dump(mode="json") for diagnostic in (diagnostics or ())
    ]

    # Add traceback for debugging (truncated)
    if error.__traceback__ is not None:
        tb_str = "".join(traceback.format_tb(error.__traceback__))
        # Truncate to last 500 chars to avoid huge error responses
        error_response["error"]["traceback"] = tb_str[-500:] if len(tb_str) > 500 else tb_str

    if context.additional_context:
        error_response["error"]["additional_context"] = context.additional_context

    return error_response


def handle_compile_error(
    error: Exception,
    context: ErrorContext,
    diagnostics: Optional[Sequence["Diagnostic"]] = None,
    log_level: str = "error",
    reraise: bool = False
) -> Dict[str, Any]:
    """
    Handle compile error with standardized logging and response creation.

    Args:
        error: The exception that occurred
        context: Error context information
        diagnostics: Diagnostics collected before the error, if any
        log_level: Log level ("error", "warning", "critical")
        reraise: If True, re-raise the exception after handling

    Returns:
        Error response dictionary

    Raises:
        CompileError: If reraise=True, wraps original error in CompileError
    """
    log_error_with_context(error, context, level=log_level)

    error_response = create_error_response(error, context, diagnostics=diagnostics)

    if reraise:
        compile_error = CompileError(
            message=str(error),
            context=context,
            original_exception=error,
            error_type=type(error).__name__
        )
        raise compile_error from error

    return error_response
