"""Standardized error handling utilities.

Provides consistent error logging and error responses for compile failures.
"""

from .handlers import (
    handle_compile_error,
    CompileError,
    ErrorContext,
    log_error_with_context,
    create_error_response,
)

__all__ = [
    "handle_compile_error",
    "CompileError",
    "ErrorContext",
    "log_error_with_context",
    "create_error_response",
]
