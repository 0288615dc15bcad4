from .base import AppError, DomainError, InfrastructureError, StorageError, ValidationError
from .http import handle_app_error, register_error_handler
from .validation import format_pydantic_errors, merge_errors

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "StorageError",
    "ValidationError",
    "format_pydantic_errors",
    "handle_app_error",
    "merge_errors",
    "register_error_handler",
]
