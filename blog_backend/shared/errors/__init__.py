from .base import (
    INTERNAL_ERROR_MESSAGE,
    AppError,
    DomainError,
    InfrastructureError,
    RateLimitedError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "AppError",
    "DomainError",
    "InfrastructureError",
    "RateLimitedError",
    "StoreError",
    "UnauthorizedError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
