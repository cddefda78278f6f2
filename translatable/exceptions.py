"""
Exception classes for translatable models

Configuration problems and mass-assignment violations raise one of the
exceptions below. Missing translations are never errors (they resolve to
``None``) and persistence failures surface as a ``False`` save result.
"""

from typing import Any

from fastapi import status


class TranslatableException(Exception):
    """Base exception class for all translatable-related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class TranslatableConfigError(TranslatableException):
    """Raised when locale or model configuration is invalid"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details or {})


class LocalesNotDefinedError(TranslatableConfigError):
    """Raised when the supported locale list is empty"""

    def __init__(
        self,
        message: str = "No locales are configured. Set LOCALES (e.g. '[\"en\", \"fr\"]') in the environment or .env file.",
    ):
        super().__init__(message=message)


class ModelNotTranslatableError(TranslatableConfigError):
    """Raised when a model was never registered as translatable"""

    def __init__(self, model_name: str):
        super().__init__(
            message=f"Model '{model_name}' is not registered as translatable",
            details={"model": model_name},
        )


# ============================================================================
# Assignment Exceptions
# ============================================================================


class MassAssignmentError(TranslatableException):
    """Raised when fill() receives a guarded attribute in strict mode"""

    def __init__(self, key: str):
        super().__init__(
            message=f"Mass assignment of '{key}' is not allowed",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"key": key},
        )
