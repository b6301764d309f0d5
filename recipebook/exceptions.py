"""
Recipebook exceptions.

Every failure raised by the services is a RecipeBookError subclass. The
class decides how the HTTP layer reports it:

    ValidationError  -> 400  missing or invalid field
    NotFoundError    -> 404  recipe, category or ingredient id unresolved
    ConflictError    -> 409  operation not allowed in the current state

None of them are retried.
"""

from typing import Any


class RecipeBookError(Exception):
    """
    Base exception for all recipebook errors.

    Usage:
        raise ConflictError("archived recipes cannot be edited", recipe_id=rid)

    Attributes:
        message: Human readable message, returned to API callers as-is
        details: Additional context as keyword arguments
    """

    status_code = 400

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details = details
        super().__init__(message)

    def as_dict(self) -> dict:
        """Return error as dictionary for API responses."""
        return {"detail": self.message, **self.details}

    def __str__(self) -> str:
        return self.message


class ValidationError(RecipeBookError):
    status_code = 400


class NotFoundError(RecipeBookError):
    status_code = 404


class ConflictError(RecipeBookError):
    status_code = 409
