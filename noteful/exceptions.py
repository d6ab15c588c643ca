"""
Noteful API: Exception Hierarchy
=================================

What:  Application exceptions, one class per client-visible failure mode.
How:   Services raise them; handlers registered in `noteful.main` turn each
       class into a status code and a JSON error body.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError            → 400 Bad Request
    ├── InvalidReferenceError      → 400 Bad Request
    │   ├── InvalidFolderError
    │   └── InvalidTagError
    ├── AuthenticationError        → 401 Unauthorized
    ├── NotFoundError              → 404 Not Found
    ├── ConflictError              → 409 Conflict
    ├── RateLimitExceededError     → 429 Too Many Requests
    └── DatabaseError              → 500 Internal Server Error

Anything that is not a NotefulError (driver errors, bugs) reaches the
catch-all handler and becomes a generic 500.
"""

from typing import Any, Dict, List, Optional


class NotefulError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing description, safe to return in a response
        context:  Structured details; returned as `details` for 4xx errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """Client input is missing or malformed (missing title, bad id, short password)."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidReferenceError(NotefulError):
    """
    A write referenced a folder or tag that does not exist or belongs to
    another user. The two cases are deliberately indistinguishable.
    """

    def __init__(self, message: str, field: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidFolderError(InvalidReferenceError):
    def __init__(self, folder_id: Optional[str] = None):
        ctx = {"folder_id": folder_id} if folder_id else {}
        super().__init__("The folder is not valid", field="folderId", context=ctx)
        self.folder_id = folder_id


class InvalidTagError(InvalidReferenceError):
    def __init__(self, tag_ids: Optional[List[str]] = None):
        ctx = {"tag_ids": tag_ids} if tag_ids else {}
        super().__init__("The tag is not valid", field="tags", context=ctx)
        self.tag_ids = tag_ids or []


class AuthenticationError(NotefulError):
    """
    The request carries no usable identity: no bearer token, a bad or expired
    token, or wrong login credentials.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NotefulError):
    """
    No resource owned by the requester matches.

    Foreign-owned ids raise this too, so existence of other users' data
    never leaks.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(NotefulError):
    """A unique constraint would be violated (username, folder or tag name)."""

    def __init__(
        self,
        message: str = "The resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class RateLimitExceededError(NotefulError):
    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(NotefulError):
    """
    A database operation failed in a way the service recognised.

    The response message is always generic; `context` is logged only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
