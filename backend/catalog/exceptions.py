"""
Library Catalog Backend — Custom Exception Hierarchy
======================================================

What:  Application-specific exceptions for failures that abort a request.
How:   Each exception carries a user-safe message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       rendered error pages with the matching HTTP status code.
Who:   Raised by repositories and services; caught by global handlers.

Exception Hierarchy:
    CatalogError (base)
    ├── NotFoundError   → 404 Not Found
    └── DatabaseError   → 500 Internal Server Error

Form validation failures and blocked deletes are not exceptions: they are
recovered inside the request by re-rendering the form or confirmation page.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  User-facing error description (safe to render)
        context:  Additional debug info (logged but NOT rendered)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(CatalogError):
    """
    Raised when a requested record does not exist.

    When:    GET /catalog/authors/{id} or its update form with an unknown id,
             or an update whose target row disappeared before the write.
    HTTP:    404 Not Found

    The ORM returns None for missing records; the service layer converts that
    into this exception so the route never renders a page for a missing author.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(CatalogError):
    """
    Raised when a data-accessor operation fails unexpectedly.

    When:    Connection lost mid-query, constraint violation, driver error.
    HTTP:    500 Internal Server Error

    The rendered message is always generic; the original error type and the
    operation are kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
