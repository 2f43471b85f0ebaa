"""Service layer — business logic orchestration."""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base service exception."""


class NotFoundError(ServiceError):
    """Resource not found (-> HTTP 404)."""

    def __init__(self, resource: str, resource_id: Any = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        if resource_id is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} {resource_id} not found")


class ForbiddenError(ServiceError):
    """Caller does not own the resource (-> HTTP 401)."""

    def __init__(self, resource: str, resource_id: Any = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"not the owner of {resource} {resource_id}")


class ConflictError(ServiceError):
    """Business rule conflict (-> HTTP 409)."""


class ValidationError(ServiceError):
    """Input rejected by the schema or the store (-> HTTP 422)."""


class AuthenticationError(ServiceError):
    """Authentication failure (-> HTTP 401)."""


class UnknownError(ServiceError):
    """Unexpected store failure (-> HTTP 500)."""
