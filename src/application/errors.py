from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class AlreadyExists(ConflictError):
    code = "already_exists"


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class SerializationError(InfrastructureError):
    code = "serialization_error"


class DeserializationError(InfrastructureError):
    code = "deserialization_error"


class StorageError(InfrastructureError):
    code = "storage_error"
