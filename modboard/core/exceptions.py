from __future__ import annotations


class AppError(Exception):
    def __init__(self, code: str, message: str, status_code: int = 400, details: dict | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found", details: dict | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationAppError(AppError):
    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=422, details=details)


class DatastoreError(AppError):
    def __init__(self, message: str = "Archive datastore is unavailable", details: dict | None = None) -> None:
        super().__init__(code="datastore_error", message=message, status_code=503, details=details)


class CacheRefreshError(AppError):
    def __init__(self, message: str = "Staff role snapshot is unavailable", details: dict | None = None) -> None:
        super().__init__(code="cache_refresh_failed", message=message, status_code=503, details=details)
