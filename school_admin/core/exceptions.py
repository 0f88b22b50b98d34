from typing import Any, Dict, Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.field = field
        self.value = value
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        """Structured error body: {error, field?, value?, details?}."""
        payload: Dict[str, Any] = {"error": self.message}
        if self.field is not None:
            payload["field"] = self.field
        if self.value is not None:
            payload["value"] = self.value
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(ServiceError):
    """Missing or invalid input; names the offending field(s)."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None, details: Optional[str] = None) -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST, field=field, value=value, details=details)


class NotFoundError(ServiceError):
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND, field=field, value=value)


class StoreConnectionError(ServiceError):
    """Store unreachable or pool exhausted."""

    def __init__(self, message: str = "store unavailable") -> None:
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class ConstraintError(ValidationError):
    """Foreign-key or uniqueness violation reported by the store."""

    def __init__(self, message: str, relation: Optional[str] = None) -> None:
        super().__init__(message, field=relation)
        self.relation = relation
