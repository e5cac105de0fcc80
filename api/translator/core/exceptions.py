"""
HTTP-facing exceptions for the Frequency Translator API.

Services raise plain domain exceptions (StoreError, ProfileDecodeError);
routes translate them into the classes below, which carry a status code and
a stable error code for the JSON error envelope.
"""

from typing import Optional

from fastapi import HTTPException, status

# Storage operations reported in error codes; anything else becomes UNKNOWN
_STORAGE_OPERATIONS = frozenset({"read", "write", "delete"})


class BaseAppException(HTTPException):
    """HTTPException with a machine-readable error code."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code or type(self).__name__


class ResourceNotFoundError(BaseAppException):
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            status.HTTP_404_NOT_FOUND,
            error_code="RESOURCE_NOT_FOUND",
        )


class LanguageProfileNotFoundError(ResourceNotFoundError):
    """No profile is loaded for the requested language code."""

    def __init__(self, lang_code: str):
        super().__init__("Language profile", lang_code)


class ValidationError(BaseAppException):
    """Request passed schema validation but is semantically unusable."""

    def __init__(self, detail: str, field: Optional[str] = None):
        code = "VALIDATION_ERROR"
        if field:
            code = f"{code}_{field.upper()}"
        super().__init__(detail, status.HTTP_422_UNPROCESSABLE_ENTITY, error_code=code)


class StorageError(BaseAppException):
    """The profile or translation database rejected an operation."""

    def __init__(self, detail: str, operation: str):
        op = operation.lower()
        op_code = op.upper() if op in _STORAGE_OPERATIONS else "UNKNOWN"
        super().__init__(
            f"Storage {op} failed: {detail}",
            error_code=f"STORAGE_{op_code}_ERROR",
        )


class ServiceUnavailableError(BaseAppException):
    """A service attached during startup is not (or no longer) available."""

    def __init__(self, service_name: str):
        super().__init__(
            f"{service_name} is not available",
            status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="SERVICE_UNAVAILABLE",
        )
