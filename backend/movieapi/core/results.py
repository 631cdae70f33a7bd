from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from movieapi.core.enums import ServiceErrorType

T = TypeVar("T")

@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Tagged success/failure result returned by the auth service.

    Build instances with the factory classmethods only.
    """
    succeeded: bool
    data: Optional[T] = None
    errors: List[str] = field(default_factory=list)
    error_type: Optional[ServiceErrorType] = None

    @classmethod
    def success(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(succeeded=True, data=data)

    @classmethod
    def failed(cls, error_type: ServiceErrorType, *errors: str) -> "ServiceResult[T]":
        return cls(succeeded=False, errors=list(errors), error_type=error_type)

    @classmethod
    def validation_error(cls, errors: List[str]) -> "ServiceResult[T]":
        return cls.failed(ServiceErrorType.VALIDATION, *errors)

    @classmethod
    def unauthorized(cls, message: str) -> "ServiceResult[T]":
        return cls.failed(ServiceErrorType.UNAUTHORIZED, message)

    @classmethod
    def not_found(cls, message: str) -> "ServiceResult[T]":
        return cls.failed(ServiceErrorType.NOT_FOUND, message)

    @classmethod
    def internal_error(cls, message: str) -> "ServiceResult[T]":
        return cls.failed(ServiceErrorType.INTERNAL, message)
