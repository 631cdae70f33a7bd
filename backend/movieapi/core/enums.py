from enum import Enum

class CommentOperationResult(str, Enum):
    """Outcome of a comment mutation"""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION_ERROR = "validation_error"
    ERROR = "error"

class ServiceErrorType(str, Enum):
    """Failure category carried by a ServiceResult"""
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"
