"""
Utilities module - Common helpers for API responses, exceptions, and validation.
"""

from common.utils.responses import success_response, error_response, list_response, to_jsonable
from common.utils.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    ValidationException,
    RateLimitException,
    NotImplementedException,
    ServiceUnavailableException,
)
from common.utils.password import validate_password, password_strength

__all__ = [
    "success_response",
    "error_response",
    "list_response",
    "to_jsonable",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
    "RateLimitException",
    "NotImplementedException",
    "ServiceUnavailableException",
    "validate_password",
    "password_strength",
]
