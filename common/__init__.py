"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across projects
built on a hosted backend-as-a-service:

- database: Async REST client for the hosted tables
- auth: Pluggable authentication (hosted auth service, local JWT)
- utils: Standard responses, exceptions, password validation
- config: Base settings class
"""

from common.database import RestClient, BackendError, BackendUnavailableError
from common.auth import AuthProvider, JWTAuth, SupabaseAuth, create_auth_dependency
from common.utils import (
    success_response,
    error_response,
    APIException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    validate_password,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "RestClient",
    "BackendError",
    "BackendUnavailableError",
    # Auth
    "AuthProvider",
    "JWTAuth",
    "SupabaseAuth",
    "create_auth_dependency",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    "validate_password",
    # Config
    "BaseAppSettings",
]
