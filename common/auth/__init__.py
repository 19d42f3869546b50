"""
Authentication module - Pluggable auth providers (hosted service, local JWT).
"""

from common.auth.base import AuthProvider
from common.auth.jwt_auth import JWTAuth
from common.auth.supabase_auth import SupabaseAuth
from common.auth.dependencies import (
    create_auth_dependency,
    create_optional_auth_dependency,
    extract_bearer_token,
)

__all__ = [
    "AuthProvider",
    "JWTAuth",
    "SupabaseAuth",
    "create_auth_dependency",
    "create_optional_auth_dependency",
    "extract_bearer_token",
]
