"""
Authentication services.

Account operations against the hosted auth service.
"""

from academy.services.auth.auth_service import AuthService

__all__ = ["AuthService"]
