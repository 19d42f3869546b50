"""
Request-level auth helpers.
"""

from academy.middleware.auth import AuthStateResolver

__all__ = ["AuthStateResolver"]
