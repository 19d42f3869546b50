"""
Academy API Routers.

All routers are imported here for easy access.
"""

from academy.routers.site import router as site_router
from academy.routers.quiz import router as quiz_router
from academy.routers.funnel import router as funnel_router
from academy.routers.challenge import router as challenge_router
from academy.routers.auth import router as auth_router
from academy.routers.profile import router as profile_router
from academy.routers.learning import router as learning_router
from academy.routers.members import router as members_router
from academy.routers.pages import router as pages_router

__all__ = [
    "site_router",
    "quiz_router",
    "funnel_router",
    "challenge_router",
    "auth_router",
    "profile_router",
    "learning_router",
    "members_router",
    "pages_router",
]
