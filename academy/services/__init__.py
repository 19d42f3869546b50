"""
Academy services.

Each service takes the backend client in its constructor.
"""

from academy.services.auth import AuthService
from academy.services.user import ProfileService, PreferencesService
from academy.services.courses import CourseService, EnrollmentService, ProgressService, QuizService
from academy.services.bot import BotService
from academy.services.sessions import LiveSessionService
from academy.services.community import CommunityService
from academy.services.notifications import NotificationService
from academy.services.telegram import TelegramService
from academy.services.challenge import ChallengeService

__all__ = [
    "AuthService",
    "ProfileService",
    "PreferencesService",
    "CourseService",
    "EnrollmentService",
    "ProgressService",
    "QuizService",
    "BotService",
    "LiveSessionService",
    "CommunityService",
    "NotificationService",
    "TelegramService",
    "ChallengeService",
]
