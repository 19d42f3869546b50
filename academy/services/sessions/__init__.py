"""
Live session services.
"""

from academy.services.sessions.live_session_service import LiveSessionService

__all__ = ["LiveSessionService"]
