"""
5-day challenge services.
"""

from academy.services.challenge.challenge_service import ChallengeService

__all__ = ["ChallengeService"]
