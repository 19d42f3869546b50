"""
Community services.
"""

from academy.services.community.community_service import CommunityService

__all__ = ["CommunityService"]
