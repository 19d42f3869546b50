"""
Community service.

Posts and threaded comments of the learner community.
"""

import logging
from typing import List, Optional

from common.database.rest_client import RecordNotFoundError, RestClient
from academy.schemas.records import CommunityComment, CommunityPost

logger = logging.getLogger(__name__)

WITH_AUTHOR = "*, author:profiles(full_name, avatar_url)"


class CommunityService:
    """Handles community posts and comments."""

    def __init__(self, client: RestClient):
        self._client = client

    async def get_posts(self, limit: int = 20, offset: int = 0) -> List[CommunityPost]:
        """Posts with their author, newest first."""
        rows = await (
            self._client.table("community_posts")
            .select(WITH_AUTHOR)
            .order("created_at", ascending=False)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [CommunityPost.model_validate(row) for row in rows]

    async def create_post(
        self,
        user_id: str,
        title: str,
        content: str,
        post_type: str,
        images: Optional[List[str]] = None,
    ) -> CommunityPost:
        row = await (
            self._client.table("community_posts")
            .insert({
                "user_id": user_id,
                "title": title,
                "content": content,
                "post_type": post_type,
                "images": images or [],
            })
            .single()
        )
        logger.info(f"User {user_id} created {post_type} post")
        return CommunityPost.model_validate(row)

    async def get_post_with_comments(self, post_id: str) -> Optional[CommunityPost]:
        """A post with its author and comments in posting order; None when missing."""
        try:
            post_row = await (
                self._client.table("community_posts")
                .select(WITH_AUTHOR)
                .eq("id", post_id)
                .single()
            )
        except RecordNotFoundError:
            return None

        comment_rows = await (
            self._client.table("community_comments")
            .select(WITH_AUTHOR)
            .eq("post_id", post_id)
            .order("created_at")
            .execute()
        )

        post = CommunityPost.model_validate(post_row)
        post.comments = [CommunityComment.model_validate(row) for row in comment_rows]
        return post

    async def add_comment(
        self,
        user_id: str,
        post_id: str,
        content: str,
        parent_comment_id: Optional[str] = None,
    ) -> CommunityComment:
        row = await (
            self._client.table("community_comments")
            .insert({
                "user_id": user_id,
                "post_id": post_id,
                "content": content,
                "parent_comment_id": parent_comment_id,
            })
            .single()
        )
        logger.info(f"User {user_id} commented on post {post_id}")
        return CommunityComment.model_validate(row)
