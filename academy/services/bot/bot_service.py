"""
Bot license service.
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import List, Optional

from common.database.rest_client import RestClient
from academy.schemas.records import BotLicense

logger = logging.getLogger(__name__)

LICENSE_KEY_ALPHABET = string.ascii_uppercase + string.digits


def generate_license_key(segments: int = 4, segment_length: int = 4) -> str:
    """Random key like "AB12-CD34-EF56-GH78"."""
    return "-".join(
        "".join(secrets.choice(LICENSE_KEY_ALPHABET) for _ in range(segment_length))
        for _ in range(segments)
    )


class BotService:
    """Issues and lists bot licenses."""

    def __init__(self, client: RestClient):
        self._client = client

    async def create_bot_license(self, user_id: str, license_key: Optional[str] = None) -> BotLicense:
        """
        Issue an active license.

        Args:
            user_id: License owner
            license_key: Key to store; a new one is generated when omitted

        Returns:
            The stored license
        """
        row = await (
            self._client.table("bot_licenses")
            .insert({
                "user_id": user_id,
                "license_key": license_key or generate_license_key(),
                "status": "active",
                "activated_at": datetime.now(timezone.utc).isoformat(),
            })
            .single()
        )
        logger.info(f"Issued bot license for user {user_id}")
        return BotLicense.model_validate(row)

    async def get_user_bot_licenses(self, user_id: str) -> List[BotLicense]:
        rows = await (
            self._client.table("bot_licenses")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", ascending=False)
            .execute()
        )
        return [BotLicense.model_validate(row) for row in rows]
