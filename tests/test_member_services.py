"""Unit tests for bot, live session, community, notification and Telegram services."""

import re

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from common.database import DuplicateRecordError, RecordNotFoundError
from common.utils import ConflictException, NotFoundException
from academy.services import (
    BotService,
    CommunityService,
    LiveSessionService,
    NotificationService,
    TelegramService,
)
from academy.services.bot.bot_service import generate_license_key
from academy.tiers import Tier
from tests.conftest import make_query


NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


# ─────────────────────────────────────────────────────────────────
# BotService
# ─────────────────────────────────────────────────────────────────


class TestBotService:
    def test_license_key_format(self):
        for _ in range(20):
            assert re.fullmatch(r"[A-Z0-9]{4}(-[A-Z0-9]{4}){3}", generate_license_key())

    @pytest.mark.asyncio
    async def test_generates_key_when_missing(self, mock_client, tables, sample_user_id):
        tables["bot_licenses"] = make_query(single={
            "id": "b1", "user_id": sample_user_id, "license_key": "ABCD-EFGH-1234-5678", "status": "active",
        })

        await BotService(mock_client).create_bot_license(sample_user_id)

        inserted = tables["bot_licenses"].insert.call_args[0][0]
        assert re.fullmatch(r"[A-Z0-9]{4}(-[A-Z0-9]{4}){3}", inserted["license_key"])
        assert inserted["status"] == "active"
        assert inserted["activated_at"]

    @pytest.mark.asyncio
    async def test_keeps_given_key(self, mock_client, tables, sample_user_id):
        tables["bot_licenses"] = make_query(single={
            "id": "b1", "user_id": sample_user_id, "license_key": "AAAA-BBBB-CCCC-DDDD", "status": "active",
        })

        bot_license = await BotService(mock_client).create_bot_license(sample_user_id, "AAAA-BBBB-CCCC-DDDD")

        assert tables["bot_licenses"].insert.call_args[0][0]["license_key"] == "AAAA-BBBB-CCCC-DDDD"
        assert bot_license.status == "active"

    @pytest.mark.asyncio
    async def test_licenses_newest_first(self, mock_client, tables, sample_user_id):
        tables["bot_licenses"] = make_query(rows=[])
        await BotService(mock_client).get_user_bot_licenses(sample_user_id)
        tables["bot_licenses"].order.assert_called_once_with("created_at", ascending=False)


# ─────────────────────────────────────────────────────────────────
# LiveSessionService
# ─────────────────────────────────────────────────────────────────


class TestLiveSessionService:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tier, visible",
        [
            (Tier.ELITE, ("academy", "elite")),
            (Tier.ACADEMY, ("academy",)),
            (Tier.STARTER, ("academy",)),
        ],
    )
    async def test_upcoming_filtered_by_tier(self, mock_client, tables, tier, visible):
        tables["live_sessions"] = make_query(rows=[{
            "id": "s1", "title": "Marktanalyse live", "tier_required": "academy",
            "scheduled_at": (NOW + timedelta(days=1)).isoformat(),
        }])

        sessions = await LiveSessionService(mock_client).get_upcoming_sessions(tier, now=NOW)

        query = tables["live_sessions"]
        assert sessions[0].title == "Marktanalyse live"
        query.gte.assert_called_once_with("scheduled_at", NOW.isoformat())
        query.eq.assert_called_once_with("status", "scheduled")
        query.in_.assert_called_once_with("tier_required", visible)
        query.order.assert_called_once_with("scheduled_at")

    @pytest.mark.asyncio
    async def test_register_twice(self, mock_client, tables, sample_user_id):
        tables["session_registrations"] = make_query()
        tables["session_registrations"].single = AsyncMock(side_effect=DuplicateRecordError("dup", status_code=409))

        with pytest.raises(ConflictException) as exc:
            await LiveSessionService(mock_client).register_for_session(sample_user_id, "s1")
        assert exc.value.code == "ALREADY_REGISTERED"


# ─────────────────────────────────────────────────────────────────
# CommunityService
# ─────────────────────────────────────────────────────────────────


class TestCommunityService:
    @pytest.mark.asyncio
    async def test_posts_page(self, mock_client, tables):
        tables["community_posts"] = make_query(rows=[{
            "id": "p1", "user_id": "u1", "title": "Mein erster Trade", "content": "...",
            "author": {"full_name": "Lena Weber", "avatar_url": None},
        }])

        posts = await CommunityService(mock_client).get_posts(limit=10, offset=20)

        assert posts[0].author.full_name == "Lena Weber"
        tables["community_posts"].range.assert_called_once_with(20, 29)
        tables["community_posts"].order.assert_called_once_with("created_at", ascending=False)

    @pytest.mark.asyncio
    async def test_post_with_comments(self, mock_client, tables):
        tables["community_posts"] = make_query(single={"id": "p1", "user_id": "u1", "title": "T", "content": "C"})
        tables["community_comments"] = make_query(rows=[
            {"id": "k1", "post_id": "p1", "user_id": "u2", "content": "Gut gemacht"},
        ])

        post = await CommunityService(mock_client).get_post_with_comments("p1")

        assert [c.id for c in post.comments] == ["k1"]
        tables["community_comments"].order.assert_called_once_with("created_at")

    @pytest.mark.asyncio
    async def test_missing_post(self, mock_client, tables):
        tables["community_posts"] = make_query()
        tables["community_posts"].single = AsyncMock(side_effect=RecordNotFoundError())
        assert await CommunityService(mock_client).get_post_with_comments("nope") is None

    @pytest.mark.asyncio
    async def test_reply_keeps_parent(self, mock_client, tables, sample_user_id):
        tables["community_comments"] = make_query(single={
            "id": "k2", "post_id": "p1", "user_id": sample_user_id, "content": "Danke", "parent_comment_id": "k1",
        })

        comment = await CommunityService(mock_client).add_comment(sample_user_id, "p1", "Danke", parent_comment_id="k1")

        assert comment.parent_comment_id == "k1"
        assert tables["community_comments"].insert.call_args[0][0]["parent_comment_id"] == "k1"

    @pytest.mark.asyncio
    async def test_create_post_defaults_images(self, mock_client, tables, sample_user_id):
        tables["community_posts"] = make_query(single={
            "id": "p2", "user_id": sample_user_id, "title": "Setup", "content": "Chart", "post_type": "setup_share",
        })

        await CommunityService(mock_client).create_post(sample_user_id, "Setup", "Chart", "setup_share")

        assert tables["community_posts"].insert.call_args[0][0]["images"] == []


# ─────────────────────────────────────────────────────────────────
# NotificationService
# ─────────────────────────────────────────────────────────────────


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_recent_first_with_limit(self, mock_client, tables, sample_user_id):
        tables["notifications"] = make_query(rows=[{
            "id": "n1", "user_id": sample_user_id, "title": "Neue Lektion", "message": "...",
            "notification_type": "new_lesson",
        }])

        items = await NotificationService(mock_client).get_notifications(sample_user_id, limit=5)

        assert items[0].notification_type == "new_lesson"
        tables["notifications"].limit.assert_called_once_with(5)

    @pytest.mark.asyncio
    async def test_mark_as_read_scoped_to_owner(self, mock_client, tables, sample_user_id):
        tables["notifications"] = make_query(single={
            "id": "n1", "user_id": sample_user_id, "title": "T", "message": "M", "is_read": True,
        })

        notification = await NotificationService(mock_client).mark_as_read(sample_user_id, "n1")

        assert notification.is_read
        values = tables["notifications"].update.call_args[0][0]
        assert values["is_read"] is True
        assert values["read_at"]
        tables["notifications"].eq.assert_any_call("user_id", sample_user_id)

    @pytest.mark.asyncio
    async def test_mark_foreign_notification(self, mock_client, tables, sample_user_id):
        tables["notifications"] = make_query()
        tables["notifications"].single = AsyncMock(side_effect=RecordNotFoundError())

        with pytest.raises(NotFoundException):
            await NotificationService(mock_client).mark_as_read(sample_user_id, "n9")

    @pytest.mark.asyncio
    async def test_unread_count(self, mock_client, tables, sample_user_id):
        tables["notifications"] = make_query(count=3)
        assert await NotificationService(mock_client).get_unread_count(sample_user_id) == 3
        tables["notifications"].eq.assert_any_call("is_read", False)


# ─────────────────────────────────────────────────────────────────
# TelegramService
# ─────────────────────────────────────────────────────────────────


def quota_row(tier, used, reset_at):
    return {
        "id": "u1",
        "email": "lena@example.com",
        "tier": tier,
        "telegram_queries_today": used,
        "telegram_queries_reset_at": reset_at.isoformat() if reset_at else None,
    }


class TestTelegramRateLimit:
    @pytest.mark.asyncio
    async def test_no_profile(self, mock_client, tables):
        tables["profiles"] = make_query(maybe_single=None)
        assert not await TelegramService(mock_client).check_rate_limit("u1", now=NOW)
        tables["profiles"].update.assert_not_called()

    @pytest.mark.asyncio
    async def test_first_query_starts_window(self, mock_client, tables):
        tables["profiles"] = make_query(maybe_single=quota_row("starter", 0, None))

        assert await TelegramService(mock_client).check_rate_limit("u1", now=NOW)

        tables["profiles"].update.assert_called_once_with({
            "telegram_queries_today": 1,
            "telegram_queries_reset_at": NOW.isoformat(),
        })

    @pytest.mark.asyncio
    async def test_window_expired_resets_counter(self, mock_client, tables):
        tables["profiles"] = make_query(maybe_single=quota_row("starter", 10, NOW - timedelta(hours=24)))

        assert await TelegramService(mock_client).check_rate_limit("u1", now=NOW)

        assert tables["profiles"].update.call_args[0][0]["telegram_queries_today"] == 1

    @pytest.mark.asyncio
    async def test_starter_at_limit(self, mock_client, tables):
        tables["profiles"] = make_query(maybe_single=quota_row("starter", 10, NOW - timedelta(hours=3)))

        assert not await TelegramService(mock_client).check_rate_limit("u1", now=NOW)
        tables["profiles"].update.assert_not_called()

    @pytest.mark.asyncio
    async def test_starter_below_limit_increments(self, mock_client, tables):
        tables["profiles"] = make_query(maybe_single=quota_row("starter", 9, NOW - timedelta(hours=3)))

        assert await TelegramService(mock_client).check_rate_limit("u1", now=NOW)
        tables["profiles"].update.assert_called_once_with({"telegram_queries_today": 10})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tier", ["academy", "elite"])
    async def test_paid_tiers_unlimited(self, mock_client, tables, tier):
        tables["profiles"] = make_query(maybe_single=quota_row(tier, 500, NOW - timedelta(hours=1)))
        assert await TelegramService(mock_client).check_rate_limit("u1", now=NOW)

    @pytest.mark.asyncio
    async def test_naive_reset_time_is_utc(self, mock_client, tables):
        row = quota_row("starter", 10, None)
        row["telegram_queries_reset_at"] = (NOW - timedelta(hours=2)).replace(tzinfo=None).isoformat()
        tables["profiles"] = make_query(maybe_single=row)

        assert not await TelegramService(mock_client).check_rate_limit("u1", now=NOW)

    def test_daily_limits(self, mock_client):
        service = TelegramService(mock_client, starter_daily_limit=5)
        assert service.daily_limit(Tier.STARTER) == 5
        assert service.daily_limit(Tier.ACADEMY) is None
        assert service.daily_limit(Tier.ELITE) is None
