"""Shared test fixtures for academy backend tests."""

import uuid

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock


# QueryBuilder methods that return the builder itself
CHAIN_METHODS = (
    "select", "insert", "update", "upsert", "delete", "auth",
    "eq", "neq", "gte", "lte", "in_", "or_", "ilike_any",
    "order", "limit", "range",
)


def make_query(rows=None, single=None, maybe_single=None, count=0):
    """
    A stand-in for QueryBuilder.

    Filter/modifier calls return the same mock so chains can be asserted on;
    the awaited terminals return the given values.
    """
    query = MagicMock()
    for name in CHAIN_METHODS:
        getattr(query, name).return_value = query
    query.execute = AsyncMock(return_value=rows if rows is not None else [])
    query.single = AsyncMock(return_value=single)
    query.maybe_single = AsyncMock(return_value=maybe_single)
    query.count = AsyncMock(return_value=count)
    return query


@pytest.fixture
def tables():
    """Table name -> query mock; tests put prepared queries in here."""
    return {}


@pytest.fixture
def mock_client(tables):
    client = MagicMock()

    def table(name):
        if name not in tables:
            tables[name] = make_query()
        return tables[name]

    client.table = MagicMock(side_effect=table)
    return client


@pytest.fixture
def sample_user_id():
    return str(uuid.uuid4())


@pytest.fixture
def sample_profile_row(sample_user_id):
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": sample_user_id,
        "email": "lena@example.com",
        "full_name": "Lena Weber",
        "tier": "academy",
        "telegram_user_id": None,
        "telegram_queries_today": 0,
        "telegram_queries_reset_at": None,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_course_row():
    return {
        "id": "course-1",
        "title": "Forex Grundlagen",
        "slug": "forex-grundlagen",
        "description": "Alles was du für den Start brauchst",
        "tier_required": "starter",
        "level": "beginner",
        "duration_minutes": 95,
        "order_index": 1,
        "is_published": True,
        "total_videos": 12,
        "total_quizzes": 2,
        "category": {"name": "Basics", "slug": "basics", "icon": "book"},
    }
