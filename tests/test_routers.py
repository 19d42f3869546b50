"""HTTP tests for the API routers with services replaced by mocks."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

import academy.dependencies as deps
from api import app
from common.database import BackendUnavailableError
from common.utils import ConflictException
from academy.middleware import AuthStateResolver
from academy.schemas.records import (
    ChallengeRegistration,
    Course,
    CourseDetails,
    CourseModule,
    DashboardStats,
    Enrollment,
    Lesson,
    LiveSession,
    Profile,
    UserPreferences,
)


USER = {"user_id": "u-1", "email": "lena@example.com", "claims": {}, "token": "access-token"}


def profile(tier):
    return Profile(id="u-1", email="lena@example.com", tier=tier)


@pytest.fixture
def profile_service(monkeypatch):
    service = MagicMock()
    service.get_profile = AsyncMock(return_value=profile("starter"))
    monkeypatch.setattr(deps, "_profile_service", service)
    monkeypatch.setattr(deps, "_auth_state_resolver", AuthStateResolver(service))
    return service


@pytest.fixture
def caller():
    """Mutable holder for the identity the optional auth dependency yields."""
    return {"user": None}


@pytest.fixture
def client(profile_service, caller):
    app.dependency_overrides[deps.optional_auth] = lambda: caller["user"]
    app.dependency_overrides[deps.require_auth] = lambda: USER
    yield TestClient(app)
    app.dependency_overrides.clear()


MOCK_KWARGS = {"side_effect", "return_value"}


def mock_service(monkeypatch, name, **methods):
    """
    Swap a service singleton for a MagicMock with awaitable methods.

    A value is the method's return value, unless it is a dict whose keys are
    only side_effect/return_value, which is passed to AsyncMock as-is.
    """
    service = MagicMock()
    for method, value in methods.items():
        if isinstance(value, dict) and value and set(value) <= MOCK_KWARGS:
            setattr(service, method, AsyncMock(**value))
        else:
            setattr(service, method, AsyncMock(return_value=value))
    monkeypatch.setattr(deps, name, service)
    return service


# ─────────────────────────────────────────────────────────────────
# Public site
# ─────────────────────────────────────────────────────────────────


class TestSiteRoutes:
    def test_navigation(self, client):
        response = client.get("/api/site/navigation", params={"path": "/bot", "scrollY": 40})
        data = response.json()["data"]
        assert response.status_code == 200
        assert data["scrolled"] is True
        assert [link["href"] for link in data["links"] if link["active"]] == ["/bot"]

    def test_pricing_for_visitor(self, client):
        data = client.get("/api/site/pricing").json()["data"]
        assert [tier["id"] for tier in data["tiers"]] == ["starter", "academy", "elite"]
        assert data["selectPlanHref"] == "/academy/register"

    def test_pricing_for_member(self, client, caller):
        caller["user"] = USER
        assert client.get("/api/site/pricing").json()["data"]["selectPlanHref"] is None

    def test_quiz_teaser(self, client):
        assert client.get("/api/site/quiz-teaser", params={"elapsed": 4.5}).json()["data"]["current"] == 2

    def test_challenge_day(self, client):
        assert client.get("/api/site/challenge/days/2").json()["data"]["day"] == 2
        assert client.get("/api/site/challenge/days/9").status_code == 404

    def test_health(self, client):
        assert client.get("/health").json()["data"]["status"] == "ok"


class TestQuizRoutes:
    def test_questions(self, client):
        body = client.get("/api/quiz/questions").json()
        assert body["count"] == 12

    def test_evaluate(self, client):
        response = client.post("/api/quiz/evaluate", json={
            "answers": {"2": "year_plus", "5": "correct", "11": "500_plus"},
            "contact": {"name": "Max", "email": "max@example.com"},
        })
        data = response.json()["data"]
        assert data["score"] == 60
        assert data["level"] == "erfahren"
        assert data["recommendation"] == {"primary": "elite", "secondary": "academy"}

    def test_evaluate_rejects_list_for_single_choice(self, client):
        response = client.post("/api/quiz/evaluate", json={"answers": {"2": ["months"]}})
        assert response.status_code == 422

    def test_evaluate_accepts_multi_choice_lists(self, client):
        response = client.post("/api/quiz/evaluate", json={"answers": {"2": "months", "9": ["books", "videos"]}})
        assert response.status_code == 200
        assert response.json()["data"]["score"] == 25

    def test_progress(self, client):
        assert client.get("/api/quiz/progress", params={"current": 6}).json()["data"]["percentage"] == 50.0

    def test_capital_label(self, client):
        assert client.get("/api/quiz/capital-label", params={"value": 12500}).json()["data"]["label"] == "€12.500"


class TestChallengeRoutes:
    def test_register(self, client, monkeypatch):
        service = mock_service(
            monkeypatch, "_challenge_service",
            register=ChallengeRegistration(email="max@example.com", full_name="Max Muster"),
        )

        response = client.post("/api/challenge/register", json={"fullName": " Max Muster ", "email": "MAX@example.com"})

        assert response.status_code == 200
        assert response.json()["data"] == {"email": "max@example.com", "currentDay": 1, "completedDays": []}
        service.register.assert_awaited_once_with("Max Muster", "max@example.com")

    def test_register_rejects_short_name(self, client, monkeypatch):
        mock_service(monkeypatch, "_challenge_service")
        response = client.post("/api/challenge/register", json={"fullName": "M", "email": "max@example.com"})
        assert response.status_code == 422

    def test_complete_day(self, client, monkeypatch):
        service = mock_service(
            monkeypatch, "_challenge_service",
            mark_day_complete=ChallengeRegistration(
                email="max@example.com", full_name="Max", completed_days=[1], current_day=2
            ),
        )

        data = client.post("/api/challenge/complete-day", json={"email": "max@example.com", "day": 1}).json()["data"]

        assert data["currentDay"] == 2
        service.mark_day_complete.assert_awaited_once_with("max@example.com", 1)


# ─────────────────────────────────────────────────────────────────
# Auth
# ─────────────────────────────────────────────────────────────────


class TestAuthRoutes:
    def test_login(self, client, monkeypatch):
        mock_service(monkeypatch, "_auth_service", sign_in={
            "access_token": "at", "refresh_token": "rt", "expires_in": 3600,
            "token_type": "bearer", "user": {"id": "u-1"},
        })

        data = client.post("/api/auth/login", json={"email": "lena@example.com", "password": "x"}).json()["data"]

        assert data["session"]["accessToken"] == "at"
        assert data["user"] == {"id": "u-1"}

    def test_register_password_mismatch(self, client, monkeypatch):
        mock_service(monkeypatch, "_auth_service")
        response = client.post("/api/auth/register", json={
            "fullName": "Lena", "email": "lena@example.com",
            "password": "StrongPass1", "passwordConfirm": "StrongPass2", "acceptTerms": True,
        })
        assert response.status_code == 422

    def test_register_existing_email(self, client, monkeypatch):
        mock_service(monkeypatch, "_auth_service", sign_up={
            "side_effect": ConflictException("Email already registered", code="EMAIL_EXISTS"),
        })
        response = client.post("/api/auth/register", json={
            "fullName": "Lena", "email": "lena@example.com",
            "password": "StrongPass1", "passwordConfirm": "StrongPass1", "acceptTerms": True,
        })
        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "EMAIL_EXISTS"

    def test_logout_uses_token(self, client, monkeypatch):
        service = mock_service(monkeypatch, "_auth_service", sign_out=None)
        assert client.post("/api/auth/logout").status_code == 200
        service.sign_out.assert_awaited_once_with("access-token")

    def test_me_anonymous(self, client):
        assert client.get("/api/auth/me").json()["data"] == {"user": None, "profile": None, "loading": False}

    def test_me_signed_in(self, client, caller):
        caller["user"] = USER
        data = client.get("/api/auth/me").json()["data"]
        assert data["user"] == {"id": "u-1", "email": "lena@example.com"}
        assert data["profile"]["tier"] == "starter"

    def test_me_loading(self, client, caller, profile_service):
        caller["user"] = USER
        profile_service.get_profile.side_effect = BackendUnavailableError()
        assert client.get("/api/auth/me").json()["data"]["loading"] is True

    def test_password_strength(self, client):
        data = client.post("/api/auth/password-strength", json={"password": "abcdefgh"}).json()["data"]
        assert data["strength"] == 2
        assert data["valid"] is False


# ─────────────────────────────────────────────────────────────────
# Guarded API routes
# ─────────────────────────────────────────────────────────────────


class TestTierGuards:
    def test_anonymous_gets_401_with_redirect(self, client):
        response = client.get("/api/dashboard")
        assert response.status_code == 401
        assert response.json()["detail"]["details"] == {"redirectTo": "/academy/login", "from": "/api/dashboard"}

    def test_starter_cannot_list_sessions(self, client, caller, monkeypatch):
        caller["user"] = USER
        service = mock_service(monkeypatch, "_live_session_service", get_upcoming_sessions=[])

        response = client.get("/api/sessions")

        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "TIER_REQUIRED"
        service.get_upcoming_sessions.assert_not_awaited()

    def test_academy_lists_sessions(self, client, caller, profile_service, monkeypatch):
        caller["user"] = USER
        profile_service.get_profile.return_value = profile("academy")
        mock_service(monkeypatch, "_live_session_service", get_upcoming_sessions=[
            LiveSession(id="s1", title="Live Call", scheduled_at="2026-03-03T18:00:00Z"),
        ])

        body = client.get("/api/sessions").json()

        assert body["count"] == 1
        assert body["data"][0]["title"] == "Live Call"

    def test_backend_down_is_503(self, client, caller, profile_service):
        caller["user"] = USER
        profile_service.get_profile.side_effect = BackendUnavailableError()

        response = client.get("/api/dashboard")

        assert response.status_code == 503
        assert response.headers["retry-after"] == "2"

    def test_starter_may_read_but_not_post_in_community(self, client, caller, monkeypatch):
        caller["user"] = USER
        mock_service(monkeypatch, "_community_service", get_posts=[], create_post=None)

        assert client.get("/api/community/posts").status_code == 200
        response = client.post("/api/community/posts", json={"title": "Hallo", "content": "Erster Post"})
        assert response.status_code == 403


class TestMemberRoutes:
    @pytest.fixture(autouse=True)
    def signed_in(self, caller):
        caller["user"] = USER

    def test_dashboard(self, client, monkeypatch):
        mock_service(monkeypatch, "_profile_service", get_dashboard_stats=DashboardStats(
            user_id="u-1", tier="starter", enrolled_courses_count=2,
            completed_courses_count=1, avg_completion_percentage=75,
        ))
        data = client.get("/api/dashboard").json()["data"]
        assert data["enrolled_courses_count"] == 2

    def test_preferences_roundtrip(self, client, monkeypatch):
        service = mock_service(
            monkeypatch, "_preferences_service",
            save_preferences=UserPreferences(user_id="u-1", weekly_report=False),
        )

        response = client.put("/api/preferences", json={
            "emailNotifications": True, "telegramNotifications": True, "weeklyReport": False,
        })

        assert response.json()["data"]["weekly_report"] is False
        service.save_preferences.assert_awaited_once_with(
            "u-1", email_notifications=True, telegram_notifications=True, weekly_report=False
        )

    def test_courses_filtered_by_profile_tier(self, client, monkeypatch):
        service = mock_service(monkeypatch, "_course_service", get_courses=[
            Course(id="c1", title="Basics", slug="basics"),
        ])

        body = client.get("/api/courses").json()

        assert body["count"] == 1
        assert service.get_courses.await_args[0][0].value == "starter"

    def test_course_search(self, client, monkeypatch):
        service = mock_service(monkeypatch, "_course_service", search_courses=[])
        client.get("/api/courses", params={"search": "risiko"})
        service.search_courses.assert_awaited_once_with("risiko")

    def test_unknown_course(self, client, monkeypatch):
        mock_service(monkeypatch, "_course_service", get_course_details=None)
        response = client.get("/api/courses/nope")
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "COURSE_NOT_FOUND"

    def elite_course(self):
        return CourseDetails(
            id="c9", title="Elite Setups", slug="elite", tier_required="elite", is_published=True,
            modules=[CourseModule(id="m1", course_id="c9", title="Start", lessons=[
                Lesson(id="l1", module_id="m1", title="Intro", content_url="https://cdn/preview.mp4", is_free_preview=True),
                Lesson(id="l2", module_id="m1", title="Setup", content_url="https://cdn/secret.mp4", article_content="Notes"),
            ])],
        )

    def test_gated_course_outline_for_visitor(self, client, monkeypatch):
        mock_service(monkeypatch, "_course_service", get_course_details=self.elite_course())

        response = client.get("/api/courses/elite")

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["has_access"] is False
        preview, locked = data["modules"][0]["lessons"]
        assert preview["content_url"] == "https://cdn/preview.mp4"
        assert locked["title"] == "Setup"
        assert locked["content_url"] is None
        assert locked["article_content"] is None
        assert "secret.mp4" not in response.text

    def test_gated_course_outline_for_starter(self, client, caller, monkeypatch):
        caller["user"] = USER
        mock_service(monkeypatch, "_course_service", get_course_details=self.elite_course())

        data = client.get("/api/courses/elite").json()["data"]

        assert data["has_access"] is False
        assert data["modules"][0]["lessons"][1]["content_url"] is None

    def test_course_content_for_elite(self, client, caller, profile_service, monkeypatch):
        caller["user"] = USER
        profile_service.get_profile.return_value = profile("elite")
        mock_service(monkeypatch, "_course_service", get_course_details=self.elite_course())

        data = client.get("/api/courses/elite").json()["data"]

        assert data["has_access"] is True
        assert data["modules"][0]["lessons"][1]["content_url"] == "https://cdn/secret.mp4"

    def test_enroll_below_course_tier(self, client, caller, monkeypatch):
        caller["user"] = USER
        mock_service(monkeypatch, "_course_service", get_course=Course(id="c9", title="Elite", slug="elite", tier_required="elite"))
        enrollments = mock_service(monkeypatch, "_enrollment_service", enroll_course=None)

        response = client.post("/api/enrollments", json={"courseId": "c9"})

        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "TIER_REQUIRED"
        enrollments.enroll_course.assert_not_awaited()

    def test_enroll_within_tier(self, client, caller, profile_service, monkeypatch):
        caller["user"] = USER
        profile_service.get_profile.return_value = profile("academy")
        mock_service(monkeypatch, "_course_service", get_course=Course(id="c5", title="Academy", slug="academy", tier_required="academy"))
        enrollments = mock_service(monkeypatch, "_enrollment_service", enroll_course=Enrollment(id="e1", user_id="u-1", course_id="c5"))

        response = client.post("/api/enrollments", json={"courseId": "c5"})

        assert response.status_code == 200
        enrollments.enroll_course.assert_awaited_once_with("u-1", "c5")

    def test_enroll_unknown_course(self, client, caller, monkeypatch):
        caller["user"] = USER
        mock_service(monkeypatch, "_course_service", get_course=None)
        enrollments = mock_service(monkeypatch, "_enrollment_service", enroll_course=None)

        response = client.post("/api/enrollments", json={"courseId": "missing"})

        assert response.status_code == 404
        enrollments.enroll_course.assert_not_awaited()

    def test_quiz_attempt_score_above_total(self, client, monkeypatch):
        mock_service(monkeypatch, "_quiz_service")
        response = client.post("/api/quizzes/q1/attempts", json={"score": 11, "totalPoints": 10})
        assert response.status_code == 422

    def test_telegram_rate_limit(self, client, monkeypatch):
        service = mock_service(monkeypatch, "_telegram_service", check_rate_limit=False)
        assert client.post("/api/telegram/rate-limit").json()["data"] == {"allowed": False}
        service.check_rate_limit.assert_awaited_once_with("u-1")

    def test_unread_count(self, client, monkeypatch):
        mock_service(monkeypatch, "_notification_service", get_unread_count=4)
        assert client.get("/api/notifications/count").json()["data"] == {"unread": 4}

    def test_bot_license_with_generated_key(self, client, monkeypatch):
        service = mock_service(monkeypatch, "_bot_service", create_bot_license=None)
        client.post("/api/bot/licenses")
        service.create_bot_license.assert_awaited_once_with("u-1", None)

    def test_bot_license_rejects_malformed_key(self, client, monkeypatch):
        mock_service(monkeypatch, "_bot_service")
        response = client.post("/api/bot/licenses", json={"licenseKey": "abc"})
        assert response.status_code == 422
