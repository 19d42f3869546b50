"""Unit tests for the tier access gate and its HTTP adapters."""

import pytest
from fastapi.responses import JSONResponse, RedirectResponse

from common.utils import ForbiddenException, ServiceUnavailableException, UnauthorizedException
from academy.access_gate import (
    LOGIN_PATH,
    UPSELL_PATH,
    AccessDecision,
    AccessOutcome,
    AuthState,
    evaluate_access,
    login_redirect_url,
    page_response,
    raise_for_decision,
)
from academy.schemas.records import Profile
from academy.tiers import Tier


USER = {"user_id": "u-1", "email": "lena@example.com"}
TIERS = [Tier.STARTER, Tier.ACADEMY, Tier.ELITE]


def signed_in(tier="starter"):
    return AuthState(user=USER, profile={"id": "u-1", "tier": tier})


# ─────────────────────────────────────────────────────────────────
# evaluate_access
# ─────────────────────────────────────────────────────────────────


class TestEvaluateAccess:
    def test_loading_wins_over_everything(self):
        decision = evaluate_access(AuthState(user=None, loading=True), Tier.ELITE, "/academy/bot")
        assert decision.outcome is AccessOutcome.LOADING
        assert not decision.granted

    def test_anonymous_redirects_to_login_with_location(self):
        decision = evaluate_access(AuthState(), None, "/academy/dashboard")
        assert decision.outcome is AccessOutcome.REDIRECT_LOGIN
        assert decision.redirect_to == LOGIN_PATH
        assert decision.return_to == "/academy/dashboard"

    def test_anonymous_with_tier_still_goes_to_login(self):
        decision = evaluate_access(AuthState(), Tier.ELITE, "/academy/bot")
        assert decision.outcome is AccessOutcome.REDIRECT_LOGIN

    def test_signed_in_without_requirement_renders(self):
        assert evaluate_access(signed_in("starter")).granted

    @pytest.mark.parametrize("user_tier", TIERS)
    @pytest.mark.parametrize("required", TIERS)
    def test_tier_pairs(self, user_tier, required):
        decision = evaluate_access(signed_in(user_tier.value), required, "/x")
        if user_tier.rank >= required.rank:
            assert decision.outcome is AccessOutcome.RENDER
        else:
            assert decision.outcome is AccessOutcome.REDIRECT_UPSELL
            assert decision.redirect_to == UPSELL_PATH

    def test_required_tier_as_string(self):
        assert evaluate_access(signed_in("academy"), "elite").outcome is AccessOutcome.REDIRECT_UPSELL

    def test_profile_record_is_accepted(self):
        profile = Profile(id="u-1", email="lena@example.com", tier="elite")
        state = AuthState(user=USER, profile=profile)
        assert evaluate_access(state, Tier.ELITE).granted

    def test_unknown_profile_tier_ranks_as_starter(self):
        state = AuthState(user=USER, profile={"tier": "diamond"})
        assert evaluate_access(state, Tier.STARTER).granted
        assert evaluate_access(state, Tier.ACADEMY).outcome is AccessOutcome.REDIRECT_UPSELL

    def test_missing_profile_is_let_through_by_default(self):
        # Known gap: a signed-in user without a profile row passes tier checks
        state = AuthState(user=USER, profile=None)
        assert evaluate_access(state, Tier.ELITE, "/academy/bot").granted

    def test_missing_profile_denied_when_flag_set(self):
        state = AuthState(user=USER, profile=None)
        decision = evaluate_access(state, Tier.ELITE, "/academy/bot", deny_without_profile=True)
        assert decision.outcome is AccessOutcome.REDIRECT_UPSELL

    def test_flag_does_not_affect_untiered_content(self):
        state = AuthState(user=USER, profile=None)
        assert evaluate_access(state, None, deny_without_profile=True).granted


class TestLoginRedirectUrl:
    def test_carries_location(self):
        decision = AccessDecision(AccessOutcome.REDIRECT_LOGIN, redirect_to=LOGIN_PATH, return_to="/academy/courses")
        assert login_redirect_url(decision) == "/academy/login?from=%2Facademy%2Fcourses"

    def test_without_location(self):
        decision = AccessDecision(AccessOutcome.REDIRECT_LOGIN, redirect_to=LOGIN_PATH)
        assert login_redirect_url(decision) == LOGIN_PATH


# ─────────────────────────────────────────────────────────────────
# HTTP adapters
# ─────────────────────────────────────────────────────────────────


class TestPageResponse:
    def test_render_returns_none(self):
        assert page_response(AccessDecision(AccessOutcome.RENDER)) is None

    def test_loading_placeholder(self):
        response = page_response(AccessDecision(AccessOutcome.LOADING))
        assert isinstance(response, JSONResponse)
        assert response.status_code == 503
        assert response.headers["retry-after"] == "2"
        assert b"Laden..." in response.body

    def test_login_redirect(self):
        response = page_response(
            AccessDecision(AccessOutcome.REDIRECT_LOGIN, redirect_to=LOGIN_PATH, return_to="/academy/bot")
        )
        assert isinstance(response, RedirectResponse)
        assert response.status_code == 307
        assert response.headers["location"] == "/academy/login?from=%2Facademy%2Fbot"

    def test_upsell_redirect(self):
        response = page_response(AccessDecision(AccessOutcome.REDIRECT_UPSELL, redirect_to=UPSELL_PATH))
        assert response.headers["location"] == UPSELL_PATH


class TestRaiseForDecision:
    def test_render_passes(self):
        raise_for_decision(AccessDecision(AccessOutcome.RENDER))

    def test_loading(self):
        with pytest.raises(ServiceUnavailableException) as exc:
            raise_for_decision(AccessDecision(AccessOutcome.LOADING))
        assert exc.value.status_code == 503
        assert exc.value.code == "AUTH_STATE_LOADING"

    def test_login(self):
        with pytest.raises(UnauthorizedException) as exc:
            raise_for_decision(
                AccessDecision(AccessOutcome.REDIRECT_LOGIN, redirect_to=LOGIN_PATH, return_to="/api/sessions")
            )
        assert exc.value.detail["details"] == {"redirectTo": LOGIN_PATH, "from": "/api/sessions"}

    def test_upsell(self):
        with pytest.raises(ForbiddenException) as exc:
            raise_for_decision(AccessDecision(AccessOutcome.REDIRECT_UPSELL, redirect_to=UPSELL_PATH))
        assert exc.value.status_code == 403
        assert exc.value.code == "TIER_REQUIRED"
