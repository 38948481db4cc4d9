# =============================================================================
# tests/test_auth_service.py - Sign In / Sign Up Tests
# =============================================================================

import pytest

from core.exceptions import AuthError
from services.auth_service import get_authenticated_user, sign_in, sign_out, sign_up


class TestSignUp:

    def test_sign_up_starts_session(self, db):
        user = sign_up("Owner@Gym.com", "secret1")

        assert user.email == "owner@gym.com"
        assert get_authenticated_user() == user

    @pytest.mark.parametrize("email", ["", "not-an-email", "a@b"])
    def test_rejects_bad_email(self, db, email):
        with pytest.raises(AuthError):
            sign_up(email, "secret1")

    def test_rejects_short_password(self, db):
        with pytest.raises(AuthError):
            sign_up("owner@gym.com", "12345")

    def test_rejects_duplicate_email(self, db):
        sign_up("owner@gym.com", "secret1")
        with pytest.raises(AuthError):
            sign_up("OWNER@gym.com", "another1")


class TestSignIn:

    def test_sign_in_with_correct_password(self, db):
        created = sign_up("owner@gym.com", "secret1")
        sign_out()

        assert sign_in(" owner@gym.com ", "secret1") == created
        assert get_authenticated_user() == created

    def test_wrong_password(self, db):
        sign_up("owner@gym.com", "secret1")
        sign_out()

        with pytest.raises(AuthError):
            sign_in("owner@gym.com", "wrong-pw")
        assert get_authenticated_user() is None

    def test_unknown_email(self, db):
        with pytest.raises(AuthError):
            sign_in("nobody@gym.com", "secret1")


class TestSession:

    def test_no_session_initially(self, db):
        assert get_authenticated_user() is None

    def test_sign_out_clears_session(self, db):
        sign_up("owner@gym.com", "secret1")
        sign_out()
        assert get_authenticated_user() is None

    def test_sign_out_when_signed_out_is_harmless(self, db):
        sign_out()
        assert get_authenticated_user() is None
