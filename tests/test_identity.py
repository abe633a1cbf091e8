"""Giriş ve token doğrulama testleri."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import jwt
import pytest

from catalog_dashboard.auth.identity import (
    AuthUser,
    load_products_for,
    login,
    verify_token,
)
from catalog_dashboard.config.settings import JWT_SECRET
from catalog_dashboard.errors import AuthenticationError


class TestLogin:

    def test_valid_credentials(self):
        token = login("admin@xyz.com", "passforadmin")
        user = verify_token(token)
        assert user == AuthUser(user_id="admin@xyz.com", email="admin@xyz.com", name="Admin")

    def test_email_trimmed_and_case_insensitive(self):
        token = login("  ADMIN2@xyz.com ", " passforadmin ")
        assert verify_token(token).email == "admin2@xyz.com"

    def test_wrong_password(self):
        with pytest.raises(AuthenticationError):
            login("admin@xyz.com", "nope")

    @pytest.mark.parametrize("email,password", [("", "x"), ("a@b.c", ""), (None, None)])
    def test_missing_fields(self, email, password):
        with pytest.raises(AuthenticationError, match="required"):
            login(email, password)


class TestVerifyToken:

    def test_missing_token(self):
        assert verify_token(None) is None
        assert verify_token("") is None

    def test_garbage_token(self):
        assert verify_token("not.a.token") is None

    def test_wrong_secret(self):
        token = login("admin@xyz.com", "passforadmin", secret="another-secret")
        assert verify_token(token) is None

    def test_expired_token(self):
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        token = login("admin@xyz.com", "passforadmin", now=issued)
        assert verify_token(token) is None

    def test_token_without_email(self):
        token = jwt.encode({"userId": "x"}, JWT_SECRET, algorithm="HS256")
        assert verify_token(token) is None


class TestLoadProductsFor:
    """Oturum yoksa depoya gidilmez."""

    def test_no_identity_skips_store(self):
        store = MagicMock()
        assert load_products_for(None, store) == []
        store.list_products.assert_not_called()

    def test_scoped_to_user(self):
        store = MagicMock()
        store.list_products.return_value = ["p"]
        token = login("admin@xyz.com", "passforadmin")
        assert load_products_for(token, store) == ["p"]
        store.list_products.assert_called_once_with("admin@xyz.com")
