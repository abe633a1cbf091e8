"""
Yönetici girişi ve oturum token'ı doğrulama (JWT, HS256).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from catalog_dashboard.config.settings import (
    ADMIN_CREDENTIALS,
    JWT_ALGORITHM,
    JWT_SECRET,
    TOKEN_TTL_DAYS,
)
from catalog_dashboard.errors import AuthenticationError
from catalog_dashboard.models.product import Product

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    """Oturum açmış kullanıcı."""
    user_id: str
    email: str
    name: str = "Admin"


def login(
    email: Optional[str],
    password: Optional[str],
    secret: str = JWT_SECRET,
    now: Optional[datetime] = None,
) -> str:
    """
    E-posta / şifre ile giriş yapar, imzalı token döner.

    E-posta büyük/küçük harf duyarsız karşılaştırılır, iki değer de kırpılır.
    Hatalı veya eksik bilgi → AuthenticationError.
    """
    trimmed_email = (email or "").strip().lower()
    trimmed_password = (password or "").strip()

    if not trimmed_email or not trimmed_password:
        raise AuthenticationError("Email and password are required")

    valid = any(
        admin["email"].lower() == trimmed_email and admin["password"] == trimmed_password
        for admin in ADMIN_CREDENTIALS
    )
    if not valid:
        logger.warning("Hatalı giriş denemesi: %s", trimmed_email)
        raise AuthenticationError("Invalid email or password")

    issued = now or datetime.now(timezone.utc)
    payload = {
        "userId": trimmed_email,
        "email": trimmed_email,
        "name": "Admin",
        "iat": issued,
        "exp": issued + timedelta(days=TOKEN_TTL_DAYS),
    }
    logger.info("Giriş başarılı: %s", trimmed_email)
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: Optional[str], secret: str = JWT_SECRET) -> Optional[AuthUser]:
    """Token geçerliyse kullanıcıyı, değilse None döner."""
    if not token:
        return None
    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug("Token doğrulanamadı: %s", e)
        return None

    email = claims.get("email")
    if not email:
        return None
    return AuthUser(
        user_id=claims.get("userId") or email,
        email=email,
        name=claims.get("name") or "Admin",
    )


def load_products_for(token: Optional[str], store) -> list[Product]:
    """
    Oturumdaki kullanıcının ürünlerini yükler.

    Oturum yoksa depoya hiç gidilmez, boş liste döner.
    """
    user = verify_token(token)
    if user is None:
        return []
    return store.list_products(user.user_id)
