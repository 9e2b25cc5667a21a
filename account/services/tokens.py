# account/services/tokens.py
import logging
from datetime import timedelta

import jwt
from django.conf import settings
from django.utils import timezone

logger = logging.getLogger(__name__)


def _user_role(user):
    profile = getattr(user, "profile", None)
    return profile.role if profile else None


def create_token(user, *, expires_hours=None):
    """
    Buat JWT untuk user.
    Payload: {id, username, email, role, iat, exp}
    """
    now = timezone.now()
    hours = settings.JWT_EXPIRES_HOURS if expires_hours is None else expires_hours
    payload = {
        "id": user.pk,
        "username": user.username,
        "email": user.email,
        "role": _user_role(user),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=hours)).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token):
    """
    Return payload (dict) kalau token valid & belum expired, selain itu None.
    """
    if not token:
        return None
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("JWT expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("JWT verification error: %s", e)
        return None


def token_from_header(auth_header):
    """'Bearer <token>' -> '<token>'; selain itu None."""
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]
