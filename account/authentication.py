# account/authentication.py
import logging
from dataclasses import dataclass, field

from django.contrib.auth.models import User
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from account.roles import Role, capabilities_for, parse_role
from account.services.tokens import token_from_header, verify_token

logger = logging.getLogger(__name__)

INVALID_TOKEN = "Access denied. Invalid token."


@dataclass(frozen=True)
class AuthContext:
    """
    Hasil autentikasi per request (request.auth).
    Role & capability dihitung sekali di sini, view tinggal membaca.
    """
    user_id: int
    username: str
    role: object = None
    capabilities: frozenset = field(default_factory=frozenset)
    rayon_id: object = None
    jemaat_id: object = None

    def can(self, capability):
        return capability in self.capabilities

    @property
    def is_rayon_scoped(self):
        # MAJELIS dengan rayon -> hanya data rayon-nya
        return self.role == Role.MAJELIS and self.rayon_id is not None


def build_auth_context(user):
    profile = getattr(user, "profile", None)
    role = parse_role(profile.role) if profile else None
    return AuthContext(
        user_id=user.pk,
        username=user.username,
        role=role,
        capabilities=capabilities_for(role),
        rayon_id=profile.rayon_id if profile else None,
        jemaat_id=profile.jemaat_id if profile else None,
    )


class JWTAuthentication(BaseAuthentication):
    """
    Authorization: Bearer <jwt>
    - tanpa header      -> anonymous (permission class yang menolak, 401)
    - token tidak valid -> 401
    - user hilang / nonaktif -> 401
    """
    keyword = "Bearer"

    def authenticate(self, request):
        header = get_authorization_header(request).decode("latin-1")
        if not header:
            return None

        token = token_from_header(header)
        payload = verify_token(token)
        if not payload:
            raise exceptions.AuthenticationFailed(INVALID_TOKEN)

        user = (
            User.objects
            .select_related("profile")
            .filter(pk=payload.get("id"))
            .first()
        )
        if user is None or not user.is_active:
            logger.warning("JWT untuk user %s ditolak (tidak ada / nonaktif)", payload.get("id"))
            raise exceptions.AuthenticationFailed(INVALID_TOKEN)

        return user, build_auth_context(user)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'
