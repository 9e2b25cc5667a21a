# account/api/views.py
import logging

from django.contrib.auth.models import User
from django.db.models import Q
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from account.api.serializers import LoginSerializer, user_payload
from account.permissions import IsAuthenticatedMember
from account.roles import Role, redirect_url_for
from account.services.tokens import create_token
from core.api import fail, ok

logger = logging.getLogger(__name__)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        ser = LoginSerializer(data=request.data)
        if not ser.is_valid():
            return fail("Email/Username dan password wajib diisi", ser.errors)

        identifier = ser.validated_data["identifier"].strip()
        password = ser.validated_data["password"]

        user = (
            User.objects
            .select_related("profile", "profile__jemaat", "profile__jemaat__keluarga__rayon")
            .filter(Q(username=identifier) | Q(email__iexact=identifier))
            .first()
        )
        if user is None or not user.check_password(password):
            logger.warning("Login gagal untuk identifier=%s", identifier)
            return fail("Email/Username atau password salah", status=status.HTTP_401_UNAUTHORIZED)

        if not user.is_active:
            return fail(
                "Akun Anda telah dinonaktifkan. Silakan hubungi pihak gereja "
                "untuk informasi lebih lanjut.",
                status=status.HTTP_403_FORBIDDEN,
            )

        role = user.profile.role if hasattr(user, "profile") else None
        logger.info("Login berhasil: %s (%s)", user.username, role)
        return ok(
            {
                "token": create_token(user),
                "user": user_payload(user),
                "redirectUrl": redirect_url_for(role),
            },
            "Login berhasil",
        )


class MeView(APIView):
    permission_classes = [IsAuthenticatedMember]

    def get(self, request):
        user = (
            User.objects
            .select_related("profile", "profile__rayon", "profile__jemaat__keluarga__rayon")
            .get(pk=request.user.pk)
        )
        ctx = request.auth
        data = user_payload(user)
        profile = getattr(user, "profile", None)

        data["capabilities"] = sorted(str(c) for c in ctx.capabilities)
        data["isAdmin"] = ctx.role == Role.ADMIN
        # JEMAAT tanpa data jemaat -> perlu onboarding
        data["isHasProfile"] = not (ctx.role == Role.JEMAAT and not ctx.jemaat_id)
        data["rayon"] = (
            {"id": str(profile.rayon_id), "namaRayon": profile.rayon.nama_rayon}
            if profile and profile.rayon_id else None
        )
        return ok(data)
