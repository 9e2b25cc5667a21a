# account/permissions.py
import logging

from rest_framework.permissions import BasePermission

from account.authentication import AuthContext

logger = logging.getLogger(__name__)


class IsAuthenticatedMember(BasePermission):
    """Wajib ada JWT valid (request.auth = AuthContext)."""
    message = "Access denied. No token provided."

    def has_permission(self, request, view):
        return isinstance(request.auth, AuthContext)


class HasCapability(BasePermission):
    """
    Cek capability per HTTP method dari atribut view:

        required_capabilities = {
            "GET": Capability.VIEW_KEUANGAN,
            "POST": Capability.MANAGE_KEUANGAN,
        }

    Method yang tidak disebut -> cukup login. HEAD/OPTIONS ikut GET.
    """
    message = "Access denied. Insufficient permissions."

    def has_permission(self, request, view):
        required = getattr(view, "required_capabilities", None) or {}
        method = "GET" if request.method in ("HEAD", "OPTIONS") else request.method
        capability = required.get(method)
        if capability is None:
            return True

        ctx = request.auth
        if not isinstance(ctx, AuthContext):
            return False
        if ctx.can(capability):
            return True

        logger.warning(
            "Akses ditolak: user=%s role=%s butuh %s (%s %s)",
            ctx.username, ctx.role, capability, request.method, request.path,
        )
        return False
