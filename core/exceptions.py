# core/exceptions.py
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import exceptions, status

from core.api import api_response

logger = logging.getLogger(__name__)


class BusinessRuleError(Exception):
    """
    Dilempar oleh service layer ketika aturan bisnis dilanggar
    (kode duplikat, parent beda kategori, periode tumpang tindih, dst).
    Ditangkap envelope_exception_handler -> response 400 (default).
    """

    def __init__(self, message, errors=None, status_code=status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.errors = errors
        self.status_code = status_code


def flatten_detail(detail):
    # ErrorDetail -> str, rekursif untuk dict/list
    if isinstance(detail, dict):
        return {k: flatten_detail(v) for k, v in detail.items()}
    if isinstance(detail, list):
        if len(detail) == 1 and not isinstance(detail[0], (dict, list)):
            return str(detail[0])
        return [flatten_detail(x) for x in detail]
    return str(detail)


def envelope_exception_handler(exc, context):
    """
    EXCEPTION_HANDLER untuk DRF: semua error dikembalikan dalam envelope
    {success:false, data:null, message, errors, timestamp}.
    """
    if isinstance(exc, BusinessRuleError):
        return api_response(False, None, exc.message, exc.errors, status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        return api_response(False, None, "Validasi gagal", errors, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, Http404):
        return api_response(False, None, "Data tidak ditemukan", status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, exceptions.ValidationError):
        return api_response(
            False, None, "Validasi gagal", flatten_detail(exc.detail),
            status=exc.status_code,
        )

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        if isinstance(exc, exceptions.NotAuthenticated):
            message = "Access denied. No token provided."
        else:
            message = flatten_detail(exc.detail)
        return api_response(
            False, None, message,
            status=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": 'Bearer realm="api"'},
        )

    if isinstance(exc, exceptions.MethodNotAllowed):
        method = getattr(context.get("request"), "method", "")
        return api_response(
            False, None, f"Method {method} not allowed", status=exc.status_code,
        )

    if isinstance(exc, exceptions.APIException):
        return api_response(False, None, flatten_detail(exc.detail), status=exc.status_code)

    view = context.get("view")
    logger.exception("Unhandled API error in %s", view.__class__.__name__ if view else "?")
    return api_response(
        False, None, "Server error", str(exc),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
