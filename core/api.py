# core/api.py
from django.utils import timezone
from rest_framework import status as http_status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


def envelope(success, data=None, message="", errors=None):
    """
    Bentuk standar semua response API:
      {success, data, message, errors, timestamp}
    """
    return {
        "success": success,
        "data": data,
        "message": message,
        "errors": errors,
        "timestamp": timezone.now().isoformat(),
    }


def api_response(success, data=None, message="", errors=None, status=http_status.HTTP_200_OK, headers=None):
    return Response(envelope(success, data, message, errors), status=status, headers=headers)


def ok(data=None, message="Data berhasil diambil", status=http_status.HTTP_200_OK):
    return api_response(True, data, message, status=status)


def created(data=None, message="Data berhasil ditambahkan"):
    return api_response(True, data, message, status=http_status.HTTP_201_CREATED)


def fail(message, errors=None, status=http_status.HTTP_400_BAD_REQUEST):
    return api_response(False, None, message, errors, status=status)


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def health_view(request):
    return ok({"status": "ok"}, "Service berjalan")
