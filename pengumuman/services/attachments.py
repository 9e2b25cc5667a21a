# pengumuman/services/attachments.py
import json
import re

from django.core.exceptions import ValidationError
from django.utils.deconstruct import deconstructible

IMAGE_MAX_MB = 1
PDF_MAX_MB = 3

BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
REQUIRED_KEYS = ("fileName", "fileType", "base64Data")


def decode_attachments(value):
    """
    Attachment boleh dikirim sebagai list atau string JSON (form lama).
    Di-decode sekali di sini, selebihnya selalu list of dict.
    """
    if value in (None, ""):
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValidationError("Format attachment tidak valid")
    if not isinstance(value, list):
        raise ValidationError("Attachment harus berupa list")
    return value


def estimated_size(base64_data):
    # ukuran biner ~ 3/4 panjang base64
    return len(base64_data) * 3 // 4


def max_bytes_for(file_type):
    if file_type.startswith("image/"):
        return IMAGE_MAX_MB * 1024 * 1024
    if file_type == "application/pdf":
        return PDF_MAX_MB * 1024 * 1024
    return None


def validate_attachment(att):
    if not isinstance(att, dict) or not all(att.get(k) for k in REQUIRED_KEYS):
        raise ValidationError("File attachment tidak valid")

    name = att["fileName"]
    file_type = str(att["fileType"]).lower()
    data = att["base64Data"]

    limit = max_bytes_for(file_type)
    if limit is None:
        raise ValidationError(f"Tipe file {att['fileType']} tidak didukung")
    if not isinstance(data, str) or not BASE64_RE.match(data):
        raise ValidationError(f"File {name} format Base64 tidak valid")
    if estimated_size(data) > limit:
        raise ValidationError(f"{name} melebihi ukuran maksimal {limit // (1024 * 1024)}MB")


@deconstructible
class AttachmentsValidator:
    """Migration-safe validator untuk field JSON attachments."""

    def __call__(self, value):
        for att in decode_attachments(value):
            validate_attachment(att)

    def __eq__(self, other):
        return isinstance(other, AttachmentsValidator)
