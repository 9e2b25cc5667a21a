import uuid

from django.db import models


class BaseModel(models.Model):
    """
    Abstract base untuk semua model domain gereja:
    - id UUID (opaque string di API)
    - created_at / updated_at otomatis
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
