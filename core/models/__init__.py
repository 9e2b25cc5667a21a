from .base import BaseModel
