# jemaat/models/__init__.py
from .rayon import Rayon
from .keluarga import Keluarga, StatusKeluarga
from .jemaat import Jemaat, GolonganDarah, StatusDalamKeluarga, StatusJemaat
