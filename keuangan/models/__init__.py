# keuangan/models/__init__.py
from .kategori import KategoriKeuangan
from .periode import PeriodeAnggaran, StatusPeriode
from .item import ItemKeuangan
from .realisasi import RealisasiItemKeuangan
