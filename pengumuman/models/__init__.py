from .kategori import KategoriPengumuman
from .pengumuman import Pengumuman, PrioritasPengumuman, StatusPengumuman
