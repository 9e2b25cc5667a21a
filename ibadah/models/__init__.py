from .jenis import JenisIbadah
from .jadwal import JadwalIbadah
