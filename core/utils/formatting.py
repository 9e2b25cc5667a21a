# core/utils/formatting.py
from decimal import Decimal, InvalidOperation


def to_decimal(value):
    """
    Konversi ke Decimal dengan aman.
    None / string kosong / nilai aneh -> None.
    """
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None


def indo_number(value, decimal_places=0):
    """
    Format angka gaya Indonesia: ribuan = titik, desimal = koma.
      1500000.75 (2) -> 1.500.000,75
      1500000        -> 1.500.000
    """
    dec = to_decimal(value)
    if dec is None:
        return ""
    fmt = f"{dec:,.{int(decimal_places)}f}"
    return fmt.replace(",", "X").replace(".", ",").replace("X", ".")


def format_rupiah(value):
    """
    "Rp 1.500.000"; kosong/0 -> "Rp 0".
    """
    dec = to_decimal(value)
    if not dec:
        return "Rp 0"
    return f"Rp {indo_number(dec, 0)}"


def decimal_str(value):
    """Decimal -> string untuk JSON (None tetap None)."""
    dec = to_decimal(value)
    return None if dec is None else str(dec)
