# core/templatetags/indo_format.py
from django import template

from core.utils.formatting import format_rupiah, indo_number as _indo_number

register = template.Library()


@register.filter
def indo_number(value, decimal_places=0):
    """
    {{ 1500000.75|indo_number:2 }} -> 1.500.000,75
    Kalau bukan angka, balikin apa adanya.
    """
    out = _indo_number(value, decimal_places)
    return out if out != "" else value


@register.filter
def rupiah(value):
    """{{ item.total_target|rupiah }} -> Rp 1.500.000"""
    return format_rupiah(value)
