# core/pagination.py
import math

from django.conf import settings


def _to_int(v, default):
    try:
        n = int(str(v).strip())
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def parse_page_params(query, default_limit=10):
    """
    Baca ?page= & ?limit= dari query string.
    Nilai aneh (kosong, negatif, bukan angka) -> default.
    Return (page, limit, offset).
    """
    page = _to_int(query.get("page"), 1)
    limit = _to_int(query.get("limit"), default_limit)
    limit = min(limit, getattr(settings, "API_MAX_PAGE_SIZE", 1000))
    return page, limit, (page - 1) * limit


def paginate(qs, page, limit):
    """
    Potong queryset/list sesuai page & limit.
    Return (items, pagination) dengan pagination:
      {page, limit, total, totalPages, hasNext, hasPrev}
    """
    total = len(qs) if isinstance(qs, list) else qs.count()
    offset = (page - 1) * limit
    items = qs[offset:offset + limit]
    total_pages = math.ceil(total / limit) if limit else 0
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }


def filter_value(query, name):
    """
    Ambil nilai filter dari query string.
    "" dan "all" dianggap tidak ada filter (konvensi dropdown di frontend).
    """
    v = query.get(name)
    if v is None:
        return None
    v = str(v).strip()
    if v == "" or v.lower() == "all":
        return None
    return v


def parse_bool(v, default=None):
    if v is None:
        return default
    s = str(v).strip().lower()
    if s == "":
        return default
    return s in ("1", "true", "yes", "y", "on")


def bounded_int(v, low, high):
    """
    Angka dari query string dalam rentang [low, high].
    Di luar rentang atau bukan angka -> None (filter diabaikan).
    """
    try:
        n = int(str(v).strip())
    except (TypeError, ValueError):
        return None
    return n if low <= n <= high else None
