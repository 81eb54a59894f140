from urllib.parse import urlparse


def is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def is_valid_url(value: str) -> bool:
    v = (value or "").strip()
    try:
        parsed = urlparse(v)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    except Exception:
        return False


def is_valid_langpair(value: str) -> bool:
    parts = (value or "").split("|")
    return len(parts) == 2 and all(p.strip() for p in parts)
