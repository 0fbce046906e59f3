"""Text normalization helpers."""

import unicodedata


def normalize_text(value: str) -> str:
    """Lowercase and strip diacritics ("Comércio" -> "comercio")."""
    txt = unicodedata.normalize("NFKD", value or "").lower()
    return "".join(ch for ch in txt if not unicodedata.combining(ch)).strip()
