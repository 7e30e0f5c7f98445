# src/turno_ocr/cleaners.py
from __future__ import annotations
import re
import unicodedata
from typing import Optional

_NON_ALNUM_RE = re.compile(r"[^A-Z0-9]")

def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

def normalize(text: Optional[str]) -> str:
    """Mayúsculas, sin tildes y sin espacios en los extremos ("Miércoles " -> "MIERCOLES")."""
    return strip_diacritics((text or "").upper()).strip()

def clean_token(text: Optional[str]) -> str:
    """Como `normalize`, pero conservando solo [A-Z0-9]."""
    return _NON_ALNUM_RE.sub("", normalize(text))
