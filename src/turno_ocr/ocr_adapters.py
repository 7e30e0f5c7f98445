# src/turno_ocr/ocr_adapters.py
"""Normaliza las distintas salidas de motores OCR a una lista de `OcrWord`."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional
from bs4 import BeautifulSoup
from .structures import BBox, OcrWord, parse_bbox

log = logging.getLogger(__name__)

TSV_MIN_COLUMNS = 12

def _coord(bbox: Optional[Mapping[str, Any]], key: str) -> float:
    if not bbox:
        return 0
    value = bbox.get(key)
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0

def _to_word(raw: Any) -> Optional[OcrWord]:
    if not isinstance(raw, Mapping):
        return None
    text = str(raw.get("text") or "").strip()
    if not text:
        return None
    bb = raw.get("bbox") or {}
    return OcrWord(text=text, bbox=BBox(
        x0=_coord(bb, "x0"), y0=_coord(bb, "y0"),
        x1=_coord(bb, "x1"), y1=_coord(bb, "y1"),
    ))

def words_from_dicts(raw_words: Iterable[Any]) -> List[OcrWord]:
    """Lista directa de palabras: [{text, bbox: {x0, y0, x1, y1}}, ...]."""
    words = []
    for raw in raw_words or []:
        w = _to_word(raw)
        if w is not None:
            words.append(w)
    return words

def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []

def words_from_blocks(blocks: Any) -> List[OcrWord]:
    """Recorre block -> paragraphs -> lines -> words (salida anidada de Tesseract.js)."""
    words: List[OcrWord] = []
    for block in _as_list(blocks):
        for paragraph in _as_list(block.get("paragraphs") if isinstance(block, Mapping) else None):
            for line in _as_list(paragraph.get("lines") if isinstance(paragraph, Mapping) else None):
                words.extend(words_from_dicts(_as_list(line.get("words") if isinstance(line, Mapping) else None)))
    return words

def _int_or_none(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

def words_from_tsv(tsv: str) -> List[OcrWord]:
    """
    Parsea el TSV posicional de Tesseract:
    level page_num block_num par_num line_num word_num left top width height conf text
    """
    if not tsv:
        return []
    words: List[OcrWord] = []
    for i, raw_line in enumerate(tsv.splitlines()):
        line = raw_line.strip()
        if not line:
            continue
        if i == 0 and line.startswith("level"):
            continue

        parts = line.split("\t")
        if len(parts) < TSV_MIN_COLUMNS:
            continue

        # word_num == 0 son filas de página/bloque/línea, no palabras
        if _int_or_none(parts[5]) == 0:
            continue

        geometry = [_int_or_none(p) for p in parts[6:10]]
        if any(g is None for g in geometry):
            continue
        left, top, width, height = geometry

        text = "\t".join(parts[11:]).strip()
        if not text:
            continue
        words.append(OcrWord(text=text, bbox=BBox(x0=left, y0=top, x1=left + width, y1=top + height)))
    return words

def _load_soup(text: str) -> BeautifulSoup:
    """
    Intenta XML (lxml-xml) y, si no hay nodos HOCR, fallback a HTML (lxml).
    """
    soup_xml = BeautifulSoup(text, "lxml-xml")
    if soup_xml.find(class_=lambda c: c and "ocr_page" in c):
        return soup_xml
    return BeautifulSoup(text, "lxml")

def words_from_hocr(source: str) -> List[OcrWord]:
    """Extrae las `ocrx_word` de un HOCR (ruta de archivo o el propio markup)."""
    if "<" in source:
        raw = source
    else:
        with open(Path(source), "r", encoding="utf-8") as f:
            raw = f.read()
    soup = _load_soup(raw)

    words: List[OcrWord] = []
    for w in soup.find_all(class_=lambda c: c and "ocrx_word" in c):
        bb = parse_bbox(w.get("title", ""))
        if not bb:
            continue
        text = (w.get_text() or "").strip()
        if not text:
            continue
        x0, y0, x1, y1 = bb
        words.append(OcrWord(text=text, bbox=BBox(x0=x0, y0=y0, x1=x1, y1=y1)))
    log.debug("Palabras HOCR: %d", len(words))
    return words

def build_words(data: Any) -> List[OcrWord]:
    """Cadena de respaldo: lista de palabras -> bloques anidados -> TSV."""
    if not isinstance(data, Mapping):
        return []

    words = words_from_dicts(_as_list(data.get("words")))
    if words:
        return words

    words = words_from_blocks(data.get("blocks"))
    if words:
        log.debug("Palabras obtenidas desde bloques anidados: %d", len(words))
        return words

    tsv = data.get("tsv")
    words = words_from_tsv(tsv if isinstance(tsv, str) else "")
    if words:
        log.debug("Palabras obtenidas desde TSV: %d", len(words))
    return words
