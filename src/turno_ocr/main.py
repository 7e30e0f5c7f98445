from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .assembler import parse_turns_from_words
from .dates import DateLike
from .exporters import turns_to_csv, turns_to_json
from .ocr_adapters import words_from_hocr, words_from_tsv
from .ocr_utils import DEFAULT_OCR_LANG, ocr_image
from .settings import DEFAULT_SETTINGS, ParseSettings
from .structures import ImportedTurn, OcrWord
from .text_parser import parse_turns_from_text

log = logging.getLogger(__name__)


def _read_text(path: str) -> str:
    with open(Path(path), "r", encoding="utf-8") as fh:
        return fh.read()


def _load_source(
    image_path: Optional[str],
    hocr_path: Optional[str],
    tsv_path: Optional[str],
    text_path: Optional[str],
    ocr_lang: str,
) -> tuple[List[OcrWord], str]:
    if image_path:
        log.info("Ejecutando OCR sobre la imagen: %s", image_path)
        result = ocr_image(image_path, lang=ocr_lang)
        return result.words, result.text
    if hocr_path:
        log.info("Parseando HOCR desde: %s", hocr_path)
        return words_from_hocr(hocr_path), ""
    if tsv_path:
        log.info("Parseando TSV desde: %s", tsv_path)
        return words_from_tsv(_read_text(tsv_path)), ""
    log.info("Leyendo texto plano desde: %s", text_path)
    return [], _read_text(text_path)


def import_schedule(
    aliases: Sequence[str],
    *,
    image_path: Optional[str] = None,
    hocr_path: Optional[str] = None,
    tsv_path: Optional[str] = None,
    text_path: Optional[str] = None,
    reference_date: DateLike = None,
    strategy: str = "verified",
    settings: ParseSettings = DEFAULT_SETTINGS,
    ocr_lang: str = DEFAULT_OCR_LANG,
    csv_path: Optional[str] = None,
    json_path: Optional[str] = None,
) -> List[ImportedTurn]:
    """
    Importa los turnos de un horario fotografiado.

    Usa el parser geométrico sobre las palabras con bbox; si no produce turnos y
    hay texto plano disponible, recurre al parser textual.
    """
    if not isinstance(aliases, (list, tuple)):
        raise TypeError(f"aliases debe ser una lista, no {type(aliases).__name__}")
    aliases = [str(a) for a in aliases if str(a).strip()]
    if not aliases:
        raise ValueError("aliases es obligatorio.")

    sources = [p for p in (image_path, hocr_path, tsv_path, text_path) if p]
    if len(sources) != 1:
        raise ValueError("Se requiere exactamente una entrada: image_path, hocr_path, tsv_path o text_path.")

    words, text = _load_source(image_path, hocr_path, tsv_path, text_path, ocr_lang)

    turns: List[ImportedTurn] = []
    if words:
        turns = parse_turns_from_words(words, aliases, reference_date, strategy=strategy, settings=settings)
    if not turns and text:
        log.info("Sin turnos por geometría; se usa el parser de texto.")
        turns = parse_turns_from_text(text, aliases, reference_date)

    if not turns:
        log.warning("No se encontraron turnos para los alias %s.", aliases)

    if csv_path:
        turns_to_csv(turns, csv_path)
        log.info("CSV escrito en: %s", csv_path)
    if json_path:
        turns_to_json(turns, json_path)
        log.info("JSON escrito en: %s", json_path)

    return turns
