# src/turno_ocr/anchors.py
from __future__ import annotations
import logging
import re
from typing import List, Optional, Sequence
import numpy as np
from .lines import build_line_words, group_words_by_line
from .settings import DEFAULT_SETTINGS, ParseSettings
from .structures import DayAnchor, LineGroup, LineWord, OcrWord

log = logging.getLogger(__name__)

DAY_NAMES = frozenset({
    "LUNES", "MARTES", "MIERCOLES", "JUEVES", "VIERNES", "SABADO", "DOMINGO",
})

DAY_NUM_RE = re.compile(r"^\d{1,2}$")

def find_day_number_to_right(tokens: Sequence[LineWord], index: int,
                             settings: ParseSettings = DEFAULT_SETTINGS
                             ) -> Optional[LineWord]:
    """Número de día (1..31) más cercano a la derecha del token `index`."""
    base_x = tokens[index].x
    best: Optional[LineWord] = None
    best_dx = 0.0
    for t in tokens[index + 1:]:
        if not DAY_NUM_RE.match(t.token):
            continue
        dx = t.x - base_x
        if dx < settings.day_number_min_dx or dx > settings.day_number_max_dx:
            continue
        if not 1 <= int(t.token) <= 31:
            continue
        if best is None or dx < best_dx:
            best, best_dx = t, dx
    return best

def anchors_from_lines(lines: Sequence[LineGroup], tolerance: int,
                       settings: ParseSettings = DEFAULT_SETTINGS) -> List[DayAnchor]:
    anchors: List[DayAnchor] = []
    for line in lines:
        tokens = build_line_words(line)
        for i, tok in enumerate(tokens):
            if tok.token not in DAY_NAMES:
                continue
            num = find_day_number_to_right(tokens, i, settings)
            if num is None:
                continue
            anchors.append(DayAnchor(day_num=int(num.token), x=num.x, y=line.y, weekday=tok.token))

    if not anchors:
        log.warning("No se encontraron cabeceras de día (LUNES 6, MARTES 7, ...).")
        return []

    # solo la franja superior: los números del cuerpo no son cabeceras
    min_y = min(a.y for a in anchors)
    band = max(settings.header_band_min, settings.header_band_factor * tolerance)
    header = [a for a in anchors if a.y <= min_y + band]
    header.sort(key=lambda a: a.x)
    log.debug("Anclas de día: %d de %d candidatas (banda=%.1f)", len(header), len(anchors), band)
    return header

def extract_day_anchors(words: Sequence[OcrWord],
                        settings: ParseSettings = DEFAULT_SETTINGS) -> List[DayAnchor]:
    lines, tolerance = group_words_by_line(words, settings)
    return anchors_from_lines(lines, tolerance, settings)

def nearest_day_anchor(x: float, anchors: Sequence[DayAnchor]) -> DayAnchor:
    """Ancla con menor |x - ancla.x|; en empate gana la primera."""
    if not anchors:
        raise ValueError("anchors no puede estar vacío")
    dists = np.abs(np.array([a.x for a in anchors], dtype=float) - x)
    return anchors[int(np.argmin(dists))]
