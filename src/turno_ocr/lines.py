from __future__ import annotations
import logging
import math
from typing import List, Sequence, Tuple
from .cleaners import clean_token
from .settings import DEFAULT_SETTINGS, ParseSettings
from .structures import LineGroup, LineWord, OcrWord

log = logging.getLogger(__name__)

def _vertical_key(w: OcrWord) -> Tuple[float, float, str]:
    return (w.yc, w.xc, w.text)

def _horizontal_key(w: OcrWord) -> Tuple[float, float, str]:
    return (w.xc, w.yc, w.text)

def line_tolerance(words: Sequence[OcrWord],
                   settings: ParseSettings = DEFAULT_SETTINGS) -> int:
    """Tolerancia vertical a partir de la altura mediana de las palabras."""
    if not words:
        return settings.fallback_tolerance
    heights = sorted(w.height for w in words)
    median_height = heights[len(heights) // 2]
    return max(settings.min_tolerance, int(math.floor(median_height * settings.tolerance_factor + 0.5)))

def group_words_by_line(words: Sequence[OcrWord],
                        settings: ParseSettings = DEFAULT_SETTINGS
                        ) -> Tuple[List[LineGroup], int]:
    """Agrupa palabras en filas visuales.

    Recorre las palabras ordenadas por centro vertical; una palabra se une a la
    última fila abierta si su centro está a <= tolerancia de la media de la fila
    (que se actualiza de forma incremental). Devuelve (filas, tolerancia).
    """
    if not words:
        return [], settings.fallback_tolerance

    tolerance = line_tolerance(words, settings)
    lines: List[LineGroup] = []

    for w in sorted(words, key=_vertical_key):
        y = w.yc
        last = lines[-1] if lines else None
        if last is not None and abs(last.y - y) <= tolerance:
            last.words.append(w)
            n = len(last.words)
            last.y = (last.y * (n - 1) + y) / n
        else:
            lines.append(LineGroup(y=y, words=[w]))

    for line in lines:
        line.words.sort(key=_horizontal_key)

    log.debug("Filas detectadas: %d (tolerancia=%d)", len(lines), tolerance)
    return lines, tolerance

def build_line_words(line: LineGroup) -> List[LineWord]:
    return [
        LineWord(word=w, raw=w.text or "", token=clean_token(w.text), x=w.xc, y=w.yc)
        for w in line.words
    ]
