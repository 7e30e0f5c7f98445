# src/turno_ocr/aliases.py
from __future__ import annotations
import logging
from typing import Iterable, List, Sequence, Set, Tuple
import numpy as np
from .cleaners import clean_token, normalize
from .structures import AliasMatch, LineWord

log = logging.getLogger(__name__)

AliasTokens = Tuple[str, ...]

def normalize_aliases(aliases: Iterable[str]) -> List[AliasTokens]:
    """Convierte cada alias en su tupla de tokens, los más largos primero.

    Respeta alias de varias palabras: "Miguel L." -> ("MIGUEL", "L").
    """
    result: List[AliasTokens] = []
    for alias in aliases:
        parts = tuple(p for p in (clean_token(x) for x in normalize(alias).split()) if p)
        if parts:
            result.append(parts)
    # sort estable: a igual longitud se mantiene el orden del llamador
    result.sort(key=len, reverse=True)
    return result

def find_alias_matches(line_words: Sequence[LineWord],
                       alias_sets: Sequence[AliasTokens]) -> List[AliasMatch]:
    """Busca coincidencias exactas de tokens (MIGUEL != MIGUELITO).

    Un alias corto no puede reutilizar posiciones ya tomadas por uno más largo.
    """
    valid = [w for w in line_words if w.token]
    matches: List[AliasMatch] = []
    used: Set[int] = set()

    for alias in alias_sets:
        n = len(alias)
        for i in range(len(valid) - n + 1):
            window = range(i, i + n)
            if any(k in used for k in window):
                continue
            if any(valid[i + j].token != alias[j] for j in range(n)):
                continue
            span = valid[i:i + n]
            matches.append(AliasMatch(
                x=float(np.mean([w.x for w in span])),
                y=float(np.mean([w.y for w in span])),
            ))
            used.update(window)

    return matches
