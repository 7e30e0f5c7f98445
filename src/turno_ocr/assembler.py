from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .aliases import AliasTokens, find_alias_matches, normalize_aliases
from .anchors import anchors_from_lines, nearest_day_anchor
from .dates import DateLike, parse_reference_date, resolve_date, resolve_day_heuristic
from .lines import build_line_words, group_words_by_line
from .settings import DEFAULT_SETTINGS, ParseSettings
from .structures import AliasMatch, DayAnchor, ImportedTurn, OcrWord, TimeCandidate
from .times import find_time_candidates

log = logging.getLogger(__name__)

STRATEGIES = ("verified", "heuristic")


def _check_sequence(value: object, name: str) -> None:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{name} debe ser una lista, no {type(value).__name__}")


def nearest_time(alias: AliasMatch,
                 candidates: Sequence[TimeCandidate],
                 settings: ParseSettings = DEFAULT_SETTINGS) -> Optional[TimeCandidate]:
    """Hora más cercana en X al alias dentro de la ventana [time_min_dx, time_max_dx]."""
    best: Optional[TimeCandidate] = None
    best_score = 0.0
    for c in candidates:
        dx = c.x - alias.x
        if dx < settings.time_min_dx or dx > settings.time_max_dx:
            continue
        score = abs(dx)
        if best is None or score < best_score:
            best, best_score = c, score
    return best


def dedupe_and_sort(turns: Iterable[ImportedTurn]) -> List[ImportedTurn]:
    """Elimina duplicados (gana la primera aparición) y ordena por (fecha, hora)."""
    unique = {}
    for t in turns:
        unique.setdefault(t.key, t)
    return sorted(unique.values(), key=lambda t: t.key)


def _resolve_anchor_date(anchor: DayAnchor, strategy: str, reference) -> Optional[str]:
    if strategy == "heuristic":
        return resolve_day_heuristic(anchor.day_num, reference)
    return resolve_date(anchor.weekday, anchor.day_num, reference)


def parse_turns_from_words(words: Sequence[OcrWord],
                           aliases: Sequence[str],
                           reference_date: DateLike = None,
                           *,
                           strategy: str = "verified",
                           settings: ParseSettings = DEFAULT_SETTINGS,
                           ) -> List[ImportedTurn]:
    """
    Reconstruye los turnos de un trabajador a partir de palabras OCR con bbox.

    Para cada fila con alias y horas, asigna a cada alias la hora más cercana en X
    (ventana [-60, 400] px por defecto), mapea la X de esa hora al ancla de cabecera
    más cercana y resuelve la fecha. El resultado no tiene duplicados y está
    ordenado por (fecha, hora).
    """
    _check_sequence(words, "words")
    _check_sequence(aliases, "aliases")
    if strategy not in STRATEGIES:
        raise ValueError(f"Estrategia desconocida: {strategy!r}")

    alias_sets = normalize_aliases(aliases)
    if not alias_sets:
        log.warning("No hay alias válidos tras normalizar; no se extraen turnos.")
        return []

    reference = parse_reference_date(reference_date)
    lines, tolerance = group_words_by_line(words, settings)
    anchors = anchors_from_lines(lines, tolerance, settings)
    if not anchors:
        return []

    turns = _collect_turns(lines, alias_sets, anchors, strategy, reference, settings)
    result = dedupe_and_sort(turns)
    log.info("Turnos extraídos: %d (%d antes de deduplicar)", len(result), len(turns))
    return result


def _collect_turns(lines, alias_sets: Sequence[AliasTokens], anchors: Sequence[DayAnchor],
                   strategy: str, reference, settings: ParseSettings) -> List[ImportedTurn]:
    turns: List[ImportedTurn] = []
    for line in lines:
        line_words = build_line_words(line)

        candidates = find_time_candidates(line_words)
        if not candidates:
            continue

        matches = find_alias_matches(line_words, alias_sets)
        if not matches:
            continue
        log.debug("Fila y=%.1f: %d alias, %d horas", line.y, len(matches), len(candidates))

        for match in matches:
            best = nearest_time(match, candidates, settings)
            if best is None:
                continue
            anchor = nearest_day_anchor(best.x, anchors)
            iso = _resolve_anchor_date(anchor, strategy, reference)
            if iso is None:
                log.debug("Día %s %d no resuelto; se descarta %s", anchor.weekday, anchor.day_num, best.time)
                continue
            turns.append(ImportedTurn(date=iso, start_time=best.time))
    return turns


class ScheduleParser:
    """Envoltorio con alias y ajustes fijos para parsear varias imágenes."""

    def __init__(self, aliases: Sequence[str], *, strategy: str = "verified",
                 settings: ParseSettings = DEFAULT_SETTINGS):
        if strategy not in STRATEGIES:
            raise ValueError(f"Estrategia desconocida: {strategy!r}")
        self.aliases = list(aliases)
        self.strategy = strategy
        self.settings = settings

    def parse_words(self, words: Sequence[OcrWord], reference_date: DateLike = None) -> List[ImportedTurn]:
        return parse_turns_from_words(
            words, self.aliases, reference_date,
            strategy=self.strategy, settings=self.settings,
        )
