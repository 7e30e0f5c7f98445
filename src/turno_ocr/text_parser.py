# src/turno_ocr/text_parser.py
"""Parser de respaldo sobre el texto plano del OCR (sin coordenadas).

Cada línea de cabecera "LUNES 6" abre un día; las líneas siguientes que contienen
algún alias aportan sus horas a ese día.
"""
from __future__ import annotations
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple
from .assembler import dedupe_and_sort
from .cleaners import clean_token, normalize
from .dates import DateLike, parse_reference_date, resolve_date
from .structures import ImportedTurn, ParsedDay
from .times import format_time

log = logging.getLogger(__name__)

HEADER_RE = re.compile(r"(LUNES|MARTES|MIERCOLES|JUEVES|VIERNES|SABADO|DOMINGO)\s+(\d{1,2})", re.IGNORECASE)
TIME_RE = re.compile(r"\b(\d{1,2}:\d{2})\b")
STRICT_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
LINE_SPLIT_RE = re.compile(r"\r?\n")

def _line_has_alias(normalized_line: str, aliases: Sequence[str]) -> bool:
    compact = clean_token(normalized_line)
    return any(alias in compact for alias in aliases)

def parse_schedule(text: str, aliases: Sequence[str]) -> List[ParsedDay]:
    if not text or not aliases:
        return []

    compact_aliases = [a for a in (clean_token(x) for x in aliases) if a]
    if not compact_aliases:
        return []

    by_key: Dict[Tuple[str, int], ParsedDay] = {}
    current: Optional[ParsedDay] = None

    for raw_line in LINE_SPLIT_RE.split(text):
        line = normalize(raw_line)
        header = HEADER_RE.search(line)
        if header:
            key = (header.group(1).upper(), int(header.group(2)))
            current = by_key.setdefault(key, ParsedDay(weekday=key[0], day_of_month=key[1]))
            continue

        if current is None:
            continue
        if not _line_has_alias(line, compact_aliases):
            continue
        current.times.extend(TIME_RE.findall(line))

    days = list(by_key.values())
    for day in days:
        day.times = list(dict.fromkeys(day.times))
    log.debug("Días detectados en texto: %d", len(days))
    return days

def normalize_time(value: str) -> Optional[str]:
    m = STRICT_TIME_RE.match(value or "")
    if not m:
        return None
    return format_time(int(m.group(1)), int(m.group(2)))

def build_turns(parsed: Sequence[ParsedDay], reference_date: DateLike = None) -> List[ImportedTurn]:
    reference = parse_reference_date(reference_date)
    turns: List[ImportedTurn] = []
    for day in parsed:
        iso = resolve_date(day.weekday, day.day_of_month, reference)
        if iso is None:
            log.debug("Se descarta %s %d: fecha no resoluble", day.weekday, day.day_of_month)
            continue
        for t in day.times:
            hhmm = normalize_time(t)
            if hhmm:
                turns.append(ImportedTurn(date=iso, start_time=hhmm))
    return dedupe_and_sort(turns)

def parse_turns_from_text(text: str, aliases: Sequence[str],
                          reference_date: DateLike = None) -> List[ImportedTurn]:
    return build_turns(parse_schedule(text, aliases), reference_date)
