from __future__ import annotations
import re
from typing import List, Optional, Sequence
from .structures import LineWord, TimeCandidate

# el OCR suele leer "9.00" en lugar de "9:00"
TIME_RE = re.compile(r"(\d{1,2})[:.](\d{2})")

def format_time(hour: int, minute: int) -> Optional[str]:
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return f"{hour:02d}:{minute:02d}"

def extract_time(raw: str) -> Optional[str]:
    m = TIME_RE.search(raw or "")
    if not m:
        return None
    return format_time(int(m.group(1)), int(m.group(2)))

def find_time_candidates(line_words: Sequence[LineWord]) -> List[TimeCandidate]:
    out: List[TimeCandidate] = []
    for w in line_words:
        t = extract_time(w.raw)
        if t:
            out.append(TimeCandidate(time=t, x=w.x))
    return out
