from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import re

BBOX_RE = re.compile(r"bbox (\d+)\s+(\d+)\s+(\d+)\s+(\d+)")

def parse_bbox(title_attr: str) -> Optional[Tuple[int, int, int, int]]:
    if not title_attr:
        return None
    m = BBOX_RE.search(title_attr)
    if not m:
        return None
    x0, y0, x1, y1 = map(int, m.groups())
    return x0, y0, x1, y1

@dataclass(frozen=True)
class BBox:
    """Bounding box en píxeles de la imagen (y crece hacia abajo)."""
    x0: float
    y0: float
    x1: float
    y1: float

@dataclass(frozen=True)
class OcrWord:
    """Palabra reconocida por el motor OCR con su bbox."""
    text: str
    bbox: BBox

    @property
    def xc(self) -> float:
        return (self.bbox.x0 + self.bbox.x1) / 2.0

    @property
    def yc(self) -> float:
        return (self.bbox.y0 + self.bbox.y1) / 2.0

    @property
    def height(self) -> float:
        return max(1, self.bbox.y1 - self.bbox.y0)

@dataclass
class LineGroup:
    """Fila visual: palabras con la media de sus centros verticales."""
    y: float
    words: List[OcrWord] = field(default_factory=list)

@dataclass(frozen=True)
class LineWord:
    word: OcrWord
    raw: str
    token: str
    x: float
    y: float

@dataclass(frozen=True)
class DayAnchor:
    """Par cabecera día-de-la-semana / número de día."""
    day_num: int
    x: float
    y: float
    weekday: str = ""

@dataclass(frozen=True)
class AliasMatch:
    x: float
    y: float

@dataclass(frozen=True)
class TimeCandidate:
    time: str
    x: float

@dataclass(frozen=True)
class ImportedTurn:
    """Turno final: fecha ISO y hora de inicio HH:MM."""
    date: str
    start_time: str

    @property
    def key(self) -> Tuple[str, str]:
        return self.date, self.start_time

    def to_dict(self) -> Dict[str, str]:
        return {"date": self.date, "startTime": self.start_time}

@dataclass
class ParsedDay:
    """Día detectado por el parser textual, antes de resolver la fecha."""
    weekday: str
    day_of_month: int
    times: List[str] = field(default_factory=list)

@dataclass
class OcrResult:
    text: str
    words: List[OcrWord]
