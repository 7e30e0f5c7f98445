from __future__ import annotations

from datetime import date

import pytest

from turno_ocr.structures import BBox, OcrWord

# miércoles; el lunes de esa semana es el 6 de abril de 2026
REFERENCE = date(2026, 4, 15)


def _word(text: str, xc: float, yc: float, w: float = 60, h: float = 20) -> OcrWord:
    return OcrWord(text=text, bbox=BBox(x0=xc - w / 2, y0=yc - h / 2, x1=xc + w / 2, y1=yc + h / 2))


@pytest.fixture
def word():
    """Fábrica de palabras OCR a partir de su centro."""
    return _word


@pytest.fixture
def reference() -> date:
    return REFERENCE


@pytest.fixture
def header_words():
    # cabecera: LUNES 6 | MARTES 7 | MIÉRCOLES 8 (números en x=200, 400, 620)
    return [
        _word("LUNES", 140, 50, w=80),
        _word("6", 200, 50, w=20),
        _word("MARTES", 340, 50, w=80),
        _word("7", 400, 50, w=20),
        _word("MIÉRCOLES", 550, 50, w=100),
        _word("8", 620, 50, w=20),
    ]


@pytest.fixture
def schedule_words(header_words):
    body = [
        _word("MIGUEL", 60, 150, w=80),
        _word("09:00", 200, 150),
        _word("Ana", 60, 250, w=40),
        _word("10:00", 400, 250),
        _word("Miguel", 300, 350, w=80),
        _word("L.", 345, 350, w=20),
        _word("14.00", 400, 350),
        # números de día en el cuerpo: fuera de la franja de cabecera
        _word("JUEVES", 60, 450, w=80),
        _word("9", 120, 450, w=20),
        _word("MIGUEL", 500, 550, w=80),
        _word("16:30", 620, 550),
    ]
    return header_words + body
