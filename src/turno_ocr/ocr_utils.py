from __future__ import annotations

import logging
from pathlib import Path

from .ocr_adapters import words_from_tsv
from .structures import OcrResult

log = logging.getLogger(__name__)

DEFAULT_OCR_LANG = "spa"


def ocr_image(
    image_path: str,
    *,
    lang: str = DEFAULT_OCR_LANG,
    psm: int = 3,
    oem: int = 3,
) -> OcrResult:
    """
    Ejecuta Tesseract sobre una imagen y devuelve texto completo + palabras con bbox.

    Las palabras salen del TSV posicional (`image_to_data`), el texto de
    `image_to_string` para el parser textual de respaldo.
    """
    try:
        from PIL import Image
    except ImportError as exc:
        raise RuntimeError("Pillow es requerido para leer la imagen.") from exc

    try:
        import pytesseract
    except ImportError as exc:
        raise RuntimeError("pytesseract es requerido para ejecutar el OCR.") from exc

    img_path = Path(image_path)
    if not img_path.exists():
        raise FileNotFoundError(str(img_path))

    log.debug("Ejecutando OCR sobre %s (lang=%s, psm=%d)", img_path, lang, psm)
    config = f"--oem {oem} --psm {psm}"
    with Image.open(str(img_path)) as img:
        image = img.convert("RGB")
    tsv = pytesseract.image_to_data(image, lang=lang, config=config)
    text = pytesseract.image_to_string(image, lang=lang, config=config)

    words = words_from_tsv(tsv)
    log.info("OCR completado: %d palabras", len(words))
    return OcrResult(text=(text or "").strip(), words=words)
