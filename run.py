# run.py
from __future__ import annotations
import sys
from pathlib import Path
import logging
import argparse

sys.path.append(str(Path(__file__).parent / "src"))
from importlib import import_module
turno_main = import_module("turno_ocr.main")
import_schedule = turno_main.import_schedule

log = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extraer los turnos de un trabajador desde la foto de un horario semanal.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--image", type=str, help="Imagen del horario (se ejecuta Tesseract)")
    source.add_argument("--hocr", type=str, help="Archivo .hocr ya generado")
    source.add_argument("--tsv", type=str, help="TSV posicional de Tesseract (image_to_data)")
    source.add_argument("--text", type=str, help="Texto plano del OCR (parser textual)")
    parser.add_argument("--alias", action="append", required=True,
                        help="Alias del trabajador; se puede repetir (p. ej. --alias 'MIGUEL L' --alias MIGUEL)")
    parser.add_argument("--reference-date", type=str, help="Fecha de referencia YYYY-MM-DD (default: hoy)")
    parser.add_argument("--strategy", type=str, default="verified", choices=["verified", "heuristic"],
                        help="Resolución de fechas (default: verified)")
    parser.add_argument("--csv", type=str, help="Ruta de salida .csv")
    parser.add_argument("--json", type=str, help="Ruta de salida .json")
    parser.add_argument("--ocr-lang", type=str, default="spa", help="Idioma OCR para Tesseract (default: spa)")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser

def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.loglevel, format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        turns = import_schedule(
            args.alias,
            image_path=args.image,
            hocr_path=args.hocr,
            tsv_path=args.tsv,
            text_path=args.text,
            reference_date=args.reference_date,
            strategy=args.strategy,
            ocr_lang=args.ocr_lang,
            csv_path=args.csv,
            json_path=args.json,
        )
        for t in turns:
            print(f"{t.date}\t{t.start_time}")
        log.info("✔ Proceso completado: %d turnos.", len(turns))
    except FileNotFoundError as e:
        log.error(f"Error: No se encontró el archivo de entrada: {e}")
        sys.exit(1)
    except Exception as e:
        log.error(f"Ocurrió un error inesperado: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
