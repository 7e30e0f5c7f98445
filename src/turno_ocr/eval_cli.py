from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .evaluation import evaluate_turns, write_report

log = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Evalúa turnos predichos (CSV date,startTime) contra una referencia: precision, recall y F1."
    )
    parser.add_argument("--reference", required=True, help="CSV de referencia (ground truth).")
    parser.add_argument("--predicted", required=True, help="CSV generado por el importador.")
    parser.add_argument("--report", help="Ruta opcional para guardar un reporte CSV con las métricas.")
    parser.add_argument("--json", help="Ruta opcional para guardar métricas en JSON.")
    parser.add_argument("--loglevel", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.loglevel, format="%(asctime)s - %(levelname)s - %(message)s")

    evaluation = evaluate_turns(reference_csv=args.reference, predicted_csv=args.predicted)

    log.info("Precision: %.4f Recall: %.4f F1: %.4f", evaluation.precision, evaluation.recall, evaluation.f1)
    log.info("TP=%d FP=%d FN=%d", evaluation.true_positives, evaluation.false_positives, evaluation.false_negatives)
    for row in evaluation.missing:
        log.debug("Falta: %s %s", row["date"], row["startTime"])
    for row in evaluation.unexpected:
        log.debug("Sobra: %s %s", row["date"], row["startTime"])

    if args.report:
        write_report(evaluation, args.report)
        log.info("Reporte CSV guardado en %s", args.report)

    if args.json:
        Path(args.json).parent.mkdir(parents=True, exist_ok=True)
        with open(args.json, "w", encoding="utf-8") as fh:
            json.dump(evaluation.to_dict(), fh, indent=2)
        log.info("Reporte JSON guardado en %s", args.json)


if __name__ == "__main__":
    main()
