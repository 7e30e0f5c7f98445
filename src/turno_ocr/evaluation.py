from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import pandas as pd

KEY_COLUMNS = ["date", "startTime"]


@dataclass
class TurnEvaluation:
    true_positives: int
    false_positives: int
    false_negatives: int
    precision: float
    recall: float
    f1: float
    missing: List[Dict[str, str]]
    unexpected: List[Dict[str, str]]

    def to_dict(self) -> Dict[str, object]:
        return {
            "true_positives": self.true_positives,
            "false_positives": self.false_positives,
            "false_negatives": self.false_negatives,
            "precision": self.precision,
            "recall": self.recall,
            "f1": self.f1,
            "missing": self.missing,
            "unexpected": self.unexpected,
        }


def _read_csv(path: str) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    missing = [c for c in KEY_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: faltan columnas {missing}")
    df = df[KEY_COLUMNS].map(lambda x: (x or "").strip())
    df = df[(df["date"] != "") & (df["startTime"] != "")]
    return df.drop_duplicates().reset_index(drop=True)


def _ratio(num: int, den: int) -> float:
    return num / den if den else 0.0


def compare_frames(df_ref: pd.DataFrame, df_pred: pd.DataFrame) -> TurnEvaluation:
    merged = df_ref.merge(df_pred, on=KEY_COLUMNS, how="outer", indicator=True)
    merged = merged.sort_values(KEY_COLUMNS)

    tp = int((merged["_merge"] == "both").sum())
    fn_rows = merged[merged["_merge"] == "left_only"][KEY_COLUMNS]
    fp_rows = merged[merged["_merge"] == "right_only"][KEY_COLUMNS]
    fn, fp = len(fn_rows), len(fp_rows)

    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    f1 = _ratio(2 * precision * recall, precision + recall) if (precision + recall) else 0.0

    return TurnEvaluation(
        true_positives=tp,
        false_positives=fp,
        false_negatives=fn,
        precision=precision,
        recall=recall,
        f1=f1,
        missing=fn_rows.to_dict(orient="records"),
        unexpected=fp_rows.to_dict(orient="records"),
    )


def evaluate_turns(reference_csv: str, predicted_csv: str) -> TurnEvaluation:
    """Compara turnos predichos con una referencia por la clave (date, startTime)."""
    return compare_frames(_read_csv(reference_csv), _read_csv(predicted_csv))


def write_report(evaluation: TurnEvaluation, output_path: str) -> None:
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["Metric", "Value"])
        writer.writerow(["precision", f"{evaluation.precision:.4f}"])
        writer.writerow(["recall", f"{evaluation.recall:.4f}"])
        writer.writerow(["f1", f"{evaluation.f1:.4f}"])
        writer.writerow(["true_positives", evaluation.true_positives])
        writer.writerow(["false_positives", evaluation.false_positives])
        writer.writerow(["false_negatives", evaluation.false_negatives])
