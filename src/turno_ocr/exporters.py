# src/turno_ocr/exporters.py
from __future__ import annotations
from pathlib import Path
from typing import List, Sequence
import csv
import json
from .structures import ImportedTurn

CSV_HEADER = ["date", "startTime"]

def _ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)

def turns_to_rows(turns: Sequence[ImportedTurn]) -> List[List[str]]:
    return [[t.date, t.start_time] for t in turns]

def turns_to_csv(turns: Sequence[ImportedTurn], csv_path: str) -> None:
    _ensure_parent_dir(csv_path)
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        w.writerow(CSV_HEADER)
        w.writerows(turns_to_rows(turns))

def turns_to_json(turns: Sequence[ImportedTurn], json_path: str) -> None:
    """Mismo formato que devolvía la función de importación: {"turns": [...]}."""
    _ensure_parent_dir(json_path)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump({"turns": [t.to_dict() for t in turns]}, f, indent=2, ensure_ascii=False)
