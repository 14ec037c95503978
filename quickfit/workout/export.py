"""History ledger exports."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from quickfit.workout.history import History, sorted_entries


def export_history_json(history: History, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [
        {"date": entry.date.isoformat(), "completed": entry.completed, "progress": entry.progress}
        for entry in sorted_entries(history)
    ]
    out_path.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
    return out_path


def export_history_csv(history: History, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["date", "completed", "progress"])
        for entry in sorted_entries(history):
            writer.writerow([entry.date.isoformat(), entry.completed, entry.progress])
    return out_path
