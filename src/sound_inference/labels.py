"""Class label lookup for classifier scores.

Reads the YAMNet class map CSV shipped next to the model
(header ``index,mid,display_name``).
"""

import csv
from pathlib import Path


def load_labels(path: str | Path) -> list[str]:
    """Load display names ordered by class index.

    Args:
        path: CSV file with an ``index`` column and a ``display_name``
            column. A file without a header is read as one label per row
            (last column).

    Returns:
        List of labels where ``labels[i]`` names class ``i``.
    """
    path = Path(path)
    with open(path, newline="", encoding="utf-8") as f:
        rows = [row for row in csv.reader(f) if row]

    if not rows:
        return []

    header = [cell.strip().lower() for cell in rows[0]]
    if "display_name" in header:
        name_col = header.index("display_name")
        index_col = header.index("index") if "index" in header else None
        entries = rows[1:]
        if index_col is None:
            return [row[name_col] for row in entries]
        ordered = sorted(entries, key=lambda row: int(row[index_col]))
        return [row[name_col] for row in ordered]

    return [row[-1] for row in rows]


def label_for(labels: list[str] | None, class_index: int) -> str:
    """Label for a class index, ``"Unknown"`` when it can't be resolved."""
    if not labels or class_index < 0 or class_index >= len(labels):
        return "Unknown"
    return labels[class_index]
