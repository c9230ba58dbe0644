# -*- coding: utf-8 -*-
"""CSV rendering for admin list exports."""

from __future__ import annotations

import csv
import io
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

Column = Union[str, Tuple[str, str]]

LIST_SEPARATOR = "; "


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join("" if v is None else str(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _normalize_columns(rows: List[Dict[str, Any]], columns: Optional[Sequence[Column]]) -> List[Tuple[str, str]]:
    if columns is None:
        return [(key, key) for key in rows[0].keys()]
    normalized = []
    for col in columns:
        if isinstance(col, tuple):
            normalized.append((col[0], col[1]))
        else:
            normalized.append((col, col))
    return normalized


def to_csv(rows: Iterable[Dict[str, Any]], columns: Optional[Sequence[Column]] = None) -> str:
    """Render dict rows as CSV text.

    ``columns`` is a list of keys or ``(key, label)`` pairs; without it the keys of
    the first row are used. List values are joined with ``"; "``. Fields holding a
    comma, quote or newline are quoted with doubled inner quotes. No rows means an
    empty string (not even a header).
    """
    rows = list(rows)
    if not rows:
        return ""
    cols = _normalize_columns(rows, columns)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow([label for _, label in cols])
    for row in rows:
        writer.writerow([_cell(row.get(key)) for key, _ in cols])
    return buf.getvalue()
