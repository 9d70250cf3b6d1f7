"""CSV rendering for report exports."""

import csv
import io
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

LIST_SEPARATOR = "; "


def format_cell(value) -> str:
    """Convert a row value to its CSV text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(format_cell(item) for item in value)
    return str(value)


def to_csv(rows: Iterable[Mapping], columns: Sequence[str]) -> str:
    """Render rows as RFC 4180 CSV with a header line.

    Fields containing commas, quotes or line breaks are quoted and embedded
    quotes are doubled. Missing keys render as empty cells.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow([format_cell(row.get(column)) for column in columns])
    return buffer.getvalue()
