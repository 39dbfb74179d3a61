"""CSV and JSON export of crawled records."""

import csv
import json
from typing import Any, Dict, Iterable, List, Sequence, TextIO, Union

from vinmonopolet.models import Category, ProductSummary

__all__ = [
    "record_to_row",
    "write_csv",
    "write_json",
]

Record = Union[Category, ProductSummary]


def record_to_row(record: Record) -> Dict[str, Any]:
    """Convert a record into a flat, CSV-ready row.

    Missing optional attributes become empty strings.
    """
    return {key: "" if value is None else value for key, value in record.to_dict().items()}


def write_csv(records: Sequence[Record], stream: TextIO) -> int:
    """Write records as CSV with a header row.

    Returns:
        Number of rows written
    """
    if not records:
        return 0

    rows = [record_to_row(r) for r in records]

    # Merge fieldnames across rows while preserving first-seen order
    fieldnames: List[str] = []
    for row in rows:
        for key in row.keys():
            if key not in fieldnames:
                fieldnames.append(key)

    writer = csv.DictWriter(stream, fieldnames=fieldnames, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return len(rows)


def write_json(records: Iterable[Record], stream: TextIO) -> int:
    """Write records as a pretty-printed JSON array.

    Returns:
        Number of records written
    """
    data = [r.to_dict() for r in records]
    json.dump(data, stream, ensure_ascii=False, indent=2)
    stream.write("\n")
    return len(data)
