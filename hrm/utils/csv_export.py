"""
CSV export utilities
"""
import csv
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple, Union


def write_csv(
    destination: Union[str, Path],
    columns: Sequence[Tuple[str, str]],
    rows: Iterable[Dict],
) -> int:
    """
    Write rows to a CSV file with a header line

    Args:
        destination: Target file path
        columns: (header, key) pairs, in output order
        rows: Iterable of dictionaries with data rows

    Returns:
        Number of data rows written
    """
    headers: List[str] = [header for header, _ in columns]
    count = 0
    # utf-8-sig so spreadsheet applications detect the encoding
    with open(destination, "w", newline="", encoding="utf-8-sig") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_ALL)
        writer.writerow(headers)
        for row in rows:
            # Missing and NULL values are written as empty strings
            writer.writerow(["" if row.get(key) is None else str(row.get(key)) for _, key in columns])
            count += 1
    return count
