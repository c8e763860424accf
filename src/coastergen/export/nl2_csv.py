"""
NoLimits 2 exchange format - Tab-separated point table.

Each row holds a 1-based index followed by position, front, left and up
components with six decimals. The header is quoted; values are not.
"""

from typing import Iterable, List
import csv
import io

from coastergen.track.frame import TrackPoint


HEADER = [
    "No.",
    "PosX", "PosY", "PosZ",
    "FrontX", "FrontY", "FrontZ",
    "LeftX", "LeftY", "LeftZ",
    "UpX", "UpY", "UpZ",
]

DELIMITER = "\t"
LINE_TERMINATOR = "\n"
ENCODING = "utf-8"  # Never utf-8-sig: the editor rejects a BOM

EXPORT_EXTENSIONS = (".csv", ".txt")
DEFAULT_FILENAME = "track.csv"


def format_value(value: float) -> str:
    """Fixed six-decimal text with a '.' separator."""
    return f"{value:.6f}"


def format_row(index: int, point: TrackPoint) -> List[str]:
    """Row cells for one point.

    Args:
        index: 1-based row number
        point: Track point

    Returns:
        List of 13 cells
    """
    return [str(index)] + [format_value(v) for v in point.as_row()]


def export_text(points: Iterable[TrackPoint]) -> str:
    """Serialize points to the exchange table.

    Args:
        points: Points in travel order

    Returns:
        Table text, one line per point after the header
    """
    buffer = io.StringIO()

    header_writer = csv.writer(
        buffer,
        delimiter=DELIMITER,
        quoting=csv.QUOTE_ALL,
        lineterminator=LINE_TERMINATOR,
    )
    header_writer.writerow(HEADER)

    row_writer = csv.writer(
        buffer,
        delimiter=DELIMITER,
        quoting=csv.QUOTE_NONE,
        lineterminator=LINE_TERMINATOR,
    )
    for index, point in enumerate(points, start=1):
        row_writer.writerow(format_row(index, point))

    return buffer.getvalue()


def export_bytes(points: Iterable[TrackPoint]) -> bytes:
    """Serialize points to UTF-8 bytes without a byte-order mark."""
    return export_text(points).encode(ENCODING)


def suggested_filename(seed: int | None = None) -> str:
    """Default file name for an export."""
    if seed is None:
        return DEFAULT_FILENAME
    return f"track_{seed}.csv"
