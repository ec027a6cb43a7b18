"""Reader for Flight Planner waypoint CSV exports."""
import csv
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Column positions in a Flight Planner export
COL_WAYPOINT = 0
COL_ALTITUDE_ASL = 3
COL_ALTITUDE_AGL = 4
COL_LONGITUDE = 5  # "xcoord"
COL_LATITUDE = 6   # "ycoord"
MIN_COLUMNS = 7


def is_header_row(record: List[str]) -> bool:
    """Detect the Flight Planner header by a few key columns.

    Exports vary slightly between versions ("Waypoint Number", "X [m]",
    "Y [m]", ...), so only the column name fragments are checked.
    """
    return (len(record) >= 3
            and "Waypoint" in record[0]
            and "X" in record[1]
            and "Y" in record[2])


def parse_record(line: str) -> Optional[List[str]]:
    """Parse one text line as a single CSV record.

    Returns:
        The record fields, or None for a blank line

    Raises:
        csv.Error: line is not valid CSV
    """
    reader = csv.reader([line], strict=True)
    return next(reader, None)


def read_records(lines: Iterable[str]) -> Iterator[Tuple[int, List[str]]]:
    """Yield (line number, record) for every data row in file order.

    Blank lines and header rows are skipped silently. Lines the CSV
    reader rejects are logged and skipped.
    """
    for line_num, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        try:
            record = parse_record(line)
        except csv.Error as e:
            logger.error(f"Line {line_num}: error reading CSV input: {e}")
            continue

        if not record:
            continue
        if is_header_row(record):
            logger.debug(f"Line {line_num}: skipping header row")
            continue

        yield line_num, record
