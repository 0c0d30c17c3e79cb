"""CSV parsing for the venue catalog."""
import csv
import io
import logging
from datetime import datetime, time

from pydantic import ValidationError

from app.errors import ParseError
from app.models import Venue

logger = logging.getLogger(__name__)

# Column order of the source CSV. The first row is a header and is skipped.
CSV_COLUMNS = (
    "id",
    "latitude",
    "longitude",
    "availability_radius",
    "open_hour",
    "close_hour",
    "rating",
)
TIME_FORMAT = "%H:%M:%S"


def _parse_time(value: str, column: str, line_number: int) -> time:
    try:
        return datetime.strptime(value.strip(), TIME_FORMAT).time()
    except ValueError:
        raise ParseError(f"invalid {column} {value!r}, expected HH:MM:SS", line_number)


def _check_column_count(row: list[str], line_number: int) -> None:
    if len(row) != len(CSV_COLUMNS):
        raise ParseError(
            f"wrong number of fields: expected {len(CSV_COLUMNS)}, got {len(row)}",
            line_number,
        )


def parse_row(row: list[str], line_number: int) -> Venue:
    """Build a Venue from one CSV row.

    Args:
        row: Cells of the row, in CSV_COLUMNS order
        line_number: 1-based line number, used in error messages

    Returns:
        Parsed venue

    Raises:
        ParseError: If the column count is wrong or a cell cannot be converted
    """
    _check_column_count(row, line_number)

    fields = dict(zip(CSV_COLUMNS, (cell.strip() for cell in row)))
    try:
        return Venue(
            id=int(fields["id"]),
            latitude=fields["latitude"],
            longitude=fields["longitude"],
            availability_radius=fields["availability_radius"],
            open_hour=_parse_time(fields["open_hour"], "open_hour", line_number),
            close_hour=_parse_time(fields["close_hour"], "close_hour", line_number),
            rating=fields["rating"],
        )
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ParseError(errors, line_number) from e
    except ValueError as e:
        raise ParseError(f"invalid id {fields['id']!r}", line_number) from e


def parse_venues_csv(text: str) -> list[Venue]:
    """Parse the whole catalog CSV.

    The first row is treated as a header. Rows with a blank latitude or
    longitude are skipped. Any other malformed row aborts parsing so that a
    partial catalog is never produced.

    Args:
        text: CSV document

    Returns:
        Venues in file order

    Raises:
        ParseError: On a missing header or the first malformed row
    """
    reader = csv.reader(io.StringIO(text))

    try:
        next(reader)
    except StopIteration:
        raise ParseError("empty document, missing header row")
    except csv.Error as e:
        raise ParseError(str(e), 1) from e

    venues: list[Venue] = []
    skipped = 0
    try:
        for row in reader:
            line_number = reader.line_num
            if not row:
                continue
            _check_column_count(row, line_number)
            if not row[1].strip() or not row[2].strip():
                skipped += 1
                continue
            venues.append(parse_row(row, line_number))
    except csv.Error as e:
        raise ParseError(str(e), reader.line_num) from e

    if skipped:
        logger.info(f"[CatalogCSV] Skipped {skipped} rows without coordinates")
    logger.debug(f"[CatalogCSV] Parsed {len(venues)} venues")
    return venues
