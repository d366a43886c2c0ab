"""Dataset ingestion: CSV text to normalised rows plus an advisory health report."""

import csv
import io
import logging
from pathlib import Path
from typing import Any, List, Mapping, NamedTuple, Union

from pageforge.errors import ParseError
from pageforge.models.template import Row
from pageforge.models.upload import DatasetReport

logger = logging.getLogger(__name__)

# Conventional column used as the slug seed; its absence is only a warning.
_COMMON_FIELDS = ("keyword",)

# Rows with fewer than this fraction of columns populated are flagged.
_MIN_ROW_DENSITY = 0.5

_SAMPLE_ROWS = (
    ("keyword", "city", "brand", "service", "count"),
    ("seo services", "Hyderabad", "Acme Digital", "Local SEO", "120"),
    ("seo services", "Bangalore", "Acme Digital", "Local SEO", "120"),
    ("digital marketing", "Mumbai", "Acme Digital", "PPC Management", "85"),
    ("web design", "Delhi", "Acme Digital", "Website Development", "200"),
)


class ParsedDataset(NamedTuple):
    rows: List[Row]
    headers: List[str]
    total_rows: int


def normalize_header(name: str) -> str:
    return name.strip().lower()


def _normalize_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def normalize_row(raw: Mapping[str, Any]) -> Row:
    """Return *raw* with trimmed, lower-cased keys and trimmed string values.

    Keys that normalise to an empty string are dropped.  Insertion order is
    kept so that "first field" stays meaningful for slug seeding.
    """
    row: Row = {}
    for key, value in raw.items():
        name = normalize_header(str(key))
        if name:
            row[name] = _normalize_value(value)
    return row


def _is_blank(row: Row) -> bool:
    return not any(value for value in row.values())


def parse_csv(content: Union[str, bytes]) -> ParsedDataset:
    """Parse CSV *content* into normalised rows and headers.

    Raises:
        ParseError: if *content* is not valid UTF-8 or not parseable as CSV.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"CSV parsing error: input is not valid UTF-8 ({exc.reason}).") from exc
    else:
        content = content.lstrip("\ufeff")

    try:
        reader = csv.reader(io.StringIO(content, newline=""), strict=True)
        records = list(reader)
    except csv.Error as exc:
        raise ParseError(f"CSV parsing error: {exc}") from exc

    if not records:
        return ParsedDataset(rows=[], headers=[], total_rows=0)

    raw_headers = [normalize_header(h) for h in records[0]]
    # Columns without a header name cannot be referenced by a template.
    columns = [(idx, name) for idx, name in enumerate(raw_headers) if name]
    # A repeated header keeps its last column, as a dict-based reader would.
    headers = list(dict.fromkeys(name for _, name in columns))

    rows: List[Row] = []
    for record in records[1:]:
        row: Row = {}
        for idx, name in columns:
            row[name] = record[idx].strip() if idx < len(record) else ""
        if not _is_blank(row):
            rows.append(row)

    logger.info("Parsed CSV dataset", extra={"rows": len(rows), "columns": len(headers)})
    return ParsedDataset(rows=rows, headers=headers, total_rows=len(rows))


def parse_csv_file(path: Union[str, Path]) -> ParsedDataset:
    """Read and parse the CSV file at *path*."""
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(f"File reading error: {exc}") from exc
    return parse_csv(content)


def validate_dataset(rows: List[Row], headers: List[str]) -> DatasetReport:
    """Check the structural health of a parsed dataset.

    Only an empty dataset or a missing header row is an error.  Empty
    columns, sparsely populated rows and missing conventional columns are
    reported as warnings.
    """
    report = DatasetReport()

    if not rows:
        report.is_valid = False
        report.errors.append("CSV file is empty or contains no valid data")
        return report

    if not headers:
        report.is_valid = False
        report.errors.append("CSV file must have headers")
        return report

    missing_common = [field for field in _COMMON_FIELDS if field not in headers]
    if missing_common:
        report.warnings.append(
            f"Consider adding these common fields: {', '.join(missing_common)}"
        )

    empty_columns = [h for h in headers if all(not row.get(h) for row in rows)]
    if empty_columns:
        report.warnings.append(f"Empty columns detected: {', '.join(empty_columns)}")

    sparse_rows = [
        row
        for row in rows
        if sum(1 for value in row.values() if value) < len(headers) * _MIN_ROW_DENSITY
    ]
    if sparse_rows:
        report.warnings.append(f"{len(sparse_rows)} rows have less than 50% of fields filled")

    return report


def get_preview(rows: List[Row], limit: int = 10) -> List[Row]:
    return rows[:max(limit, 0)]


def generate_sample_csv() -> str:
    """Return a small example dataset in CSV form."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(_SAMPLE_ROWS)
    return buffer.getvalue()
