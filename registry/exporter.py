"""CSV, JSON and Excel export of the current student view."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
import io
import json

from loguru import logger
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from .errors import EmptyExportError

EXPORT_HEADERS = [
    "Student Name",
    "Email ID",
    "Contact No.",
    "Student ID",
    "Course",
    "Year",
    "Registration Date",
]

DEFAULT_DATE_FORMAT = None
INVALID_DATE = "Invalid Date"

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

EXPORT_FORMATS = {
    "csv": ("students.csv", "text/csv"),
    "json": ("students.json", "application/json"),
    "xlsx": ("students.xlsx", XLSX_MIME),
}


@dataclass
class ExportFile:
    filename: str
    mime: str
    data: str | bytes


def format_registration_date(value: Optional[str], date_format: Optional[str] = DEFAULT_DATE_FORMAT) -> str:
    """
    Render a stored ISO timestamp as a local calendar date.

    Without a ``date_format`` the date is written the way US-English browsers
    show it: month/day/year without zero padding (3/1/2024). A missing or
    unparseable timestamp is written as "Invalid Date".
    """
    if not value:
        return INVALID_DATE
    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable registration date: {value!r}")
        return INVALID_DATE
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    if not date_format:
        return f"{moment.month}/{moment.day}/{moment.year}"
    return moment.strftime(date_format)


def export_row(record: dict[str, Any], date_format: Optional[str] = DEFAULT_DATE_FORMAT) -> list[str]:
    return [
        record.get("name", ""),
        record.get("email", ""),
        record.get("contact", ""),
        record.get("studentId", ""),
        record.get("course") or "",
        record.get("year") or "",
        format_registration_date(record.get("registrationDate"), date_format),
    ]


def _require_records(records: list[dict[str, Any]]):
    if not records:
        raise EmptyExportError()


def to_csv(records: list[dict[str, Any]], date_format: Optional[str] = DEFAULT_DATE_FORMAT) -> str:
    """
    Render records as CSV text.

    Fields are joined with bare commas and never quoted; values are assumed
    to be comma-free.
    """
    _require_records(records)
    lines = [",".join(EXPORT_HEADERS)]
    for record in records:
        lines.append(",".join(export_row(record, date_format)))
    return "\n".join(lines)


def to_json(records: list[dict[str, Any]]) -> str:
    """Render records exactly as stored, pretty-printed."""
    _require_records(records)
    return json.dumps(records, indent=2, ensure_ascii=False)


def to_xlsx(records: list[dict[str, Any]], date_format: Optional[str] = DEFAULT_DATE_FORMAT) -> bytes:
    """Render records as a single-sheet Excel workbook and return its bytes."""
    _require_records(records)

    wb = Workbook()
    ws = wb.active
    ws.title = "Students"

    # Styles
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    center_align = Alignment(horizontal="center", vertical="center")
    thin_border = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin")
    )

    for col_idx, header in enumerate(EXPORT_HEADERS, 1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = center_align
        cell.border = thin_border

    for row_idx, record in enumerate(records, 2):
        for col_idx, value in enumerate(export_row(record, date_format), 1):
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            cell.border = thin_border

    # Adjust column widths
    for col_idx, header in enumerate(EXPORT_HEADERS, 1):
        longest = max(
            [len(header)] + [len(str(ws.cell(row=r, column=col_idx).value or "")) for r in range(2, len(records) + 2)]
        )
        ws.column_dimensions[get_column_letter(col_idx)].width = max(12, longest + 2)

    ws.freeze_panes = "A2"

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def export_records(
    records: list[dict[str, Any]],
    fmt: str,
    date_format: Optional[str] = DEFAULT_DATE_FORMAT,
    filenames: Optional[dict[str, str]] = None
) -> ExportFile:
    """
    Export the view in the requested format.

    Args:
        records: Records of the current filtered view, in display order
        fmt: One of 'csv', 'json' or 'xlsx'
        date_format: strftime pattern for the registration date column;
            None writes month/day/year without zero padding
        filenames: Optional overrides of the default file name per format

    Returns:
        ExportFile with file name, MIME type and content
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt}")

    filename, mime = EXPORT_FORMATS[fmt]
    if filenames and filenames.get(fmt):
        filename = filenames[fmt]

    if fmt == "csv":
        data = to_csv(records, date_format)
    elif fmt == "json":
        data = to_json(records)
    else:
        data = to_xlsx(records, date_format)

    logger.debug(f"Prepared {filename} with {len(records)} student(s)")
    return ExportFile(filename=filename, mime=mime, data=data)
