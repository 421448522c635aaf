"""Search and filter logic for the student table."""

from dataclasses import dataclass
from typing import Any
import pandas as pd

from .errors import NotFoundError

SEARCH_FIELDS = ("name", "email", "studentId", "contact")

TABLE_COLUMNS = {
    "name": "Name",
    "email": "Email",
    "contact": "Contact",
    "studentId": "Student ID",
    "course": "Course",
    "year": "Year",
}


@dataclass
class FilterCriteria:
    search_term: str = ""
    course: str = ""
    year: str = ""


def matches(record: dict[str, Any], criteria: FilterCriteria) -> bool:
    """Check a single record against search term, course and year."""
    term = criteria.search_term.lower()
    if term and not any(term in str(record.get(f, "")).lower() for f in SEARCH_FIELDS):
        return False
    if criteria.course and record.get("course") != criteria.course:
        return False
    if criteria.year and record.get("year") != criteria.year:
        return False
    return True


def filter_records(
    records: list[dict[str, Any]],
    search_term: str = "",
    course: str = "",
    year: str = ""
) -> list[dict[str, Any]]:
    """
    Return the records matching all criteria, in their original order.

    The search term is matched case-insensitively as a substring of name,
    email, student ID or contact. Course and year must match exactly. Empty
    criteria match everything.
    """
    criteria = FilterCriteria(search_term or "", course or "", year or "")
    return [r for r in records if matches(r, criteria)]


def record_at(view: list[dict[str, Any]], index: int) -> dict[str, Any]:
    """Return the record behind a rendered row, or fail if the row is stale."""
    if index < 0 or index >= len(view):
        raise NotFoundError(f"No student at row {index + 1} of the current view")
    return view[index]


def stats_line(total: int, shown: int) -> str:
    text = f"Total Students: {total}"
    if shown != total:
        text += f" (Showing: {shown})"
    return text


def empty_state_message(total: int) -> str:
    if total == 0:
        return "Add your first student using the form on the left."
    return "Try adjusting your search or filter criteria."


def records_to_frame(records: list[dict[str, Any]]) -> pd.DataFrame:
    """Build the table shown in the UI; unset course or year render as '-'."""
    rows = []
    for record in records:
        row = {label: record.get(field, "") for field, label in TABLE_COLUMNS.items()}
        row["Course"] = row["Course"] or "-"
        row["Year"] = row["Year"] or "-"
        rows.append(row)
    return pd.DataFrame(rows, columns=list(TABLE_COLUMNS.values()))
