"""Validation utilities for student form input."""

from typing import Any, Callable, Iterable, Optional
import re

NAME_PATTERN = re.compile(r"[A-Za-z\s]+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
CONTACT_PATTERN = re.compile(r"\d{10,}", re.ASCII)
STUDENT_ID_PATTERN = re.compile(r"\d+", re.ASCII)

REQUIRED_FIELDS = ("name", "email", "contact", "studentId")
TRIMMED_FIELDS = REQUIRED_FIELDS


def normalize_form(data: dict[str, Any]) -> dict[str, str]:
    """Return the form fields as strings, trimming the free-text ones."""
    result = {}
    for field in REQUIRED_FIELDS + ("course", "year"):
        value = data.get(field)
        value = "" if value is None else str(value)
        if field in TRIMMED_FIELDS:
            value = value.strip()
        result[field] = value
    return result


def validate_name(name: Optional[str]) -> Optional[str]:
    if not name or len(name) < 2:
        return "Name must be at least 2 characters long"
    if not NAME_PATTERN.fullmatch(name):
        return "Name can only contain letters and spaces"
    return None


def validate_email(email: Optional[str]) -> Optional[str]:
    if not email or not EMAIL_PATTERN.fullmatch(email):
        return "Please enter a valid email address"
    return None


def validate_contact(contact: Optional[str]) -> Optional[str]:
    """Only whitespace is stripped; hyphens and parentheses make the number invalid."""
    clean_contact = re.sub(r"\s", "", contact or "")
    if not clean_contact or not CONTACT_PATTERN.fullmatch(clean_contact):
        return "Contact number must be at least 10 digits"
    return None


def validate_student_id(student_id: Optional[str]) -> Optional[str]:
    if not student_id or len(student_id) < 3:
        return "Student ID must be at least 3 characters long"
    if not STUDENT_ID_PATTERN.fullmatch(student_id):
        return "Student ID can only contain numbers"
    return None


def validate_unique_student_id(
    student_id: str,
    records: Iterable[dict[str, Any]],
    exclude_record_id: Optional[int] = None
) -> Optional[str]:
    """Fail if any record other than the excluded one already uses the student ID."""
    for record in records:
        if exclude_record_id is not None and record.get("id") == exclude_record_id:
            continue
        if record.get("studentId") == student_id:
            return "Student ID already exists!"
    return None


FIELD_VALIDATORS: dict[str, Callable[[Optional[str]], Optional[str]]] = {
    "name": validate_name,
    "email": validate_email,
    "contact": validate_contact,
    "studentId": validate_student_id,
}


def validate_record(data: dict[str, Any]) -> dict[str, str]:
    """
    Validate every form field and collect all failures.

    Returns:
        Dict mapping field name to error message; empty when the data is valid.
    """
    errors = {}
    for field, validator in FIELD_VALIDATORS.items():
        message = validator(data.get(field))
        if message:
            errors[field] = message
    return errors


def validate_field_live(field: str, value: Optional[str]) -> Optional[str]:
    """
    Validate a single field while the user is still typing.

    An empty value shows no error yet, and length minimums on name and student
    ID wait for submission; only the character rules are checked here.
    """
    if field == "contact":
        value = re.sub(r"\s", "", value or "")
    if not value:
        return None
    if field == "name" and not NAME_PATTERN.fullmatch(value):
        return "Name can only contain letters and spaces"
    if field == "studentId" and not STUDENT_ID_PATTERN.fullmatch(value):
        return "Student ID can only contain numbers"
    if field in ("email", "contact"):
        return FIELD_VALIDATORS[field](value)
    return None


def missing_required_fields(data: dict[str, Any]) -> list[str]:
    """Return the required fields that were left empty."""
    return [field for field in REQUIRED_FIELDS if not data.get(field)]
