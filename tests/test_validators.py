import pytest

from registry.validators import (
    missing_required_fields,
    normalize_form,
    validate_contact,
    validate_email,
    validate_field_live,
    validate_name,
    validate_record,
    validate_student_id,
    validate_unique_student_id,
)


class TestNameValidation:
    """Names are letters and spaces, at least two characters."""

    def test_valid_name(self):
        assert validate_name("John Smith") is None

    def test_name_with_digits_fails(self):
        assert validate_name("John3") == "Name can only contain letters and spaces"

    @pytest.mark.parametrize("value", ["", None, "J"])
    def test_too_short_or_missing(self, value):
        assert validate_name(value) == "Name must be at least 2 characters long"

    def test_punctuation_fails(self):
        assert validate_name("O'Brien") == "Name can only contain letters and spaces"


class TestEmailValidation:

    def test_valid_email(self):
        assert validate_email("john.smith@example.com") is None

    @pytest.mark.parametrize("value", [
        "",
        None,
        "john@example",
        "john @example.com",
        "john@ example.com",
        "johnexample.com",
        "john@@example.com",
    ])
    def test_invalid_email(self, value):
        assert validate_email(value) == "Please enter a valid email address"


class TestContactValidation:
    """Only whitespace is removed before the digit check."""

    def test_spaced_number_passes(self):
        assert validate_contact("123 456 7890") is None

    def test_long_number_passes(self):
        assert validate_contact("919876543210") is None

    def test_hyphenated_number_fails(self):
        assert validate_contact("123-456-7890") == "Contact number must be at least 10 digits"

    @pytest.mark.parametrize("value", ["", "   ", "12345", "(123) 4567890", None])
    def test_invalid_contact(self, value):
        assert validate_contact(value) == "Contact number must be at least 10 digits"

    def test_non_ascii_digits_fail(self):
        assert validate_contact("\u0661" * 10) == "Contact number must be at least 10 digits"
        assert validate_contact("\uff11" * 10) == "Contact number must be at least 10 digits"


class TestStudentIdValidation:

    def test_valid_id(self):
        assert validate_student_id("123") is None

    @pytest.mark.parametrize("value", ["", None, "12"])
    def test_too_short(self, value):
        assert validate_student_id(value) == "Student ID must be at least 3 characters long"

    @pytest.mark.parametrize("value", ["12a", "abc", "1 23"])
    def test_non_digits(self, value):
        assert validate_student_id(value) == "Student ID can only contain numbers"

    @pytest.mark.parametrize("value", ["\u0661\u0662\u0663", "\u0967\u0968\u0969"])
    def test_non_ascii_digits_fail(self, value):
        assert validate_student_id(value) == "Student ID can only contain numbers"


class TestUniqueStudentId:

    def test_duplicate_detected(self, sample_records):
        assert validate_unique_student_id("1001", sample_records) == "Student ID already exists!"

    def test_excluded_record_is_ignored(self, sample_records):
        own_id = sample_records[0]["id"]
        assert validate_unique_student_id("1001", sample_records, exclude_record_id=own_id) is None

    def test_exclusion_does_not_hide_other_records(self, sample_records):
        other_id = sample_records[1]["id"]
        assert validate_unique_student_id("1001", sample_records, exclude_record_id=other_id) is not None

    def test_new_id_passes(self, sample_records):
        assert validate_unique_student_id("9999", sample_records) is None


class TestAggregateValidation:

    def test_valid_record(self, form_data):
        assert validate_record(form_data) == {}

    def test_all_failures_reported(self):
        errors = validate_record({"name": "J3", "email": "bad", "contact": "123", "studentId": "x"})
        assert set(errors) == {"name", "email", "contact", "studentId"}

    def test_course_and_year_are_optional(self, form_data):
        form_data["course"] = ""
        form_data["year"] = ""
        assert validate_record(form_data) == {}

    def test_missing_required_fields(self):
        assert missing_required_fields({"name": "Jo", "email": "", "contact": "1234567890"}) == [
            "email",
            "studentId",
        ]

    def test_normalize_trims_text_fields(self):
        data = normalize_form({"name": "  Jane Doe ", "studentId": " 123 ", "course": None})
        assert data["name"] == "Jane Doe"
        assert data["studentId"] == "123"
        assert data["course"] == ""
        assert data["year"] == ""


class TestLiveValidation:
    """Checks run while typing only flag character problems."""

    def test_empty_values_show_nothing(self):
        for field in ("name", "email", "contact", "studentId"):
            assert validate_field_live(field, "") is None

    def test_short_name_waits_for_submit(self):
        assert validate_field_live("name", "J") is None

    def test_bad_name_characters(self):
        assert validate_field_live("name", "J3") == "Name can only contain letters and spaces"

    def test_short_student_id_waits_for_submit(self):
        assert validate_field_live("studentId", "12") is None

    def test_bad_student_id_characters(self):
        assert validate_field_live("studentId", "12a") == "Student ID can only contain numbers"

    def test_non_ascii_digits_flagged_while_typing(self):
        assert validate_field_live("studentId", "\u0661\u0662") == "Student ID can only contain numbers"
        assert validate_field_live("contact", "\u0661" * 10) == "Contact number must be at least 10 digits"

    def test_partial_contact(self):
        assert validate_field_live("contact", "123 45") == "Contact number must be at least 10 digits"

    def test_whitespace_contact_shows_nothing(self):
        assert validate_field_live("contact", "   ") is None

    def test_email(self):
        assert validate_field_live("email", "john@") == "Please enter a valid email address"
        assert validate_field_live("email", "john@example.com") is None

    def test_unchecked_field(self):
        assert validate_field_live("course", "anything") is None
