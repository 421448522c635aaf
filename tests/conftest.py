import logging
import pytest
from datetime import datetime, timedelta, timezone

from loguru import logger

from registry import LocalStorage, RecordStore


class FixedClock:
    """Clock returning a controllable UTC time."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    """Local storage file in a per-test temporary directory."""
    return LocalStorage(tmp_path / "student_storage.json")


@pytest.fixture
def store(storage, clock) -> RecordStore:
    return RecordStore(storage, clock=clock)


@pytest.fixture
def form_data() -> dict:
    """Valid registration form input."""
    return {
        "name": "John Smith",
        "email": "john.smith@example.com",
        "contact": "123 456 7890",
        "studentId": "1001",
        "course": "Computer Science",
        "year": "2nd Year",
    }


@pytest.fixture
def sample_records() -> list[dict]:
    """Stored records as they appear in local storage."""
    return [
        {
            "name": "John Smith",
            "email": "john@example.com",
            "contact": "9876543210",
            "studentId": "1001",
            "course": "Computer Science",
            "year": "1st Year",
            "id": 1709287200000,
            "registrationDate": "2024-03-01T12:00:00.000Z",
        },
        {
            "name": "Jane Doe",
            "email": "jane.smithson@example.com",
            "contact": "5551234567",
            "studentId": "1002",
            "course": "Electronics",
            "year": "2nd Year",
            "id": 1709287200001,
            "registrationDate": "2024-03-01T12:00:00.000Z",
        },
        {
            "name": "Bob Wilson",
            "email": "bob@example.org",
            "contact": "555 000 1111",
            "studentId": "2001",
            "course": "",
            "year": "",
            "id": 1709287200002,
            "registrationDate": "2024-03-02T12:00:00.000Z",
            "lastModified": "2024-03-05T08:30:00.000Z",
        },
    ]


@pytest.fixture
def restore_logging():
    """Undo loguru sinks and stdlib interception installed during a test."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    logger.remove()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    streamlit_logger = logging.getLogger("streamlit")
    streamlit_logger.handlers = []
    streamlit_logger.propagate = True
