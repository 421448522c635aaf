"""The record store: the ordered set of student records and its mutations."""

from typing import Any, Callable, Iterator, Optional
from datetime import datetime, timezone
import copy

from loguru import logger

from .errors import DuplicateIdError, NotFoundError, PersistenceError, ValidationError
from .storage import LocalStorage, load_records, save_records
from .validators import normalize_form, validate_record, validate_unique_student_id

EDITABLE_FIELDS = ("name", "email", "contact", "studentId", "course", "year")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


class PendingRemoval:
    """A delete that waits for the user to confirm it."""

    def __init__(self, store: "RecordStore", record: dict[str, Any]):
        self.store = store
        self.record = record
        self.resolved = False

    @property
    def record_id(self) -> int:
        return self.record["id"]

    @property
    def prompt(self) -> str:
        return f"Are you sure you want to delete {self.record['name']}?"

    def confirm(self) -> dict[str, Any]:
        """Carry out the deletion and return the removed record."""
        if self.resolved:
            raise NotFoundError(f"Removal of {self.record['name']} was already resolved")
        self.resolved = True
        self.store.remove(self.record_id)
        return self.record

    def cancel(self):
        self.resolved = True


class RecordStore:
    """
    Owns every student record and keeps local storage in step with it.

    Records come back to callers as copies; the store's own dicts are only
    changed through add/update/remove. Each successful mutation is written to
    storage straight away. If that write fails the mutation stays applied, the
    store switches to memory-only mode and PersistenceError is raised for the
    caller to report.
    """

    def __init__(
        self,
        storage: LocalStorage,
        key: str = "students",
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.storage = storage
        self.key = key
        self.clock = clock or utc_now
        self.memory_only = False
        self._records = load_records(storage, key)
        logger.info(f"Loaded {len(self._records)} student(s) from {storage.path}")

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.list())

    def list(self) -> list[dict[str, Any]]:
        """Return all records in insertion order."""
        return copy.deepcopy(self._records)

    def get(self, record_id: int) -> dict[str, Any]:
        return copy.deepcopy(self._find(record_id))

    def _find(self, record_id: int) -> dict[str, Any]:
        for record in self._records:
            if record.get("id") == record_id:
                return record
        raise NotFoundError(f"No student with record id {record_id}")

    def _next_id(self, moment: datetime) -> int:
        # Millisecond timestamps, bumped so rapid adds never collide
        candidate = int(moment.timestamp() * 1000)
        highest = max((r.get("id", 0) for r in self._records if isinstance(r.get("id"), int)), default=0)
        return max(candidate, highest + 1)

    def _check(self, fields: dict[str, str], exclude_record_id: Optional[int] = None):
        errors = validate_record(fields)
        if errors:
            raise ValidationError(errors)
        if validate_unique_student_id(fields["studentId"], self._records, exclude_record_id):
            raise DuplicateIdError(fields["studentId"])

    def _save(self):
        try:
            save_records(self.storage, self._records, self.key)
        except PersistenceError as e:
            self.memory_only = True
            logger.error(f"Error saving students, continuing in memory only: {e.message}")
            raise

    def add(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Validate form data and append it as a new record.

        Raises:
            ValidationError: one or more fields are invalid.
            DuplicateIdError: the student ID is already registered.
            PersistenceError: the record was added but could not be saved.
        """
        fields = normalize_form(data)
        self._check(fields)

        now = self.clock()
        record = {
            **fields,
            "id": self._next_id(now),
            "registrationDate": to_iso(now)
        }
        self._records.append(record)
        logger.info(f"Registered student {record['studentId']} ({record['name']})")
        self._save()
        return copy.deepcopy(record)

    def update(self, record_id: int, patch: dict[str, Any]) -> dict[str, Any]:
        """
        Apply edited form fields to an existing record.

        The record keeps its id and registration date and gains a lastModified
        timestamp. Its own student ID does not count as a duplicate.

        Raises:
            NotFoundError, ValidationError, DuplicateIdError, PersistenceError
        """
        record = self._find(record_id)
        merged = {field: record.get(field, "") for field in EDITABLE_FIELDS}
        merged.update({k: v for k, v in patch.items() if k in EDITABLE_FIELDS})
        fields = normalize_form(merged)
        self._check(fields, exclude_record_id=record_id)

        record.update(fields)
        record["lastModified"] = to_iso(self.clock())
        logger.info(f"Updated student {record['studentId']} (record id {record_id})")
        self._save()
        return copy.deepcopy(record)

    def remove(
        self,
        record_id: int,
        confirm: Optional[Callable[[dict[str, Any]], bool]] = None
    ) -> bool:
        """
        Delete a record.

        When ``confirm`` is given it is called with a copy of the record and
        the deletion only happens if it answers truthy.

        Returns:
            True if the record was deleted, False if confirmation was declined.
        """
        record = self._find(record_id)
        if confirm is not None and not confirm(copy.deepcopy(record)):
            logger.debug(f"Deletion of record id {record_id} declined")
            return False

        self._records.remove(record)
        logger.info(f"Deleted student {record.get('studentId')} (record id {record_id})")
        self._save()
        return True

    def request_removal(self, record_id: int) -> PendingRemoval:
        """Start a deletion that only happens once the returned object is confirmed."""
        return PendingRemoval(self, self.get(record_id))
