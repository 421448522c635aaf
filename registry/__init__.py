"""Core module for the student registry."""

from .config_schema import DEFAULT_CONFIG, get_default_config, merge_config, load_config, validate_config
from .errors import (
    RegistryError,
    ValidationError,
    DuplicateIdError,
    NotFoundError,
    EmptyExportError,
    PersistenceError,
)
from .validators import (
    normalize_form,
    validate_name,
    validate_email,
    validate_contact,
    validate_student_id,
    validate_unique_student_id,
    validate_record,
    validate_field_live,
    missing_required_fields,
)
from .storage import LocalStorage, load_records, save_records
from .store import RecordStore, PendingRemoval
from .filters import FilterCriteria, filter_records, record_at, stats_line, empty_state_message, records_to_frame
from .exporter import EXPORT_FORMATS, ExportFile, to_csv, to_json, to_xlsx, export_records
from .messages import StatusBoard, StatusMessage
from .log import configure_logging

__all__ = [
    "DEFAULT_CONFIG",
    "get_default_config",
    "merge_config",
    "load_config",
    "validate_config",
    "RegistryError",
    "ValidationError",
    "DuplicateIdError",
    "NotFoundError",
    "EmptyExportError",
    "PersistenceError",
    "normalize_form",
    "validate_name",
    "validate_email",
    "validate_contact",
    "validate_student_id",
    "validate_unique_student_id",
    "validate_record",
    "validate_field_live",
    "missing_required_fields",
    "LocalStorage",
    "load_records",
    "save_records",
    "RecordStore",
    "PendingRemoval",
    "FilterCriteria",
    "filter_records",
    "record_at",
    "stats_line",
    "empty_state_message",
    "records_to_frame",
    "EXPORT_FORMATS",
    "ExportFile",
    "to_csv",
    "to_json",
    "to_xlsx",
    "export_records",
    "StatusBoard",
    "StatusMessage",
    "configure_logging",
]
