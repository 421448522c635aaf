"""Exceptions raised by the student registry."""


class RegistryError(Exception):
    """Base class for all registry errors."""

    def __init__(self, message: str, error_code: str = "REGISTRY_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ValidationError(RegistryError):
    """One or more form fields failed validation.

    ``errors`` maps each failing field to its message so every message can be
    shown at once.
    """

    def __init__(
        self,
        errors: dict[str, str],
        message: str = "Please correct the highlighted fields",
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, error_code)
        self.errors = dict(errors)


class DuplicateIdError(RegistryError):
    """A record with the same student ID already exists."""

    def __init__(
        self,
        student_id: str,
        message: str = "Student ID already exists!",
        error_code: str = "DUPLICATE_ID",
    ):
        super().__init__(message, error_code)
        self.student_id = student_id


class NotFoundError(RegistryError):
    """The addressed record is not in the store."""

    def __init__(
        self, message: str = "Student not found", error_code: str = "NOT_FOUND"
    ):
        super().__init__(message, error_code)


class EmptyExportError(RegistryError):
    """The current view has no records to export."""

    def __init__(
        self, message: str = "No data to export!", error_code: str = "EMPTY_EXPORT"
    ):
        super().__init__(message, error_code)


class PersistenceError(RegistryError):
    """Local storage could not be written."""

    def __init__(
        self, message: str = "Error saving data!", error_code: str = "PERSISTENCE_ERROR"
    ):
        super().__init__(message, error_code)
