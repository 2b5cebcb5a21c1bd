"""Domain exceptions raised by the store, validators and upload storage."""


class WorkLogError(Exception):
    """Base class for work log backend errors."""


class NotFoundError(WorkLogError):
    def __init__(self, resource: str, record_id: str):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} not found")


class SchemaValidationError(WorkLogError):
    """Input rejected by validation; carries the first failing field."""

    def __init__(self, message: str, field: str = None):
        self.message = message
        self.field = field
        super().__init__(message)


class StorageError(WorkLogError):
    """A collection file exists but is not a JSON array."""


class UploadError(WorkLogError):
    pass
