"""Domain error taxonomy for the data room.

Every failure a user action can hit is one of these classes. Each carries a
single human-readable message; the API layer maps the class to an HTTP status
and returns the message as-is.
"""


class DataRoomError(Exception):
    """Base exception for data room operations."""

    code = "dataroom_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCredentials(DataRoomError):
    """Gate credentials did not match. Never says which field was wrong."""

    code = "invalid_credentials"

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class GateLocked(DataRoomError):
    """An operation was attempted while the gate is locked."""

    code = "gate_locked"

    def __init__(self, message: str = "Data room is locked"):
        super().__init__(message)


class StoreUnavailable(DataRoomError):
    """Listing the bucket failed (transport or permission error)."""

    code = "store_unavailable"


class UploadRejected(DataRoomError):
    """The object store (or the upload size limit) rejected an upload."""

    code = "upload_rejected"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class DeleteRejected(DataRoomError):
    """The object store rejected a delete."""

    code = "delete_rejected"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class DeletionNotConfirmed(DataRoomError):
    """A delete request arrived without explicit user confirmation."""

    code = "deletion_not_confirmed"

    def __init__(self, message: str = "Deletion must be confirmed"):
        super().__init__(message)


class InquiryRejected(DataRoomError):
    """Inquiry text was empty after trimming."""

    code = "inquiry_rejected"

    def __init__(self, message: str = "Inquiry text must not be empty"):
        super().__init__(message)


class LogUnavailable(DataRoomError):
    """The inquiry log could not be written."""

    code = "log_unavailable"
