"""Error kinds raised by the segmentation core.

The HTTP layer translates these into status codes (see ``errors.py``); the
core itself never retries and never swallows them.
"""
from __future__ import annotations


class SegmentationError(Exception):
    """Base class for every error surfaced by the core."""

    kind = "segmentation_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__doc__ or self.kind)
        self.message = str(self.args[0])


class NotFound(SegmentationError):
    """Record was not found"""

    kind = "not_found"


class UserNotFound(NotFound):
    """User was not found"""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"user {user_id} not found")
        self.user_id = user_id


class SegmentNotFound(NotFound):
    """Segment was not found"""

    def __init__(self, slug: str) -> None:
        super().__init__(f"segment {slug!r} not found")
        self.slug = slug


class AlreadyExists(SegmentationError):
    """Record with this data already exists"""

    kind = "already_exists"


class InvalidInput(SegmentationError):
    """Invalid request"""

    kind = "invalid_input"


class StorageError(SegmentationError):
    """Storage failure"""

    kind = "storage_error"


class ReadError(StorageError):
    """Error while reading from DB"""

    kind = "read_error"


class WriteError(StorageError):
    """Error while writing to DB"""

    kind = "write_error"
