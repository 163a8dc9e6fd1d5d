"""Error types shared by the core and the storage shell."""


class ExeBookError(Exception):
    """Base class for all ExeBook errors."""


class InvalidInput(ExeBookError, ValueError):
    """Profile or session input failed validation.

    Raised before any record is constructed, so nothing partial is saved.
    """


class StoreError(ExeBookError):
    """Base class for storage failures."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ReadError(StoreError):
    """Stored document is missing or could not be decoded."""


class WriteError(StoreError):
    """Stored document could not be written. The previous copy is untouched."""


class DuplicateRecord(StoreError):
    """A record with the same id is already stored."""
