import inspect
import os
from enum import Enum
from typing import Optional, Tuple

from .config import settings
from .constants import DECK_FILE_EXT


class ErrorKind(str, Enum):
    """
    Operation during which a DeckError was raised.
    """

    SavingDeck = "SavingDeck"
    GettingDeckFromFile = "GettingDeckFromFile"
    SavingAttachment = "SavingAttachment"
    CreatingAttachment = "CreatingAttachment"
    OpeningAttachment = "OpeningAttachment"

    @property
    def description(self) -> str:
        """Human-readable "Error while ..." phrase for this kind."""
        return _KIND_DESCRIPTIONS[self]


_KIND_DESCRIPTIONS = {
    ErrorKind.SavingDeck: f"saving deck to {DECK_FILE_EXT} file",
    ErrorKind.GettingDeckFromFile: f"getting deck from {DECK_FILE_EXT} file",
    ErrorKind.SavingAttachment: "saving attachment",
    ErrorKind.CreatingAttachment: "creating attachment",
    ErrorKind.OpeningAttachment: "opening attachment",
}


def _caller_location() -> Optional[Tuple[str, int]]:
    # Skip this helper and DeckError.__init__ to land on the raise site.
    frame = inspect.currentframe()
    for _ in range(2):
        if frame is None:
            return None
        frame = frame.f_back
    if frame is None:
        return None
    return os.path.basename(frame.f_code.co_filename), frame.f_lineno


class DeckError(Exception):
    """Base exception for deck persistence errors."""

    kind: ErrorKind

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        """
        Parameters:
            message (str): What went wrong, usually including the underlying error text.
            original_exception (Optional[Exception]): The low-level I/O or encoding error being wrapped.
        """
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception
        self.location = _caller_location()

    def __str__(self) -> str:
        if settings.debug_errors and self.location is not None:
            file_name, line = self.location
            return (
                f"Error while {self.kind.description} in "
                f"{file_name}:{line}: {self.message}"
            )
        return f"Error while {self.kind.description}: {self.message}"


class SavingDeckError(DeckError):
    """Raised when a deck archive cannot be built or written."""

    kind = ErrorKind.SavingDeck


class GettingDeckFromFileError(DeckError):
    """Raised when a deck cannot be restored from an archive."""

    kind = ErrorKind.GettingDeckFromFile


class SavingAttachmentError(DeckError):
    """Raised when an open attachment cannot be written to storage."""

    kind = ErrorKind.SavingAttachment


class CreatingAttachmentError(DeckError):
    """Raised when the source file of a new attachment cannot be read."""

    kind = ErrorKind.CreatingAttachment


class OpeningAttachmentError(DeckError):
    """Raised when an attachment file is missing or unreadable in storage."""

    kind = ErrorKind.OpeningAttachment


class SnapshotError(Exception):
    """Indicates the deck metadata snapshot could not be encoded or decoded."""

    pass
