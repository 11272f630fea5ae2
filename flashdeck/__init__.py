"""Flashdeck - portable deck archives for flashcards and their attachments."""

from .models import CardField, CardSide, Flashcard
from .attachments import Attachment, AttachmentStore
from .deck import Deck
from .constants import DECK_FILE_EXT
from .exceptions import (
    DeckError,
    ErrorKind,
    SavingDeckError,
    GettingDeckFromFileError,
    SavingAttachmentError,
    CreatingAttachmentError,
    OpeningAttachmentError,
    SnapshotError,
)

__all__ = [
    "CardField",
    "CardSide",
    "Flashcard",
    "Attachment",
    "AttachmentStore",
    "Deck",
    "DECK_FILE_EXT",
    "DeckError",
    "ErrorKind",
    "SavingDeckError",
    "GettingDeckFromFileError",
    "SavingAttachmentError",
    "CreatingAttachmentError",
    "OpeningAttachmentError",
    "SnapshotError",
]
