"""
Defines the Deck: a storage of flashcards and the files linked to them.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from . import archive
from .attachments import Attachment, AttachmentStore
from .constants import STORAGE_DIR_NAME
from .models import Flashcard

logger = logging.getLogger(__name__)


class Deck(BaseModel):
    """
    A named collection of flashcards and their attachments, saved as one archive.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        frozen=True,
        description="Unique deck identifier. Never changes.",
    )
    name: str = Field(
        ...,
        description="Non-unique display name; also names the archive file.",
    )
    cards: List[Flashcard] = Field(
        default_factory=list,
        description="Flashcards in insertion order.",
    )
    attachments: AttachmentStore = Field(
        default_factory=AttachmentStore,
        description="Files linked with the deck's flashcards.",
    )

    @classmethod
    def create(cls, name: str) -> "Deck":
        """Create an empty deck with a fresh id."""
        return cls(name=name)

    @property
    def archive_file_name(self) -> str:
        """File name this deck is saved under, e.g. ``My_Deck.deck``."""
        return archive.archive_file_name(self.name)

    def add_card(self, card: Flashcard) -> Flashcard:
        """Append a flashcard to the deck."""
        self.cards.append(card)
        return card

    def add_attachment(
        self, source_path: Union[str, Path], rc: int = 1
    ) -> Attachment:
        """
        Read ``source_path`` into a new open attachment and add it to the deck.

        Raises:
            CreatingAttachmentError: If the source file cannot be read.
        """
        return self.attachments.add(Attachment.create(source_path, rc=rc))

    def save(
        self, target_dir: Union[str, Path], close_attachments: bool = False
    ) -> Path:
        """
        Save the deck as an archive inside ``target_dir``.

        Only attachments that are open are written into the archive; closed ones
        keep their metadata but lose their file.

        Parameters:
            target_dir (str | Path): Existing directory that receives the archive.
            close_attachments (bool): Close every attachment once the archive is
                written, releasing their bytes. Left untouched if saving fails.

        Returns:
            Path: The written archive.

        Raises:
            SavingAttachmentError: If an open attachment cannot be written.
            SavingDeckError: If the archive cannot be built or copied.
        """
        output_path = archive.build_archive(self, target_dir)
        if close_attachments:
            self.close_attachments()
        return output_path

    @classmethod
    def load_from_file(
        cls, archive_path: Union[str, Path], storage_dir: Union[str, Path]
    ) -> "Deck":
        """
        Restore a deck from an archive.

        Attachment files are copied into ``storage_dir / "storage"``; the
        returned deck's attachments are closed until opened from there.

        Raises:
            GettingDeckFromFileError: If the archive cannot be read or decoded.
        """
        return archive.read_archive(archive_path, storage_dir)

    def open_attachments(self, storage_dir: Union[str, Path]) -> None:
        """
        Open every attachment from a storage directory filled by ``load_from_file``.

        Raises:
            OpeningAttachmentError: On the first attachment whose file is missing.
        """
        self.attachments.open_all(Path(storage_dir) / STORAGE_DIR_NAME)

    def close_attachments(self) -> None:
        """Close every attachment of this deck."""
        self.attachments.close_all()
        logger.debug(f"Closed {len(self.attachments)} attachments of '{self.name}'")
