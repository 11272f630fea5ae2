"""
Binary files linked to flashcards.

An Attachment keeps its bytes in memory only while it is open. On disk, a
storage directory holds one file per attachment named ``<id>.<ext>``; the
collection of attachments belonging to a deck is its AttachmentStore.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Iterator, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    RootModel,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .constants import MAX_REFERENCE_COUNT
from .exceptions import (
    CreatingAttachmentError,
    OpeningAttachmentError,
    SavingAttachmentError,
)

logger = logging.getLogger(__name__)


class Attachment(BaseModel):
    """
    A single binary file referenced by one or more flashcards.

    Only ``id``, ``ext`` and ``rc`` are persisted in the deck snapshot. The
    bytes are never serialized: an attachment restored from a snapshot is
    closed until ``open`` reads its file back from a storage directory.

    Note that ``rc`` is set once at creation. Nothing here recomputes it when
    cards are edited; the card-editing layer owns keeping it accurate.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        frozen=True,
        description="Unique identifier, used as the storage file stem.",
    )
    ext: str = Field(
        default="",
        frozen=True,
        description="Source file extension without the dot ('' if none).",
    )
    rc: int = Field(
        default=1,
        ge=0,
        le=MAX_REFERENCE_COUNT,
        description="How many flashcards reference this attachment.",
    )

    _data: Optional[bytes] = PrivateAttr(default=None)

    @field_validator("id", "ext")
    @classmethod
    def check_single_path_component(cls, v: str, info: ValidationInfo) -> str:
        """id and ext form a file name, so they must stay inside the storage dir."""
        if v in (".", ".."):
            raise ValueError(f"Attachment {info.field_name} cannot be '{v}'.")
        if any(c in v for c in ("/", "\\", "\x00")):
            raise ValueError(
                f"Attachment {info.field_name} {v!r} contains a path separator or NUL."
            )
        if info.field_name == "id" and not v:
            raise ValueError("Attachment id cannot be empty.")
        return v

    @classmethod
    def create(cls, source_path: Union[str, Path], rc: int = 1) -> "Attachment":
        """
        Create an open attachment holding the bytes of ``source_path``.

        Parameters:
            source_path (str | Path): File to read; its extension becomes ``ext``.
            rc (int): Number of flashcards referencing the new attachment.

        Returns:
            Attachment: A new attachment with a fresh id, in the open state.

        Raises:
            CreatingAttachmentError: If the source file cannot be read, or if
                ``rc`` or the derived extension is not a valid value.
        """
        path = Path(source_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise CreatingAttachmentError(
                f"Could not read source file {path}: {e}",
                original_exception=e,
            ) from e

        try:
            attachment = cls(ext=path.suffix[1:], rc=rc)
        except ValidationError as e:
            raise CreatingAttachmentError(
                f"Invalid attachment for {path}: {e}",
                original_exception=e,
            ) from e
        attachment._data = data
        logger.debug(
            f"Created attachment {attachment.id} from {path} ({len(data)} bytes)"
        )
        return attachment

    @property
    def file_name(self) -> str:
        """Name of this attachment's file inside a storage directory."""
        return f"{self.id}.{self.ext}" if self.ext else self.id

    def path_in(self, storage_dir: Union[str, Path]) -> Path:
        """Return where this attachment lives inside ``storage_dir``."""
        return Path(storage_dir) / self.file_name

    @property
    def is_open(self) -> bool:
        """Whether the attachment's bytes are currently held in memory."""
        return self._data is not None

    @property
    def data(self) -> Optional[bytes]:
        """The in-memory bytes, or None while closed."""
        return self._data

    def open(self, storage_dir: Union[str, Path]) -> None:
        """
        Load this attachment's bytes from ``storage_dir``, replacing any held in memory.

        Raises:
            OpeningAttachmentError: If the storage file is missing or unreadable.
        """
        path = self.path_in(storage_dir)
        try:
            self._data = path.read_bytes()
        except OSError as e:
            raise OpeningAttachmentError(
                f"Could not read attachment file {path}: {e}",
                original_exception=e,
            ) from e
        logger.debug(f"Opened attachment {self.id} from {path}")

    def close(self) -> None:
        """Drop the in-memory bytes. Files on disk are left untouched."""
        self._data = None

    def save(self, storage_dir: Union[str, Path]) -> None:
        """
        Write the in-memory bytes to ``storage_dir``, truncating any existing file.

        A closed attachment is skipped without error. If it was never written to
        this storage directory before being closed, its data is not persisted.

        Raises:
            SavingAttachmentError: If the file cannot be written.
        """
        if self._data is None:
            logger.debug(f"Attachment {self.id} is closed; skipping save.")
            return

        path = self.path_in(storage_dir)
        try:
            path.write_bytes(self._data)
        except OSError as e:
            raise SavingAttachmentError(
                f"Could not write attachment file {path}: {e}",
                original_exception=e,
            ) from e
        logger.debug(f"Saved attachment {self.id} to {path}")


class AttachmentStore(RootModel[List[Attachment]]):
    """
    Ordered collection of the attachments owned by one deck.

    Bulk operations run entry by entry in order and stop at the first failure.
    A single caller is expected to drive a store at a time.
    """

    root: List[Attachment] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "AttachmentStore":
        """Ensure no two attachments share an id."""
        seen = set()
        for attachment in self.root:
            if attachment.id in seen:
                raise ValueError(f"Duplicate attachment id '{attachment.id}'.")
            seen.add(attachment.id)
        return self

    def __iter__(self) -> Iterator[Attachment]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Attachment:
        return self.root[index]

    def add(self, attachment: Attachment) -> Attachment:
        """
        Append an attachment to the store.

        Raises:
            ValueError: If an attachment with the same id is already stored.
        """
        if self.get(attachment.id) is not None:
            raise ValueError(f"Duplicate attachment id '{attachment.id}'.")
        self.root.append(attachment)
        return attachment

    def get(self, attachment_id: str) -> Optional[Attachment]:
        """Return the attachment with ``attachment_id``, or None."""
        for attachment in self.root:
            if attachment.id == attachment_id:
                return attachment
        return None

    def save_all(self, storage_dir: Union[str, Path]) -> None:
        """
        Save every open attachment into ``storage_dir``, which must already exist.

        Raises:
            SavingAttachmentError: On the first attachment that fails to save.
        """
        for attachment in self.root:
            attachment.save(storage_dir)

    def open_all(self, storage_dir: Union[str, Path]) -> None:
        """
        Open every attachment from ``storage_dir``.

        Raises:
            OpeningAttachmentError: On the first attachment that fails to open.
        """
        for attachment in self.root:
            attachment.open(storage_dir)

    def close_all(self) -> None:
        """Close every attachment, releasing the memory held by their bytes."""
        for attachment in self.root:
            attachment.close()
