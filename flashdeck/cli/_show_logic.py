"""
Contains the logic for inspecting a saved deck archive.
This logic is called by the CLI commands in main.py.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from flashdeck.constants import STORAGE_DIR_NAME
from flashdeck.deck import Deck

logger = logging.getLogger(__name__)


@dataclass
class AttachmentStatus:
    """Metadata of one attachment plus whether its file was extracted."""

    id: str
    ext: str
    rc: int
    file_present: bool


def show_logic(
    archive_path: Path, storage_dir: Path
) -> Tuple[Deck, List[AttachmentStatus]]:
    """
    Load the archive at ``archive_path`` into ``storage_dir`` and report on its attachments.

    Attachments closed when the deck was saved have no file in the archive;
    they show up with ``file_present`` set to False.

    Raises:
        GettingDeckFromFileError: If the archive cannot be loaded.
    """
    deck = Deck.load_from_file(archive_path, storage_dir)
    files_dir = storage_dir / STORAGE_DIR_NAME

    statuses = [
        AttachmentStatus(
            id=attachment.id,
            ext=attachment.ext,
            rc=attachment.rc,
            file_present=attachment.path_in(files_dir).is_file(),
        )
        for attachment in deck.attachments
    ]
    missing = sum(1 for status in statuses if not status.file_present)
    if missing:
        logger.warning(
            f"{missing} attachment(s) of '{deck.name}' have no stored file."
        )
    return deck, statuses
