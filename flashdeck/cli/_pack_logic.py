"""
Contains the business logic for packing files into a new deck archive.
This logic is called by the CLI commands in main.py.
"""

import logging
from pathlib import Path
from typing import List, Tuple

from flashdeck.deck import Deck

logger = logging.getLogger(__name__)


def parse_attach_spec(spec: str) -> Tuple[Path, int]:
    """
    Split an ``--attach`` value of the form ``PATH`` or ``PATH:RC``.

    A suffix after the last colon counts as the reference count only when it is
    all digits, so Windows drive letters and odd file names pass through.

    Returns:
        Tuple[Path, int]: The source path and its reference count (1 when omitted).
    """
    path_part, sep, rc_part = spec.rpartition(":")
    if sep and path_part and rc_part.isdigit():
        return Path(path_part), int(rc_part)
    return Path(spec), 1


def pack_logic(name: str, output_dir: Path, attach: List[str]) -> Path:
    """
    Create a deck called ``name``, attach the given files and save it to ``output_dir``.

    Parameters:
        name (str): Deck name; also determines the archive file name.
        output_dir (Path): Existing directory receiving the archive.
        attach (List[str]): ``PATH`` or ``PATH:RC`` values, one per attachment.

    Returns:
        Path: The written archive.

    Raises:
        DeckError: If an attachment cannot be read or the deck cannot be saved.
    """
    deck = Deck.create(name)
    for spec in attach:
        source, rc = parse_attach_spec(spec)
        attachment = deck.add_attachment(source, rc=rc)
        logger.info(f"Attached {source} as {attachment.file_name} (rc={rc})")

    return deck.save(output_dir, close_attachments=True)
