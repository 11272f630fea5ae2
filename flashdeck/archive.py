"""
Builds and reads deck archives.

An archive is a gzip-compressed tarball with this layout:

    ./storage/<attachment-id>.<ext>   one per attachment open at save time
    ./deck                            binary deck metadata snapshot

All intermediate files live in a scratch directory that is removed when the
operation finishes, whether it succeeds or fails.
"""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
import tempfile
import zlib
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .codec import decode_deck, encode_deck
from .config import settings
from .constants import (
    DECK_BLOB_NAME,
    DECK_FILE_EXT,
    SCRATCH_ARCHIVE_NAME,
    STORAGE_DIR_NAME,
    WORKING_DIR_NAME,
)
from .exceptions import GettingDeckFromFileError, SavingDeckError, SnapshotError

if TYPE_CHECKING:
    from .deck import Deck

logger = logging.getLogger(__name__)


def archive_file_name(deck_name: str) -> str:
    """Return the archive file name for a deck called ``deck_name``."""
    return f"{deck_name.replace(' ', '_')}{DECK_FILE_EXT}"


def _scratch_area() -> tempfile.TemporaryDirectory:
    return tempfile.TemporaryDirectory(
        prefix="flashdeck-", dir=settings.scratch_dir
    )


def _copy_into_place(source: Path, destination: Path) -> None:
    # Copy next to the destination first so a failed copy never leaves a
    # truncated archive under the final name.
    partial = destination.with_name(destination.name + ".part")
    try:
        shutil.copyfile(source, partial)
        os.replace(partial, destination)
    finally:
        partial.unlink(missing_ok=True)


def build_archive(deck: "Deck", target_dir: Union[str, Path]) -> Path:
    """
    Write ``deck`` and its open attachments to an archive inside ``target_dir``.

    Closed attachments contribute only their metadata; no file is written for them.

    Parameters:
        deck (Deck): The deck to save.
        target_dir (str | Path): Existing directory that receives the archive.

    Returns:
        Path: Path of the written archive, ``target_dir / archive_file_name(deck.name)``.

    Raises:
        SavingAttachmentError: If an open attachment cannot be written to the scratch area.
        SavingDeckError: If any other step of the build or the final copy fails.
    """
    output_path = Path(target_dir) / archive_file_name(deck.name)
    logger.info(f"Saving deck '{deck.name}' ({deck.id}) to {output_path}")

    try:
        with _scratch_area() as scratch:
            root_dir = Path(scratch)
            working_dir = root_dir / WORKING_DIR_NAME
            storage_dir = working_dir / STORAGE_DIR_NAME
            storage_dir.mkdir(parents=True)

            deck.attachments.save_all(storage_dir)
            (working_dir / DECK_BLOB_NAME).write_bytes(encode_deck(deck))

            scratch_archive = root_dir / SCRATCH_ARCHIVE_NAME
            with tarfile.open(
                scratch_archive,
                "w:gz",
                compresslevel=settings.compression_level,
            ) as tar:
                tar.add(working_dir, arcname=".")

            _copy_into_place(scratch_archive, output_path)
    except (OSError, tarfile.TarError, SnapshotError) as e:
        logger.error(f"Failed to save deck '{deck.name}': {e}")
        raise SavingDeckError(
            f"Failed to build archive {output_path}: {e}",
            original_exception=e,
        ) from e

    logger.info(f"Deck '{deck.name}' saved to {output_path}")
    return output_path


def read_archive(
    archive_path: Union[str, Path], storage_dir: Union[str, Path]
) -> "Deck":
    """
    Restore a deck from ``archive_path``, copying its attachment files into ``storage_dir``.

    The attachment files end up in ``storage_dir / "storage"``; ``storage_dir`` is
    created if missing and same-named files already there are overwritten. Every
    attachment of the returned deck is closed.

    Raises:
        GettingDeckFromFileError: If the archive cannot be read, unpacked or decoded,
            or the attachment files cannot be copied.
    """
    archive_path = Path(archive_path)
    storage_dir = Path(storage_dir)
    logger.info(f"Loading deck from {archive_path} into {storage_dir}")

    try:
        with _scratch_area() as scratch:
            root_dir = Path(scratch)
            with tarfile.open(archive_path, "r:gz") as tar:
                tar.extractall(root_dir, filter="data")

            deck = decode_deck((root_dir / DECK_BLOB_NAME).read_bytes())

            storage_dir.mkdir(parents=True, exist_ok=True)
            shutil.copytree(
                root_dir / STORAGE_DIR_NAME,
                storage_dir / STORAGE_DIR_NAME,
                dirs_exist_ok=True,
            )
    except (
        OSError,
        EOFError,
        zlib.error,
        tarfile.TarError,
        SnapshotError,
    ) as e:
        logger.error(f"Failed to load deck from {archive_path}: {e}")
        raise GettingDeckFromFileError(
            f"Failed to read archive {archive_path}: {e}",
            original_exception=e,
        ) from e

    logger.info(
        f"Loaded deck '{deck.name}' ({deck.id}) with {len(deck.cards)} cards "
        f"and {len(deck.attachments)} attachments"
    )
    return deck
