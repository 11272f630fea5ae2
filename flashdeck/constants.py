"""
Deck archive format constants.

These names are part of the on-disk container layout and must not change:
archives written with one set of values cannot be read with another.
"""

# Extension of a saved deck archive (gzip-compressed tarball).
DECK_FILE_EXT: str = ".deck"

# Directory inside the archive holding attachment files (<id>.<ext>).
STORAGE_DIR_NAME: str = "storage"

# File inside the archive holding the binary deck metadata snapshot.
DECK_BLOB_NAME: str = "deck"

# Scratch-area names, never visible in the archive itself.
WORKING_DIR_NAME: str = "deck_files"
SCRATCH_ARCHIVE_NAME: str = "deck.tar.gz"

# Largest reference count the snapshot can hold (stored as u32).
MAX_REFERENCE_COUNT: int = 2**32 - 1
