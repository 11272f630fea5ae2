"""
Binary encoding of the deck metadata snapshot.

The layout is fixed and carries no version marker. Every value is written
little-endian:

    string    u64 byte length, then UTF-8 bytes
    sequence  u64 item count, then the items
    bool      one byte, 0 or 1
    rc        u32

    deck        = id, name, sequence<card>, sequence<attachment>
    card        = sequence<string fields>, sequence<string sides>, bool auto_rendering
    attachment  = id, ext, rc

Attachment bytes are never part of the snapshot.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING, Any, Callable, Dict, List

from pydantic import ValidationError

from .exceptions import SnapshotError

if TYPE_CHECKING:
    from .deck import Deck

_U8 = struct.Struct("<B")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class _Writer:
    def __init__(self) -> None:
        self._parts: List[bytes] = []

    def u32(self, value: int) -> None:
        try:
            self._parts.append(_U32.pack(value))
        except struct.error as e:
            raise SnapshotError(f"Value {value} does not fit in u32.") from e

    def length(self, value: int) -> None:
        self._parts.append(_U64.pack(value))

    def boolean(self, value: bool) -> None:
        self._parts.append(_U8.pack(1 if value else 0))

    def string(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.length(len(raw))
        self._parts.append(raw)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


class _Reader:
    def __init__(self, blob: bytes) -> None:
        self._view = memoryview(blob)
        self._pos = 0

    def _take(self, size: int) -> memoryview:
        end = self._pos + size
        if end > len(self._view):
            raise SnapshotError(
                f"Unexpected end of snapshot at byte {self._pos} "
                f"(needed {size}, {len(self._view) - self._pos} left)."
            )
        chunk = self._view[self._pos:end]
        self._pos = end
        return chunk

    def u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def length(self) -> int:
        return _U64.unpack(self._take(_U64.size))[0]

    def boolean(self) -> bool:
        value = _U8.unpack(self._take(_U8.size))[0]
        if value > 1:
            raise SnapshotError(
                f"Invalid bool byte {value} at byte {self._pos - 1}."
            )
        return value == 1

    def string(self) -> str:
        size = self.length()
        raw = self._take(size)
        try:
            return str(raw, "utf-8")
        except UnicodeDecodeError as e:
            raise SnapshotError(f"Invalid UTF-8 string in snapshot: {e}") from e

    def sequence(self, read_item: Callable[[], Any]) -> List[Any]:
        return [read_item() for _ in range(self.length())]

    def finish(self) -> None:
        remaining = len(self._view) - self._pos
        if remaining:
            raise SnapshotError(
                f"{remaining} trailing bytes after deck snapshot."
            )


def encode_deck(deck: "Deck") -> bytes:
    """
    Encode a deck's metadata (id, name, cards, attachment entries) into a snapshot blob.

    Raises:
        SnapshotError: If a value cannot be represented in the fixed layout.
    """
    out = _Writer()
    out.string(deck.id)
    out.string(deck.name)

    out.length(len(deck.cards))
    for card in deck.cards:
        out.length(len(card.fields))
        for field in card.fields:
            out.string(field.data)
        out.length(len(card.sides))
        for side in card.sides:
            out.string(side.data)
        out.boolean(card.auto_rendering)

    out.length(len(deck.attachments))
    for attachment in deck.attachments:
        out.string(attachment.id)
        out.string(attachment.ext)
        out.u32(attachment.rc)

    return out.getvalue()


def _read_card(reader: _Reader) -> Dict[str, Any]:
    return {
        "fields": reader.sequence(lambda: {"data": reader.string()}),
        "sides": reader.sequence(lambda: {"data": reader.string()}),
        "auto_rendering": reader.boolean(),
    }


def _read_attachment(reader: _Reader) -> Dict[str, Any]:
    return {
        "id": reader.string(),
        "ext": reader.string(),
        "rc": reader.u32(),
    }


def decode_deck(blob: bytes) -> "Deck":
    """
    Decode a snapshot blob into a Deck whose attachments are all closed.

    Raises:
        SnapshotError: If the blob is truncated, malformed, has trailing bytes,
            or describes a deck that fails model validation.
    """
    from .deck import Deck

    reader = _Reader(blob)
    raw = {
        "id": reader.string(),
        "name": reader.string(),
        "cards": reader.sequence(lambda: _read_card(reader)),
        "attachments": reader.sequence(lambda: _read_attachment(reader)),
    }
    reader.finish()

    try:
        return Deck.model_validate(raw)
    except ValidationError as e:
        raise SnapshotError(f"Snapshot does not describe a valid deck: {e}") from e
