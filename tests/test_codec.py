"""
Tests for the binary deck snapshot.
"""

import struct

import pytest

from flashdeck.attachments import Attachment
from flashdeck.codec import decode_deck, encode_deck
from flashdeck.deck import Deck
from flashdeck.exceptions import SnapshotError
from flashdeck.models import CardField, CardSide, Flashcard


def _string(value: str) -> bytes:
    raw = value.encode("utf-8")
    return struct.pack("<Q", len(raw)) + raw


def _minimal_blob(deck_id: str = "d-1", name: str = "N") -> bytes:
    return _string(deck_id) + _string(name) + struct.pack("<QQ", 0, 0)


def test_empty_deck_layout():
    """An empty deck is two strings and two zero-length sequences."""
    deck = Deck(id="d-1", name="N")
    assert encode_deck(deck) == _minimal_blob()


def test_full_deck_layout():
    """Cards and attachment metadata are laid out field by field, little-endian."""
    deck = Deck(id="abc", name="Bio")
    deck.add_card(
        Flashcard(
            fields=[CardField(data="q")],
            sides=[CardSide(data="s1"), CardSide(data="s2")],
            auto_rendering=True,
        )
    )
    deck.attachments.add(Attachment(id="f1", ext="png", rc=7))

    expected = (
        _string("abc")
        + _string("Bio")
        + struct.pack("<Q", 1)
        + struct.pack("<Q", 1)
        + _string("q")
        + struct.pack("<Q", 2)
        + _string("s1")
        + _string("s2")
        + b"\x01"
        + struct.pack("<Q", 1)
        + _string("f1")
        + _string("png")
        + struct.pack("<I", 7)
    )
    assert encode_deck(deck) == expected


def test_attachment_bytes_are_not_encoded(jpeg_file):
    deck = Deck.create("With file")
    attachment = deck.add_attachment(jpeg_file, rc=2)
    blob = encode_deck(deck)
    assert attachment.data not in blob
    assert attachment.id.encode() in blob


def test_decode_restores_metadata_with_closed_attachments(biology_deck):
    restored = decode_deck(encode_deck(biology_deck))

    assert restored.id == biology_deck.id
    assert restored.name == biology_deck.name
    assert restored.cards == biology_deck.cards
    assert [(a.id, a.ext, a.rc) for a in restored.attachments] == [
        (a.id, a.ext, a.rc) for a in biology_deck.attachments
    ]
    assert not any(a.is_open for a in restored.attachments)


def test_decode_handles_multibyte_text():
    deck = Deck(id="ü-id", name="Δeck ✓")
    assert decode_deck(encode_deck(deck)).name == "Δeck ✓"


@pytest.mark.parametrize("cut", [0, 3, 8, 12])
def test_decode_truncated_blob(cut):
    with pytest.raises(SnapshotError, match="Unexpected end of snapshot"):
        decode_deck(_minimal_blob()[:cut])


def test_decode_rejects_trailing_bytes():
    with pytest.raises(SnapshotError, match="trailing bytes"):
        decode_deck(_minimal_blob() + b"\x00")


def test_decode_rejects_invalid_bool():
    blob = (
        _string("d")
        + _string("n")
        + struct.pack("<QQQ", 1, 0, 0)
        + b"\x02"
        + struct.pack("<Q", 0)
    )
    with pytest.raises(SnapshotError, match="Invalid bool byte 2"):
        decode_deck(blob)


def test_decode_rejects_invalid_utf8():
    blob = struct.pack("<Q", 2) + b"\xff\xfe" + _string("n") + struct.pack("<QQ", 0, 0)
    with pytest.raises(SnapshotError, match="Invalid UTF-8"):
        decode_deck(blob)


def test_decode_rejects_duplicate_attachment_ids():
    entry = _string("same") + _string("png") + struct.pack("<I", 1)
    blob = _string("d") + _string("n") + struct.pack("<Q", 0) + struct.pack("<Q", 2) + entry + entry
    with pytest.raises(SnapshotError, match="Snapshot does not describe a valid deck"):
        decode_deck(blob)
