import pytest
from pathlib import Path

from flashdeck.config import settings
from flashdeck.deck import Deck
from flashdeck.models import CardField, CardSide, Flashcard


# each test runs on cwd to its temp dir, with its own scratch parent
@pytest.fixture(autouse=True)
def go_to_tmpdir(tmp_path: Path, monkeypatch):
    """
    Run each test from its own tmp_path and route scratch areas into ``tmp_path / "scratch"``.

    Also pins the settings a test may flip (debug_errors, compression_level) so
    one test cannot leak configuration into another.
    """
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "scratch_dir", scratch)
    monkeypatch.setattr(settings, "debug_errors", False)
    monkeypatch.setattr(settings, "compression_level", 6)
    yield


@pytest.fixture
def scratch_dir() -> Path:
    """The directory under which scratch areas are created during a test."""
    return settings.scratch_dir


@pytest.fixture
def jpeg_file(tmp_path: Path) -> Path:
    """
    Provide a 10-byte file with a .jpg extension.

    Returns:
        Path: ``tmp_path / "source" / "photo.jpg"``.
    """
    source = tmp_path / "source"
    source.mkdir(exist_ok=True)
    path = source / "photo.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0JFIF\x00\x01")
    return path


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    """Provide a small .mp3 file with distinct content."""
    source = tmp_path / "source"
    source.mkdir(exist_ok=True)
    path = source / "clip.mp3"
    path.write_bytes(b"ID3" + bytes(range(64)))
    return path


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """An existing, empty directory to save archives into."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """A not-yet-existing directory to load attachment files into."""
    return tmp_path / "store"


@pytest.fixture
def sample_cards() -> list:
    """
    Create three flashcards with distinct fields and sides.

    Returns:
        list[Flashcard]: Cards in a fixed order; the last one uses auto rendering.
    """
    return [
        Flashcard(
            fields=[CardField(data="mitochondria"), CardField(data="powerhouse")],
            sides=[CardSide(data="{0}"), CardSide(data="{1}")],
        ),
        Flashcard(
            fields=[CardField(data="ribosome")],
            sides=[CardSide(data="What makes proteins?")],
        ),
        Flashcard(
            fields=[CardField(data="Zellkern"), CardField(data="nucleus ✓")],
            sides=[],
            auto_rendering=True,
        ),
    ]


@pytest.fixture
def biology_deck(sample_cards, jpeg_file: Path, audio_file: Path) -> Deck:
    """
    A deck named "Biology" with three cards and two open attachments (rc=2 and rc=1).
    """
    deck = Deck.create("Biology")
    for card in sample_cards:
        deck.add_card(card)
    deck.add_attachment(jpeg_file, rc=2)
    deck.add_attachment(audio_file, rc=1)
    return deck
