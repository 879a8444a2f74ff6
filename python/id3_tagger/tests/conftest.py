"""Shared test fixtures for id3_tagger tests."""

import logging

import pytest
from mutagen.id3 import ID3, TIT2, TPE1, TXXX, APIC, UFID, WOAR, Encoding

from id3_tagger.config import LOGGER_NAME
from id3_tagger.models import (
    TagMetadata, CustomTextFrame, CustomUrlFrame, UniqueFileIdentifier
)

# MPEG-1 Layer III, 128 kbit/s, 44.1 kHz, no padding: 417 byte frames
MPEG_FRAME_HEADER = b"\xff\xfb\x90\x64"
MPEG_FRAME = MPEG_FRAME_HEADER + b"\x00" * (417 - len(MPEG_FRAME_HEADER))
AUDIO_DATA = MPEG_FRAME * 40

ID3V1_TRAILER = (
    b"TAG"
    + b"Old Title".ljust(30, b"\x00")
    + b"Old Artist".ljust(30, b"\x00")
    + b"Old Album".ljust(30, b"\x00")
    + b"1999"
    + b"".ljust(30, b"\x00")
    + b"\x11"
)

JPEG_DATA = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 32
PNG_DATA = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep the developer's environment and .env out of the tests."""
    monkeypatch.delenv("ID3_TAGGER_VERSION", raising=False)
    monkeypatch.delenv("ID3_TAGGER_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # Handlers from setup_logging hold the stream of the finished test
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def mp3_file(tmp_path):
    """An MPEG audio file with no tags at all."""
    path = tmp_path / "song.mp3"
    path.write_bytes(AUDIO_DATA)
    return str(path)


@pytest.fixture
def tagged_mp3_file(tmp_path):
    """An MPEG audio file with an existing ID3v2.4 tag."""
    path = tmp_path / "tagged.mp3"
    path.write_bytes(AUDIO_DATA)

    tags = ID3()
    tags.add(TIT2(encoding=Encoding.UTF8, text="Old Title"))
    tags.add(TPE1(encoding=Encoding.UTF8, text="Old Artist"))
    tags.add(TXXX(encoding=Encoding.UTF8, desc="mood", text="angry"))
    tags.add(TXXX(encoding=Encoding.UTF8, desc="tempo", text="fast"))
    tags.add(APIC(encoding=Encoding.LATIN1, mime="image/png", type=3,
                  desc="front", data=PNG_DATA))
    tags.add(APIC(encoding=Encoding.LATIN1, mime="image/png", type=4,
                  desc="back", data=PNG_DATA))
    tags.add(UFID(owner="http://musicbrainz.org", data=b"old-id"))
    tags.add(UFID(owner="http://example.org", data=b"other-id"))
    tags.add(WOAR(url="https://example.com/one"))
    tags.add(WOAR(url="https://example.com/two"))
    tags.save(str(path))
    return str(path)


@pytest.fixture
def id3v1_mp3_file(tmp_path):
    """An MPEG audio file with only an ID3v1 trailer."""
    path = tmp_path / "v1.mp3"
    path.write_bytes(AUDIO_DATA + ID3V1_TRAILER)
    return str(path)


@pytest.fixture
def not_mpeg_file(tmp_path):
    """A file that contains no MPEG audio."""
    path = tmp_path / "notes.mp3"
    path.write_bytes(b"this is not an mpeg stream\n" * 50)
    return str(path)


@pytest.fixture
def sample_metadata():
    """Metadata covering every standard field."""
    return TagMetadata(
        title="Test Song",
        artist="Test Artist",
        album="Test Album",
        album_artist="Various Artists",
        track_number=3,
        total_tracks=12,
        genre="Rock",
        year=2020,
        publisher="Test Label",
    )


@pytest.fixture
def custom_metadata():
    """Metadata with only custom frames."""
    return TagMetadata(
        text_frames=[
            CustomTextFrame(frame_id="TCOM", value="Composer"),
            CustomTextFrame(frame_id="TXXX", value="calm", description="mood"),
        ],
        url_frames=[
            CustomUrlFrame(frame_id="WOAR", url="https://example.com/artist"),
            CustomUrlFrame(frame_id="WXXX", url="https://example.com", description="home"),
        ],
        unique_ids=[
            UniqueFileIdentifier(owner="http://musicbrainz.org", identifier=b"abc-123"),
        ],
    )
