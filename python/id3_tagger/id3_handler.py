"""ID3v2 tag writer for MPEG files using mutagen."""

import logging
import os
from pathlib import Path
from typing import List, Tuple

from mutagen import MutagenError
from mutagen.mp3 import MP3
from mutagen.id3 import (
    Frame, Frames, Encoding, PictureType, APIC, TXXX, WXXX, UFID,
)

from id3_tagger.config import DEFAULT_ID3_VERSION
from id3_tagger.models import TagMetadata, FrameChange, FileResult

logger = logging.getLogger(__name__)

JPEG_MAGIC = b"\xff\xd8\xff\xe0"
PNG_MAGIC = b"\x89PNG"


def detect_image_mime_type(data: bytes) -> str:
    """Guess the MIME type of an image from its first bytes."""
    if len(data) > 4:
        if data.startswith(JPEG_MAGIC):
            return "image/jpeg"
        if data.startswith(PNG_MAGIC):
            return "image/png"
    return "application/octet-stream"


def _preview(value: str, limit: int = 40) -> str:
    return value if len(value) <= limit else value[:limit - 3] + "..."


class ID3Handler:
    """Replaces ID3v2 frames in MPEG files."""

    SUPPORTED_EXTENSIONS = {".mp3", ".mp2", ".mpga"}

    # Frame id -> TagMetadata attribute, in write order
    TEXT_FIELDS = [
        ("TPE1", "artist"),
        ("TALB", "album"),
        ("TPE2", "album_artist"),
        ("TIT2", "title"),
    ]

    # Frames update_to_v23() rewrites under another id
    V23_CONVERSIONS = {"TDRC": "TYER", "TDOR": "TORY"}

    def __init__(self, id3_version: int = DEFAULT_ID3_VERSION,
                 dry_run: bool = False):
        """
        Initialize handler.

        Args:
            id3_version: Minor ID3v2 version to save (3 or 4)
            dry_run: Build frames but never save the file
        """
        self.id3_version = id3_version
        self.dry_run = dry_run

    @classmethod
    def is_supported(cls, file_path: str) -> bool:
        """Check if file extension looks like MPEG audio."""
        return Path(file_path).suffix.lower() in cls.SUPPORTED_EXTENSIONS

    @staticmethod
    def _text(frame_id: str, text: str) -> Frame:
        return Frames[frame_id](encoding=Encoding.UTF16, text=text)

    def build_frames(self, metadata: TagMetadata) -> List[Tuple[str, Frame]]:
        """
        Build the frames to write for the given metadata.

        Args:
            metadata: Requested tag values

        Returns:
            List of (key, frame) pairs. Existing frames matching the key are
            removed before the frame is added.
        """
        frames = []

        for frame_id, attr in self.TEXT_FIELDS:
            value = getattr(metadata, attr)
            if value is not None:
                frames.append((frame_id, self._text(frame_id, value)))

        track = metadata.track_text()
        if track is not None:
            frames.append(("TRCK", self._text("TRCK", track)))
        if metadata.genre is not None:
            frames.append(("TCON", self._text("TCON", metadata.genre)))
        if metadata.publisher is not None:
            frames.append(("TPUB", self._text("TPUB", metadata.publisher)))
        if metadata.year is not None:
            frames.append(("TDRC", self._text("TDRC", str(metadata.year))))

        if metadata.image is not None:
            frames.append(("APIC", APIC(
                encoding=Encoding.LATIN1,
                mime=detect_image_mime_type(metadata.image),
                type=PictureType.OTHER,
                desc="",
                data=metadata.image,
            )))

        for custom in metadata.text_frames:
            if custom.frame_id == "TXXX":
                frame = TXXX(encoding=Encoding.UTF16,
                             desc=custom.description or "", text=custom.value)
            else:
                frame = self._text(custom.frame_id, custom.value)
            frames.append((custom.key, frame))

        for custom in metadata.url_frames:
            if custom.frame_id == "WXXX":
                frame = WXXX(encoding=Encoding.UTF16,
                             desc=custom.description or "", url=custom.url)
            else:
                frame = Frames[custom.frame_id](url=custom.url)
            frames.append((custom.key, frame))

        for ufid in metadata.unique_ids:
            frames.append((ufid.key, UFID(owner=ufid.owner, data=ufid.identifier)))

        return frames

    @staticmethod
    def describe_frame(key: str, frame: Frame) -> FrameChange:
        """Summarize a frame for display."""
        if isinstance(frame, APIC):
            description = f"{frame.mime}, {len(frame.data)} bytes"
        elif isinstance(frame, UFID):
            description = _preview(frame.data.decode("utf-8", "replace"))
        elif hasattr(frame, "url"):
            description = _preview(frame.url)
        else:
            description = _preview(str(frame))
        return FrameChange(key=key, description=description)

    def plan_changes(self, metadata: TagMetadata) -> List[FrameChange]:
        """Describe the frames that would be written, for display."""
        return [self.describe_frame(key, frame)
                for key, frame in self.build_frames(metadata)]

    def update_file(self, file_path: str, metadata: TagMetadata) -> FileResult:
        """
        Replace the requested frames in the file's ID3v2 tag.

        Args:
            file_path: Path to MPEG audio file
            metadata: Requested tag values

        Returns:
            FileResult; success is False if the file could not be
            opened, is not MPEG audio, or could not be saved.
        """
        if not os.path.isfile(file_path):
            return self._failure(file_path, "file not found")
        if not self.dry_run and not os.access(file_path, os.W_OK):
            return self._failure(file_path, "file is read-only")
        if not self.is_supported(file_path):
            logger.warning(f"{file_path}: unexpected extension, trying as MPEG audio")

        try:
            audio = MP3(file_path)
            if audio.tags is None:
                logger.debug(f"{file_path}: no ID3v2 tag, creating one")
                audio.add_tags()

            frames = self.build_frames(metadata)
            for key, frame in frames:
                audio.tags.delall(key)
                audio.tags.add(frame)
                logger.debug(f"{file_path}: set {key}")

            if self.id3_version == 3:
                audio.tags.update_to_v23()
                frames = self._frames_after_downgrade(file_path, audio.tags, frames)

            changes = [self.describe_frame(key, frame) for key, frame in frames]
            if self.dry_run:
                return FileResult(file_path=file_path, success=True, changes=changes)

            audio.save(v1=1, v2_version=self.id3_version)
        except (MutagenError, OSError, ValueError) as e:
            # ValueError covers text that cannot be encoded in a Latin-1 field
            return self._failure(file_path, str(e))

        logger.info(f"Updated {len(frames)} frame(s) in {file_path}")
        return FileResult(file_path=file_path, success=True, changes=changes)

    def _frames_after_downgrade(self, file_path: str, tags,
                                frames: List[Tuple[str, Frame]]) -> List[Tuple[str, Frame]]:
        """Return the frames as they stand after update_to_v23().

        Dates move to their v2.3 frames; v2.4-only frames are gone.
        """
        kept = []
        for key, _ in frames:
            key = self.V23_CONVERSIONS.get(key, key)
            found = tags.getall(key)
            if found:
                kept.append((key, found[0]))
            else:
                logger.warning(f"{file_path}: {key} has no ID3v2.3 form and will not be written")
        return kept

    def _failure(self, file_path: str, reason: str) -> FileResult:
        logger.error(f"Error writing tags to {file_path}: {reason}")
        return FileResult(file_path=file_path, success=False, error=reason)
