"""Data models for ID3 Tagger."""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class CustomTextFrame:
    """A text frame given by frame id, e.g. TCOM or TXXX:mood."""
    frame_id: str
    value: str
    description: Optional[str] = None

    @property
    def key(self) -> str:
        if self.frame_id == "TXXX":
            return f"TXXX:{self.description or ''}"
        return self.frame_id


@dataclass
class CustomUrlFrame:
    """A URL frame given by frame id, e.g. WOAR or WXXX:homepage."""
    frame_id: str
    url: str
    description: Optional[str] = None

    @property
    def key(self) -> str:
        if self.frame_id == "WXXX":
            return f"WXXX:{self.description or ''}"
        return self.frame_id


@dataclass
class UniqueFileIdentifier:
    """A UFID frame: an owner (usually a URL) and its opaque identifier."""
    owner: str
    identifier: bytes

    @property
    def key(self) -> str:
        return f"UFID:{self.owner}"


@dataclass
class TagMetadata:
    """Tag values requested on the command line.

    None means "leave the existing frame alone"; any other value,
    including an empty string, replaces it.
    """
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    album_artist: Optional[str] = None
    track_number: Optional[int] = None
    total_tracks: Optional[int] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    publisher: Optional[str] = None
    image: Optional[bytes] = None
    text_frames: List[CustomTextFrame] = field(default_factory=list)
    url_frames: List[CustomUrlFrame] = field(default_factory=list)
    unique_ids: List[UniqueFileIdentifier] = field(default_factory=list)

    def track_text(self) -> Optional[str]:
        """Format TRCK contents as 'N' or 'N/M'.

        The track count is only written together with a track number.
        """
        if self.track_number is None:
            return None
        text = str(self.track_number)
        if self.total_tracks is not None:
            text += f"/{self.total_tracks}"
        return text

    def has_changes(self) -> bool:
        """Check if anything would be written."""
        scalar = [self.title, self.artist, self.album, self.album_artist,
                  self.track_number, self.genre, self.year, self.publisher,
                  self.image]
        if any(value is not None for value in scalar):
            return True
        return bool(self.text_frames or self.url_frames or self.unique_ids)


@dataclass
class FrameChange:
    """One frame that will be replaced in the tag."""
    key: str
    description: str


@dataclass
class FileResult:
    """Outcome of updating a single file."""
    file_path: str
    success: bool
    changes: List[FrameChange] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ProcessingStats:
    """Statistics for a processing run."""
    total_files: int = 0
    files_updated: int = 0
    files_failed: int = 0
    errors: List[str] = field(default_factory=list)

    def record(self, result: FileResult) -> None:
        self.total_files += 1
        if result.success:
            self.files_updated += 1
        else:
            self.files_failed += 1
            if result.error:
                self.errors.append(f"{result.file_path}: {result.error}")
