"""Utility functions for ID3 Tagger."""

from pathlib import Path
from typing import Optional, Tuple

from mutagen.id3 import Frames, TextFrame, UrlFrame

from id3_tagger.models import CustomTextFrame, CustomUrlFrame, UniqueFileIdentifier


def _split_frame_arg(arg: str, option: str) -> Tuple[str, Optional[str], str]:
    """Split 'FRAME[:DESC]=VALUE' into its parts.

    The first '=' ends the frame part, so values may contain '='.
    """
    head, sep, value = arg.partition("=")
    if not sep:
        raise ValueError(f"{option} expects FRAME[:DESC]=VALUE, got {arg!r}")

    frame_id, colon, description = head.partition(":")
    frame_id = frame_id.strip().upper()
    if not frame_id:
        raise ValueError(f"{option} is missing a frame id in {arg!r}")
    return frame_id, (description if colon else None), value


def _check_frame(frame_id: str, base: type, user_frame: str,
                 description: Optional[str], kind: str) -> None:
    frame_cls = Frames.get(frame_id)
    if frame_cls is None or not issubclass(frame_cls, base):
        raise ValueError(f"{frame_id} is not an ID3v2 {kind} frame")
    if description is not None and frame_id != user_frame:
        raise ValueError(
            f"only {user_frame} takes a description, not {frame_id}"
        )


def _require_latin1(value: str, what: str) -> None:
    """ID3 stores URLs and UFID owners as Latin-1."""
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise ValueError(f"{what} must be Latin-1 text, got {value!r}") from None


def parse_text_assignment(arg: str) -> CustomTextFrame:
    """
    Parse a custom text frame argument.

    Args:
        arg: 'TCOM=Composer' or 'TXXX:description=value'

    Returns:
        CustomTextFrame for the frame

    Raises:
        ValueError: if the frame id is not a text frame
    """
    frame_id, description, value = _split_frame_arg(arg, "--text")
    _check_frame(frame_id, TextFrame, "TXXX", description, "text")
    if frame_id == "TXXX" and description is None:
        description = ""
    return CustomTextFrame(frame_id=frame_id, value=value, description=description)


def parse_url_assignment(arg: str) -> CustomUrlFrame:
    """
    Parse a custom URL frame argument.

    Args:
        arg: 'WOAR=https://...' or 'WXXX:description=https://...'

    Returns:
        CustomUrlFrame for the frame

    Raises:
        ValueError: if the frame id is not a URL frame, or the URL
            is not Latin-1
    """
    frame_id, description, url = _split_frame_arg(arg, "--url")
    _check_frame(frame_id, UrlFrame, "WXXX", description, "URL")
    _require_latin1(url, f"{frame_id} URL")
    if frame_id == "WXXX" and description is None:
        description = ""
    return CustomUrlFrame(frame_id=frame_id, url=url, description=description)


def parse_ufid_assignment(arg: str) -> UniqueFileIdentifier:
    """Parse 'OWNER=IDENTIFIER' into a UniqueFileIdentifier.

    Owners are usually URLs, so the split is on the last '='.
    """
    owner, sep, identifier = arg.rpartition("=")
    if not sep or not owner:
        raise ValueError(f"--ufid expects OWNER=IDENTIFIER, got {arg!r}")
    _require_latin1(owner, "UFID owner")
    return UniqueFileIdentifier(owner=owner, identifier=identifier.encode("utf-8"))


def read_image(path: str) -> bytes:
    """Read a whole image file into memory."""
    return Path(path).read_bytes()
