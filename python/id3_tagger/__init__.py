"""
ID3 Tagger - command-line ID3v2 tag editor for MPEG audio files.

This package provides tools to:
- Set text fields (title, artist, album, genre, year, track, publisher)
- Embed a cover image
- Write arbitrary text, URL and unique file identifier frames
- Rewrite the ID3v2 tag in place, leaving the audio data untouched
"""

__version__ = "1.0.0"
