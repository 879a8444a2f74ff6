#!/usr/bin/env python3
"""
ID3 Tagger - set ID3v2 frames on MPEG audio files.

Usage:
    python -m id3_tagger [fields] FILE...
"""

import argparse
import logging
import sys
from typing import List, Optional

from id3_tagger.config import (
    load_config, validate_config, setup_logging, eprint, SUPPORTED_ID3_VERSIONS
)
from id3_tagger.models import TagMetadata, ProcessingStats
from id3_tagger.id3_handler import ID3Handler
from id3_tagger.reporter import Reporter
from id3_tagger.utils import (
    parse_text_assignment, parse_url_assignment, parse_ufid_assignment, read_image
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_FILE_FAILED = 2


class TaggerArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


class TaggerProcessor:
    """Applies one set of tag changes to a list of files."""

    def __init__(self, config: dict, args: argparse.Namespace,
                 reporter: Reporter):
        """
        Initialize processor.

        Args:
            config: Configuration dictionary
            args: CLI arguments
            reporter: Terminal output handler
        """
        self.config = config
        self.args = args
        self.reporter = reporter
        self.stats = ProcessingStats()

        self.id3_handler = ID3Handler(
            id3_version=config["id3_version"],
            dry_run=args.dry_run,
        )

    def process(self, metadata: TagMetadata, paths: List[str]) -> int:
        """
        Update every file, continuing past failures.

        Args:
            metadata: Tag values to write
            paths: Files to update, in order

        Returns:
            Process exit code: 0 if all files were updated, 2 otherwise.
        """
        if not metadata.has_changes():
            logger.info("No fields given; tags will only be rewritten")

        for path in paths:
            result = self.id3_handler.update_file(path, metadata)
            self.stats.record(result)

            if not result.success:
                self.reporter.show_failure(path)
            elif self.args.dry_run:
                self.reporter.show_planned_changes(path, result.changes)

        if len(paths) > 1 or self.args.verbose:
            self.reporter.show_summary(self.stats)

        return EXIT_FILE_FAILED if self.stats.files_failed else EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = TaggerArgumentParser(
        prog="id3-tagger",
        description="Set ID3v2 tag frames on MPEG audio files. "
                    "Only the frames given are replaced; all others are kept.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Set title and artist
  id3-tagger -t "Song" -a "Artist" song.mp3

  # Track 3 of 12 on several files
  id3-tagger -n 3 -N 12 a.mp3 b.mp3

  # Embed a cover image
  id3-tagger -i cover.jpg song.mp3

  # Custom frames
  id3-tagger -T TCOM=Bach -T "TXXX:mood=calm" -U "WOAR=https://example.com" \\
      --ufid "http://musicbrainz.org=1234" song.mp3
"""
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="MPEG audio files to update"
    )

    # Fields
    fields = parser.add_argument_group("fields")
    fields.add_argument("-t", dest="title", metavar="TITLE", help="Title (TIT2)")
    fields.add_argument("-a", dest="artist", metavar="ARTIST", help="Artist (TPE1)")
    fields.add_argument("-A", dest="album", metavar="ALBUM", help="Album (TALB)")
    fields.add_argument("-b", dest="album_artist", metavar="ALBUMARTIST",
                        help="Album artist (TPE2)")
    fields.add_argument("-n", dest="track_number", type=int, metavar="NUMBER",
                        help="Track number (TRCK)")
    fields.add_argument("-N", dest="total_tracks", type=int, metavar="COUNT",
                        help="Track count, used together with -n (TRCK)")
    fields.add_argument("-G", dest="genre", metavar="GENRE", help="Genre (TCON)")
    fields.add_argument("-Y", dest="year", type=int, metavar="YEAR",
                        help="Year (TDRC)")
    fields.add_argument("-p", dest="publisher", metavar="PUBLISHER",
                        help="Publisher (TPUB)")
    fields.add_argument("-i", dest="image", metavar="IMAGE",
                        help="Cover image file (APIC)")

    # Custom frames
    custom = parser.add_argument_group("custom frames")
    custom.add_argument(
        "--text", "-T",
        action="append",
        default=[],
        metavar="FRAME[:DESC]=VALUE",
        help="Any text frame, e.g. TCOM=Bach or TXXX:mood=calm (repeatable)"
    )
    custom.add_argument(
        "--url", "-U",
        action="append",
        default=[],
        metavar="FRAME[:DESC]=URL",
        help="Any URL frame, e.g. WOAR=https://... or WXXX:home=https://... (repeatable)"
    )
    custom.add_argument(
        "--ufid",
        action="append",
        default=[],
        metavar="OWNER=ID",
        help="Unique file identifier frame (repeatable)"
    )

    # Output
    parser.add_argument(
        "--id3-version",
        type=int,
        choices=SUPPORTED_ID3_VERSIONS,
        help="ID3v2 minor version to write (default: 3, or ID3_TAGGER_VERSION)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the frames that would be written without saving"
    )

    # Configuration
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: ./.env)"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    # Verbosity
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every frame written"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output"
    )

    return parser


def parse_metadata(args: argparse.Namespace) -> TagMetadata:
    """
    Collect tag values from parsed arguments.

    Raises:
        ValueError: for malformed custom frames
        OSError: if the image file can't be read
    """
    metadata = TagMetadata(
        title=args.title,
        artist=args.artist,
        album=args.album,
        album_artist=args.album_artist,
        track_number=args.track_number,
        total_tracks=args.total_tracks,
        genre=args.genre,
        year=args.year,
        publisher=args.publisher,
    )

    if args.image is not None:
        metadata.image = read_image(args.image)

    metadata.text_frames = [parse_text_assignment(s) for s in args.text]
    metadata.url_frames = [parse_url_assignment(s) for s in args.url]
    metadata.unique_ids = [parse_ufid_assignment(s) for s in args.ufid]

    return metadata


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        metadata = parse_metadata(args)
    except ValueError as e:
        parser.error(str(e))
    except OSError as e:
        parser.error(f"cannot read image {args.image}: {e.strerror or e}")

    # Load configuration
    config = load_config(args.env_file, quiet=args.quiet)
    if args.id3_version is not None:
        config["id3_version"] = args.id3_version

    problems = validate_config(config)
    if problems:
        for problem in problems:
            eprint(f"Configuration error: {problem}")
        return EXIT_USAGE

    setup_logging(config["log_level"], verbose=args.verbose)

    reporter = Reporter(no_color=args.no_color, quiet=args.quiet)
    processor = TaggerProcessor(config, args, reporter)

    try:
        return processor.process(metadata, args.files)
    except KeyboardInterrupt:
        eprint("\nInterrupted by user.")
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
