"""Terminal output for ID3 Tagger."""

from pathlib import Path
from typing import List

from id3_tagger.config import eprint
from id3_tagger.models import FrameChange, ProcessingStats


class Reporter:
    """Prints dry-run listings, failures and the run summary."""

    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "red": "\033[91m",
        "cyan": "\033[96m",
        "dim": "\033[2m",
    }

    def __init__(self, no_color: bool = False, quiet: bool = False):
        """
        Initialize reporter.

        Args:
            no_color: Disable colored output
            quiet: Suppress non-essential output
        """
        self.no_color = no_color
        self.quiet = quiet

        if no_color:
            self.COLORS = {k: "" for k in self.COLORS}

    def _c(self, color: str, text: str) -> str:
        """Apply color to text."""
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def print(self, *args, **kwargs):
        """Print unless quiet mode."""
        if not self.quiet:
            print(*args, **kwargs)

    def show_planned_changes(self, file_path: str,
                             changes: List[FrameChange]) -> None:
        """Display the frames a dry run would write."""
        self.print(f"\n{self._c('bold', 'File:')} {Path(file_path).name}")
        self.print("-" * 60)
        if not changes:
            self.print(self._c("dim", "  (no frames to write)"))
            return

        self.print(f"{'Frame':<24} {'Value'}")
        self.print(f"{'=' * 24} {'=' * 35}")
        for change in changes:
            self.print(f"{self._c('cyan', f'{change.key:<24}')} {change.description}")

    def show_failure(self, file_path: str) -> None:
        """Report a file that could not be updated. Never suppressed."""
        eprint(f"unable to update file {file_path}")

    def show_summary(self, stats: ProcessingStats) -> None:
        """Display final processing summary."""
        self.print(f"\n{self._c('bold', '=' * 60)}")
        self.print(f"{self._c('bold', 'Tagging Summary')}")
        self.print("=" * 60)

        self.print(f"Files processed:     {stats.total_files}")
        self.print(f"Files updated:       {self._c('green', str(stats.files_updated))}")
        failed = str(stats.files_failed)
        self.print(f"Files failed:        {self._c('red', failed) if stats.files_failed else failed}")

        if stats.errors:
            self.print(f"\n{self._c('red', 'Errors:')}")
            for error in stats.errors[:10]:  # Limit displayed errors
                self.print(f"  - {error}")
            if len(stats.errors) > 10:
                self.print(f"  ... and {len(stats.errors) - 10} more errors")
