"""
Line stream processing.

Drives the parse, renumber and write stages over a stream of input lines.
Each line is handled independently; a failing line produces an ``error``
marker on the error stream and processing moves on to the next line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Iterable, TextIO

from mapsmi.exceptions import MapsmiError
from mapsmi.parser import parse_line
from mapsmi.renumber import Renumberer, renumber_line
from mapsmi.writer import format_line

logger = logging.getLogger(__name__)

ERROR_MARKER: Final[str] = "error"


@dataclass
class StreamStats:
    """Counters for one processed stream."""
    
    processed: int = 0
    failed: int = 0
    
    @property
    def total(self) -> int:
        return self.processed + self.failed
    
    @property
    def ok(self) -> bool:
        return self.failed == 0


def process_line(line: str, renumberer: Renumberer | None = None) -> str:
    """Parse, renumber and format one input line.
    
    Args:
        line: Input line.
        renumberer: Renumberer to use (default settings if None).
    
    Returns:
        Output line without a trailing newline.
    
    Raises:
        MapsmiError: If the line cannot be parsed or renumbered.
    
    Example:
        >>> process_line("m1 [C:5]([H:20])[O:3] (4, 2)")
        'm1 [C:2]([H:3])[O:1] (1, 0)'
    """
    return format_line(renumber_line(parse_line(line), renumberer))


def process_stream(
    lines: Iterable[str],
    out: TextIO,
    err: TextIO,
    renumberer: Renumberer | None = None,
) -> StreamStats:
    """Process every line of an input stream.
    
    For every line either the renumbered line is written to ``out`` or the
    error marker is written to ``err``. A blank line does not parse and
    gets the error marker.
    
    Args:
        lines: Input lines (a text file object works).
        out: Stream receiving output lines.
        err: Stream receiving error markers.
        renumberer: Renumberer to use (default settings if None).
    
    Returns:
        StreamStats with per-outcome counts.
    """
    renumberer = renumberer if renumberer is not None else Renumberer()
    stats = StreamStats()
    
    for lineno, line in enumerate(lines, start=1):
        try:
            result = process_line(line, renumberer)
        except MapsmiError as e:
            stats.failed += 1
            logger.warning("Line %d: %s", lineno, e)
            err.write(f"{ERROR_MARKER}\n")
            continue
        
        out.write(f"{result}\n")
        stats.processed += 1
    
    return stats
