"""
Mapsmi - atom map renumbering for mapped SMILES lines.

Parses lines of the form ``<id> <structure> (<indices>)`` where every atom
is a bracket atom with a map number, renumbers the map numbers to 1..N in
their original order, and rewrites the zero-based auxiliary indices to
match.

    >>> from mapsmi import parse_line, renumber_line
    >>> record = renumber_line(parse_line("m1 [C:5]([H:20])[O:3] (4, 2)"))
    >>> str(record)
    'm1 [C:2]([H:3])[O:1] (1, 0)'

Submodules:
    mapsmi.parser   - Structure and line parsing
    mapsmi.renumber - Dense map-number renumbering
    mapsmi.writer   - Structure and line formatting
    mapsmi.stream   - Line stream processing
    mapsmi.cli      - Command-line interface
"""

__version__ = "0.1.0"

# Core types
from mapsmi.types import Atom, Bond, Branch, Label, Node, ParsedLine, Structure

# Parsing and writing
from mapsmi.parser import LineParser, StructureParser, parse, parse_line
from mapsmi.writer import SmilesWriter, format_line, to_smiles

# Renumbering
from mapsmi.renumber import RenumberResult, Renumberer, dense_ranks, renumber, renumber_line

# Stream processing
from mapsmi.stream import StreamStats, process_line, process_stream

# Exceptions
from mapsmi.exceptions import (
    DuplicateMapNumberError,
    IncompleteError,
    MalformedError,
    MapsmiError,
    NumericOverflowError,
    ParseError,
    RenumberError,
    UnknownAuxiliaryIndexError,
)

# Grammar constants
from mapsmi.elements import BondOrder, BOND_SYMBOLS, MAX_UNSIGNED

__all__ = [
    # Types
    "Atom", "Bond", "Branch", "Label", "Node", "ParsedLine", "Structure",
    # Parsing
    "parse", "parse_line", "StructureParser", "LineParser",
    # Writing
    "to_smiles", "format_line", "SmilesWriter",
    # Renumbering
    "renumber", "renumber_line", "dense_ranks", "Renumberer", "RenumberResult",
    # Streams
    "process_line", "process_stream", "StreamStats",
    # Exceptions
    "MapsmiError", "ParseError", "MalformedError", "IncompleteError",
    "NumericOverflowError", "RenumberError", "UnknownAuxiliaryIndexError",
    "DuplicateMapNumberError",
    # Grammar constants
    "BondOrder", "BOND_SYMBOLS", "MAX_UNSIGNED",
]
