"""
Core data types.

This module defines the expression nodes of a mapped structure (Atom, Bond,
Label and Branch), the Structure container holding the top-level node
sequence, and the ParsedLine record produced for one input line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Union

from .elements import (
    SEPARATOR_SYMBOL,
    STEREO_BOND_SYMBOLS,
    BondOrder,
    bond_order,
    is_aromatic_symbol,
)

if TYPE_CHECKING:
    from typing import Self


@dataclass(slots=True)
class Atom:
    """A bracketed atom carrying a map number, e.g. ``[C:12]``.
    
    Attributes:
        symbol: Element text found before the ``:`` (not validated).
        map_number: Atom map number after the ``:``.
        digits: Map number text as parsed. Kept so that numbers written
            with leading zeros serialize unchanged; cleared on renumbering.
    """
    
    symbol: str
    map_number: int
    digits: str | None = field(default=None, compare=False, repr=False)
    
    @property
    def is_aromatic(self) -> bool:
        """Whether the symbol is written in aromatic (lowercase) form."""
        return is_aromatic_symbol(self.symbol)
    
    def __str__(self) -> str:
        if self.digits is not None and int(self.digits) == self.map_number:
            return f"[{self.symbol}:{self.digits}]"
        return f"[{self.symbol}:{self.map_number}]"


@dataclass(slots=True)
class Bond:
    """A single-character bond symbol between atoms.
    
    Attributes:
        symbol: One of ``. - = # $ : / \\``.
    """
    
    symbol: str
    
    @property
    def order(self) -> BondOrder:
        """Get bond order as enum."""
        return bond_order(self.symbol)
    
    @property
    def is_stereo(self) -> bool:
        """Whether this is a directional ('/' or '\\') bond."""
        return self.symbol in STEREO_BOND_SYMBOLS
    
    @property
    def is_separator(self) -> bool:
        """Whether this is the component separator '.'."""
        return self.symbol == SEPARATOR_SYMBOL
    
    def __str__(self) -> str:
        return self.symbol


@dataclass(slots=True)
class Label:
    """A bare ring-closure label, kept as its digit text."""
    
    digits: str
    
    @property
    def value(self) -> int:
        return int(self.digits)
    
    def __str__(self) -> str:
        return self.digits


@dataclass(slots=True)
class Branch:
    """A parenthesized side chain holding nodes of the same shape as the top level."""
    
    children: list[Node] = field(default_factory=list)
    
    def __str__(self) -> str:
        from mapsmi.writer import to_smiles
        return to_smiles(self)


Node = Union[Atom, Bond, Label, Branch]


def iter_atoms(nodes: list[Node]) -> Iterator[Atom]:
    """Iterate over atoms depth-first, left to right.
    
    Branches are entered at the position where they occur, so atoms are
    yielded in the order they appear in the serialized text.
    
    Args:
        nodes: Node sequence to walk.
    
    Yields:
        Atom nodes (the objects themselves, not copies).
    """
    for node in nodes:
        if isinstance(node, Atom):
            yield node
        elif isinstance(node, Branch):
            yield from iter_atoms(node.children)


@dataclass
class Structure:
    """An ordered sequence of expression nodes for one structure string.
    
    Attributes:
        nodes: Top-level nodes in text order.
    
    Example:
        >>> s = Structure([Atom("C", 5), Branch([Atom("H", 20)]), Atom("O", 3)])
        >>> str(s)
        '[C:5]([H:20])[O:3]'
        >>> s.map_numbers()
        [5, 20, 3]
    """
    
    nodes: list[Node] = field(default_factory=list)
    
    def __len__(self) -> int:
        """Return number of atoms."""
        return sum(1 for _ in iter_atoms(self.nodes))
    
    def __iter__(self) -> Iterator[Atom]:
        """Iterate over atoms in traversal order."""
        return iter_atoms(self.nodes)
    
    def __str__(self) -> str:
        from mapsmi.writer import to_smiles
        return to_smiles(self)
    
    def atoms(self) -> list[Atom]:
        """All atoms in traversal order."""
        return list(iter_atoms(self.nodes))
    
    def map_numbers(self) -> list[int]:
        """Map numbers of all atoms in traversal order."""
        return [atom.map_number for atom in iter_atoms(self.nodes)]
    
    @property
    def num_atoms(self) -> int:
        """Number of atoms in the structure."""
        return len(self)
    
    def copy(self) -> "Self":
        """Create a deep copy of the structure.
        
        Returns:
            New Structure whose nodes can be modified independently.
        """
        return Structure(_copy_nodes(self.nodes))


def _copy_nodes(nodes: list[Node]) -> list[Node]:
    copied: list[Node] = []
    for node in nodes:
        if isinstance(node, Atom):
            copied.append(Atom(node.symbol, node.map_number, node.digits))
        elif isinstance(node, Bond):
            copied.append(Bond(node.symbol))
        elif isinstance(node, Label):
            copied.append(Label(node.digits))
        else:
            copied.append(Branch(_copy_nodes(node.children)))
    return copied


@dataclass
class ParsedLine:
    """One input record: identifier, structure and auxiliary index list.
    
    Attributes:
        identifier: Leading alphanumeric token.
        structure: Parsed structure.
        auxiliary_indices: Zero-based atom references (map number minus one).
    """
    
    identifier: str
    structure: Structure
    auxiliary_indices: list[int] = field(default_factory=list)
    
    def __str__(self) -> str:
        from mapsmi.writer import format_line
        return format_line(self)
