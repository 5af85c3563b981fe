"""
Structure and line writer.

This module converts Structure trees back to text and formats output lines.
Writing a freshly parsed structure reproduces the parsed text exactly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Iterable

from mapsmi.elements import BRANCH_CLOSE, BRANCH_OPEN
from mapsmi.types import Branch

if TYPE_CHECKING:
    from mapsmi.types import Node, ParsedLine, Structure


# Output separator for auxiliary indices, independent of input spacing
INDEX_JOINER: Final[str] = ", "


class SmilesWriter:
    """Serializer for structure trees.
    
    Atoms are written as ``[symbol:map_number]``; bonds and labels are
    written unchanged; branches are wrapped in parentheses. No other
    punctuation is inserted.
    
    Example:
        >>> from mapsmi import parse
        >>> SmilesWriter(parse("[C:1]1[C:2][O:3]1")).to_smiles()
        '[C:1]1[C:2][O:3]1'
    """
    
    def __init__(self, root: Structure | Branch) -> None:
        self._root = root
        self._parts: list[str] = []
    
    def to_smiles(self) -> str:
        """Generate the structure string."""
        self._parts = []
        if isinstance(self._root, Branch):
            self._write_node(self._root)
        else:
            self._write_nodes(self._root.nodes)
        return "".join(self._parts)
    
    def _write_nodes(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self._write_node(node)
    
    def _write_node(self, node: Node) -> None:
        if isinstance(node, Branch):
            self._parts.append(BRANCH_OPEN)
            self._write_nodes(node.children)
            self._parts.append(BRANCH_CLOSE)
        else:
            self._parts.append(str(node))


def to_smiles(root: Structure | Branch) -> str:
    """Convert a structure (or a single branch) to its text form.
    
    Args:
        root: Structure or Branch to write.
    
    Returns:
        Structure string.
    """
    return SmilesWriter(root).to_smiles()


def format_indices(indices: Iterable[int]) -> str:
    """Format an auxiliary index list as ``(a, b, c)``."""
    return f"({INDEX_JOINER.join(str(i) for i in indices)})"


def format_line(parsed: ParsedLine) -> str:
    """Format a record as ``<identifier> <structure> (<indices>)``.
    
    Example:
        >>> from mapsmi import parse_line
        >>> format_line(parse_line("m1 [C:1][O:2] (0,1)"))
        'm1 [C:1][O:2] (0, 1)'
    """
    return (
        f"{parsed.identifier} {to_smiles(parsed.structure)} "
        f"{format_indices(parsed.auxiliary_indices)}"
    )
