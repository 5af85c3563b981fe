"""
Atom map renumbering.

This module rewrites the atom map numbers of a structure to the dense
sequence 1..N while preserving their relative order, and carries the same
renumbering over to the auxiliary index list of the line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from mapsmi.exceptions import DuplicateMapNumberError, UnknownAuxiliaryIndexError
from mapsmi.types import ParsedLine

if TYPE_CHECKING:
    from mapsmi.types import Structure


logger = logging.getLogger(__name__)


def rank_order(numbers: list[int]) -> list[int]:
    """Positions sorted by the number at each position.
    
    The sort is stable, so equal numbers keep their traversal order.
    
    Example:
        >>> rank_order([5, 20, 3])
        [2, 0, 1]
    """
    return sorted(range(len(numbers)), key=numbers.__getitem__)


def dense_ranks(numbers: list[int]) -> list[int]:
    """Compute 1-based dense ranks for a list of numbers.
    
    The smallest number receives 1, the next smallest 2, and so on. Ties
    are broken by position, so the result is always a permutation of 1..N.
    
    Args:
        numbers: Map numbers in traversal order.
    
    Returns:
        New numbers indexed by position.
    
    Example:
        >>> dense_ranks([5, 20, 3])
        [2, 3, 1]
    """
    ranks = [0] * len(numbers)
    for new_number, position in enumerate(rank_order(numbers), start=1):
        ranks[position] = new_number
    return ranks


@dataclass
class RenumberResult:
    """Outcome of one renumbering pass.
    
    Attributes:
        structure: The renumbered structure.
        auxiliary_indices: Rewritten auxiliary indices.
        old_to_new: Original map number -> new map number.
    """
    
    structure: Structure
    auxiliary_indices: list[int]
    old_to_new: dict[int, int] = field(default_factory=dict)


class Renumberer:
    """Dense, order-preserving atom map renumbering.
    
    Atoms are collected in traversal order (branches visited where they
    occur), ranked by their current map number, and given new numbers
    1..N in rank order. The new numbers are written back into the atom
    nodes in place and written without leading zeros.
    
    Duplicate map numbers are resolved stably by default: the atom that
    appears first gets the lower new number, and auxiliary indices that
    refer to a duplicated number resolve to the last of those atoms. With
    ``strict=True`` a duplicate raises DuplicateMapNumberError instead.
    
    Example:
        >>> from mapsmi import parse
        >>> structure = parse("[C:5]([H:20])[O:3]")
        >>> result = Renumberer().renumber(structure, [4, 2])
        >>> str(result.structure), result.auxiliary_indices
        ('[C:2]([H:3])[O:1]', [1, 0])
    """
    
    def __init__(self, strict: bool = False) -> None:
        """Initialize renumberer.
        
        Args:
            strict: Reject duplicate map numbers instead of resolving them.
        """
        self.strict = strict
    
    def renumber(
        self,
        structure: Structure,
        auxiliary_indices: Iterable[int] = (),
    ) -> RenumberResult:
        """Renumber a structure and its auxiliary indices.
        
        Args:
            structure: Structure to renumber (modified in place).
            auxiliary_indices: Zero-based indices (map number minus one).
        
        Returns:
            RenumberResult with the same structure object, the rewritten
            indices and the old -> new lookup.
        
        Raises:
            DuplicateMapNumberError: In strict mode, if a map number repeats.
            UnknownAuxiliaryIndexError: If an index refers to no atom.
        """
        atoms = structure.atoms()
        original = [atom.map_number for atom in atoms]
        order = rank_order(original)
        
        old_to_new: dict[int, int] = {}
        for new_number, position in enumerate(order, start=1):
            old_number = original[position]
            if old_number in old_to_new:
                if self.strict:
                    raise DuplicateMapNumberError(old_number)
                logger.debug("Duplicate map number %d resolved to last occurrence", old_number)
            old_to_new[old_number] = new_number
        
        # Resolve indices first; on failure the structure stays as parsed
        new_indices = [self._translate(old_to_new, t) for t in auxiliary_indices]
        
        for new_number, position in enumerate(order, start=1):
            atoms[position].map_number = new_number
            atoms[position].digits = None
        
        logger.debug("Renumbered %d atoms, %d auxiliary indices", len(atoms), len(new_indices))
        return RenumberResult(structure, new_indices, old_to_new)
    
    @staticmethod
    def _translate(old_to_new: dict[int, int], index: int) -> int:
        new_number = old_to_new.get(index + 1)
        if new_number is None:
            raise UnknownAuxiliaryIndexError(index)
        return new_number - 1


def renumber(
    structure: Structure,
    auxiliary_indices: Iterable[int] = (),
) -> tuple[Structure, list[int]]:
    """Renumber atom map numbers to 1..N and rewrite auxiliary indices.
    
    This is a convenience function that creates a Renumberer with default
    settings. The structure is modified in place and returned.
    
    Args:
        structure: Structure to renumber.
        auxiliary_indices: Zero-based indices (map number minus one).
    
    Returns:
        Tuple of (structure, rewritten auxiliary indices).
    
    Raises:
        UnknownAuxiliaryIndexError: If an index refers to no atom.
    
    Example:
        >>> from mapsmi import parse
        >>> structure, indices = renumber(parse("[C:5]([H:20])[O:3]"), [4, 2])
        >>> indices
        [1, 0]
    """
    result = Renumberer().renumber(structure, auxiliary_indices)
    return result.structure, result.auxiliary_indices


def renumber_line(parsed: ParsedLine, renumberer: Renumberer | None = None) -> ParsedLine:
    """Renumber a whole record.
    
    Args:
        parsed: Parsed line; its structure is modified in place.
        renumberer: Renumberer to use (default settings if None).
    
    Returns:
        New ParsedLine with the same identifier and structure and the
        rewritten auxiliary indices.
    """
    renumberer = renumberer if renumberer is not None else Renumberer()
    result = renumberer.renumber(parsed.structure, parsed.auxiliary_indices)
    return ParsedLine(parsed.identifier, result.structure, result.auxiliary_indices)
