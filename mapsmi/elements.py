"""
Grammar constants.

This module provides the bond symbol table, character classes and numeric
limits shared by the parser, the node types and the renumbering engine.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final, FrozenSet


class BondOrder(IntEnum):
    """Bond order enumeration."""
    
    NONE = 0    # Component separator '.'
    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 4
    QUADRUPLE = 5
    
    def __str__(self) -> str:
        return self.name.lower()


# Bond character mapping, in the order the grammar lists them
BOND_SYMBOLS: Final[dict[str, BondOrder]] = {
    ".": BondOrder.NONE,
    "-": BondOrder.SINGLE,
    "=": BondOrder.DOUBLE,
    "#": BondOrder.TRIPLE,
    "$": BondOrder.QUADRUPLE,
    ":": BondOrder.AROMATIC,
    "/": BondOrder.SINGLE,
    "\\": BondOrder.SINGLE,
}

STEREO_BOND_SYMBOLS: Final[FrozenSet[str]] = frozenset({"/", "\\"})

SEPARATOR_SYMBOL: Final[str] = "."

DIGITS: Final[FrozenSet[str]] = frozenset("0123456789")

SPACES: Final[FrozenSet[str]] = frozenset(" \t")

# Atom map numbers and auxiliary indices are unsigned 64-bit values
MAX_UNSIGNED: Final[int] = 2**64 - 1

# Delimiters
ATOM_OPEN: Final[str] = "["
ATOM_CLOSE: Final[str] = "]"
MAP_SEPARATOR: Final[str] = ":"
BRANCH_OPEN: Final[str] = "("
BRANCH_CLOSE: Final[str] = ")"
INDEX_SEPARATOR: Final[str] = ","


def is_digit(char: str) -> bool:
    """Check for an ASCII decimal digit."""
    return char in DIGITS


def is_space(char: str) -> bool:
    """Check for a blank or tab."""
    return char in SPACES


def is_identifier_char(char: str) -> bool:
    """Check for an ASCII letter or digit."""
    return char.isascii() and char.isalnum()


def is_bond_symbol(char: str) -> bool:
    """Check if character is one of the bond symbols."""
    return char in BOND_SYMBOLS


def is_aromatic_symbol(symbol: str) -> bool:
    """Check if an element symbol is written in aromatic (lowercase) form."""
    return bool(symbol) and symbol[0].islower()


def bond_order(symbol: str) -> BondOrder:
    """Get the bond order for a bond symbol.
    
    Raises:
        KeyError: If symbol is not a bond symbol.
    """
    return BOND_SYMBOLS[symbol]
