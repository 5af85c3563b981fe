"""
Mapped structure and line parser.

This module converts input lines of the form::

    <identifier> <structure> (<idx>, <idx>, ...)

into ParsedLine records. The structure grammar is a SMILES subset in which
every atom is bracketed and carries a map number:

    - Bracket atoms ``[symbol:number]``, symbol being any run without ``:``
    - Bond symbols ``. - = # $ : / \\``
    - Ring-closure labels (bare digit runs)
    - Branches (parentheses), nested to any depth

At each position an atom, a bond, a label or a branch is tried, in that
order. Element symbols are not checked against the periodic table.
"""

from __future__ import annotations

from typing import Callable, NoReturn

from mapsmi.elements import (
    ATOM_CLOSE,
    ATOM_OPEN,
    BRANCH_CLOSE,
    BRANCH_OPEN,
    INDEX_SEPARATOR,
    MAP_SEPARATOR,
    MAX_UNSIGNED,
    is_bond_symbol,
    is_digit,
    is_identifier_char,
    is_space,
)
from mapsmi.exceptions import IncompleteError, MalformedError, NumericOverflowError
from mapsmi.types import Atom, Bond, Branch, Label, Node, ParsedLine, Structure


def to_unsigned(digits: str) -> int:
    """Convert a digit run to an int within the unsigned range.
    
    Raises:
        NumericOverflowError: If the value exceeds MAX_UNSIGNED.
    """
    value = int(digits)
    if value > MAX_UNSIGNED:
        raise NumericOverflowError(digits, MAX_UNSIGNED)
    return value


class _Tokenizer:
    """Cursor over one stripped input line or a bare structure string.
    
    The line parser and the structure parser share a single cursor, so the
    structure is read in place from the middle of the line.
    """
    
    __slots__ = ("_line", "_pos")
    
    def __init__(self, line: str) -> None:
        self._line = line
        self._pos = 0
    
    @property
    def position(self) -> int:
        """Offset of the next unread character."""
        return self._pos
    
    def peek(self) -> str | None:
        """Next unread character, or None at the end of the line."""
        if self._pos >= len(self._line):
            return None
        return self._line[self._pos]
    
    def next(self) -> str | None:
        """Consume one character; None at the end of the line."""
        char = self.peek()
        if char is not None:
            self._pos += 1
        return char
    
    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume the longest run of characters accepted by predicate."""
        end = self._pos
        while end < len(self._line) and predicate(self._line[end]):
            end += 1
        run, self._pos = self._line[self._pos:end], end
        return run
    
    def read_unsigned(self) -> int | None:
        """Consume a digit run as an unsigned int; None if no digit follows.
        
        Raises:
            NumericOverflowError: If the value exceeds MAX_UNSIGNED.
        """
        digits = self.read_while(is_digit)
        return to_unsigned(digits) if digits else None
    
    def is_eof(self) -> bool:
        return self._pos >= len(self._line)


class StructureParser:
    """Recursive descent parser for structure strings.
    
    Example:
        >>> structure = StructureParser("[C:5]([H:20])[O:3]").parse()
        >>> structure.map_numbers()
        [5, 20, 3]
    
    For convenience, use the module-level `parse()` function.
    """
    
    def __init__(self, text: str, tokenizer: _Tokenizer | None = None) -> None:
        """Initialize parser.
        
        Args:
            text: Text to parse.
            tokenizer: Cursor to continue from when the structure is embedded
                in a larger text (used by LineParser).
        """
        self._text = text
        self._tokenizer = tokenizer if tokenizer is not None else _Tokenizer(text)
    
    def parse(self) -> Structure:
        """Parse the whole text as one structure.
        
        Returns:
            Parsed Structure.
        
        Raises:
            MalformedError: If the text does not match the grammar or has
                trailing input.
            IncompleteError: If an atom bracket or branch is left open.
            NumericOverflowError: If a map number is out of range.
        """
        structure = self.parse_prefix()
        if not self._tokenizer.is_eof():
            self._malformed("Unexpected character in structure")
        return structure
    
    def parse_prefix(self) -> Structure:
        """Parse as many structure items as possible from the current position.
        
        The cursor is left on the first character that starts no item.
        """
        return Structure(self._parse_sequence(opened_at=None))
    
    def _parse_sequence(self, opened_at: int | None) -> list[Node]:
        nodes: list[Node] = []
        while True:
            node = self._parse_item()
            if node is None:
                break
            nodes.append(node)
        
        if not nodes:
            if opened_at is not None:
                self._fail("Empty branch", opened_at)
            self._malformed("Expected atom, bond, ring label or branch")
        return nodes
    
    def _parse_item(self) -> Node | None:
        char = self._tokenizer.peek()
        if char is None:
            return None
        if char == ATOM_OPEN:
            return self._parse_atom()
        if is_bond_symbol(char):
            self._tokenizer.next()
            return Bond(char)
        if is_digit(char):
            return Label(self._tokenizer.read_while(is_digit))
        if char == BRANCH_OPEN:
            return self._parse_branch()
        return None
    
    def _parse_atom(self) -> Atom:
        """Parse a bracket atom ``[symbol:number]``."""
        tok = self._tokenizer
        start = tok.position
        tok.next()  # consume '['
        
        symbol = tok.read_while(lambda c: c != MAP_SEPARATOR)
        if tok.is_eof():
            self._fail("Unclosed atom bracket", start)
        if not symbol:
            self._malformed("Empty element symbol")
        tok.next()  # consume ':'
        
        digits = tok.read_while(is_digit)
        if not digits:
            self._fail("Expected atom map number", start)
        map_number = to_unsigned(digits)
        
        if tok.peek() != ATOM_CLOSE:
            self._fail(f"Expected '{ATOM_CLOSE}'", start)
        tok.next()
        
        return Atom(symbol, map_number, digits)
    
    def _parse_branch(self) -> Branch:
        """Parse a parenthesized branch."""
        tok = self._tokenizer
        start = tok.position
        tok.next()  # consume '('
        
        children = self._parse_sequence(opened_at=start)
        
        if tok.peek() != BRANCH_CLOSE:
            self._fail(f"Expected '{BRANCH_CLOSE}'", start)
        tok.next()
        
        return Branch(children)
    
    def _fail(self, message: str, opened_at: int) -> NoReturn:
        """Raise IncompleteError at end of input, MalformedError otherwise."""
        if self._tokenizer.is_eof():
            raise IncompleteError(message, self._text, opened_at)
        self._malformed(message)
    
    def _malformed(self, message: str) -> NoReturn:
        raise MalformedError(message, self._text, self._tokenizer.position)


class LineParser:
    """Parser for whole input lines.
    
    Leading and trailing whitespace (including the newline) is ignored.
    
    Example:
        >>> record = LineParser("m1 [C:5]([H:20])[O:3] (4, 2)").parse()
        >>> record.identifier, record.auxiliary_indices
        ('m1', [4, 2])
    """
    
    def __init__(self, line: str) -> None:
        self._line = line.strip()
        self._tokenizer = _Tokenizer(self._line)
    
    def parse(self) -> ParsedLine:
        """Parse the line into a ParsedLine.
        
        Raises:
            MalformedError: If the line does not match the line grammar.
            IncompleteError: If a bracket, branch or the index list is left
                open at the end of the line.
            NumericOverflowError: If a number is out of range.
        """
        tok = self._tokenizer
        
        identifier = tok.read_while(is_identifier_char)
        if not identifier:
            self._malformed("Expected identifier")
        self._expect_spaces()
        
        structure = StructureParser(self._line, tok).parse_prefix()
        self._expect_spaces()
        
        indices = self._parse_index_list()
        if not tok.is_eof():
            self._malformed("Unexpected trailing input")
        
        return ParsedLine(identifier, structure, indices)
    
    def _parse_index_list(self) -> list[int]:
        """Parse ``(a, b, ...)``; separators may be followed by spaces."""
        tok = self._tokenizer
        start = tok.position
        if tok.peek() != BRANCH_OPEN:
            self._malformed(f"Expected '{BRANCH_OPEN}' before auxiliary indices")
        tok.next()
        
        indices = [self._read_index(start)]
        while tok.peek() == INDEX_SEPARATOR:
            tok.next()
            tok.read_while(is_space)
            indices.append(self._read_index(start))
        
        if tok.peek() != BRANCH_CLOSE:
            self._fail(f"Expected '{BRANCH_CLOSE}' after auxiliary indices", start)
        tok.next()
        return indices
    
    def _read_index(self, opened_at: int) -> int:
        value = self._tokenizer.read_unsigned()
        if value is None:
            self._fail("Expected auxiliary index", opened_at)
        return value
    
    def _expect_spaces(self) -> None:
        if not self._tokenizer.read_while(is_space):
            self._malformed("Expected whitespace")
    
    def _fail(self, message: str, opened_at: int) -> NoReturn:
        if self._tokenizer.is_eof():
            raise IncompleteError(message, self._line, opened_at)
        self._malformed(message)
    
    def _malformed(self, message: str) -> NoReturn:
        raise MalformedError(message, self._line, self._tokenizer.position)


def parse(text: str) -> Structure:
    """Parse a structure string into a Structure.
    
    This is a convenience function that creates a StructureParser and
    calls parse(). The whole text must be a structure; surrounding
    whitespace is not accepted.
    
    Args:
        text: Structure string.
    
    Returns:
        Parsed Structure.
    
    Raises:
        ParseError: If the syntax is invalid.
        NumericOverflowError: If a map number is out of range.
    
    Example:
        >>> str(parse("[C:1]=[O:2]"))
        '[C:1]=[O:2]'
    """
    return StructureParser(text).parse()


def parse_line(line: str) -> ParsedLine:
    """Parse one input line into a ParsedLine.
    
    Args:
        line: Input line, with or without its trailing newline.
    
    Returns:
        ParsedLine with identifier, structure and auxiliary indices.
    
    Raises:
        ParseError: If the syntax is invalid.
        NumericOverflowError: If a number is out of range.
    
    Example:
        >>> record = parse_line("m1 [C:2][O:1] (0, 1)")
        >>> str(record.structure), record.auxiliary_indices
        ('[C:2][O:1]', [0, 1])
    """
    return LineParser(line).parse()
