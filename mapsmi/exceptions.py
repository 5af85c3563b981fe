"""
Custom exceptions for mapsmi.

This module defines a hierarchy of exceptions for the parse and renumber
stages, so that a line driver can recover from any of them at the line
boundary while callers can still tell the failure kinds apart.
"""

from __future__ import annotations


class MapsmiError(Exception):
    """Base exception for all mapsmi errors."""
    
    pass


class ParseError(MapsmiError):
    """Error during line or structure parsing.
    
    Attributes:
        position: Character position in the text where the error occurred.
        text: The original text being parsed.
        message: Description of what went wrong.
    """
    
    def __init__(
        self,
        message: str,
        text: str | None = None,
        position: int | None = None,
    ) -> None:
        self.message = message
        self.text = text
        self.position = position
        
        # Build detailed error message
        parts = [message]
        if text is not None and position is not None:
            parts.append(f"\n  {text}")
            parts.append(f"\n  {' ' * position}^")
        elif text is not None:
            parts.append(f" in: {text}")
        
        super().__init__("".join(parts))
    
    @property
    def remainder(self) -> str | None:
        """Unconsumed input starting at the error position."""
        if self.text is None or self.position is None:
            return None
        return self.text[self.position:]


class MalformedError(ParseError):
    """The input does not match the grammar."""
    
    pass


class IncompleteError(ParseError):
    """Input ended inside an open bracket atom or branch."""
    
    pass


class NumericOverflowError(MapsmiError):
    """A digit run does not fit the unsigned integer range.
    
    Attributes:
        digits: The offending digit run.
        limit: Largest accepted value.
    """
    
    def __init__(self, digits: str, limit: int) -> None:
        self.digits = digits
        self.limit = limit
        super().__init__(f"Number {digits} exceeds maximum {limit}")


class RenumberError(MapsmiError):
    """Error while renumbering atom map numbers."""
    
    pass


class UnknownAuxiliaryIndexError(RenumberError):
    """An auxiliary index does not refer to any atom in the structure.
    
    Attributes:
        index: The zero-based auxiliary index as given.
        map_number: The map number it implies (``index + 1``).
    """
    
    def __init__(self, index: int) -> None:
        self.index = index
        self.map_number = index + 1
        super().__init__(
            f"Auxiliary index {index} refers to map number {self.map_number}, "
            "which is not present in the structure"
        )


class DuplicateMapNumberError(RenumberError):
    """Two atoms carry the same map number (strict mode only)."""
    
    def __init__(self, map_number: int) -> None:
        self.map_number = map_number
        super().__init__(f"Map number {map_number} is used by more than one atom")
