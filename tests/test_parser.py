"""Tests for the structure and line parser.

Covers the four node kinds, nesting, the line grammar and every failure
kind. Uses RDKit as reference for atom order on valid SMILES.
"""

import pytest
from rdkit import Chem

from mapsmi import parse, parse_line, Atom, Bond, Branch, Label, ParsedLine, Structure
from mapsmi.elements import MAX_UNSIGNED
from mapsmi.exceptions import (
    IncompleteError,
    MalformedError,
    NumericOverflowError,
    ParseError,
)


def rdkit_map_numbers(smiles: str) -> list[int]:
    """Get atom map numbers in RDKit atom order."""
    mol = Chem.MolFromSmiles(smiles, sanitize=False)
    return [atom.GetAtomMapNum() for atom in mol.GetAtoms()]


def rdkit_atom_count(smiles: str) -> int:
    """Get number of atoms from RDKit for comparison."""
    mol = Chem.MolFromSmiles(smiles, sanitize=False)
    return mol.GetNumAtoms() if mol else 0


class TestBasicParsing:
    """Test basic structure parsing."""

    def test_parse_returns_structure(self):
        """parse() should return a Structure object."""
        structure = parse("[C:1]")
        assert isinstance(structure, Structure)

    def test_single_atom(self):
        """Parse a single bracket atom."""
        structure = parse("[C:12]")
        assert structure.nodes == [Atom("C", 12)]

    def test_two_letter_symbol(self):
        """Two-letter symbols are kept as written."""
        structure = parse("[Br:25]")
        assert structure.nodes[0].symbol == "Br"

    def test_aromatic_symbol(self):
        """Lowercase aromatic symbols are accepted."""
        structure = parse("[c:14]")
        atom = structure.nodes[0]
        assert atom.symbol == "c"
        assert atom.is_aromatic

    def test_element_not_validated(self):
        """Any run without ':' is accepted as element text."""
        assert parse("[Xx:1]").nodes == [Atom("Xx", 1)]
        assert parse("[C@@H:3]").nodes == [Atom("C@@H", 3)]
        assert parse("[13CH3:2]").nodes == [Atom("13CH3", 2)]

    def test_element_runs_to_map_separator(self):
        """Element text ends only at ':', even across a ']'."""
        structure = parse("[C][O:1]")
        assert structure.nodes == [Atom("C][O", 1)]
        assert str(structure) == "[C][O:1]"

    def test_chain(self):
        """Atoms directly next to each other."""
        structure = parse("[C:1][C:2][O:3]")
        assert structure.nodes == [Atom("C", 1), Atom("C", 2), Atom("O", 3)]


class TestBondParsing:
    """Test bond symbols."""

    @pytest.mark.parametrize("symbol", [".", "-", "=", "#", "$", ":", "/", "\\"])
    def test_bond_symbol(self, symbol):
        """Every bond symbol becomes a Bond node between atoms."""
        structure = parse(f"[C:1]{symbol}[C:2]")
        assert structure.nodes == [Atom("C", 1), Bond(symbol), Atom("C", 2)]

    def test_aromatic_bond_after_atom(self):
        """':' outside brackets is a bond, not a map separator."""
        structure = parse("[c:1]:[c:2]")
        assert structure.nodes[1] == Bond(":")

    def test_all_bonds(self):
        """A chain using every bond symbol."""
        smiles = r"[C:1].[C:2]-[C:3]=[C:4]#[C:5]$[C:6]:[C:7]/[C:8]\[C:9]"
        structure = parse(smiles)
        bonds = [n for n in structure.nodes if isinstance(n, Bond)]
        assert len(bonds) == 8
        assert len(structure) == 9


class TestLabelParsing:
    """Test ring-closure labels."""

    def test_single_digit_label(self):
        """Ring closure digit after an atom."""
        structure = parse("[C:1]1[C:2][C:3]1")
        assert structure.nodes[1] == Label("1")
        assert structure.nodes[4] == Label("1")

    def test_digit_run_is_one_label(self):
        """Consecutive digits form a single label."""
        structure = parse("[C:1]12[C:2]12")
        assert structure.nodes == [Atom("C", 1), Label("12"), Atom("C", 2), Label("12")]
        assert structure.nodes[1].value == 12

    def test_label_digits_not_map_numbers(self):
        """Labels never count as atoms."""
        structure = parse("[c:10]1[c:30][n:20][c:40]1")
        assert structure.map_numbers() == [10, 30, 20, 40]


class TestBranchParsing:
    """Test branches."""

    def test_simple_branch(self):
        """Parse a single branch."""
        structure = parse("[C:5]([H:20])[O:3]")
        assert structure.nodes == [
            Atom("C", 5),
            Branch([Atom("H", 20)]),
            Atom("O", 3),
        ]

    def test_nested_branch(self):
        """Branches nest to any depth."""
        structure = parse("[C:1]([C:2]([C:3]([O:4])))")
        inner = structure.nodes[1].children[1].children[1]
        assert inner == Branch([Atom("O", 4)])

    def test_branch_with_bond(self):
        """A branch may start with a bond."""
        structure = parse("[C:1](=[O:2])[O:3]")
        assert structure.nodes[1].children == [Bond("="), Atom("O", 2)]

    def test_traversal_order(self):
        """Atoms in branches are visited where the branch occurs."""
        structure = parse("[C:7]([C:9]([O:2])[N:4])[S:1]")
        assert structure.map_numbers() == [7, 9, 2, 4, 1]

    def test_leading_items(self):
        """Any node kind may start a structure."""
        structure = parse("1([C:1])")
        assert structure.nodes == [Label("1"), Branch([Atom("C", 1)])]


class TestRoundTrip:
    """Writing a parsed structure reproduces the input."""

    def test_mapped_smiles(self, mapped_smiles):
        """Round trip for the shared examples."""
        for smiles in mapped_smiles:
            assert str(parse(smiles)) == smiles

    def test_full_size(self, t146j_smiles):
        """Round trip for a 59-atom structure."""
        assert str(parse(t146j_smiles)) == t146j_smiles

    def test_atom_order_matches_rdkit(self, mapped_smiles):
        """Traversal order is the order RDKit numbers atoms in."""
        for smiles in mapped_smiles:
            assert parse(smiles).map_numbers() == rdkit_map_numbers(smiles)

    def test_atom_count_matches_rdkit(self, t146j_smiles):
        """Atom count agrees with RDKit."""
        assert len(parse(t146j_smiles)) == rdkit_atom_count(t146j_smiles) == 59


class TestStructureErrors:
    """Test structure parse failures."""

    def test_empty_string(self):
        """Empty structure is malformed."""
        with pytest.raises(MalformedError):
            parse("")

    def test_missing_close_bracket(self):
        """Atom not closed before the next item."""
        with pytest.raises(MalformedError):
            parse("[C:1([H:2])")

    def test_missing_map_number(self):
        """Map number is required."""
        with pytest.raises(MalformedError):
            parse("[C:][O:1]")

    def test_missing_map_separator_before_end(self):
        """Atom without ':' runs to the end of input."""
        with pytest.raises(IncompleteError):
            parse("[C]")

    def test_empty_symbol(self):
        """Element text is required."""
        with pytest.raises(MalformedError):
            parse("[:1]")

    def test_empty_branch(self):
        """Branches need at least one item."""
        with pytest.raises(MalformedError):
            parse("[C:1]()[O:2]")

    @pytest.mark.parametrize("smiles", ["[C:1", "[C", "[C:", "[C:1]([O:2]", "[C:1]("])
    def test_unclosed_at_end(self, smiles):
        """Input ending inside a bracket or branch is incomplete."""
        with pytest.raises(IncompleteError):
            parse(smiles)

    def test_incomplete_points_at_opening(self):
        """Incomplete errors report where the construct was opened."""
        with pytest.raises(IncompleteError) as exc_info:
            parse("[C:1]([H:2]")
        assert exc_info.value.position == 5

    def test_unexpected_character(self):
        """Characters outside the grammar are malformed."""
        with pytest.raises(MalformedError) as exc_info:
            parse("[C:1]C[O:2]")
        assert exc_info.value.position == 5
        assert exc_info.value.remainder == "C[O:2]"

    def test_unbalanced_close(self):
        """A stray ')' is malformed."""
        with pytest.raises(MalformedError):
            parse("[C:1])")

    def test_surrounding_whitespace_rejected(self):
        """parse() takes the structure field only."""
        with pytest.raises(MalformedError):
            parse("[C:1] ")

    def test_errors_are_parse_errors(self):
        """Both failure kinds share the ParseError base."""
        assert issubclass(MalformedError, ParseError)
        assert issubclass(IncompleteError, ParseError)


class TestNumericLimits:
    """Map numbers and indices are unsigned 64-bit values."""

    def test_max_map_number(self):
        """The largest value is accepted."""
        structure = parse(f"[C:{MAX_UNSIGNED}]")
        assert structure.map_numbers() == [MAX_UNSIGNED]

    def test_map_number_overflow(self):
        """One past the largest value is rejected."""
        with pytest.raises(NumericOverflowError) as exc_info:
            parse(f"[C:{MAX_UNSIGNED + 1}]")
        assert exc_info.value.digits == str(MAX_UNSIGNED + 1)

    def test_index_overflow(self):
        """Auxiliary indices have the same limit."""
        with pytest.raises(NumericOverflowError):
            parse_line(f"m1 [C:1] ({MAX_UNSIGNED + 1})")

    def test_leading_zeros(self):
        """Leading zeros are allowed and written back unchanged."""
        structure = parse("[C:007]")
        assert structure.map_numbers() == [7]
        assert str(structure) == "[C:007]"

    def test_label_not_range_checked(self):
        """Labels are opaque digit text."""
        digits = str(MAX_UNSIGNED * 10)
        assert parse(f"[C:1]{digits}").nodes[1] == Label(digits)


class TestLineParsing:
    """Test whole-line parsing."""

    def test_parse_line_returns_record(self):
        """parse_line() should return a ParsedLine."""
        record = parse_line("m1 [C:5]([H:20])[O:3] (4, 2)")
        assert isinstance(record, ParsedLine)
        assert record.identifier == "m1"
        assert str(record.structure) == "[C:5]([H:20])[O:3]"
        assert record.auxiliary_indices == [4, 2]

    def test_full_size_line(self, t146j_line):
        """A long line from real input."""
        record = parse_line(t146j_line)
        assert record.identifier == "t146j"
        assert len(record.structure) == 59
        assert record.auxiliary_indices == [9, 8, 7, 27]

    def test_trailing_newline(self):
        """The line terminator is ignored."""
        record = parse_line("m1 [C:1] (0)\n")
        assert record.auxiliary_indices == [0]

    def test_index_spacing(self):
        """Separators may be followed by any number of spaces."""
        assert parse_line("m1 [C:1] (1,2,  3)").auxiliary_indices == [1, 2, 3]

    def test_tabs_as_whitespace(self):
        """Fields may be separated by tabs."""
        record = parse_line("m1\t[C:1]\t(0)")
        assert record.identifier == "m1"

    def test_multiple_spaces(self):
        """Fields may be separated by several spaces."""
        record = parse_line("m1   [C:1]   (0)")
        assert str(record.structure) == "[C:1]"

    def test_valid_lines(self, valid_lines):
        """All shared valid lines parse."""
        for line in valid_lines:
            assert parse_line(line).structure.nodes

    def test_malformed_lines(self, malformed_lines):
        """All shared malformed lines fail."""
        for line in malformed_lines:
            with pytest.raises(MalformedError):
                parse_line(line)

    def test_missing_bracket_reports_remainder(self):
        """Malformed errors carry the unconsumed input."""
        with pytest.raises(MalformedError) as exc_info:
            parse_line("id [C:1([H:2]) (0)")
        assert exc_info.value.remainder == "([H:2]) (0)"

    def test_unclosed_index_list(self):
        """Line ending inside the index list is incomplete."""
        with pytest.raises(IncompleteError):
            parse_line("m1 [C:1] (0, 1")

    def test_unclosed_atom_in_line(self):
        """Element text running to the end of the line is incomplete."""
        with pytest.raises(IncompleteError):
            parse_line("m1 [C (0)")

    def test_error_message_has_caret(self):
        """The error message points at the failing position."""
        with pytest.raises(ParseError) as exc_info:
            parse_line("m1 [C:1]x (0)")
        lines = str(exc_info.value).splitlines()
        assert lines[1].strip() == "m1 [C:1]x (0)"
        assert lines[2].index("^") == lines[1].index("x")

    def test_structure_read_from_line_cursor(self):
        """The structure is read in place, so positions are line offsets."""
        with pytest.raises(MalformedError) as exc_info:
            parse_line("  m1 [C:1]x (0)\n")
        assert exc_info.value.position == 8
        assert exc_info.value.remainder == "x (0)"

    def test_blank_line(self):
        """An empty line has no identifier."""
        for line in ["", "\n", " \t \n"]:
            with pytest.raises(MalformedError):
                parse_line(line)
