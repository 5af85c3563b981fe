"""Test configuration and fixtures for mapsmi tests."""

import pytest


# Real input line: 59 atoms numbered 1..59, but not in
# traversal order, two reused ring labels and directional bonds
T146J_LINE = (
    "t146j [C:1]1([H:31])=[N:2][C:3]([C:4]([C:5]([C:6](/[N:7]=[S:8](\\[N:9]"
    "([C:10]([C:11]([C:12]([N:13]([c:14]2[n:15][c:16]([H:45])[c:17]([H:46])"
    "[c:18]([H:47])[c:19]2[H:48])[C:20]([c:21]2[c:22]([H:51])[c:23]([H:52])"
    "[c:24]([Br:25])[c:26]([H:53])[c:27]2[H:54])([H:49])[H:50])([H:43])[H:44])"
    "([H:41])[H:42])([H:39])[H:40])[H:38])[C:28]([H:55])([H:56])[H:57])([H:36])"
    "[H:37])([H:34])[H:35])([H:32])[H:33])=[C:29]([H:58])[N:30]1[H:59] "
    "(9, 8, 7, 27)"
)


@pytest.fixture
def t146j_line() -> str:
    """A full-size input line."""
    return T146J_LINE


@pytest.fixture
def t146j_smiles() -> str:
    """Structure field of the full-size input line."""
    return T146J_LINE.split(" ")[1]


@pytest.fixture
def mapped_smiles() -> list[str]:
    """Valid mapped SMILES strings with sparse, unordered map numbers."""
    return [
        "[C:5]([H:20])[O:3]",
        "[C:1]",
        "[c:10]1[c:30][n:20][c:40]1",
        "[C:7]([C:9]([O:2])[N:4])[S:1]",
        "[C:100]=[O:50]",
        "[N:3]#[C:2][C:1]",
        r"[F:8]/[C:6]=[C:4]\[F:2]",
        "[Na:9].[Cl:1]",
        "[C:12]1[C:11][C:10]2[C:9][C:8][C:7][C:6][C:5]2[C:4]1",
        "[O:1]([H:2])[H:3]",
    ]


@pytest.fixture
def valid_lines() -> list[str]:
    """Valid input lines with their expected output lines."""
    return [
        "m1 [C:5]([H:20])[O:3] (4, 2)",
        "m2 [c:10]1[c:30][n:20][c:40]1 (9,39)",
        "m3 [C:7]([C:9]([O:2])[N:4])[S:1] (0,  8, 6)",
        "m4 [N:9]=[N:4] (8,3)",
    ]


@pytest.fixture
def malformed_lines() -> list[str]:
    """Lines that must not parse."""
    return [
        "id [C:1([H:2]) (0)",
        "id [C:1]([H:2] (0)",
        "id [C:1] [O:2] (0)",
        "id [C:] (0)",
        "id [:1] (0)",
        "id [C:1]() (0)",
        "id [C:1]x (0)",
        "id[C:1] (0)",
        "id [C:1](0)",
        "id [C:1] ()",
        "id [C:1] (0 ,1)",
        "id [C:1] (0) extra",
        "id  (0)",
        "[C:1] (0)",
        "id-1 [C:1] (0)",
    ]
