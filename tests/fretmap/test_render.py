"""Tests for ASCII fretboard diagrams."""

import pytest

from fretmap.base import PreconditionException
from fretmap.fretboard import FretboardPosition
from fretmap.pitch import Note
from fretmap.render import render_positions
from fretmap.tuning import TUNING_LOOKUP


def test_render_positions() -> None:
    positions = [
        FretboardPosition(5, 3, Note.C, True),
        FretboardPosition(4, 2, Note.E),
        FretboardPosition(3, 0, Note.G),
    ]
    lines = render_positions(positions, max_fret=3).split("\n")
    assert lines == [
        "    0  1  2  3",
        "E | -  -  -  - ",
        "B | -  -  -  - ",
        "G | o  -  -  - ",
        "D | -  -  o  - ",
        "A | -  -  -  R ",
        "E | -  -  -  - ",
    ]


def test_root_mark_wins() -> None:
    positions = [
        FretboardPosition(1, 1, Note.F),
        FretboardPosition(1, 1, Note.F, True),
        FretboardPosition(1, 1, Note.F),
    ]
    lines = render_positions(positions, max_fret=1).split("\n")
    assert lines[1] == "E | -  R "


def test_off_board_positions_ignored() -> None:
    positions = [
        FretboardPosition(0, 0, Note.A),
        FretboardPosition(1, 5, Note.A),
    ]
    diagram = render_positions(positions, max_fret=2)
    assert "o" not in diagram
    assert len(diagram.split("\n")) == 7


def test_wide_labels() -> None:
    half_down = TUNING_LOOKUP["Half Step Down"]
    lines = render_positions([], half_down, max_fret=0).split("\n")
    assert lines[0] == "     0"
    assert lines[1] == "D# | - "
    assert lines[2] == "A# | - "


def test_negative_max_fret() -> None:
    with pytest.raises(PreconditionException):
        render_positions([], max_fret=-1)
