"""Tests for tunings and fretboard geometry."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretmap.base import PreconditionException
from fretmap.fretboard import (
    Fretboard,
    FretboardPosition,
    StringBounds,
    StringPos,
    fretboard_for,
    note_at,
    positions_for,
)
from fretmap.patterns import spiral_mapping_pattern
from fretmap.pitch import Note
from fretmap.scale import Key
from fretmap.tuning import STANDARD_TUNING, TUNING_LOOKUP, Tuning
from tests.fretmap.hypo import configure_hypo, notes

configure_hypo()


@pytest.mark.parametrize(
    "string, fret, expected",
    [
        (6, 0, Note.E),
        (6, 3, Note.G),
        (6, 8, Note.C),
        (5, 3, Note.C),
        (3, 2, Note.A),
        (2, 1, Note.C),
        (1, 0, Note.E),
        (1, 12, Note.E),
    ],
)
def test_note_at(string: int, fret: int, expected: Note) -> None:
    assert note_at(string, fret) == expected
    assert fretboard_for(STANDARD_TUNING, 24).note_at(string, fret) == expected


@pytest.mark.parametrize("string", [0, 7, -1])
def test_note_at_invalid_string(string: int) -> None:
    assert note_at(string, 0) is None
    assert Fretboard().note_at(string, 0) is None


def test_positions_for() -> None:
    positions = positions_for(Note.C, 24)
    assert [(p.string, p.fret) for p in positions] == [
        (1, 8),
        (2, 1),
        (3, 5),
        (4, 10),
        (5, 3),
        (6, 8),
    ]
    assert all(p.note == Note.C for p in positions)


def test_positions_for_limited_range() -> None:
    positions = positions_for(Note.C, 4)
    assert [(p.string, p.fret) for p in positions] == [(2, 1), (5, 3)]


def test_positions_for_negative_max_fret() -> None:
    with pytest.raises(PreconditionException):
        positions_for(Note.C, -1)
    with pytest.raises(PreconditionException):
        Fretboard(STANDARD_TUNING, -1)


def test_position_equality_ignores_note() -> None:
    a = FretboardPosition(3, 2, Note.A)
    b = FretboardPosition(3, 2, Note.C, is_root=True)
    assert a == b
    assert len({a, b, FretboardPosition(3, 3, Note.As)}) == 2
    assert a.pos == StringPos(3, 2)


def test_string_pos_shift() -> None:
    assert StringPos(3, 5).shift(1, -2) == StringPos(4, 3)
    assert StringPos(1, 0).shift(-1, 0) == StringPos(0, 0)


def test_string_bounds() -> None:
    bounds = StringBounds(StringPos(2, 1), StringPos(3, 4))
    assert len(list(bounds)) == 8
    assert list(bounds)[0] == StringPos(2, 1)
    assert StringPos(3, 4) in bounds
    assert FretboardPosition(2, 2, Note.Cs) in bounds
    assert StringPos(1, 1) not in bounds
    assert StringPos(2, 5) not in bounds
    assert "nope" not in bounds


def test_string_bounds_enclosing() -> None:
    positions = [
        FretboardPosition(4, 5, Note.G),
        FretboardPosition(2, 3, Note.D),
        FretboardPosition(3, 4, Note.B),
    ]
    assert StringBounds.enclosing(positions) == StringBounds(
        StringPos(2, 3), StringPos(4, 5)
    )


def test_frets_for() -> None:
    board = fretboard_for(STANDARD_TUNING, 24)
    assert board.frets_for(6, Note.E) == [0, 12, 24]
    assert board.frets_for(5, Note.C) == [3, 15]


def test_clamp() -> None:
    board = fretboard_for(STANDARD_TUNING, 12)
    assert board.clamp(0, -3) == StringPos(1, 0)
    assert board.clamp(9, 30) == StringPos(6, 12)
    assert board.clamp(4, 7) == StringPos(4, 7)


@pytest.mark.parametrize(
    "from_string, from_fret, to_string, semitones, expected",
    [
        # C on the A string, major third on the D string.
        (5, 3, 4, 4, 2),
        # A on the G string, minor third on the B string (B-string shift).
        (3, 2, 2, 3, 1),
        # G to B across the major third between the G and B strings.
        (3, 0, 2, 4, 0),
        # The same interval across a fourth lands one fret lower.
        (4, 0, 3, 4, -1),
        (6, 8, 5, 0, 3),
    ],
)
def test_fret_toward(
    from_string: int, from_fret: int, to_string: int, semitones: int, expected: int
) -> None:
    board = fretboard_for(STANDARD_TUNING, 24)
    fret = board.fret_toward(from_string, from_fret, to_string, semitones)
    assert fret == expected
    start = note_at(from_string, from_fret)
    assert start is not None
    assert note_at(to_string, fret) == start.add_semitones(semitones)


def test_fret_toward_invalid_string() -> None:
    with pytest.raises(PreconditionException):
        Fretboard().fret_toward(1, 0, 0, 4)


def test_fretboard_for_is_shared() -> None:
    assert fretboard_for(STANDARD_TUNING, 12) is fretboard_for(STANDARD_TUNING, 12)
    assert fretboard_for(STANDARD_TUNING, 12) is not fretboard_for(STANDARD_TUNING, 13)


def test_iter_positions_order() -> None:
    board = fretboard_for(STANDARD_TUNING, 3)
    places = [p.pos for p in board.iter_positions()]
    assert len(places) == 24
    assert places == sorted(places)


class TestTuning:
    def test_standard(self) -> None:
        assert STANDARD_TUNING.notes == [
            Note.E,
            Note.B,
            Note.G,
            Note.D,
            Note.A,
            Note.E,
        ]
        assert len(STANDARD_TUNING) == 6
        assert STANDARD_TUNING.repeat_steps == 24

    def test_empty(self) -> None:
        with pytest.raises(PreconditionException):
            Tuning("Empty", ())

    def test_list_pitches(self) -> None:
        custom = Tuning("Custom", [64, 59, 55, 50, 45, 40])
        assert custom.pitches == STANDARD_TUNING.pitches
        assert hash(custom) == hash(Tuning("Custom", STANDARD_TUNING.pitches))
        board = fretboard_for(custom, 12)
        assert board.note_at(6, 3) == Note.G
        spiral = spiral_mapping_pattern(Key(Note.C), max_fret=12, tuning=custom)
        assert len(spiral.positions) == 48

    def test_bass(self) -> None:
        bass = TUNING_LOOKUP["Bass"]
        assert bass.num_strings == 4
        assert note_at(5, 0, bass) is None
        assert note_at(4, 0, bass) == Note.E

    def test_drop_d(self) -> None:
        assert note_at(6, 0, TUNING_LOOKUP["Drop D"]) == Note.D
        assert note_at(6, 2, TUNING_LOOKUP["Drop D"]) == Note.E

    @pytest.mark.parametrize(
        "string, expected",
        [(1, 64), (6, 40), (7, 35), (0, 69), (11, 16)],
    )
    def test_virtual_pitch(self, string: int, expected: int) -> None:
        assert STANDARD_TUNING.virtual_pitch(string) == expected

    def test_virtual_note(self) -> None:
        assert STANDARD_TUNING.virtual_note(7) == Note.B
        assert STANDARD_TUNING.virtual_note(0) == Note.A


@given(
    st.integers(min_value=1, max_value=6), st.integers(min_value=0, max_value=24)
)
def test_geometry_round_trip(string: int, fret: int) -> None:
    note = note_at(string, fret)
    assert note is not None
    on_string = [p for p in positions_for(note, 24) if p.string == string]
    assert len(on_string) == 1
    assert on_string[0].fret <= fret
    assert on_string[0].fret % 12 == fret % 12


@given(notes, st.integers(min_value=0, max_value=24))
def test_positions_for_lowest_fret(note: Note, max_fret: int) -> None:
    for pos in positions_for(note, max_fret):
        assert 0 <= pos.fret < 12
        assert pos.fret <= max_fret
        assert note_at(pos.string, pos.fret) == note
