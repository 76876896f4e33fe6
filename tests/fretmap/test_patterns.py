"""Tests for the pattern generators."""

from typing import List, Tuple

import pytest
from hypothesis import given

from fretmap.base import PreconditionException
from fretmap.chords import ChordQuality
from fretmap.fretboard import FretboardPosition, StringPos, fretboard_for
from fretmap.patterns import (
    Pattern,
    PatternType,
    default_jump_start,
    diatonic_pattern,
    extended_diatonic_pattern,
    familial_hierarchy_pattern,
    family_of_chords_pattern,
    generate_pattern,
    jumping_pattern,
    spiral_mapping_pattern,
)
from fretmap.pitch import Note
from fretmap.scale import Key, notes_in_key
from fretmap.tuning import STANDARD_TUNING, TUNING_LOOKUP
from tests.fretmap.hypo import configure_hypo, keys

configure_hypo()

C_MAJOR = Key(Note.C)


def _summary(
    positions: List[FretboardPosition],
) -> List[Tuple[int, int, Note, bool]]:
    return [(p.string, p.fret, p.note, p.is_root) for p in positions]


class TestSpiralMapping:
    @pytest.mark.parametrize(
        "string, fret, note, is_root",
        [
            (6, 0, Note.E, False),
            (6, 3, Note.G, False),
            (6, 8, Note.C, True),
            (2, 1, Note.C, True),
        ],
    )
    def test_includes(self, string: int, fret: int, note: Note, is_root: bool) -> None:
        pattern = spiral_mapping_pattern(C_MAJOR, max_fret=12)
        by_place = {p.pos: p for p in pattern.positions}
        pos = by_place[StringPos(string, fret)]
        assert pos.note == note
        assert pos.is_root == is_root

    def test_excludes_out_of_key(self) -> None:
        pattern = spiral_mapping_pattern(C_MAJOR, max_fret=12)
        places = {p.pos for p in pattern.positions}
        # F# and G# on the low E string
        assert StringPos(6, 2) not in places
        assert StringPos(6, 4) not in places
        assert StringPos(6, 1) in places
        assert StringPos(6, 0) in places

    def test_count(self) -> None:
        # Every open string is in C, so each string has 15 in-key frets in 0-24.
        assert len(spiral_mapping_pattern(C_MAJOR).positions) == 90

    def test_order(self) -> None:
        places = [p.pos for p in spiral_mapping_pattern(C_MAJOR).positions]
        assert places == sorted(places)

    def test_metadata(self) -> None:
        pattern = spiral_mapping_pattern(C_MAJOR)
        assert pattern.type == PatternType.SpiralMapping
        assert pattern.name == "Spiral Mapping - C"
        assert pattern.key == C_MAJOR
        assert all(p.note == Note.C for p in pattern.roots)
        assert len(pattern.roots) == 12

    def test_negative_max_fret(self) -> None:
        with pytest.raises(PreconditionException):
            spiral_mapping_pattern(C_MAJOR, max_fret=-1)


class TestJumping:
    def test_open_g_string(self) -> None:
        start = FretboardPosition(3, 0, Note.G)
        pattern = jumping_pattern(start, C_MAJOR, max_fret=12)
        assert [p.fret for p in pattern.positions] == [0, 2, 4, 5, 7, 9, 10, 12]
        assert [p.note for p in pattern.positions] == [
            Note.G,
            Note.A,
            Note.B,
            Note.C,
            Note.D,
            Note.E,
            Note.F,
            Note.G,
        ]
        assert all(p.string == 3 for p in pattern.positions)
        assert pattern.positions[0] is start

    def test_start_emitted_once(self) -> None:
        start = FretboardPosition(3, 5, Note.C, is_root=True)
        pattern = jumping_pattern(start, C_MAJOR, max_fret=12)
        frets = [p.fret for p in pattern.positions]
        assert frets[0] == 5
        assert frets.count(5) == 1
        assert frets[1:] == [0, 2, 4, 7, 9, 10, 12]

    def test_invalid_string(self) -> None:
        with pytest.raises(PreconditionException):
            jumping_pattern(FretboardPosition(7, 0, Note.B), C_MAJOR)

    def test_default_start(self) -> None:
        pattern = generate_pattern(PatternType.Jumping, C_MAJOR, max_fret=12)
        assert pattern.positions[0] == default_jump_start(C_MAJOR)
        assert pattern.positions[0].pos == StringPos(3, 0)
        assert len(pattern.positions) == 8


class TestFamilyOfChords:
    def test_major(self) -> None:
        pattern = family_of_chords_pattern(C_MAJOR, ChordQuality.Major)
        assert len(pattern.positions) == 18
        assert [p.note for p in pattern.positions[::6]] == [Note.C, Note.F, Note.G]
        assert all(p.is_root for p in pattern.positions)

    def test_minor_matches_major(self) -> None:
        major = family_of_chords_pattern(C_MAJOR, ChordQuality.Major)
        minor = family_of_chords_pattern(C_MAJOR, ChordQuality.Minor)
        assert _summary(major.positions) == _summary(minor.positions)

    def test_other_quality_shows_tonic(self) -> None:
        pattern = family_of_chords_pattern(C_MAJOR, ChordQuality.Dom7)
        assert len(pattern.positions) == 6
        assert all(p.note == Note.C for p in pattern.positions)

    def test_short_board(self) -> None:
        pattern = family_of_chords_pattern(C_MAJOR, max_fret=1)
        assert _summary(pattern.positions) == [
            (2, 1, Note.C, True),
            (1, 1, Note.F, True),
            (6, 1, Note.F, True),
            (3, 0, Note.G, True),
        ]


class TestFamilialHierarchy:
    def test_c(self) -> None:
        pattern = familial_hierarchy_pattern(C_MAJOR)
        assert len(pattern.positions) == 42
        assert {p.note for p in pattern.positions} == notes_in_key(C_MAJOR)
        roots = pattern.roots
        assert len(roots) == 6
        assert all(p.note == Note.C for p in roots)

    def test_degree_order(self) -> None:
        pattern = familial_hierarchy_pattern(Key(Note.G))
        assert [p.note for p in pattern.positions[::6]] == Key(Note.G).notes


class TestExtended:
    def test_no_virtual_strings(self) -> None:
        extended = extended_diatonic_pattern(C_MAJOR, extended_string_count=0)
        assert _summary(extended) == _summary(spiral_mapping_pattern(C_MAJOR).positions)

    def test_string_span(self) -> None:
        extended = extended_diatonic_pattern(C_MAJOR, max_fret=12)
        strings = {p.string for p in extended}
        assert min(strings) == -11
        assert max(strings) == 18

    def test_virtual_strings_follow_cycle(self) -> None:
        extended = extended_diatonic_pattern(C_MAJOR, max_fret=12)
        by_place = {p.pos: p for p in extended}
        # String 7 is a virtual B string below the low E.
        assert by_place[StringPos(7, 0)].note == Note.B
        assert by_place[StringPos(7, 1)].note == Note.C
        assert by_place[StringPos(7, 1)].is_root

    def test_offset(self) -> None:
        spiral = diatonic_pattern(C_MAJOR, max_fret=12)
        shifted = extended_diatonic_pattern(
            C_MAJOR, max_fret=12, string_offset=1, extended_string_count=0
        )
        for pos in shifted:
            if pos.string >= 2:
                source = spiral[StringPos(pos.string - 1, pos.fret)]
                assert source.note == pos.note

    def test_negative_count(self) -> None:
        with pytest.raises(PreconditionException):
            extended_diatonic_pattern(C_MAJOR, extended_string_count=-1)


def test_diatonic_pattern() -> None:
    lookup = diatonic_pattern(C_MAJOR, max_fret=12)
    assert lookup[StringPos(5, 3)].is_root
    assert StringPos(5, 1) not in lookup


@pytest.mark.parametrize("pattern_type", list(PatternType))
def test_generate_pattern_dispatch(pattern_type: PatternType) -> None:
    pattern = generate_pattern(pattern_type, C_MAJOR, max_fret=12)
    assert isinstance(pattern, Pattern)
    assert pattern.type == pattern_type
    assert pattern.positions


def test_other_tuning() -> None:
    pattern = spiral_mapping_pattern(C_MAJOR, 12, TUNING_LOOKUP["Drop D"])
    by_place = {p.pos: p for p in pattern.positions}
    assert by_place[StringPos(6, 0)].note == Note.D
    assert StringPos(6, 2) in by_place


@given(keys)
def test_spiral_completeness(key: Key) -> None:
    pattern = spiral_mapping_pattern(key, max_fret=12)
    members = notes_in_key(key)
    places = {p.pos for p in pattern.positions}
    assert all(p.note in members for p in pattern.positions)
    board = fretboard_for(STANDARD_TUNING, 12)
    for pos in board.iter_positions():
        assert (pos.pos in places) == (pos.note in members)


@given(keys)
def test_generators_idempotent(key: Key) -> None:
    for pattern_type in PatternType:
        first = generate_pattern(pattern_type, key, max_fret=15)
        second = generate_pattern(pattern_type, key, max_fret=15)
        assert _summary(first.positions) == _summary(second.positions)
        assert first.name == second.name
        assert first.description == second.description
