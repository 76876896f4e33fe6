"""Tests for keys, scales and modes."""

from typing import List

import pytest
from hypothesis import given

from fretmap.pitch import Note
from fretmap.scale import (
    ALL_KEYS,
    Key,
    Mode,
    Scale,
    interval_name,
    is_note_in_key,
    mode_roots,
    notes_in_key,
    notes_in_mode,
    relative_minor,
)
from tests.fretmap.hypo import configure_hypo, keys, notes

configure_hypo()


def test_c_major_notes() -> None:
    assert Key(Note.C).notes == [
        Note.C,
        Note.D,
        Note.E,
        Note.F,
        Note.G,
        Note.A,
        Note.B,
    ]


def test_key_membership() -> None:
    g = Key.parse("G")
    assert is_note_in_key(Note.Fs, g)
    assert not is_note_in_key(Note.F, g)
    assert g.name == "G"


@pytest.mark.parametrize("key", ALL_KEYS)
def test_key_cardinality(key: Key) -> None:
    assert len(notes_in_key(key)) == 7
    assert key.root in notes_in_key(key)


@pytest.mark.parametrize(
    "mode, intervals",
    [
        (Mode.Ionian, [0, 2, 4, 5, 7, 9, 11]),
        (Mode.Dorian, [0, 2, 3, 5, 7, 9, 10]),
        (Mode.Phrygian, [0, 1, 3, 5, 7, 8, 10]),
        (Mode.Lydian, [0, 2, 4, 6, 7, 9, 11]),
        (Mode.Mixolydian, [0, 2, 4, 5, 7, 9, 10]),
        (Mode.Aeolian, [0, 2, 3, 5, 7, 8, 10]),
        (Mode.Locrian, [0, 1, 3, 5, 6, 8, 10]),
    ],
)
def test_mode_intervals(mode: Mode, intervals: List[int]) -> None:
    assert mode.intervals == intervals
    assert len(mode.degree_names) == 7


@pytest.mark.parametrize(
    "mode, quality, numeral",
    [
        (Mode.Ionian, "Major", "I"),
        (Mode.Dorian, "Minor", "II"),
        (Mode.Lydian, "Major", "IV"),
        (Mode.Aeolian, "Minor", "VI"),
        (Mode.Locrian, "Diminished", "VII"),
    ],
)
def test_mode_properties(mode: Mode, quality: str, numeral: str) -> None:
    assert mode.quality == quality
    assert mode.roman_numeral == numeral
    assert mode.description


def test_notes_in_mode_share_parent() -> None:
    assert notes_in_mode(Mode.Dorian, Note.D) == notes_in_key(Key(Note.C))
    assert notes_in_mode(Mode.Aeolian, Note.A) == notes_in_key(Key(Note.C))
    assert Note.Fs in notes_in_mode(Mode.Lydian, Note.C)


def test_interval_name() -> None:
    assert interval_name(Note.Ds, Mode.Dorian, Note.C) == "♭3"
    assert interval_name(Note.Fs, Mode.Lydian, Note.C) == "♯4"
    assert interval_name(Note.G, Mode.Ionian, Note.C) == "5"
    assert interval_name(Note.Cs, Mode.Ionian, Note.C) == ""


def test_relative_minor() -> None:
    assert relative_minor(Key(Note.C)) == Note.A
    assert relative_minor(Key(Note.G)) == Note.E


def test_mode_roots() -> None:
    roots = mode_roots(Key(Note.C))
    assert list(roots) == list(Mode)
    assert roots[Mode.Ionian] == Note.C
    assert roots[Mode.Dorian] == Note.D
    assert roots[Mode.Lydian] == Note.F
    assert roots[Mode.Locrian] == Note.B


def test_invalid_scale_table() -> None:
    with pytest.raises(AssertionError):
        Scale("Unsorted", [0, 4, 2]).to_classifier(Note.C)
    with pytest.raises(AssertionError):
        Scale("Rootless", [2, 4]).to_classifier(Note.C)


@given(keys)
def test_classifier_agrees_with_key(key: Key) -> None:
    classifier = key.classifier()
    assert classifier.is_root(key.root)
    for note in Note:
        assert classifier.is_member(note) == key.contains(note)


@given(notes)
def test_modes_have_seven_notes(root: Note) -> None:
    for mode in Mode:
        assert len(notes_in_mode(mode, root)) == 7
        intervals = mode.intervals
        assert intervals == sorted(set(intervals))
        assert all(0 <= i < 12 for i in intervals)
