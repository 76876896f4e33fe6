"""Chord definitions and diatonic harmony for fretmap."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, List, Tuple

from fretmap.base import MatchException
from fretmap.pitch import MAJOR_THIRD, PERFECT_FIFTH, UNISON, Note
from fretmap.scale import MAJOR_SCALE_INTERVALS, Key


@unique
class ChordQuality(Enum):
    """Chord qualities understood by the engine."""

    Major = "major"
    Minor = "minor"
    Dominant = "dominant"
    Diminished = "diminished"
    Augmented = "augmented"
    Sus2 = "sus2"
    Sus4 = "sus4"
    Add9 = "add9"
    Maj7 = "maj7"
    Min7 = "min7"
    Dom7 = "dom7"

    @property
    def intervals(self) -> List[int]:
        """Get the semitone intervals of this quality from the chord root."""
        return _QUALITY_INTERVALS[self]

    @property
    def suffix(self) -> str:
        """Get the suffix appended to a root to name a chord."""
        return _QUALITY_SUFFIXES[self]


_QUALITY_INTERVALS: Dict[ChordQuality, List[int]] = {
    ChordQuality.Major: [0, 4, 7],
    ChordQuality.Minor: [0, 3, 7],
    ChordQuality.Dominant: [0, 4, 7, 10],
    ChordQuality.Diminished: [0, 3, 6],
    ChordQuality.Augmented: [0, 4, 8],
    ChordQuality.Sus2: [0, 2, 7],
    ChordQuality.Sus4: [0, 5, 7],
    ChordQuality.Add9: [0, 4, 7, 14],
    ChordQuality.Maj7: [0, 4, 7, 11],
    ChordQuality.Min7: [0, 3, 7, 10],
    ChordQuality.Dom7: [0, 4, 7, 10],
}

_QUALITY_SUFFIXES: Dict[ChordQuality, str] = {
    ChordQuality.Major: "",
    ChordQuality.Minor: "m",
    ChordQuality.Dominant: "7",
    ChordQuality.Diminished: "°",
    ChordQuality.Augmented: "+",
    ChordQuality.Sus2: "sus2",
    ChordQuality.Sus4: "sus4",
    ChordQuality.Add9: "add9",
    ChordQuality.Maj7: "maj7",
    ChordQuality.Min7: "m7",
    ChordQuality.Dom7: "7",
}


@unique
class ChordTone(Enum):
    """Role of a note within a major triad."""

    Root = UNISON
    Third = MAJOR_THIRD
    Fifth = PERFECT_FIFTH

    @property
    def semitones(self) -> int:
        """Get the interval of this tone above the chord root."""
        return self.value

    def above(self, root: Note) -> Note:
        """Get the note playing this role for a given chord root.

        Args:
            root: The chord root.

        Returns:
            The root, major third or perfect fifth above it.
        """
        return root.add_semitones(self.value)


@dataclass(frozen=True)
class Chord:
    """A chord: a root note and a quality."""

    root: Note
    """The root of the chord."""
    quality: ChordQuality
    """The quality of the chord."""

    @property
    def name(self) -> str:
        """Get the chord symbol (e.g. 'F#m', 'B°')."""
        return self.root.display + self.quality.suffix

    @property
    def notes(self) -> List[Note]:
        """Get the chord's notes, root first, without duplicates."""
        notes: List[Note] = []
        for steps in self.quality.intervals:
            note = self.root.add_semitones(steps)
            if note not in notes:
                notes.append(note)
        return notes


_DIATONIC_QUALITIES: List[ChordQuality] = [
    ChordQuality.Major,
    ChordQuality.Minor,
    ChordQuality.Minor,
    ChordQuality.Major,
    ChordQuality.Major,
    ChordQuality.Minor,
    ChordQuality.Diminished,
]

_DIATONIC_NUMERALS: List[str] = ["I", "ii", "iii", "IV", "V", "vi", "vii°"]


def diatonic_triads(key: Key) -> List[Tuple[str, Chord]]:
    """Get the seven triads built on the degrees of a major key.

    Args:
        key: The key.

    Returns:
        (roman numeral, chord) pairs from I to vii°.
    """
    return [
        (numeral, Chord(key.root.add_semitones(steps), quality))
        for numeral, steps, quality in zip(
            _DIATONIC_NUMERALS, MAJOR_SCALE_INTERVALS, _DIATONIC_QUALITIES
        )
    ]


def primary_chord_roots(key: Key) -> List[Note]:
    """Get the roots of the I, IV and V chords of a key.

    Args:
        key: The key.

    Returns:
        The I, IV and V roots, in that order.
    """
    return [key.root.add_semitones(steps) for steps in (0, 5, 7)]


@dataclass(frozen=True)
class ChordProgression:
    """A named sequence of scale degrees."""

    name: str
    """The roman numeral name of the progression."""
    description: str
    """Where the progression is commonly heard."""
    degrees: List[int]
    """1-based scale degrees, in playing order."""


PROGRESSIONS: List[ChordProgression] = [
    ChordProgression("I-IV-V-I", "Classic Rock/Blues", [1, 4, 5, 1]),
    ChordProgression("I-V-vi-IV", "Pop Progression", [1, 5, 6, 4]),
    ChordProgression("ii-V-I", "Jazz Standard", [2, 5, 1]),
    ChordProgression("I-vi-IV-V", "'50s Progression", [1, 6, 4, 5]),
    ChordProgression("vi-IV-I-V", "Axis Progression", [6, 4, 1, 5]),
    ChordProgression("I-IV-vi-V", "Singer-Songwriter", [1, 4, 6, 5]),
]
"""Common chord progressions used by the circle of fifths trainer."""

PROGRESSION_LOOKUP: Dict[str, ChordProgression] = {p.name: p for p in PROGRESSIONS}
"""Dictionary lookup from progression name to ChordProgression."""


def progression_chords(key: Key, progression: ChordProgression) -> List[Chord]:
    """Spell out a progression in a key.

    Args:
        key: The key.
        progression: The progression.

    Returns:
        One chord per degree of the progression.

    Raises:
        MatchException: If the progression names a degree outside 1-7.
    """
    triads = diatonic_triads(key)
    chords: List[Chord] = []
    for degree in progression.degrees:
        if degree < 1 or degree > len(triads):
            raise MatchException(degree)
        chords.append(triads[degree - 1][1])
    return chords


def fifth_neighbors(key: Key) -> Tuple[Key, Key]:
    """Get the keys adjacent to a key on the circle of fifths.

    Args:
        key: The key.

    Returns:
        The key a fifth above (clockwise) and a fifth below
        (counter-clockwise).
    """
    return Key(key.root.add_semitones(PERFECT_FIFTH)), Key(
        key.root.add_semitones(-PERFECT_FIFTH)
    )
