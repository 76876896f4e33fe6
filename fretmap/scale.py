"""Keys, scales and modes for fretmap.

A key is a root plus the major-scale template. Modes are the seven
rotations of that template. Both reduce to a set of seven pitch classes
which the pattern generators test fretboard notes against.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, List, Set

from fretmap.base import MatchException
from fretmap.pitch import MAX_NOTES, Note

MAJOR_SCALE_INTERVALS: List[int] = [0, 2, 4, 5, 7, 9, 11]
"""Semitone offsets of the major scale (W-W-H-W-W-W-H)."""


class ScaleClassifier:
    """Classifies notes relative to a specific scale and root.

    This class provides methods to determine whether a note is the
    root of the scale or a member of the scale, which is all the
    fretboard generators need to know about a note.
    """

    def __init__(self, root: Note, members: Set[Note]) -> None:
        """Initialize the classifier with a root and scale members.

        Args:
            root: The root note of the scale.
            members: Set of all notes that are members of this scale.
        """
        self._root = root
        self._members = members

    @property
    def root(self) -> Note:
        """Get the root note of the classified scale."""
        return self._root

    @property
    def members(self) -> Set[Note]:
        """Get a copy of the member notes of the classified scale."""
        return set(self._members)

    def is_root(self, note: Note) -> bool:
        """Check if a note is the root of this scale.

        Args:
            note: The note to check.

        Returns:
            True if this is the root note of the scale.
        """
        return self._root == note

    def is_member(self, note: Note) -> bool:
        """Check if a note is a member of this scale.

        Args:
            note: The note to check.

        Returns:
            True if this note is a member of the scale.
        """
        return note in self._members


@dataclass(frozen=True)
class Scale:
    """Represents a musical scale with its name and interval pattern.

    The intervals always start with 0 (the root) and contain the ascending
    semitone offsets of every note in the scale.
    """

    name: str
    """The human-readable name of this scale."""
    intervals: List[int]
    """List of semitone intervals from the root note, starting at 0."""

    def notes(self, root: Note) -> List[Note]:
        """Get the notes of this scale on a root, in degree order.

        Args:
            root: The root note for this scale instance.

        Returns:
            One note per interval, starting with the root.
        """
        return [root.add_semitones(steps) for steps in self.intervals]

    def to_classifier(self, root: Note) -> ScaleClassifier:
        """Create a scale classifier for this scale with the given root.

        Args:
            root: The root note for this scale instance.

        Returns:
            A ScaleClassifier that can determine note relationships
            to this scale.

        Raises:
            AssertionError: If the scale definition is invalid (intervals
                           not sorted, out of range, or duplicate notes).
        """
        members: Set[Note] = set()
        assert self.intervals[0] == 0
        last_steps = -1
        for steps in self.intervals:
            assert steps >= 0 and steps < MAX_NOTES
            assert steps > last_steps
            last_steps = steps
            note = root.add_semitones(steps)
            assert note not in members
            members.add(note)
        return ScaleClassifier(root, members)


MAJOR_SCALE = Scale("Major", MAJOR_SCALE_INTERVALS)
"""The major scale, the template every Key is built on."""


@dataclass(frozen=True)
class Key:
    """A major key: a root note plus the major-scale template."""

    root: Note
    """The tonic of the key."""

    @property
    def name(self) -> str:
        """Get the display name of the key (e.g. 'C#')."""
        return self.root.display

    @property
    def notes(self) -> List[Note]:
        """Get the seven notes of the key in degree order."""
        return MAJOR_SCALE.notes(self.root)

    def classifier(self) -> ScaleClassifier:
        """Get a classifier for membership and root tests in this key.

        Returns:
            A ScaleClassifier for the major scale on this root.
        """
        return MAJOR_SCALE.to_classifier(self.root)

    def contains(self, note: Note) -> bool:
        """Check if a note belongs to this key.

        Args:
            note: The note to check.

        Returns:
            True if the note is one of the key's seven notes.
        """
        return note in self.notes

    def degree_root(self, degree: int) -> Note:
        """Get the root of the chord built on a scale degree.

        Args:
            degree: 1-based scale degree (1 = tonic, 7 = leading tone).

        Returns:
            The note at that degree.
        """
        return self.root.add_semitones(MAJOR_SCALE_INTERVALS[(degree - 1) % 7])

    @staticmethod
    def parse(name: str) -> Key:
        """Parse a key from its root's name (e.g. 'F#').

        Args:
            name: The root note name.

        Returns:
            The major key on that root.
        """
        return Key(Note.parse(name))


ALL_KEYS: List[Key] = [Key(n) for n in Note]
"""All twelve major keys, in chromatic order from C."""


def notes_in_key(key: Key) -> Set[Note]:
    """Get the set of notes in a major key.

    Args:
        key: The key.

    Returns:
        The seven distinct notes of the key.
    """
    return set(key.notes)


def is_note_in_key(note: Note, key: Key) -> bool:
    """Check if a note is in a major key.

    Args:
        note: The note to check.
        key: The key.

    Returns:
        True if the note belongs to the key.
    """
    return key.contains(note)


def relative_minor(key: Key) -> Note:
    """Get the root of the relative minor of a major key.

    Args:
        key: The major key.

    Returns:
        The sixth degree of the key.
    """
    return key.degree_root(6)


@unique
class Mode(Enum):
    """The seven modes of the major scale, in degree order."""

    Ionian = 1  # I - Major scale
    Dorian = 2  # II - Minor with raised 6th
    Phrygian = 3  # III - Minor with lowered 2nd
    Lydian = 4  # IV - Major with raised 4th
    Mixolydian = 5  # V - Major with lowered 7th
    Aeolian = 6  # VI - Natural minor
    Locrian = 7  # VII - Diminished (lowered 2nd and 5th)

    @property
    def degree(self) -> int:
        """Get the degree of the major scale this mode starts on (1-7)."""
        return self.value

    @property
    def roman_numeral(self) -> str:
        """Get the roman numeral of this mode's degree."""
        return _ROMAN_NUMERALS[self.value - 1]

    @property
    def intervals(self) -> List[int]:
        """Get the semitone intervals of this mode from its root."""
        return _MODE_INTERVALS[self]

    @property
    def scale(self) -> Scale:
        """Get this mode as a Scale."""
        return Scale(self.name, self.intervals)

    @property
    def quality(self) -> str:
        """Get the quality of the mode's tonic triad."""
        if self in (Mode.Ionian, Mode.Lydian, Mode.Mixolydian):
            return "Major"
        elif self in (Mode.Dorian, Mode.Phrygian, Mode.Aeolian):
            return "Minor"
        elif self == Mode.Locrian:
            return "Diminished"
        else:
            raise MatchException(self)

    @property
    def description(self) -> str:
        """Get a brief description of the mode's character."""
        return _MODE_DESCRIPTIONS[self]

    @property
    def characteristic_interval(self) -> int:
        """Get the interval that distinguishes this mode from its neighbors."""
        return _CHARACTERISTIC_INTERVALS[self]

    @property
    def degree_names(self) -> List[str]:
        """Get the scale degree names of this mode (e.g. '1', '♭3')."""
        return _DEGREE_NAMES[self]


_ROMAN_NUMERALS = ["I", "II", "III", "IV", "V", "VI", "VII"]


def _rotate_major(degree: int) -> List[int]:
    """Compute the intervals of the major scale started on a degree.

    Args:
        degree: 1-based degree to start from.

    Returns:
        The rotated interval list, starting at 0.
    """
    start = MAJOR_SCALE_INTERVALS[degree - 1]
    rotated = MAJOR_SCALE_INTERVALS[degree - 1 :] + MAJOR_SCALE_INTERVALS[: degree - 1]
    return [(steps - start) % MAX_NOTES for steps in rotated]


_MODE_INTERVALS: Dict[Mode, List[int]] = {m: _rotate_major(m.value) for m in Mode}

assert _MODE_INTERVALS[Mode.Dorian] == [0, 2, 3, 5, 7, 9, 10]
assert _MODE_INTERVALS[Mode.Locrian] == [0, 1, 3, 5, 6, 8, 10]

_MODE_DESCRIPTIONS: Dict[Mode, str] = {
    Mode.Ionian: "The standard major scale. Bright and happy.",
    Mode.Dorian: "Minor with a raised 6th. Jazzy, sophisticated minor sound.",
    Mode.Phrygian: "Minor with a flat 2nd. Spanish, exotic character.",
    Mode.Lydian: "Major with a raised 4th. Dreamy, floating quality.",
    Mode.Mixolydian: "Major with a flat 7th. Bluesy, rock feel.",
    Mode.Aeolian: "Natural minor scale. Sad, melancholic.",
    Mode.Locrian: "Diminished mode with flat 2nd and 5th. Unstable, tense.",
}

_CHARACTERISTIC_INTERVALS: Dict[Mode, int] = {
    Mode.Ionian: 4,  # Major 3rd
    Mode.Dorian: 9,  # Major 6th in a minor context
    Mode.Phrygian: 1,  # Minor 2nd
    Mode.Lydian: 6,  # Augmented 4th
    Mode.Mixolydian: 10,  # Minor 7th
    Mode.Aeolian: 8,  # Minor 6th
    Mode.Locrian: 6,  # Diminished 5th
}

_DEGREE_NAMES: Dict[Mode, List[str]] = {
    Mode.Ionian: ["1", "2", "3", "4", "5", "6", "7"],
    Mode.Dorian: ["1", "2", "♭3", "4", "5", "6", "♭7"],
    Mode.Phrygian: ["1", "♭2", "♭3", "4", "5", "♭6", "♭7"],
    Mode.Lydian: ["1", "2", "3", "♯4", "5", "6", "7"],
    Mode.Mixolydian: ["1", "2", "3", "4", "5", "6", "♭7"],
    Mode.Aeolian: ["1", "2", "♭3", "4", "5", "♭6", "♭7"],
    Mode.Locrian: ["1", "♭2", "♭3", "4", "♭5", "♭6", "♭7"],
}


def notes_in_mode(mode: Mode, root: Note) -> Set[Note]:
    """Get the set of notes in a mode on a given root.

    Args:
        mode: The mode.
        root: The root of the mode.

    Returns:
        The seven distinct notes of the mode.
    """
    return mode.scale.to_classifier(root).members


def interval_name(note: Note, mode: Mode, root: Note) -> str:
    """Name the scale degree of a note within a mode.

    Args:
        note: The note to name.
        mode: The mode.
        root: The root of the mode.

    Returns:
        The degree name (e.g. '♭3'), or an empty string if the note is
        not in the mode.
    """
    semitones = root.semitones_to(note)
    if semitones in mode.intervals:
        return mode.degree_names[mode.intervals.index(semitones)]
    return ""


def mode_roots(parent: Key) -> Dict[Mode, Note]:
    """Get the root of each mode within a parent major key.

    Args:
        parent: The parent major key.

    Returns:
        A mapping from each mode to the key degree it starts on.
    """
    return {m: parent.degree_root(m.degree) for m in Mode}
