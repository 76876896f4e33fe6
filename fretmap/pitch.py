"""Pitch classes and interval arithmetic for fretmap.

Every other module reduces its work to the twelve pitch classes defined
here. Arithmetic on them is circular: no note is higher than another,
only some number of semitones up from it.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Dict, List


@unique
class Note(Enum):
    """Enumeration of the twelve pitch classes.

    Values correspond to semitone offsets from C within an octave.
    Uses sharp notation for accidentals (C#, D#, F#, G#, A#).
    """

    C = 0  # C natural
    Cs = 1  # C sharp
    D = 2  # D natural
    Ds = 3  # D sharp
    E = 4  # E natural
    F = 5  # F natural
    Fs = 6  # F sharp
    G = 7  # G natural
    Gs = 8  # G sharp
    A = 9  # A natural
    As = 10  # A sharp
    B = 11  # B natural

    @property
    def semitones_from_c(self) -> int:
        """Get the semitone offset of this note above C (0-11)."""
        return self.value

    @property
    def display(self) -> str:
        """Get the display name of this note (e.g. 'C#')."""
        return _DISPLAY_NAMES[self]

    def add_semitones(self, semitones: int) -> Note:
        """Add semitone steps to this note.

        Args:
            semitones: Number of semitones to add (can be negative or
                exceed an octave).

        Returns:
            The resulting note after adding the steps.
        """
        return NOTE_LOOKUP[(self.value + semitones) % MAX_NOTES]

    def semitones_to(self, other: Note) -> int:
        """Count the semitones from this note up to another.

        Args:
            other: The target note.

        Returns:
            The upward distance in semitones (0-11).
        """
        return (other.value - self.value) % MAX_NOTES

    @staticmethod
    def from_midi(pitch: int) -> Note:
        """Get the pitch class of a MIDI note number.

        Args:
            pitch: MIDI note number (0-127).

        Returns:
            The pitch class of the given note number.
        """
        return NOTE_LOOKUP[pitch % MAX_NOTES]

    @staticmethod
    def parse(name: str) -> Note:
        """Parse a note name.

        Accepts sharp spellings ('C#', 'Cs'), flat spellings ('Db') and
        naturals, ignoring surrounding whitespace and letter case of the
        note letter.

        Args:
            name: The note name to parse.

        Returns:
            The named pitch class.

        Raises:
            ValueError: If the name does not denote a note.
        """
        text = name.strip()
        if not text or text[0].upper() not in _LETTERS:
            raise ValueError(f"Unknown note name: {name!r}")
        base = _LETTERS[text[0].upper()]
        offset = 0
        for accidental in text[1:]:
            if accidental in ("#", "s", "♯"):
                offset += 1
            elif accidental in ("b", "♭"):
                offset -= 1
            else:
                raise ValueError(f"Unknown note name: {name!r}")
        return base.add_semitones(offset)


MAX_NOTES = 12
"""Number of distinct pitch classes in the chromatic scale."""

UNISON = 0
MINOR_SECOND = 1
MAJOR_SECOND = 2
MINOR_THIRD = 3
MAJOR_THIRD = 4
PERFECT_FOURTH = 5
TRITONE = 6
PERFECT_FIFTH = 7
MINOR_SIXTH = 8
MAJOR_SIXTH = 9
MINOR_SEVENTH = 10
MAJOR_SEVENTH = 11


def _build_note_lookup() -> Dict[int, Note]:
    """Build a lookup table from semitone values to notes.

    Returns:
        Dictionary mapping integers (0-11) to Note enum values.
    """
    d: Dict[int, Note] = {}
    for n in Note:
        d[n.value] = n
    assert len(d) == MAX_NOTES
    return d


NOTE_LOOKUP = _build_note_lookup()
"""Lookup table from semitone offset (0-11) to Note."""

_DISPLAY_NAMES: Dict[Note, str] = {n: n.name.replace("s", "#") for n in Note}

_LETTERS: Dict[str, Note] = {n.name: n for n in Note if len(n.name) == 1}

CIRCLE_OF_FIFTHS: List[Note] = [Note.C.add_semitones(7 * i) for i in range(MAX_NOTES)]
"""The circle of fifths starting from C, progressing clockwise by fifths."""


def semitones_from_c(note: Note) -> int:
    """Get the fixed semitone offset of a note above C.

    Args:
        note: The note to look up.

    Returns:
        An integer in [0, 11].
    """
    return note.semitones_from_c


def add_semitones(note: Note, semitones: int) -> Note:
    """Transpose a note by a number of semitones, modulo the octave.

    Args:
        note: The starting note.
        semitones: Number of semitones to add (any integer).

    Returns:
        The transposed note.
    """
    return note.add_semitones(semitones)
