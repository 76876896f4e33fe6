"""Fretboard geometry for fretmap.

This module maps between the two-dimensional (string, fret) grid of a
fretted instrument and pitch classes. It defines the position types every
generator emits and a precomputed Fretboard that the generators query.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Generator, List, Optional

from fretmap.base import PreconditionException, require_max_fret
from fretmap.pitch import MAX_NOTES, Note
from fretmap.tuning import STANDARD_TUNING, Tuning


@dataclass(frozen=True, order=True)
class StringPos:
    """Identifies a place on the fretboard by string and fret.

    Strings are 1-based with string 1 the highest-pitched. Virtual strings
    outside the real range are allowed for extended patterns.
    """

    string: int
    """The string number (1 = highest-pitched string)."""
    fret: int
    """The fret number (0 = open string)."""

    def shift(self, string_delta: int, fret_delta: int) -> StringPos:
        """Move this position by a number of strings and frets.

        Args:
            string_delta: Strings to move (positive toward the bass).
            fret_delta: Frets to move (positive toward the body).

        Returns:
            The shifted position.
        """
        return StringPos(self.string + string_delta, self.fret + fret_delta)


@dataclass(frozen=True)
class StringBounds:
    """Defines a rectangular region of the fretboard.

    This class represents a bounded area of the fretboard defined by
    minimum and maximum string positions. It provides iteration and
    containment checking for string positions within the bounds.
    """

    low: StringPos
    """The minimum string position (lowest string number and fret)."""
    high: StringPos
    """The maximum string position (highest string number and fret)."""

    def __iter__(self) -> Generator[StringPos, None, None]:
        """Iterate over all string positions within the bounds.

        Yields:
            StringPos instances for every combination of string and fret
            within the bounded region, string-major.
        """
        for string in range(self.low.string, self.high.string + 1):
            for fret in range(self.low.fret, self.high.fret + 1):
                yield StringPos(string=string, fret=fret)

    def __contains__(self, cand: object) -> bool:
        """Check if a string position is within these bounds.

        Args:
            cand: The string position (or fretboard position) to test.

        Returns:
            True if the position is within the bounds, False otherwise.
        """
        if not isinstance(cand, (StringPos, FretboardPosition)):
            return False
        return (
            cand.string >= self.low.string
            and cand.string <= self.high.string
            and cand.fret >= self.low.fret
            and cand.fret <= self.high.fret
        )

    @classmethod
    def enclosing(cls, positions: List[FretboardPosition]) -> StringBounds:
        """Compute the smallest bounds containing some positions.

        Args:
            positions: A non-empty list of positions.

        Returns:
            The enclosing bounds.
        """
        assert positions
        return cls(
            low=StringPos(
                min(p.string for p in positions), min(p.fret for p in positions)
            ),
            high=StringPos(
                max(p.string for p in positions), max(p.fret for p in positions)
            ),
        )


@dataclass(frozen=True, eq=False)
class FretboardPosition:
    """A note on the fretboard.

    Two positions are the same place iff their string and fret match, so
    equality and hashing ignore the note and the root flag.
    """

    string: int
    """The string number (1 = highest-pitched string)."""
    fret: int
    """The fret number (0 = open string)."""
    note: Note
    """The pitch class sounding at this position."""
    is_root: bool = False
    """Whether this position is marked as a root by its generator."""

    @property
    def pos(self) -> StringPos:
        """Get the (string, fret) identity of this position."""
        return StringPos(self.string, self.fret)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FretboardPosition):
            return NotImplemented
        return self.string == other.string and self.fret == other.fret

    def __hash__(self) -> int:
        return hash((self.string, self.fret))

    def with_root(self, is_root: bool) -> FretboardPosition:
        """Copy this position with a different root flag.

        Args:
            is_root: The new root flag.

        Returns:
            A new position at the same place.
        """
        return FretboardPosition(self.string, self.fret, self.note, is_root)


def note_at(
    string: int, fret: int, tuning: Tuning = STANDARD_TUNING
) -> Optional[Note]:
    """Get the pitch class at a string and fret.

    Args:
        string: The 1-based string number.
        fret: The fret number.
        tuning: The instrument tuning.

    Returns:
        The note at that position, or None if the string does not exist
        in the tuning.
    """
    if not tuning.has_string(string):
        return None
    return tuning.open_note(string).add_semitones(fret)


def positions_for(
    note: Note, max_fret: int, tuning: Tuning = STANDARD_TUNING
) -> List[FretboardPosition]:
    """Get the lowest position of a note on every string.

    Only the lowest fret on each string is returned; octave duplicates
    higher up the same string are not.

    Args:
        note: The note to find.
        max_fret: The highest fret to consider.
        tuning: The instrument tuning.

    Returns:
        At most one position per string, string 1 first.
    """
    require_max_fret(max_fret)
    positions: List[FretboardPosition] = []
    for string in range(1, tuning.num_strings + 1):
        fret = tuning.open_note(string).semitones_to(note)
        if fret <= max_fret:
            positions.append(FretboardPosition(string=string, fret=fret, note=note))
    return positions


class Fretboard:
    """A bounded fretboard with a precomputed note lookup.

    Generators query this instead of recomputing pitch arithmetic for every
    cell, which keeps repeated calls (e.g. live drag feedback) cheap.
    """

    def __init__(self, tuning: Tuning = STANDARD_TUNING, max_fret: int = 24) -> None:
        """Initialize the fretboard.

        Args:
            tuning: The instrument tuning.
            max_fret: The highest fret on the board.

        Raises:
            PreconditionException: If max_fret is negative.
        """
        require_max_fret(max_fret)
        self._tuning = tuning
        self._max_fret = max_fret
        self._bounds = StringBounds(
            low=StringPos(1, 0), high=StringPos(tuning.num_strings, max_fret)
        )
        self._note_lookup = self._make_note_lookup()

    def _make_note_lookup(self) -> Dict[StringPos, Note]:
        """Build a lookup table from string positions to notes.

        Returns:
            Dictionary mapping every position on the board to its note.
        """
        lookup: Dict[StringPos, Note] = {}
        for str_pos in self._bounds:
            lookup[str_pos] = self._tuning.open_note(str_pos.string).add_semitones(
                str_pos.fret
            )
        return lookup

    @property
    def tuning(self) -> Tuning:
        """Get the tuning of this board."""
        return self._tuning

    @property
    def max_fret(self) -> int:
        """Get the highest fret of this board."""
        return self._max_fret

    @property
    def num_strings(self) -> int:
        """Get the number of strings on this board."""
        return self._tuning.num_strings

    @property
    def bounds(self) -> StringBounds:
        """Get the bounds of this board."""
        return self._bounds

    def strings(self) -> range:
        """Get the range of string numbers on this board."""
        return range(1, self.num_strings + 1)

    def frets(self) -> range:
        """Get the range of fret numbers on this board."""
        return range(0, self._max_fret + 1)

    def contains(self, string: int, fret: int) -> bool:
        """Check whether a (string, fret) pair lies on this board.

        Args:
            string: The string number.
            fret: The fret number.

        Returns:
            True if the pair is within the board's bounds.
        """
        return StringPos(string, fret) in self._bounds

    def note_at(self, string: int, fret: int) -> Optional[Note]:
        """Get the note at a string and fret.

        Args:
            string: The string number.
            fret: The fret number.

        Returns:
            The note, or None if the pair lies off the board.
        """
        return self._note_lookup.get(StringPos(string, fret))

    def position(
        self, string: int, fret: int, root: Optional[Note] = None
    ) -> Optional[FretboardPosition]:
        """Build the position at a string and fret.

        Args:
            string: The string number.
            fret: The fret number.
            root: If given, the position is marked as a root when its note
                equals this note.

        Returns:
            The position, or None if the pair lies off the board.
        """
        note = self.note_at(string, fret)
        if note is None:
            return None
        return FretboardPosition(string, fret, note, root is not None and note == root)

    def positions_for(self, note: Note) -> List[FretboardPosition]:
        """Get the lowest position of a note on every string of this board.

        Args:
            note: The note to find.

        Returns:
            At most one position per string.
        """
        return positions_for(note, self._max_fret, self._tuning)

    def frets_for(self, string: int, note: Note) -> List[int]:
        """Get every fret on a string where a note sounds.

        Args:
            string: The string number.
            note: The note to find.

        Returns:
            All matching frets in ascending order.
        """
        return [fret for fret in self.frets() if self.note_at(string, fret) == note]

    def iter_positions(
        self, root: Optional[Note] = None
    ) -> Generator[FretboardPosition, None, None]:
        """Iterate over every position on the board.

        Args:
            root: If given, positions with this note are marked as roots.

        Yields:
            Positions string-major, fret ascending.
        """
        for str_pos in self._bounds:
            note = self._note_lookup[str_pos]
            yield FretboardPosition(
                str_pos.string, str_pos.fret, note, root is not None and note == root
            )

    def clamp(self, string: int, fret: int) -> StringPos:
        """Clamp a (string, fret) pair onto the board.

        Args:
            string: The string number.
            fret: The fret number.

        Returns:
            The nearest position on the board.
        """
        return StringPos(
            max(1, min(self.num_strings, string)), max(0, min(self._max_fret, fret))
        )

    def fret_toward(
        self, from_string: int, from_fret: int, to_string: int, semitones: int
    ) -> int:
        """Find the fret on another string that sounds an interval.

        The target is the note `semitones` above the note at
        (from_string, from_fret). Of its occurrences on `to_string`, the
        one closest to `from_fret` is returned (the lower one on a tie).
        The offset is taken from the real open-string pitches, so the
        major third between the G and B strings of standard tuning shifts
        the result by one fret compared to the other string pairs.

        Args:
            from_string: The string of the starting note.
            from_fret: The fret of the starting note.
            to_string: The string to place the interval on.
            semitones: The interval above the starting note.

        Returns:
            The fret on `to_string`, possibly off the board.
        """
        tuning = self._tuning
        if not tuning.has_string(from_string) or not tuning.has_string(to_string):
            raise PreconditionException(
                "string pair", (from_string, to_string), "must name real strings"
            )
        delta = (
            tuning.pitches[from_string - 1] - tuning.pitches[to_string - 1] + semitones
        ) % MAX_NOTES
        if delta >= MAX_NOTES // 2:
            delta -= MAX_NOTES
        return from_fret + delta


@lru_cache(maxsize=64)
def fretboard_for(tuning: Tuning = STANDARD_TUNING, max_fret: int = 24) -> Fretboard:
    """Get a shared, precomputed fretboard for a tuning and fret count.

    Fretboards are never mutated after construction, so one instance per
    (tuning, max_fret) pair is reused across generator calls.

    Args:
        tuning: The instrument tuning.
        max_fret: The highest fret on the board.

    Returns:
        The fretboard for those parameters.
    """
    return Fretboard(tuning, max_fret)
