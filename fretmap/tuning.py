"""Instrument tunings for fretmap.

A tuning is data, not code: an ordered list of open-string pitches.
Strings are numbered from 1, string 1 being the highest-pitched one, so
standard guitar tuning reads E4 B3 G3 D3 A2 E2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from fretmap.base import PreconditionException
from fretmap.pitch import Note


@dataclass(frozen=True)
class Tuning:
    """Open-string pitches of a fretted instrument.

    Pitches are MIDI note numbers, ordered from string 1 (highest) to
    string N (lowest). Only pitch classes matter to the pattern engine;
    octaves are kept so that positions can be sounded at the right height.
    """

    name: str
    """Human-readable name of the tuning (e.g. 'Standard', 'Drop D')."""
    pitches: Tuple[int, ...]
    """MIDI note numbers of the open strings, string 1 first."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "pitches", tuple(self.pitches))
        if not self.pitches:
            raise PreconditionException("tuning", self.name, "must have strings")

    def __len__(self) -> int:
        return len(self.pitches)

    @property
    def num_strings(self) -> int:
        """Get the number of real strings in this tuning."""
        return len(self.pitches)

    @property
    def notes(self) -> List[Note]:
        """Get the open-string pitch classes, string 1 first."""
        return [Note.from_midi(p) for p in self.pitches]

    def open_note(self, string: int) -> Note:
        """Get the pitch class of an open string.

        Args:
            string: The 1-based string number.

        Returns:
            The pitch class of the open string.
        """
        return Note.from_midi(self.pitches[string - 1])

    def has_string(self, string: int) -> bool:
        """Check whether a string number names a real string.

        Args:
            string: The 1-based string number.

        Returns:
            True if the string exists in this tuning.
        """
        return 1 <= string <= len(self.pitches)

    @property
    def repeat_steps(self) -> int:
        """Get the semitone span from the lowest to the highest open string."""
        return self.pitches[0] - self.pitches[-1]

    def virtual_pitch(self, string: int) -> int:
        """Get the open pitch of a string, extending past the real strings.

        Strings outside 1..N continue the tuning's interval cycle: the
        intervals between strings 1..N repeat every N-1 strings, shifted by
        the full span of the tuning. For standard guitar tuning string 7 is
        a B a fourth below the low E, and string 0 is an A a fourth above
        the high E.

        Args:
            string: Any string number, including virtual ones.

        Returns:
            The MIDI note number of that (possibly virtual) open string.
        """
        if len(self.pitches) == 1:
            return self.pitches[0] - (string - 1) * 12
        period = len(self.pitches) - 1
        cycles, index = divmod(string - 1, period)
        return self.pitches[index] - cycles * self.repeat_steps

    def virtual_note(self, string: int) -> Note:
        """Get the open pitch class of a possibly virtual string.

        Args:
            string: Any string number, including virtual ones.

        Returns:
            The pitch class of that open string.
        """
        return Note.from_midi(self.virtual_pitch(string))


STANDARD_TUNING = Tuning("Standard", (64, 59, 55, 50, 45, 40))
"""Standard guitar tuning (E4 B3 G3 D3 A2 E2)."""

TUNINGS: List[Tuning] = [
    STANDARD_TUNING,
    Tuning("Drop D", (64, 59, 55, 50, 45, 38)),  # E4 B3 G3 D3 A2 D2
    Tuning("Half Step Down", (63, 58, 54, 49, 44, 39)),  # Eb4 Bb3 Gb3 Db3 Ab2 Eb2
    Tuning("Open G", (62, 59, 55, 50, 43, 38)),  # D4 B3 G3 D3 G2 D2
    Tuning("Open D", (62, 57, 54, 50, 45, 38)),  # D4 A3 F#3 D3 A2 D2
    Tuning("DADGAD", (62, 57, 55, 50, 45, 38)),  # D4 A3 G3 D3 A2 D2
    Tuning("Bass", (43, 38, 33, 28)),  # G2 D2 A1 E1
]
"""Named tunings available to the engine and the command line."""

TUNING_LOOKUP: Dict[str, Tuning] = {t.name: t for t in TUNINGS}
"""Dictionary lookup from tuning name to Tuning."""
