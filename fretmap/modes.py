"""Mode shapes on the fretboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from fretmap import constants
from fretmap.fretboard import FretboardPosition, fretboard_for
from fretmap.pitch import Note
from fretmap.scale import Key, Mode, mode_roots
from fretmap.tuning import STANDARD_TUNING, Tuning


@dataclass(frozen=True)
class ModeShape:
    """The positions of a mode on some root."""

    mode: Mode
    """The mode."""
    root: Note
    """The root of the mode."""
    positions: List[FretboardPosition]
    """Matching positions, string-major with frets ascending."""
    description: str
    """A sentence describing the shape."""

    @property
    def characteristic_note(self) -> Note:
        """Get the note carrying the interval that sets this mode apart."""
        return self.root.add_semitones(self.mode.characteristic_interval)


def generate_mode(
    mode: Mode,
    root: Note,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> ModeShape:
    """Find every position of a mode across the fretboard.

    Args:
        mode: The mode.
        root: The root of the mode.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        The mode shape, roots marked.
    """
    classifier = mode.scale.to_classifier(root)
    board = fretboard_for(tuning, max_fret)
    positions = [
        p for p in board.iter_positions(root=root) if classifier.is_member(p.note)
    ]
    return ModeShape(mode, root, positions, mode.description)


def generate_mode_position(
    mode: Mode,
    root: Note,
    start_fret: int,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> ModeShape:
    """Find a single box position of a mode.

    The box spans two frets below to four frets above the start fret,
    clamped to the board. Each string contributes its lowest three
    matches, following the three-notes-per-string fingering.

    Args:
        mode: The mode.
        root: The root of the mode.
        start_fret: The fret the box is built around.
        max_fret: The highest fret on the board.
        tuning: The instrument tuning.

    Returns:
        The mode shape, at most three positions per string.
    """
    classifier = mode.scale.to_classifier(root)
    board = fretboard_for(tuning, max_fret)
    low = max(0, start_fret - constants.MODE_BOX_BEFORE)
    high = min(max_fret, start_fret + constants.MODE_BOX_AFTER)
    positions: List[FretboardPosition] = []
    for string in board.strings():
        on_string: List[FretboardPosition] = []
        for fret in range(low, high + 1):
            pos = board.position(string, fret, root=root)
            assert pos is not None
            if classifier.is_member(pos.note):
                on_string.append(pos)
        positions.extend(on_string[: constants.MODE_NOTES_PER_STRING])
    return ModeShape(
        mode, root, positions, f"{mode.name} position at fret {start_fret}"
    )


def modes_from_parent(
    parent: Key,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> List[ModeShape]:
    """Generate all seven modes of a parent major key.

    Each mode starts on its own degree of the parent, so all seven shapes
    cover the same notes with different roots.

    Args:
        parent: The parent major key.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        One shape per mode, Ionian first.
    """
    return [
        generate_mode(mode, root, max_fret, tuning)
        for mode, root in mode_roots(parent).items()
    ]
