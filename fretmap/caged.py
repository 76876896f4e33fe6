"""CAGED chord shapes.

The five CAGED forms are the open C, A, G, E and D major chord shapes,
moved up the neck so that their root lands on a chosen note. Each form is
a template of (string, fret offset, chord tone) slots relative to the
root's fret on the form's primary string. Slots that fall off the board or
that the tuning does not spell as the expected tone are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, List, Optional, Tuple

from fretmap import constants
from fretmap.base import MatchException
from fretmap.chords import ChordTone
from fretmap.fretboard import FretboardPosition, fretboard_for
from fretmap.pitch import Note
from fretmap.tuning import STANDARD_TUNING, Tuning

TemplateSlot = Tuple[int, int, ChordTone]


@unique
class CAGEDForm(Enum):
    """The five movable major chord forms."""

    C = "C"
    A = "A"
    G = "G"
    E = "E"
    D = "D"

    @property
    def primary_string(self) -> int:
        """Get the string that carries the root the form is anchored on."""
        if self == CAGEDForm.C or self == CAGEDForm.A:
            return 5
        elif self == CAGEDForm.G or self == CAGEDForm.E:
            return 6
        elif self == CAGEDForm.D:
            return 4
        else:
            raise MatchException(self)

    @property
    def template(self) -> List[TemplateSlot]:
        """Get the slots of the form other than its anchoring root."""
        return _TEMPLATES[self]

    @property
    def description(self) -> str:
        """Get a short explanation of the form."""
        return _DESCRIPTIONS[self]


_TEMPLATES: Dict[CAGEDForm, List[TemplateSlot]] = {
    CAGEDForm.C: [
        (4, -1, ChordTone.Third),
        (3, -3, ChordTone.Fifth),
        (2, -2, ChordTone.Root),
        (1, -3, ChordTone.Third),
    ],
    CAGEDForm.A: [
        (4, 2, ChordTone.Fifth),
        (3, 2, ChordTone.Root),
        (2, 2, ChordTone.Third),
        (1, 0, ChordTone.Fifth),
    ],
    CAGEDForm.G: [
        (5, -1, ChordTone.Third),
        (4, -3, ChordTone.Fifth),
        (3, -3, ChordTone.Root),
        (2, -3, ChordTone.Third),
        (1, 0, ChordTone.Root),
    ],
    CAGEDForm.E: [
        (5, 2, ChordTone.Fifth),
        (4, 2, ChordTone.Root),
        (3, 1, ChordTone.Third),
        (2, 0, ChordTone.Fifth),
        (1, 0, ChordTone.Root),
    ],
    CAGEDForm.D: [
        (3, 2, ChordTone.Fifth),
        (2, 3, ChordTone.Root),
        (1, 2, ChordTone.Third),
    ],
}

_DESCRIPTIONS: Dict[CAGEDForm, str] = {
    CAGEDForm.C: "C form: root on the 5th string, shaped like an open C chord.",
    CAGEDForm.A: "A form: root on the 5th string, shaped like an open A chord.",
    CAGEDForm.G: "G form: root on the 6th string, shaped like an open G chord.",
    CAGEDForm.E: "E form: root on the 6th string, shaped like an open E chord.",
    CAGEDForm.D: "D form: root on the 4th string, shaped like an open D chord.",
}


@dataclass(frozen=True)
class CAGEDShape:
    """One placement of a CAGED form on the neck."""

    form: CAGEDForm
    """The form that was placed."""
    root: Note
    """The chord root."""
    root_position: FretboardPosition
    """The anchoring root on the form's primary string."""
    positions: List[FretboardPosition]
    """The anchoring root followed by the surviving template slots."""
    description: str
    """A sentence describing this placement."""


def caged_shapes(
    form: CAGEDForm,
    root: Note,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> List[CAGEDShape]:
    """Place a CAGED form on every occurrence of a root.

    Args:
        form: The form.
        root: The chord root.
        max_fret: The highest fret on the board.
        tuning: The instrument tuning.

    Returns:
        One shape per root fret on the primary string that keeps at least
        MIN_CAGED_NOTES positions, ascending by fret.
    """
    board = fretboard_for(tuning, max_fret)
    shapes: List[CAGEDShape] = []
    if not tuning.has_string(form.primary_string):
        return shapes
    for root_fret in board.frets_for(form.primary_string, root):
        root_position = FretboardPosition(form.primary_string, root_fret, root, True)
        positions = [root_position]
        for string, offset, tone in form.template:
            fret = root_fret + offset
            note = board.note_at(string, fret)
            if note is not None and note == tone.above(root):
                positions.append(
                    FretboardPosition(string, fret, note, tone == ChordTone.Root)
                )
        if len(positions) >= constants.MIN_CAGED_NOTES:
            shapes.append(
                CAGEDShape(
                    form=form,
                    root=root,
                    root_position=root_position,
                    positions=positions,
                    description=(
                        f"{root.display} major, {form.value} form at fret {root_fret}"
                    ),
                )
            )
    logging.debug(
        "%s form for %s: %d shapes", form.value, root.display, len(shapes)
    )
    return shapes


def all_caged_forms(
    root: Note,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
    forms: Optional[List[CAGEDForm]] = None,
) -> List[CAGEDShape]:
    """Place every requested CAGED form on a root.

    Args:
        root: The chord root.
        max_fret: The highest fret on the board.
        tuning: The instrument tuning.
        forms: The forms to place, or None for all five.

    Returns:
        The shapes of each form in turn, in C, A, G, E, D order when all
        forms are requested.
    """
    if forms is None:
        forms = list(CAGEDForm)
    shapes: List[CAGEDShape] = []
    for form in forms:
        shapes.extend(caged_shapes(form, root, max_fret, tuning))
    return shapes
