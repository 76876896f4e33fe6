"""ASCII fretboard diagrams."""

from __future__ import annotations

from typing import Dict, List

from fretmap.base import require_max_fret
from fretmap.fretboard import FretboardPosition, StringPos
from fretmap.tuning import STANDARD_TUNING, Tuning

ROOT_MARK = "R"
MEMBER_MARK = "o"
EMPTY_MARK = "-"
CELL_WIDTH = 3


def render_positions(
    positions: List[FretboardPosition],
    tuning: Tuning = STANDARD_TUNING,
    max_fret: int = 12,
) -> str:
    """Draw positions on a fretboard diagram.

    Strings run top to bottom from string 1, frets left to right from the
    nut. Positions on virtual strings or past max_fret are not drawn.

    Args:
        positions: The positions to mark.
        tuning: The instrument tuning, used for string labels.
        max_fret: The highest fret to draw.

    Returns:
        The diagram, one header line of fret numbers and one line per
        string.
    """
    require_max_fret(max_fret)
    marks: Dict[StringPos, str] = {}
    for pos in positions:
        # A root mark wins over a member mark at the same place.
        if pos.is_root or pos.pos not in marks:
            marks[pos.pos] = ROOT_MARK if pos.is_root else MEMBER_MARK
    label_width = max(len(n.display) for n in tuning.notes)
    frets = range(0, max_fret + 1)
    header = " " * (label_width + 2) + "".join(
        str(fret).center(CELL_WIDTH) for fret in frets
    )
    lines = [header.rstrip()]
    for string in range(1, tuning.num_strings + 1):
        label = tuning.open_note(string).display.rjust(label_width)
        cells = "".join(
            marks.get(StringPos(string, fret), EMPTY_MARK).center(CELL_WIDTH)
            for fret in frets
        )
        lines.append(f"{label} |{cells}")
    return "\n".join(lines)
