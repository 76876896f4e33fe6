"""Pattern generators for the four rSoGuitar concepts.

Each generator is a pure function of a key, a fret range and a tuning, and
returns a Pattern whose positions are built fresh on every call. For
Spiral Mapping and Jumping the order of positions is meaningful (a line is
drawn between consecutive entries); for the chord patterns it is not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, List, Optional

from fretmap import constants
from fretmap.base import MatchException, PreconditionException
from fretmap.chords import ChordQuality
from fretmap.fretboard import FretboardPosition, StringPos, fretboard_for
from fretmap.pitch import Note
from fretmap.scale import MAJOR_SCALE_INTERVALS, Key
from fretmap.tuning import STANDARD_TUNING, Tuning


@unique
class PatternType(Enum):
    """The pattern concepts of the rSoGuitar method."""

    SpiralMapping = "spiralMapping"
    Jumping = "jumping"
    FamilyOfChords = "familyOfChords"
    FamilialHierarchy = "familialHierarchy"


@dataclass(frozen=True)
class Pattern:
    """A set of fretboard positions illustrating one concept in one key."""

    type: PatternType
    """The concept this pattern illustrates."""
    key: Key
    """The key the pattern was generated for."""
    positions: List[FretboardPosition]
    """The positions of the pattern, in generation order."""
    name: str
    """A short title for display."""
    description: str
    """A sentence explaining the pattern."""

    @property
    def roots(self) -> List[FretboardPosition]:
        """Get the positions marked as roots."""
        return [p for p in self.positions if p.is_root]


def spiral_mapping_pattern(
    key: Key,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Pattern:
    """Generate the spiral mapping pattern for a key.

    Args:
        key: The key.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        Every in-key position, string-major with frets ascending, roots
        marked.
    """
    classifier = key.classifier()
    board = fretboard_for(tuning, max_fret)
    positions = [
        p for p in board.iter_positions(root=key.root) if classifier.is_member(p.note)
    ]
    return Pattern(
        type=PatternType.SpiralMapping,
        key=key,
        positions=positions,
        name=f"Spiral Mapping - {key.name}",
        description=(
            f"The spiral mapping pattern shows all notes in the key of {key.name} "
            "across the fretboard."
        ),
    )


def jumping_pattern(
    start: FretboardPosition,
    key: Key,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Pattern:
    """Generate the jumping pattern from a starting position.

    Jumps are horizontal moves along the start's string that stay in key.

    Args:
        start: The starting position; it is emitted first, unchanged.
        key: The key.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        The start followed by every other in-key fret on its string,
        ascending.

    Raises:
        PreconditionException: If the start lies on a string the tuning
            does not have.
    """
    if not tuning.has_string(start.string):
        raise PreconditionException(
            "start", start.pos, f"must lie on strings 1-{tuning.num_strings}"
        )
    classifier = key.classifier()
    board = fretboard_for(tuning, max_fret)
    positions: List[FretboardPosition] = [start]
    for fret in board.frets():
        if fret == start.fret:
            continue
        pos = board.position(start.string, fret, root=key.root)
        assert pos is not None
        if classifier.is_member(pos.note):
            positions.append(pos)
    return Pattern(
        type=PatternType.Jumping,
        key=key,
        positions=positions,
        name=f"Jumping Pattern - {key.name}",
        description=(
            "Valid jump positions from the starting position, staying within the key."
        ),
    )


def family_chord_roots(key: Key, quality: ChordQuality) -> List[Note]:
    """Get the chord roots shown by the family of chords pattern.

    Major and minor quality both use the I, IV and V offsets. Any other
    quality shows the tonic alone.

    Args:
        key: The key.
        quality: The chord quality selector.

    Returns:
        The chord roots in display order.
    """
    if quality == ChordQuality.Major:
        offsets = [0, 5, 7]  # I, IV, V
    elif quality == ChordQuality.Minor:
        # TODO: minor keys may want i, iv, v built on the relative minor;
        # the offsets match the major case until that is decided.
        offsets = [0, 5, 7]  # i, iv, v
    else:
        offsets = [0]
    return [key.root.add_semitones(steps) for steps in offsets]


def family_of_chords_pattern(
    key: Key,
    quality: ChordQuality = ChordQuality.Major,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Pattern:
    """Generate the family of chords pattern for a key.

    Args:
        key: The key.
        quality: The chord quality selector.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        The lowest position on every string of each chord root, all marked
        as roots, grouped by chord.
    """
    board = fretboard_for(tuning, max_fret)
    positions: List[FretboardPosition] = []
    for chord_root in family_chord_roots(key, quality):
        positions.extend(p.with_root(True) for p in board.positions_for(chord_root))
    return Pattern(
        type=PatternType.FamilyOfChords,
        key=key,
        positions=positions,
        name=f"Family of Chords - {key.name} {quality.value}",
        description=(
            "All available positions for the primary chords in the key of "
            f"{key.name}."
        ),
    )


def familial_hierarchy_pattern(
    key: Key,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Pattern:
    """Generate the familial hierarchy pattern for a key.

    Shows the roots of all seven diatonic chords. Only the tonic's
    positions are marked as roots.

    Args:
        key: The key.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        The lowest position on every string of each degree root, from I to
        vii°.
    """
    board = fretboard_for(tuning, max_fret)
    positions: List[FretboardPosition] = []
    for steps in MAJOR_SCALE_INTERVALS:
        degree_root = key.root.add_semitones(steps)
        positions.extend(
            p.with_root(steps == 0) for p in board.positions_for(degree_root)
        )
    return Pattern(
        type=PatternType.FamilialHierarchy,
        key=key,
        positions=positions,
        name=f"Familial Hierarchy - {key.name}",
        description=(
            f"The natural chord progression hierarchy in the key of {key.name}."
        ),
    )


def default_jump_start(key: Key) -> FretboardPosition:
    """Get the start used for the jumping pattern when none is selected.

    Args:
        key: The key.

    Returns:
        The open third string, labelled with the key's root.
    """
    return FretboardPosition(
        string=constants.DEFAULT_JUMP_START_STRING, fret=0, note=key.root, is_root=True
    )


def generate_pattern(
    pattern_type: PatternType,
    key: Key,
    start: Optional[FretboardPosition] = None,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Pattern:
    """Generate a pattern of a given type.

    Args:
        pattern_type: The pattern to generate.
        key: The key.
        start: The jumping start position; ignored by other patterns.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        The generated pattern.

    Raises:
        MatchException: If the pattern type is unknown.
    """
    if pattern_type == PatternType.SpiralMapping:
        return spiral_mapping_pattern(key, max_fret, tuning)
    elif pattern_type == PatternType.Jumping:
        if start is None:
            start = default_jump_start(key)
        return jumping_pattern(start, key, max_fret, tuning)
    elif pattern_type == PatternType.FamilyOfChords:
        return family_of_chords_pattern(key, ChordQuality.Major, max_fret, tuning)
    elif pattern_type == PatternType.FamilialHierarchy:
        return familial_hierarchy_pattern(key, max_fret, tuning)
    else:
        raise MatchException(pattern_type)


def diatonic_pattern(
    key: Key,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Dict[StringPos, FretboardPosition]:
    """Index every in-key position of the board by place.

    Args:
        key: The key.
        max_fret: The highest fret to include.
        tuning: The instrument tuning.

    Returns:
        A mapping from (string, fret) to the in-key position there, in
        string-major order.
    """
    return {
        p.pos: p for p in spiral_mapping_pattern(key, max_fret, tuning).positions
    }


def extended_diatonic_pattern(
    key: Key,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    string_offset: int = 0,
    fret_offset: int = 0,
    extended_string_count: int = constants.DEFAULT_EXTENDED_STRINGS,
    tuning: Tuning = STANDARD_TUNING,
) -> List[FretboardPosition]:
    """Continue the diatonic pattern onto virtual strings.

    Virtual strings above string 1 and below string N follow the tuning's
    interval cycle (see Tuning.virtual_pitch), so the pattern repeats
    without a seam. The whole pattern can be slid by a string and fret
    offset, as when the learner drags it; each slid position keeps the
    note of the cell it came from, and cells slid outside 0..max_fret are
    dropped.

    Args:
        key: The key.
        max_fret: The highest fret to include.
        string_offset: Strings to slide the pattern by.
        fret_offset: Frets to slide the pattern by.
        extended_string_count: Virtual strings on each side of the real
            ones.
        tuning: The instrument tuning.

    Returns:
        Positions on strings 1-extended_string_count through
        N+extended_string_count, string-major with frets ascending.

    Raises:
        PreconditionException: If max_fret or extended_string_count is
            negative.
    """
    if extended_string_count < 0:
        raise PreconditionException(
            "extended_string_count", extended_string_count, "must be non-negative"
        )
    board = fretboard_for(tuning, max_fret)
    classifier = key.classifier()
    positions: List[FretboardPosition] = []
    first = 1 - extended_string_count
    last = tuning.num_strings + extended_string_count
    for string in range(first, last + 1):
        source_string = string - string_offset
        open_note = tuning.virtual_note(source_string)
        for fret in board.frets():
            source_fret = fret - fret_offset
            note = open_note.add_semitones(source_fret)
            if classifier.is_member(note):
                positions.append(
                    FretboardPosition(string, fret, note, classifier.is_root(note))
                )
    logging.debug(
        "extended pattern for %s: %d positions on %d strings",
        key.name,
        len(positions),
        last - first + 1,
    )
    return positions
