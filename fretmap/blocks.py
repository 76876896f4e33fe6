"""Partitioning of the fretboard into HEAD, BRIDGE and TRIPLE blocks.

A block is a compact cluster of in-key notes that the rSoGuitar method
teaches as a unit. Finding one is a bounded local search from an anchor
(string, fret): most anchors do not produce a valid block, which is the
normal case and is reported as None rather than an error. A full-board
search tries every anchor and keeps the distinct results.

HEAD and BRIDGE blocks share one parameterized search (ClusterSpec).
TRIPLE blocks stack the I, IV and V major triads of the key across
neighboring string groups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, unique
from math import floor
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from fretmap import constants
from fretmap.base import MatchException, PreconditionException
from fretmap.chords import ChordTone, primary_chord_roots
from fretmap.fretboard import (
    Fretboard,
    FretboardPosition,
    StringBounds,
    StringPos,
    fretboard_for,
)
from fretmap.pitch import Note
from fretmap.scale import Key
from fretmap.tuning import STANDARD_TUNING, Tuning


@unique
class BlockType(Enum):
    """The three kinds of block."""

    Head = "HEAD"
    Bridge = "BRIDGE"  # Also referred to as the tail block
    Triple = "TRIPLE BLOCK"

    @property
    def label(self) -> str:
        """Get the display label of this block type."""
        return self.value


@dataclass(frozen=True)
class Block:
    """A block found on the fretboard.

    Blocks are transient query results. Re-anchoring a block builds a
    replacement that keeps only the block_id of the original.
    """

    block_id: str
    """Stable identifier, kept across re-anchoring."""
    type: BlockType
    """The kind of block."""
    anchor: StringPos
    """The (string, fret) the search that produced this block started from."""
    bounds: StringBounds
    """The smallest rectangle enclosing the block's positions."""
    positions: List[FretboardPosition]
    """The positions of the block."""
    name: str
    """A short title for display."""
    description: str
    """A sentence describing the block."""

    @property
    def fret_range(self) -> Tuple[int, int]:
        """Get the lowest and highest fret of the block."""
        return self.bounds.low.fret, self.bounds.high.fret

    @property
    def string_range(self) -> Tuple[int, int]:
        """Get the lowest and highest string number of the block."""
        return self.bounds.low.string, self.bounds.high.string

    @property
    def span(self) -> int:
        """Get the fret span (highest minus lowest fret) of the block."""
        return self.bounds.high.fret - self.bounds.low.fret

    @property
    def places(self) -> FrozenSet[StringPos]:
        """Get the set of (string, fret) places the block covers."""
        return frozenset(p.pos for p in self.positions)

    def contains(self, pos: FretboardPosition) -> bool:
        """Check whether a position belongs to this block.

        Args:
            pos: The position to check.

        Returns:
            True if the block has a position at the same place.
        """
        return pos.pos in self.places


@dataclass(frozen=True)
class ClusterSpec:
    """Parameters of a compact-cluster block search.

    From an anchor (string S, fret F) the search visits `string_count`
    consecutive strings starting at S and stepping by `string_step`, takes
    the first `notes_per_string` in-key notes of each string within frets
    F-fret_before .. F+fret_after, and accepts the result only if exactly
    `target_count` notes were found spanning at most `max_span` frets.
    """

    block_type: BlockType
    """The kind of block this search produces."""
    shape: str
    """The shape signature shown to the learner."""
    string_step: int
    """+1 to extend toward the bass strings, -1 toward the treble strings."""
    fret_before: int
    """Frets below the anchor fret included in the window."""
    fret_after: int
    """Frets above the anchor fret included in the window."""
    max_span: int
    """Largest allowed fret span of the accepted cluster."""
    string_count: int = 3
    """Number of consecutive strings searched."""
    notes_per_string: int = constants.CLUSTER_NOTES_PER_STRING
    """In-key notes taken from each string."""
    target_count: int = constants.CLUSTER_TARGET_NOTES
    """Exact number of notes an accepted cluster holds."""

    def strings(self, anchor_string: int) -> List[int]:
        """Get the strings searched from an anchor string.

        Args:
            anchor_string: The anchor's string number.

        Returns:
            The string numbers, anchor first.
        """
        return [anchor_string + i * self.string_step for i in range(self.string_count)]

    def frets(self, anchor_fret: int, max_fret: int) -> range:
        """Get the fret window searched from an anchor fret.

        Args:
            anchor_fret: The anchor's fret.
            max_fret: The highest fret on the board.

        Returns:
            The window, clamped to the board.
        """
        low = max(0, anchor_fret - self.fret_before)
        high = min(max_fret, anchor_fret + self.fret_after)
        return range(low, high + 1)


HEAD_SPEC = ClusterSpec(
    block_type=BlockType.Head,
    shape="XX-X",
    string_step=1,
    fret_before=1,
    fret_after=4,
    max_span=4,
)
"""HEAD blocks: anchor on the top string of three, window leaning to the nut."""

BRIDGE_SPEC = ClusterSpec(
    block_type=BlockType.Bridge,
    shape="X-XX",
    string_step=-1,
    fret_before=0,
    fret_after=4,
    max_span=3,
)
"""BRIDGE blocks: anchor on the bottom string of three, tighter span."""

CLUSTER_SPECS: Dict[BlockType, ClusterSpec] = {
    BlockType.Head: HEAD_SPEC,
    BlockType.Bridge: BRIDGE_SPEC,
}


def _block_id(block_type: BlockType, anchor: StringPos) -> str:
    return f"{block_type.name.lower()}-{anchor.string}-{anchor.fret}"


def _make_block(
    block_type: BlockType,
    key: Key,
    anchor: StringPos,
    positions: List[FretboardPosition],
    detail: str,
) -> Block:
    bounds = StringBounds.enclosing(positions)
    return Block(
        block_id=_block_id(block_type, anchor),
        type=block_type,
        anchor=anchor,
        bounds=bounds,
        positions=positions,
        name=block_type.label,
        description=(
            f"{block_type.label} block in {key.name}: {detail} on strings "
            f"{bounds.low.string}-{bounds.high.string}, frets "
            f"{bounds.low.fret}-{bounds.high.fret}."
        ),
    )


def find_cluster(
    spec: ClusterSpec, key: Key, board: Fretboard, anchor: StringPos
) -> Optional[Block]:
    """Search for a HEAD or BRIDGE block from one anchor.

    Args:
        spec: The search parameters.
        key: The key whose notes make up the block.
        board: The fretboard to search.
        anchor: Where the search starts.

    Returns:
        The block, or None if this anchor does not produce a valid one.
    """
    if not board.contains(anchor.string, anchor.fret):
        return None
    strings = spec.strings(anchor.string)
    if not all(board.contains(s, anchor.fret) for s in strings):
        return None
    classifier = key.classifier()
    window = spec.frets(anchor.fret, board.max_fret)
    positions: List[FretboardPosition] = []
    for string in strings:
        found = 0
        for fret in window:
            if found == spec.notes_per_string:
                break
            pos = board.position(string, fret, root=key.root)
            assert pos is not None
            if classifier.is_member(pos.note):
                positions.append(pos)
                found += 1
    if len(positions) != spec.target_count:
        return None
    frets = [p.fret for p in positions]
    if max(frets) - min(frets) > spec.max_span:
        return None
    return _make_block(
        spec.block_type,
        key,
        anchor,
        positions,
        f"{spec.target_count} notes in the {spec.shape} shape",
    )


def _find_triad(
    board: Fretboard, root_string: int, root_fret: int, chord_root: Note, window: range
) -> Optional[List[FretboardPosition]]:
    """Build a major triad upward from a root on three consecutive strings.

    The third goes on the next higher-pitched string and the fifth on the
    one after. Each tone must lie within TRIAD_STEP_WINDOW frets of the
    previous one and inside the window.

    Args:
        board: The fretboard.
        root_string: The string of the chord root (the lowest of the three).
        root_fret: The fret of the chord root.
        chord_root: The chord root note.
        window: The frets the triad must stay within.

    Returns:
        Root, third and fifth positions, or None if the triad does not fit.
    """
    positions = [FretboardPosition(root_string, root_fret, chord_root)]
    prev_string, prev_fret, prev_tone = root_string, root_fret, ChordTone.Root
    for tone in (ChordTone.Third, ChordTone.Fifth):
        string = prev_string - 1
        fret = board.fret_toward(
            prev_string, prev_fret, string, tone.semitones - prev_tone.semitones
        )
        if abs(fret - prev_fret) > constants.TRIAD_STEP_WINDOW or fret not in window:
            return None
        note = board.note_at(string, fret)
        if note != tone.above(chord_root):
            return None
        positions.append(FretboardPosition(string, fret, note))
        prev_string, prev_fret, prev_tone = string, fret, tone
    return positions


def _triad_root_strings(board: Fretboard, anchor_string: int) -> List[int]:
    """Order the strings that can carry a triad root, nearest to the anchor.

    Args:
        board: The fretboard.
        anchor_string: The anchor's string number.

    Returns:
        Candidate root strings (each with two higher strings above it).
    """
    candidates = [s for s in board.strings() if s - 2 >= 1]
    return sorted(candidates, key=lambda s: (abs(s - anchor_string), s))


def find_triple(key: Key, board: Fretboard, anchor: StringPos) -> Optional[Block]:
    """Search for a TRIPLE block from one anchor.

    The window covers two frets below to three frets above the anchor.
    String groups are tried nearest to the anchor string first; on each,
    every occurrence of an I, IV or V chord root inside the window seeds a
    major triad. The search stops once all three chords are placed.

    Args:
        key: The key.
        board: The fretboard to search.
        anchor: Where the search starts.

    Returns:
        The block (6 to 9 distinct positions), or None if fewer than six
        positions were found.
    """
    if not board.contains(anchor.string, anchor.fret):
        return None
    window = range(
        max(0, anchor.fret - constants.TRIPLE_FRET_BEFORE),
        min(board.max_fret, anchor.fret + constants.TRIPLE_FRET_AFTER) + 1,
    )
    chord_roots = primary_chord_roots(key)
    triads: Dict[Note, List[FretboardPosition]] = {}
    for root_string in _triad_root_strings(board, anchor.string):
        for fret in window:
            note = board.note_at(root_string, fret)
            if note is None or note not in chord_roots or note in triads:
                continue
            triad = _find_triad(board, root_string, fret, note, window)
            if triad is not None:
                triads[note] = triad
            if len(triads) == constants.TRIPLE_TARGET_TRIADS:
                break
        if len(triads) == constants.TRIPLE_TARGET_TRIADS:
            break
    seen: Set[StringPos] = set()
    positions: List[FretboardPosition] = []
    for chord_root in chord_roots:
        for pos in triads.get(chord_root, []):
            if pos.pos not in seen:
                seen.add(pos.pos)
                positions.append(pos.with_root(pos.note == key.root))
    if len(positions) < constants.TRIPLE_MIN_NOTES:
        return None
    names = ", ".join(root.display for root in chord_roots if root in triads)
    return _make_block(
        BlockType.Triple,
        key,
        anchor,
        positions,
        f"{len(triads)} stacked triads ({names})",
    )


def find_block(
    block_type: BlockType, key: Key, board: Fretboard, anchor: StringPos
) -> Optional[Block]:
    """Search for a block of a given type from one anchor.

    Args:
        block_type: The kind of block.
        key: The key.
        board: The fretboard to search.
        anchor: Where the search starts.

    Returns:
        The block, or None if this anchor does not produce a valid one.

    Raises:
        MatchException: If the block type is unknown.
    """
    if block_type == BlockType.Head or block_type == BlockType.Bridge:
        return find_cluster(CLUSTER_SPECS[block_type], key, board, anchor)
    elif block_type == BlockType.Triple:
        return find_triple(key, board, anchor)
    else:
        raise MatchException(block_type)


def blocks_of_type(
    block_type: BlockType,
    key: Key,
    max_fret: int = constants.DEFAULT_BLOCK_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
    limit: Optional[int] = constants.DEFAULT_BLOCK_LIMIT,
) -> List[Block]:
    """Find the distinct blocks of one type across the whole board.

    Anchors are tried fret by fret from the nut, strings in order within a
    fret. Blocks covering exactly the same places as an earlier one are
    dropped.

    Args:
        block_type: The kind of block.
        key: The key.
        max_fret: The highest fret on the board.
        tuning: The instrument tuning.
        limit: The most blocks to return, or None for all of them.

    Returns:
        The blocks in discovery order.
    """
    board = fretboard_for(tuning, max_fret)
    seen: Set[FrozenSet[StringPos]] = set()
    blocks: List[Block] = []
    for fret in board.frets():
        for string in board.strings():
            if limit is not None and len(blocks) >= limit:
                return blocks
            block = find_block(block_type, key, board, StringPos(string, fret))
            if block is not None and block.places not in seen:
                seen.add(block.places)
                blocks.append(block)
    return blocks


BLOCK_ORDER: List[BlockType] = [BlockType.Head, BlockType.Bridge, BlockType.Triple]


def all_blocks(
    key: Key,
    max_fret: int = constants.DEFAULT_BLOCK_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
    limit: Optional[int] = constants.DEFAULT_BLOCK_LIMIT,
    start_type: BlockType = BlockType.Head,
) -> List[Block]:
    """Find the blocks of every type across the whole board.

    Each type is searched independently, so blocks of different types may
    share positions.

    Args:
        key: The key.
        max_fret: The highest fret on the board.
        tuning: The instrument tuning.
        limit: The most blocks to return per type, or None for all.
        start_type: The type listed first; the others follow in
            HEAD, BRIDGE, TRIPLE order.

    Returns:
        The union of the per-type results.
    """
    start = BLOCK_ORDER.index(start_type)
    blocks: List[Block] = []
    for block_type in BLOCK_ORDER[start:] + BLOCK_ORDER[:start]:
        found = blocks_of_type(block_type, key, max_fret, tuning, limit)
        logging.debug(
            "found %d %s blocks in %s", len(found), block_type.label, key.name
        )
        blocks.extend(found)
    return blocks


def _round_half_away(value: float) -> int:
    magnitude = floor(abs(value) + 0.5)
    return magnitude if value >= 0 else -magnitude


def drag_delta(
    offset_x: float, offset_y: float, fret_width: float, string_spacing: float
) -> Tuple[int, int]:
    """Convert a drag offset in pixels into a fret and string delta.

    Frets run left to right and strings top to bottom with string 1 on
    top, so dragging down moves toward the bass strings.

    Args:
        offset_x: Horizontal drag distance.
        offset_y: Vertical drag distance (positive downward).
        fret_width: Width of one fret.
        string_spacing: Distance between adjacent strings.

    Returns:
        (fret_delta, string_delta), each rounded to the nearest whole step.

    Raises:
        PreconditionException: If a cell dimension is not positive.
    """
    if fret_width <= 0:
        raise PreconditionException("fret_width", fret_width, "must be positive")
    if string_spacing <= 0:
        raise PreconditionException(
            "string_spacing", string_spacing, "must be positive"
        )
    return (
        _round_half_away(offset_x / fret_width),
        _round_half_away(offset_y / string_spacing),
    )


def rebuild_block(
    block: Block,
    anchor: StringPos,
    key: Key,
    max_fret: int = constants.DEFAULT_BLOCK_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Optional[Block]:
    """Rerun a block's search from a new anchor.

    Args:
        block: The block being moved.
        anchor: The new anchor.
        key: The key.
        max_fret: The highest fret on the board.
        tuning: The instrument tuning.

    Returns:
        A replacement block with the same block_id, or None if the new
        anchor does not produce a valid block.
    """
    board = fretboard_for(tuning, max_fret)
    rebuilt = find_block(block.type, key, board, anchor)
    if rebuilt is None:
        return None
    return replace(rebuilt, block_id=block.block_id)


def drag_block(
    block: Block,
    fret_delta: int,
    string_delta: int,
    key: Key,
    max_fret: int = constants.DEFAULT_BLOCK_FRET_COUNT,
    tuning: Tuning = STANDARD_TUNING,
) -> Block:
    """Move a block by a fret and string delta.

    The shifted anchor is clamped onto the board. If no block of the same
    type can be built there, the original block is returned unchanged.

    Args:
        block: The block being moved.
        fret_delta: Frets to move (positive toward the body).
        string_delta: Strings to move (positive toward the bass).
        key: The key.
        max_fret: The highest fret on the board.
        tuning: The instrument tuning.

    Returns:
        The replacement block, or the original one.
    """
    board = fretboard_for(tuning, max_fret)
    shifted = block.anchor.shift(string_delta, fret_delta)
    anchor = board.clamp(shifted.string, shifted.fret)
    rebuilt = rebuild_block(block, anchor, key, max_fret, tuning)
    if rebuilt is None:
        logging.debug(
            "no %s block at %s, keeping %s",
            block.type.label,
            anchor,
            block.block_id,
        )
        return block
    return rebuilt


def block_for_position(
    blocks: List[Block], pos: FretboardPosition
) -> Optional[Block]:
    """Find the first block containing a position.

    Args:
        blocks: The blocks to search.
        pos: The position.

    Returns:
        The first block with a position at the same place, or None.
    """
    for block in blocks:
        if block.contains(pos):
            return block
    return None


def is_position_in_block(
    blocks: List[Block], pos: FretboardPosition, block_type: BlockType
) -> bool:
    """Check whether a position belongs to some block of a given type.

    Args:
        blocks: The blocks to search.
        pos: The position.
        block_type: The kind of block.

    Returns:
        True if a block of that type contains the position.
    """
    return any(b.type == block_type and b.contains(pos) for b in blocks)
