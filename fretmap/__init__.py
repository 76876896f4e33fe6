from fretmap.base import MatchException, PreconditionException
from fretmap.blocks import Block, BlockType, all_blocks, drag_block
from fretmap.caged import CAGEDForm, CAGEDShape, all_caged_forms, caged_shapes
from fretmap.chords import Chord, ChordQuality
from fretmap.fretboard import (
    Fretboard,
    FretboardPosition,
    StringBounds,
    StringPos,
    note_at,
    positions_for,
)
from fretmap.modes import ModeShape, generate_mode, modes_from_parent
from fretmap.patterns import Pattern, PatternType, generate_pattern
from fretmap.pitch import Note, add_semitones, semitones_from_c
from fretmap.scale import Key, Mode, is_note_in_key, notes_in_key, notes_in_mode
from fretmap.tuning import STANDARD_TUNING, Tuning

__all__ = [
    "Block",
    "BlockType",
    "CAGEDForm",
    "CAGEDShape",
    "Chord",
    "ChordQuality",
    "Fretboard",
    "FretboardPosition",
    "Key",
    "MatchException",
    "Mode",
    "ModeShape",
    "Note",
    "Pattern",
    "PatternType",
    "PreconditionException",
    "STANDARD_TUNING",
    "StringBounds",
    "StringPos",
    "Tuning",
    "add_semitones",
    "all_blocks",
    "all_caged_forms",
    "caged_shapes",
    "drag_block",
    "generate_mode",
    "generate_pattern",
    "is_note_in_key",
    "modes_from_parent",
    "note_at",
    "notes_in_key",
    "notes_in_mode",
    "positions_for",
    "semitones_from_c",
]
