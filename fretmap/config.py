"""Configuration for the fretmap command line.

The engine itself takes every parameter explicitly; this module gathers the
parameters one session shares (tuning, fret count, block limits and MIDI
settings) into a single immutable Config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fretmap import constants
from fretmap.base import PreconditionException, require_max_fret
from fretmap.scale import Key
from fretmap.tuning import STANDARD_TUNING, TUNING_LOOKUP, Tuning


@dataclass(frozen=True)
class Config:
    """Session-wide settings for generating and rendering patterns."""

    key: Key  # The selected key
    tuning: Tuning  # Open-string pitches of the instrument
    max_fret: int  # Highest fret for pattern generation
    block_max_fret: int  # Highest fret for block partitioning
    block_limit: Optional[int]  # Blocks kept per type (None = unlimited)
    reference_pitch: float  # Frequency of A4 in Hz
    midi_channel: int  # MIDI channel for rendered notes (0-15)
    velocity: int  # MIDI velocity for rendered notes
    bpm: int  # Tempo of rendered MIDI files


def lookup_tuning(name: str) -> Tuning:
    """Find a named tuning.

    Args:
        name: The tuning name, matched case-insensitively.

    Returns:
        The tuning.

    Raises:
        PreconditionException: If no tuning has that name.
    """
    for tuning_name, tuning in TUNING_LOOKUP.items():
        if tuning_name.lower() == name.lower():
            return tuning
    raise PreconditionException(
        "tuning", name, f"must be one of {', '.join(TUNING_LOOKUP)}"
    )


def init_config(
    key: Optional[Key] = None,
    tuning: Tuning = STANDARD_TUNING,
    max_fret: int = constants.DEFAULT_FRET_COUNT,
    block_limit: Optional[int] = constants.DEFAULT_BLOCK_LIMIT,
    reference_pitch: float = constants.DEFAULT_REFERENCE_PITCH,
) -> Config:
    """Initialize a configuration with standard defaults.

    Block partitioning covers at most the first DEFAULT_BLOCK_FRET_COUNT
    frets, or fewer when max_fret is smaller.

    Args:
        key: The selected key, C major if not given.
        tuning: The instrument tuning.
        max_fret: The highest fret for pattern generation.
        block_limit: Blocks kept per type, or None for all.
        reference_pitch: The frequency of A4 in Hz.

    Returns:
        The configuration.

    Raises:
        PreconditionException: If max_fret or block_limit is negative, or
            the reference pitch is not positive.
    """
    require_max_fret(max_fret)
    if block_limit is not None and block_limit < 0:
        raise PreconditionException("block_limit", block_limit, "must be non-negative")
    if reference_pitch <= 0:
        raise PreconditionException(
            "reference_pitch", reference_pitch, "must be positive"
        )
    return Config(
        key=key if key is not None else Key.parse("C"),
        tuning=tuning,
        max_fret=max_fret,
        block_max_fret=min(max_fret, constants.DEFAULT_BLOCK_FRET_COUNT),
        block_limit=block_limit,
        reference_pitch=reference_pitch,
        midi_channel=constants.DEFAULT_MIDI_CHANNEL,
        velocity=constants.DEFAULT_VELOCITY,
        bpm=constants.DEFAULT_BPM,
    )
