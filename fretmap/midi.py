"""MIDI data and pitch math for fretboard positions.

Positions are sounded at their real octave: the open-string pitch of the
tuning plus the fret. This module only produces messages and files; sending
them to a port or synthesizer is left to the caller. The same pitch math
runs in reverse for tuning: a measured frequency maps to its nearest note
and to the open string it is closest to.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import mido
from mido.frozen import FrozenMessage

from fretmap import constants
from fretmap.base import PreconditionException
from fretmap.fretboard import FretboardPosition
from fretmap.pitch import Note
from fretmap.tuning import STANDARD_TUNING, Tuning

MIDI_A4 = 69
MAX_MIDI_NOTE = 127


def position_pitch(pos: FretboardPosition, tuning: Tuning = STANDARD_TUNING) -> int:
    """Get the MIDI note number sounding at a position.

    Virtual strings are sounded by extending the tuning's interval cycle.

    Args:
        pos: The position.
        tuning: The instrument tuning.

    Returns:
        The MIDI note number.
    """
    return tuning.virtual_pitch(pos.string) + pos.fret


def position_frequency(
    pos: FretboardPosition,
    tuning: Tuning = STANDARD_TUNING,
    reference_pitch: float = constants.DEFAULT_REFERENCE_PITCH,
) -> float:
    """Get the equal-tempered frequency sounding at a position.

    Args:
        pos: The position.
        tuning: The instrument tuning.
        reference_pitch: The frequency of A4 in Hz.

    Returns:
        The frequency in Hz.
    """
    return reference_pitch * 2.0 ** ((position_pitch(pos, tuning) - MIDI_A4) / 12.0)


@dataclass(frozen=True)
class PitchReading:
    """The equal-tempered note nearest to a frequency."""

    note: Note
    """The pitch class of the nearest note."""
    octave: int
    """The scientific octave number (A4 is the reference pitch)."""
    cents: float
    """How far the frequency lies from the note, within -50..50 cents."""

    @property
    def name(self) -> str:
        """Get the note name with its octave (e.g. 'A4')."""
        return f"{self.note.display}{self.octave}"


@dataclass(frozen=True)
class StringMatch:
    """An open string a frequency is tuned toward."""

    string: int
    """The string number."""
    note: Note
    """The open-string pitch class."""
    target: float
    """The open-string frequency in Hz, at the octave nearest the input."""
    cents: float
    """How far the frequency lies from the target; positive is sharp."""


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise PreconditionException(name, value, "must be positive")


def cents_between(frequency: float, target: float) -> float:
    """Measure the distance from a target frequency in cents.

    Args:
        frequency: The measured frequency in Hz.
        target: The target frequency in Hz.

    Returns:
        The distance in cents; positive when the frequency is sharp.
    """
    _require_positive("frequency", frequency)
    _require_positive("target", target)
    return 1200.0 * math.log2(frequency / target)


def frequency_to_note(
    frequency: float, reference_pitch: float = constants.DEFAULT_REFERENCE_PITCH
) -> PitchReading:
    """Find the equal-tempered note nearest to a frequency.

    Args:
        frequency: The frequency in Hz.
        reference_pitch: The frequency of A4 in Hz.

    Returns:
        The nearest note, its octave and the deviation in cents.

    Raises:
        PreconditionException: If either frequency is not positive.
    """
    _require_positive("frequency", frequency)
    _require_positive("reference_pitch", reference_pitch)
    semitones = 12.0 * math.log2(frequency / reference_pitch)
    nearest = math.floor(semitones + 0.5)
    pitch = MIDI_A4 + nearest
    return PitchReading(
        note=Note.from_midi(pitch),
        octave=pitch // 12 - 1,
        cents=(semitones - nearest) * 100.0,
    )


def closest_string(
    frequency: float,
    tuning: Tuning = STANDARD_TUNING,
    reference_pitch: float = constants.DEFAULT_REFERENCE_PITCH,
) -> Optional[StringMatch]:
    """Find the open string a frequency is closest to.

    Each string is compared at its own octave and one octave above and
    below. Strings are tried from string 1, so the first of two equally
    close strings wins.

    Args:
        frequency: The frequency in Hz.
        tuning: The instrument tuning.
        reference_pitch: The frequency of A4 in Hz.

    Returns:
        The closest string, or None if even that one is further away than
        STRING_MATCH_TOLERANCE of its open frequency.

    Raises:
        PreconditionException: If either frequency is not positive.
    """
    _require_positive("frequency", frequency)
    _require_positive("reference_pitch", reference_pitch)
    best: Optional[StringMatch] = None
    best_open = 0.0
    best_diff = math.inf
    for string in range(1, tuning.num_strings + 1):
        note = tuning.open_note(string)
        open_freq = position_frequency(
            FretboardPosition(string, 0, note), tuning, reference_pitch
        )
        for target in (open_freq, open_freq * 2.0, open_freq / 2.0):
            diff = abs(frequency - target)
            if diff < best_diff:
                best_diff = diff
                best_open = open_freq
                best = StringMatch(
                    string, note, target, cents_between(frequency, target)
                )
    if best is None or best_diff >= best_open * constants.STRING_MATCH_TOLERANCE:
        logging.debug("no string near %.2f Hz", frequency)
        return None
    return best



def position_messages(
    positions: List[FretboardPosition],
    tuning: Tuning = STANDARD_TUNING,
    channel: int = constants.DEFAULT_MIDI_CHANNEL,
    velocity: int = constants.DEFAULT_VELOCITY,
    duration: int = constants.DEFAULT_TICKS_PER_BEAT,
) -> List[FrozenMessage]:
    """Build an arpeggio of note_on / note_off pairs for some positions.

    Message times are deltas in ticks, as in a MIDI track: each note starts
    as the previous one stops and lasts `duration` ticks.

    Args:
        positions: The positions, in playing order.
        tuning: The instrument tuning.
        channel: The MIDI channel (0-15).
        velocity: The note_on velocity.
        duration: The length of each note in ticks.

    Returns:
        Two messages per position.

    Raises:
        PreconditionException: If a position sounds outside the MIDI range.
    """
    msgs: List[FrozenMessage] = []
    for pos in positions:
        pitch = position_pitch(pos, tuning)
        if pitch < 0 or pitch > MAX_MIDI_NOTE:
            raise PreconditionException(
                "position", pos.pos, "is outside the MIDI range"
            )
        msgs.append(
            FrozenMessage(
                type="note_on", channel=channel, note=pitch, velocity=velocity, time=0
            )
        )
        msgs.append(
            FrozenMessage(
                type="note_off", channel=channel, note=pitch, velocity=0, time=duration
            )
        )
    return msgs


def render_midi(
    positions: List[FretboardPosition],
    tuning: Tuning = STANDARD_TUNING,
    bpm: int = constants.DEFAULT_BPM,
    ticks_per_beat: int = constants.DEFAULT_TICKS_PER_BEAT,
    channel: int = constants.DEFAULT_MIDI_CHANNEL,
    velocity: int = constants.DEFAULT_VELOCITY,
) -> mido.MidiFile:
    """Render positions as a single-track MIDI file, one beat per note.

    Args:
        positions: The positions, in playing order.
        tuning: The instrument tuning.
        bpm: The tempo in beats per minute.
        ticks_per_beat: The file resolution.
        channel: The MIDI channel (0-15).
        velocity: The note_on velocity.

    Returns:
        The MIDI file; call `save` on it to write it out.
    """
    midi_file = mido.MidiFile(type=0, ticks_per_beat=ticks_per_beat)
    track = mido.MidiTrack()
    midi_file.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm), time=0))
    track.extend(
        position_messages(positions, tuning, channel, velocity, duration=ticks_per_beat)
    )
    return midi_file
