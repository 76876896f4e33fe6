"""Constants for the fretmap engine and command line."""

DEFAULT_FRET_COUNT = 24
"""Default highest fret for pattern generation."""

DEFAULT_BLOCK_FRET_COUNT = 12
"""Default highest fret for block partitioning."""

DEFAULT_BLOCK_LIMIT = 10
"""Maximum number of blocks of one type returned by a full-board search."""

TRIAD_STEP_WINDOW = 2
"""Largest fret distance between consecutive tones of a searched triad."""

TRIPLE_FRET_BEFORE = 2
"""Frets below the anchor included in a TRIPLE block search window."""

TRIPLE_FRET_AFTER = 3
"""Frets above the anchor included in a TRIPLE block search window."""

TRIPLE_TARGET_TRIADS = 3
"""Number of distinct triads a TRIPLE block aims for."""

TRIPLE_MIN_NOTES = 6
"""Fewest distinct positions an accepted TRIPLE block may hold."""

CLUSTER_NOTES_PER_STRING = 2
"""Notes taken from each string of a HEAD or BRIDGE block."""

CLUSTER_TARGET_NOTES = 6
"""Exact number of positions in a HEAD or BRIDGE block."""

MIN_CAGED_NOTES = 3
"""Fewest positions a CAGED shape needs to be recognizable."""

MODE_BOX_BEFORE = 2
"""Frets below the start fret included in a single mode position."""

MODE_BOX_AFTER = 4
"""Frets above the start fret included in a single mode position."""

MODE_NOTES_PER_STRING = 3
"""Notes per string in a single mode position (3-notes-per-string)."""

DEFAULT_EXTENDED_STRINGS = 12
"""Virtual strings shown around the real ones by the extended pattern."""

DEFAULT_JUMP_START_STRING = 3
"""String of the default jumping start position."""

DEFAULT_REFERENCE_PITCH = 440.0
"""Frequency of A4 in Hz."""

STRING_MATCH_TOLERANCE = 0.26
"""Largest distance to a string as a fraction of its open frequency."""

DEFAULT_VELOCITY = 100
"""MIDI velocity for rendered notes."""

DEFAULT_MIDI_CHANNEL = 0
"""MIDI channel (0-based, as mido counts) for rendered notes."""

DEFAULT_TICKS_PER_BEAT = 480
"""MIDI file resolution."""

DEFAULT_BPM = 120
"""Tempo of rendered MIDI files."""
