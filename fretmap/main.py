"""Command-line entry point for fretmap.

Prints the positions of a pattern, mode, block partition or CAGED form as
ASCII fretboard diagrams, and can save the positions as a MIDI arpeggio.
Given a frequency instead, it names the nearest note and open string.
"""

import logging
from argparse import ArgumentParser, Namespace
from dataclasses import dataclass
from enum import Enum, unique
from typing import List, Optional

from fretmap import constants
from fretmap.base import MatchException, PreconditionException
from fretmap.blocks import all_blocks
from fretmap.caged import all_caged_forms
from fretmap.chords import ChordQuality
from fretmap.config import Config, init_config, lookup_tuning
from fretmap.fretboard import FretboardPosition, fretboard_for
from fretmap.midi import closest_string, frequency_to_note, render_midi
from fretmap.modes import generate_mode, generate_mode_position
from fretmap.patterns import (
    PatternType,
    family_of_chords_pattern,
    generate_pattern,
)
from fretmap.render import render_positions
from fretmap.scale import Key, Mode, interval_name, mode_roots
from fretmap.tuning import TUNING_LOOKUP


@unique
class View(Enum):
    """What the command line shows."""

    Spiral = "spiral"
    Jumping = "jumping"
    Family = "family"
    Hierarchy = "hierarchy"
    Mode = "mode"
    Blocks = "blocks"
    Caged = "caged"


@dataclass(frozen=True)
class Section:
    """One titled diagram of the output."""

    title: str
    description: str
    positions: List[FretboardPosition]
    max_fret: int

    def render(self, config: Config) -> str:
        """Format this section as text.

        Args:
            config: The session configuration.

        Returns:
            The title, description and diagram.
        """
        diagram = render_positions(self.positions, config.tuning, self.max_fret)
        return f"{self.title}\n{self.description}\n{diagram}"


def jump_start(
    config: Config, string: Optional[int], fret: Optional[int]
) -> Optional[FretboardPosition]:
    """Build the jumping start position from command-line values.

    Args:
        config: The session configuration.
        string: The start string, if given.
        fret: The start fret, if given.

    Returns:
        The position, or None to use the default start.

    Raises:
        PreconditionException: If the position lies off the board.
    """
    if string is None and fret is None:
        return None
    string = string if string is not None else constants.DEFAULT_JUMP_START_STRING
    fret = fret if fret is not None else 0
    board = fretboard_for(config.tuning, config.max_fret)
    pos = board.position(string, fret, root=config.key.root)
    if pos is None:
        raise PreconditionException("start", (string, fret), "must lie on the board")
    return pos


def build_sections(
    config: Config,
    view: View,
    mode: Mode = Mode.Ionian,
    quality: ChordQuality = ChordQuality.Major,
    start_string: Optional[int] = None,
    start_fret: Optional[int] = None,
) -> List[Section]:
    """Generate the sections of one view.

    Args:
        config: The session configuration.
        view: The view to generate.
        mode: The mode shown by the mode view, taken within the key.
        quality: The chord quality of the family view.
        start_string: The jumping start string.
        start_fret: The jumping start fret, or the mode position fret.

    Returns:
        The sections to print, in order.

    Raises:
        MatchException: If the view is unknown.
    """
    key, tuning, max_fret = config.key, config.tuning, config.max_fret
    if view == View.Spiral or view == View.Jumping or view == View.Hierarchy:
        pattern_type = {
            View.Spiral: PatternType.SpiralMapping,
            View.Jumping: PatternType.Jumping,
            View.Hierarchy: PatternType.FamilialHierarchy,
        }[view]
        start: Optional[FretboardPosition] = None
        if view == View.Jumping:
            start = jump_start(config, start_string, start_fret)
        pattern = generate_pattern(pattern_type, key, start, max_fret, tuning)
        return [Section(pattern.name, pattern.description, pattern.positions, max_fret)]
    elif view == View.Family:
        pattern = family_of_chords_pattern(key, quality, max_fret, tuning)
        return [Section(pattern.name, pattern.description, pattern.positions, max_fret)]
    elif view == View.Mode:
        root = mode_roots(key)[mode]
        if start_fret is None:
            shape = generate_mode(mode, root, max_fret, tuning)
        else:
            shape = generate_mode_position(mode, root, start_fret, max_fret, tuning)
        title = f"{root.display} {mode.name} ({mode.roman_numeral} of {key.name})"
        note = shape.characteristic_note
        degree = interval_name(note, mode, root)
        description = f"{shape.description}; characteristic {degree} is {note.display}"
        return [Section(title, description, shape.positions, max_fret)]
    elif view == View.Blocks:
        blocks = all_blocks(
            key, config.block_max_fret, tuning, limit=config.block_limit
        )
        return [
            Section(b.name, b.description, b.positions, config.block_max_fret)
            for b in blocks
        ]
    elif view == View.Caged:
        shapes = all_caged_forms(key.root, max_fret, tuning)
        return [
            Section(f"{s.form.value} form", s.description, s.positions, max_fret)
            for s in shapes
        ]
    else:
        raise MatchException(view)


def describe_frequency(config: Config, frequency: float) -> str:
    """Describe a measured frequency the way a tuner would.

    Args:
        config: The session configuration.
        frequency: The frequency in Hz.

    Returns:
        The nearest note, and the closest open string if there is one.
    """
    reading = frequency_to_note(frequency, config.reference_pitch)
    lines = [f"{frequency:.2f} Hz: {reading.name} {reading.cents:+.1f} cents"]
    match = closest_string(frequency, config.tuning, config.reference_pitch)
    if match is None:
        lines.append("no string in range")
    else:
        lines.append(
            f"string {match.string} ({match.note.display}) {match.cents:+.1f} cents"
        )
    return "\n".join(lines)


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser configured with all the command-line options.
    """
    parser = ArgumentParser(prog="fretmap")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--key", default="C")
    parser.add_argument(
        "--tuning", default="Standard", help=", ".join(TUNING_LOOKUP)
    )
    parser.add_argument("--max-fret", type=int, default=constants.DEFAULT_FRET_COUNT)
    parser.add_argument(
        "--view", choices=[v.value for v in View], default=View.Spiral.value
    )
    parser.add_argument(
        "--mode", choices=[m.name for m in Mode], default=Mode.Ionian.name
    )
    parser.add_argument(
        "--quality",
        choices=[q.value for q in ChordQuality],
        default=ChordQuality.Major.value,
    )
    parser.add_argument("--start-string", type=int)
    parser.add_argument("--start-fret", type=int)
    parser.add_argument("--midi-out")
    parser.add_argument(
        "--reference-pitch", type=float, default=constants.DEFAULT_REFERENCE_PITCH
    )
    parser.add_argument("--frequency", type=float, help="describe a frequency in Hz")
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def main_with_args(args: Namespace) -> str:
    """Run the command line with parsed arguments.

    Args:
        args: The parsed arguments.

    Returns:
        The text to print.
    """
    config = init_config(
        key=Key.parse(args.key),
        tuning=lookup_tuning(args.tuning),
        max_fret=args.max_fret,
        reference_pitch=args.reference_pitch,
    )
    if args.frequency is not None:
        logging.info("describing %.2f Hz", args.frequency)
        return describe_frequency(config, args.frequency)
    view = View(args.view)
    logging.info("generating %s view in %s", view.value, config.key.name)
    sections = build_sections(
        config,
        view,
        mode=Mode[args.mode],
        quality=ChordQuality(args.quality),
        start_string=args.start_string,
        start_fret=args.start_fret,
    )
    if args.midi_out is not None:
        positions = [p for s in sections for p in s.positions]
        midi_file = render_midi(
            positions,
            config.tuning,
            bpm=config.bpm,
            channel=config.midi_channel,
            velocity=config.velocity,
        )
        midi_file.save(args.midi_out)
        logging.info("saved %d notes to %s", len(positions), args.midi_out)
    return "\n\n".join(s.render(config) for s in sections)


def main() -> None:
    """Main entry point for the fretmap command line.

    Parses command-line arguments, configures logging, and prints the
    requested view.
    """
    parser = make_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)
    print(main_with_args(args))
    logging.info("done")


if __name__ == "__main__":
    main()
