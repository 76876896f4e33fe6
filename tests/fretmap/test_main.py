"""Tests for configuration and the command line."""

import mido
import pytest

from fretmap.base import PreconditionException
from fretmap.config import init_config, lookup_tuning
from fretmap.main import View, build_sections, jump_start, main_with_args, make_parser
from fretmap.pitch import Note
from fretmap.scale import Key, Mode
from fretmap.tuning import STANDARD_TUNING


class TestConfig:
    def test_defaults(self) -> None:
        config = init_config()
        assert config.key == Key(Note.C)
        assert config.tuning == STANDARD_TUNING
        assert config.max_fret == 24
        assert config.block_max_fret == 12
        assert config.block_limit == 10
        assert config.bpm == 120

    def test_short_board(self) -> None:
        assert init_config(max_fret=5).block_max_fret == 5

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_fret": -1}, {"block_limit": -1}, {"reference_pitch": 0.0}],
    )
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(PreconditionException):
            init_config(**kwargs)

    def test_lookup_tuning(self) -> None:
        assert lookup_tuning("standard") == STANDARD_TUNING
        assert lookup_tuning("DROP D").name == "Drop D"
        with pytest.raises(PreconditionException):
            lookup_tuning("Nashville")


@pytest.mark.parametrize("view", list(View))
def test_build_sections(view: View) -> None:
    config = init_config(max_fret=12)
    sections = build_sections(config, view)
    assert sections
    for section in sections:
        assert section.title
        assert section.positions
        text = section.render(config)
        assert text.startswith(section.title)


def test_mode_section() -> None:
    config = init_config(max_fret=12)
    sections = build_sections(config, View.Mode, mode=Mode.Dorian, start_fret=5)
    assert len(sections) == 1
    assert sections[0].title == "D Dorian (II of C)"
    assert sections[0].description == "Dorian position at fret 5; characteristic 6 is B"


def test_jump_start() -> None:
    config = init_config(max_fret=12)
    assert jump_start(config, None, None) is None
    start = jump_start(config, 5, None)
    assert start is not None
    assert (start.string, start.fret, start.note) == (5, 0, Note.A)
    start = jump_start(config, None, 5)
    assert start is not None
    assert (start.string, start.fret, start.note, start.is_root) == (3, 5, Note.C, True)
    with pytest.raises(PreconditionException):
        jump_start(config, 9, 0)


def test_main_with_args() -> None:
    args = make_parser().parse_args(
        ["--key", "G", "--view", "caged", "--max-fret", "12"]
    )
    text = main_with_args(args)
    assert "G major" in text
    assert "E form" in text


def test_main_jumping() -> None:
    args = make_parser().parse_args(
        [
            "--view",
            "jumping",
            "--start-string",
            "3",
            "--start-fret",
            "0",
            "--max-fret",
            "12",
        ]
    )
    text = main_with_args(args)
    assert text.startswith("Jumping Pattern - C")
    assert "G | o  -  o  -  o  R  -  o  -  o  o  -  o " in text.split("\n")


def test_main_midi_out(tmp_path) -> None:
    path = tmp_path / "family.mid"
    args = make_parser().parse_args(
        ["--view", "family", "--max-fret", "12", "--midi-out", str(path)]
    )
    main_with_args(args)
    loaded = mido.MidiFile(str(path))
    notes = [m for m in loaded.tracks[0] if m.type == "note_on"]
    assert len(notes) == 18


@pytest.mark.parametrize("view", ["spiral", "hierarchy"])
def test_start_ignored_outside_jumping(view: str) -> None:
    args = make_parser().parse_args(
        ["--view", view, "--start-string", "9", "--max-fret", "12"]
    )
    assert main_with_args(args)


def test_main_frequency() -> None:
    args = make_parser().parse_args(["--frequency", "112"])
    assert main_with_args(args).split("\n") == [
        "112.00 Hz: A2 +31.2 cents",
        "string 5 (A) +31.2 cents",
    ]


def test_main_frequency_reference_pitch() -> None:
    args = make_parser().parse_args(
        ["--frequency", "440", "--reference-pitch", "432"]
    )
    lines = main_with_args(args).split("\n")
    assert lines[0] == "440.00 Hz: A4 +31.8 cents"
    assert lines[1].startswith("string 2 (B)")


def test_main_frequency_out_of_range() -> None:
    args = make_parser().parse_args(["--frequency", "5000"])
    assert main_with_args(args).endswith("no string in range")
