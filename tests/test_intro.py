from __future__ import annotations

import random
import time

import pytest

from digital_rain.config import IntroLine, RainConfig
from digital_rain.intro import CURSOR_GLYPH, Done, InitialDelay, IntroSequence, Pause, Typing


def _run_to_completion(intro: IntroSequence, clock, step: float = 1.0 / 30, max_frames: int = 10_000) -> int:
    frames = 0
    while not intro.is_complete and frames < max_frames:
        clock.advance(step)
        intro.update()
        frames += 1
    return frames


def test_starts_not_complete(config, clock):
    intro = IntroSequence(config, clock=clock)
    assert not intro.is_complete
    assert intro.phase == InitialDelay()
    assert intro.revealed_text == ""


def test_does_not_complete_immediately(config, clock):
    intro = IntroSequence(config, clock=clock)
    intro.update()
    clock.advance(1.0 / 30)
    intro.update()
    assert not intro.is_complete


def test_phase_timeline(config, clock):
    intro = IntroSequence(config, clock=clock)

    clock.advance(1.75)
    intro.update()
    assert intro.phase == InitialDelay()

    clock.advance(0.25)  # initial delay elapsed
    intro.update()
    assert intro.phase == Typing(0)
    assert intro.char_index == 0

    clock.advance(0.25)
    intro.update()
    assert intro.char_index == 1
    assert intro.revealed_text == "h"

    clock.advance(0.75)
    intro.update()
    assert intro.phase == Typing(0)
    assert intro.revealed_text == "hell"

    clock.advance(0.25)  # last character moves straight into the pause
    intro.update()
    assert intro.phase == Pause(0)
    assert intro.revealed_text == "hello"

    clock.advance(1.0)
    intro.update()
    # Second line is instant: no Typing(1) in between
    assert intro.phase == Pause(1)
    assert intro.char_index == 3
    assert intro.revealed_text == "now"

    clock.advance(0.5)
    intro.update()
    assert intro.phase == Done()
    assert intro.is_complete
    assert intro.revealed_text == ""


def test_two_line_scenario_with_decimal_timings(clock):
    cfg = RainConfig(
        intro_initial_delay=2.0,
        intro_typing_speed=0.1,
        intro_typing_jitter=0.0,
        intro_lines=(IntroLine("hi", 1.0), IntroLine("bye", 1.0, appears_instantly=True)),
    )
    intro = IntroSequence(cfg, clock=clock)

    clock.advance(2.0)
    intro.update()
    assert intro.phase == Typing(0)

    clock.advance(0.05)
    intro.update()
    assert intro.char_index == 0

    clock.advance(0.1)
    intro.update()
    assert intro.char_index == 1

    clock.advance(0.1)
    intro.update()
    assert intro.phase == Pause(0)

    clock.advance(1.01)
    intro.update()
    assert intro.phase == Pause(1)
    assert intro.char_index == 3

    clock.advance(1.01)
    intro.update()
    assert intro.is_complete


def test_sparse_frames_catch_up(config, clock):
    intro = IntroSequence(config, clock=clock)
    clock.advance(2.0)
    intro.update()

    # One slow frame owes all five characters
    clock.advance(1.5)
    intro.update()
    assert intro.phase == Pause(0)
    assert intro.char_index == 5


def test_instant_line_never_types(config, clock):
    intro = IntroSequence(config, clock=clock)
    seen = set()
    while not intro.is_complete:
        clock.advance(0.01)
        intro.update()
        seen.add(intro.phase)
    assert Typing(0) in seen
    assert Typing(1) not in seen
    assert Pause(1) in seen


def test_completes_after_enough_frames(config, clock):
    intro = IntroSequence(config, clock=clock)
    frames = _run_to_completion(intro, clock)
    assert intro.is_complete
    # 2s delay + 1.25s typing + 1s pause + 0.5s pause at 30 fps
    assert 140 <= frames <= 150


def test_completes_with_default_script(clock):
    intro = IntroSequence(clock=clock, rng=random.Random(1))
    _run_to_completion(intro, clock)
    assert intro.is_complete


def test_completes_on_wall_clock():
    cfg = RainConfig(
        intro_initial_delay=0.01,
        intro_typing_speed=0.005,
        intro_typing_jitter=0.001,
        intro_lines=(IntroLine("abc", 0.01), IntroLine("xyz", 0.01, appears_instantly=True)),
    )
    intro = IntroSequence(cfg)
    deadline = time.monotonic() + 10
    while not intro.is_complete and time.monotonic() < deadline:
        intro.update()
    assert intro.is_complete


def test_no_updates_after_complete(config, clock):
    intro = IntroSequence(config, clock=clock)
    _run_to_completion(intro, clock)
    phase, chars, cursor = intro.phase, intro.char_index, intro.cursor_visible

    for _ in range(20):
        clock.advance(0.3)
        intro.update()

    assert intro.is_complete
    assert intro.phase == phase
    assert intro.char_index == chars
    assert intro.cursor_visible == cursor
    assert intro.revealed_text == ""


def test_reset_allows_replay(config, clock):
    intro = IntroSequence(config, clock=clock)
    _run_to_completion(intro, clock)
    assert intro.is_complete

    intro.reset()
    assert not intro.is_complete
    assert intro.phase == InitialDelay()
    assert intro.char_index == 0
    assert intro.cursor_visible

    _run_to_completion(intro, clock)
    assert intro.is_complete


def test_cursor_blinks_in_every_phase(config, clock):
    intro = IntroSequence(config, clock=clock)
    assert intro.display_text() == CURSOR_GLYPH

    clock.advance(0.5)
    intro.update()
    assert not intro.cursor_visible
    assert intro.display_text() == " "

    clock.advance(0.5)
    intro.update()
    assert intro.cursor_visible


def test_starting_a_line_shows_the_cursor(config, clock):
    intro = IntroSequence(config, clock=clock)
    clock.advance(1.75)
    intro.update()
    assert not intro.cursor_visible

    clock.advance(0.25)
    intro.update()
    assert intro.phase == Typing(0)
    assert intro.cursor_visible


def test_jitter_stays_within_bounds(clock):
    cfg = RainConfig(
        intro_initial_delay=0.0,
        intro_typing_speed=0.25,
        intro_typing_jitter=0.1,
        intro_lines=(IntroLine("x" * 200, 0.1),),
    )
    intro = IntroSequence(cfg, clock=clock, rng=random.Random(4))
    intro.update()
    assert intro.phase == Typing(0)

    previous_due = intro._next_char_due
    assert 0.15 <= previous_due <= 0.35
    while isinstance(intro.phase, Typing):
        clock.advance(0.05)
        intro.update()
        due = intro._next_char_due
        if due != previous_due and isinstance(intro.phase, Typing):
            steps = intro.char_index
            assert 0.15 * (steps + 1) - 1e-9 <= due <= 0.35 * (steps + 1) + 1e-9
        previous_due = due
    assert intro.char_index == 200


def test_empty_script_completes_after_delay(clock):
    intro = IntroSequence(RainConfig(intro_initial_delay=1.0, intro_lines=()), clock=clock)
    clock.advance(1.0)
    intro.update()
    assert intro.is_complete


def test_empty_typed_line_goes_straight_to_pause(clock):
    cfg = RainConfig(intro_initial_delay=0.0, intro_lines=(IntroLine("", 0.5),))
    intro = IntroSequence(cfg, clock=clock)
    intro.update()
    assert intro.phase == Pause(0)


@pytest.mark.parametrize("phase", [InitialDelay(), Done()])
def test_no_text_outside_lines(config, clock, phase):
    intro = IntroSequence(config, clock=clock)
    if phase == Done():
        _run_to_completion(intro, clock)
        assert intro.display_text() == ""
    assert intro.revealed_text == ""
    assert intro.current_line is None
