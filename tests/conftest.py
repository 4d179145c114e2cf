# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import random

import pytest
from typer.testing import CliRunner

from digital_rain import config as config_module
from digital_rain.config import IntroLine, RainConfig

_ENV_VARS = (
    "DIGITAL_RAIN_FPS",
    "DIGITAL_RAIN_SEED",
    "DIGITAL_RAIN_CHARS",
    "DIGITAL_RAIN_STAGGER",
    "MATRIX_ANIM_SEED",
    "MATRIX_INTRO_NAME",
)


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's shell overrides and account name out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_user_first_name", lambda: "")
    yield


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def config() -> RainConfig:
    # Whole-number timings keep the float comparisons exact
    return RainConfig(
        intro_initial_delay=2.0,
        intro_typing_speed=0.25,
        intro_typing_jitter=0.0,
        intro_cursor_blink_rate=0.5,
        intro_lines=(
            IntroLine("hello", 1.0),
            IntroLine("now", 0.5, appears_instantly=True),
        ),
        max_column_stagger_delay=0.0,
        seed=7,
    )


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()
