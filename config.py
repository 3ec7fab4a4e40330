"""Centralized configuration for environment variables."""

import os
from dataclasses import dataclass

from game import Weather

SEED_ENV = "SPLORT_SEED"
RULESET_ENV = "SPLORT_RULESET"
WEATHER_ENV = "SPLORT_WEATHER"
DAY_ENV = "SPLORT_DAY"
MAX_TICKS_ENV = "SPLORT_MAX_TICKS"
LOG_LEVEL_ENV = "SPLORT_LOG_LEVEL"

DEFAULT_RULESET = 20
DEFAULT_MAX_TICKS = 20000
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class SimConfig:
    seed: int | None = None
    ruleset: int = DEFAULT_RULESET
    weather: Weather = Weather.SUN
    day: int = 0
    max_ticks: int = DEFAULT_MAX_TICKS
    log_level: str = DEFAULT_LOG_LEVEL


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def parse_weather(value: str) -> Weather:
    """Accept either the enum name or its value, case-insensitively."""
    key = value.strip().upper()
    try:
        return Weather[key]
    except KeyError:
        valid = ", ".join(w.name for w in Weather)
        raise ValueError(f"unknown weather {value!r} (expected one of: {valid})") from None


def load_config() -> SimConfig:
    """Read simulator settings from the environment."""
    return SimConfig(
        seed=_int_env(SEED_ENV, None),
        ruleset=_int_env(RULESET_ENV, DEFAULT_RULESET),
        weather=parse_weather(os.environ.get(WEATHER_ENV, "") or Weather.SUN.name),
        day=_int_env(DAY_ENV, 0),
        max_ticks=_int_env(MAX_TICKS_ENV, DEFAULT_MAX_TICKS),
        log_level=(os.environ.get(LOG_LEVEL_ENV, "") or DEFAULT_LOG_LEVEL).upper(),
    )
