# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Run one simulated match from the command line.

Run it from a checkout: the bundled league is read from data/ beside the
modules. Pass --league or --generate anywhere else.

Usage:
    uv run simulate.py --seed 7
    uv run simulate.py --league data/sample_league.json --weather ECLIPSE --seed 7
    uv run simulate.py --generate --seed 7 --output data/match_7.json

Environment variables (SPLORT_SEED, SPLORT_RULESET, SPLORT_WEATHER,
SPLORT_DAY, SPLORT_MAX_TICKS, SPLORT_LOG_LEVEL) provide defaults; flags
override them.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from config import RULESET_ENV, load_config, parse_weather
from entities import generate_world
from errors import LeagueValidationError, SimulationError
from game import Game
from models import load_league
from rng import Rng
from sim import game_state_to_dict, run_match

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate one match and print the result."
    )
    parser.add_argument(
        "--league", type=Path, default=None,
        help="League JSON file (default: the bundled sample league).",
    )
    parser.add_argument(
        "--generate", action="store_true",
        help="Roll a fresh two-team league from the seed instead of loading one.",
    )
    parser.add_argument("--home", default=None, help="Home team id (default: first team).")
    parser.add_argument("--away", default=None, help="Away team id (default: second team).")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed.")
    parser.add_argument("--weather", default=None, help="Weather name, e.g. SUN or ECLIPSE.")
    parser.add_argument("--day", type=int, default=None, help="Season day (0-based).")
    parser.add_argument("--ruleset", type=int, default=None, help="Season ruleset number.")
    parser.add_argument("--max-ticks", type=int, default=None, metavar="N",
                        help="Stop after N events if the match has not ended.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING).")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write the event tags and final state to this JSON file.")
    parser.add_argument("--quiet", action="store_true", help="Suppress the summary line.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
        if args.weather is not None:
            config.weather = parse_weather(args.weather)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    for name in ("seed", "day", "ruleset", "max_ticks", "log_level"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(levelname)s: %(name)s: %(message)s",
    )

    rng = Rng(config.seed)
    try:
        if args.generate:
            world = generate_world(rng, season_ruleset=config.ruleset)
        else:
            world = load_league(args.league)
            if args.ruleset is not None or os.environ.get(RULESET_ENV):
                world.season_ruleset = config.ruleset
    except LeagueValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        for detail in e.details:
            print(f"  {detail}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading league: {e}", file=sys.stderr)
        return 1

    team_ids = list(world.teams)
    home_id = args.home or team_ids[0]
    away_id = args.away or team_ids[1]

    try:
        game = Game.new(world, home_id, away_id, weather=config.weather, day=config.day)
        events = run_match(game, world, rng, max_ticks=config.max_ticks)
    except SimulationError as e:
        logger.error("simulation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    home, away = game.scoreboard.home_team, game.scoreboard.away_team
    if not args.quiet:
        status = "final" if game.is_over() else "unfinished"
        print(f"{world.team(away.id).name} {away.score:g} @ "
              f"{world.team(home.id).name} {home.score:g} "
              f"({status}, {game.inning} innings, {len(events)} events, seed {rng.seed})")

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w") as f:
            json.dump({
                "seed": rng.seed,
                "events": [e.tag for e in events],
                "state": game_state_to_dict(game, world),
            }, f, indent=2)

    return 0


if __name__ == "__main__":
    sys.exit(main())
