# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest"]
# ///
"""Tests for the provider chain, the pitch decision tree and full matches.

``ScriptedRng`` replays a fixed list of rolls and fails loudly if a provider
draws more than the test expects, so draw order is checked along with the
outcome.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from bases import Baserunner, Baserunners
from entities import Player, Team, World, generate_world
from errors import NoEventProducedError
from events import (
    BaseSteal,
    BatterUp,
    Blooddrain,
    CaughtStealing,
    CharmWalk,
    Feedback,
    Foul,
    GameOver,
    GroundOut,
    Inhabiting,
    InningSwitch,
    MildPitch,
    MildWalk,
    Performing,
    Strikeout,
    Walk,
    apply_event,
)
from game import Game, Weather
from mods import Mod, ModLifetime
from rng import Rng
from sim import (
    BasePlugin,
    BatterStatePlugin,
    ModPlugin,
    PitchKind,
    PitchOutcome,
    PollScope,
    PregamePlugin,
    Sim,
    StealingPlugin,
    WeatherPlugin,
    do_pitch,
    game_state_to_dict,
    pitch_event,
    poll_for_mod,
    replay,
    roll_random_boosts,
    run_match,
)


class ScriptedRng(Rng):
    """Rng that hands out pre-chosen rolls."""

    def __init__(self, rolls):
        super().__init__(seed=0)
        self.rolls = list(rolls)

    def next(self):
        if not self.rolls:
            raise AssertionError(f"unexpected draw #{self.draws + 1}")
        self.draws += 1
        return self.rolls.pop(0)


def make_test_world():
    world = World()
    for team_id, prefix in (("home", "h"), ("away", "a")):
        team = world.add_team(Team(id=team_id, name=team_id.title()))
        for i in (1, 2, 3):
            pid = f"{prefix}{i}"
            world.add_player(Player(id=pid, name=f"Player {pid}"), team_id)
            team.lineup.append(pid)
        world.add_player(Player(id=f"{prefix}p1", name=f"Pitcher {prefix}"), team_id)
        team.rotation.append(f"{prefix}p1")
        world.add_player(Player(id=f"{prefix}s1", name=f"Shadow {prefix}"), team_id)
        team.shadows.append(f"{prefix}s1")
    return world


def make_test_game(**overrides):
    """Away team batting, a1 at the plate, all attributes league average."""
    world = make_test_world()
    game = Game.new(world, "home", "away", **overrides)
    apply_event(BatterUp(batter="a1"), game, world)
    return game, world


def make_runners(layout):
    return Baserunners(4, [Baserunner(pid, base) for base, pid in layout.items()])


# Average contact: strike, swing, contact, no foul.
CONTACT = [0.0, 0.0, 0.0, 0.9]


# ===========================================================================
# Pitch decision tree
# ===========================================================================

class TestDoPitch:
    def test_flinch_takes_first_strike(self):
        game, world = make_test_game()
        world.player("a1").mods.add(Mod.FLINCH, ModLifetime.PERMANENT)
        rng = ScriptedRng([0.0])
        assert do_pitch(world, game, rng).kind == PitchKind.STRIKE_LOOKING
        assert rng.draws == 1

    def test_ball(self):
        game, world = make_test_game()
        rng = ScriptedRng([0.99, 0.99])
        assert do_pitch(world, game, rng).kind == PitchKind.BALL

    def test_swinging_strike(self):
        game, world = make_test_game()
        rng = ScriptedRng([0.0, 0.0, 0.999])
        assert do_pitch(world, game, rng).kind == PitchKind.STRIKE_SWINGING

    def test_foul(self):
        game, world = make_test_game()
        rng = ScriptedRng([0.0, 0.0, 0.0, 0.0])
        assert do_pitch(world, game, rng).kind == PitchKind.FOUL

    def test_two_out_grounder_skips_runner_rolls(self):
        game, world = make_test_game()
        game.outs = 2
        rng = ScriptedRng(CONTACT + [0.0, 0.9, 0.0, 0.9, 0.5])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.GROUND_OUT
        assert outcome.fielder == "h2"
        assert rng.draws == 9

    def test_double_play(self):
        game, world = make_test_game()
        game.runners = make_runners({0: "a2"})
        rng = ScriptedRng(CONTACT + [0.0, 0.9, 0.0, 0.9, 0.0, 0.0, 0.0])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.DOUBLE_PLAY
        assert outcome.runner_out == 0
        assert rng.draws == 11

    def test_fielders_choice_takes_lead_forced_runner(self):
        game, world = make_test_game()
        game.runners = make_runners({0: "a2", 1: "a3"})
        rng = ScriptedRng(CONTACT + [0.0, 0.9, 0.0, 0.9, 0.0, 0.9, 0.9])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.FIELDERS_CHOICE
        assert outcome.runner_out == 1

    def test_home_run(self):
        game, world = make_test_game()
        rng = ScriptedRng(CONTACT + [0.0, 0.0, 0.0])
        assert do_pitch(world, game, rng).kind == PitchKind.HOME_RUN
        assert rng.draws == 7

    def test_single_without_fifth_base(self):
        game, world = make_test_game()
        rng = ScriptedRng(CONTACT + [0.0, 0.0, 0.9, 0.0, 0.9, 0.9])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.SINGLE
        assert outcome.fielder == "h1"
        assert rng.draws == 10

    def test_two_out_flyout_freezes_runners(self):
        game, world = make_test_game()
        game.outs = 2
        game.runners = make_runners({0: "a2"})
        rng = ScriptedRng(CONTACT + [0.0, 0.9, 0.0, 0.0])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.FLYOUT
        assert outcome.fielder == "h1"
        assert outcome.advancing_runners == []
        assert rng.draws == 8

    def test_flyout_rolls_each_runner_lead_first(self):
        game, world = make_test_game()
        game.runners = make_runners({0: "a2", 2: "a3"})
        # a3 on third tags up, a2 on first stays
        rng = ScriptedRng(CONTACT + [0.0, 0.9, 0.0, 0.0, 0.0, 0.9])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.FLYOUT
        assert outcome.advancing_runners == ["a3"]
        assert rng.draws == 10

    def test_quadruple_with_fifth_base(self):
        game, world = make_test_game()
        world.team("away").mods.add(Mod.FIFTH_BASE, ModLifetime.PERMANENT)
        rng = ScriptedRng(CONTACT + [0.0, 0.0, 0.9, 0.0, 0.0, 0.0, 0.0])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.QUADRUPLE
        assert rng.draws == 11

    def test_triple_beats_double_with_fifth_base(self):
        game, world = make_test_game()
        world.team("away").mods.add(Mod.FIFTH_BASE, ModLifetime.PERMANENT)
        rng = ScriptedRng(CONTACT + [0.0, 0.0, 0.9, 0.0, 0.0, 0.0, 0.9])
        outcome = do_pitch(world, game, rng)
        assert outcome.kind == PitchKind.TRIPLE
        assert rng.draws == 11


# ===========================================================================
# Pitch outcome -> event
# ===========================================================================

class TestBasePlugin:
    def test_looking_strike_three_is_strikeout(self):
        game, world = make_test_game()
        game.strikes = 2
        event = BasePlugin().tick(game, world, ScriptedRng([0.0, 0.9]))
        assert isinstance(event, Strikeout)

    def test_o_no_keeps_batter_alive(self):
        game, world = make_test_game()
        world.team("away").mods.add(Mod.O_NO, ModLifetime.PERMANENT)
        game.strikes = 2
        event = BasePlugin().tick(game, world, ScriptedRng([0.0, 0.9]))
        assert isinstance(event, Foul)

    def test_ball_four_is_walk(self):
        game, world = make_test_game()
        game.balls = 3
        event = BasePlugin().tick(game, world, ScriptedRng([0.99, 0.99]))
        assert isinstance(event, Walk)

    def test_ground_out_records_advancing_runner(self):
        game, world = make_test_game()
        game.runners = make_runners({2: "a2"})
        rolls = CONTACT + [0.0, 0.9, 0.0, 0.9, 0.0, 0.9, 0.0]
        event = BasePlugin().tick(game, world, ScriptedRng(rolls))
        assert isinstance(event, GroundOut)
        assert event.fielder == "h1"
        assert event.runners_after.as_dict() == {3: "a2"}
        # the live runners are untouched until the event is applied
        assert game.runners.as_dict() == {2: "a2"}

    @pytest.mark.parametrize("kind, tag", [
        (PitchKind.BALL, "Ball"),
        (PitchKind.STRIKE_SWINGING, "Strike"),
        (PitchKind.STRIKE_LOOKING, "Strike"),
        (PitchKind.FOUL, "Foul"),
        (PitchKind.GROUND_OUT, "GroundOut"),
        (PitchKind.FLYOUT, "Flyout"),
        (PitchKind.DOUBLE_PLAY, "DoublePlay"),
        (PitchKind.FIELDERS_CHOICE, "FieldersChoice"),
        (PitchKind.HOME_RUN, "HomeRun"),
        (PitchKind.SINGLE, "BaseHit"),
        (PitchKind.DOUBLE, "BaseHit"),
        (PitchKind.TRIPLE, "BaseHit"),
        (PitchKind.QUADRUPLE, "BaseHit"),
    ])
    def test_every_pitch_kind_has_an_event(self, kind, tag):
        game, world = make_test_game()
        game.runners = make_runners({0: "a2"})
        outcome = PitchOutcome(kind, fielder="h1", runner_out=0)
        event = pitch_event(outcome, game, world, ScriptedRng([]))
        assert event.tag == tag

    def test_unknown_pitch_kind_is_rejected(self):
        game, world = make_test_game()
        with pytest.raises(AssertionError):
            pitch_event(PitchOutcome("knuckleball"), game, world, ScriptedRng([]))


# ===========================================================================
# Other providers
# ===========================================================================

def test_poll_for_mod_home_side_first():
    game, world = make_test_game()
    world.player("a1").mods.add(Mod.SUPERYUMMY, ModLifetime.PERMANENT)
    world.player("h2").mods.add(Mod.SUPERYUMMY, ModLifetime.PERMANENT)
    assert poll_for_mod(game, world, Mod.SUPERYUMMY, PollScope.CURRENT) == ["h2", "a1"]
    assert poll_for_mod(game, world, Mod.SUPERYUMMY, PollScope.PLAYING) == ["h2", "a1"]


def test_pregame_performing_once():
    world = make_test_world()
    world.player("h2").mods.add(Mod.SUPERYUMMY, ModLifetime.PERMANENT)
    game = Game.new(world, "home", "away", weather=Weather.PEANUTS)
    rng = ScriptedRng([])
    event = PregamePlugin().tick(game, world, rng)
    assert isinstance(event, Performing)
    assert event.overperforming == ["h2"]
    apply_event(event, game, world)
    assert PregamePlugin().tick(game, world, rng) is None


def test_first_batter_draws_nothing():
    world = make_test_world()
    game = Game.new(world, "home", "away")
    event = Sim(world, ScriptedRng([])).next(game)
    assert event == BatterUp(batter="a1")


def test_shelled_batter_is_skipped():
    world = make_test_world()
    world.player("a1").mods.add(Mod.SHELLED, ModLifetime.PERMANENT)
    game = Game.new(world, "home", "away")
    event = BatterStatePlugin().tick(game, world, ScriptedRng([]))
    assert event.tag == "Shelled"


def test_three_outs_switch_before_anything_else():
    game, world = make_test_game()
    game.outs = 3
    event = Sim(world, ScriptedRng([])).next(game)
    assert event == InningSwitch(inning=1, top=False)


def test_game_over_after_nine_with_lead():
    game, world = make_test_game()
    game.inning = 9
    game.scoreboard.top = False
    game.outs = 3
    game.scoreboard.away_team.score = 2.0
    assert isinstance(Sim(world, ScriptedRng([])).next(game), GameOver)


def test_tied_ninth_goes_to_extras():
    game, world = make_test_game()
    game.inning = 9
    game.scoreboard.top = False
    game.outs = 3
    assert Sim(world, ScriptedRng([])).next(game) == InningSwitch(inning=10, top=True)


def test_empty_chain_raises():
    game, world = make_test_game()
    with pytest.raises(NoEventProducedError):
        Sim(world, Rng(1), plugins=()).next(game)


def make_inhabited_game(weather):
    """A hall player bats in a1's slot."""
    world = make_test_world()
    world.add_hall_player(Player(id="hall1", name="Old Timer"))
    game = Game.new(world, "home", "away", weather=weather)
    apply_event(Inhabiting(batter="a1", inhabit="hall1"), game, world)
    return game, world


def test_feedback_targets_inhabited_lineup_slot():
    game, world = make_inhabited_game(Weather.FEEDBACK)
    rng = ScriptedRng([0.0, 0.0, 0.0])
    event = WeatherPlugin().tick(game, world, rng)
    assert event == Feedback(target1="a1", target2="h1")
    assert rng.draws == 3
    apply_event(event, game, world)
    assert game.batter() == "h1"
    assert world.team("away").lineup == ["h1", "a2", "a3"]
    assert world.player("a1").team == "home"


def test_blooddrain_targets_inhabited_lineup_slot():
    game, world = make_inhabited_game(Weather.BLOODDRAIN)
    rng = ScriptedRng([0.0, 0.0, 0.0, 0.0])
    event = WeatherPlugin().tick(game, world, rng)
    assert event == Blooddrain(drainer="hp1", target="a1", stat=0,
                               siphon=False, siphon_effect=-1)
    assert rng.draws == 4


def test_steal_attempts():
    game, world = make_test_game()
    game.runners = make_runners({0: "a2"})
    event = StealingPlugin().tick(game, world, ScriptedRng([0.0, 0.0, 0.0]))
    assert event == BaseSteal(runner="a2", base_from=0, base_to=1)
    event = StealingPlugin().tick(game, world, ScriptedRng([0.0, 0.0, 0.99]))
    assert event == CaughtStealing(runner="a2", base_from=0)


def test_no_steal_of_home():
    game, world = make_test_game()
    game.runners = make_runners({2: "a2"})
    rng = ScriptedRng([0.0])
    assert StealingPlugin().tick(game, world, rng) is None
    assert rng.draws == 1


def test_charm_walk_on_first_pitch():
    game, world = make_test_game()
    world.player("a1").mods.add(Mod.CHARM, ModLifetime.PERMANENT)
    event = ModPlugin().tick(game, world, ScriptedRng([0.9, 0.0]))
    assert isinstance(event, CharmWalk)


def test_mild_pitch_and_walk():
    game, world = make_test_game()
    world.player("hp1").mods.add(Mod.MILD, ModLifetime.PERMANENT)
    assert isinstance(ModPlugin().tick(game, world, ScriptedRng([0.0])), MildPitch)
    game.balls = 3
    assert isinstance(ModPlugin().tick(game, world, ScriptedRng([0.0])), MildWalk)


def test_random_boost_width():
    assert len(roll_random_boosts(Rng(1), 0.0, 0.2, False)) == 26
    boosts = roll_random_boosts(Rng(1), 0.04, 0.04, True)
    assert len(boosts) == 25
    assert all(0.04 <= b < 0.08 for b in boosts)


# ===========================================================================
# Full matches
# ===========================================================================

def play(seed, weather=Weather.SUN):
    world = generate_world(Rng(seed))
    game = Game.new(world, "team-0", "team-1", weather=weather)
    events = run_match(game, world, Rng(seed))
    return events, game, world


def test_match_runs_to_completion():
    events, game, world = play(7)
    assert game.is_over()
    assert isinstance(events[-1], GameOver)
    assert game.inning >= 9
    home, away = game.scoreboard.home_team.score, game.scoreboard.away_team.score
    assert home != away


def test_same_seed_same_match():
    events_a, game_a, world_a = play(21)
    events_b, game_b, world_b = play(21)
    assert [e.tag for e in events_a] == [e.tag for e in events_b]
    assert game_state_to_dict(game_a, world_a) == game_state_to_dict(game_b, world_b)


def test_every_third_out_is_followed_by_boundary():
    events, _, _ = play(3)
    tags = [e.tag for e in events]
    world = generate_world(Rng(3))
    game = Game.new(world, "team-0", "team-1")
    for i, event in enumerate(events):
        apply_event(event, game, world)
        if game.outs >= 3 and i + 1 < len(events):
            assert tags[i + 1] in ("InningSwitch", "GameOver")


def test_replay_reproduces_final_state():
    events, game, world = play(5)
    fresh_world = generate_world(Rng(5))
    fresh_game = Game.new(fresh_world, "team-0", "team-1")
    replay(events, fresh_game, fresh_world)
    assert game_state_to_dict(fresh_game, fresh_world) == game_state_to_dict(game, world)


@pytest.mark.parametrize("weather", [Weather.ECLIPSE, Weather.PEANUTS, Weather.NIGHT,
                                     Weather.FEEDBACK, Weather.BLOODDRAIN])
def test_weather_matches_finish(weather):
    events, game, _ = play(11, weather)
    assert game.is_over()


def test_max_ticks_stops_early():
    world = generate_world(Rng(2))
    game = Game.new(world, "team-0", "team-1")
    events = run_match(game, world, Rng(2), max_ticks=10)
    assert len(events) == 10
    assert not game.is_over()
