from __future__ import annotations

import pytest

from scout_camp.config import Config, LoopConfig
from scout_camp.simulation.game import Game
from scout_camp.simulation.input import InputState
from scout_camp.simulation.loop import FixedStepLoop, drive


@pytest.fixture()
def loop() -> FixedStepLoop:
    loop = FixedStepLoop(LoopConfig(time_step_ms=10, max_frame_ms=1000))
    loop.start()
    return loop


def test_stopped_loop_does_not_tick() -> None:
    loop = FixedStepLoop(LoopConfig(time_step_ms=10))
    ticks: list[float] = []
    assert loop.advance(100, ticks.append) == 0
    assert ticks == []


def test_first_frame_has_no_delta(loop: FixedStepLoop) -> None:
    ticks: list[float] = []
    assert loop.advance(5000, ticks.append) == 0


def test_drains_whole_steps_and_carries_remainder(loop: FixedStepLoop) -> None:
    ticks: list[float] = []
    loop.advance(1000, ticks.append)

    assert loop.advance(1035, ticks.append) == 3
    assert loop.accumulator == pytest.approx(5)
    assert loop.advance(1040, ticks.append) == 1
    assert ticks == [10, 10, 10, 10]
    assert loop.total_ticks == 4


def test_long_frame_runs_a_single_step(loop: FixedStepLoop) -> None:
    ticks: list[float] = []
    loop.advance(1000, ticks.append)
    assert loop.advance(6000, ticks.append) == 1


def test_frame_at_ceiling_is_replayed(loop: FixedStepLoop) -> None:
    ticks: list[float] = []
    loop.advance(0, ticks.append)
    assert loop.advance(1000, ticks.append) == 100


def test_pause_takes_effect_next_frame(loop: FixedStepLoop) -> None:
    ticks: list[float] = []

    def tick(dt_ms: float) -> None:
        ticks.append(dt_ms)
        loop.pause()

    loop.advance(0, tick)
    assert loop.advance(30, tick) == 3
    assert not loop.is_running
    assert loop.advance(60, tick) == 0
    assert len(ticks) == 3


def test_restart_resets_the_clock(loop: FixedStepLoop) -> None:
    ticks: list[float] = []
    loop.advance(0, ticks.append)
    loop.advance(25, ticks.append)
    loop.pause()
    loop.start()

    assert loop.accumulator == 0
    assert loop.advance(10_000, ticks.append) == 0
    assert loop.advance(10_020, ticks.append) == 2


def test_drives_the_game(loop: FixedStepLoop) -> None:
    config = Config.default()
    config.world.seed = 11
    game = Game(config)

    loop.advance(0, lambda dt: game.step(InputState(), dt))
    loop.advance(100, lambda dt: game.step(InputState(), dt))

    assert game.stats.tick == 10
    assert game.stats.elapsed_ms == pytest.approx(100)


def test_click_waits_for_a_frame_that_ticks(game: Game) -> None:
    loop = FixedStepLoop(LoopConfig())
    loop.start()
    click = InputState(target=(200.0, 150.0))

    leftover = drive(loop, game, click, 0)
    assert leftover.target == (200.0, 150.0)

    # 16 ms is just under one 1000/60 ms step
    leftover = drive(loop, game, leftover, 16)
    assert leftover.target == (200.0, 150.0)
    assert game.stats.tick == 0

    leftover = drive(loop, game, leftover, 33)
    assert leftover.target is None
    assert game.stats.tick == 1
    assert game.character.target == (200.0, 150.0)
    assert game.character.x < 400


def test_click_reaches_only_the_first_tick(loop: FixedStepLoop, game: Game) -> None:
    drive(loop, game, InputState(), 0)
    leftover = drive(loop, game, InputState(target=(600.0, 300.0)), 30)

    assert game.stats.tick == 3
    assert leftover.target is None
    assert game.character.target == (600.0, 300.0)
