from __future__ import annotations

import math

import pytest

from scout_camp.config import CharacterConfig, WorldConfig
from scout_camp.simulation.action import Action
from scout_camp.simulation.character import AnimationState, Character, Facing
from scout_camp.simulation.environment import Environment

from .conftest import TICK_MS


@pytest.mark.parametrize(
    ("x", "y", "allowed"),
    [
        (0, 0, True),
        (736, 504, True),  # box flush with the bottom-right corner
        (400, 300, True),
        (736.5, 0, False),
        (-0.1, 0, False),
        (0, 504.1, False),
        (0, -1, False),
    ],
)
def test_can_move_to_checks_map_bounds(character: Character, x: float, y: float, allowed: bool) -> None:
    assert character.can_move_to(x, y) is allowed


def test_from_config_spawns_at_map_centre() -> None:
    character = Character.from_config(CharacterConfig(), WorldConfig(seed=1))
    assert (character.x, character.y) == (400, 300)
    assert (character.width, character.height) == (64, 96)
    assert character.speed == 0.5


def test_walks_to_target_without_overshooting(character: Character) -> None:
    character.set_target(100, 0)
    assert character.facing is Facing.RIGHT
    assert character.is_moving

    positions = []
    for _ in range(12):
        character.update(TICK_MS)
        positions.append(character.x)

    assert max(positions) <= 100
    assert (character.x, character.y) == (100, 0)
    assert not character.is_moving
    assert character.target is None


def test_arrival_after_ceiling_of_distance_over_step(character: Character) -> None:
    target = (100.0, 37.0)
    character.set_target(*target)
    ticks = math.ceil(math.hypot(*target) / character.speed / TICK_MS)

    for _ in range(ticks - 1):
        character.update(TICK_MS)
    assert character.is_moving

    character.update(TICK_MS)
    assert (character.x, character.y) == target
    assert not character.is_moving


@pytest.mark.parametrize(
    ("target", "facing"),
    [
        ((50, 10), Facing.RIGHT),
        ((-50, 10), Facing.LEFT),
        ((10, -50), Facing.UP),
        ((10, 10), Facing.DOWN),  # tie goes vertical
    ],
)
def test_set_target_faces_dominant_axis(target: tuple[float, float], facing: Facing) -> None:
    character = Character(x=100, y=100, map_width=800, map_height=600, facing=Facing.LEFT)
    character.set_target(100 + target[0], 100 + target[1])
    assert character.facing is facing


def test_set_target_on_current_position_keeps_facing(character: Character) -> None:
    character.facing = Facing.UP
    character.set_target(0, 0)
    assert character.facing is Facing.UP
    character.update(TICK_MS)
    assert not character.is_moving


def test_move_scales_by_speed_and_turns(character: Character) -> None:
    assert character.move(10, 0)
    assert character.x == pytest.approx(5)
    assert character.facing is Facing.RIGHT
    assert character.is_moving


def test_rejected_move_keeps_position_but_turns(character: Character) -> None:
    assert not character.move(-10, 0)
    assert (character.x, character.y) == (0, 0)
    assert character.facing is Facing.LEFT
    assert not character.is_moving


def test_rejected_move_does_not_clear_target_walk(character: Character) -> None:
    character.set_target(100, 0)
    assert not character.move(-10, 0)
    assert character.is_moving
    assert character.target == (100, 0)


def test_zero_move_is_ignored(character: Character) -> None:
    assert not character.move(0, 0)
    assert not character.is_moving


def test_halt_only_stops_keyboard_walking(character: Character) -> None:
    character.move(10, 0)
    character.halt()
    assert not character.is_moving

    character.set_target(100, 0)
    character.halt()
    assert character.is_moving


def test_action_locks_movement_and_clears_target(character: Character) -> None:
    character.set_target(100, 0)
    assert character.start_action(Action(duration_ms=1000))

    assert character.is_busy
    assert not character.is_moving
    assert character.target is None
    assert character.phase == 0
    assert character.animation_state is AnimationState.ACTION

    assert not character.move(10, 0)
    assert character.x == 0
    assert not character.set_target(50, 50)
    assert not character.start_action(Action(duration_ms=10))


def test_action_completes_on_elapsed_time(character: Character) -> None:
    reported: list[float] = []
    completed: list[bool] = []
    action = Action(duration_ms=50, on_progress=reported.append, on_complete=lambda: completed.append(True))
    character.start_action(action)

    character.update(20)
    character.update(20)
    assert character.is_busy
    assert not completed

    character.update(20)
    assert not character.is_busy
    assert completed == [True]
    assert reported[0] == pytest.approx(0.4)
    assert reported[-1] == 1.0
    assert character.animation_state is AnimationState.IDLE


def test_action_animation_wraps_without_finishing(character: Character) -> None:
    character.start_action(Action(duration_ms=10_000))

    for _ in range(10):
        character.update(TICK_MS)
    assert character.phase == pytest.approx(1.5)
    assert character.current_frame == 1
    assert character.frame_count == 6

    for _ in range(31):
        character.update(TICK_MS)
    assert character.phase < 1.0
    assert character.is_busy


def test_idle_character_does_not_animate(character: Character) -> None:
    for _ in range(5):
        character.update(TICK_MS)
    assert character.phase == 0
    assert character.animation_state is AnimationState.IDLE
    assert character.frame_count == 4


def test_walking_animates(character: Character) -> None:
    character.set_target(500, 0)
    character.update(TICK_MS)
    assert character.animation_state is AnimationState.WALK
    assert character.phase == pytest.approx(0.15)


def test_hop_rises_and_lands(character: Character) -> None:
    assert character.hop(4.0)
    assert character.z == 4.0
    assert not character.hop(4.0)

    heights = []
    for _ in range(100):
        character.update(TICK_MS)
        heights.append(character.z)

    assert max(heights) > 4.0
    assert character.z == 0
    assert character.z_velocity == 0
    assert character.hop()


def test_hop_needs_upward_velocity(character: Character) -> None:
    assert not character.hop(0)
    assert character.z == 0


def test_obstacle_policy_blocks_walking_into_the_lake(open_environment: Environment) -> None:
    blocked = Character(
        x=368, y=152, map_width=800, map_height=600,
        collision="obstacles", environment=open_environment,
    )
    free = Character(x=368, y=152, map_width=800, map_height=600, environment=open_environment)

    assert not blocked.move(0, 80)
    assert blocked.y == 152
    assert free.move(0, 80)
    assert free.y == pytest.approx(192)


def test_unknown_collision_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        CharacterConfig(collision="walls")


def test_walk_stops_at_the_map_edge(character: Character) -> None:
    character.x = 700
    character.set_target(800, 0)

    for _ in range(10):
        character.update(TICK_MS)

    assert character.can_move_to(character.x, character.y)
    assert 736 - TICK_MS * character.speed < character.x <= 736
    assert character.target is None
    assert not character.is_moving


def test_obstacle_policy_stops_a_walk_at_the_lake_shore(open_environment: Environment) -> None:
    blocked = Character(
        x=100, y=252, map_width=800, map_height=600,
        collision="obstacles", environment=open_environment,
    )
    free = Character(x=100, y=252, map_width=800, map_height=600, environment=open_environment)
    for character in (blocked, free):
        character.set_target(600, 252)

    for _ in range(100):
        blocked.update(TICK_MS)
        free.update(TICK_MS)

    # The box centre may not enter the lake (radius 80 around x=400)
    assert 288 - TICK_MS * blocked.speed < blocked.x <= 288
    assert blocked.target is None
    assert not blocked.is_moving
    assert (free.x, free.y) == (600, 252)


def test_settle_moves_off_an_obstacle(open_environment: Environment) -> None:
    character = Character(
        x=400, y=300, map_width=800, map_height=600,
        collision="obstacles", environment=open_environment,
    )
    assert open_environment.check_collision(character.x, character.y, 64, 96)

    assert character.settle()
    assert not open_environment.check_collision(character.x, character.y, 64, 96)
    assert math.hypot(character.x - 400, character.y - 300) <= 32
    assert not character.settle()


def test_settle_is_a_no_op_when_the_spot_is_allowed(character: Character) -> None:
    assert not character.settle()
    assert (character.x, character.y) == (0, 0)
