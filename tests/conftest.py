from __future__ import annotations

import os

# Renderer tests create surfaces; keep SDL away from any real display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from scout_camp.config import CharacterConfig, Config, TaskConfig, WorldConfig
from scout_camp.simulation.character import Character
from scout_camp.simulation.environment import Environment
from scout_camp.simulation.game import Game
from scout_camp.simulation.tasks import Task, TaskManager

TICK_MS = 1000.0 / 60.0


@pytest.fixture()
def world_config() -> WorldConfig:
    return WorldConfig(seed=1234)


@pytest.fixture()
def environment(world_config: WorldConfig) -> Environment:
    return Environment(world_config)


@pytest.fixture()
def open_environment() -> Environment:
    """Lake and paths only, no randomly placed trees or rocks."""
    return Environment(WorldConfig(seed=1, num_trees=0, num_rocks=0))


@pytest.fixture()
def character() -> Character:
    return Character(x=0.0, y=0.0, map_width=800, map_height=600)


@pytest.fixture()
def task_manager() -> TaskManager:
    return TaskManager.from_config(TaskConfig())


@pytest.fixture()
def config() -> Config:
    cfg = Config.default()
    cfg.world.seed = 7
    return cfg


@pytest.fixture()
def game(config: Config) -> Game:
    return Game(config)


def character_near(task: Task, offset: float = 0.0) -> Character:
    """A character whose box centre sits `offset` units right of the task."""
    cfg = CharacterConfig()
    return Character(
        x=task.x + offset - cfg.width / 2,
        y=task.y - cfg.height / 2,
        map_width=800,
        map_height=600,
    )
