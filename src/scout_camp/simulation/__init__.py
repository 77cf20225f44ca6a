"""Simulation module - pure logic, no rendering."""

from .action import Action
from .character import SPRITE_ROWS, AnimationState, Character, Facing
from .environment import Environment, Lake, Path, PathType, PlacementError, Rock, Tree
from .game import Game, GameState, GameStats
from .input import Button, InputState
from .loop import FixedStepLoop, drive
from .tasks import TASK_INFO, Task, TaskInfo, TaskManager, TaskStatus, TaskType

__all__ = [
    "Action",
    "AnimationState",
    "Button",
    "Character",
    "Environment",
    "Facing",
    "FixedStepLoop",
    "Game",
    "GameState",
    "GameStats",
    "InputState",
    "Lake",
    "Path",
    "PathType",
    "PlacementError",
    "Rock",
    "SPRITE_ROWS",
    "TASK_INFO",
    "Task",
    "TaskInfo",
    "TaskManager",
    "TaskStatus",
    "TaskType",
    "Tree",
    "drive",
]
