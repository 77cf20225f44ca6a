"""Game simulation - owns the entities and runs one tick at a time."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from ..config import Config
from .character import Character
from .environment import Environment
from .geometry import clamp
from .input import Button, InputState
from .tasks import Task, TaskManager

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Top-level game phase."""

    PLAYING = auto()
    WON = auto()


@dataclass
class GameStats:
    """Statistics about the current session."""

    tick: int = 0
    elapsed_ms: float = 0.0
    tasks_completed: int = 0
    actions_started: int = 0
    won_at_tick: int | None = None


class Game:
    """
    The outdoor camp game.

    Manages:
    - The character, the environment and the task registry
    - Per-tick input handling and movement
    - The win condition and the hand-off to whatever comes after it
    """

    def __init__(
        self,
        config: Config,
        rng: random.Random | None = None,
        on_win: Callable[[Game], None] | None = None,
    ):
        """
        Initialize the game.

        Args:
            config: Full game configuration
            rng: Random number generator for map generation (seeded from the
                config when omitted)
            on_win: Called once, on the tick all tasks become complete
        """
        self.config = config
        self.width = config.world.width
        self.height = config.world.height

        if rng is None:
            if config.world.seed is not None:
                self.seed = config.world.seed
            else:
                self.seed = random.randint(0, 2**31 - 1)
            rng = random.Random(self.seed)
        else:
            self.seed = config.world.seed
        self.rng = rng

        self.environment = Environment(config.world, self.rng)
        self.task_manager = TaskManager.from_config(config.tasks)
        self.character = Character.from_config(
            config.character, config.world, environment=self.environment
        )
        # The map centre may sit on an obstacle under the "obstacles" policy
        self.character.settle()

        self.state = GameState.PLAYING
        self.stats = GameStats()
        self.on_win = on_win

        self._action_was_down = False
        self._jump_was_down = False

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self.task_manager.tasks

    @property
    def is_won(self) -> bool:
        return self.state is GameState.WON

    def handle_click(self, x: float, y: float) -> bool:
        """Send the character toward a map point, clamped so its box stays on the map."""
        character = self.character
        return character.set_target(
            clamp(x, 0, self.width - character.width),
            clamp(y, 0, self.height - character.height),
        )

    def handle_action(self) -> bool:
        """
        Interact with the first task in reach.

        Returns:
            True if an action was started.
        """
        task = self.task_manager.find_interactable(self.character)
        if task is None:
            return False

        action = task.start_interaction(self.character)
        if action is None:
            return False

        if not self.character.start_action(action):
            return False

        self.stats.actions_started += 1
        return True

    def step(self, input_state: InputState, dt_ms: float | None = None) -> None:
        """
        Advance the game by one fixed tick.

        This:
        0. Applies the click target and the action and jump button presses
        1. Turns the held buttons into a movement intent
        2. Moves the character unless an action owns it
        3. Updates the character (target pursuit, action timer, animation, hop)
        4. Refreshes the task proximity prompt
        5. Updates the environment
        6. Checks the win condition
        """
        if self.state is not GameState.PLAYING:
            return

        loop = self.config.loop
        if dt_ms is None:
            dt_ms = loop.time_step_ms

        self.stats.tick += 1
        self.stats.elapsed_ms += dt_ms

        # Pointer clicks and button presses are events, not held state
        if input_state.target is not None:
            self.handle_click(*input_state.target)

        action_down = input_state.is_down(Button.ACTION)
        if action_down and not self._action_was_down:
            self.handle_action()
        self._action_was_down = action_down

        jump_down = input_state.is_down(Button.JUMP)
        if jump_down and not self._jump_was_down and not self.character.is_busy:
            self.character.hop()
        self._jump_was_down = jump_down

        intent_x, intent_y = input_state.movement_intent(loop.diagonal_factor)
        scale = dt_ms * loop.input_move_scale
        dx = intent_x * scale
        dy = intent_y * scale

        if not self.character.is_busy:
            if dx != 0 or dy != 0:
                self.character.move(dx, dy)
            else:
                self.character.halt()

        self.character.update(dt_ms)

        self.task_manager.update(self.character)
        self.stats.tasks_completed = self.task_manager.completed_count

        self.environment.update(dt_ms)

        if self.task_manager.are_all_tasks_complete():
            self._win()

    def _win(self) -> None:
        self.state = GameState.WON
        self.stats.won_at_tick = self.stats.tick
        logger.info(
            "All %d tasks complete after %d ticks (%.1f s)",
            len(self.task_manager),
            self.stats.tick,
            self.stats.elapsed_ms / 1000.0,
        )
        if self.on_win is not None:
            self.on_win(self)
