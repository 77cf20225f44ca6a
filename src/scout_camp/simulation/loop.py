"""Fixed-timestep accumulator decoupling simulation from frame rate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from ..config import LoopConfig

if TYPE_CHECKING:
    from .game import Game
    from .input import InputState

logger = logging.getLogger(__name__)


class FixedStepLoop:
    """
    Drains real elapsed time in whole fixed-size ticks.

    Each frame the host reports the current time; the loop adds the delta to
    an accumulator and calls the tick function once per full time step. Any
    remainder carries over to the next frame. Rendering is left to the host
    and happens once per frame regardless of how many ticks ran.
    """

    def __init__(self, config: LoopConfig):
        """
        Initialize the loop.

        Args:
            config: Loop configuration (time step and frame delta ceiling)
        """
        self.time_step_ms = config.time_step_ms
        self.max_frame_ms = config.max_frame_ms
        self.accumulator = 0.0
        self.last_time_ms: float | None = None
        self.is_running = False
        self.total_ticks = 0

    def start(self) -> None:
        """Start (or resume) the loop with a fresh clock."""
        if self.is_running:
            return
        self.is_running = True
        self.last_time_ms = None
        self.accumulator = 0.0

    def pause(self) -> None:
        """Stop ticking from the next frame on."""
        self.is_running = False

    def advance(self, now_ms: float, tick: Callable[[float], None]) -> int:
        """
        Run the ticks owed for the frame reported at `now_ms`.

        Args:
            now_ms: Monotonic host time in milliseconds
            tick: Called with the fixed step length, once per tick

        Returns:
            Number of ticks run this frame.
        """
        if not self.is_running:
            return 0

        if self.last_time_ms is None:
            self.last_time_ms = now_ms
        delta = now_ms - self.last_time_ms
        self.last_time_ms = now_ms

        # Coming back from a suspended tab: don't replay the gap
        if delta > self.max_frame_ms:
            logger.debug("Frame delta %.0f ms over ceiling, running one step", delta)
            delta = self.time_step_ms

        self.accumulator += max(0.0, delta)

        ticks = 0
        while self.accumulator >= self.time_step_ms:
            tick(self.time_step_ms)
            self.accumulator -= self.time_step_ms
            ticks += 1

        self.total_ticks += ticks
        return ticks


def drive(loop: FixedStepLoop, game: Game, input_state: InputState, now_ms: float) -> InputState:
    """
    Step the game through the ticks owed for one frame.

    A click is handed to the first tick that runs and then dropped. When the
    frame runs no ticks the click is still in the returned input, so the host
    can carry it into the next frame.

    Returns:
        The input left over after this frame's ticks.
    """
    pending = input_state

    def tick(dt_ms: float) -> None:
        nonlocal pending
        game.step(pending, dt_ms)
        pending = pending.without_target()

    loop.advance(now_ms, tick)
    return pending
