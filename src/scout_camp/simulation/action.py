"""Timed actions that temporarily take over the character."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Action:
    """
    A timed interruption of normal character control.

    Elapsed time is the only completion signal: the owner advances the action
    every tick, progress is reported through `on_progress`, and `on_complete`
    fires once the duration has elapsed.
    """

    duration_ms: float
    on_progress: Callable[[float], None] = field(default=lambda progress: None, repr=False)
    on_complete: Callable[[], None] = field(default=lambda: None, repr=False)
    elapsed_ms: float = 0.0
    finished: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.duration_ms <= 0:
            raise ValueError(f"action duration must be positive, got {self.duration_ms}")

    @property
    def progress(self) -> float:
        """Normalized progress (0-1)."""
        return min(1.0, self.elapsed_ms / self.duration_ms)

    def advance(self, dt_ms: float) -> bool:
        """
        Advance the action by one tick.

        Returns:
            True once the full duration has elapsed.
        """
        if self.finished:
            return True

        self.elapsed_ms += dt_ms
        self.on_progress(self.progress)
        return self.elapsed_ms >= self.duration_ms

    def complete(self) -> None:
        """Report full progress and fire the completion callback once."""
        if self.finished:
            return
        self.finished = True
        self.on_progress(1.0)
        self.on_complete()
