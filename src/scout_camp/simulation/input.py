"""Abstract input state consumed by the simulation each tick."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto


class Button(Enum):
    """Logical buttons, whatever device produces them."""

    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    ACTION = auto()
    JUMP = auto()


@dataclass(frozen=True)
class InputState:
    """
    Snapshot of the controls for one frame.

    `held` is the set of buttons currently down; `target` is a pointer click
    already converted to map coordinates, if one happened this frame.
    """

    held: frozenset[Button] = field(default_factory=frozenset)
    target: tuple[float, float] | None = None

    @classmethod
    def of(cls, *buttons: Button, target: tuple[float, float] | None = None) -> InputState:
        return cls(held=frozenset(buttons), target=target)

    def is_down(self, button: Button) -> bool:
        return button in self.held

    def movement_intent(self, diagonal_factor: float = math.sqrt(0.5)) -> tuple[float, float]:
        """
        Unit movement direction from the arrow buttons.

        Opposite buttons cancel out. Diagonals are scaled so that their
        length matches a single axis.
        """
        dx = 0.0
        dy = 0.0
        if Button.LEFT in self.held:
            dx -= 1.0
        if Button.RIGHT in self.held:
            dx += 1.0
        if Button.UP in self.held:
            dy -= 1.0
        if Button.DOWN in self.held:
            dy += 1.0

        if dx != 0 and dy != 0:
            dx *= diagonal_factor
            dy *= diagonal_factor
        return (dx, dy)

    def with_target(self, target: tuple[float, float] | None) -> InputState:
        """Same buttons, with the given pointer click."""
        return InputState(held=self.held, target=target)

    def without_target(self) -> InputState:
        """Same buttons, pointer click consumed."""
        if self.target is None:
            return self
        return InputState(held=self.held)
