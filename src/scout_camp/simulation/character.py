"""Character entity - the scout walking around the camp."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from .geometry import Facing, Vector2, dominant_facing

if TYPE_CHECKING:
    from ..config import CharacterConfig, WorldConfig
    from .action import Action
    from .environment import Environment

logger = logging.getLogger(__name__)


class AnimationState(Enum):
    """Which sprite row the character is animating."""

    IDLE = auto()
    WALK = auto()
    ACTION = auto()


@dataclass(frozen=True)
class SpriteRow:
    """Sprite sheet metadata for one animation state."""

    row: int
    frames: int


SPRITE_ROWS: dict[AnimationState, SpriteRow] = {
    AnimationState.IDLE: SpriteRow(row=0, frames=4),
    AnimationState.WALK: SpriteRow(row=1, frames=4),
    AnimationState.ACTION: SpriteRow(row=2, frames=6),
}


@dataclass
class Character:
    """
    The player-controlled scout.

    The character has:
    - A position (x, y are the top-left of its sprite box, z is a hop offset)
    - A facing derived from the dominant axis of its last movement
    - An optional movement target it walks toward each tick
    - An optional busy action that locks out movement until it finishes
    """

    x: float
    y: float
    map_width: float
    map_height: float
    width: float = 64.0
    height: float = 96.0
    speed: float = 0.5  # units per ms
    animation_rate: float = 0.15
    gravity: float = 0.5
    hop_velocity: float = 4.0
    collision: str = "bounds"
    environment: Environment | None = field(default=None, repr=False)

    z: float = 0.0
    z_velocity: float = 0.0
    facing: Facing = Facing.DOWN
    target: tuple[float, float] | None = None
    is_moving: bool = False
    action: Action | None = field(default=None, repr=False)
    phase: float = 0.0

    @classmethod
    def from_config(
        cls,
        config: CharacterConfig,
        world: WorldConfig,
        environment: Environment | None = None,
        x: float | None = None,
        y: float | None = None,
    ) -> Character:
        """Create a character at the given position, or the map centre."""
        return cls(
            x=world.width / 2 if x is None else x,
            y=world.height / 2 if y is None else y,
            map_width=world.width,
            map_height=world.height,
            width=config.width,
            height=config.height,
            speed=config.speed,
            animation_rate=config.animation_rate,
            gravity=config.gravity,
            hop_velocity=config.hop_velocity,
            collision=config.collision,
            environment=environment,
        )

    @property
    def is_busy(self) -> bool:
        """Check if an action currently owns the character."""
        return self.action is not None

    @property
    def center(self) -> tuple[float, float]:
        """Centre of the sprite box."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def animation_state(self) -> AnimationState:
        if self.action is not None:
            return AnimationState.ACTION
        if self.is_moving:
            return AnimationState.WALK
        return AnimationState.IDLE

    @property
    def frame_count(self) -> int:
        return SPRITE_ROWS[self.animation_state].frames

    @property
    def current_frame(self) -> int:
        """Sprite frame index within the active animation row."""
        return int(self.phase) % self.frame_count

    def set_target(self, target_x: float, target_y: float) -> bool:
        """
        Start walking toward a point.

        The caller is responsible for keeping the target inside the map.
        Ignored while an action is running.

        Returns:
            True if the target was accepted.
        """
        if self.action is not None:
            return False

        self.target = (target_x, target_y)
        self.is_moving = True
        self.facing = dominant_facing(target_x - self.x, target_y - self.y, self.facing)
        return True

    def update(self, dt_ms: float) -> None:
        """
        Advance the character by one tick.

        Args:
            dt_ms: Length of the tick in milliseconds
        """
        # Walk toward the target; arrival snaps exactly onto it
        if self.action is None and self.is_moving and self.target is not None:
            position = Vector2(self.x, self.y)
            goal = Vector2(*self.target)
            remaining = goal - position
            step = self.speed * dt_ms

            arrived = remaining.length() <= step
            if arrived:
                candidate = goal
            else:
                candidate = position + remaining.normalize() * step

            if not self.can_move_to(candidate.x, candidate.y):
                logger.debug("Walk to %s blocked at (%.1f, %.1f)", self.target, self.x, self.y)
                self.is_moving = False
                self.target = None
            else:
                self.x = candidate.x
                self.y = candidate.y
                if arrived:
                    self.is_moving = False
                    self.target = None

        # Busy actions finish on elapsed time
        if self.action is not None and self.action.advance(dt_ms):
            finished = self.action
            self.action = None
            self.phase = 0.0
            finished.complete()

        if self.is_moving or self.action is not None:
            self.phase += self.animation_rate
            if self.phase >= self.frame_count:
                self.phase = 0.0

        # Hop and gravity
        if self.z > 0:
            self.z += self.z_velocity
            self.z_velocity -= self.gravity
            if self.z <= 0:
                self.z = 0.0
                self.z_velocity = 0.0

    def move(self, dx: float, dy: float) -> bool:
        """
        Step the character by (dx, dy) scaled by its speed.

        Facing follows the requested direction even when the step is blocked.
        Locked out entirely while an action is running.

        Returns:
            True if the character actually moved.
        """
        if self.action is not None:
            return False
        if dx == 0 and dy == 0:
            return False

        new_x = self.x + dx * self.speed
        new_y = self.y + dy * self.speed

        self.facing = dominant_facing(dx, dy, self.facing)

        if not self.can_move_to(new_x, new_y):
            logger.debug("Blocked move to (%.1f, %.1f)", new_x, new_y)
            return False

        self.x = new_x
        self.y = new_y
        self.is_moving = True
        return True

    def halt(self) -> None:
        """Stop keyboard walking; a pending target keeps the character moving."""
        if self.target is None:
            self.is_moving = False

    def start_action(self, action: Action) -> bool:
        """
        Hand control of the character to an action.

        Returns:
            False if another action is already running.
        """
        if self.action is not None:
            return False

        self.action = action
        self.phase = 0.0
        self.is_moving = False
        self.target = None
        return True

    def hop(self, velocity: float | None = None) -> bool:
        """Start a vertical hop if the character is standing on the ground."""
        velocity = self.hop_velocity if velocity is None else velocity
        if self.z > 0 or velocity <= 0:
            return False

        self.z_velocity = velocity
        self.z += velocity
        return True

    def settle(self, step: float = 8.0) -> bool:
        """
        Move to the nearest spot the collision policy allows.

        Searches rings of growing radius around the current position. Used
        when the character is placed somewhere it could not walk out of,
        e.g. the map centre on top of the lake.

        Returns:
            True if the character was moved.
        """
        if self.can_move_to(self.x, self.y):
            return False

        radius = step
        max_radius = max(self.map_width, self.map_height)
        while radius <= max_radius:
            samples = max(8, int(2 * math.pi * radius / step))
            for i in range(samples):
                angle = 2 * math.pi * i / samples
                x = self.x + math.cos(angle) * radius
                y = self.y + math.sin(angle) * radius
                if self.can_move_to(x, y):
                    logger.info(
                        "Moved character from (%.1f, %.1f) to free ground at (%.1f, %.1f)",
                        self.x, self.y, x, y,
                    )
                    self.x = x
                    self.y = y
                    return True
            radius += step

        logger.warning("No free ground around (%.1f, %.1f)", self.x, self.y)
        return False

    def can_move_to(self, x: float, y: float) -> bool:
        """Check if the sprite box fits at (x, y) under the collision policy."""
        in_bounds = (
            0 <= x <= self.map_width - self.width
            and 0 <= y <= self.map_height - self.height
        )
        if not in_bounds:
            return False

        if self.collision == "obstacles" and self.environment is not None:
            return not self.environment.check_collision(x, y, self.width, self.height)

        return True
