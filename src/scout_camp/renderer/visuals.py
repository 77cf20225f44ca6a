"""Character visuals - sprite sheet backed or drawn procedurally."""

from __future__ import annotations

import logging
import math
from typing import Protocol

import pygame

from ..simulation.character import SPRITE_ROWS, AnimationState
from . import colors

logger = logging.getLogger(__name__)


class VisualProvider(Protocol):
    """Anything that can hand out animation frames for the character."""

    width: int
    height: int

    def frame(self, state: AnimationState, index: int) -> pygame.Surface: ...


class SpriteSheetVisual:
    """Frames cut from a sheet laid out as one row per animation state."""

    def __init__(self, sheet: pygame.Surface, width: int, height: int):
        """
        Initialize from a loaded sheet.

        Args:
            sheet: Surface with one column per frame and one row per state
            width: Frame width in pixels
            height: Frame height in pixels
        """
        columns = max(row.frames for row in SPRITE_ROWS.values())
        rows = max(row.row for row in SPRITE_ROWS.values()) + 1
        if sheet.get_width() < width * columns or sheet.get_height() < height * rows:
            raise ValueError(
                f"sprite sheet is {sheet.get_width()}x{sheet.get_height()}, "
                f"need at least {width * columns}x{height * rows}"
            )

        self.sheet = sheet
        self.width = width
        self.height = height
        self._frames: dict[tuple[AnimationState, int], pygame.Surface] = {}

    def frame(self, state: AnimationState, index: int) -> pygame.Surface:
        sprite_row = SPRITE_ROWS[state]
        index = index % sprite_row.frames
        key = (state, index)
        if key not in self._frames:
            rect = pygame.Rect(index * self.width, sprite_row.row * self.height, self.width, self.height)
            self._frames[key] = self.sheet.subsurface(rect)
        return self._frames[key]


class ProceduralVisual(SpriteSheetVisual):
    """A scout drawn with primitives, used when no sprite sheet is available."""

    def __init__(self, width: int, height: int):
        super().__init__(self._draw_sheet(width, height), width, height)

    @staticmethod
    def _draw_sheet(width: int, height: int) -> pygame.Surface:
        columns = max(row.frames for row in SPRITE_ROWS.values())
        sheet = pygame.Surface((width * columns, height * len(SPRITE_ROWS)), pygame.SRCALPHA)

        for state, sprite_row in SPRITE_ROWS.items():
            for col in range(sprite_row.frames):
                x = col * width
                y = sprite_row.row * height

                # Walking bobs the body up and down
                bounce = math.sin(col * math.pi / 2) * 2 if state is AnimationState.WALK else 0.0

                # Body
                pygame.draw.rect(
                    sheet,
                    colors.SCOUT_PANTS,
                    pygame.Rect(x + width / 4, y + height / 2 - bounce, width / 2, height / 2),
                )

                # Neck scarf
                pygame.draw.polygon(
                    sheet,
                    colors.SCOUT_SCARF,
                    [
                        (x + width / 2, y + height / 3),
                        (x + width / 3, y + height / 2),
                        (x + width * 2 / 3, y + height / 2),
                    ],
                )

                # Head and eyes
                head = (x + width / 2, y + height / 3 - bounce)
                pygame.draw.circle(sheet, colors.SCOUT_SKIN, head, width / 4)
                pygame.draw.circle(sheet, colors.SCOUT_EYES, (head[0] - 5, head[1]), 2)
                pygame.draw.circle(sheet, colors.SCOUT_EYES, (head[0] + 5, head[1]), 2)

                # Arms swing while working
                if state is AnimationState.ACTION:
                    arm = math.sin(col / (sprite_row.frames - 1) * math.pi) * 10
                    pygame.draw.rect(
                        sheet,
                        colors.SCOUT_SHIRT,
                        pygame.Rect(x + width / 6, y + height / 2 - arm, width / 6, height / 3),
                    )
                    pygame.draw.rect(
                        sheet,
                        colors.SCOUT_SHIRT,
                        pygame.Rect(x + width * 2 / 3, y + height / 2 + arm, width / 6, height / 3),
                    )

        return sheet


def load_character_visual(path: str | None, width: int, height: int) -> VisualProvider:
    """
    Load the character sprite sheet, falling back to the procedural scout.

    The choice is made once here; drawing code never checks whether the
    sheet loaded.
    """
    if path is None:
        return ProceduralVisual(width, height)

    try:
        sheet = pygame.image.load(path)
        return SpriteSheetVisual(sheet, width, height)
    except (OSError, pygame.error, ValueError) as exc:
        logger.warning("Could not use sprite sheet %s (%s), drawing the scout instead", path, exc)
        return ProceduralVisual(width, height)
