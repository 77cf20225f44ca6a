"""Viewport mapping between map units and window pixels."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Camera:
    """Uniform scale plus offset that fits the whole map inside a viewport."""

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def fit(
        cls,
        view_width: float,
        view_height: float,
        world_width: float,
        world_height: float,
        top: float = 0.0,
    ) -> Camera:
        """
        Scale the map to fit the viewport and centre it.

        Args:
            view_width: Available width in pixels
            view_height: Available height in pixels
            world_width: Map width in map units
            world_height: Map height in map units
            top: Pixels reserved above the viewport (e.g. a HUD bar)
        """
        scale = min(view_width / world_width, view_height / world_height)
        return cls(
            scale=scale,
            offset_x=(view_width - world_width * scale) / 2,
            offset_y=top + (view_height - world_height * scale) / 2,
        )

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        return (int(self.offset_x + x * self.scale), int(self.offset_y + y * self.scale))

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        return ((sx - self.offset_x) / self.scale, (sy - self.offset_y) / self.scale)

    def length(self, value: float) -> int:
        """Scale a map-unit length to whole pixels (at least 1)."""
        return max(1, int(value * self.scale))
