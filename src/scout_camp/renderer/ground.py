"""Procedural grass texture for the map background."""

from __future__ import annotations

import numpy as np
import pygame
from noise import snoise2

from . import colors


class GroundTexture:
    """
    Grass shading generated from simplex noise.

    The noise field is sampled on a coarse grid and mapped between a dark and
    a light grass color; the result is scaled up to the map size on demand.
    """

    def __init__(self, width: int, height: int, seed: int, resolution: int = 4):
        """
        Initialize the ground texture.

        Args:
            width: Map width in map units
            height: Map height in map units
            seed: Seed offset for the noise field
            resolution: Map units per noise sample (lower = more detail, slower)
        """
        self.width = width
        self.height = height
        self.seed = seed
        self.resolution = max(1, resolution)

        self.grid_width = max(1, width // self.resolution)
        self.grid_height = max(1, height // self.resolution)

        self.shade = self._generate_shade()

    def _generate_shade(self) -> np.ndarray:
        """Multi-octave noise normalized to 0-1, shape (grid_height, grid_width)."""
        scale = 0.02
        octaves = 3
        persistence = 0.5
        lacunarity = 2.0
        # snoise2 misbehaves with very large offsets
        offset = self.seed % 10_000

        shade = np.zeros((self.grid_height, self.grid_width), dtype=np.float32)

        for gy in range(self.grid_height):
            for gx in range(self.grid_width):
                wx = gx * self.resolution
                wy = gy * self.resolution

                value = 0.0
                amplitude = 1.0
                frequency = scale
                max_amplitude = 0.0

                for _ in range(octaves):
                    value += amplitude * snoise2(wx * frequency + offset, wy * frequency + offset)
                    max_amplitude += amplitude
                    amplitude *= persistence
                    frequency *= lacunarity

                shade[gy, gx] = (value / max_amplitude + 1) / 2

        return shade

    def rgb(self) -> np.ndarray:
        """Grass colors as a uint8 array of shape (grid_height, grid_width, 3)."""
        dark = np.array(colors.GRASS_DARK, dtype=np.float32)
        light = np.array(colors.GRASS_LIGHT, dtype=np.float32)
        t = np.clip(self.shade, 0.0, 1.0)[..., np.newaxis]
        return (dark + (light - dark) * t).astype(np.uint8)

    def to_surface(self, pixel_width: int, pixel_height: int) -> pygame.Surface:
        """Render the texture scaled to the given pixel size."""
        # surfarray expects (x, y, channel)
        surface = pygame.surfarray.make_surface(self.rgb().transpose(1, 0, 2))
        return pygame.transform.smoothscale(surface, (max(1, pixel_width), max(1, pixel_height)))
