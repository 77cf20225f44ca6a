"""Renderer module - visualization and input layer."""

from .camera import Camera
from .ground import GroundTexture
from .pygame_renderer import PygameRenderer
from .visuals import ProceduralVisual, SpriteSheetVisual, VisualProvider, load_character_visual

__all__ = [
    "Camera",
    "GroundTexture",
    "ProceduralVisual",
    "PygameRenderer",
    "SpriteSheetVisual",
    "VisualProvider",
    "load_character_visual",
]
