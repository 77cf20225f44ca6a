"""Color definitions for the renderer."""

from ..simulation.geometry import clamp, lerp

# Background
BG_DARK = (28, 28, 32)
HUD_BG = (38, 38, 45)

# Ground - grass tones
GRASS_DARK = (107, 142, 35)
GRASS_LIGHT = (144, 169, 85)

# Paths
PATH_MAIN = (184, 145, 108)
PATH_SECONDARY = (196, 164, 132)

# Lake
LAKE_DEEP = (46, 89, 132)
LAKE_SHALLOW = (79, 144, 205)

# Trees
TRUNK = (101, 67, 33)
TREE_CROWNS = (
    (34, 100, 34),
    (46, 125, 50),
    (27, 94, 32),
)

# Rocks
ROCK = (128, 128, 128)
ROCK_HIGHLIGHT = (160, 160, 160)

# Shadows
SHADOW = (0, 0, 0, 50)

# Task zones
ZONE_IDLE = (255, 255, 255, 50)
ZONE_IN_PROGRESS = (250, 204, 21, 50)
ZONE_COMPLETED = (74, 222, 128, 50)
PROGRESS_TRACK = (0, 0, 0, 80)
PROGRESS_FILL = (255, 221, 0)
CHECKMARK = (34, 197, 94)

# Scout
SCOUT_SHIRT = (43, 122, 11)
SCOUT_PANTS = (75, 85, 99)
SCOUT_SKIN = (255, 179, 133)
SCOUT_SCARF = (220, 38, 38)
SCOUT_EYES = (0, 0, 0)

# UI
TEXT_PRIMARY = (240, 240, 245)
TEXT_SECONDARY = (160, 160, 170)
TEXT_ACCENT = (100, 200, 255)
DIVIDER = (60, 60, 70)
BANNER_BG = (20, 20, 25, 200)


def lerp_color(
    color1: tuple[int, int, int],
    color2: tuple[int, int, int],
    t: float,
) -> tuple[int, int, int]:
    """Linearly interpolate between two colors."""
    t = clamp(t, 0.0, 1.0)
    return (
        int(lerp(color1[0], color2[0], t)),
        int(lerp(color1[1], color2[1], t)),
        int(lerp(color1[2], color2[2], t)),
    )


def get_zone_color(completed: bool, in_progress: bool) -> tuple[int, int, int, int]:
    """Get the interaction zone fill for a task state."""
    if completed:
        return ZONE_COMPLETED
    if in_progress:
        return ZONE_IN_PROGRESS
    return ZONE_IDLE
