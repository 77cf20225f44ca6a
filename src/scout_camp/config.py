"""Centralized configuration for the game."""

import math
from dataclasses import dataclass, field


@dataclass
class WorldConfig:
    """Configuration for the outdoor map."""

    width: int = 800
    height: int = 600
    # Random seed for reproducibility (None = random seed)
    seed: int | None = None

    # Obstacles
    lake_radius: float = 80.0
    num_trees: int = 15
    num_rocks: int = 8
    tree_edge_margin: float = 50.0
    rock_edge_margin: float = 30.0

    # Occupancy margins used when placing obstacles
    lake_margin: float = 30.0
    tree_margin: float = 40.0
    rock_margin: float = 20.0
    path_margin: float = 20.0

    # Rejection sampling retries per obstacle before giving up
    max_placement_attempts: int = 1000

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"map size must be positive, got {self.width}x{self.height}")
        if self.max_placement_attempts <= 0:
            raise ValueError("max_placement_attempts must be positive")


@dataclass
class CharacterConfig:
    """Configuration for the player character."""

    width: float = 64.0
    height: float = 96.0
    speed: float = 0.5  # units per ms
    animation_rate: float = 0.15  # phase units per tick
    gravity: float = 0.5  # z velocity lost per tick
    hop_velocity: float = 4.0
    # "bounds" (map edges only) or "obstacles" (also environment collision)
    collision: str = "bounds"

    def __post_init__(self) -> None:
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        if self.collision not in ("bounds", "obstacles"):
            raise ValueError(f"unknown collision policy: {self.collision!r}")


@dataclass
class TaskConfig:
    """Configuration for the scripted camp tasks."""

    interaction_radius: float = 50.0
    # Fraction of the radius that still counts as "in range"
    reach_factor: float = 1.2
    action_duration_ms: float = 3000.0

    def __post_init__(self) -> None:
        if self.action_duration_ms <= 0:
            raise ValueError("action_duration_ms must be positive")


@dataclass
class LoopConfig:
    """Configuration for the fixed-timestep loop."""

    time_step_ms: float = 1000.0 / 60.0
    # Frame deltas above this are treated as a single step (tab was suspended)
    max_frame_ms: float = 1000.0
    # Keyboard intent per ms, multiplied by the character speed
    input_move_scale: float = 0.2
    diagonal_factor: float = math.sqrt(0.5)

    def __post_init__(self) -> None:
        if self.time_step_ms <= 0:
            raise ValueError(f"time_step_ms must be positive, got {self.time_step_ms}")


@dataclass
class RendererConfig:
    """Configuration for the Pygame renderer."""

    window_width: int = 1080
    window_height: int = 720
    hud_height: int = 96
    target_fps: int = 60
    sprite_path: str | None = "assets/scout-sprite.png"
    ground_resolution: int = 4
    show_task_zones: bool = True


@dataclass
class Config:
    """Main configuration container."""

    world: WorldConfig = field(default_factory=WorldConfig)
    character: CharacterConfig = field(default_factory=CharacterConfig)
    tasks: TaskConfig = field(default_factory=TaskConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls(
            world=WorldConfig(),
            character=CharacterConfig(),
            tasks=TaskConfig(),
            loop=LoopConfig(),
            renderer=RendererConfig(),
        )
