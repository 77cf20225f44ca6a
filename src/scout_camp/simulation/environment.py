"""Environment - lake, trees, rocks and paths on the outdoor map."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum

from ..config import WorldConfig
from .geometry import circle_intersect, distance, point_to_segment_distance, rect_intersect

logger = logging.getLogger(__name__)


class PlacementError(RuntimeError):
    """Raised when an obstacle cannot be placed within the attempt budget."""


class PathType(Enum):
    """Kinds of footpath crossing the map."""

    MAIN = "main"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class Lake:
    """A circular lake the character cannot walk into."""

    x: float
    y: float
    radius: float

    def contains(self, px: float, py: float) -> bool:
        """Check if a point is inside the lake."""
        return distance(px, py, self.x, self.y) < self.radius


@dataclass(frozen=True)
class Tree:
    """A tree centred on (x, y) with a rectangular trunk-and-crown footprint."""

    x: float
    y: float
    width: float
    height: float
    variant: int

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounding box as (left, top, width, height)."""
        return (self.x - self.width / 2, self.y - self.height / 2, self.width, self.height)


@dataclass(frozen=True)
class Rock:
    """A round rock; `size` acts as its collision radius."""

    x: float
    y: float
    size: float
    rotation: float


@dataclass(frozen=True)
class Path:
    """A footpath polyline with a stroke width."""

    points: tuple[tuple[float, float], ...]
    width: float
    type: PathType

    def segments(self):
        """Yield consecutive waypoint pairs."""
        for start, end in zip(self.points, self.points[1:]):
            yield start, end

    def distance_to(self, px: float, py: float) -> float:
        """Shortest distance from a point to any segment of the path."""
        return min(
            (point_to_segment_distance(px, py, x1, y1, x2, y2) for (x1, y1), (x2, y2) in self.segments()),
            default=math.inf,
        )


class Environment:
    """
    Static scenery of the outdoor map.

    Provides:
    - Generation-time occupancy checks (is_position_occupied)
    - Runtime movement collision (check_collision)

    Obstacles are placed once by rejection sampling and never change afterwards.
    """

    def __init__(self, config: WorldConfig, rng: random.Random | None = None):
        """
        Initialize and generate the environment.

        Args:
            config: World configuration (map size, counts, margins)
            rng: Random number generator; a seeded one gives a reproducible map
        """
        self.config = config
        self.width = config.width
        self.height = config.height
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.lake = Lake(x=self.width / 2, y=self.height / 2, radius=config.lake_radius)
        self.trees: tuple[Tree, ...] = ()
        self.rocks: tuple[Rock, ...] = ()
        self.paths: tuple[Path, ...] = ()

        self._generate()

    @property
    def obstacle_count(self) -> int:
        return len(self.trees) + len(self.rocks) + 1

    def _generate(self) -> None:
        """Place trees, then rocks, then lay out the paths."""
        trees: list[Tree] = []
        rocks: list[Rock] = []

        # Placement queries read the obstacles placed so far
        self.trees = ()
        self.rocks = ()

        margin = self.config.tree_edge_margin
        for _ in range(self.config.num_trees):
            x, y = self._sample_free_position(margin, "tree")
            trees.append(
                Tree(
                    x=x,
                    y=y,
                    height=self.rng.uniform(60, 100),
                    width=self.rng.uniform(40, 60),
                    variant=int(self.rng.uniform(0, 3)),
                )
            )
            self.trees = tuple(trees)

        margin = self.config.rock_edge_margin
        for _ in range(self.config.num_rocks):
            x, y = self._sample_free_position(margin, "rock")
            rocks.append(
                Rock(
                    x=x,
                    y=y,
                    size=self.rng.uniform(15, 25),
                    rotation=self.rng.uniform(0, 2 * math.pi),
                )
            )
            self.rocks = tuple(rocks)

        self.paths = self._layout_paths()

        logger.info(
            "Generated environment: %d trees, %d rocks, %d paths",
            len(self.trees),
            len(self.rocks),
            len(self.paths),
        )

    def _sample_free_position(self, margin: float, kind: str) -> tuple[float, float]:
        """Rejection-sample a point inside the map that is not occupied."""
        for attempt in range(self.config.max_placement_attempts):
            x = self.rng.uniform(margin, self.width - margin)
            y = self.rng.uniform(margin, self.height - margin)
            if not self.is_position_occupied(x, y):
                if attempt:
                    logger.debug("Placed %s after %d rejected samples", kind, attempt)
                return (x, y)

        raise PlacementError(
            f"could not place {kind} after {self.config.max_placement_attempts} attempts "
            f"on a {self.width}x{self.height} map"
        )

    def _layout_paths(self) -> tuple[Path, ...]:
        w, h = self.width, self.height
        main = Path(
            points=(
                (0.0, h / 2),
                (w / 4, h / 2 + 50),
                (w / 2, h / 2),
                (w * 3 / 4, h / 2 - 50),
                (float(w), h / 2),
            ),
            width=30.0,
            type=PathType.MAIN,
        )
        secondary = Path(
            points=((w / 2, 0.0), (w / 2, float(h))),
            width=20.0,
            type=PathType.SECONDARY,
        )
        return (main, secondary)

    def is_position_occupied(self, x: float, y: float) -> bool:
        """Check whether a new obstacle may not be placed at (x, y)."""
        cfg = self.config

        if distance(x, y, self.lake.x, self.lake.y) < self.lake.radius + cfg.lake_margin:
            return True

        for tree in self.trees:
            if distance(x, y, tree.x, tree.y) < cfg.tree_margin:
                return True

        for rock in self.rocks:
            if distance(x, y, rock.x, rock.y) < cfg.rock_margin:
                return True

        for path in self.paths:
            if path.distance_to(x, y) < path.width + cfg.path_margin:
                return True

        return False

    def check_collision(self, x: float, y: float, width: float, height: float) -> bool:
        """
        Check whether a box at (x, y) with the given size hits any obstacle.

        The lake and rocks test the box centre; trees test rectangle overlap.
        """
        center_x = x + width / 2
        center_y = y + height / 2

        if self.lake.contains(center_x, center_y):
            return True

        for tree in self.trees:
            if rect_intersect(x, y, width, height, *tree.bounds):
                return True

        for rock in self.rocks:
            if circle_intersect(center_x, center_y, width / 2, rock.x, rock.y, rock.size):
                return True

        return False

    def update(self, dt_ms: float) -> None:
        """Per-tick hook for animated scenery; nothing moves yet."""
