"""Camp tasks - scripted interactions the scout has to complete."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterator

from ..config import TaskConfig
from .action import Action
from .geometry import distance

if TYPE_CHECKING:
    from .character import Character

logger = logging.getLogger(__name__)


class TaskType(Enum):
    """The four camp tasks."""

    FIRE = auto()
    TENT = auto()
    TRACKING = auto()
    WATER = auto()


class TaskStatus(Enum):
    """Task lifecycle. Transitions only go forward."""

    IDLE = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()


@dataclass(frozen=True)
class TaskInfo:
    """Display metadata for a task type."""

    emoji: str
    label: str
    steps: tuple[str, ...]


TASK_INFO: dict[TaskType, TaskInfo] = {
    TaskType.FIRE: TaskInfo(
        emoji="🔥",
        label="Light a fire",
        steps=("Gather firewood", "Build the fire pit", "Light the fire"),
    ),
    TaskType.TENT: TaskInfo(
        emoji="⛺",
        label="Pitch the tent",
        steps=("Unfold the tent", "Drive in the pegs", "Tighten the guy lines"),
    ),
    TaskType.TRACKING: TaskInfo(
        emoji="🐾",
        label="Identify the tracks",
        steps=("Study the footprints", "Measure their size", "Compare with the field guide"),
    ),
    TaskType.WATER: TaskInfo(
        emoji="💧",
        label="Fill the water bottle",
        steps=("Find a spring", "Filter the water", "Fill the bottle"),
    ),
}

# Fixed camp layout, in map units
TASK_LAYOUT: tuple[tuple[TaskType, float, float], ...] = (
    (TaskType.FIRE, 100.0, 150.0),
    (TaskType.TENT, 300.0, 100.0),
    (TaskType.TRACKING, 500.0, 200.0),
    (TaskType.WATER, 200.0, 400.0),
)


@dataclass
class Task:
    """
    A task anchored at a point on the map.

    Walking within reach and interacting starts a timed action; when the action
    finishes the task is completed for good.
    """

    x: float
    y: float
    type: TaskType
    interaction_radius: float = 50.0
    reach_factor: float = 1.2
    action_duration_ms: float = 3000.0
    status: TaskStatus = TaskStatus.IDLE
    progress: float = 0.0

    @property
    def info(self) -> TaskInfo:
        return TASK_INFO[self.type]

    @property
    def emoji(self) -> str:
        return self.info.emoji

    @property
    def label(self) -> str:
        return self.info.label

    @property
    def steps(self) -> tuple[str, ...]:
        return self.info.steps

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    @property
    def in_progress(self) -> bool:
        return self.status is TaskStatus.IN_PROGRESS

    @property
    def current_step(self) -> int | None:
        """Index of the step being performed, or None when not in progress."""
        if not self.in_progress:
            return None
        return min(len(self.steps) - 1, math.floor(self.progress * len(self.steps)))

    def distance_from(self, character: Character) -> float:
        center_x, center_y = character.center
        return distance(center_x, center_y, self.x, self.y)

    def can_interact(self, character: Character) -> bool:
        """Check if the character's centre is within reach of the task."""
        return self.distance_from(character) < self.interaction_radius * self.reach_factor

    def start_interaction(self, character: Character) -> Action | None:
        """
        Begin the task if it is idle and the character is in reach.

        Returns:
            The action the character should run, or None if nothing started.
        """
        if self.status is not TaskStatus.IDLE:
            return None
        if not self.can_interact(character):
            return None

        self.status = TaskStatus.IN_PROGRESS
        self.progress = 0.0
        logger.info("Started task %s", self.type.name)

        return Action(
            duration_ms=self.action_duration_ms,
            on_progress=self._on_progress,
            on_complete=self._on_complete,
        )

    def _on_progress(self, progress: float) -> None:
        if self.in_progress:
            self.progress = max(0.0, min(1.0, progress))

    def _on_complete(self) -> None:
        if not self.in_progress:
            return
        self.status = TaskStatus.COMPLETED
        self.progress = 1.0
        logger.info("Completed task %s", self.type.name)

    def status_text(self) -> str:
        """Prompt shown while the character stands near the task."""
        if self.is_completed:
            return "Done ✓"
        if self.in_progress:
            step = self.steps[self.current_step or 0]
            return f"In progress... {math.floor(self.progress * 100)}% ({step})"
        return "Press SPACE or ⚡ to start"


@dataclass
class TaskManager:
    """Owns the camp tasks in their fixed order."""

    tasks: tuple[Task, ...]
    focused_task: Task | None = field(default=None, init=False)
    prompt: str | None = field(default=None, init=False)

    @classmethod
    def from_config(cls, config: TaskConfig) -> TaskManager:
        """Create the four camp tasks at their fixed positions."""
        return cls(
            tasks=tuple(
                Task(
                    x=x,
                    y=y,
                    type=task_type,
                    interaction_radius=config.interaction_radius,
                    reach_factor=config.reach_factor,
                    action_duration_ms=config.action_duration_ms,
                )
                for task_type, x, y in TASK_LAYOUT
            )
        )

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self.tasks if task.is_completed)

    def are_all_tasks_complete(self) -> bool:
        """The win condition: every task is completed."""
        return all(task.is_completed for task in self.tasks)

    def find_interactable(self, character: Character) -> Task | None:
        """First task in reach that has not been completed yet."""
        for task in self.tasks:
            if not task.is_completed and task.can_interact(character):
                return task
        return None

    def update(self, character: Character) -> None:
        """Refresh the proximity prompt for the task the character stands at."""
        self.focused_task = None
        self.prompt = None
        for task in self.tasks:
            if task.can_interact(character):
                self.focused_task = task
                self.prompt = f"{task.emoji} {task.label}: {task.status_text()}"
                break
