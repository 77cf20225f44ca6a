from __future__ import annotations

import pytest

from scout_camp.config import TaskConfig
from scout_camp.simulation.action import Action
from scout_camp.simulation.tasks import TASK_INFO, Task, TaskManager, TaskStatus, TaskType

from .conftest import character_near


def _finish(task: Task) -> None:
    action = task.start_interaction(character_near(task))
    assert action is not None
    action.complete()


def test_fixed_layout(task_manager: TaskManager) -> None:
    assert [task.type for task in task_manager] == [
        TaskType.FIRE,
        TaskType.TENT,
        TaskType.TRACKING,
        TaskType.WATER,
    ]
    assert [(task.x, task.y) for task in task_manager] == [
        (100, 150),
        (300, 100),
        (500, 200),
        (200, 400),
    ]
    assert len(task_manager) == 4
    assert all(task.interaction_radius == 50 for task in task_manager)


def test_every_task_type_has_metadata() -> None:
    assert set(TASK_INFO) == set(TaskType)
    for info in TASK_INFO.values():
        assert info.emoji
        assert info.label
        assert len(info.steps) == 3


def test_metadata_is_looked_up_by_type(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    assert fire.emoji == "🔥"
    assert fire.label == "Light a fire"
    assert fire.steps == TASK_INFO[TaskType.FIRE].steps


def test_interaction_reach_is_exclusive(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    assert fire.can_interact(character_near(fire, 50 * 1.19))
    assert not fire.can_interact(character_near(fire, 50 * 1.2))


def test_start_fails_out_of_reach(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    assert fire.start_interaction(character_near(fire, 60)) is None
    assert fire.status is TaskStatus.IDLE


def test_start_succeeds_just_inside_reach(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    action = fire.start_interaction(character_near(fire, 59.5))

    assert isinstance(action, Action)
    assert action.duration_ms == 3000
    assert fire.status is TaskStatus.IN_PROGRESS
    assert fire.progress == 0


def test_cannot_restart_while_in_progress(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    character = character_near(fire)
    assert fire.start_interaction(character) is not None
    assert fire.start_interaction(character) is None


def test_progress_callback_drives_current_step(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    assert fire.current_step is None

    action = fire.start_interaction(character_near(fire))
    assert action is not None
    assert fire.current_step == 0

    action.advance(1500)
    assert fire.progress == pytest.approx(0.5)
    assert fire.current_step == 1
    assert "50%" in fire.status_text()

    action.advance(1470)
    assert fire.current_step == 2


def test_completion_is_terminal(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    _finish(fire)

    assert fire.status is TaskStatus.COMPLETED
    assert fire.progress == 1
    assert fire.current_step is None
    for offset in (0, 30, 59):
        assert fire.start_interaction(character_near(fire, offset)) is None
    assert fire.status is TaskStatus.COMPLETED
    assert fire.status_text().startswith("Done")


def test_all_complete_needs_all_four(task_manager: TaskManager) -> None:
    tasks = task_manager.tasks
    for task in tasks[:3]:
        _finish(task)
    assert task_manager.completed_count == 3
    assert not task_manager.are_all_tasks_complete()

    _finish(tasks[3])
    assert task_manager.are_all_tasks_complete()


def test_find_interactable_skips_completed(task_manager: TaskManager) -> None:
    fire = task_manager.tasks[0]
    character = character_near(fire)
    assert task_manager.find_interactable(character) is fire

    _finish(fire)
    assert task_manager.find_interactable(character) is None


def test_update_sets_proximity_prompt(task_manager: TaskManager) -> None:
    tent = task_manager.tasks[1]
    task_manager.update(character_near(tent))
    assert task_manager.focused_task is tent
    assert task_manager.prompt is not None
    assert "Pitch the tent" in task_manager.prompt

    task_manager.update(character_near(tent, 300))
    assert task_manager.focused_task is None
    assert task_manager.prompt is None


def test_custom_task_config() -> None:
    manager = TaskManager.from_config(TaskConfig(interaction_radius=10, action_duration_ms=500))
    fire = manager.tasks[0]
    assert not fire.can_interact(character_near(fire, 12.5))
    action = fire.start_interaction(character_near(fire, 5))
    assert action is not None
    assert action.duration_ms == 500


def test_invalid_duration_is_rejected() -> None:
    with pytest.raises(ValueError):
        TaskConfig(action_duration_ms=0)
    with pytest.raises(ValueError):
        Action(duration_ms=-1)
