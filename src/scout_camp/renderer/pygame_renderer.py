"""Pygame-CE renderer and input adapter for the camp game."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import pygame

from ..config import RendererConfig
from ..simulation.character import Facing
from ..simulation.environment import PathType, Tree
from ..simulation.geometry import ease_in_out, ease_out_back, lerp, point_in_rect
from ..simulation.input import Button, InputState
from . import colors
from .camera import Camera
from .ground import GroundTexture
from .visuals import VisualProvider, load_character_visual

if TYPE_CHECKING:
    from ..simulation.character import Character
    from ..simulation.environment import Environment, Rock
    from ..simulation.game import Game
    from ..simulation.tasks import Task, TaskManager

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[Button, tuple[int, ...]] = {
    Button.LEFT: (pygame.K_LEFT, pygame.K_a),
    Button.RIGHT: (pygame.K_RIGHT, pygame.K_d),
    Button.UP: (pygame.K_UP, pygame.K_w),
    Button.DOWN: (pygame.K_DOWN, pygame.K_s),
    Button.ACTION: (pygame.K_SPACE,),
    Button.JUMP: (pygame.K_j,),
}


class PygameRenderer:
    """
    Pygame-based renderer for the camp game.

    Renders:
    - Grass ground, paths and the lake
    - Trees and rocks, sorted by depth
    - Task zones with progress bars and check marks
    - The scout (with shadow and hop offset)
    - A HUD bar with the proximity prompt and task checklist

    Also turns keyboard and mouse events into an InputState.
    """

    def __init__(self, config: RendererConfig, game: Game):
        """
        Initialize the renderer.

        Args:
            config: Renderer configuration
            game: The game whose map and character sizes are drawn
        """
        self.config = config
        self.window_width = config.window_width
        self.window_height = config.window_height
        self.hud_height = config.hud_height
        self.world_width = game.width
        self.world_height = game.height

        # Initialize Pygame
        pygame.init()
        pygame.display.set_caption("Scout Camp")

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()

        # Fonts
        self.font_large = pygame.font.Font(None, 40)
        self.font_medium = pygame.font.Font(None, 26)
        self.font_small = pygame.font.Font(None, 20)
        self.font_emoji = pygame.font.SysFont("notocoloremoji,segoeuiemoji,applecoloremoji", 24)

        self.camera = Camera.fit(
            self.window_width,
            self.window_height - self.hud_height,
            self.world_width,
            self.world_height,
            top=self.hud_height,
        )

        # Everything on the map is drawn in map units, then scaled once
        self._world_surface = pygame.Surface((self.world_width, self.world_height))
        self._overlay_surface = pygame.Surface((self.world_width, self.world_height), pygame.SRCALPHA)
        self._hud_surface = pygame.Surface((self.window_width, self.hud_height))

        ground_seed = game.seed if game.seed is not None else 0
        self._ground = GroundTexture(
            self.world_width, self.world_height, ground_seed, config.ground_resolution
        ).to_surface(self.world_width, self.world_height)

        character = game.character
        self.character_visual: VisualProvider = load_character_visual(
            config.sprite_path, int(character.width), int(character.height)
        )

        self._pending_target: tuple[float, float] | None = None
        self.paused = False
        # Frames since the win, for the banner animation
        self._win_frames = 0
        self._frame = 0

        logger.debug(
            "Window %dx%d, map scale %.2f, visual %s",
            self.window_width,
            self.window_height,
            self.camera.scale,
            type(self.character_visual).__name__,
        )

    def handle_events(self) -> bool:
        """
        Handle Pygame events.

        Returns:
            False if the window should close, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key == pygame.K_p:
                    self.paused = not self.paused
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

        return True

    def _handle_click(self, screen_pos: tuple[int, int]) -> None:
        """Convert a click to map coordinates and queue it as a target."""
        if screen_pos[1] < self.hud_height:
            return
        world_x, world_y = self.camera.screen_to_world(*screen_pos)
        # The game clamps to the map; ignore clicks well outside it
        margin_x = self.world_width * 0.1
        margin_y = self.world_height * 0.1
        if point_in_rect(
            world_x, world_y,
            -margin_x, -margin_y,
            self.world_width + 2 * margin_x, self.world_height + 2 * margin_y,
        ):
            self._pending_target = (world_x, world_y)

    def poll_input(self) -> InputState:
        """Snapshot held buttons plus any click since the last poll."""
        pressed = pygame.key.get_pressed()
        held = frozenset(
            button
            for button, keys in KEY_BINDINGS.items()
            if any(pressed[key] for key in keys)
        )
        target, self._pending_target = self._pending_target, None
        return InputState(held=held, target=target)

    def render(self, game: Game) -> None:
        """
        Render the current state of the game.

        Args:
            game: The game to render (read only)
        """
        self._frame += 1
        self.screen.fill(colors.BG_DARK)

        self._render_world(game)
        self._render_hud(game)

        scaled = pygame.transform.smoothscale(
            self._world_surface,
            (self.camera.length(self.world_width), self.camera.length(self.world_height)),
        )
        self.screen.blit(scaled, (self.camera.offset_x, self.camera.offset_y))
        self.screen.blit(self._hud_surface, (0, 0))

        if game.is_won:
            self._win_frames += 1
            self._render_win_banner(game)
        elif self.paused:
            self._render_banner("Paused", "Press P to resume")

        pygame.display.flip()

    def _render_world(self, game: Game) -> None:
        """Render ground, scenery, tasks and the character in map units."""
        surface = self._world_surface
        surface.blit(self._ground, (0, 0))

        self._render_paths(game.environment)
        self._render_lake(game.environment)

        # Draw order follows the base of each object
        scenery: list[tuple[float, Tree | Rock]] = [
            (rock.y, rock) for rock in game.environment.rocks
        ] + [(tree.y + tree.height / 2, tree) for tree in game.environment.trees]
        scenery.sort(key=lambda item: item[0])
        for _, obj in scenery:
            if isinstance(obj, Tree):
                self._render_tree(obj)
            else:
                self._render_rock(obj)

        self._render_tasks(game.task_manager)
        self._render_character(game.character)

    def _render_paths(self, environment: Environment) -> None:
        for path in environment.paths:
            color = colors.PATH_MAIN if path.type is PathType.MAIN else colors.PATH_SECONDARY
            pygame.draw.lines(self._world_surface, color, False, path.points, int(path.width))
            # Round the joints
            for point in path.points:
                pygame.draw.circle(self._world_surface, color, point, path.width / 2)

    def _render_lake(self, environment: Environment) -> None:
        lake = environment.lake
        rings = 8
        for i in range(rings):
            t = i / (rings - 1)
            radius = lake.radius * (1 - t * 0.85)
            color = colors.lerp_color(colors.LAKE_DEEP, colors.LAKE_SHALLOW, t)
            pygame.draw.circle(self._world_surface, color, (lake.x, lake.y), radius)

    def _render_tree(self, tree: Tree) -> None:
        left, top, width, height = tree.bounds
        surface = self._world_surface

        # Shadow at the foot of the trunk
        self._overlay_surface.fill((0, 0, 0, 0))
        pygame.draw.ellipse(
            self._overlay_surface,
            colors.SHADOW,
            pygame.Rect(tree.x - width / 2, top + height - 10, width, 16),
        )
        surface.blit(self._overlay_surface, (0, 0))

        trunk_width = width / 5
        pygame.draw.rect(
            surface,
            colors.TRUNK,
            pygame.Rect(tree.x - trunk_width / 2, top + height * 0.55, trunk_width, height * 0.45),
        )

        crown = colors.TREE_CROWNS[tree.variant % len(colors.TREE_CROWNS)]
        pygame.draw.circle(surface, crown, (tree.x, top + height * 0.35), width / 2)
        pygame.draw.circle(
            surface,
            colors.lerp_color(crown, (255, 255, 255), 0.15),
            (tree.x - width / 8, top + height * 0.28),
            width / 4,
        )

    def _render_rock(self, rock: Rock) -> None:
        # Irregular polygon turned by the rock's rotation
        points = []
        for i in range(7):
            angle = rock.rotation + i * 2 * math.pi / 7
            radius = rock.size * (0.8 + 0.2 * math.sin(i * 2.3))
            points.append((rock.x + math.cos(angle) * radius, rock.y + math.sin(angle) * radius * 0.7))
        pygame.draw.polygon(self._world_surface, colors.ROCK, points)
        pygame.draw.circle(
            self._world_surface,
            colors.ROCK_HIGHLIGHT,
            (rock.x - rock.size / 4, rock.y - rock.size / 5),
            rock.size / 4,
        )

    def _render_tasks(self, task_manager: TaskManager) -> None:
        overlay = self._overlay_surface
        overlay.fill((0, 0, 0, 0))

        if self.config.show_task_zones:
            for task in task_manager:
                color = colors.get_zone_color(task.is_completed, task.in_progress)
                pygame.draw.circle(overlay, color, (task.x, task.y), task.interaction_radius)

        # Pulse the ring of the task the scout can start right now
        focused = task_manager.focused_task
        if focused is not None and not focused.is_completed and not focused.in_progress:
            cycle = (self._frame % 60) / 30
            pulse = ease_in_out(cycle if cycle <= 1 else 2 - cycle)
            alpha = int(lerp(60, 200, pulse))
            pygame.draw.circle(
                overlay,
                (*colors.TEXT_PRIMARY, alpha),
                (focused.x, focused.y),
                focused.interaction_radius,
                2,
            )

        for task in task_manager:
            if task.in_progress:
                self._render_progress_bar(overlay, task)

        self._world_surface.blit(overlay, (0, 0))

        for task in task_manager:
            icon = self.font_emoji.render(task.emoji, True, colors.TEXT_PRIMARY)
            self._world_surface.blit(icon, icon.get_rect(center=(task.x, task.y)))
            if task.is_completed:
                pygame.draw.lines(
                    self._world_surface,
                    colors.CHECKMARK,
                    False,
                    [(task.x - 6, task.y - 22), (task.x - 1, task.y - 17), (task.x + 7, task.y - 27)],
                    3,
                )

    def _render_progress_bar(self, surface: pygame.Surface, task: Task) -> None:
        bar_width = 40
        bar_height = 6
        left = task.x - bar_width / 2
        top = task.y + 20
        pygame.draw.rect(surface, colors.PROGRESS_TRACK, pygame.Rect(left, top, bar_width, bar_height))
        pygame.draw.rect(
            surface,
            colors.PROGRESS_FILL,
            pygame.Rect(left, top, bar_width * task.progress, bar_height),
        )

    def _render_character(self, character: Character) -> None:
        # Shadow stays on the ground while hopping
        self._overlay_surface.fill((0, 0, 0, 0))
        pygame.draw.ellipse(
            self._overlay_surface,
            colors.SHADOW,
            pygame.Rect(
                character.x + character.width / 2 - 20,
                character.y + character.height - 15,
                40,
                20,
            ),
        )
        self._world_surface.blit(self._overlay_surface, (0, 0))

        frame = self.character_visual.frame(character.animation_state, character.current_frame)
        if character.facing is Facing.LEFT:
            frame = pygame.transform.flip(frame, True, False)
        self._world_surface.blit(frame, (character.x, character.y - character.z))

    def _render_hud(self, game: Game) -> None:
        hud = self._hud_surface
        hud.fill(colors.HUD_BG)
        pygame.draw.line(hud, colors.DIVIDER, (0, self.hud_height - 1), (self.window_width, self.hud_height - 1))

        padding = 15
        tasks = game.task_manager
        title = self.font_medium.render(
            f"Camp tasks: {tasks.completed_count}/{len(tasks)}", True, colors.TEXT_PRIMARY
        )
        hud.blit(title, (padding, padding))

        x = padding
        for task in tasks:
            marker = "[x]" if task.is_completed else ("[~]" if task.in_progress else "[ ]")
            color = colors.TEXT_ACCENT if task.is_completed else colors.TEXT_SECONDARY
            text = self.font_small.render(f"{marker} {task.label}", True, color)
            hud.blit(text, (x, padding + 30))
            x += text.get_width() + 20

        prompt = tasks.prompt or "Arrow keys / WASD to walk, click to go somewhere, SPACE to interact, J to hop"
        prompt_surface = self.font_small.render(prompt, True, colors.TEXT_PRIMARY)
        hud.blit(prompt_surface, (padding, padding + 54))

    def _render_banner(self, title: str, subtitle: str, top: float | None = None) -> None:
        banner = pygame.Surface((self.window_width, 140), pygame.SRCALPHA)
        banner.fill(colors.BANNER_BG)
        title_surface = self.font_large.render(title, True, colors.TEXT_PRIMARY)
        subtitle_surface = self.font_medium.render(subtitle, True, colors.TEXT_SECONDARY)
        banner.blit(title_surface, title_surface.get_rect(center=(self.window_width / 2, 50)))
        banner.blit(subtitle_surface, subtitle_surface.get_rect(center=(self.window_width / 2, 95)))
        if top is None:
            top = (self.window_height - 140) / 2
        self.screen.blit(banner, (0, top))

    def _render_win_banner(self, game: Game) -> None:
        seconds = game.stats.elapsed_ms / 1000.0
        minutes, secs = divmod(int(seconds), 60)
        # Drops in from above the window with a small overshoot
        t = min(1.0, self._win_frames / 45)
        top = lerp(-140, (self.window_height - 140) / 2, ease_out_back(t))
        self._render_banner(
            "Well done! Every camp task is complete.",
            f"Finished in {minutes}:{secs:02d}. Press ESC to leave the camp.",
            top,
        )

    def tick(self) -> float:
        """
        Advance the renderer clock and return delta time.

        Returns:
            Time elapsed since last tick in seconds.
        """
        return self.clock.tick(self.config.target_fps) / 1000.0

    def cleanup(self) -> None:
        """Clean up Pygame resources."""
        pygame.quit()
