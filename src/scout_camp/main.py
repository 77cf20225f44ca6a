"""Main entry point for the Scout Camp game."""

from __future__ import annotations

import argparse
import logging
import time

from .config import Config
from .renderer import PygameRenderer
from .simulation import FixedStepLoop, Game, drive


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Walk around the scout camp and complete every task.")
    parser.add_argument("--seed", type=int, default=None, help="map generation seed")
    parser.add_argument("--sprite", default=None, help="path to the scout sprite sheet")
    parser.add_argument(
        "--collision",
        choices=("bounds", "obstacles"),
        default=None,
        help="block the scout at map edges only, or at obstacles too",
    )
    parser.add_argument("--log-level", default="INFO", help="logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Default configuration with command line overrides applied."""
    config = Config.default()
    if args.seed is not None:
        config.world.seed = args.seed
    if args.sprite is not None:
        config.renderer.sprite_path = args.sprite
    if args.collision is not None:
        config.character.collision = args.collision
    return config


def main(argv: list[str] | None = None) -> None:
    """Run the scout camp game."""
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load configuration
    config = build_config(args)

    # Create game and loop
    loop = FixedStepLoop(config.loop)
    game = Game(config, on_win=lambda _game: loop.pause())

    # Create renderer
    renderer = PygameRenderer(config.renderer, game)

    print("Starting Scout Camp...")
    print(f"  Seed: {game.seed}")
    print(f"  Map size: {game.width}x{game.height}")
    print(f"  Obstacles: {game.environment.obstacle_count} ({len(game.environment.paths)} paths)")
    print(f"  Tasks: {', '.join(task.label for task in game.tasks)}")
    print(f"  Collision: {config.character.collision}")
    print()
    print("Controls:")
    print("  - Arrow keys or WASD to walk")
    print("  - Click on the map to walk there")
    print("  - SPACE near a task to work on it")
    print("  - J to hop")
    print("  - P to pause, ESC to quit")
    print()

    loop.start()

    # Main loop
    running = True
    carried_target: tuple[float, float] | None = None
    while running:
        # Handle input
        running = renderer.handle_events()

        if renderer.paused and loop.is_running:
            loop.pause()
        elif not renderer.paused and not loop.is_running and not game.is_won:
            loop.start()

        # Update simulation in fixed steps
        input_state = renderer.poll_input()
        if input_state.target is None and carried_target is not None:
            input_state = input_state.with_target(carried_target)

        leftover = drive(loop, game, input_state, time.perf_counter() * 1000.0)
        # Clicks made while paused are dropped
        carried_target = leftover.target if loop.is_running else None

        # Render
        renderer.render(game)

        # Tick
        renderer.tick()

    # Cleanup
    renderer.cleanup()
    print(f"Left the camp after {game.stats.tick} ticks, {game.stats.tasks_completed}/{len(game.tasks)} tasks done.")


if __name__ == "__main__":
    main()
