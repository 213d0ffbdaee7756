# main.py
import argparse
import logging
from typing import List, Optional

import pygame  # type: ignore

from .config import Config, DEFAULT_HIGH_SCORE_FILE, FPS, WIDTH, HEIGHT
from .controls import InputHandler
from .game import GameEngine
from .render import Renderer
from .scheduler import PygameScheduler
from .store import JsonFileStore

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="snakegame", description="Classic single-player snake.")
    p.add_argument("--tick-interval", type=float, default=Config.tick_interval,
                   help="seconds between snake moves (default: %(default)s)")
    p.add_argument("--seed", type=int, default=None, help="seed food placement for reproducible runs")
    p.add_argument("--high-score-file", default=str(DEFAULT_HIGH_SCORE_FILE),
                   help="JSON file holding the high score (default: %(default)s)")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        config = Config(tick_interval=args.tick_interval, seed=args.seed)
    except ValueError as e:
        raise SystemExit(f"snakegame: {e}")

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    big_font = pygame.font.SysFont(None, 56)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    scheduler = PygameScheduler()
    engine = GameEngine(JsonFileStore(args.high_score_file), scheduler, config)
    controls = InputHandler(engine)
    renderer = Renderer(screen, font, big_font)
    logger.info("High score file: %s", args.high_score_file)

    running = True
    try:
        while running:
            # 1) input + scheduled ticks, all on this thread
            for event in pygame.event.get():
                if scheduler.dispatch(event):
                    continue
                if not controls.handle_event(event):
                    running = False
                    break

            # 2) render
            renderer.draw(engine.snapshot())
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        engine.close()
        pygame.quit()


if __name__ == "__main__":
    main()
