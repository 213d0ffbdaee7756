# controls.py
from __future__ import annotations

from math import hypot
from typing import Dict, Optional, Tuple
import logging

import pygame  # type: ignore

from .config import Direction
from .game import GameEngine

logger = logging.getLogger(__name__)

MIN_DRAG_DISTANCE = 20  # pixels; shorter drags count as taps

KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}
PAUSE_KEYS = (pygame.K_SPACE, pygame.K_p)
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_r)
QUIT_KEYS = (pygame.K_ESCAPE,)


def direction_from_drag(dx: float, dy: float, min_distance: float = MIN_DRAG_DISTANCE) -> Optional[Direction]:
    """
    Map a completed drag to a direction: the dominant axis wins, its sign
    picks the side. Returns None for drags shorter than min_distance.
    """
    if hypot(dx, dy) < min_distance:
        return None
    if abs(dx) > abs(dy):
        return Direction.LEFT if dx < 0 else Direction.RIGHT
    return Direction.UP if dy < 0 else Direction.DOWN


class InputHandler:
    """Turns pygame events into engine commands."""

    def __init__(self, engine: GameEngine, min_drag_distance: float = MIN_DRAG_DISTANCE):
        self.engine = engine
        self.min_drag_distance = min_drag_distance
        self._drag_start: Optional[Tuple[int, int]] = None

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Process one event. Return False to quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            return self._handle_key(event.key)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._drag_start = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._end_drag(event.pos)
        return True

    def _handle_key(self, key: int) -> bool:
        snap = self.engine.snapshot()
        if key in QUIT_KEYS:
            return False
        if key in START_KEYS:
            if snap.is_game_over:
                self.engine.start()
        elif key in PAUSE_KEYS:
            # Pausing only makes sense while a round is running.
            if not snap.is_game_over:
                self.engine.toggle_pause()
        elif key in KEY_DIRECTIONS:
            self.engine.change_direction(KEY_DIRECTIONS[key])
        return True

    def _end_drag(self, pos: Tuple[int, int]) -> None:
        start, self._drag_start = self._drag_start, None
        if start is None:
            return
        if self.engine.snapshot().is_paused:
            return
        direction = direction_from_drag(pos[0] - start[0], pos[1] - start[1], self.min_drag_distance)
        if direction is not None:
            logger.debug("Swipe %s", direction.name)
            self.engine.change_direction(direction)
