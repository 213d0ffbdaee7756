# game.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Optional, Tuple
import logging
import random
import threading

from .config import Config, Direction, HIGH_SCORE_KEY
from .scheduler import Scheduler, TickHandle
from .store import PersistenceStore

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ---------- Helpers ----------
def spawn_food(snake: List[Position], board_size: int, rng: random.Random) -> Optional[Position]:
    """Rejection-sample a uniformly random free cell; None once the snake fills the board."""
    occupied = set(snake)
    if len(occupied) >= board_size * board_size:
        return None
    while True:
        fx = rng.randrange(board_size)
        fy = rng.randrange(board_size)
        if (fx, fy) not in occupied:
            return (fx, fy)

def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b

def next_head(head: Position, direction: Direction) -> Position:
    return (head[0] + direction.dx, head[1] + direction.dy)

def in_bounds(pos: Position, board_size: int) -> bool:
    return 0 <= pos[0] < board_size and 0 <= pos[1] < board_size

def starting_snake(board_size: int, length: int) -> List[Position]:
    """Horizontal snake, head at the board centre, body extending left."""
    head_x = board_size // 2
    y = board_size // 2
    # Small boards: shift right so the tail stays on the board.
    if head_x - (length - 1) < 0:
        head_x = length - 1
    return [(head_x - i, y) for i in range(length)]


# ---------- State ----------
@dataclass
class GameState:
    snake: List[Position]          # head at index 0
    food: Optional[Position]
    direction: Direction
    score: int
    high_score: int
    is_game_over: bool
    is_paused: bool

@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to renderers and listeners."""
    board_size: int
    snake: Tuple[Position, ...]
    food: Optional[Position]
    direction: Direction
    score: int
    high_score: int
    is_game_over: bool
    is_paused: bool

    @property
    def head(self) -> Optional[Position]:
        return self.snake[0] if self.snake else None

def idle_state(high_score: int) -> GameState:
    """State before the first round: nothing on the board, game-over flag set."""
    return GameState(
        snake=[],
        food=None,
        direction=Direction.RIGHT,
        score=0,
        high_score=high_score,
        is_game_over=True,
        is_paused=False,
    )

def new_game_state(config: Config, high_score: int, rng: random.Random) -> GameState:
    snake = starting_snake(config.board_size, config.start_length)
    return GameState(
        snake=snake,
        food=spawn_food(snake, config.board_size, rng),
        direction=Direction.RIGHT,
        score=0,
        high_score=high_score,
        is_game_over=False,
        is_paused=False,
    )

def step_game(state: GameState, board_size: int, rng: random.Random) -> bool:
    """
    Advance the snake by one cell in its current direction.
    Returns True if alive, False on a wall or self collision.
    The state is left untouched on collision. After eating the last free
    cell, food is None and the round cannot continue.
    """
    new_head = next_head(state.snake[0], state.direction)

    # Wall collision
    if not in_bounds(new_head, board_size):
        return False

    # Self collision, checked against the full pre-move body (tail included)
    if new_head in state.snake:
        return False

    # Move / grow
    state.snake.insert(0, new_head)
    if new_head == state.food:
        state.score += 1
        state.food = spawn_food(state.snake, board_size, rng)
    else:
        state.snake.pop()
    return True


# ---------- Engine ----------
Listener = Callable[[Snapshot], None]

@dataclass(eq=False)
class _Subscription:
    listener: Listener
    active: bool = field(default=True)

class GameEngine:
    """
    Authoritative snake simulation.

    Commands (start, toggle_pause, change_direction) and tick all run under
    a single re-entrant lock, so ticks delivered from a timer thread never
    interleave with input. Each command returns the resulting Snapshot, and
    subscribed listeners are called whenever a command changed the state.
    """

    def __init__(
        self,
        store: PersistenceStore,
        scheduler: Scheduler,
        config: Optional[Config] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or Config()
        self.store = store
        self.scheduler = scheduler
        self.rng = rng or random.Random(self.config.seed)

        self._lock = threading.RLock()
        self._subscriptions: List[_Subscription] = []
        self._handle: Optional[TickHandle] = None
        self._generation = 0
        self._writer: Optional[ThreadPoolExecutor] = None
        self._closed = False

        self.state = idle_state(self._load_high_score())

    # ----- Observation -----
    def snapshot(self) -> Snapshot:
        with self._lock:
            s = self.state
            return Snapshot(
                board_size=self.config.board_size,
                snake=tuple(s.snake),
                food=s.food,
                direction=s.direction,
                score=s.score,
                high_score=s.high_score,
                is_game_over=s.is_game_over,
                is_paused=s.is_paused,
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener(snapshot); returns a function that unsubscribes it."""
        sub = _Subscription(listener)
        with self._lock:
            self._subscriptions.append(sub)

        def unsubscribe() -> None:
            with self._lock:
                sub.active = False
                if sub in self._subscriptions:
                    self._subscriptions.remove(sub)

        return unsubscribe

    def _publish(self) -> Snapshot:
        snap = self.snapshot()
        for sub in list(self._subscriptions):
            if not sub.active:
                continue
            try:
                sub.listener(snap)
            except Exception:
                logger.exception("State listener %r failed", sub.listener)
        return snap

    # ----- Commands -----
    def start(self) -> Snapshot:
        with self._lock:
            self._cancel_schedule()
            self.state = new_game_state(self.config, self.state.high_score, self.rng)
            self._generation += 1
            self._handle = self.scheduler.schedule_repeating(
                self.config.tick_interval, partial(self._scheduled_tick, self._generation)
            )
            logger.info("Game started (high score %d)", self.state.high_score)
            return self._publish()

    def toggle_pause(self) -> Snapshot:
        with self._lock:
            self.state.is_paused = not self.state.is_paused
            logger.debug("Paused" if self.state.is_paused else "Resumed")
            return self._publish()

    def change_direction(self, requested: Direction) -> Snapshot:
        with self._lock:
            if self.state.is_paused:
                logger.debug("Ignoring %s while paused", requested.name)
                return self.snapshot()
            if is_opposite(requested, self.state.direction):
                logger.debug("Ignoring reversal %s -> %s", self.state.direction.name, requested.name)
                return self.snapshot()
            if requested is self.state.direction:
                return self.snapshot()
            self.state.direction = requested
            return self._publish()

    def tick(self) -> Snapshot:
        with self._lock:
            if self.state.is_game_over or self.state.is_paused:
                return self.snapshot()
            if not step_game(self.state, self.config.board_size, self.rng):
                self._game_over()
            elif self.state.food is None:
                logger.info("Board full")
                self._game_over()
            return self._publish()

    def close(self) -> None:
        """
        Stop ticking and wait for any pending high-score write. The engine
        stays usable; later high scores are written inline.
        """
        with self._lock:
            self._closed = True
            self._cancel_schedule()
            writer, self._writer = self._writer, None
        if writer is not None:
            writer.shutdown(wait=True)

    # ----- Internals -----
    def _scheduled_tick(self, generation: int) -> None:
        with self._lock:
            # A tick from a replaced or cancelled schedule must not touch the current round.
            if generation != self._generation or self._handle is None:
                return
            self.tick()

    def _cancel_schedule(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _game_over(self) -> None:
        s = self.state
        s.is_game_over = True
        self._cancel_schedule()
        logger.info("Game over: score %d", s.score)
        if s.score > s.high_score:
            s.high_score = s.score
            logger.info("New high score %d", s.high_score)
            self._persist_high_score(s.high_score)

    def _load_high_score(self) -> int:
        try:
            return max(0, int(self.store.get(HIGH_SCORE_KEY)))
        except Exception:
            logger.exception("Could not load high score, starting from 0")
            return 0

    def _persist_high_score(self, score: int) -> None:
        if self.config.persist_in_background and not self._closed:
            if self._writer is None:
                self._writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snakegame-store")
            self._writer.submit(self._write_high_score, score)
        else:
            self._write_high_score(score)

    def _write_high_score(self, score: int) -> None:
        try:
            self.store.set(HIGH_SCORE_KEY, score)
        except Exception:
            logger.exception("Failed to persist high score %d", score)
