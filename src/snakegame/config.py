from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

# ----- Window & grid -----
BOARD_SIZE = 20
CELL_SIZE = 24
HUD_HEIGHT = 56
WIDTH = BOARD_SIZE * CELL_SIZE
HEIGHT = BOARD_SIZE * CELL_SIZE + HUD_HEIGHT
FPS = 60

# ----- Colors -----
BG        = (26, 26, 26)
CELL_BG   = (38, 38, 38)
BORDER    = (240, 240, 240)
GREEN     = (80, 200, 80)
HEAD      = (120, 240, 120)
RED       = (200, 70, 70)
TEXT      = (240, 240, 250)
TEXT_DIM  = (150, 150, 160)
START_BTN = (80, 200, 80)

# ----- Persistence -----
HIGH_SCORE_KEY = "HighScore"
DEFAULT_HIGH_SCORE_FILE = Path.home() / ".snakegame" / "highscore.json"


# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


# ----- Tunables -----
@dataclass
class Config:
    board_size: int = BOARD_SIZE
    tick_interval: float = 0.15    # seconds between ticks
    start_length: int = 3
    seed: Optional[int] = None     # None -> nondeterministic food placement
    persist_in_background: bool = True

    def __post_init__(self):
        if self.start_length < 1:
            raise ValueError(f"start_length must be >= 1, got {self.start_length}")
        if self.board_size < self.start_length + 1:
            raise ValueError(
                f"board_size {self.board_size} too small for a snake of length {self.start_length}"
            )
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
