"""Grid snake: a tick-driven game engine with pygame front end."""

from .config import Config, Direction
from .game import GameEngine, GameState, Snapshot
from .store import JsonFileStore, MemoryStore

__all__ = ["Config", "Direction", "GameEngine", "GameState", "Snapshot", "JsonFileStore", "MemoryStore"]
