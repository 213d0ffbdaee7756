import pygame
import pytest

from snakegame.config import Direction
from snakegame.controls import InputHandler, direction_from_drag


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def press(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


def release(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=pos)


class TestDirectionFromDrag:
    @pytest.mark.parametrize(
        "dx, dy, expected",
        [
            (-50, 10, Direction.LEFT),
            (50, -10, Direction.RIGHT),
            (10, -50, Direction.UP),
            (-10, 50, Direction.DOWN),
        ],
    )
    def test_dominant_axis_wins(self, dx, dy, expected):
        assert direction_from_drag(dx, dy) is expected

    def test_diagonal_tie_is_vertical(self):
        assert direction_from_drag(30, 30) is Direction.DOWN

    def test_short_drag_is_a_tap(self):
        assert direction_from_drag(10, 5) is None
        assert direction_from_drag(5, 5, min_distance=5) is Direction.DOWN


class TestInputHandler:
    def test_quit_event_stops(self, engine):
        assert InputHandler(engine).handle_event(pygame.event.Event(pygame.QUIT)) is False

    def test_escape_stops(self, engine):
        assert InputHandler(engine).handle_event(key(pygame.K_ESCAPE)) is False

    def test_enter_starts_from_game_over(self, engine):
        InputHandler(engine).handle_event(key(pygame.K_RETURN))
        assert engine.snapshot().is_game_over is False

    def test_enter_ignored_mid_game(self, started):
        started.tick()
        InputHandler(started).handle_event(key(pygame.K_RETURN))
        assert started.snapshot().head == (11, 10)

    def test_space_pauses_only_while_playing(self, engine):
        handler = InputHandler(engine)
        handler.handle_event(key(pygame.K_SPACE))
        assert engine.snapshot().is_paused is False
        engine.start()
        handler.handle_event(key(pygame.K_SPACE))
        assert engine.snapshot().is_paused is True

    @pytest.mark.parametrize(
        "k, expected",
        [(pygame.K_UP, Direction.UP), (pygame.K_s, Direction.DOWN), (pygame.K_d, Direction.RIGHT)],
    )
    def test_keys_change_direction(self, started, k, expected):
        assert InputHandler(started).handle_event(key(k)) is True
        assert started.snapshot().direction is expected

    def test_swipe_changes_direction(self, started):
        handler = InputHandler(started)
        handler.handle_event(press((200, 200)))
        handler.handle_event(release((205, 120)))
        assert started.snapshot().direction is Direction.UP

    def test_tap_does_not_change_direction(self, started):
        handler = InputHandler(started)
        handler.handle_event(press((200, 200)))
        handler.handle_event(release((204, 190)))
        assert started.snapshot().direction is Direction.RIGHT

    def test_swipe_ignored_while_paused(self, started):
        started.toggle_pause()
        handler = InputHandler(started)
        handler.handle_event(press((200, 200)))
        handler.handle_event(release((200, 300)))
        assert started.snapshot().direction is Direction.RIGHT

    def test_release_without_press_is_ignored(self, started):
        InputHandler(started).handle_event(release((0, 300)))
        assert started.snapshot().direction is Direction.RIGHT
