# render.py
from typing import Tuple

import pygame  # type: ignore

from .config import (
    CELL_SIZE, HUD_HEIGHT,
    BG, CELL_BG, BORDER, GREEN, HEAD, RED, TEXT, TEXT_DIM, START_BTN,
)
from .game import Snapshot

Color = Tuple[int, int, int]


# ---------- Helpers ----------
def cell_rect(gx: int, gy: int, inset: int = 0) -> pygame.Rect:
    """Screen rect of a board cell; the board sits below the HUD strip."""
    return pygame.Rect(
        gx * CELL_SIZE + inset,
        HUD_HEIGHT + gy * CELL_SIZE + inset,
        CELL_SIZE - 2 * inset,
        CELL_SIZE - 2 * inset,
    )

def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Color, inset: int = 1) -> None:
    pygame.draw.rect(screen, color, cell_rect(gx, gy, inset))

def draw_overlay(screen: pygame.Surface, alpha: int = 140) -> None:
    # Dim the board with a translucent layer
    w, h = screen.get_size()
    overlay = pygame.Surface((w, h - HUD_HEIGHT), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    screen.blit(overlay, (0, HUD_HEIGHT))

def blit_centered(screen: pygame.Surface, surf: pygame.Surface, center: Tuple[int, int]) -> None:
    screen.blit(surf, surf.get_rect(center=center))


# ---------- Renderer ----------
class Renderer:
    """Draws snapshots onto a pygame surface. Drawing the same snapshot twice gives the same frame."""

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font, big_font: pygame.font.Font):
        self.screen = screen
        self.font = font
        self.big_font = big_font

    def draw(self, snap: Snapshot) -> None:
        self.draw_board(snap)
        self.draw_hud(snap)
        if snap.is_game_over:
            self.draw_game_over(snap)
        elif snap.is_paused:
            self.draw_paused()

    def draw_board(self, snap: Snapshot) -> None:
        self.screen.fill(BG)
        for gy in range(snap.board_size):
            for gx in range(snap.board_size):
                draw_cell(self.screen, gx, gy, CELL_BG)
        # food
        if snap.food is not None:
            pygame.draw.circle(
                self.screen, RED, cell_rect(*snap.food).center, int(CELL_SIZE * 0.4)
            )
        # snake (head last so it stays on top)
        for x, y in snap.snake[1:]:
            draw_cell(self.screen, x, y, GREEN)
        if snap.head is not None:
            draw_cell(self.screen, snap.head[0], snap.head[1], HEAD)
        board = pygame.Rect(0, HUD_HEIGHT, snap.board_size * CELL_SIZE, snap.board_size * CELL_SIZE)
        pygame.draw.rect(self.screen, BORDER, board, width=2)

    def draw_hud(self, snap: Snapshot) -> None:
        score = self.font.render(f"Score: {snap.score}", True, TEXT)
        best = self.font.render(f"High Score: {snap.high_score}", True, TEXT_DIM)
        self.screen.blit(score, (8, 6))
        self.screen.blit(best, (8, 6 + score.get_height()))
        if not snap.is_game_over:
            hint = self.font.render("Space: resume" if snap.is_paused else "Space: pause", True, TEXT_DIM)
            self.screen.blit(hint, hint.get_rect(topright=(self.screen.get_width() - 8, 6)))

    def draw_paused(self) -> None:
        draw_overlay(self.screen)
        w, h = self.screen.get_size()
        blit_centered(self.screen, self.big_font.render("PAUSED", True, TEXT), (w // 2, (h + HUD_HEIGHT) // 2))

    def draw_game_over(self, snap: Snapshot) -> None:
        draw_overlay(self.screen)
        w, h = self.screen.get_size()
        cy = (h + HUD_HEIGHT) // 2

        # The idle screen before the first round has no snake to mourn.
        title = "GAME OVER" if snap.snake else "SNAKE"
        blit_centered(self.screen, self.big_font.render(title, True, TEXT), (w // 2, cy - 40))
        if snap.snake:
            sco = self.font.render(f"Score: {snap.score}", True, TEXT)
            blit_centered(self.screen, sco, (w // 2, cy))

        button = pygame.Rect(0, 0, 200, 40)
        button.center = (w // 2, cy + 48)
        pygame.draw.rect(self.screen, START_BTN, button, border_radius=10)
        blit_centered(self.screen, self.font.render("Press Enter to start", True, BG), button.center)
