"""Window, input mapping, HUD and the frame driver for Space Dodge."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import pygame

from .config import (
    COL_BUTTON,
    COL_TEXT,
    COL_TEXT_DIM,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    FPS,
    HIGH_SCORE_FILE,
    HIGH_SCORE_KEY,
    LOG_LEVEL,
)
from .leaderboard import LeaderboardClient
from .simulation import GameState, RankSubmitter, ScoreStore, Simulation
from .storage import JsonStore

logger = logging.getLogger(__name__)

BOOST_START_EVENTS = (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN)
BOOST_END_EVENTS = (pygame.KEYUP, pygame.MOUSEBUTTONUP)
RESTART_KEYS = (pygame.K_r, pygame.K_RETURN)


def read_high_score(store: ScoreStore) -> int:
    """Stored high score, or 0 when missing or not a number."""
    value = store.get(HIGH_SCORE_KEY, 0)
    if value is None:
        return 0
    try:
        score = int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring stored high score %r", value)
        return 0
    return max(0, score)


class Game:
    """Top-level controller: owns the window and drives the simulation."""

    def __init__(
        self,
        store: Optional[ScoreStore] = None,
        leaderboard: Optional[RankSubmitter] = None,
        sim: Optional[Simulation] = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((FIELD_WIDTH, FIELD_HEIGHT))
        pygame.display.set_caption("Space Dodge")
        self.clock = pygame.time.Clock()
        self.font_big = pygame.font.SysFont(None, 64)
        self.font_small = pygame.font.SysFont(None, 28)

        if sim is None:
            store = store if store is not None else JsonStore(HIGH_SCORE_FILE)
            leaderboard = leaderboard if leaderboard is not None else LeaderboardClient()
            sim = Simulation(
                store=store, leaderboard=leaderboard, high_score=read_high_score(store)
            )
        self.sim = sim

        self.restart_button = pygame.Rect(0, 0, 180, 44)
        self.restart_button.center = (FIELD_WIDTH // 2, FIELD_HEIGHT // 2 + 90)
        # Last frame drawn before the game ended; shown under the game-over panel
        self.frozen: Optional[pygame.Surface] = None

    def restart(self) -> None:
        self.frozen = None
        self.sim.start()

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            pygame.event.post(pygame.event.Event(pygame.QUIT))
            return
        if self.sim.game_over:
            if event.type == pygame.KEYDOWN and event.key in RESTART_KEYS:
                self.restart()
            elif (
                event.type == pygame.MOUSEBUTTONDOWN
                and event.button == 1
                and self.restart_button.collidepoint(event.pos)
            ):
                self.restart()
            return

        if event.type in BOOST_START_EVENTS:
            self.sim.set_boosting(True)
        elif event.type in BOOST_END_EVENTS:
            self.sim.set_boosting(False)

    def tick(self, dt_ms: float) -> GameState:
        """Advance one display refresh: step while running, then draw the HUD."""
        if not self.sim.game_over:
            state = self.sim.step(dt_ms, self.screen)
            if state is GameState.GAME_OVER:
                self.frozen = self.screen.copy()
        elif self.frozen is not None:
            self.screen.blit(self.frozen, (0, 0))
        self._draw_ui(self.screen)
        return self.sim.state

    def _draw_ui(self, surf: pygame.Surface) -> None:
        score_text = self.font_small.render(f"Score: {self.sim.score}", True, COL_TEXT)
        surf.blit(score_text, score_text.get_rect(topleft=(12, 10)))
        best_text = self.font_small.render(f"High Score: {self.sim.high_score}", True, COL_TEXT_DIM)
        surf.blit(best_text, best_text.get_rect(topright=(FIELD_WIDTH - 12, 10)))

        if self.sim.game_over:
            title = self.font_big.render("Game Over", True, (250, 230, 230))
            surf.blit(title, title.get_rect(center=(FIELD_WIDTH // 2, FIELD_HEIGHT // 2 - 40)))
            if self.sim.rank_text:
                rank = self.font_small.render(self.sim.rank_text, True, COL_TEXT_DIM)
                surf.blit(rank, rank.get_rect(center=(FIELD_WIDTH // 2, FIELD_HEIGHT // 2 + 20)))
            pygame.draw.rect(surf, COL_BUTTON, self.restart_button, border_radius=6)
            label = self.font_small.render("Restart (R)", True, COL_TEXT)
            surf.blit(label, label.get_rect(center=self.restart_button.center))

    def run(self) -> None:
        while True:
            dt = self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    sys.exit(0)
                self.handle_input(event)

            self.tick(dt)
            pygame.display.flip()


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> None:
    setup_logging()
    logger.info("Starting Space Dodge")
    Game().run()
