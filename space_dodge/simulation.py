"""Per-frame simulation: entity ordering, spawning, collisions, scoring and ramp.

``Simulation`` owns every entity collection and is driven from outside: the
caller invokes ``step`` once per display refresh and stops when it returns
``GameState.GAME_OVER``. Drawing is optional so the step can run headless.
"""

from __future__ import annotations

import enum
import logging
import random
from typing import Any, Callable, Optional, Protocol

import pygame

from .config import (
    BG_PARTICLE_COUNT,
    COL_BACKGROUND,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    GRAVITY,
    HIGH_SCORE_KEY,
    OBSTACLE_BASE_SPEED,
    PLAYER_SIZE,
    PLAYER_X,
    RANK_LOADING,
    SPAWN_INTERVAL_MS,
    SPEED_CAP,
    SPEED_RAMP_INTERVAL,
    SPEED_STEP,
    THRUST,
)
from .entities import Obstacle, Particle, Player, make_background_particles, make_exhaust_particle
from .leaderboard import RankResult, format_rank
from .spawner import spawn_wave
from .utils import boxes_overlap

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class RankSubmitter(Protocol):
    def submit_async(
        self, score: int, callback: Callable[[Optional[RankResult]], None]
    ) -> Any: ...


class GameState(enum.Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class Simulation:
    """Game state and the single-frame step function.

    The store and leaderboard collaborators are optional.
    """

    def __init__(
        self,
        width: float = FIELD_WIDTH,
        height: float = FIELD_HEIGHT,
        rng: Optional[random.Random] = None,
        store: Optional[ScoreStore] = None,
        leaderboard: Optional[RankSubmitter] = None,
        high_score: int = 0,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.store = store
        self.leaderboard = leaderboard

        self.player = Player(PLAYER_X, height / 2 - PLAYER_SIZE / 2, PLAYER_SIZE, GRAVITY, THRUST)
        self.obstacles: list[Obstacle] = []
        self.player_particles: list[Particle] = []
        self.bg_particles = make_background_particles(BG_PARTICLE_COUNT, width, height, self.rng)

        self.high_score = high_score
        self.spawn_interval_ms = float(SPAWN_INTERVAL_MS)
        self.clock_ms = 0.0
        self.runs = 0
        self.start()

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def start(self) -> None:
        """Begin a fresh run; also serves as the restart request."""
        self.state = GameState.RUNNING
        self.is_boosting = False
        self.score = 0
        self.obstacles = []
        self.player_particles = []
        self.player.reset()
        self.obstacle_speed = OBSTACLE_BASE_SPEED
        self.last_spawn_ms = self.clock_ms
        self.rank_text = ""
        self.runs += 1
        logger.debug("Run %d started", self.runs)

    def set_boosting(self, active: bool) -> None:
        if self.game_over:
            return
        self.is_boosting = active

    def step(self, dt_ms: float, surface: Optional[pygame.Surface] = None) -> GameState:
        """Advance one frame.

        Entities are drawn in their previous-frame state before this frame's
        physics runs, so the picture lags the simulation by one frame.
        """
        if self.game_over:
            return self.state
        self.clock_ms += dt_ms

        if surface is not None:
            surface.fill(COL_BACKGROUND)
        self._handle_bg_particles(surface)
        self._handle_player_particles(surface)
        if surface is not None:
            self.player.draw(surface)
            for obs in self.obstacles:
                obs.draw(surface)

        self.player.update(self.is_boosting, self.height)
        self.player_particles.append(make_exhaust_particle(self.player, self.rng))
        self._handle_obstacles()
        if self.check_collision():
            self.end_game()
            return self.state

        self.score += 1
        self._ramp_speed()
        return self.state

    def _handle_bg_particles(self, surface: Optional[pygame.Surface]) -> None:
        for p in self.bg_particles:
            p.update()
            if surface is not None:
                p.draw(surface)
            p.wrap(self.width, self.height, self.rng)

    def _handle_player_particles(self, surface: Optional[pygame.Surface]) -> None:
        alive: list[Particle] = []
        for p in self.player_particles:
            p.update()
            if surface is not None:
                p.draw(surface)
            if not p.faded:
                alive.append(p)
        self.player_particles = alive

    def _handle_obstacles(self) -> None:
        if self.clock_ms - self.last_spawn_ms > self.spawn_interval_ms:
            self.last_spawn_ms = self.clock_ms
            self.obstacles.extend(
                spawn_wave(self.rng, self.width, self.height, self.obstacle_speed, self.score)
            )

        for obs in self.obstacles:
            obs.update()
        self.obstacles = [o for o in self.obstacles if not o.offscreen()]

    def check_collision(self) -> bool:
        player_rect = self.player.collision_rect()
        return any(boxes_overlap(player_rect, obs.collision_rect()) for obs in self.obstacles)

    def _ramp_speed(self) -> None:
        if self.score % SPEED_RAMP_INTERVAL != 0 or self.obstacle_speed >= SPEED_CAP:
            return
        self.obstacle_speed = min(self.obstacle_speed + SPEED_STEP, SPEED_CAP)
        for obs in self.obstacles:
            obs.speed = self.obstacle_speed
        logger.debug("Score %d: obstacle speed now %.1f", self.score, self.obstacle_speed)

    def end_game(self) -> None:
        if self.game_over:
            return
        self.state = GameState.GAME_OVER
        self.is_boosting = False
        logger.info("Game over with score %d", self.score)

        if self.score > self.high_score:
            self.high_score = self.score
            if self.store is not None:
                self.store.set(HIGH_SCORE_KEY, self.high_score)

        if self.leaderboard is not None:
            self.rank_text = RANK_LOADING
            run = self.runs

            def _on_rank(result: Optional[RankResult]) -> None:
                # A restart may have happened while the request was in flight
                if run == self.runs:
                    self.rank_text = format_rank(result)

            self.leaderboard.submit_async(self.score, _on_rank)
