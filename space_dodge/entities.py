"""Game entities and rendering helpers.

Contains the particle used for the starfield and the exhaust trail, the
obstacles (plain and curved, tagged by kind), and the player-controlled craft.
"""

from __future__ import annotations

import enum
import math
import random

import numpy as np
import pygame

from .config import (
    COL_CANOPY,
    COL_CURVED,
    COL_ENGINE,
    COL_EXHAUST,
    COL_FORECAST,
    COL_HULL,
    COL_HULL_EDGE,
    COL_OBSTACLE,
    COL_STAR,
    COLLISION_PADDING,
    CURVE_AMPLITUDE,
    CURVE_PHASE_SPEED,
    PARTICLE_FADE,
    PREDICTION_DOT_RADIUS,
    PREDICTION_STEP_GAP,
    PREDICTION_STEPS,
)
from .utils import Box, clamp, draw_alpha_circle, inset_box


class Particle:
    """A point that drifts by a fixed velocity and slowly fades out."""

    def __init__(
        self,
        x: float,
        y: float,
        radius: float,
        color: tuple[int, int, int],
        dx: float,
        dy: float,
    ) -> None:
        self.x = x
        self.y = y
        self.radius = radius
        self.color = color
        self.dx = dx
        self.dy = dy
        self.alpha = 1.0

    @property
    def faded(self) -> bool:
        return self.alpha == 0

    def update(self) -> None:
        self.x += self.dx
        self.y += self.dy
        if self.alpha > PARTICLE_FADE:
            self.alpha -= PARTICLE_FADE
        else:
            self.alpha = 0.0

    def wrap(self, field_width: float, field_height: float, rng: random.Random) -> None:
        """Re-enter from the right edge once fully past the left edge."""
        if self.x + self.radius < 0:
            self.x = field_width + self.radius
            self.y = rng.random() * field_height
            self.alpha = 1.0

    def draw(self, surf: pygame.Surface) -> None:
        draw_alpha_circle(surf, self.color, (self.x, self.y), self.radius, self.alpha)


def make_background_particles(
    count: int, field_width: float, field_height: float, rng: random.Random
) -> list[Particle]:
    particles: list[Particle] = []
    for _ in range(count):
        particles.append(
            Particle(
                rng.random() * field_width,
                rng.random() * field_height,
                rng.uniform(0.2, 1.5),
                COL_STAR,
                -rng.random() * 0.5 - 0.2,
                0.0,
            )
        )
    return particles


def make_exhaust_particle(player: "Player", rng: random.Random) -> Particle:
    # Emitted from the tail, around the lower half of the hull
    y = player.y + player.h / 2 + player.h / 4 + (rng.random() - 0.5) * 10
    return Particle(
        player.x,
        y,
        rng.random() * 2 + 1,
        COL_EXHAUST,
        -rng.random() - 1,
        rng.random() - 0.5,
    )


class ObstacleKind(enum.Enum):
    PLAIN = "plain"
    CURVED = "curved"


class Obstacle:
    """A square hazard drifting left; curved ones also bob on a sine wave.

    Behaviour that differs between kinds is selected by ``kind`` inside
    ``update``, ``forecast`` and ``draw``; everything else is shared.
    """

    def __init__(
        self,
        kind: ObstacleKind,
        x: float,
        y: float,
        w: float,
        h: float,
        speed: float,
        phase_speed: float = 0.0,
    ) -> None:
        self.kind = kind
        self.x = float(x)
        self.y = float(y)
        self.w = float(w)
        self.h = float(h)
        self.speed = float(speed)
        self.color = COL_CURVED if kind is ObstacleKind.CURVED else COL_OBSTACLE
        # Oscillation state (only advanced for curved obstacles)
        self.center_y = float(y)
        self.phase = 0.0
        self.phase_speed = phase_speed
        self.prediction_steps = PREDICTION_STEPS if kind is ObstacleKind.CURVED else 0
        self.step_gap = PREDICTION_STEP_GAP

    @classmethod
    def plain(cls, x: float, y: float, size: float, speed: float) -> "Obstacle":
        return cls(ObstacleKind.PLAIN, x, y, size, size, speed)

    @classmethod
    def curved(
        cls, x: float, y: float, size: float, speed: float, rng: random.Random
    ) -> "Obstacle":
        phase_speed = CURVE_PHASE_SPEED if rng.random() < 0.5 else -CURVE_PHASE_SPEED
        return cls(ObstacleKind.CURVED, x, y, size, size, speed, phase_speed=phase_speed)

    def update(self) -> None:
        self.x -= self.speed
        if self.kind is ObstacleKind.CURVED:
            self.phase += self.phase_speed
            self.y = self.center_y + math.sin(self.phase) * CURVE_AMPLITUDE

    def offscreen(self) -> bool:
        return self.x + self.w < 0

    def bounding_box(self) -> Box:
        return Box(self.x, self.y, self.w, self.h)

    def collision_rect(self) -> Box:
        return inset_box(self.bounding_box(), COLLISION_PADDING)

    def forecast(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Predicted centre positions and fade for the path preview.

        Returns (xs, ys, alphas) for steps 1..prediction_steps; empty for
        plain obstacles. Display only.
        """
        if self.kind is not ObstacleKind.CURVED or self.prediction_steps <= 0:
            empty = np.zeros(0)
            return empty, empty, empty
        idx = np.arange(1, self.prediction_steps + 1, dtype=np.float64)
        future = idx * self.step_gap
        xs = self.x - self.speed * future + self.w / 2
        ys = self.center_y + np.sin(self.phase + self.phase_speed * future) * CURVE_AMPLITUDE + self.h / 2
        alphas = 1.0 - idx / self.prediction_steps
        return xs, ys, alphas

    def draw(self, surf: pygame.Surface) -> None:
        if self.kind is ObstacleKind.CURVED:
            xs, ys, alphas = self.forecast()
            for fx, fy, fa in zip(xs, ys, alphas):
                draw_alpha_circle(surf, COL_FORECAST, (fx, fy), PREDICTION_DOT_RADIUS, fa)
        pygame.draw.rect(surf, self.color, (int(self.x), int(self.y), int(self.w), int(self.h)))


class Player:
    def __init__(self, x: float, y: float, size: float, gravity: float, thrust: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.size = size
        self.w = size * 1.5
        self.h = float(size)
        self.gravity = gravity
        self.thrust = thrust
        self.start_y = float(y)
        self.velocity = 0.0

    def update(self, is_boosting: bool, field_height: float) -> None:
        self.velocity += self.gravity
        if is_boosting:
            self.velocity += self.thrust
        self.y += self.velocity

        bottom = field_height - self.h
        if self.y < 0 or self.y > bottom:
            self.y = clamp(self.y, 0.0, bottom)
            self.velocity = 0.0

    def reset(self) -> None:
        self.y = self.start_y
        self.velocity = 0.0

    def collision_rect(self) -> Box:
        # Exact hitbox; only obstacles get padding
        return Box(self.x, self.y, self.w, self.h)

    def draw(self, surf: pygame.Surface) -> None:
        x, y = self.x, self.y
        ex, ey = x + self.w, y + self.h
        u = self.size / 20.0

        pygame.draw.rect(surf, COL_ENGINE, (int(x + 15 * u), int(y + 9 * u), int(5 * u), int(5 * u)))
        hull = [
            (x, ey),
            (x, ey - 10 * u),
            (x + 3 * u, ey - 8 * u),
            (ex - 5 * u, ey - 8 * u),
            (ex, ey - 5 * u),
            (ex - 5 * u, ey - 2 * u),
            (x + 3 * u, ey - 2 * u),
        ]
        pygame.draw.polygon(surf, COL_HULL, hull)
        pygame.draw.polygon(surf, COL_HULL_EDGE, hull, 2)
        canopy = [
            (x + 5 * u, y + 12 * u),
            (x + 5 * u, y + 5 * u),
            (x + 10 * u, y),
            (x + 20 * u, y),
            (x + 22.5 * u, y + 5 * u),
            (x + 22.5 * u, y + 12 * u),
        ]
        pygame.draw.polygon(surf, COL_CANOPY, canopy, 2)
