"""Obstacle spawn policy: one random roll picks the wave pattern."""

from __future__ import annotations

import random

from .config import CURVE_CHANCE, CURVE_UNLOCK_SCORE
from .entities import Obstacle


def _plain_wave(
    rng: random.Random, x: float, field_height: float, size: float, count: int, speed: float
) -> list[Obstacle]:
    return [Obstacle.plain(x, rng.random() * (field_height - size), size, speed) for _ in range(count)]


def spawn_wave(
    rng: random.Random,
    field_width: float,
    field_height: float,
    speed: float,
    score: int,
) -> list[Obstacle]:
    """Build the obstacles for one spawn tick at the right edge of the field.

    Patterns by roll:
      < 0.2  three medium blocks
      < 0.4  two large blocks
      < 0.6  five small blocks, some curved once the score passes the unlock
      < 0.8  one huge block
      else   one small curved block near the middle
    """
    x = field_width
    roll = rng.random()

    if roll < 0.2:
        return _plain_wave(rng, x, field_height, 50, 3, speed)
    if roll < 0.4:
        return _plain_wave(rng, x, field_height, 100, 2, speed)
    if roll < 0.6:
        size = 25
        wave: list[Obstacle] = []
        for _ in range(5):
            y = rng.random() * (field_height - size)
            if score > CURVE_UNLOCK_SCORE and rng.random() < CURVE_CHANCE:
                wave.append(Obstacle.curved(x, y, size, speed - 1, rng))
            else:
                wave.append(Obstacle.plain(x, y, size, speed))
        return wave
    if roll < 0.8:
        return _plain_wave(rng, x, field_height, 150, 1, speed)

    # Keep the swing inside the field: centre line in the middle half
    y = field_height / 4 + rng.random() * (field_height / 2)
    return [Obstacle.curved(x, y, 50, speed + 1, rng)]
