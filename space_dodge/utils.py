"""Geometry and drawing utility functions used across the game."""

from __future__ import annotations

from typing import NamedTuple

import pygame


class Box(NamedTuple):
    """Axis-aligned rectangle with float coordinates."""

    x: float
    y: float
    w: float
    h: float


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def inset_box(box: Box, padding: float) -> Box:
    """Shrink box by padding on every side, keeping it centered."""
    return Box(box.x + padding, box.y + padding, box.w - padding * 2, box.h - padding * 2)


def boxes_overlap(a: Box, b: Box) -> bool:
    """True if the two boxes overlap on both axes (touching edges do not count)."""
    return a.x < b.x + b.w and a.x + a.w > b.x and a.y < b.y + b.h and a.y + a.h > b.y


def draw_alpha_circle(
    surf: pygame.Surface,
    color: tuple[int, int, int],
    center: tuple[float, float],
    radius: float,
    alpha: float,
) -> None:
    """Draw a filled circle blended onto surf at alpha in [0, 1]."""
    a = int(clamp(alpha, 0.0, 1.0) * 255)
    if a <= 0 or radius <= 0:
        return
    d = max(2, int(radius * 2) + 2)
    s = pygame.Surface((d, d), pygame.SRCALPHA)
    pygame.draw.circle(s, (*color, a), (d // 2, d // 2), max(1, int(round(radius))))
    surf.blit(s, (int(center[0]) - d // 2, int(center[1]) - d // 2))
