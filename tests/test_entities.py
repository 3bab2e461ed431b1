import math
import os
import random

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
from space_dodge.config import (
    COL_HULL,
    COL_OBSTACLE,
    CURVE_AMPLITUDE,
    CURVE_PHASE_SPEED,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    PREDICTION_STEPS,
)
from space_dodge.entities import (
    Obstacle,
    ObstacleKind,
    Particle,
    Player,
    make_background_particles,
    make_exhaust_particle,
)


def setup_module(module: object) -> None:
    pygame.init()


def teardown_module(module: object) -> None:
    pygame.quit()


def test_particle_fades_to_exactly_zero() -> None:
    p = Particle(10, 10, 2, (255, 255, 255), 1, 0.5)
    prev = p.alpha
    updates = 0
    while p.alpha > 0:
        p.update()
        updates += 1
        assert p.alpha >= 0
        if p.alpha > 0:
            assert math.isclose(prev - p.alpha, 0.001, abs_tol=1e-9)
        prev = p.alpha
        assert updates <= 1001
    assert p.alpha == 0
    assert p.faded
    # Stays at zero
    p.update()
    assert p.alpha == 0


def test_particle_moves_by_velocity() -> None:
    p = Particle(10, 10, 2, (255, 255, 255), -1.5, 0.5)
    p.update()
    assert p.x == 8.5
    assert p.y == 10.5


def test_background_particle_wraps() -> None:
    rng = random.Random(3)
    p = Particle(-3, 10, 2, (255, 255, 255), -1, 0)
    p.alpha = 0.4
    p.wrap(FIELD_WIDTH, FIELD_HEIGHT, rng)
    assert p.x == FIELD_WIDTH + 2
    assert 0 <= p.y < FIELD_HEIGHT
    assert p.alpha == 1.0

    # Still partly visible: untouched
    q = Particle(-1, 10, 2, (255, 255, 255), -1, 0)
    q.wrap(FIELD_WIDTH, FIELD_HEIGHT, rng)
    assert q.x == -1


def test_background_particles_drift_left() -> None:
    particles = make_background_particles(50, FIELD_WIDTH, FIELD_HEIGHT, random.Random(1))
    assert len(particles) == 50
    for p in particles:
        assert 0 <= p.x < FIELD_WIDTH
        assert 0 <= p.y < FIELD_HEIGHT
        assert p.radius > 0
        assert p.dx < 0 and p.dy == 0


def test_exhaust_particle_leaves_the_tail() -> None:
    player = Player(50, 285, 30, 0.2, -0.4)
    p = make_exhaust_particle(player, random.Random(2))
    assert p.x == player.x
    assert player.y + player.h * 0.75 - 5 <= p.y <= player.y + player.h * 0.75 + 5
    assert 1 <= p.radius <= 3
    assert p.dx < -1 + 1e-9


def test_obstacle_drifts_left_and_goes_offscreen() -> None:
    obs = Obstacle.plain(100, 50, 50, 5)
    obs.update()
    assert obs.x == 95
    assert obs.y == 50
    assert not obs.offscreen()
    obs.x = -50.5
    assert obs.offscreen()


def test_obstacle_collision_rect_is_padded() -> None:
    for obs in (Obstacle.plain(100, 100, 50, 5), Obstacle.curved(100, 100, 50, 5, random.Random(0))):
        rect = obs.collision_rect()
        assert rect.w == obs.w - 10
        assert rect.h == obs.h - 10
        assert rect.x + rect.w / 2 == obs.x + obs.w / 2
        assert rect.y + rect.h / 2 == obs.y + obs.h / 2


def test_curved_obstacle_oscillates() -> None:
    obs = Obstacle.curved(800, 300, 50, 5, random.Random(4))
    assert obs.kind is ObstacleKind.CURVED
    assert abs(obs.phase_speed) == CURVE_PHASE_SPEED
    for _ in range(10):
        obs.update()
    assert obs.x == 750
    assert math.isclose(obs.phase, obs.phase_speed * 10)
    assert math.isclose(obs.y, 300 + CURVE_AMPLITUDE * math.sin(obs.phase))
    # Hitbox follows the current position
    assert math.isclose(obs.collision_rect().y, obs.y + 5)


def test_curved_phase_direction_is_random() -> None:
    rng = random.Random(11)
    signs = {Obstacle.curved(800, 300, 50, 5, rng).phase_speed > 0 for _ in range(40)}
    assert signs == {True, False}


def test_forecast_is_visual_only() -> None:
    obs = Obstacle.curved(600, 300, 50, 6, random.Random(5))
    obs.update()
    x, y, phase = obs.x, obs.y, obs.phase
    xs, ys, alphas = obs.forecast()
    assert len(xs) == len(ys) == len(alphas) == PREDICTION_STEPS
    assert math.isclose(xs[0], x - 6 + 25)
    assert math.isclose(ys[0], 300 + CURVE_AMPLITUDE * math.sin(phase + obs.phase_speed) + 25)
    assert alphas[0] < 1 and math.isclose(alphas[0], 1 - 1 / PREDICTION_STEPS)
    assert all(alphas[i] > alphas[i + 1] for i in range(len(alphas) - 1))
    assert alphas[-1] >= 0
    # Unchanged by forecasting
    assert (obs.x, obs.y, obs.phase) == (x, y, phase)


def test_plain_obstacle_has_no_forecast() -> None:
    xs, ys, alphas = Obstacle.plain(100, 100, 50, 5).forecast()
    assert len(xs) == len(ys) == len(alphas) == 0


def test_obstacle_draw() -> None:
    surf = pygame.Surface((FIELD_WIDTH, FIELD_HEIGHT))
    Obstacle.plain(100, 100, 50, 5).draw(surf)
    assert surf.get_at((120, 120))[:3] == COL_OBSTACLE
    Obstacle.curved(400, 300, 50, 5, random.Random(6)).draw(surf)


def test_player_gravity_and_boost() -> None:
    player = Player(50, 285, 30, 0.2, -0.4)
    assert player.w == 45 and player.h == 30
    player.update(False, FIELD_HEIGHT)
    assert math.isclose(player.velocity, 0.2)
    assert math.isclose(player.y, 285.2)
    # Thrust stacks on top of gravity
    player.update(True, FIELD_HEIGHT)
    assert math.isclose(player.velocity, 0.0)
    player.update(True, FIELD_HEIGHT)
    assert math.isclose(player.velocity, -0.2)


def test_player_is_clamped_to_field() -> None:
    player = Player(50, 285, 30, 0.2, -0.4)
    for _ in range(300):
        player.update(False, FIELD_HEIGHT)
        assert 0 <= player.y <= FIELD_HEIGHT - player.h
    assert player.y == FIELD_HEIGHT - player.h
    assert player.velocity == 0

    for _ in range(300):
        player.update(True, FIELD_HEIGHT)
        assert 0 <= player.y <= FIELD_HEIGHT - player.h
    assert player.y == 0
    assert player.velocity == 0


def test_player_reset_and_hitbox() -> None:
    player = Player(50, 285, 30, 0.2, -0.4)
    for _ in range(20):
        player.update(True, FIELD_HEIGHT)
    player.reset()
    assert player.y == 285
    assert player.velocity == 0
    rect = player.collision_rect()
    assert (rect.x, rect.y, rect.w, rect.h) == (50, 285, 45, 30)


def test_player_draw() -> None:
    surf = pygame.Surface((FIELD_WIDTH, FIELD_HEIGHT))
    surf.fill((0, 0, 0))
    Player(50, 285, 30, 0.2, -0.4).draw(surf)
    # Inside the hull, below the canopy
    assert surf.get_at((60, 308))[:3] == COL_HULL
