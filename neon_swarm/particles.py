"""
Particle System
================
Burst emitters, the lightning arc, and particle motion/fade.
"""

import math
import random

from .world import World
from .entities import Particle, Color
from .config import (
    PARTICLE_LIFETIME_BASE, PARTICLE_SPEED_MAX,
    PARTICLE_RADIUS_MIN, PARTICLE_RADIUS_MAX,
    LIGHTNING_SEGMENTS, LIGHTNING_JITTER, LIGHTNING_LIFETIME,
    LIGHTNING_VELOCITY_SCALE, COLOR_UPGRADE_HIGHLIGHT,
)


def spawn_particle(
    world: World,
    x: float, y: float,
    vx: float, vy: float,
    color: Color,
    radius: float = PARTICLE_RADIUS_MIN,
    lifetime: float = PARTICLE_LIFETIME_BASE,
) -> Particle:
    """Spawn a single particle."""
    return world.add(Particle(
        x=x, y=y, radius=radius, color=color,
        vx=vx, vy=vy, lifetime=lifetime
    ))


def spawn_burst(
    world: World,
    x: float, y: float,
    count: int,
    color: Color,
    lifetime: float = PARTICLE_LIFETIME_BASE,
):
    """Spawn `count` particles flying out in random directions."""
    for _ in range(count):
        angle = random.uniform(0, math.pi * 2)
        speed = random.random() * PARTICLE_SPEED_MAX
        radius = random.uniform(PARTICLE_RADIUS_MIN, PARTICLE_RADIUS_MAX)

        spawn_particle(
            world, x, y,
            math.cos(angle) * speed, math.sin(angle) * speed,
            color=color,
            radius=radius,
            lifetime=lifetime
        )


def spawn_lightning_arc(world: World, x1: float, y1: float, x2: float, y2: float):
    """
    Jagged arc between two points.

    The straight line is cut into segments, each joint is jittered, and a
    fast short-lived particle is launched from one joint toward the next.
    """
    dx = x2 - x1
    dy = y2 - y1
    prev_x, prev_y = x1, y1

    for i in range(LIGHTNING_SEGMENTS + 1):
        seg_x = x1 + dx / LIGHTNING_SEGMENTS * i
        seg_y = y1 + dy / LIGHTNING_SEGMENTS * i
        joint_x = seg_x + (random.random() - 0.5) * LIGHTNING_JITTER
        joint_y = seg_y + (random.random() - 0.5) * LIGHTNING_JITTER

        spawn_particle(
            world, prev_x, prev_y,
            (joint_x - prev_x) * LIGHTNING_VELOCITY_SCALE,
            (joint_y - prev_y) * LIGHTNING_VELOCITY_SCALE,
            color=COLOR_UPGRADE_HIGHLIGHT,
            radius=1,
            lifetime=LIGHTNING_LIFETIME
        )
        prev_x, prev_y = joint_x, joint_y


def update_particle(world: World, particle: Particle, dt: float):
    """Drift and age a particle; flag it once its lifetime is spent."""
    particle.x += particle.vx * dt
    particle.y += particle.vy * dt
    particle.elapsed += dt

    if particle.elapsed >= particle.lifetime:
        particle.deleted = True
