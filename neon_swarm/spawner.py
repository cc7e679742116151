"""
Enemy Spawner
==============
Timed edge spawning with a shrinking interval.

Difficulty ramps with the number of spawns, not with player level: every
spawn multiplies the interval by ENEMY_SPAWN_DECAY down to a hard floor.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import logging
import random

from .world import World
from .entities import Enemy
from .enemies import create_enemy, roll_enemy_radius
from .config import (
    ENEMY_SPAWN_INTERVAL_BASE, ENEMY_SPAWN_INTERVAL_MIN, ENEMY_SPAWN_DECAY,
    ELITE_SPAWN_CHANCE, ELITE_RADIUS_MULTIPLIER, GAME_PADDING,
)

log = logging.getLogger(__name__)

# Edge indices, clockwise from the top
EDGE_TOP, EDGE_RIGHT, EDGE_BOTTOM, EDGE_LEFT = range(4)


def edge_position(width: float, height: float, radius: float,
                  edge: Optional[int] = None) -> Tuple[float, float]:
    """
    Random point just outside one edge of the playfield.

    The point sits GAME_PADDING + radius beyond the edge so the enemy
    starts fully off-screen.
    """
    if edge is None:
        edge = random.randrange(4)
    padding = GAME_PADDING + radius

    if edge == EDGE_TOP:
        return random.random() * width, -padding
    if edge == EDGE_RIGHT:
        return width + padding, random.random() * height
    if edge == EDGE_BOTTOM:
        return random.random() * width, height + padding
    return -padding, random.random() * height


def roll_elite() -> bool:
    return random.random() < ELITE_SPAWN_CHANCE


@dataclass
class Spawner:
    """Countdown spawner state, owned by the Game."""
    interval: float = ENEMY_SPAWN_INTERVAL_BASE
    elapsed: float = 0.0
    spawned: int = 0

    def update(self, world: World, dt: float) -> Optional[Enemy]:
        """Advance the timer; spawn one enemy when it runs out."""
        self.elapsed += dt
        if self.elapsed < self.interval:
            return None

        enemy = self.spawn(world)
        self.elapsed = 0.0
        self.interval = max(ENEMY_SPAWN_INTERVAL_MIN, self.interval * ENEMY_SPAWN_DECAY)
        return enemy

    def spawn(self, world: World) -> Enemy:
        """Spawn one regular or elite enemy at a random edge."""
        radius = roll_enemy_radius()
        x, y = edge_position(world.width, world.height, radius)
        elite = roll_elite()
        if elite:
            radius *= ELITE_RADIUS_MULTIPLIER

        level = world.player.level if world.player is not None else 1
        enemy = create_enemy(world, x, y, level=level, elite=elite, radius=radius)

        self.spawned += 1
        log.debug('spawn #%d %s at (%.0f, %.0f) hp=%.0f interval=%.3fs',
                  self.spawned, 'elite' if elite else 'enemy',
                  x, y, enemy.health, self.interval)
        return enemy

    def reset(self):
        self.interval = ENEMY_SPAWN_INTERVAL_BASE
        self.elapsed = 0.0
        self.spawned = 0
