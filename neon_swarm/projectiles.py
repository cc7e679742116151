"""
Projectile System
==================
Projectile lifecycle: spawn, fly, leave the playfield.

Hits are resolved by the collision system; this module only moves
projectiles and retires the ones that left the screen.
"""

from .world import World
from .entities import Projectile, Color
from .config import (
    PLAYER_PROJECTILE_RADIUS, PLAYER_PROJECTILE_DAMAGE_BASE,
    COLOR_PLAYER_PROJECTILE,
)


def spawn_projectile(
    world: World,
    x: float, y: float,
    vx: float, vy: float,
    damage: float = PLAYER_PROJECTILE_DAMAGE_BASE,
    pierce: int = 0,
    radius: float = PLAYER_PROJECTILE_RADIUS,
    color: Color = COLOR_PLAYER_PROJECTILE,
) -> Projectile:
    """Spawn a single player-owned projectile."""
    return world.add(Projectile(
        x=x, y=y, radius=radius, color=color,
        vx=vx, vy=vy, damage=damage, pierce=pierce,
    ))


def is_off_playfield(world: World, projectile: Projectile) -> bool:
    """True once the projectile is fully outside the playfield."""
    pad = projectile.radius
    return (
        projectile.x < -pad or projectile.x > world.width + pad or
        projectile.y < -pad or projectile.y > world.height + pad
    )


def update_projectile(world: World, projectile: Projectile, dt: float):
    projectile.x += projectile.vx * dt
    projectile.y += projectile.vy * dt

    if is_off_playfield(world, projectile):
        projectile.deleted = True
