"""
Enemies and XP Gems
====================
Enemy creation, chase behavior, damage, death effects and the gems they drop.

Two variants share one record: the regular chaser and the elite, which is
bigger, tougher, faster and worth more XP.
"""

import logging
import random

from .world import World
from .entities import Enemy, XPGem, get_distance, step_toward
from .audio import enemy_death_cue, elite_kill_cue
from .particles import spawn_burst
from .config import (
    ENEMY_RADIUS_BASE, ENEMY_RADIUS_VARIANCE, ENEMY_HEALTH_BASE,
    ENEMY_SPEED_BASE, ENEMY_XP_VALUE_BASE,
    ELITE_RADIUS_MULTIPLIER, ELITE_HEALTH_MULTIPLIER,
    ELITE_SPEED_MULTIPLIER, ELITE_XP_MULTIPLIER,
    XP_GEM_RADIUS, XP_GEM_ELITE_RADIUS_BONUS, XP_GEM_ATTRACT_FACTOR,
    PARTICLE_COUNT_HIT, PARTICLE_COUNT_ENEMY_DEATH, ENEMY_HIT_PARTICLE_LIFETIME,
    SHAKE_DURATION, SHAKE_INTENSITY,
    COLOR_ENEMY_REGULAR, COLOR_ENEMY_ELITE, COLOR_XP_GEM_REGULAR,
    COLOR_XP_GEM_ELITE, COLOR_PARTICLE_HIT,
    COLOR_PARTICLE_EXPLOSION_ENEMY, COLOR_PARTICLE_EXPLOSION_ELITE,
)

log = logging.getLogger(__name__)


# =============================================================================
# CREATION
# =============================================================================

def roll_enemy_radius(elite: bool = False) -> float:
    radius = ENEMY_RADIUS_BASE * (1 + random.random() * ENEMY_RADIUS_VARIANCE)
    if elite:
        radius *= ELITE_RADIUS_MULTIPLIER
    return radius


def create_enemy(
    world: World,
    x: float, y: float,
    level: int = 1,
    elite: bool = False,
    radius: float = None,
) -> Enemy:
    """
    Create a chaser scaled to the player's level.

    Health is linear in level; elites multiply health, speed and XP on top.
    """
    if radius is None:
        radius = roll_enemy_radius(elite)

    health = ENEMY_HEALTH_BASE * level
    speed = ENEMY_SPEED_BASE
    xp_value = ENEMY_XP_VALUE_BASE
    color = COLOR_ENEMY_REGULAR

    if elite:
        health *= ELITE_HEALTH_MULTIPLIER
        speed *= ELITE_SPEED_MULTIPLIER
        xp_value *= ELITE_XP_MULTIPLIER
        color = COLOR_ENEMY_ELITE

    return world.add(Enemy(
        x=x, y=y, radius=radius, color=color,
        max_health=health, health=health,
        speed=speed, xp_value=xp_value, is_elite=elite,
    ))


# =============================================================================
# BEHAVIOR
# =============================================================================

def update_enemy(world: World, enemy: Enemy, dt: float):
    """Chase the player. No separation: enemies may overlap."""
    player = world.player
    if player is None:
        return
    if get_distance(enemy, player) > 1:
        step_toward(enemy, player.x, player.y, enemy.speed, dt)


def damage_enemy(world: World, enemy: Enemy, amount: float) -> bool:
    """
    Apply damage and flash. Returns True if this hit killed the enemy.

    Hits on an enemy already flagged for removal are ignored, so a corpse
    can't die (and drop a gem) twice within one tick.
    """
    if enemy.deleted:
        return False

    enemy.health -= amount
    spawn_burst(world, enemy.x, enemy.y, PARTICLE_COUNT_HIT,
                COLOR_PARTICLE_HIT, ENEMY_HIT_PARTICLE_LIFETIME)

    if enemy.health <= 0:
        enemy.deleted = True
        world.kills += 1
        on_enemy_death(world, enemy)
        return True
    return False


def on_enemy_death(world: World, enemy: Enemy, no_xp: bool = False):
    """
    Death side effects: shake, explosion, cue, and (unless `no_xp`) a gem.

    Contact kills pass `no_xp` and leave nothing behind.
    """
    world.trigger_shake(SHAKE_DURATION, SHAKE_INTENSITY)

    color = COLOR_PARTICLE_EXPLOSION_ELITE if enemy.is_elite else COLOR_PARTICLE_EXPLOSION_ENEMY
    spawn_burst(world, enemy.x, enemy.y, PARTICLE_COUNT_ENEMY_DEATH, color)
    world.play(enemy_death_cue())

    if no_xp:
        return

    spawn_xp_gem(world, enemy.x, enemy.y, enemy.xp_value, enemy.is_elite)
    if enemy.is_elite:
        world.play(elite_kill_cue())
        log.debug('elite killed at (%.0f, %.0f)', enemy.x, enemy.y)


# =============================================================================
# XP GEMS
# =============================================================================

def spawn_xp_gem(world: World, x: float, y: float, value: float, elite: bool = False) -> XPGem:
    radius = XP_GEM_RADIUS + (XP_GEM_ELITE_RADIUS_BONUS if elite else 0)
    color = COLOR_XP_GEM_ELITE if elite else COLOR_XP_GEM_REGULAR
    return world.add(XPGem(x=x, y=y, radius=radius, color=color,
                           value=value, is_elite=elite))


def update_gem(world: World, gem: XPGem, dt: float):
    """Expire after the lifetime; drift to the player when close."""
    gem.elapsed += dt
    if gem.elapsed >= gem.lifetime:
        gem.deleted = True
        return

    player = world.player
    if player is None:
        return
    if get_distance(gem, player) < player.radius * XP_GEM_ATTRACT_FACTOR:
        step_toward(gem, player.x, player.y, world.gem_pull_speed, dt)
