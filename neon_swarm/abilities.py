"""
Abilities
==========
Chain lightning (proc on projectile hits) and the one-shot Nova.
"""

from collections import deque
import logging
import random

from .world import World
from .entities import Enemy, get_distance
from .enemies import damage_enemy
from .particles import spawn_burst, spawn_lightning_arc
from .audio import nova_cue
from .config import (
    CHAIN_LIGHTNING_HOPS, CHAIN_LIGHTNING_RADIUS, CHAIN_LIGHTNING_DAMAGE_FACTOR,
    NOVA_DAMAGE_FACTOR, PARTICLE_COUNT_NOVA, NOVA_PARTICLE_LIFETIME,
    NOVA_SHAKE_DURATION, NOVA_SHAKE_INTENSITY, COLOR_UPGRADE_HIGHLIGHT,
)

log = logging.getLogger(__name__)


# =============================================================================
# CHAIN LIGHTNING
# =============================================================================

def roll_chain(world: World) -> bool:
    """Uniform draw against the player's chain chance (in percent)."""
    player = world.player
    if player is None or player.chain_lightning_chance <= 0:
        return False
    return random.random() * 100 < player.chain_lightning_chance


def chain_candidates(world: World, current: Enemy) -> list:
    """Living enemies, other than `current`, within chain range of it."""
    return [
        e for e in world.living_enemies()
        if e is not current and get_distance(current, e) < CHAIN_LIGHTNING_RADIUS
    ]


def trigger_chain_lightning(world: World, origin: Enemy) -> int:
    """
    Arc from `origin` to up to CHAIN_LIGHTNING_HOPS nearby enemies.

    Each hop picks a random candidate near the current target, hits it for
    a fraction of the player's projectile damage and continues from there.
    A chained hit rolls the chain chance again; such procs are queued and
    run after the current chain instead of recursing.

    Returns the total number of hops, cascades included.
    """
    player = world.player
    if player is None:
        return 0

    pending = deque([origin])
    hops = 0

    while pending:
        current = pending.popleft()
        for _ in range(CHAIN_LIGHTNING_HOPS):
            candidates = chain_candidates(world, current)
            if not candidates:
                break

            target = random.choice(candidates)
            damage_enemy(world, target, player.projectile_damage * CHAIN_LIGHTNING_DAMAGE_FACTOR)
            spawn_lightning_arc(world, current.x, current.y, target.x, target.y)
            hops += 1
            log.debug('chain hop (%.0f, %.0f) -> (%.0f, %.0f)',
                      current.x, current.y, target.x, target.y)

            if roll_chain(world):
                pending.append(target)
            current = target

    return hops


# =============================================================================
# NOVA
# =============================================================================

def activate_nova(world: World) -> bool:
    """
    Spend the Nova charge: hit every living enemy for heavy damage.

    Refused (returns False) while paused or without a charge.
    """
    player = world.player
    if player is None or world.paused or not player.nova_available:
        return False

    player.nova_available = False
    world.play(nova_cue())
    spawn_burst(world, player.x, player.y, PARTICLE_COUNT_NOVA,
                COLOR_UPGRADE_HIGHLIGHT, NOVA_PARTICLE_LIFETIME)
    world.trigger_shake(NOVA_SHAKE_DURATION, NOVA_SHAKE_INTENSITY)

    damage = player.projectile_damage * NOVA_DAMAGE_FACTOR
    targets = list(world.living_enemies())
    kills = sum(1 for enemy in targets if damage_enemy(world, enemy, damage))

    log.info('nova: %d enemies hit, %d killed', len(targets), kills)
    return True
