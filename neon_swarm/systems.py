"""
Game Systems
=============
Per-tick logic over the World: entity updates, collision resolution and
the draw-command list handed to the rasterizer.

Each system is a plain function over the World. Systems that produce
gameplay events return a list of event dicts.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple
import math

from .world import World
from .entities import Entity, EntityKind, circles_overlap
from .audio import xp_pickup_cue
from .player import update_player, damage_player, gain_xp
from .projectiles import update_projectile
from .enemies import update_enemy, damage_enemy, on_enemy_death, update_gem
from .particles import update_particle, spawn_burst
from .abilities import roll_chain, trigger_chain_lightning
from .config import (
    ENEMY_CONTACT_DAMAGE, PARTICLE_COUNT_XP_SPARKLE, XP_SPARKLE_LIFETIME,
)


# =============================================================================
# UPDATE SYSTEM
# =============================================================================

UPDATE_SYSTEMS: Dict[EntityKind, Callable[[World, Entity, float], None]] = {
    EntityKind.PLAYER: update_player,
    EntityKind.ENEMY: update_enemy,
    EntityKind.PROJECTILE: update_projectile,
    EntityKind.XP_GEM: update_gem,
    EntityKind.PARTICLE: update_particle,
}


def update_entity(world: World, entity: Entity, dt: float):
    """Dispatch one entity to its kind's update. Deleted entities are skipped."""
    if entity.deleted:
        return
    UPDATE_SYSTEMS[entity.kind](world, entity, dt)


def update_entities(world: World, dt: float):
    """Update the four populations in their fixed order."""
    for population in (world.enemies, world.projectiles, world.xp_gems, world.particles):
        for entity in population:
            update_entity(world, entity, dt)


# =============================================================================
# COLLISION SYSTEM
# =============================================================================

def collision_system(world: World) -> List[dict]:
    """
    Resolve all collisions for this tick, in a fixed order:

        1. player projectiles x enemies
        2. enemies x player (contact damage, enemy self-destructs)
        3. XP gems x player (pickup)

    Entities flagged during the pass stay in their collections until
    cleanup but are skipped by every later check. A fatal contact hit
    ends the pass early and reports `player_died`.
    """
    events = []
    player = world.player
    if player is None:
        return events

    _projectile_enemy_collisions(world, events)

    if _enemy_player_collisions(world, events):
        events.append({'type': 'player_died', 'level': player.level})
        return events

    _gem_player_collisions(world, events)
    return events


def _projectile_enemy_collisions(world: World, events: List[dict]):
    for proj in world.projectiles:
        if proj.deleted or proj.source != 'player':
            continue

        for enemy in world.enemies:
            if proj.deleted:
                break
            if enemy.deleted or enemy.uid in proj.hit_ids:
                continue
            if not circles_overlap(proj, enemy):
                continue

            if damage_enemy(world, enemy, proj.damage):
                events.append({'type': 'enemy_killed', 'elite': enemy.is_elite,
                               'x': enemy.x, 'y': enemy.y})
            proj.hit_ids.add(enemy.uid)

            if proj.pierce <= 0:
                proj.deleted = True
            else:
                proj.pierce -= 1

            if roll_chain(world):
                hops = trigger_chain_lightning(world, enemy)
                events.append({'type': 'chain_lightning', 'hops': hops})


def _enemy_player_collisions(world: World, events: List[dict]) -> bool:
    """Returns True if a contact hit killed the player."""
    player = world.player
    for enemy in world.enemies:
        if enemy.deleted or not circles_overlap(enemy, player):
            continue

        fatal = damage_player(world, player, ENEMY_CONTACT_DAMAGE)
        enemy.deleted = True
        on_enemy_death(world, enemy, no_xp=True)
        events.append({'type': 'contact', 'elite': enemy.is_elite,
                       'health': player.health})
        if fatal:
            return True
    return False


def _gem_player_collisions(world: World, events: List[dict]):
    player = world.player
    for gem in world.xp_gems:
        if gem.deleted or not circles_overlap(gem, player):
            continue

        gem.deleted = True
        levels = gain_xp(world, player, gem.value)
        spawn_burst(world, gem.x, gem.y, PARTICLE_COUNT_XP_SPARKLE,
                    gem.color, XP_SPARKLE_LIFETIME)
        world.play(xp_pickup_cue())
        events.append({'type': 'xp_collected', 'value': gem.value, 'levels': levels})


# =============================================================================
# RENDER SYSTEM
# =============================================================================

RGBA = Tuple[int, int, int, float]

SHAPE_CIRCLE = 'circle'
SHAPE_RECT = 'rect'

ENTITY_GLOW = 10
PARTICLE_GLOW = 5
PROJECTILE_LENGTH_FACTOR = 3

# Terminal glyph drawn at the entity center
GLYPHS = {
    EntityKind.PLAYER: '@',
    EntityKind.ENEMY: 'x',
    EntityKind.XP_GEM: '◆',
}
ELITE_GLYPH = 'X'


@dataclass
class DrawCommand:
    """What to draw and where, in playfield units."""
    shape: str
    x: float
    y: float
    radius: float
    color: RGBA
    angle: float = 0.0
    glow: float = 0.0
    glyph: str = ''

    @property
    def length(self) -> float:
        """Extent along `angle` for rect shapes."""
        return self.radius * PROJECTILE_LENGTH_FACTOR


def draw_command(entity: Entity) -> DrawCommand:
    """Build the draw command for a single live entity."""
    r, g, b = entity.color
    kind = entity.kind

    if kind == EntityKind.PROJECTILE:
        return DrawCommand(SHAPE_RECT, entity.x, entity.y, entity.radius,
                           (r, g, b, 1.0), angle=math.atan2(entity.vy, entity.vx),
                           glow=ENTITY_GLOW)

    if kind == EntityKind.PARTICLE:
        return DrawCommand(SHAPE_CIRCLE, entity.x, entity.y, entity.radius,
                           (r, g, b, entity.alpha), glow=PARTICLE_GLOW)

    glyph = GLYPHS.get(kind, '')
    if kind == EntityKind.ENEMY and entity.is_elite:
        glyph = ELITE_GLYPH
    return DrawCommand(SHAPE_CIRCLE, entity.x, entity.y, entity.radius,
                       (r, g, b, 1.0), glow=ENTITY_GLOW, glyph=glyph)


def render_system(world: World) -> List[DrawCommand]:
    """
    Draw commands for every live entity.

    Order is gems, player, enemies, projectiles, particles; later commands
    paint over earlier ones.
    """
    layers = [world.xp_gems]
    if world.player is not None:
        layers.append([world.player])
    layers.extend((world.enemies, world.projectiles, world.particles))

    commands = []
    for layer in layers:
        for entity in layer:
            if not entity.deleted:
                commands.append(draw_command(entity))
    return commands
