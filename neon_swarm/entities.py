"""
Entity Definitions
===================
Plain dataclasses for everything that lives on the playfield.

Every entity shares the positional/render record of `Entity` and carries an
`EntityKind` tag; per-kind behavior lives in the systems that dispatch on
that tag, not on the records themselves.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Set, Tuple
import math
import random

from .config import (
    PLAYER_RADIUS, PLAYER_SPEED_BASE, PLAYER_FIRE_RATE_BASE,
    PLAYER_PROJECTILE_DAMAGE_BASE, PLAYER_MAX_HEALTH_BASE,
    PLAYER_XP_TO_LEVEL_BASE, PLAYER_PROJECTILE_RADIUS,
    ENEMY_RADIUS_BASE, ENEMY_HEALTH_BASE, ENEMY_SPEED_BASE,
    ENEMY_XP_VALUE_BASE, XP_GEM_RADIUS, XP_GEM_LIFETIME,
    PARTICLE_LIFETIME_BASE, COLOR_WHITE, COLOR_PLAYER,
    COLOR_PLAYER_PROJECTILE, COLOR_ENEMY_REGULAR, COLOR_XP_GEM_REGULAR,
)


Color = Tuple[int, int, int]


class EntityKind(Enum):
    """Variant tag used for update/draw dispatch."""
    PLAYER = auto()
    ENEMY = auto()
    PROJECTILE = auto()
    XP_GEM = auto()
    PARTICLE = auto()


# =============================================================================
# BASE
# =============================================================================

@dataclass(eq=False)
class Entity:
    """
    Shared positional record.

    Once `deleted` is set the entity is inert: systems skip it and the next
    cleanup pass removes it from its collection.
    """
    kind: ClassVar[EntityKind]

    x: float = 0.0
    y: float = 0.0
    radius: float = 1.0
    color: Color = COLOR_WHITE
    deleted: bool = False
    uid: int = -1  # Assigned by the World


# =============================================================================
# ACTORS
# =============================================================================

@dataclass(eq=False)
class Player(Entity):
    """The single player-controlled avatar."""
    kind: ClassVar[EntityKind] = EntityKind.PLAYER

    radius: float = PLAYER_RADIUS
    color: Color = COLOR_PLAYER

    max_health: float = PLAYER_MAX_HEALTH_BASE
    health: float = PLAYER_MAX_HEALTH_BASE
    speed: float = PLAYER_SPEED_BASE
    fire_rate: float = PLAYER_FIRE_RATE_BASE  # Seconds between shots
    fire_timer: float = 0.0
    projectile_damage: float = PLAYER_PROJECTILE_DAMAGE_BASE
    multi_shot: int = 1
    chain_lightning_chance: float = 0.0  # Percent
    projectile_pierce: int = 0
    nova_available: bool = False

    level: int = 1
    xp: float = 0.0
    xp_to_next_level: int = PLAYER_XP_TO_LEVEL_BASE


@dataclass(eq=False)
class Enemy(Entity):
    """A chaser spawned at the screen edge."""
    kind: ClassVar[EntityKind] = EntityKind.ENEMY

    radius: float = ENEMY_RADIUS_BASE
    color: Color = COLOR_ENEMY_REGULAR

    max_health: float = ENEMY_HEALTH_BASE
    health: float = ENEMY_HEALTH_BASE
    speed: float = ENEMY_SPEED_BASE
    xp_value: float = ENEMY_XP_VALUE_BASE
    is_elite: bool = False


@dataclass(eq=False)
class Projectile(Entity):
    """Projectile flight data."""
    kind: ClassVar[EntityKind] = EntityKind.PROJECTILE

    radius: float = PLAYER_PROJECTILE_RADIUS
    color: Color = COLOR_PLAYER_PROJECTILE

    vx: float = 0.0
    vy: float = 0.0
    damage: float = PLAYER_PROJECTILE_DAMAGE_BASE
    pierce: int = 0  # Additional enemies it may still hit
    hit_ids: Set[int] = field(default_factory=set)
    source: str = 'player'  # Owner tag; only the player fires


@dataclass(eq=False)
class XPGem(Entity):
    """Experience dropped by a killed enemy."""
    kind: ClassVar[EntityKind] = EntityKind.XP_GEM

    radius: float = XP_GEM_RADIUS
    color: Color = COLOR_XP_GEM_REGULAR

    value: float = 1.0
    is_elite: bool = False
    lifetime: float = XP_GEM_LIFETIME
    elapsed: float = 0.0


@dataclass(eq=False)
class Particle(Entity):
    """Cosmetic particle. Never takes part in gameplay."""
    kind: ClassVar[EntityKind] = EntityKind.PARTICLE

    vx: float = 0.0
    vy: float = 0.0
    lifetime: float = PARTICLE_LIFETIME_BASE
    elapsed: float = 0.0

    @property
    def alpha(self) -> float:
        """Opacity, fading linearly from 1 to 0 over the lifetime."""
        if self.lifetime <= 0:
            return 0.0
        return max(0.0, min(1.0, 1.0 - self.elapsed / self.lifetime))


# =============================================================================
# EFFECTS
# =============================================================================

@dataclass
class ScreenShake:
    """Time-bounded random render offset."""
    active: bool = False
    duration: float = 0.0
    intensity: float = 0.0
    elapsed: float = 0.0

    def trigger(self, duration: float, intensity: float):
        """(Re)arm the shake, replacing any shake in progress."""
        self.active = True
        self.duration = duration
        self.intensity = intensity
        self.elapsed = 0.0

    def update(self, dt: float):
        if not self.active:
            return
        self.elapsed += dt
        if self.elapsed >= self.duration:
            self.active = False
            self.elapsed = 0.0

    def offset(self) -> Tuple[float, float]:
        """Random offset scaled by the remaining-time fraction."""
        if not self.active or self.duration <= 0:
            return 0.0, 0.0
        remaining = 1.0 - self.elapsed / self.duration
        return (
            (random.random() - 0.5) * self.intensity * remaining,
            (random.random() - 0.5) * self.intensity * remaining,
        )

    def reset(self):
        self.active = False
        self.duration = 0.0
        self.intensity = 0.0
        self.elapsed = 0.0


# =============================================================================
# GEOMETRY
# =============================================================================

def get_distance(a: Entity, b: Entity) -> float:
    """Euclidean distance between two entity centers."""
    return math.hypot(b.x - a.x, b.y - a.y)


def circles_overlap(a: Entity, b: Entity) -> bool:
    """Sum-of-radii proximity test."""
    return get_distance(a, b) <= a.radius + b.radius


def step_toward(entity: Entity, tx: float, ty: float, speed: float, dt: float) -> None:
    """Move `entity` along the direct bearing to (tx, ty)."""
    angle = math.atan2(ty - entity.y, tx - entity.x)
    entity.x += math.cos(angle) * speed * dt
    entity.y += math.sin(angle) * speed * dt
