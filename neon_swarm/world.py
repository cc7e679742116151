"""
Simulation World
=================
The simulation context handed to every system.

Owns the player, the four entity collections, the viewport, the pointer,
the pause flag, screen shake and the gem pull speed. Entities are never
removed mid-tick: they are flagged `deleted` and pruned in
`process_dead_entities()` at the end of the tick.
"""

from typing import Dict, Iterator, List, Optional
import logging

from .audio import AudioOut, LogAudio, ToneCue
from .config import XP_GEM_PULL_SPEED_BASE
from .entities import (
    Entity, EntityKind, Player, Enemy, Projectile, XPGem, Particle,
    ScreenShake
)

log = logging.getLogger(__name__)


class World:
    """
    Simulation state container.

    Collections keep insertion order, which is also draw order within
    a collection.
    """

    def __init__(self, width: float, height: float, audio: Optional[AudioOut] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f'viewport must be positive, got {width}x{height}')
        self.width = float(width)
        self.height = float(height)
        self.audio: AudioOut = audio if audio is not None else LogAudio()

        self.player: Optional[Player] = None
        self.enemies: List[Enemy] = []
        self.projectiles: List[Projectile] = []
        self.xp_gems: List[XPGem] = []
        self.particles: List[Particle] = []

        self.pointer_x = self.width / 2
        self.pointer_y = self.height / 2
        self.paused = False
        self.shake = ScreenShake()
        self.gem_pull_speed: float = XP_GEM_PULL_SPEED_BASE
        self.pending_level_ups = 0  # Upgrade offers still owed to the player
        self.kills = 0

        self.events: List[dict] = []
        self._next_entity_id = 0

    # -------------------------------------------------------------------------
    # Entities
    # -------------------------------------------------------------------------

    def _collections(self) -> Dict[EntityKind, list]:
        return {
            EntityKind.ENEMY: self.enemies,
            EntityKind.PROJECTILE: self.projectiles,
            EntityKind.XP_GEM: self.xp_gems,
            EntityKind.PARTICLE: self.particles,
        }

    def add(self, entity: Entity) -> Entity:
        """Assign an id and insert the entity into its collection."""
        entity.uid = self._next_entity_id
        self._next_entity_id += 1

        if entity.kind == EntityKind.PLAYER:
            self.player = entity
        else:
            self._collections()[entity.kind].append(entity)
        return entity

    def living_enemies(self) -> Iterator[Enemy]:
        """Enemies not yet flagged for removal."""
        for enemy in self.enemies:
            if not enemy.deleted:
                yield enemy

    def process_dead_entities(self) -> None:
        """Remove every entity flagged `deleted` from its collection."""
        self.enemies[:] = [e for e in self.enemies if not e.deleted]
        self.projectiles[:] = [p for p in self.projectiles if not p.deleted]
        self.xp_gems[:] = [g for g in self.xp_gems if not g.deleted]
        self.particles[:] = [p for p in self.particles if not p.deleted]

    def clear(self) -> None:
        """Drop all entities and transient state (session reset)."""
        self.player = None
        self.enemies.clear()
        self.projectiles.clear()
        self.xp_gems.clear()
        self.particles.clear()
        self.paused = False
        self.shake.reset()
        self.gem_pull_speed = XP_GEM_PULL_SPEED_BASE
        self.pending_level_ups = 0
        self.kills = 0
        self.events.clear()

    # -------------------------------------------------------------------------
    # Boundaries
    # -------------------------------------------------------------------------

    def set_pointer(self, x: float, y: float) -> None:
        self.pointer_x = x
        self.pointer_y = y

    def resize(self, width: float, height: float) -> None:
        """Update the viewport and keep the player on screen."""
        if width <= 0 or height <= 0:
            raise ValueError(f'viewport must be positive, got {width}x{height}')
        self.width = float(width)
        self.height = float(height)
        self.clamp_player()
        log.debug('viewport resized to %.0fx%.0f', self.width, self.height)

    def clamp_player(self) -> None:
        player = self.player
        if player is None:
            return
        player.x = max(player.radius, min(self.width - player.radius, player.x))
        player.y = max(player.radius, min(self.height - player.radius, player.y))

    def trigger_shake(self, duration: float, intensity: float) -> None:
        self.shake.trigger(duration, intensity)

    def shake_offset(self):
        return self.shake.offset()

    def play(self, cue: ToneCue) -> None:
        self.audio.play(cue)

    def emit(self, event: dict) -> None:
        """Publish an event for the front-end (HUD flash etc.)."""
        self.events.append(event)

    def drain_events(self) -> List[dict]:
        events = self.events
        self.events = []
        return events
