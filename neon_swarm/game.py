"""
Game Orchestrator
==================
Session lifecycle and the per-frame tick.

A tick runs, in order: shake timer, player, spawner, the four entity
populations, collisions, cleanup. While the world is paused for an upgrade
choice the whole update phase is skipped; rendering is the front-end's job
and carries on regardless.
"""

from typing import List, Optional
import logging

from .world import World
from .audio import AudioOut, game_start_cue
from .player import create_player
from .spawner import Spawner
from .systems import update_entity, update_entities, collision_system, render_system
from .upgrades import UPGRADES, select_upgrades, apply_upgrade
from . import abilities
from .hud import HudSnapshot

log = logging.getLogger(__name__)


class Game:
    """
    Owns the World and the Spawner and drives them.

    `running` is False between sessions (title screen). Player death resets
    the session back to that idle state.
    """

    def __init__(self, width: float, height: float, audio: Optional[AudioOut] = None):
        self.world = World(width, height, audio)
        self.spawner = Spawner()
        self.running = False

        self.offer: List[str] = []
        self.sessions = 0

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_game(self):
        """Begin a new session with the player at the center."""
        if self.running:
            self.reset_game()

        world = self.world
        create_player(world, world.width / 2, world.height / 2)
        world.set_pointer(world.width / 2, world.height / 2)
        world.play(game_start_cue())

        self.running = True
        self.sessions += 1
        log.info('session %d started (%.0fx%.0f)', self.sessions, world.width, world.height)

    def reset_game(self):
        """Drop every entity and timer and return to the idle state."""
        level = self.world.player.level if self.world.player is not None else 0
        log.info('session reset (level %d, %d kills)', level, self.kills)
        self.world.clear()
        self.spawner.reset()
        self.offer = []
        self.running = False

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self, dt: float) -> List[dict]:
        """
        Advance the simulation by `dt` seconds.

        Returns this tick's events: the world's published events (such
        as `player_hit`) followed by the collision pass results. The
        world queue is drained here, so callers need not drain it.
        """
        world = self.world
        if not self.running or world.paused:
            return []

        world.shake.update(dt)
        update_entity(world, world.player, dt)
        self.spawner.update(world, dt)
        update_entities(world, dt)

        collisions = collision_system(world)
        events = world.drain_events() + collisions
        world.process_dead_entities()

        if any(event['type'] == 'player_died' for event in events):
            log.info('player died')
            self.reset_game()
            return events

        self._present_offer()
        return events

    @property
    def kills(self) -> int:
        return self.world.kills

    def render(self):
        """Draw commands for the current frame (paused or not)."""
        return render_system(self.world)

    # -------------------------------------------------------------------------
    # Upgrades
    # -------------------------------------------------------------------------

    def _present_offer(self):
        if self.world.pending_level_ups > 0 and not self.offer:
            self.offer = select_upgrades()
            log.debug('upgrade offer: %s', ', '.join(self.offer))

    @property
    def pending_offer(self) -> Optional[List[str]]:
        """Upgrade ids on offer, or None when no choice is owed."""
        return self.offer or None

    def choose_upgrade(self, index: int) -> str:
        """
        Apply the offered upgrade at `index` and resume.

        When more level-ups are queued the next offer is drawn straight
        away and the world stays paused.
        """
        if not self.offer:
            raise RuntimeError('no upgrade offer pending')
        if not 0 <= index < len(self.offer):
            raise ValueError(f'upgrade index {index} outside offer of {len(self.offer)}')

        upgrade_id = self.offer[index]
        apply_upgrade(self.world, upgrade_id)
        log.info('upgrade chosen: %s', UPGRADES[upgrade_id]['name'])

        self.offer = []
        self.world.pending_level_ups -= 1
        if self.world.pending_level_ups > 0:
            self._present_offer()
        else:
            self.world.paused = False
        return upgrade_id

    # -------------------------------------------------------------------------
    # Boundaries
    # -------------------------------------------------------------------------

    def activate_nova(self) -> bool:
        if not self.running:
            return False
        return abilities.activate_nova(self.world)

    def set_pointer(self, x: float, y: float):
        self.world.set_pointer(x, y)

    def resize(self, width: float, height: float):
        self.world.resize(width, height)

    def hud_snapshot(self) -> Optional[HudSnapshot]:
        """Player stats for the HUD, or None outside a session."""
        player = self.world.player
        if player is None:
            return None
        return HudSnapshot.from_player(player, self.world.paused)
