"""
Player Module
==============
Player creation, steering, auto-fire, damage intake, XP, and input handling.
"""

from typing import Optional
import logging
import math
import random

from .world import World
from .entities import Player, step_toward
from .audio import fire_cue, player_hit_cue, level_up_cue
from .particles import spawn_burst
from .projectiles import spawn_projectile
from .config import (
    PLAYER_PROJECTILE_SPEED, MULTISHOT_SPREAD, XP_LEVEL_SCALE,
    PARTICLE_COUNT_HIT, PLAYER_HIT_PARTICLE_LIFETIME, COLOR_PARTICLE_HIT,
    RETICLE_SPEED, KEY_HOLD_TIME,
)

log = logging.getLogger(__name__)


def create_player(world: World, x: float, y: float) -> Player:
    """Create the player at the given position with base stats."""
    player = world.add(Player(x=x, y=y))
    world.clamp_player()
    return player


def update_player(world: World, player: Player, dt: float):
    """
    Steer toward the pointer, stay on screen, and auto-fire.

    The fire timer is reset to zero on each shot rather than reduced by the
    interval, so any overshoot is dropped.
    """
    dx = world.pointer_x - player.x
    dy = world.pointer_y - player.y
    distance = math.hypot(dx, dy)

    if distance > 1:
        step_toward(player, world.pointer_x, world.pointer_y, player.speed, dt)

    world.clamp_player()

    player.fire_timer += dt
    if player.fire_timer >= player.fire_rate:
        fire(world, player)
        player.fire_timer = 0.0


def fire(world: World, player: Player):
    """
    Emit `multi_shot` projectiles.

    Every shot gets its own random heading; with more than one shot a small
    symmetric offset is added per shot index on top of that heading.
    """
    world.play(fire_cue())

    shots = player.multi_shot
    for i in range(shots):
        base_angle = random.random() * math.pi * 2
        offset = 0.0
        if shots > 1:
            offset = (i - (shots - 1) / 2) * (MULTISHOT_SPREAD / (shots - 1))
        angle = base_angle + offset

        spawn_projectile(
            world, player.x, player.y,
            math.cos(angle) * PLAYER_PROJECTILE_SPEED,
            math.sin(angle) * PLAYER_PROJECTILE_SPEED,
            damage=player.projectile_damage,
            pierce=player.projectile_pierce,
        )


def damage_player(world: World, player: Player, amount: float) -> bool:
    """
    Apply damage to the player.

    Returns True when the hit was fatal; the caller resets the session.
    """
    player.health -= amount
    spawn_burst(world, player.x, player.y, PARTICLE_COUNT_HIT,
                COLOR_PARTICLE_HIT, PLAYER_HIT_PARTICLE_LIFETIME)
    world.play(player_hit_cue())
    world.emit({
        'type': 'player_hit',
        'health': player.health,
        'max_health': player.max_health,
    })
    return player.health <= 0


def gain_xp(world: World, player: Player, amount: float) -> int:
    """
    Add XP, levelling up as many times as the total allows.

    Every level gained pauses the simulation and queues one upgrade offer.
    Returns the number of levels gained.
    """
    player.xp += amount
    gained = 0
    while player.xp >= player.xp_to_next_level:
        player.xp -= player.xp_to_next_level
        player.level += 1
        player.xp_to_next_level = int(player.xp_to_next_level * XP_LEVEL_SCALE)
        gained += 1
        on_level_up(world, player)
    return gained


def on_level_up(world: World, player: Player):
    """Pause for an upgrade choice."""
    world.paused = True
    world.pending_level_ups += 1
    world.play(level_up_cue())
    log.info('level up -> %d (pending offers: %d)', player.level, world.pending_level_ups)


# =============================================================================
# INPUT
# =============================================================================

class InputHandler:
    """
    Keyboard input for terminals.

    Terminals only report key-down, so movement keys are held for a short
    time after each repeat. Held keys steer the reticle the player chases.
    """

    MOVE_KEYS = {
        'w': (0, -1), 's': (0, 1), 'a': (-1, 0), 'd': (1, 0),
        'KEY_UP': (0, -1), 'KEY_DOWN': (0, 1),
        'KEY_LEFT': (-1, 0), 'KEY_RIGHT': (1, 0),
    }

    def __init__(self, hold_time: float = KEY_HOLD_TIME,
                 reticle_speed: float = RETICLE_SPEED):
        self.keys_held: dict = {}  # key -> seconds remaining
        self.hold_time = hold_time
        self.reticle_speed = reticle_speed

        self._nova_triggered = False
        self._quit_triggered = False
        self._toggle_fps = False
        self._choice: Optional[int] = None

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        key_str = key.lower() if not key.is_sequence else ''

        if key_str == 'q' or key.name == 'KEY_ESCAPE':
            self._quit_triggered = True
            return

        move_name = key.name if key.is_sequence else key_str
        if move_name in self.MOVE_KEYS:
            self.keys_held[move_name] = self.hold_time

        elif key_str == ' ':
            self._nova_triggered = True

        elif key_str in ('1', '2', '3'):
            self._choice = int(key_str) - 1

        elif key_str == 'f':
            self._toggle_fps = True

    @classmethod
    def is_move_key(cls, key) -> bool:
        name = key.name if key.is_sequence else key.lower()
        return name in cls.MOVE_KEYS

    def update(self, dt: float) -> None:
        """Age key hold timers."""
        expired = []
        for key, remaining in self.keys_held.items():
            self.keys_held[key] = remaining - dt
            if self.keys_held[key] <= 0:
                expired.append(key)
        for key in expired:
            del self.keys_held[key]

    def get_movement_vector(self) -> tuple:
        dx, dy = 0.0, 0.0
        for key in self.keys_held:
            kx, ky = self.MOVE_KEYS[key]
            dx += kx
            dy += ky

        length = math.hypot(dx, dy)
        if length > 0:
            dx /= length
            dy /= length
        return dx, dy

    def steer_reticle(self, world: World, dt: float) -> None:
        """Move the pointer with the held keys, inside the viewport."""
        dx, dy = self.get_movement_vector()
        if dx == 0 and dy == 0:
            return
        x = world.pointer_x + dx * self.reticle_speed * dt
        y = world.pointer_y + dy * self.reticle_speed * dt
        world.set_pointer(
            max(0.0, min(world.width, x)),
            max(0.0, min(world.height, y))
        )

    def consume_nova(self) -> bool:
        triggered = self._nova_triggered
        self._nova_triggered = False
        return triggered

    def consume_quit(self) -> bool:
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered

    def consume_toggle_fps(self) -> bool:
        triggered = self._toggle_fps
        self._toggle_fps = False
        return triggered

    def consume_choice(self) -> Optional[int]:
        """Upgrade slot picked this frame (0-based), or None."""
        choice = self._choice
        self._choice = None
        return choice

    def reset(self) -> None:
        self.keys_held.clear()
        self._nova_triggered = False
        self._quit_triggered = False
        self._toggle_fps = False
        self._choice = None
