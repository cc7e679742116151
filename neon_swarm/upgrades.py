"""
Upgrade System
===============
Upgrade catalog, offer drawing, application, and overlay rendering.

An offer is a full shuffle of the catalog cut to the first three entries,
so one offer never repeats an entry but later offers may.
"""

import math
import random

from .world import World
from .entities import Player
from .config import (
    UPGRADE_OFFER_SIZE, ATTACK_SPEED_FACTOR, DAMAGE_UPGRADE_FACTOR,
    SPEED_UPGRADE_FACTOR, HEALTH_UPGRADE_AMOUNT, CHAIN_CHANCE_STEP,
    GEM_PULL_UPGRADE_FACTOR,
    COLOR_WHITE, COLOR_UPGRADE_HIGHLIGHT, COLOR_ENEMY_ELITE,
    COLOR_GRAY_MED, COLOR_GRAY_DARK, COLOR_HEALTH,
)


# =============================================================================
# UPGRADE EFFECTS
# =============================================================================

def _multi_shot(world: World, player: Player):
    player.multi_shot += 1


def _attack_speed(world: World, player: Player):
    player.fire_rate *= ATTACK_SPEED_FACTOR


def _damage(world: World, player: Player):
    player.projectile_damage = math.floor(player.projectile_damage * DAMAGE_UPGRADE_FACTOR)


def _move_speed(world: World, player: Player):
    player.speed = math.floor(player.speed * SPEED_UPGRADE_FACTOR)


def _max_health(world: World, player: Player):
    player.max_health += HEALTH_UPGRADE_AMOUNT
    player.health += HEALTH_UPGRADE_AMOUNT


def _pierce(world: World, player: Player):
    player.projectile_pierce += 1


def _chain_lightning(world: World, player: Player):
    player.chain_lightning_chance += CHAIN_CHANCE_STEP


def _nova(world: World, player: Player):
    player.nova_available = True


def _gem_pull(world: World, player: Player):
    # Session-wide, not a player stat
    world.gem_pull_speed *= GEM_PULL_UPGRADE_FACTOR


# =============================================================================
# UPGRADE DEFINITIONS
# =============================================================================

UPGRADES = {
    'multi_shot': {
        'name': 'Multi-Shot +1',
        'description': 'Fire an additional projectile.',
        'apply': _multi_shot,
    },
    'attack_speed': {
        'name': 'Attack Speed +20%',
        'description': 'Increase firing rate.',
        'apply': _attack_speed,
    },
    'damage': {
        'name': 'Projectile Damage +15%',
        'description': 'Increase projectile damage.',
        'apply': _damage,
    },
    'move_speed': {
        'name': 'Movement Speed +15%',
        'description': 'Increase player movement speed.',
        'apply': _move_speed,
    },
    'max_health': {
        'name': 'Max Health +25',
        'description': 'Increase maximum health.',
        'apply': _max_health,
    },
    'pierce': {
        'name': 'Projectile Pierce +1',
        'description': 'Projectiles hit an additional enemy.',
        'apply': _pierce,
    },
    'chain_lightning': {
        'name': 'Chain Lightning (5%)',
        'description': 'Projectiles have a 5% chance to chain to a nearby enemy.',
        'apply': _chain_lightning,
    },
    'nova': {
        'name': 'Giant Nova',
        'description': 'Unleash a massive burst of energy around you (one time use).',
        'apply': _nova,
    },
    'gem_pull': {
        'name': 'XP Gem Magnetism',
        'description': 'XP gems are pulled towards you 25% faster.',
        'apply': _gem_pull,
    },
}


# =============================================================================
# SELECTION
# =============================================================================

def select_upgrades(count: int = UPGRADE_OFFER_SIZE) -> list:
    """Shuffle the whole catalog and take the first `count` ids."""
    ids = list(UPGRADES)
    random.shuffle(ids)
    return ids[:count]


# =============================================================================
# APPLICATION
# =============================================================================

def apply_upgrade(world: World, upgrade_id: str) -> bool:
    """Apply one upgrade to the current player. False if nothing applied."""
    player = world.player
    if player is None:
        return False

    data = UPGRADES.get(upgrade_id)
    if data is None:
        return False

    data['apply'](world, player)
    return True


# =============================================================================
# RENDERING
# =============================================================================

def render_upgrade_select(renderer, choices: list, level: int, frame: int):
    """Render the level-up overlay with numbered choices."""
    width = renderer.width
    height = renderer.game_height

    box_w = min(width - 2, 64)
    box_h = 4 + len(choices) * 3 + 1
    box_x = width // 2 - box_w // 2
    box_y = max(0, height // 2 - box_h // 2)

    for row in range(box_h):
        renderer.put_string(box_x, box_y + row, ' ' * box_w, COLOR_GRAY_DARK,
                            with_shake=False)

    title = f' LEVEL {level} '
    top = '┌──' + title + '─' * (box_w - 4 - len(title)) + '┐'
    bot = '└' + '─' * (box_w - 2) + '┘'
    renderer.put_string(box_x, box_y, top, COLOR_HEALTH, with_shake=False)
    renderer.put_string(box_x, box_y + box_h - 1, bot, COLOR_HEALTH, with_shake=False)
    for row in range(1, box_h - 1):
        renderer.put(box_x, box_y + row, '│', COLOR_HEALTH, with_shake=False)
        renderer.put(box_x + box_w - 1, box_y + row, '│', COLOR_HEALTH, with_shake=False)

    for i, uid in enumerate(choices):
        data = UPGRADES[uid]
        row_y = box_y + 2 + i * 3

        renderer.put_string(box_x + 2, row_y, f'[{i + 1}]', COLOR_WHITE, with_shake=False)
        renderer.put_string(box_x + 6, row_y, data['name'], COLOR_UPGRADE_HIGHLIGHT,
                            with_shake=False)
        desc = data['description'][:box_w - 8]
        renderer.put_string(box_x + 6, row_y + 1, desc, COLOR_GRAY_MED, with_shake=False)

    prompt = 'CHOOSE AN UPGRADE: 1, 2 or 3'
    if (frame // 20) % 2 == 0:
        px = box_x + box_w // 2 - len(prompt) // 2
        renderer.put_string(px, box_y + box_h - 2, prompt, COLOR_ENEMY_ELITE,
                            with_shake=False)
