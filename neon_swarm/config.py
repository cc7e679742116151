"""
Game Constants
===============
Every tunable number of the simulation lives here.

Distances are playfield units ("pixels"), times are seconds and speeds are
units per second, so the simulation is independent of the frame rate.
"""

import math

# =============================================================================
# FRAME / VIEWPORT
# =============================================================================

TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS
MAX_FRAME_DELTA = FRAME_TIME * 5  # Clamp after a stall (terminal resize etc.)

# Terminal cell -> playfield unit mapping
CELL_WIDTH = 8
CELL_HEIGHT = 16

HUD_ROWS = 3
MIN_WIDTH = 60
MIN_HEIGHT = 20

GAME_PADDING = 50  # Extra padding for enemy spawning outside the edges

# =============================================================================
# PLAYER
# =============================================================================

PLAYER_RADIUS = 15
PLAYER_SPEED_BASE = 100
PLAYER_FIRE_RATE_BASE = 0.2  # Seconds per shot
PLAYER_PROJECTILE_SPEED = 300
PLAYER_PROJECTILE_RADIUS = 5
PLAYER_PROJECTILE_DAMAGE_BASE = 10
PLAYER_MAX_HEALTH_BASE = 100
PLAYER_XP_TO_LEVEL_BASE = 100
XP_LEVEL_SCALE = 1.25
MULTISHOT_SPREAD = math.pi / 16  # Fan width for multi-shot
CRITICAL_HEALTH_FRACTION = 0.3
HEALTH_FLASH_DURATION = 0.1  # HUD flash after a hit

# Reticle steering for keyboard-only terminals
RETICLE_SPEED = 360
KEY_HOLD_TIME = 0.2

# =============================================================================
# ENEMIES & SPAWNING
# =============================================================================

ENEMY_SPAWN_INTERVAL_BASE = 3.0
ENEMY_SPAWN_INTERVAL_MIN = 0.5
ENEMY_SPAWN_DECAY = 0.99
ENEMY_SPEED_BASE = 50
ENEMY_HEALTH_BASE = 10
ENEMY_RADIUS_BASE = 12
ENEMY_RADIUS_VARIANCE = 0.5
ENEMY_XP_VALUE_BASE = 20
ENEMY_CONTACT_DAMAGE = 10

ELITE_SPAWN_CHANCE = 0.1
ELITE_HEALTH_MULTIPLIER = 3
ELITE_XP_MULTIPLIER = 5
ELITE_SPEED_MULTIPLIER = 1.2
ELITE_RADIUS_MULTIPLIER = 1.3

# =============================================================================
# XP GEMS
# =============================================================================

XP_GEM_RADIUS = 5
XP_GEM_ELITE_RADIUS_BONUS = 5
XP_GEM_LIFETIME = 10.0
XP_GEM_PULL_SPEED_BASE = 300
XP_GEM_ATTRACT_FACTOR = 3  # Attraction range in player radii

# =============================================================================
# PARTICLES
# =============================================================================

PARTICLE_LIFETIME_BASE = 0.5
PARTICLE_SPEED_MAX = 150
PARTICLE_COUNT_ENEMY_DEATH = 25
PARTICLE_COUNT_HIT = 5
PARTICLE_COUNT_XP_SPARKLE = 10
PARTICLE_COUNT_NOVA = 100
PARTICLE_RADIUS_MIN = 2
PARTICLE_RADIUS_MAX = 4

PLAYER_HIT_PARTICLE_LIFETIME = 0.1
ENEMY_HIT_PARTICLE_LIFETIME = 0.05
XP_SPARKLE_LIFETIME = 0.3
NOVA_PARTICLE_LIFETIME = 0.8

LIGHTNING_SEGMENTS = 10
LIGHTNING_JITTER = 20
LIGHTNING_LIFETIME = 0.1
LIGHTNING_VELOCITY_SCALE = 5

# =============================================================================
# ABILITIES
# =============================================================================

CHAIN_LIGHTNING_HOPS = 2
CHAIN_LIGHTNING_RADIUS = 200
CHAIN_LIGHTNING_DAMAGE_FACTOR = 0.7
NOVA_DAMAGE_FACTOR = 10

# =============================================================================
# SCREEN SHAKE
# =============================================================================

SHAKE_DURATION = 0.1
SHAKE_INTENSITY = 5
NOVA_SHAKE_DURATION = 0.3
NOVA_SHAKE_INTENSITY = 15

# =============================================================================
# UPGRADES
# =============================================================================

UPGRADE_OFFER_SIZE = 3
ATTACK_SPEED_FACTOR = 0.8
DAMAGE_UPGRADE_FACTOR = 1.15
SPEED_UPGRADE_FACTOR = 1.15
HEALTH_UPGRADE_AMOUNT = 25
CHAIN_CHANCE_STEP = 5
GEM_PULL_UPGRADE_FACTOR = 1.25

# =============================================================================
# COLORS (r, g, b)
# =============================================================================

COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_PLAYER = (154, 42, 255)            # Purple
COLOR_PLAYER_PROJECTILE = (0, 255, 255)  # Cyan
COLOR_ENEMY_REGULAR = (255, 0, 255)      # Magenta
COLOR_ENEMY_ELITE = (255, 215, 0)        # Gold
COLOR_XP_GEM_REGULAR = (57, 255, 20)     # Lime
COLOR_XP_GEM_ELITE = (255, 215, 0)
COLOR_PARTICLE_EXPLOSION_ENEMY = (255, 0, 255)
COLOR_PARTICLE_EXPLOSION_ELITE = (255, 215, 0)
COLOR_PARTICLE_HIT = (255, 255, 255)
COLOR_UPGRADE_HIGHLIGHT = (0, 255, 255)
COLOR_HEALTH = (255, 0, 255)
COLOR_HEALTH_CRITICAL = (255, 0, 0)
COLOR_XP = (57, 255, 20)
COLOR_GRAY_MED = (138, 138, 138)
COLOR_GRAY_DARK = (68, 68, 68)
COLOR_GRAY_DARKER = (38, 38, 38)
