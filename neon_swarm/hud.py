"""
HUD
====
Health/XP/level read-out in the bottom rows, plus the hit flash.

The simulation only publishes numbers (`HudSnapshot`) and `player_hit`
events; the flash timer lives here.
"""

from dataclasses import dataclass

from .entities import Player
from .config import (
    CRITICAL_HEALTH_FRACTION, HEALTH_FLASH_DURATION,
    COLOR_WHITE, COLOR_HEALTH, COLOR_HEALTH_CRITICAL, COLOR_XP,
    COLOR_UPGRADE_HIGHLIGHT, COLOR_ENEMY_ELITE,
    COLOR_GRAY_MED, COLOR_GRAY_DARK, COLOR_GRAY_DARKER,
)


@dataclass(frozen=True)
class HudSnapshot:
    """Numbers the HUD needs for one frame."""
    health: float
    max_health: float
    level: int
    xp_fraction: float
    critical: bool
    nova_ready: bool
    paused: bool

    @classmethod
    def from_player(cls, player: Player, paused: bool = False) -> 'HudSnapshot':
        if player.xp_to_next_level > 0:
            xp_fraction = max(0.0, min(1.0, player.xp / player.xp_to_next_level))
        else:
            xp_fraction = 0.0
        return cls(
            health=player.health,
            max_health=player.max_health,
            level=player.level,
            xp_fraction=xp_fraction,
            critical=player.health <= player.max_health * CRITICAL_HEALTH_FRACTION,
            nova_ready=player.nova_available,
            paused=paused,
        )

    @property
    def health_fraction(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return max(0.0, min(1.0, self.health / self.max_health))


@dataclass
class HudState:
    """Transient HUD visuals driven by core events."""
    flash_timer: float = 0.0
    flash_duration: float = HEALTH_FLASH_DURATION

    def on_event(self, event: dict):
        if event.get('type') == 'player_hit':
            self.flash_timer = self.flash_duration

    def update(self, dt: float):
        if self.flash_timer > 0:
            self.flash_timer = max(0.0, self.flash_timer - dt)

    @property
    def flashing(self) -> bool:
        return self.flash_timer > 0

    def reset(self):
        self.flash_timer = 0.0


# =============================================================================
# RENDERING
# =============================================================================

BAR_WIDTH = 20


def _bar(fraction: float, width: int = BAR_WIDTH) -> str:
    filled = max(0, min(width, int(fraction * width)))
    return '|' * filled + '.' * (width - filled)


def render_hud(renderer, snapshot: HudSnapshot, state: HudState,
               kills: int = 0, enemy_count: int = 0):
    """Render the HUD in the bottom 3 rows."""
    ui_y = renderer.game_height
    width = renderer.width

    sep = '=' * width
    renderer.buffer.put_string(0, ui_y, sep, COLOR_GRAY_DARK)
    renderer.buffer.put_string(2, ui_y, ' NEON SWARM ', COLOR_HEALTH)

    status_text = f' KILLS:{kills}  ENEMIES:{enemy_count} '
    renderer.buffer.put_string(width - len(status_text) - 1, ui_y, status_text,
                               COLOR_ENEMY_ELITE)

    if snapshot is None:
        return

    # Row 1: health + level + xp
    row1_y = ui_y + 1
    if state.flashing:
        health_color = COLOR_WHITE
    elif snapshot.critical:
        health_color = COLOR_HEALTH_CRITICAL
    else:
        health_color = COLOR_HEALTH

    renderer.buffer.put_string(2, row1_y, 'HP', COLOR_GRAY_MED)
    renderer.buffer.put_string(5, row1_y, f'[{_bar(snapshot.health_fraction)}]', health_color)
    hp_text = f'{max(0, int(snapshot.health))}/{int(snapshot.max_health)}'
    renderer.buffer.put_string(28, row1_y, hp_text, health_color)

    xp_x = max(38, width // 2)
    renderer.buffer.put_string(xp_x, row1_y, f'LVL {snapshot.level}', COLOR_UPGRADE_HIGHLIGHT)
    xp_pct = f'{int(snapshot.xp_fraction * 100)}%'
    renderer.buffer.put_string(xp_x + 8, row1_y, f'[{_bar(snapshot.xp_fraction)}] {xp_pct}',
                               COLOR_XP)

    # Row 2: nova + controls
    row2_y = ui_y + 2
    if snapshot.nova_ready:
        renderer.buffer.put_string(2, row2_y, 'NOVA READY [SPACE]', COLOR_UPGRADE_HIGHLIGHT)
        controls_x = 22
    else:
        controls_x = 2
    controls = 'WASD/ARROWS:Steer  Q:Quit'
    renderer.buffer.put_string(controls_x, row2_y, controls, COLOR_GRAY_DARKER)

    if renderer.show_fps:
        fps_text = f'FPS:{renderer.current_fps:.0f}'
        renderer.buffer.put_string(width - len(fps_text) - 2, 0, fps_text, COLOR_GRAY_MED)
