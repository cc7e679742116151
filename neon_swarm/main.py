#!/usr/bin/env python3
"""
NEON SWARM - Terminal Survival Arcade
======================================
Survive the swarm. Your ship fires on its own; steer it, grab XP gems,
and pick an upgrade every level.

Controls:
    WASD / ARROWS - Steer the reticle your ship follows
    SPACE         - Nova (once unlocked)
    1 / 2 / 3     - Choose an upgrade on level-up
    F             - Toggle FPS display
    Q/ESC         - Quit
"""

import argparse
import logging
import random
import sys
import time

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .audio import LogAudio, BellAudio
from .engine import GameRenderer
from .game import Game
from .hud import HudState, render_hud
from .player import InputHandler
from .upgrades import render_upgrade_select
from .config import (
    TARGET_FPS, MAX_FRAME_DELTA, MIN_WIDTH, MIN_HEIGHT,
    COLOR_HEALTH, COLOR_UPGRADE_HIGHLIGHT, COLOR_XP, COLOR_WHITE,
    COLOR_GRAY_MED, COLOR_GRAY_DARK, COLOR_GRAY_DARKER,
)

log = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Game phases
PHASE_TITLE = 'title'
PHASE_PLAYING = 'playing'
PHASE_UPGRADE_SELECT = 'upgrade_select'

TITLE_ART = [
    r'+-----------------------------+',
    r'|  N E O N     S W A R M      |',
    r'+-----------------------------+',
]

RETICLE_CHAR = '+'


# =============================================================================
# SCREENS
# =============================================================================

def render_title_screen(renderer: GameRenderer, frame: int, sessions: int = 0):
    """Render the title screen."""
    width = renderer.width
    height = renderer.game_height

    art_y = height // 2 - 5
    for i, line in enumerate(TITLE_ART):
        x = width // 2 - len(line) // 2
        color = COLOR_HEALTH if i % 2 == 0 else COLOR_UPGRADE_HIGHLIGHT
        renderer.buffer.put_string(max(0, x), art_y + i, line, color)

    sub = 'TERMINAL SURVIVAL ARCADE'
    sx = width // 2 - len(sub) // 2
    renderer.buffer.put_string(sx, art_y + len(TITLE_ART) + 1, sub, COLOR_GRAY_MED)

    if (frame // 30) % 2 == 0:
        prompt = '[ PRESS SPACE TO START ]' if sessions == 0 else '[ PRESS SPACE TO TRY AGAIN ]'
        px = width // 2 - len(prompt) // 2
        renderer.buffer.put_string(px, art_y + len(TITLE_ART) + 3, prompt, COLOR_XP)

    controls = [
        'WASD/ARROWS - Steer     SPACE - Nova',
        '1/2/3 - Pick upgrade    F - Toggle FPS',
        'Q/ESC - Quit',
    ]
    cy = art_y + len(TITLE_ART) + 5
    for i, line in enumerate(controls):
        cx = width // 2 - len(line) // 2
        renderer.buffer.put_string(cx, cy + i, line, COLOR_GRAY_DARK)

    renderer.draw_box(0, 0, width, height, COLOR_GRAY_DARKER, '.', with_shake=False)


def render_reticle(renderer: GameRenderer, game: Game):
    world = game.world
    cx, cy = renderer.playfield_cell(world.pointer_x, world.pointer_y)
    renderer.put(cx, cy, RETICLE_CHAR, COLOR_WHITE, with_shake=False)


# =============================================================================
# FRONT-END STATE
# =============================================================================

class GameState:
    """Terminal front-end: phases, input routing and frame rendering."""

    def __init__(self, term: Terminal, audio=None):
        self.term = term
        self.renderer = GameRenderer(term)
        self.input_handler = InputHandler()
        self.hud = HudState()

        width, height = self.renderer.playfield_size
        self.game = Game(width, height, audio)

        self.running = True
        self.phase = PHASE_TITLE
        self.phase_frame = 0

    def start_game(self):
        self.input_handler.reset()
        self.hud.reset()
        self.game.start_game()
        self.phase = PHASE_PLAYING
        self.phase_frame = 0

    def _sync_phase(self):
        """Follow the simulation: title after a reset, overlay while an offer is up."""
        if not self.game.running:
            phase = PHASE_TITLE
        elif self.game.pending_offer:
            phase = PHASE_UPGRADE_SELECT
        else:
            phase = PHASE_PLAYING

        if phase != self.phase:
            self.phase = phase
            self.phase_frame = 0

    def check_resize(self):
        """Rebuild buffers and the viewport if the terminal changed size."""
        width, height = self.term.width, self.term.height
        if width == self.renderer.width and height == self.renderer.height:
            return
        if width < MIN_WIDTH or height < MIN_HEIGHT:
            return

        self.renderer.resize(width, height)
        self.game.resize(*self.renderer.playfield_size)
        print(self.term.home + self.term.clear, end='', flush=True)

    def update(self, dt: float):
        self.phase_frame += 1
        self.input_handler.update(dt)

        if self.phase == PHASE_TITLE:
            return

        self.input_handler.steer_reticle(self.game.world, dt)
        for event in self.game.tick(dt):
            self.hud.on_event(event)
        self.hud.update(dt)

        self._sync_phase()

    def render(self):
        """Render one frame."""
        renderer = self.renderer
        renderer.begin_frame()

        if self.phase == PHASE_TITLE:
            renderer.set_shake((0.0, 0.0))
            render_title_screen(renderer, self.phase_frame, self.game.sessions)
        else:
            world = self.game.world
            renderer.set_shake(world.shake_offset())
            render_reticle(renderer, self.game)
            renderer.draw_commands(self.game.render())
            render_hud(renderer, self.game.hud_snapshot(), self.hud,
                       self.game.kills, len(world.enemies))

            offer = self.game.pending_offer
            if offer:
                render_upgrade_select(renderer, offer, world.player.level,
                                      self.phase_frame)

        output = renderer.end_frame()
        if output:
            print(output, end='', flush=True)

    def handle_input(self):
        """Drain all pending input from the terminal."""
        key = self.term.inkey(timeout=0)
        while key:
            if self.phase == PHASE_TITLE:
                if key.name == 'KEY_ESCAPE' or (not key.is_sequence and key.lower() == 'q'):
                    self.running = False
                    return
                # Steering repeats from the last session must not restart it
                if not self.input_handler.is_move_key(key):
                    self.start_game()
                    return
            else:
                self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)

        handler = self.input_handler
        if handler.consume_quit():
            self.running = False
            return

        if handler.consume_toggle_fps():
            self.renderer.show_fps = not self.renderer.show_fps

        if handler.consume_nova() and self.phase == PHASE_PLAYING:
            self.game.activate_nova()

        choice = handler.consume_choice()
        offer = self.game.pending_offer
        if choice is not None and offer and choice < len(offer):
            self.game.choose_upgrade(choice)
            self._sync_phase()


# =============================================================================
# MAIN LOOP
# =============================================================================

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='neon-swarm',
        description='Terminal survival arcade: outlast the swarm.',
    )
    parser.add_argument('--fps', type=int, default=TARGET_FPS,
                        help='target frame rate (default: %(default)s)')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed the random generator for a repeatable run')
    parser.add_argument('--log-file', default=None,
                        help='write log records to this file')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='log level for --log-file (default: %(default)s)')
    parser.add_argument('--bell', action='store_true',
                        help='ring the terminal bell on loud audio cues')
    return parser.parse_args(argv)


def configure_logging(log_file=None, level: str = 'INFO'):
    """
    Route the package's log records.

    Writing to the terminal would corrupt the screen, so records go to a
    file or nowhere.
    """
    root = logging.getLogger()
    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        ))
        root.setLevel(getattr(logging, level))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)


def main(argv=None):
    """Entry point. Sets up terminal and runs the game loop."""
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    if args.seed is not None:
        random.seed(args.seed)

    term = Terminal()

    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    frame_time = 1.0 / max(1, args.fps)
    audio = BellAudio() if args.bell else LogAudio()

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        state = GameState(term, audio)
        log.info('terminal %dx%d, playfield %.0fx%.0f units', term.width, term.height,
                 *state.renderer.playfield_size)

        last_time = time.perf_counter()
        fps_timer = 0.0
        fps_frame_count = 0

        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)

        while state.running:
            now = time.perf_counter()
            delta = now - last_time
            last_time = now

            # Clamp delta so a stall doesn't teleport everything
            delta = min(delta, MAX_FRAME_DELTA)
            fps_timer += delta
            fps_frame_count += 1

            state.check_resize()
            state.handle_input()
            state.update(delta)
            state.render()

            if fps_timer >= 0.5:
                state.renderer.current_fps = fps_frame_count / fps_timer
                fps_frame_count = 0
                fps_timer = 0.0

            elapsed = time.perf_counter() - now
            sleep_time = frame_time - elapsed
            if sleep_time > 0.001:
                time.sleep(sleep_time * 0.9)

        print(term.normal, end='', flush=True)

    log.info('quit')


if __name__ == '__main__':
    main()
