"""Tests for the command line and the logging setup."""

import io
import logging

import pytest
from blessed import Terminal
from blessed.keyboard import Keystroke

from neon_swarm.config import TARGET_FPS, ENEMY_CONTACT_DAMAGE
from neon_swarm.audio import RecordingAudio
from neon_swarm.enemies import create_enemy, spawn_xp_gem
from neon_swarm.main import (
    GameState, parse_args, configure_logging,
    PHASE_TITLE, PHASE_PLAYING, PHASE_UPGRADE_SELECT,
)


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.fps == TARGET_FPS
        assert args.seed is None
        assert args.log_file is None
        assert args.log_level == 'INFO'
        assert not args.bell

    def test_options(self):
        args = parse_args(['--fps', '30', '--seed', '7', '--bell',
                           '--log-file', 'swarm.log', '--log-level', 'DEBUG'])
        assert (args.fps, args.seed, args.bell) == (30, 7, True)
        assert (args.log_file, args.log_level) == ('swarm.log', 'DEBUG')

    def test_bad_level(self):
        with pytest.raises(SystemExit):
            parse_args(['--log-level', 'LOUD'])


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers[:]:
            if handler not in handlers:
                handler.close()
                root.removeHandler(handler)
        root.setLevel(level)

    def test_file_handler(self, tmp_path):
        path = tmp_path / 'swarm.log'
        configure_logging(str(path), 'DEBUG')
        logging.getLogger('neon_swarm.test').debug('hello swarm')
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert 'hello swarm' in path.read_text()

    def test_silent_by_default(self):
        configure_logging()
        assert any(isinstance(h, logging.NullHandler) for h in logging.getLogger().handlers)


# =============================================================================
# Front-end
# =============================================================================

@pytest.fixture
def state(monkeypatch):
    """Headless 80x24 front-end fed from a key list."""
    monkeypatch.setenv('COLUMNS', '80')
    monkeypatch.setenv('LINES', '24')
    term = Terminal(kind='xterm-256color', stream=io.StringIO(), force_styling=True)
    state = GameState(term, RecordingAudio())

    state.keys = []

    def inkey(timeout=None):
        return state.keys.pop(0) if state.keys else Keystroke('')

    monkeypatch.setattr(term, 'inkey', inkey)
    return state


def press(state, *chars):
    state.keys.extend(Keystroke(ch) for ch in chars)
    state.handle_input()


def offer_upgrade(state):
    player = state.game.world.player
    spawn_xp_gem(state.game.world, player.x, player.y, player.xp_to_next_level)
    state.update(0.0)


class TestGameState:

    def test_space_starts_from_title(self, state):
        assert state.phase == PHASE_TITLE
        press(state, ' ')
        assert state.phase == PHASE_PLAYING
        assert state.game.running
        assert state.game.sessions == 1

    def test_steering_keys_do_not_start(self, state):
        press(state, 'w', 'a')
        assert state.phase == PHASE_TITLE
        assert not state.game.running

    def test_quit_from_title(self, state):
        press(state, 'q')
        assert not state.running

    def test_offer_switches_phase(self, state):
        press(state, ' ')
        offer_upgrade(state)
        assert state.phase == PHASE_UPGRADE_SELECT
        assert len(state.game.pending_offer) == 3

    def test_number_key_chooses(self, state):
        press(state, ' ')
        offer_upgrade(state)

        press(state, '2')

        assert state.phase == PHASE_PLAYING
        assert state.game.pending_offer is None
        assert not state.game.world.paused

    def test_nova_ignored_during_offer(self, state):
        press(state, ' ')
        offer_upgrade(state)
        state.game.world.player.nova_available = True

        press(state, ' ')

        assert state.game.world.player.nova_available
        assert state.phase == PHASE_UPGRADE_SELECT

    def test_nova_while_playing(self, state):
        press(state, ' ')
        state.game.world.player.nova_available = True
        press(state, ' ')
        assert not state.game.world.player.nova_available

    def test_death_returns_to_title(self, state):
        press(state, ' ')
        world = state.game.world
        for _ in range(100 // ENEMY_CONTACT_DAMAGE):
            create_enemy(world, world.player.x, world.player.y)

        state.update(0.0)

        assert state.phase == PHASE_TITLE
        press(state, 'w')
        assert state.phase == PHASE_TITLE
        assert state.game.sessions == 1

    def test_hit_flashes_hud(self, state):
        press(state, ' ')
        world = state.game.world
        create_enemy(world, world.player.x, world.player.y)
        state.update(0.0)
        assert state.hud.flashing

    def test_renders_every_phase(self, state, capsys):
        state.render()
        press(state, ' ')
        state.render()
        offer_upgrade(state)
        state.render()
        assert capsys.readouterr().out
