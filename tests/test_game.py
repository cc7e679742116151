"""Tests for the session lifecycle, level-up flow and boundaries."""

import pytest

from neon_swarm.config import (
    ENEMY_SPAWN_INTERVAL_BASE, XP_GEM_PULL_SPEED_BASE, ENEMY_CONTACT_DAMAGE,
)
from neon_swarm.enemies import create_enemy, damage_enemy, spawn_xp_gem
from neon_swarm.upgrades import UPGRADES, apply_upgrade


class TestLifecycle:

    def test_idle_game_does_nothing(self, game):
        assert game.tick(0.1) == []
        assert game.world.player is None
        assert game.hud_snapshot() is None

    def test_start(self, started_game, audio):
        world = started_game.world
        assert started_game.running
        assert (world.player.x, world.player.y) == (400, 300)
        assert (world.pointer_x, world.pointer_y) == (400, 300)
        assert audio.names() == ['game_start']
        assert started_game.sessions == 1

    def test_restart_resets(self, started_game):
        create_enemy(started_game.world, 10, 10)
        started_game.start_game()
        assert started_game.world.enemies == []
        assert started_game.sessions == 2

    def test_spawner_runs(self, started_game):
        started_game.tick(ENEMY_SPAWN_INTERVAL_BASE)
        assert len(started_game.world.enemies) == 1

    def test_kills_counted_per_session(self, started_game):
        enemy = create_enemy(started_game.world, 10, 10)
        damage_enemy(started_game.world, enemy, 100)
        assert started_game.kills == 1
        started_game.reset_game()
        assert started_game.kills == 0

    def test_death_resets_session(self, started_game):
        world = started_game.world
        started_game.spawner.interval = 1.0
        for _ in range(100 // ENEMY_CONTACT_DAMAGE):
            create_enemy(world, world.player.x, world.player.y)

        events = started_game.tick(0.0)

        assert events[-1]['type'] == 'player_died'
        assert not started_game.running
        assert world.player is None
        assert world.enemies == []
        assert started_game.spawner.interval == ENEMY_SPAWN_INTERVAL_BASE

    def test_tick_returns_published_events(self, started_game):
        world = started_game.world
        create_enemy(world, world.player.x, world.player.y)

        events = started_game.tick(0.0)

        assert [e['type'] for e in events] == ['player_hit', 'contact']
        assert world.events == []

    def test_gem_pull_is_per_session(self, started_game):
        apply_upgrade(started_game.world, 'gem_pull')
        started_game.start_game()
        assert started_game.world.gem_pull_speed == XP_GEM_PULL_SPEED_BASE


class TestLevelUp:

    def level_up(self, game, *values):
        player = game.world.player
        for value in values:
            spawn_xp_gem(game.world, player.x, player.y, value)
        game.tick(0.0)

    def test_offer_pauses(self, started_game):
        self.level_up(started_game, 100)

        offer = started_game.pending_offer
        assert len(offer) == 3
        assert all(upgrade_id in UPGRADES for upgrade_id in offer)
        assert started_game.world.paused
        assert started_game.hud_snapshot().paused

    def test_paused_tick_is_frozen(self, started_game):
        self.level_up(started_game, 100)
        enemy = create_enemy(started_game.world, 100, 100)

        assert started_game.tick(1.0) == []
        assert (enemy.x, enemy.y) == (100, 100)

    def test_choice_resumes(self, started_game):
        self.level_up(started_game, 100)
        chosen = started_game.pending_offer[1]

        assert started_game.choose_upgrade(1) == chosen
        assert started_game.pending_offer is None
        assert not started_game.world.paused

    def test_queued_level_ups(self, started_game):
        self.level_up(started_game, 100, 130)
        assert started_game.world.pending_level_ups == 2

        started_game.choose_upgrade(0)
        assert started_game.world.paused
        assert started_game.pending_offer is not None

        started_game.choose_upgrade(2)
        assert not started_game.world.paused
        assert started_game.pending_offer is None

    def test_choice_without_offer(self, started_game):
        with pytest.raises(RuntimeError):
            started_game.choose_upgrade(0)

    def test_choice_out_of_range(self, started_game):
        self.level_up(started_game, 100)
        with pytest.raises(ValueError):
            started_game.choose_upgrade(3)
        assert started_game.world.paused


class TestBoundaries:

    def test_nova_needs_session(self, game):
        assert game.activate_nova() is False

    def test_nova(self, started_game):
        started_game.world.player.nova_available = True
        assert started_game.activate_nova() is True

    def test_resize_clamps_player(self, started_game):
        started_game.resize(200, 100)
        player = started_game.world.player
        assert player.x <= 200 - player.radius
        assert player.y <= 100 - player.radius

    def test_bad_resize(self, started_game):
        with pytest.raises(ValueError):
            started_game.resize(0, 100)

    def test_pointer(self, started_game):
        started_game.set_pointer(10, 20)
        assert (started_game.world.pointer_x, started_game.world.pointer_y) == (10, 20)

    def test_hud_snapshot(self, started_game):
        player = started_game.world.player
        player.xp = 50
        snap = started_game.hud_snapshot()
        assert snap.health == 100
        assert snap.level == 1
        assert snap.xp_fraction == pytest.approx(0.5)
        assert not snap.nova_ready
