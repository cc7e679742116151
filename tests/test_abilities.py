"""Tests for chain lightning and Nova."""

from neon_swarm.abilities import (
    trigger_chain_lightning, chain_candidates, activate_nova, roll_chain,
)
from neon_swarm.config import PARTICLE_COUNT_NOVA, NOVA_SHAKE_INTENSITY
from neon_swarm.enemies import create_enemy


class TestChainLightning:

    def test_no_candidates_no_hops(self, world, player):
        origin = create_enemy(world, 100, 100)
        assert trigger_chain_lightning(world, origin) == 0
        assert world.particles == []

    def test_two_hops_bounce_back(self, world, player):
        origin = create_enemy(world, 100, 100, level=10)
        other = create_enemy(world, 150, 100, level=10)

        hops = trigger_chain_lightning(world, origin)

        assert hops == 2
        assert other.health == 93
        assert origin.health == 93
        assert world.particles

    def test_candidates(self, world, player):
        current = create_enemy(world, 100, 100)
        near = create_enemy(world, 250, 100)
        create_enemy(world, 300, 100)  # exactly at range
        dead = create_enemy(world, 110, 100)
        dead.deleted = True

        assert chain_candidates(world, current) == [near]

    def test_cascade(self, world, player):
        player.chain_lightning_chance = 100
        origin = create_enemy(world, 100, 100)
        origin.deleted = True
        cluster = [create_enemy(world, 100 + i * 10, 120) for i in range(4)]
        for enemy in cluster:
            enemy.health = 7

        hops = trigger_chain_lightning(world, origin)

        assert hops == 4
        assert all(e.deleted for e in cluster)
        assert len(world.xp_gems) == 4
        assert world.kills == 4

    def test_roll_without_chance(self, world, player):
        assert roll_chain(world) is False


class TestNova:

    def test_unavailable(self, world, player):
        enemy = create_enemy(world, 100, 100)
        assert activate_nova(world) is False
        assert enemy.health == enemy.max_health

    def test_refused_while_paused(self, world, player):
        player.nova_available = True
        world.paused = True
        assert activate_nova(world) is False
        assert player.nova_available

    def test_fires_once(self, world, player, audio):
        player.nova_available = True
        tough = create_enemy(world, 100, 100, level=20)
        weak = create_enemy(world, 700, 500)

        assert activate_nova(world) is True

        assert not player.nova_available
        assert tough.health == 100
        assert weak.deleted
        assert len(world.particles) >= PARTICLE_COUNT_NOVA
        assert 'nova' in audio.names()
        assert activate_nova(world) is False

    def test_shakes_hard(self, world, player):
        player.nova_available = True
        create_enemy(world, 100, 100, level=20)
        activate_nova(world)
        assert world.shake.active
        assert world.shake.intensity == NOVA_SHAKE_INTENSITY
