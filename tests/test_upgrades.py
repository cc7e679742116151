"""Tests for the upgrade catalog and its effects."""

import pytest

from neon_swarm.upgrades import UPGRADES, select_upgrades, apply_upgrade


class TestSelection:

    def test_catalog(self):
        assert len(UPGRADES) == 9
        for data in UPGRADES.values():
            assert data['name']
            assert data['description']
            assert callable(data['apply'])

    def test_offer_is_three_distinct(self):
        for _ in range(50):
            offer = select_upgrades()
            assert len(offer) == 3
            assert len(set(offer)) == 3
            assert all(upgrade_id in UPGRADES for upgrade_id in offer)


class TestEffects:

    def test_multi_shot(self, world, player):
        apply_upgrade(world, 'multi_shot')
        assert player.multi_shot == 2

    def test_attack_speed(self, world, player):
        apply_upgrade(world, 'attack_speed')
        assert player.fire_rate == pytest.approx(0.16)

    def test_damage_floors(self, world, player):
        apply_upgrade(world, 'damage')
        assert player.projectile_damage == 11

    def test_move_speed_floors(self, world, player):
        apply_upgrade(world, 'move_speed')
        # 100 * 1.15 lands just below 115 in floating point
        assert player.speed == 114

    def test_max_health_heals(self, world, player):
        apply_upgrade(world, 'max_health')
        assert (player.health, player.max_health) == (125, 125)

    def test_pierce(self, world, player):
        apply_upgrade(world, 'pierce')
        assert player.projectile_pierce == 1

    def test_chain_stacks(self, world, player):
        apply_upgrade(world, 'chain_lightning')
        assert player.chain_lightning_chance == 5
        apply_upgrade(world, 'chain_lightning')
        assert player.chain_lightning_chance == 10

    def test_nova(self, world, player):
        apply_upgrade(world, 'nova')
        assert player.nova_available

    def test_gem_pull(self, world, player):
        apply_upgrade(world, 'gem_pull')
        assert world.gem_pull_speed == pytest.approx(375)

    def test_unknown(self, world, player):
        assert apply_upgrade(world, 'laser') is False

    def test_no_player(self, world):
        assert apply_upgrade(world, 'pierce') is False
