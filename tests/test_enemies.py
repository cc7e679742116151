"""Tests for enemy behavior, death side effects and XP gems."""

import pytest

from neon_swarm.config import (
    XP_GEM_LIFETIME, XP_GEM_PULL_SPEED_BASE, PARTICLE_COUNT_ENEMY_DEATH,
    PARTICLE_COUNT_HIT, SHAKE_INTENSITY,
)
from neon_swarm.enemies import (
    create_enemy, update_enemy, damage_enemy, on_enemy_death,
    spawn_xp_gem, update_gem,
)
from neon_swarm.projectiles import spawn_projectile, update_projectile


class TestEnemy:

    def test_chases_player(self, world, player):
        enemy = create_enemy(world, 100, 300, radius=12)
        update_enemy(world, enemy, 1.0)
        assert enemy.x == pytest.approx(150)
        assert enemy.y == pytest.approx(300)

    def test_health_scales_with_level(self, world):
        assert create_enemy(world, 0, 0, level=4).health == 40
        assert create_enemy(world, 0, 0, level=4, elite=True).health == 120

    def test_non_lethal_damage(self, world, player):
        enemy = create_enemy(world, 100, 100, level=3)
        assert damage_enemy(world, enemy, 10) is False
        assert enemy.health == 20
        assert not enemy.deleted
        assert len(world.particles) == PARTICLE_COUNT_HIT
        assert world.xp_gems == []

    def test_kill_drops_exactly_one_gem(self, world, player, audio):
        enemy = create_enemy(world, 100, 120)
        assert damage_enemy(world, enemy, 10) is True

        assert enemy.deleted
        (gem,) = world.xp_gems
        assert (gem.x, gem.y) == (100, 120)
        assert gem.value == enemy.xp_value
        assert gem.is_elite is False
        assert world.shake.active
        assert world.shake.intensity == SHAKE_INTENSITY
        assert audio.names() == ['enemy_death']
        assert len(world.particles) == PARTICLE_COUNT_HIT + PARTICLE_COUNT_ENEMY_DEATH

    def test_elite_kill(self, world, player, audio):
        enemy = create_enemy(world, 100, 120, elite=True)
        damage_enemy(world, enemy, 1000)

        (gem,) = world.xp_gems
        assert gem.is_elite
        assert gem.value == 100
        assert gem.radius == 10
        assert audio.names() == ['enemy_death', 'elite_kill']

    def test_dead_enemy_ignores_further_hits(self, world, player):
        enemy = create_enemy(world, 100, 120)
        damage_enemy(world, enemy, 10)
        assert damage_enemy(world, enemy, 10) is False
        assert len(world.xp_gems) == 1

    def test_contact_death_drops_nothing(self, world, player, audio):
        enemy = create_enemy(world, 100, 120, elite=True)
        enemy.deleted = True
        on_enemy_death(world, enemy, no_xp=True)

        assert world.xp_gems == []
        assert audio.names() == ['enemy_death']
        assert world.shake.active


class TestXPGem:

    def test_expires(self, world, player):
        gem = spawn_xp_gem(world, 10, 10, 20)
        update_gem(world, gem, XP_GEM_LIFETIME - 0.01)
        assert not gem.deleted
        update_gem(world, gem, 0.02)
        assert gem.deleted

    def test_pulled_when_close(self, world, player):
        gem = spawn_xp_gem(world, player.x + 30, player.y, 20)
        update_gem(world, gem, 0.01)
        assert gem.x == pytest.approx(player.x + 30 - XP_GEM_PULL_SPEED_BASE * 0.01)

    def test_ignored_when_far(self, world, player):
        gem = spawn_xp_gem(world, player.x + 100, player.y, 20)
        update_gem(world, gem, 0.01)
        assert gem.x == player.x + 100

    def test_uses_session_pull_speed(self, world, player):
        world.gem_pull_speed = 600
        gem = spawn_xp_gem(world, player.x, player.y + 40, 20)
        update_gem(world, gem, 0.01)
        assert gem.y == pytest.approx(player.y + 34)


class TestProjectile:

    def test_flies(self, world):
        proj = spawn_projectile(world, 100, 100, 300, -300)
        update_projectile(world, proj, 0.1)
        assert (proj.x, proj.y) == pytest.approx((130, 70))
        assert not proj.deleted

    def test_despawns_beyond_padding(self, world):
        proj = spawn_projectile(world, 799, 300, 300, 0)
        update_projectile(world, proj, 0.01)
        assert not proj.deleted  # x=802, still within its radius of the edge
        update_projectile(world, proj, 0.02)
        assert proj.deleted
