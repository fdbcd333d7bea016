import random

import pytest

from quadplay.emitter import Emitter, EmittersCache, Particle
from quadplay.geometry import Vec2
from quadplay.particle_config import (
    AtlasConfig,
    Color,
    ColorCurve,
    Curve,
    EmitterConfig,
    RectEmission,
)


def make_emitter(**kwargs) -> Emitter:
    return Emitter(EmitterConfig(**kwargs), random.Random(7))


def test_default_emitter_spawns_one_particle_per_gap():
    emitter = make_emitter()
    particles = emitter.update(0.125, Vec2(100.0, 100.0))
    assert len(particles) == 1
    assert emitter.particles_spawned == 1


def test_particle_moves_along_initial_direction():
    emitter = make_emitter()
    (particle,) = emitter.update(0.125, Vec2(100.0, 100.0))
    assert isinstance(particle, Particle)
    assert particle.velocity.x == pytest.approx(0.0)
    assert particle.velocity.y == pytest.approx(-50.0)
    assert particle.position.x == pytest.approx(100.0)
    assert particle.position.y < 100.0


def test_full_explosiveness_spawns_whole_amount_at_once():
    emitter = make_emitter(explosiveness=1.0, amount=5)
    particles = emitter.update(0.01, Vec2(0.0, 0.0))
    assert len(particles) == 5


def test_one_shot_stops_emitting_after_cycle():
    emitter = make_emitter(one_shot=True, explosiveness=1.0, amount=3)
    emitter.update(0.01, Vec2(0.0, 0.0))
    assert emitter.config.emitting is False
    assert emitter.particles_current_cycle == 0
    assert emitter.time_passed == 0.0


def test_local_coords_ignore_emitter_position():
    emitter = make_emitter(local_coords=True, explosiveness=1.0, amount=2, initial_velocity=0.0)
    particles = emitter.update(0.01, Vec2(500.0, 500.0))
    assert all(p.position == Vec2(0.0, 0.0) for p in particles)


def test_world_coords_start_at_emitter_position():
    emitter = make_emitter(explosiveness=1.0, amount=2, initial_velocity=0.0)
    particles = emitter.update(0.01, Vec2(30.0, 40.0))
    assert all(p.position == Vec2(30.0, 40.0) for p in particles)


def test_particles_die_after_lifetime():
    emitter = make_emitter(explosiveness=1.0, amount=3, lifetime=0.5)
    emitter.update(0.125, Vec2(0.0, 0.0))
    emitter.config.emitting = False
    for _ in range(10):
        emitter.update(0.125, Vec2(0.0, 0.0))
    assert emitter.particles == ()


def test_lived_never_reaches_lifetime_while_alive():
    emitter = make_emitter(lifetime=0.5)
    for _ in range(20):
        particles = emitter.update(0.05, Vec2(0.0, 0.0))
        assert all(p.lived < p.lifetime for p in particles)
        assert len(particles) <= emitter.config.amount


def test_reset_clears_state():
    emitter = make_emitter(explosiveness=1.0, amount=4)
    emitter.update(0.1, Vec2(0.0, 0.0))
    emitter.reset()
    assert emitter.particles == ()
    assert emitter.particles_spawned == 0
    assert emitter.time_passed == 0.0


def test_emit_ignores_emitting_flag_and_counts_twice():
    emitter = make_emitter(emitting=False)
    emitter.emit(Vec2(0.0, 0.0), 4)
    assert len(emitter.particles) == 4
    assert emitter.particles_spawned == 8


def test_color_starts_at_curve_start():
    red = Color(1.0, 0.0, 0.0, 1.0)
    blue = Color(0.0, 0.0, 1.0, 1.0)
    emitter = make_emitter(
        explosiveness=1.0, amount=1, colors_curve=ColorCurve(start=red, mid=red, end=blue)
    )
    (particle,) = emitter.update(0.01, Vec2(0.0, 0.0))
    assert particle.color == red.to_vec()


def test_color_moves_towards_end_over_life():
    red = Color(1.0, 0.0, 0.0, 1.0)
    blue = Color(0.0, 0.0, 1.0, 1.0)
    emitter = make_emitter(
        explosiveness=1.0, amount=1, lifetime=1.0, colors_curve=ColorCurve(red, red, blue)
    )
    emitter.update(0.1, Vec2(0.0, 0.0))
    emitter.config.emitting = False
    blues = []
    for _ in range(8):
        (particle,) = emitter.update(0.1, Vec2(0.0, 0.0))
        blues.append(particle.color[2])
    assert blues == sorted(blues)
    assert blues[-1] > 0.0


def test_atlas_first_frame_uv():
    emitter = make_emitter(
        explosiveness=1.0, amount=1, atlas=AtlasConfig.from_range(4, 4, 0, 8, False)
    )
    (particle,) = emitter.update(0.001, Vec2(0.0, 0.0))
    assert particle.frame == 0
    assert particle.uv == (0.0, 0.0, 0.25, 0.25)


def test_atlas_frame_stays_within_range():
    atlas = AtlasConfig.from_range(4, 4, 8, None, False)
    emitter = make_emitter(lifetime=0.4, atlas=atlas)
    for _ in range(30):
        for p in emitter.update(0.03, Vec2(0.0, 0.0)):
            assert atlas.start_index <= p.frame <= atlas.end_index


def test_without_atlas_uv_covers_whole_texture():
    emitter = make_emitter(explosiveness=1.0, amount=1)
    (particle,) = emitter.update(0.01, Vec2(0.0, 0.0))
    assert particle.uv == (0.0, 0.0, 1.0, 1.0)


def test_gravity_changes_velocity():
    emitter = make_emitter(explosiveness=1.0, amount=1, initial_velocity=0.0, gravity=Vec2(0.0, 100.0))
    emitter.config.emitting = True
    emitter.update(0.1, Vec2(0.0, 0.0))
    emitter.config.emitting = False
    before = emitter.particles[0].velocity.y
    (particle,) = emitter.update(0.1, Vec2(0.0, 0.0))
    assert particle.velocity.y > before


def test_size_curve_scales_size():
    curve = Curve(points=((0.0, 0.5), (0.5, 1.0), (1.0, 0.0)))
    emitter = make_emitter(explosiveness=1.0, amount=1, size_curve=curve)
    (particle,) = emitter.update(0.001, Vec2(0.0, 0.0))
    assert particle.size == pytest.approx(particle.initial_size * curve.batch().get(0.0))


def test_rebuild_size_curve_applies_new_curve():
    emitter = make_emitter(explosiveness=1.0, amount=1)
    curve = Curve(points=((0.0, 0.5), (1.0, 0.5)))
    emitter.config.size_curve = curve
    emitter.rebuild_size_curve()
    (particle,) = emitter.update(0.001, Vec2(0.0, 0.0))
    assert particle.size == pytest.approx(emitter.config.size * 0.5)


def test_rect_emission_stays_inside_rect():
    emitter = make_emitter(
        explosiveness=1.0, amount=20, initial_velocity=0.0,
        emission_shape=RectEmission(width=10.0, height=4.0),
    )
    particles = emitter.update(0.01, Vec2(0.0, 0.0))
    assert all(-5.0 <= p.position.x <= 5.0 and -2.0 <= p.position.y <= 2.0 for p in particles)


def test_same_seed_gives_same_particles():
    config_kwargs = dict(explosiveness=1.0, amount=5, initial_direction_spread=1.0, size_randomness=0.5)
    a = Emitter(EmitterConfig(**config_kwargs), random.Random(3))
    b = Emitter(EmitterConfig(**config_kwargs), random.Random(3))
    assert a.update(0.05, Vec2(1.0, 2.0)) == b.update(0.05, Vec2(1.0, 2.0))


def test_spread_keeps_speed():
    emitter = make_emitter(explosiveness=1.0, amount=10, initial_direction_spread=3.0)
    for p in emitter.update(0.01, Vec2(0.0, 0.0)):
        assert p.velocity.length() == pytest.approx(emitter.config.initial_velocity)


def test_cache_spawn_takes_from_pool():
    cache = EmittersCache(EmitterConfig(one_shot=True, explosiveness=1.0, amount=2), random.Random(1))
    assert cache.cached_count == EmittersCache.CACHE_DEFAULT_SIZE
    cache.spawn(Vec2(5.0, 5.0))
    assert cache.cached_count == EmittersCache.CACHE_DEFAULT_SIZE - 1
    assert len(cache.active_emitters) == 1
    assert cache.active_emitters[0][1] == Vec2(5.0, 5.0)


def test_cache_returns_finished_emitters():
    cache = EmittersCache(EmitterConfig(one_shot=True, explosiveness=1.0, amount=2), random.Random(1))
    cache.spawn(Vec2(0.0, 0.0))
    cache.update(0.01)
    assert cache.active_emitters == ()
    assert cache.cached_count == EmittersCache.CACHE_DEFAULT_SIZE


def test_cache_grows_beyond_pool():
    cache = EmittersCache(EmitterConfig(), random.Random(1))
    for _ in range(EmittersCache.CACHE_DEFAULT_SIZE + 2):
        cache.spawn(Vec2(0.0, 0.0))
    assert cache.cached_count == 0
    assert len(cache.active_emitters) == EmittersCache.CACHE_DEFAULT_SIZE + 2


def test_cache_does_not_mutate_shared_config():
    config = EmitterConfig(one_shot=True, explosiveness=1.0, amount=2)
    cache = EmittersCache(config, random.Random(1))
    cache.spawn(Vec2(0.0, 0.0))
    cache.update(0.01)
    assert config.emitting is True