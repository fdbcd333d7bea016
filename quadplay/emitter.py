"""Particle emitters: spawning, ageing and animating particles over time."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass
from typing import Optional

from quadplay.geometry import Vec2
from quadplay.particle_config import BatchedCurve, EmitterConfig

_Vec4 = tuple[float, float, float, float]

_MAX_FRAME = 0xFFFF


@dataclass
class Particle:
    """A single live particle: what is drawn and what drives its motion."""

    position: Vec2
    rotation: float
    size: float
    color: _Vec4
    velocity: Vec2
    angular_velocity: float
    lifetime: float
    initial_size: float
    spawn_index: int
    uv: _Vec4 = (1.0, 1.0, 0.0, 0.0)
    life_fraction: float = 0.0
    lived: float = 0.0
    frame: int = 0


def _lerp4(a: _Vec4, b: _Vec4, t: float) -> _Vec4:
    return tuple(x * (1.0 - t) + y * t for x, y in zip(a, b))  # type: ignore[return-value]


def _randomized(base: float, randomness: float, rng: random.Random) -> float:
    return base - base * rng.uniform(0.0, randomness)


def _initial_velocity(direction: Vec2, spread: float, speed: float, rng: random.Random) -> Vec2:
    angle = rng.uniform(-spread / 2.0, spread / 2.0)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    rotated = Vec2(
        direction.x * cos_a - direction.y * sin_a,
        direction.x * sin_a + direction.y * cos_a,
    )
    return rotated * speed


class Emitter:
    """Spawns particles according to an EmitterConfig and advances them each frame."""

    MAX_PARTICLES = 10000

    def __init__(
        self,
        config: Optional[EmitterConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config if config is not None else EmitterConfig()
        self._rng = rng if rng is not None else random.Random()
        self.position = Vec2(0.0, 0.0)
        self._particles: list[Particle] = []
        self.last_emit_time = 0.0
        self.time_passed = 0.0
        self.particles_current_cycle = 0
        self.particles_spawned = 0
        self._batched_size_curve: Optional[BatchedCurve] = None
        self.rebuild_size_curve()

    @property
    def particles(self) -> tuple[Particle, ...]:
        """The particles currently alive."""
        return tuple(self._particles)

    def reset(self) -> None:
        """Drop all particles and restart the emission cycle."""
        self._particles.clear()
        self.last_emit_time = 0.0
        self.time_passed = 0.0
        self.particles_spawned = 0
        self.particles_current_cycle = 0

    def rebuild_size_curve(self) -> None:
        """Resample the size curve after `config.size_curve` has changed."""
        curve = self.config.size_curve
        self._batched_size_curve = curve.batch() if curve is not None else None

    def emit(self, pos: Vec2, n: int) -> None:
        """Emit `n` particles at once, ignoring `emitting` and `amount`."""
        for _ in range(n):
            self._emit_particle(pos)
            self.particles_spawned += 1

    def _emit_particle(self, offset: Vec2) -> None:
        config = self.config
        rng = self._rng
        offset = offset + config.emission_shape.random_point(rng)

        size = _randomized(config.size, config.size_randomness, rng)
        rotation = _randomized(config.initial_rotation, config.initial_rotation_randomness, rng)
        position = offset if config.local_coords else self.position + offset

        particle = Particle(
            position=position,
            rotation=rotation,
            size=size,
            color=config.colors_curve.start.to_vec(),
            velocity=_initial_velocity(
                config.initial_direction,
                config.initial_direction_spread,
                _randomized(config.initial_velocity, config.initial_velocity_randomness, rng),
                rng,
            ),
            angular_velocity=_randomized(
                config.initial_angular_velocity,
                config.initial_angular_velocity_randomness,
                rng,
            ),
            lifetime=_randomized(config.lifetime, config.lifetime_randomness, rng),
            initial_size=size,
            spawn_index=self.particles_spawned,
        )
        self.particles_spawned += 1
        self.particles_current_cycle += 1
        self._particles.append(particle)

    def _spawn(self, dt: float) -> None:
        config = self.config
        self.time_passed += dt
        if config.amount <= 0:
            return
        gap = (config.lifetime / config.amount) * (1.0 - config.explosiveness)
        if gap < 0.001:
            spawn_amount = config.amount
        else:
            spawn_amount = max(int((self.time_passed - self.last_emit_time) / gap), 0)

        for _ in range(spawn_amount):
            self.last_emit_time = self.time_passed
            if self.particles_spawned < config.amount:
                self._emit_particle(Vec2(0.0, 0.0))
            if len(self._particles) >= config.amount:
                break

    def _advance(self, particle: Particle, dt: float) -> None:
        config = self.config
        particle.velocity = particle.velocity + particle.velocity * (config.linear_accel * dt)
        particle.angular_velocity += particle.angular_velocity * config.angular_accel * dt
        particle.angular_velocity *= 1.0 - config.angular_damping

        fraction = particle.lived / particle.lifetime if particle.lifetime != 0.0 else 1.0
        colors = config.colors_curve
        if fraction < 0.5:
            particle.color = _lerp4(colors.start.to_vec(), colors.mid.to_vec(), fraction * 2.0)
        else:
            particle.color = _lerp4(colors.mid.to_vec(), colors.end.to_vec(), (fraction - 0.5) * 2.0)

        particle.position = particle.position + particle.velocity * dt
        particle.rotation += particle.angular_velocity * dt

        scale = 1.0
        if self._batched_size_curve is not None:
            scale = self._batched_size_curve.get(fraction)
        particle.size = particle.initial_size * scale

        if particle.lifetime != 0.0:
            particle.life_fraction = fraction

        particle.lived += dt
        particle.velocity = particle.velocity + config.gravity * dt

        atlas = config.atlas
        if atlas is not None:
            if particle.lifetime != 0.0:
                frame = int(
                    particle.lived / particle.lifetime * (atlas.end_index - atlas.start_index)
                )
                frame = min(max(frame, 0), _MAX_FRAME) + atlas.start_index
                particle.frame = min(max(frame, 0), _MAX_FRAME)
            column = particle.frame % atlas.n
            row = particle.frame // atlas.n
            particle.uv = (
                column / atlas.n,
                row / atlas.m,
                1.0 / atlas.n,
                1.0 / atlas.m,
            )
        else:
            particle.uv = (0.0, 0.0, 1.0, 1.0)

    def update(self, dt: float, position: Vec2) -> tuple[Particle, ...]:
        """Advance the emitter by `dt` seconds at `position`; return live particles."""
        self.position = position
        config = self.config

        if config.emitting:
            self._spawn(dt)

        if config.one_shot and self.particles_current_cycle >= config.amount:
            self.time_passed = 0.0
            self.last_emit_time = 0.0
            self.particles_current_cycle = 0
            config.emitting = False

        for particle in self._particles:
            self._advance(particle, dt)

        survivors: list[Particle] = []
        for particle in self._particles:
            if particle.lived >= particle.lifetime or particle.lived > config.lifetime:
                if particle.lived != particle.lifetime:
                    self.particles_spawned -= 1
            else:
                survivors.append(particle)
        self._particles = survivors
        return self.particles


class EmittersCache:
    """A pool of emitters sharing one configuration, spawned at many places."""

    CACHE_DEFAULT_SIZE = 10

    def __init__(self, config: EmitterConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self._rng = rng if rng is not None else random.Random()
        self._cache: list[Emitter] = [
            Emitter(dataclasses.replace(config, emitting=False), self._rng)
            for _ in range(self.CACHE_DEFAULT_SIZE)
        ]
        self._active: list[tuple[Emitter, Vec2]] = []

    @property
    def active_emitters(self) -> tuple[tuple[Emitter, Vec2], ...]:
        """Emitters currently running, with the position each was spawned at."""
        return tuple(self._active)

    @property
    def cached_count(self) -> int:
        """Number of idle emitters ready for reuse."""
        return len(self._cache)

    def spawn(self, pos: Vec2) -> None:
        """Start an emitter at `pos`, reusing an idle one when available."""
        if self._cache:
            emitter = self._cache.pop()
        else:
            emitter = Emitter(dataclasses.replace(self.config), self._rng)
        emitter.config.emitting = True
        emitter.reset()
        self._active.append((emitter, pos))

    def update(self, dt: float) -> None:
        """Advance every active emitter; finished ones go back to the pool."""
        still_active: list[tuple[Emitter, Vec2]] = []
        for emitter, pos in self._active:
            emitter.update(dt, pos)
            if emitter.config.emitting:
                still_active.append((emitter, pos))
            else:
                self._cache.append(emitter)
        self._active = still_active