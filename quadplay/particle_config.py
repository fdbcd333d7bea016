"""Configuration types for particle emitters: curves, colours, shapes and atlases."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from quadplay.geometry import Vec2


class Interpolation(Enum):
    """How points between a curve's key points are computed."""

    LINEAR = "linear"
    BEZIER = "bezier"


@dataclass(frozen=True)
class BatchedCurve:
    """A curve sampled at evenly spaced steps over 0..1."""

    points: tuple[float, ...]

    def get(self, t: float) -> float:
        """Value of the curve at `t` (0..1), interpolated between samples."""
        if not self.points:
            raise ValueError("cannot sample an empty curve")
        count = len(self.points)
        t_scaled = t * count
        previous_ix = min(max(int(t_scaled), 0), count - 1)
        next_ix = min(previous_ix + 1, count - 1)
        previous = self.points[previous_ix]
        following = self.points[next_ix]
        return previous + (following - previous) * (t_scaled - previous_ix)


@dataclass(frozen=True)
class Curve:
    """A piecewise curve given by (x, y) key points with x in 0..1."""

    points: tuple[tuple[float, float], ...] = ()
    interpolation: Interpolation = Interpolation.LINEAR
    resolution: int = 20

    def batch(self) -> BatchedCurve:
        """Sample the curve at steps of 1/resolution.

        Raises ValueError for Bezier interpolation, which is not supported.
        """
        if self.interpolation is Interpolation.BEZIER:
            raise ValueError("bezier interpolation is not supported")
        if self.resolution <= 0:
            raise ValueError("resolution must be positive")

        samples: list[float] = []
        step = 0
        for (start_x, start_y), (end_x, end_y) in zip(self.points, self.points[1:]):
            while (x := step / self.resolution) <= end_x:
                t = (x - start_x) / (end_x - start_x)
                samples.append(start_y + (end_y - start_y) * t)
                step += 1
        return BatchedCurve(tuple(samples))


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_vec(self) -> tuple[float, float, float, float]:
        """The colour as an (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)


WHITE = Color(1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class ColorCurve:
    """Colours a particle passes through over its lifetime."""

    start: Color = WHITE
    mid: Color = WHITE
    end: Color = WHITE


@dataclass(frozen=True)
class PointEmission:
    """Particles are emitted from a single point."""

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(0.0, 0.0)


@dataclass(frozen=True)
class RectEmission:
    """Particles are emitted anywhere inside a centred rectangle."""

    width: float
    height: float

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(
            rng.uniform(-self.width / 2.0, self.width / 2.0),
            rng.uniform(-self.height / 2.0, self.height / 2.0),
        )


@dataclass(frozen=True)
class SphereEmission:
    """Particles are emitted uniformly inside a centred disc."""

    radius: float

    def random_point(self, rng: random.Random) -> Vec2:
        ro = math.sqrt(rng.uniform(0.0, self.radius * self.radius))
        phi = rng.uniform(0.0, math.pi * 2.0)
        return Vec2(ro * math.cos(phi), ro * math.sin(phi))


EmissionShape = Union[PointEmission, RectEmission, SphereEmission]


class BlendMode(Enum):
    """How overlapping particles are blended."""

    ALPHA = "alpha"
    ADDITIVE = "additive"


@dataclass(frozen=True)
class AtlasConfig:
    """Sprite-sheet layout: n columns, m rows, and the frame range to animate."""

    n: int
    m: int
    start_index: int
    end_index: int

    @classmethod
    def from_range(
        cls,
        n: int,
        m: int,
        start: Optional[int],
        stop: Optional[int],
        inclusive: bool,
    ) -> AtlasConfig:
        """Build from a frame range; None bounds mean the start or end of the sheet."""
        start_index = 0 if start is None else start
        if stop is None:
            end_index = n * m
        elif inclusive:
            end_index = stop - 1
        else:
            end_index = stop
        return cls(n, m, start_index, end_index)


@dataclass
class EmitterConfig:
    """Everything that controls how an emitter spawns and animates particles."""

    local_coords: bool = False
    emission_shape: EmissionShape = field(default_factory=PointEmission)
    one_shot: bool = False
    lifetime: float = 1.0
    lifetime_randomness: float = 0.0
    explosiveness: float = 0.0
    amount: int = 8
    emitting: bool = True
    initial_direction: Vec2 = field(default_factory=lambda: Vec2(0.0, -1.0))
    initial_direction_spread: float = 0.0
    initial_velocity: float = 50.0
    initial_velocity_randomness: float = 0.0
    linear_accel: float = 0.0
    initial_rotation: float = 0.0
    initial_rotation_randomness: float = 0.0
    initial_angular_velocity: float = 0.0
    initial_angular_velocity_randomness: float = 0.0
    angular_accel: float = 0.0
    angular_damping: float = 0.0
    size: float = 10.0
    size_randomness: float = 0.0
    size_curve: Optional[Curve] = None
    blend_mode: BlendMode = BlendMode.ALPHA
    colors_curve: ColorCurve = field(default_factory=ColorCurve)
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    atlas: Optional[AtlasConfig] = None