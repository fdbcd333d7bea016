# quadplay

Game logic in plain Python, with no dependencies beyond the standard library. It contains the following modules:

- `quadplay.geometry` holds `Vec2`, an immutable 2D vector, and `Rect`, an axis-aligned rectangle.
  - `Vec2` supports `+`, `-`, scalar `*` and `/`, `length()` and `normalize()`.
  - `Rect` has `overlaps()` and `contains()`.
- `quadplay.platformer` holds `World`, a pixel-stepped platformer physics world. A world has:
  - static tile layers, filled with `Tile.EMPTY`, `Tile.SOLID` and `Tile.JUMP_THROUGH`;
  - actors, added with `add_actor()` and moved with `move_h()`, `move_v()` and `descent()`;
  - moving solids, added with `add_solid()` and moved with `solid_move()`.

  A moving solid carries the actors that ride on top of it and pushes the actors in its path. An actor that cannot be pushed out of the way is marked squished, which `squished()` reports.
- `quadplay.particle_config` holds the settings for particle emitters:
  - `EmitterConfig`;
  - size curves: `Curve` and its sampled form `BatchedCurve`;
  - `Color` and `ColorCurve`;
  - emission shapes: `PointEmission`, `RectEmission` and `SphereEmission`;
  - `BlendMode`;
  - sprite-sheet layouts: `AtlasConfig`, built with `AtlasConfig.from_range()`.

  `Curve.batch()` raises `ValueError` for Bezier interpolation.
- `quadplay.emitter` holds the particle simulation.
  - `Emitter.update(dt, position)` spawns, ages and animates particles, and returns the ones still alive.
  - `EmittersCache` keeps a pool of emitters that share one configuration.
- `quadplay.life` runs Conway's Game of Life on a bounded grid, through `random_grid()` and `next_generation()`.
- `quadplay.snake` holds `SnakeGame`, with `steer()`, `tick()` and `restart()`, and the `Direction` enum.
- `quadplay.angles` holds the helpers `short_angle_dist()`, `angle_lerp()` and `wrap_rotation()`, for rotating smoothly in degrees.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

The first example drops an actor onto solid ground:

```python
from quadplay.geometry import Vec2
from quadplay.platformer import Tile, World

world = World()
# Three rows of 40 tiles, each tile 8x8: two empty rows above one solid row.
world.add_static_tiled_layer([Tile.EMPTY] * 80 + [Tile.SOLID] * 40, 8.0, 8.0, 40, 1)
player = world.add_actor(Vec2(50.0, 0.0), 8, 8)

while world.move_v(player, 1.0):
    pass
print(world.actor_pos(player))  # Vec2(x=50.0, y=8.0)
```

The second example runs a particle emitter:

```python
import random

from quadplay.emitter import Emitter
from quadplay.geometry import Vec2
from quadplay.particle_config import EmitterConfig

emitter = Emitter(EmitterConfig(amount=20, lifetime=0.5), rng=random.Random(1))
for _ in range(30):
    particles = emitter.update(1 / 60, Vec2(100.0, 100.0))
```

The third example plays a few moves of Snake:

```python
from quadplay.snake import Direction, SnakeGame

game = SnakeGame()
game.steer(Direction.DOWN)
game.tick()
print(game.head, game.score, game.game_over)
```

The fourth example smooths a camera rotation:

```python
from quadplay.angles import angle_lerp

smooth = 0.0
for _ in range(10):
    smooth = angle_lerp(smooth, 350.0, 0.1)  # turns the short way, through 0
```

## What it does not do

The package only keeps game state and does not display anything:

- It has no window, no drawing, no sound, no keyboard or mouse input and no command-line program.
- `Emitter.update()` returns particle positions, sizes, colours and atlas UVs for you to draw with your own renderer.
- The caller drives timing. `SnakeGame.speed` is the interval between moves that the game suggests; you decide when to call `tick()`.