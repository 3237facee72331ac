# reefflock

A headless simulation of fish over a seabed built from procedural noise.

Prey fish flock with separation, alignment and cohesion. They use look-ahead
collision rays to steer away from the terrain, flee predators they can see and
look for food when their health falls below 80 %. Predators lose health every
step and start hunting prey once they are hungry. A boid dies when it touches
the seabed or rises to the surface. Prey also die when a predator comes within
the interaction radius, and food is eaten when a prey fish comes that close.
Dead boids are removed at the start of the next step.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
reefflock [--steps N] [--seed SEED] [--report-every N]
```

- `--steps` sets the number of frames to simulate (default 300; must not be negative).
- `--seed` seeds the random generator so that a run can be repeated.
- `--report-every N` prints the population counts every N frames.

After the last frame the command prints one line such as
`frame 300: prey=10 predators=10 food=7`.

## Library use

```python
from reefflock.app import Settings, Simulation

sim = Simulation(Settings(), seed=1)
for _ in range(100):
    sim.update()   # push settings to every boid, rebuild terrain if needed
    sim.step()     # advance prey, then predators, then food

print(sim.counts())

sim.key_pressed("f")   # ten more pieces of food
sim.key_pressed("b")   # ten more prey
sim.key_pressed("p")   # ten more predators
```

`Settings` holds the terrain shape (`amplitude`, `frequency`, `octaves`), the
speed, force and vision limits for prey and predators, the interaction,
separation, alignment and cohesion radii, and the feature switches.
`Simulation.params()` and `Simulation.features()` turn these settings into the
`BoidParams` and `Features` that the boids use. Change a setting and call
`update()` to apply it. A change to a terrain setting rebuilds the seabed.

The building blocks can also be used on their own:

- `reefflock.vector`: `Vec3` is an immutable 3-D vector with `length`,
  `normalized`, `dot`, `cross` and `distance`. `rotate_about_axis` rotates a
  vector about an axis.
- `reefflock.boid`: `Boid` with its steering methods (`seek`, `flee`,
  `separate`, `align`, `cohere`, `flee_collision`, `apply_behaviors`), plus
  `update`, `check_edges`, `update_params` and `check_interaction`. The module
  also has `BoidKind` (prey, predator, food), `BoidParams`, `Features`,
  `random_boid` and `is_under_height_map`.
- `reefflock.flock`: `Flock` holds boids of one kind. It can generate new ones
  with `generate_flock`, `add` and `remove` boids, `update` the parameters of
  all of them, `remove_dead` boids and advance the group by one frame with
  `step`.
- `reefflock.terrain`: `noise2` (2-D simplex noise in [0, 1]),
  `octave_height` and `generate_terrain`. `generate_terrain` returns a
  `Terrain` with vertices, texture coordinates, triangle indices, face normals
  and a 100 × 100 height map.

## The world

Boids live in a box 750 units wide and deep, centred on the origin. It spans y
from -100 to 0 and wraps round on every side. The height map is laid over the
x–z extent of the box, and `is_under_height_map` checks a position against it.

## What it does not do

The package draws nothing. There is no window, camera, lighting, fish model,
skybox, slider panel or particle emitter. The `Features` switches are stored
on each boid but do not change how the simulation runs. The simulation can be
used only as a library and through the text-only `reefflock` command.