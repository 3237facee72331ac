"""Headless reef simulation: prey, predators and food over procedural terrain."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass

from reefflock.boid import BoidKind, BoidParams, Features
from reefflock.flock import Flock
from reefflock.terrain import Terrain, generate_terrain

SPAWN_COUNT = 10
TERRAIN_SCALE = 15


@dataclass
class Settings:
    """User-adjustable simulation settings and their defaults."""

    amplitude: float = 2.5
    frequency: float = 0.1
    octaves: float = 1.0
    prey_max_speed: float = 0.25
    prey_max_force: float = 0.10
    predator_max_speed: float = 0.5
    predator_max_force: float = 0.10
    predator_vision_radius: float = 60.0
    prey_vision_radius: float = 40.0
    interaction_radius: float = 10.0
    separation_radius: float = 20.0
    alignment_radius: float = 35.0
    cohesion_radius: float = 35.0
    enable_collision_rays: bool = True
    enable_seek_food_point: bool = True
    show_mesh_collision: bool = True
    show_health: bool = True


class Simulation:
    """Prey, predator and food flocks sharing one terrain."""

    def __init__(self, settings: Settings | None = None, seed: int | None = None):
        self.settings = settings or Settings()
        self.scale = TERRAIN_SCALE
        rng = random.Random(seed)
        self._terrain_key: tuple[float, float, float, float] | None = None
        self.terrain = self._build_terrain()
        self.flock = Flock(BoidKind.PREY, rng=rng)
        self.predators = Flock(BoidKind.PREDATOR, rng=rng)
        self.food = Flock(BoidKind.FOOD, rng=rng)
        for flock in (self.flock, self.predators, self.food):
            flock.generate_flock(SPAWN_COUNT)

    def _build_terrain(self) -> Terrain:
        s = self.settings
        self._terrain_key = (s.amplitude, s.frequency, s.octaves, self.scale)
        return generate_terrain(s.amplitude, s.frequency, s.octaves, self.scale)

    @property
    def height_map(self) -> list[list[float]]:
        return self.terrain.height_map

    def params(self) -> BoidParams:
        s = self.settings
        return BoidParams(
            prey_max_speed=s.prey_max_speed,
            prey_max_force=s.prey_max_force,
            predator_max_speed=s.predator_max_speed,
            predator_max_force=s.predator_max_force,
            predator_vision_radius=s.predator_vision_radius,
            prey_vision_radius=s.prey_vision_radius,
            interaction_radius=s.interaction_radius,
            separation_radius=s.separation_radius,
            alignment_radius=s.alignment_radius,
            cohesion_radius=s.cohesion_radius,
        )

    def features(self) -> Features:
        s = self.settings
        return Features(
            enable_collision_rays=s.enable_collision_rays,
            enable_seek_food_point=s.enable_seek_food_point,
            show_mesh_collision=s.show_mesh_collision,
            show_health=s.show_health,
        )

    def update(self) -> None:
        """Rebuild the terrain if its settings changed and push settings to boids."""
        s = self.settings
        if self._terrain_key != (s.amplitude, s.frequency, s.octaves, self.scale):
            self.terrain = self._build_terrain()
        params = self.params()
        features = self.features()
        for flock in (self.flock, self.predators, self.food):
            flock.update(params, features)

    def step(self) -> None:
        """Advance prey, then predators, then food by one frame."""
        height_map = self.height_map
        self.flock.step(self.predators.boids, self.food.boids, height_map)
        self.predators.step([], self.flock.boids, height_map)
        self.food.step(self.flock.boids, [], height_map)

    def key_pressed(self, key: str) -> Flock | None:
        """Spawn more food ('f'), prey ('b') or predators ('p'); return that flock."""
        flock = {"f": self.food, "b": self.flock, "p": self.predators}.get(key)
        if flock is not None:
            flock.generate_flock(SPAWN_COUNT)
        return flock

    def counts(self) -> dict[str, int]:
        return {
            "prey": len(self.flock.boids),
            "predators": len(self.predators.boids),
            "food": len(self.food.boids),
        }


def _format_counts(frame: int, counts: dict[str, int]) -> str:
    parts = " ".join(f"{name}={count}" for name, count in counts.items())
    return f"frame {frame}: {parts}"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="reefflock", description="Run the reef flocking simulation headless."
    )
    parser.add_argument("--steps", type=int, default=300, help="frames to simulate")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--report-every", type=int, default=0, help="print counts every N frames"
    )
    args = parser.parse_args(argv)
    if args.steps < 0:
        parser.error("--steps must not be negative")

    simulation = Simulation(seed=args.seed)
    for frame in range(1, args.steps + 1):
        simulation.update()
        simulation.step()
        if args.report_every > 0 and frame % args.report_every == 0:
            print(_format_counts(frame, simulation.counts()))
    print(_format_counts(args.steps, simulation.counts()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())