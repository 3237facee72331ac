"""Groups of boids of one kind that are spawned, stepped and culled together."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from reefflock.boid import (
    Boid,
    BoidKind,
    BoidParams,
    Features,
    HeightMap,
    is_under_height_map,
    random_boid,
)

RED = (255, 0, 0)
GREEN = (0, 255, 0)


@dataclass(eq=False)
class Flock:
    """A collection of boids that share a kind."""

    kind: BoidKind = BoidKind.PREY
    boids: list[Boid] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random)

    def generate_flock(self, num_boids: int) -> None:
        """Spawn ``num_boids`` new boids configured for this flock's kind."""
        for _ in range(num_boids):
            boid = random_boid(self.rng)
            if self.kind is BoidKind.PREDATOR:
                boid.kind = BoidKind.PREDATOR
                boid.fish_color = RED
                boid.max_speed = 0.2
                boid.max_force = 0.003
                boid.vision_radius = 50.0
            elif self.kind is BoidKind.FOOD:
                boid.kind = BoidKind.FOOD
                boid.fish_color = GREEN
                boid.max_speed = 0.0
                boid.max_force = 0.0
                boid.vision_radius = 0.0
            self.boids.append(boid)

    def add(self, boid: Boid) -> None:
        self.boids.append(boid)

    def remove(self, index: int) -> None:
        """Remove the boid at ``index``; raises IndexError when out of range."""
        del self.boids[index]

    def remove_dead(self) -> None:
        """Drop every boid whose health has run out, keeping the same list."""
        self.boids[:] = [boid for boid in self.boids if boid.health > 0]

    def update(self, params: BoidParams, features: Features) -> None:
        for boid in self.boids:
            boid.update_params(params, features)

    def step(
        self,
        predators: Sequence[Boid],
        prey: Sequence[Boid],
        height_map: HeightMap,
    ) -> None:
        """Cull the dead, then steer, resolve contacts and move every boid."""
        self.remove_dead()
        for boid in self.boids:
            if boid.kind is BoidKind.FOOD:
                # Food never steers: its speed and force limits are zero.
                if is_under_height_map(boid.position, height_map):
                    boid.health = 0
            else:
                boid.apply_behaviors(self.boids, predators, prey, height_map)
            boid.check_interaction(predators)
            boid.update()