"""Individual boids: steering behaviours, terrain collision and lifecycle."""

from __future__ import annotations

import colorsys
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from reefflock.vector import Vec3, rotate_about_axis

Color = tuple[int, int, int]
HeightMap = Sequence[Sequence[float]]

BOX_HALF_LENGTH = 375.0
WATER_TOP = 0.0
WATER_BOTTOM = -100.0
SURFACE_LIMIT = 5.0
HEIGHT_MAP_RANGE = 99
FLEE_SPEED = 0.05
HUNGER_THRESHOLD = 0.8

SEPARATION_WEIGHT = 1.3
ALIGNMENT_WEIGHT = 1.0
COHESION_WEIGHT = 1.0
COLLISION_WEIGHT = 4.0
FLEE_PREDATOR_WEIGHT = 2.5
SEEK_PREY_WEIGHT = 2.5

_ZERO = Vec3()
_UP = Vec3(0.0, 1.0, 0.0)
_X_AXIS = Vec3(1.0, 0.0, 0.0)


class BoidKind(Enum):
    PREY = "prey"
    PREDATOR = "predator"
    FOOD = "food"


@dataclass
class BoidParams:
    """Tunable steering parameters shared by a simulation."""

    prey_max_speed: float
    prey_max_force: float
    predator_max_speed: float
    predator_max_force: float
    predator_vision_radius: float
    prey_vision_radius: float
    interaction_radius: float
    separation_radius: float
    alignment_radius: float
    cohesion_radius: float


@dataclass
class Features:
    """Debug visualisation switches."""

    enable_collision_rays: bool = False
    enable_seek_food_point: bool = False
    show_mesh_collision: bool = False
    show_health: bool = False


def _limit(vec: Vec3, maximum: float) -> Vec3:
    if vec.length() > maximum:
        return vec.normalized() * maximum
    return vec


def _hsb_to_rgb(hue: float, saturation: float, brightness: float) -> Color:
    r, g, b = colorsys.hsv_to_rgb(hue / 255.0, saturation / 255.0, brightness / 255.0)
    return (round(r * 255), round(g * 255), round(b * 255))


def is_under_height_map(position: Vec3, height_map: HeightMap) -> bool:
    """True when ``position`` lies on or below the terrain or above the surface."""
    if not height_map or not height_map[0]:
        raise ValueError("height map is empty")
    span = 2 * BOX_HALF_LENGTH
    x = int((position.x + BOX_HALF_LENGTH) / span * HEIGHT_MAP_RANGE)
    z = int((position.z + BOX_HALF_LENGTH) / span * HEIGHT_MAP_RANGE)
    x = min(max(x, 0), len(height_map[0]) - 1)
    z = min(max(z, 0), len(height_map) - 1)
    return position.y <= height_map[z][x] or position.y >= SURFACE_LIMIT


@dataclass(eq=False)
class Boid:
    """A single fish, predator or food particle."""

    position: Vec3 = _ZERO
    velocity: Vec3 = _ZERO
    acceleration: Vec3 = _ZERO
    seek_position: Vec3 = _ZERO
    kind: BoidKind = BoidKind.PREY
    collision_radius: float = 15.0
    max_speed: float = 0.1
    max_force: float = 0.005
    fish_color: Color = (255, 255, 255)
    old_color: Color = (255, 255, 255)
    under_height: bool = False
    features: Features = field(default_factory=Features)
    vision_radius: float = 30.0
    interaction_radius: float = 5.0
    health: int = 10000
    max_health: int = 10000
    separation_radius: float = 20.0
    alignment_radius: float = 35.0
    cohesion_radius: float = 35.0

    def rays(self) -> list[Vec3]:
        """Collision probes: forward, left, right, up and down at 45 degrees."""
        v = self.velocity
        radius = self.collision_radius
        up = _UP if abs(v.dot(_UP)) < 0.99 else _X_AXIS
        right = v.cross(up).normalized()
        adjusted_up = v.cross(right).normalized()
        quarter = math.pi / 4.0

        def probe(angle: float, axis: Vec3) -> Vec3:
            return rotate_about_axis(v, angle, axis).normalized() * radius

        return [
            v.normalized() * radius,
            probe(quarter, adjusted_up),
            probe(-quarter, adjusted_up),
            probe(-quarter, right),
            probe(quarter, right),
        ]

    def update(self) -> None:
        """Integrate one step of motion and wrap around the tank."""
        self.velocity = _limit(self.velocity + self.acceleration, self.max_speed)
        self.position = self.position + self.velocity
        self.check_edges()
        self.acceleration = _ZERO

    def set_radii(self, separation: float, alignment: float, cohesion: float) -> None:
        self.separation_radius = separation
        self.alignment_radius = alignment
        self.cohesion_radius = cohesion

    def apply_force(self, force: Vec3) -> None:
        self.acceleration = self.acceleration + force

    def seek(self, target: Vec3) -> Vec3:
        steer = (target - self.position).normalized() * self.max_speed
        return _limit(steer, self.max_force)

    def flee(self, target: Vec3) -> Vec3:
        steer = (self.position - target).normalized() * FLEE_SPEED
        return _limit(steer, self.max_force)

    def _neighbours(self, boids: Sequence[Boid], radius: float):
        for other in boids:
            dist = self.position.distance(other.position)
            if other is not self and dist < radius:
                yield other, dist

    def separate(self, boids: Sequence[Boid]) -> Vec3:
        total = _ZERO
        count = 0
        for other, dist in self._neighbours(boids, self.separation_radius):
            weight = 1.0 / dist if dist else math.inf
            total = total + (self.position - other.position).normalized() * weight
            count += 1
        if not count:
            return _ZERO
        desired = total.normalized() * self.max_speed
        return _limit(desired - self.velocity, self.max_force)

    def align(self, boids: Sequence[Boid]) -> Vec3:
        total = _ZERO
        count = 0
        for other, _ in self._neighbours(boids, self.alignment_radius):
            total = total + other.velocity
            count += 1
        if not count:
            return _ZERO
        desired = total.normalized() * self.max_speed
        return _limit(desired - self.velocity, self.max_force)

    def cohere(self, boids: Sequence[Boid]) -> Vec3:
        total = _ZERO
        count = 0
        for other, _ in self._neighbours(boids, self.cohesion_radius):
            total = total + other.position
            count += 1
        if not count:
            return _ZERO
        return self.seek(total / count)

    def flee_collision(self, height_map: HeightMap) -> Vec3:
        """Steer away from the average point where probes hit the terrain."""
        hits = [
            end
            for end in (self.position + ray for ray in self.rays())
            if is_under_height_map(end, height_map)
        ]
        if not hits:
            return _ZERO
        centre = sum(hits, _ZERO) / len(hits)
        return self.flee(centre)

    def _seek_food(self, targets: Sequence[Boid]) -> Vec3:
        location = None
        for target in targets:
            if self.position.distance(target.position) < self.vision_radius:
                location = target.position
        if location is None:
            return _ZERO
        self.seek_position = location
        return self.seek(location)

    def apply_behaviors(
        self,
        boids: Sequence[Boid],
        predators: Sequence[Boid],
        prey: Sequence[Boid],
        height_map: HeightMap,
    ) -> None:
        """Accumulate all steering forces for this step."""
        separation = self.separate(boids)
        alignment = self.align(boids)
        cohesion = self.cohere(boids)
        collision = self.flee_collision(height_map)

        flee_predator = _ZERO
        seek_prey = _ZERO
        health_fraction = self.health / self.max_health

        if self.kind is BoidKind.PREDATOR:
            self.health -= 1
            if health_fraction < HUNGER_THRESHOLD:
                seek_prey = self._seek_food(prey)
        elif self.kind is BoidKind.PREY:
            self.health -= 1
            near = [
                p.position
                for p in predators
                if self.position.distance(p.position) < self.vision_radius
            ]
            if near:
                flee_predator = self.flee(sum(near, _ZERO) / len(near))
            if health_fraction < HUNGER_THRESHOLD:
                self.separation_radius = self.interaction_radius
                seek_prey = self._seek_food(prey)

        if is_under_height_map(self.position, height_map):
            self.health = 0

        for force in (
            separation * SEPARATION_WEIGHT,
            alignment * ALIGNMENT_WEIGHT,
            cohesion * COHESION_WEIGHT,
            collision * COLLISION_WEIGHT,
            flee_predator * FLEE_PREDATOR_WEIGHT,
            seek_prey * SEEK_PREY_WEIGHT,
        ):
            self.apply_force(force)

    def check_edges(self) -> None:
        """Wrap the position around the tank's bounds."""
        x, y, z = self.position
        if x > BOX_HALF_LENGTH:
            x = -BOX_HALF_LENGTH
        elif x < -BOX_HALF_LENGTH:
            x = BOX_HALF_LENGTH
        if y > WATER_TOP:
            y = WATER_BOTTOM
        elif y < WATER_BOTTOM:
            y = WATER_TOP
        if z > BOX_HALF_LENGTH:
            z = -BOX_HALF_LENGTH
        elif z < -BOX_HALF_LENGTH:
            z = BOX_HALF_LENGTH
        self.position = Vec3(x, y, z)

    def update_params(self, params: BoidParams, features: Features) -> None:
        if self.kind is BoidKind.PREY:
            self.max_speed = params.prey_max_speed
            self.max_force = params.prey_max_force
            self.vision_radius = params.prey_vision_radius
        elif self.kind is BoidKind.PREDATOR:
            self.max_speed = params.predator_max_speed
            self.max_force = params.predator_max_force
            self.vision_radius = params.predator_vision_radius
        self.interaction_radius = params.interaction_radius
        self.separation_radius = params.separation_radius
        self.alignment_radius = params.alignment_radius
        self.cohesion_radius = params.cohesion_radius
        self.features = Features(
            enable_collision_rays=bool(features.enable_collision_rays),
            enable_seek_food_point=bool(features.enable_seek_food_point),
            show_mesh_collision=bool(features.show_mesh_collision),
            show_health=bool(features.show_health),
        )

    def check_interaction(self, predators: Sequence[Boid]) -> None:
        """Die when any predator comes within the interaction radius."""
        for predator in predators:
            if self.position.distance(predator.position) < self.interaction_radius:
                self.health = 0


def random_boid(rng: random.Random | None = None) -> Boid:
    """A prey boid with random motion, placement and an orange or blue colour."""
    rng = rng or random.Random()
    velocity = Vec3(rng.uniform(-0.1, 0.1), rng.uniform(0, 0), rng.uniform(-0.1, 0.1))
    acceleration = Vec3(
        rng.uniform(-0.1, 0.1), rng.uniform(-0.1, 0.1), rng.uniform(-0.1, 0.1)
    )
    position = Vec3(rng.uniform(-300, 300), rng.uniform(-50, 0), rng.uniform(-300, 300))
    if rng.uniform(0, 1) < 0.5:
        hue = rng.uniform(20, 40)
    else:
        hue = rng.uniform(190, 210)
    color = _hsb_to_rgb(hue, rng.uniform(150, 255), rng.uniform(150, 255))
    return Boid(
        position=position,
        velocity=velocity,
        acceleration=acceleration,
        fish_color=color,
        old_color=color,
    )