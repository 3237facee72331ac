"""Procedural terrain: layered simplex noise sampled onto a grid mesh."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from reefflock.vector import Vec3

WIDTH = 50
DEPTH = 50
STEP = 0.5

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0


def _permutation() -> tuple[int, ...]:
    table = list(range(256))
    random.Random(0).shuffle(table)
    return tuple(table + table)


_PERM = _permutation()


def _grad(hash_value: int, x: float, y: float) -> float:
    h = hash_value & 7
    u, v = (x, y) if h < 4 else (y, x)
    return (-u if h & 1 else u) + (-2.0 * v if h & 2 else 2.0 * v)


def _corner(hash_value: int, x: float, y: float) -> float:
    t = 0.5 - x * x - y * y
    if t < 0:
        return 0.0
    t *= t
    return t * t * _grad(hash_value, x, y)


def noise2(x: float, y: float) -> float:
    """Two-dimensional simplex noise mapped into [0, 1]."""
    s = (x + y) * _F2
    i = math.floor(x + s)
    j = math.floor(y + s)
    t = (i + j) * _G2
    x0 = x - (i - t)
    y0 = y - (j - t)
    i1, j1 = (1, 0) if x0 > y0 else (0, 1)
    x1 = x0 - i1 + _G2
    y1 = y0 - j1 + _G2
    x2 = x0 - 1.0 + 2.0 * _G2
    y2 = y0 - 1.0 + 2.0 * _G2
    ii = i & 255
    jj = j & 255
    n = (
        _corner(_PERM[ii + _PERM[jj]], x0, y0)
        + _corner(_PERM[ii + i1 + _PERM[jj + j1]], x1, y1)
        + _corner(_PERM[ii + 1 + _PERM[jj + 1]], x2, y2)
    )
    return min(max(20.0 * n + 0.5, 0.0), 1.0)


def octave_height(
    amplitude: float, frequency: float, octaves: float, x: float, y: float
) -> float:
    """Sum of noise octaves, halving amplitude and raising frequency by 1.5 each."""
    height = 0.0
    for _ in range(int(octaves)):
        height += noise2(x * frequency, y * frequency) * amplitude
        amplitude *= 0.5
        frequency *= 1.5
    return height


@dataclass
class Terrain:
    """A triangulated height field and its sampled height map."""

    vertices: list[Vec3] = field(default_factory=list)
    tex_coords: list[tuple[float, float]] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    height_map: list[list[float]] = field(default_factory=list)
    peak_row: int = -1
    peak_column: int = -1
    max_height: float = -99999.0


def _face_normal(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    return (b - a).cross(c - a).normalized()


def generate_terrain(
    amplitude: float, frequency: float, octaves: float, scale: float
) -> Terrain:
    """Build the 100 x 100 terrain grid used both for drawing and collisions."""
    rows = int(DEPTH / STEP)
    columns = int(WIDTH / STEP)
    terrain = Terrain(height_map=[[0.0] * columns for _ in range(rows)])

    for row in range(rows):
        y = row * STEP
        v = min(max(y / (DEPTH - 1), 0.0), 1.0)
        for column in range(columns):
            x = column * STEP
            raw = octave_height(amplitude, frequency, octaves, x, y)
            height = (raw - octaves) * 2.0 * amplitude
            terrain.vertices.append(Vec3(x - WIDTH / 2.0, height, y - DEPTH / 2.0))
            u = min(max(x / (WIDTH - 1), 0.0), 1.0)
            terrain.tex_coords.append((u, v))
            scaled = height * scale
            terrain.height_map[row][column] = scaled
            if scaled > terrain.max_height:
                terrain.max_height = scaled
                terrain.peak_row = row
                terrain.peak_column = column

    for y in range(columns - 1):
        for x in range(rows - 1):
            terrain.indices.extend(
                (
                    x + y * rows,
                    (x + 1) + y * rows,
                    x + (y + 1) * rows,
                    (x + 1) + y * rows,
                    (x + 1) + (y + 1) * rows,
                    x + (y + 1) * rows,
                )
            )

    corners = iter(terrain.indices)
    verts = terrain.vertices
    terrain.normals = [
        _face_normal(verts[a], verts[b], verts[c]) for a, b, c in zip(corners, corners, corners)
    ]
    return terrain