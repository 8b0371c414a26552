"""Pytest configuration for path tracer tests.

Shared fixtures: seeded random streams, common materials and small worlds.
The src/ directory is put on the import path by the pytest configuration in
pyproject.toml.
"""

import random

import pytest

from core.vector import Vector3
from geometry.mesh import Triangle
from geometry.sphere import Sphere
from geometry.world import World
from materials.dielectric import Dielectric
from materials.lambertian import Lambertian
from materials.light import Light
from materials.metal import Metal


@pytest.fixture
def rng():
    """A seeded random stream so every test run draws the same numbers."""
    return random.Random(1234)


@pytest.fixture
def gray():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def mixed_world():
    """A small world with every primitive and material kind."""
    n = Vector3(0, 0, 1)
    return World([
        Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Vector3(0.8, 0.8, 0.0))),
        Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.1, 0.2, 0.5))),
        Sphere(Vector3(-1, 0, -1), 0.5, Dielectric(1.5)),
        Sphere(Vector3(1, 0, -1), 0.5, Metal(Vector3(0.8, 0.6, 0.2), glossiness=0.7)),
        Sphere(Vector3(0, 2, -1), 0.3, Light(Vector3(4, 4, 4))),
        Triangle(Vector3(-2, -0.5, -3), Vector3(2, -0.5, -3), Vector3(0, 2, -3),
                 Metal(Vector3(0.9, 0.9, 0.9), glossiness=1.0), n, n, n),
    ])
