"""Predator-prey boid simulation over a noise-generated seabed, run headless."""

__version__ = "0.1.0"
__all__ = ["__version__"]