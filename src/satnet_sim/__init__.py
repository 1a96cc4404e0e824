"""Orbital-mechanics and simulated-time engine for an Earth-centred satellite scene.

This package provides the simulation core behind the Satnet viewer:
- Orbit solver: Kepler-ellipse positions for satellites and the Sun/Earth/Moon
- Simulated clock: calendar with a user-scalable time rate and time travel
- Fleet and launch-site helpers that turn catalogs into per-frame positions

Calendar arithmetic uses rms-julian; vectors are numpy arrays.
"""

__all__: list[str] = []
