"""Forces over numpy position and velocity arrays.

Each force is a callable ``force(sim, alpha)`` that nudges ``sim.velocities``.
Constraints run after integration and act on positions directly.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy.spatial import cKDTree

if TYPE_CHECKING:
    from garden.layout.simulation import Simulation


def _jiggle(rng: np.random.Generator, size: int) -> np.ndarray:
    return (rng.random(size) - 0.5) * 1e-6


class ForceX:
    """Pull every item toward its own horizontal target."""

    def __init__(self, targets: np.ndarray | float, strength: float = 0.3) -> None:
        self.targets = targets
        self.strength = strength

    def set_targets(self, targets: np.ndarray | float) -> None:
        self.targets = targets

    def __call__(self, sim: Simulation, alpha: float) -> None:
        sim.velocities[:, 0] += (self.targets - sim.positions[:, 0]) * self.strength * alpha


class ForceY:
    """Pull every item toward a shared baseline."""

    def __init__(self, target: float, strength: float = 0.6) -> None:
        self.target = target
        self.strength = strength

    def __call__(self, sim: Simulation, alpha: float) -> None:
        sim.velocities[:, 1] += (self.target - sim.positions[:, 1]) * self.strength * alpha


class Collide:
    """Separate overlapping circles, splitting the push by relative area."""

    def __init__(self, radii: np.ndarray, strength: float = 0.7, iterations: int = 1) -> None:
        self.radii = np.asarray(radii, dtype=float)
        self.strength = strength
        self.iterations = iterations

    def __call__(self, sim: Simulation, alpha: float) -> None:
        if len(self.radii) < 2:
            return
        reach = 2 * float(self.radii.max())
        for _ in range(self.iterations):
            predicted = sim.positions + sim.velocities
            pairs = cKDTree(predicted).query_pairs(reach, output_type="ndarray")
            if len(pairs) == 0:
                return
            i, j = pairs[:, 0], pairs[:, 1]
            delta = predicted[i] - predicted[j]
            dist2 = np.einsum("ij,ij->i", delta, delta)
            r_sum = self.radii[i] + self.radii[j]
            overlapping = dist2 < r_sum ** 2
            if not overlapping.any():
                return
            i, j, delta, dist2, r_sum = i[overlapping], j[overlapping], delta[overlapping], dist2[overlapping], r_sum[overlapping]

            # Coincident centres get a tiny random separation.
            zero = dist2 == 0
            if zero.any():
                delta[zero] = _jiggle(sim.rng, 2 * int(zero.sum())).reshape(-1, 2)
                dist2[zero] = np.einsum("ij,ij->i", delta[zero], delta[zero])

            dist = np.sqrt(dist2)
            push = ((r_sum - dist) / dist * self.strength)[:, None] * delta
            ri2 = self.radii[i] ** 2
            rj2 = self.radii[j] ** 2
            share = (rj2 / (ri2 + rj2))[:, None]
            np.add.at(sim.velocities, i, push * share)
            np.add.at(sim.velocities, j, -push * (1 - share))


class ManyBody:
    """Pairwise charge within ``distance_max``. Negative strength repels."""

    def __init__(self, strength: float = -5.0, distance_min: float = 1.0, distance_max: float = 200.0) -> None:
        self.strength = strength
        self.distance_min = distance_min
        self.distance_max = distance_max

    def __call__(self, sim: Simulation, alpha: float) -> None:
        if len(sim.positions) < 2:
            return
        pairs = cKDTree(sim.positions).query_pairs(self.distance_max, output_type="ndarray")
        if len(pairs) == 0:
            return
        i, j = pairs[:, 0], pairs[:, 1]
        delta = sim.positions[j] - sim.positions[i]
        dist2 = np.einsum("ij,ij->i", delta, delta)
        zero = dist2 == 0
        if zero.any():
            delta[zero] = _jiggle(sim.rng, 2 * int(zero.sum())).reshape(-1, 2)
            dist2[zero] = np.einsum("ij,ij->i", delta[zero], delta[zero])
        min2 = self.distance_min ** 2
        near = dist2 < min2
        dist2[near] = np.sqrt(min2 * dist2[near])
        w = (self.strength * alpha / dist2)[:, None]
        np.add.at(sim.velocities, i, delta * w)
        np.add.at(sim.velocities, j, -delta * w)


class VerticalBounds:
    """Clamp each item's y into ``[r + top, height - r - bottom]``."""

    def __init__(self, radii: np.ndarray, height: float, top: float = 60.0, bottom: float = 20.0) -> None:
        self.radii = np.asarray(radii, dtype=float)
        self.height = height
        self.top = top
        self.bottom = bottom

    def limits(self) -> tuple[np.ndarray, np.ndarray]:
        low = self.radii + self.top
        high = self.height - self.radii - self.bottom
        # Too short a band centres the item on the canvas instead.
        short = high < low
        middle = np.full_like(low, self.height / 2)
        return np.where(short, middle, low), np.where(short, middle, high)

    def clamp_y(self, index: int, y: float) -> float:
        low, high = self.limits()
        return float(min(max(y, low[index]), high[index]))

    def __call__(self, sim: Simulation) -> None:
        low, high = self.limits()
        np.clip(sim.positions[:, 1], low, high, out=sim.positions[:, 1])


def phyllotaxis(n: int, initial_radius: float = 10.0) -> np.ndarray:
    """Sunflower spiral used to seed positions deterministically."""
    angle = math.pi * (3 - math.sqrt(5))
    i = np.arange(n, dtype=float)
    r = initial_radius * np.sqrt(0.5 + i)
    return np.column_stack((r * np.cos(i * angle), r * np.sin(i * angle)))
