"""Alpha-cooled force simulation.

``alpha`` starts at 1 and decays toward ``alpha_target`` every tick; forces are
scaled by it, so the system relaxes and then stops. Reheating (raising alpha or
the target) lets it move again without resetting positions or velocities.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

import numpy as np

from garden.layout.forces import phyllotaxis

logger = logging.getLogger(__name__)

ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
VELOCITY_DECAY = 0.4


class Force(Protocol):
    def __call__(self, sim: "Simulation", alpha: float) -> None: ...


Constraint = Callable[["Simulation"], None]


class Simulation:
    def __init__(
        self,
        n: int,
        positions: np.ndarray | None = None,
        seed: int | None = None,
    ) -> None:
        self.rng = np.random.default_rng(seed)
        self.positions = np.array(positions, dtype=float) if positions is not None else phyllotaxis(n)
        self.velocities = np.zeros((n, 2))
        # NaN means free; a number pins that axis.
        self.fixed = np.full((n, 2), np.nan)

        self.alpha = 1.0
        self.alpha_min = ALPHA_MIN
        self.alpha_decay = ALPHA_DECAY
        self.alpha_target = 0.0
        self.velocity_decay = VELOCITY_DECAY
        self.running = True
        self.tick_count = 0

        self._forces: dict[str, Force] = {}
        self.constraints: list[Constraint] = []

    def __len__(self) -> int:
        return len(self.positions)

    def force(self, name: str, force: Force | None = None) -> Force | None:
        """Register, replace or (with None) remove a named force."""
        if force is None:
            return self._forces.pop(name, None)
        self._forces[name] = force
        return force

    def get_force(self, name: str) -> Force | None:
        return self._forces.get(name)

    def tick(self, iterations: int = 1) -> None:
        for _ in range(iterations):
            self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
            for force in self._forces.values():
                force(self, self.alpha)

            free = np.isnan(self.fixed)
            self.velocities *= 1 - self.velocity_decay
            self.positions = np.where(free, self.positions + self.velocities, self.fixed)
            self.velocities = np.where(free, self.velocities, 0.0)
            for constraint in self.constraints:
                constraint(self)
            self.tick_count += 1

    def step(self) -> bool:
        """One animation frame. Returns False once the simulation has cooled."""
        if not self.running:
            return False
        self.tick()
        if self.alpha < self.alpha_min and self.alpha_target < self.alpha_min:
            self.running = False
            logger.debug("Simulation cooled after %d ticks", self.tick_count)
        return self.running

    def settle(self, iterations: int = 300) -> None:
        """Run a fixed number of ticks synchronously, then stop."""
        self.tick(iterations)
        self.running = False

    def reheat(self, alpha: float = 0.3) -> None:
        self.alpha = max(self.alpha, alpha)
        self.running = True

    def stop(self) -> None:
        self.running = False

    def pin(self, index: int, x: float, y: float) -> None:
        self.fixed[index] = (x, y)

    def unpin(self, index: int) -> None:
        self.fixed[index] = (np.nan, np.nan)

    def is_pinned(self, index: int) -> bool:
        return not np.isnan(self.fixed[index]).all()

    def position(self, index: int) -> tuple[float, float]:
        x, y = self.positions[index]
        return (float(x), float(y))
