"""Relativistic and Newtonian two-frame kinematics."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

Vector = tuple[float, float, float]

# In the Newtonian limit the speed of light is taken as unbounded.
_NEWTONIAN_LIGHT_SPEED = math.inf


def _dot(u: Sequence[float], v: Sequence[float]) -> float:
    return sum(a * b for a, b in zip(u, v))


@dataclass(frozen=True)
class Einstein:
    """Relativistic kinematics; energies and pc in MeV, velocities in cm/ns."""

    c: float = 30.0
    n_mass: float = 931.478
    scale: float = 1.0

    def get_momentum(self, e_kin: float, mass: float) -> float:
        """Return pc for a kinetic energy and rest mass."""
        return math.sqrt((e_kin + mass) ** 2 - mass ** 2)

    def get_ke(self, pc: float, mass: float) -> float:
        """Return the kinetic energy for a momentum pc and rest mass."""
        return math.sqrt(pc ** 2 + mass ** 2) - mass

    def transform_momentum(
        self, mom: Sequence[float], v_reference: Sequence[float], energy_tot: float
    ) -> tuple[float, Vector]:
        """Boost a momentum into the frame moving with v_reference.

        Returns the total energy in the new frame and the new momentum vector.
        """
        dot = _dot(mom, v_reference)
        vv2 = _dot(v_reference, v_reference)
        if vv2 == 0:
            raise ValueError("reference velocity must be non-zero")
        para = [dot / vv2 * v for v in v_reference]
        perp = [p - q for p, q in zip(mom, para)]
        para_old = math.sqrt(_dot(para, para))
        speed = math.sqrt(vv2)

        g = self.gamma(speed)
        para_new = (para_old - energy_tot * speed / self.c) * g
        if para_old > 0:
            direction = [q / para_old for q in para]
        else:
            direction = [v / speed for v in v_reference]
        mom_new = tuple(p + para_new * d for p, d in zip(perp, direction))

        energy_new = g * (energy_tot - speed * para_old / self.c)
        return energy_new, mom_new  # type: ignore[return-value]

    def gamma(self, vel: float) -> float:
        """Return the Lorentz factor for a speed in cm/ns."""
        return 1.0 / math.sqrt(1 - (vel / self.c) ** 2)


@dataclass(frozen=True)
class Newton:
    """Newtonian kinematics; masses in MeV, velocities in cm/ns."""

    c: float = 0.9784
    n_mass: float = 1.0
    scale: float = 0.0

    def get_momentum(self, e_kin: float, mass: float) -> float:
        """Return the momentum for a kinetic energy and mass."""
        return math.sqrt(2.0 * mass * e_kin)

    def transform_momentum(
        self, mom: Sequence[float], v_reference: Sequence[float], mass: float
    ) -> tuple[float, Vector]:
        """Shift a momentum into the frame moving with v_reference.

        Returns the kinetic energy in the new frame and the new momentum vector.
        """
        mom_new = tuple(p - mass * v / self.c for p, v in zip(mom, v_reference))
        e_kin = _dot(mom_new, mom_new) / (2.0 * mass)
        return e_kin, mom_new  # type: ignore[return-value]

    def gamma(self, vel: float) -> float:
        """Return the Lorentz factor in the Newtonian limit, which is 1 for any finite speed."""
        return 1.0 / math.sqrt(1 - (vel / _NEWTONIAN_LIGHT_SPEED) ** 2)