"""Correlations between particles detected in one event: relative energy and Q-values."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from gobbisort.kinematics import Einstein, Newton, Vector
from gobbisort.masses import TOTAL_MASS
from gobbisort.solution import Solution

MAX_PER_TYPE = 6
"""Largest number of particles of one type kept per event."""

_MAX_MASS = 1_000_000.0

_PARTICLES = (
    ("proton", 1, 1),
    ("h2", 1, 2),
    ("h3", 1, 3),
    ("h3_fake", 1, 3),
    ("he3", 2, 3),
    ("alpha", 2, 4),
    ("he6", 2, 6),
    ("li6", 3, 6),
    ("li7", 3, 7),
    ("li8", 3, 8),
    ("li9", 3, 9),
    ("be7", 4, 7),
    ("be9", 4, 9),
)

# Beam kinetic energies (MeV) of the reactions checked below.
_TKE_MISSING_MASS = 38.505
_TKE_Q_VALUE = 38.6
_TKE_TARGET = 42.8213


def _dot(u: Sequence[float], v: Sequence[float]) -> float:
    return sum(a * b for a, b in zip(u, v))


def _norm(u: Sequence[float]) -> float:
    return math.sqrt(_dot(u, u))


def _safe_ratio(num: float, den: float) -> float:
    return num / den if den != 0 else math.nan


@dataclass
class ParticleType:
    """Detected particles of one isotope in the current event."""

    name: str
    z: int
    a: int
    solutions: list[Solution] = field(default_factory=list)
    mask: list[bool] = field(default_factory=lambda: [False] * MAX_PER_TYPE)

    @property
    def mult(self) -> int:
        return len(self.solutions)

    def zero_mask(self) -> None:
        """Deselect every particle of this type."""
        self.mask = [False] * MAX_PER_TYPE

    def set_mask(self) -> None:
        """Select every particle of this type."""
        self.mask = [True] * MAX_PER_TYPE


class Correlator:
    """Sorts identified particles by isotope and analyses chosen combinations."""

    def __init__(self, kinematics: Einstein | Newton | None = None) -> None:
        self.kinematics = kinematics if kinematics is not None else Einstein()
        self.particles = [ParticleType(name, z, a) for name, z, a in _PARTICLES]
        self.by_name = {p.name: p for p in self.particles}
        self.frag: list[Solution] = []

        self.mtot: Vector = (0.0, 0.0, 0.0)
        self.momentum_cm = 0.0
        self.velocity_cm = 0.0
        self.theta_cm = 0.0
        self.phi_cm = 0.0
        self.check_ke = 0.0
        self.check_mass = 0.0
        self.cos_theta_h = math.nan

        self.mom_c: Vector = (0.0, 0.0, 0.0)
        self.ptot_c = 0.0
        self.cos_alpha_q = math.nan

        self.cos_theta_t = math.nan
        self.cos_theta_y = [math.nan, math.nan]
        self.cos_theta_v = math.nan

    @property
    def n(self) -> int:
        return len(self.frag)

    def reset(self) -> None:
        """Forget all particles loaded for the previous event."""
        for particle in self.particles:
            particle.solutions.clear()

    def zero_mask(self) -> None:
        """Deselect every particle of every type."""
        for particle in self.particles:
            particle.zero_mask()

    def make_array(self, flag_mask: bool = False) -> None:
        """Collect the fragments to analyse, only masked ones when flag_mask is set."""
        self.frag = [
            sol
            for particle in self.particles
            for sol, selected in zip(particle.solutions, particle.mask)
            if not flag_mask or selected
        ]

    def load(self, fragment: Solution) -> None:
        """File a particle under the first type with its Z and A."""
        for particle in self.particles:
            if fragment.iz == particle.z and fragment.ia == particle.a:
                if particle.mult < MAX_PER_TYPE:
                    particle.solutions.append(fragment)
                break

    def find_erel(self) -> float:
        """Return the total kinetic energy of the fragments in their centre-of-mass frame."""
        if not self.frag:
            raise ValueError("no fragments to correlate")
        if any(f.mass > _MAX_MASS for f in self.frag):
            raise ValueError("fragment mass is unphysical")
        kin = self.kinematics

        energy_tot = sum(f.energy_tot for f in self.frag)
        self.mtot = tuple(sum(f.mvect[j] for f in self.frag) for j in range(3))  # type: ignore[assignment]
        self.momentum_cm = _norm(self.mtot)
        self.velocity_cm = self.momentum_cm * kin.c / energy_tot

        if self.momentum_cm > 0:
            vel: Vector | None = tuple(  # type: ignore[assignment]
                self.velocity_cm / self.momentum_cm * m for m in self.mtot
            )
            self.theta_cm = math.acos(vel[2] / self.velocity_cm)
            self.phi_cm = math.atan2(vel[1], vel[0])
        else:
            vel = None
            self.theta_cm = self.phi_cm = 0.0

        total = 0.0
        for f in self.frag:
            if vel is None and isinstance(kin, Einstein):
                e_new, mom = f.energy_tot, tuple(f.mvect)
            else:
                e_new, mom = kin.transform_momentum(
                    f.mvect, vel or (0.0, 0.0, 0.0), f.energy_tot
                )
            f.mom_cm = mom  # type: ignore[assignment]
            f.energy_cm = e_new - kin.scale * f.mass
            total += f.energy_cm
            self.check_ke = f.energy_cm
            self.check_mass = kin.scale * f.mass

        last = self.frag[-1].mom_cm
        self.cos_theta_h = _safe_ratio(last[2], _norm(last))

        if self.n == 3:
            heavy = self.frag[2].mom_cm
            mm = _norm(heavy)
            self.cos_alpha_q = _safe_ratio(_dot(heavy, self.mom_c), mm * self.ptot_c)

        return total

    def _require(self, count: int) -> None:
        if self.n < count:
            raise ValueError(f"needs at least {count} fragments, have {self.n}")

    def _missing_momentum(self, tke: float) -> list[float]:
        mass = TOTAL_MASS["6He"]
        beam = math.sqrt((tke + mass) ** 2 - mass ** 2)
        missing = [0.0, 0.0, beam]
        for f in self.frag:
            for j in range(3):
                missing[j] -= f.mvect[j]
        return missing

    def missing_mass(self) -> float:
        """Return the missing mass of a 6He + d reaction seen as two fragments."""
        self._require(2)
        missing = self._missing_momentum(_TKE_MISSING_MASS)
        e_miss = (
            _TKE_MISSING_MASS + TOTAL_MASS["6He"] + TOTAL_MASS["d"]
            - self.frag[0].energy_tot - self.frag[1].energy_tot
        )
        m2 = e_miss ** 2 - _dot(missing, missing)
        return math.sqrt(m2) if m2 >= 0 else math.nan

    def q_value(self) -> float:
        """Return the Q-value of 6He(d,n) with the neutron taking the missing momentum."""
        self._require(2)
        missing = self._missing_momentum(_TKE_Q_VALUE)
        e_neutron = _dot(missing, missing) / (2.0 * TOTAL_MASS["n"])
        return (
            _TKE_Q_VALUE - e_neutron
            - self.frag[0].energy_tot - self.frag[1].energy_tot
            + TOTAL_MASS["6He"] + TOTAL_MASS["p"]
        )

    def q_value2(self) -> float:
        """Return the Q-value of 6He(p,p) elastic scattering."""
        self._require(2)
        return (
            _TKE_Q_VALUE
            - self.frag[0].energy_tot - self.frag[1].energy_tot
            + TOTAL_MASS["6He"] + TOTAL_MASS["p"]
        )

    def target_ex(self) -> float:
        """Return the target excitation for 7Li break-up into a triton and an alpha."""
        self._require(2)
        kin = self.kinematics
        if not isinstance(kin, Einstein):
            raise TypeError("target excitation needs relativistic kinematics")
        m7li = TOTAL_MASS["7Li"]
        pc_proj = math.sqrt((_TKE_TARGET + m7li) ** 2 - m7li ** 2)
        pc_tar = (
            pc_proj
            - kin.get_momentum(self.frag[0].ekin, TOTAL_MASS["t"])
            - kin.get_momentum(self.frag[1].ekin, TOTAL_MASS["alpha"])
        )
        ke_tar = kin.get_ke(pc_tar, TOTAL_MASS["12C"])
        return (
            _TKE_TARGET + m7li - TOTAL_MASS["alpha"] - TOTAL_MASS["t"]
            - self.frag[0].ekin - self.frag[1].ekin - ke_tar
        )

    def get_jacobi(self) -> None:
        """Set the Jacobi T and Y angle cosines of a three-body decay."""
        self._require(3)
        f0, f1, f2 = self.frag[:3]
        for f in (f0, f1, f2):
            f.momentum_cm = _norm(f.mom_cm)

        pp = [a - b for a, b in zip(f0.mom_cm, f1.mom_cm)]
        self.cos_theta_t = _safe_ratio(_dot(pp, f2.mom_cm), _norm(pp) * f2.momentum_cm)

        pp1 = [a / f0.mass - b / f2.mass for a, b in zip(f0.mom_cm, f2.mom_cm)]
        pp2 = [a / f1.mass - b / f2.mass for a, b in zip(f1.mom_cm, f2.mom_cm)]
        n1, n2 = _norm(pp1), _norm(pp2)
        self.cos_theta_y = [
            -_safe_ratio(_dot(pp1, f1.mom_cm), n1 * f1.momentum_cm),
            -_safe_ratio(_dot(pp2, f0.mom_cm), n2 * f0.momentum_cm),
        ]
        self.cos_theta_v = _safe_ratio(_dot(pp1, pp2), n1 * n2)