"""Reconstruction of particles in one silicon dE-E telescope."""

from __future__ import annotations

import itertools
import math
import random
from typing import Protocol

from gobbisort.elist import EnergyList
from gobbisort.masses import M0
from gobbisort.pid import ParticleIdentifier
from gobbisort.solution import Solution

SI_WIDTH = 6.45
"""Active width of a silicon detector in cm."""

N_STRIPS = 32
MAX_SOLUTIONS = 10
_MAX_TRIES = 4

_X_CENTER = (4.419, 2.819, -4.419, -2.819)
_Y_CENTER = (2.819, -4.419, -2.819, 4.419)

# Kinetic energies (MeV) above which hydrogen isotopes punch through.
_PUNCH_THROUGH = {(1, 1): 15.5, (1, 2): 20.5, (1, 3): 24.0}


class _Losses(Protocol):
    def get_ein(self, energy: float, thick: float, z: int, a: float) -> float: ...


class _Random(Protocol):
    def random(self) -> float: ...


class Telescope:
    """One quadrant telescope: front, back and delta strip lists and solutions."""

    def __init__(
        self,
        target_thickness: float,
        losses: _Losses,
        identifier: ParticleIdentifier,
        telescope_id: int,
        rng: _Random | None = None,
    ) -> None:
        if not 0 <= telescope_id < len(_X_CENTER):
            raise ValueError(f"telescope id {telescope_id} must be between 0 and 3")
        self.target_thickness = target_thickness
        self.losses = losses
        self.identifier = identifier
        self.id = telescope_id
        self.rng: _Random = rng if rng is not None else random.Random()
        self.x_center = _X_CENTER[telescope_id]
        self.y_center = _Y_CENTER[telescope_id]
        self.si_width = SI_WIDTH

        self.front = EnergyList()
        self.back = EnergyList()
        self.delta = EnergyList()
        self.solutions = [Solution() for _ in range(MAX_SOLUTIONS)]
        self.nsolution = 0

        self.max_front = self.max_back = self.max_delta = 0.0
        self.mult_front = self.mult_back = self.mult_delta = 0

    def set_target_distance(self, dist: float) -> None:
        """Set the target-to-detector distance (cm) of every solution."""
        for sol in self.solutions:
            sol.dist_target = float(dist)

    def reset(self) -> None:
        """Clear the strip lists and solutions for a new event."""
        self.max_front = self.max_back = self.max_delta = 0.0
        self.mult_front = self.mult_back = self.mult_delta = 0
        self.front.reset()
        self.back.reset()
        self.delta.reset()
        for sol in self.solutions[: self.nsolution]:
            sol.reset()
        self.nsolution = 0

    def reduce(self) -> None:
        """Remove cross talk from the front and back lists."""
        self.mult_front = self.front.reduce("F")
        self.mult_back = self.back.reduce("B")

    def simple_front(self) -> int:
        """Form one particle from the highest strip of each face; return the count."""
        self.nsolution = 0
        if not (self.front.order and self.back.order and self.delta.order):
            return 0
        f, b, d = self.front.order[0], self.back.order[0], self.delta.order[0]
        if abs(f.energy - b.energy) > 2.0:
            return 0

        sol = self.solutions[0]
        sol.energy, sol.energy_r = f.energy, f.energy_r
        sol.benergy, sol.benergy_r = b.energy, b.energy_r
        sol.denergy, sol.denergy_r = d.energy, d.energy_r
        sol.time, sol.btime, sol.dtime = f.time, b.time, d.time
        sol.ifront, sol.iback, sol.ide = f.strip, b.strip, d.strip
        sol.itele = self.id
        sol.timediff = f.time - d.time
        self.nsolution = 1
        return 1

    def multi_hit(self) -> int:
        """Match front strips with back and delta strips; return the particle count.

        The largest multiplicity (up to four) whose best pairing is consistent
        in strip position and energy is kept.
        """
        front, back, delta = self.front.order, self.back.order, self.delta.order
        tries = min(len(front), len(back), len(delta), _MAX_TRIES)
        self.nsolution = 0

        for n in range(tries, 0, -1):
            best_d = best_b = None
            dstrip_min, de_min = 1000, 10000.0
            for perm in itertools.permutations(range(n)):
                dstrip = sum(abs(delta[p].strip - front[i].strip) for i, p in enumerate(perm))
                de = sum(abs(back[p].energy - front[i].energy) for i, p in enumerate(perm))
                if dstrip < dstrip_min:
                    dstrip_min, best_d = dstrip, perm
                if de < de_min:
                    de_min, best_b = de, perm
            if best_d is None or best_b is None:
                continue
            if any(
                abs(delta[best_d[i]].strip - front[i].strip) > 2
                or abs(back[best_b[i]].energy - front[i].energy) > 2.0
                for i in range(n)
            ):
                continue

            for i in range(n):
                f, b, d = front[i], back[best_b[i]], delta[best_d[i]]
                sol = self.solutions[i]
                sol.energy, sol.energy_r = f.energy, f.energy_r
                sol.time = f.time
                sol.denergy = d.energy
                sol.ifront, sol.iback, sol.ide = f.strip, b.strip, d.strip
                sol.itele = self.id
                sol.timediff = f.time - d.time
            self.nsolution = n
            break
        return self.nsolution

    def get_pid(self) -> int:
        """Identify each solution from its banana gates; return how many matched."""
        found = 0
        for sol in self.solutions[: self.nsolution]:
            sol.ipid = 0
            ident = self.identifier.identify(sol.energy, sol.denergy * math.cos(sol.theta))
            if ident is None:
                continue
            found += 1
            sol.ipid = 1
            sol.iz, sol.ia = ident.z, ident.a
            sol.mass = ident.mass * M0
        return found

    def calc_eloss(self) -> int:
        """Correct energies for target losses and set momenta.

        Returns 0 when a solution lacks identification or punches through,
        otherwise 1.
        """
        for sol in self.solutions[: self.nsolution]:
            if not sol.ipid:
                sol.ekin = 0.0
                return 0
            total = sol.denergy + sol.energy
            thick = self.target_thickness / 2 / math.cos(sol.theta)
            sol.ekin = self.losses.get_ein(total, thick, sol.iz, sol.mass / M0)
            sol.compute_momentum()

            limit = _PUNCH_THROUGH.get((sol.iz, sol.ia))
            if limit is not None and sol.ekin > limit:
                sol.ia = sol.iz = 0
                sol.ekin = 0.0
                return 0
        return 1

    def _place(self, isol: int, front_offset: float, back_offset: float) -> float:
        sol = self.solutions[isol]
        fb = (sol.iback + back_offset) / N_STRIPS
        ff = (sol.ifront + front_offset) / N_STRIPS
        w = self.si_width
        if self.id == 0:
            dx, dy = (fb - 0.5) * w, (ff - 0.5) * w
        elif self.id == 1:
            dx, dy = (ff - 0.5) * w, (0.5 - fb) * w
        elif self.id == 2:
            dx, dy = (0.5 - fb) * w, (0.5 - ff) * w
        else:
            dx, dy = (0.5 - ff) * w, (fb - 0.5) * w
        sol.xpos = self.x_center + dx
        sol.ypos = self.y_center + dy
        return sol.angle()

    def position(self, isol: int) -> float:
        """Set a solution's position, randomised within the strips, and its angles."""
        back_offset = self.rng.random()
        front_offset = self.rng.random()
        return self._place(isol, front_offset, back_offset)

    def position_center(self, isol: int) -> float:
        """Set a solution's position at the strip centres, and its angles."""
        return self._place(isol, 0.5, 0.5)