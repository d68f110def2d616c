"""Energy loss of charged particles in an absorber, from tabulated dE/dx."""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from os import PathLike
from pathlib import Path

_STEP = 0.1
"""Thickness of one integration step in mg/cm2."""

_ELEMENTS = {
    1: "Hydrogen",
    2: "Helium",
    3: "Lithium",
    4: "Beryllium",
    5: "Boron",
    6: "Carbon",
}


def _steps(thick: float) -> Iterator[float]:
    """Yield the slab thicknesses used to integrate through an absorber."""
    while True:
        step = min(thick, _STEP)
        yield step
        if step == thick:
            return
        thick -= _STEP


class LossTable:
    """dE/dx table for one element, indexed by energy per nucleon.

    The file has one header line, then the number of points, then pairs of
    energy per nucleon (MeV) and stopping power.
    """

    def __init__(self, path: str | PathLike[str]) -> None:
        with open(path, encoding="utf-8") as handle:
            handle.readline()
            tokens = handle.read().split()
        if not tokens:
            raise ValueError(f"loss file {path} has no table")
        n = int(tokens[0])
        values = [float(t) for t in tokens[1:1 + 2 * n]]
        if n < 2 or len(values) < 2 * n:
            raise ValueError(f"loss file {path} needs at least two complete points")
        self.ein = values[0::2]
        self.dedx = values[1::2]
        self.emax = self.ein[-1]

    def get_dedx(self, energy: float, a: float) -> float:
        """Return dE/dx, linearly interpolated at the particle's energy per nucleon."""
        epa = energy / a
        i = bisect.bisect_right(self.ein, epa) - 1
        i = min(max(i, 0), len(self.ein) - 2)
        e0, e1 = self.ein[i], self.ein[i + 1]
        d0, d1 = self.dedx[i], self.dedx[i + 1]
        return (epa - e0) / (e1 - e0) * (d1 - d0) + d0

    def get_eout(self, energy: float, thick: float, a: float) -> float:
        """Return the residual energy after passing through thick mg/cm2."""
        if energy > self.emax:
            raise ValueError("energy of particle is higher than the loss table covers")
        e_out = energy
        for step in _steps(thick):
            e_out -= self.get_dedx(e_out, a) * step
        return e_out

    def get_ein(self, energy: float, thick: float, a: float) -> float:
        """Return the energy before the absorber, given the residual energy."""
        e_in = energy
        for step in _steps(thick):
            e_in += self.get_dedx(e_in, a) * step
        return e_in


class EnergyLosses:
    """Loss tables for elements Z = 1 up to z_max, read from one directory."""

    def __init__(
        self,
        z_max: int,
        suffix: str,
        directory: str | PathLike[str] = "LossFiles",
    ) -> None:
        self.z_max = z_max
        self.tables: dict[int, LossTable] = {}
        for z in range(1, z_max + 1):
            name = _ELEMENTS.get(z)
            if name is None:
                break
            self.tables[z] = LossTable(Path(directory) / f"{name}{suffix}")

    def _table(self, z: int) -> LossTable:
        if z > self.z_max or z not in self.tables:
            raise ValueError(f"no loss info for Z = {z}")
        return self.tables[z]

    def get_ein(self, energy: float, thick: float, z: int, a: float) -> float:
        """Return the energy before the absorber for element z."""
        return self._table(z).get_ein(energy, thick, a)

    def get_eout(self, energy: float, thick: float, z: int, a: float) -> float:
        """Return the residual energy after the absorber for element z."""
        return self._table(z).get_eout(energy, thick, a)