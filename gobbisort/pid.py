"""Particle identification from banana gates in the dE-E plane."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import Sequence

from gobbisort.masses import mass_amu


def point_in_polygon(
    x: float, y: float, xs: Sequence[float], ys: Sequence[float]
) -> bool:
    """Return True if (x, y) lies inside the polygon, by the even-odd rule."""
    inside = False
    n = len(xs)
    j = n - 1
    for i in range(n):
        yi, yj = ys[i], ys[j]
        if (yi < y <= yj) or (yj < y <= yi):
            if xs[i] + (y - yi) / (yj - yi) * (xs[j] - xs[i]) < x:
                inside = not inside
        j = i
    return inside


@dataclass
class BananaGate:
    """A polygon in the E (x) versus dE (y) plane for one isotope."""

    z: int
    a: int
    xs: list[float]
    ys: list[float]

    @property
    def mass(self) -> float:
        return float(self.a)

    def contains(self, x: float, y: float) -> bool:
        """Return True if the point lies inside the gate."""
        return point_in_polygon(x, y, self.xs, self.ys)


@dataclass(frozen=True)
class Identification:
    """An identified particle; mass is in amu."""

    z: int
    a: int
    mass: float


class ParticleIdentifier:
    """Ordered set of banana gates; the first gate containing a point wins."""

    def __init__(self, gates: Sequence[BananaGate]) -> None:
        self.gates = list(gates)

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> ParticleIdentifier:
        """Read gates: a count, then for each gate Z, A, n and n x-y pairs."""
        with open(path, encoding="utf-8") as handle:
            tokens = iter(handle.read().split())
        try:
            gates = []
            for _ in range(int(next(tokens))):
                z, a, n = int(next(tokens)), int(next(tokens)), int(next(tokens))
                xs, ys = [], []
                for _ in range(n):
                    xs.append(float(next(tokens)))
                    ys.append(float(next(tokens)))
                gates.append(BananaGate(z, a, xs, ys))
        except StopIteration:
            raise ValueError(f"gate file {path} is truncated") from None
        return cls(gates)

    def identify(self, x: float, y: float) -> Identification | None:
        """Return the particle whose gate holds (x, y), or None."""
        for gate in self.gates:
            if gate.contains(x, y):
                return Identification(gate.z, gate.a, mass_amu(gate.z, gate.a))
        return None