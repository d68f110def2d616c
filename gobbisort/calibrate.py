"""Polynomial calibration coefficients per telescope and strip."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike


@dataclass
class Coefficients:
    """Calibration polynomial for one strip."""

    slope: float = 0.0
    intercept: float = 0.0
    a2: float = 0.0
    a3: float = 0.0


class Calibration:
    """Calibration table read from a whitespace-separated coefficient file.

    Each record is ``itele istrip slope intercept`` followed by ``a2`` when
    the order is at least 2 and ``a3`` when the order is 3.
    """

    def __init__(
        self,
        n_tele: int,
        n_strip: int,
        path: str | PathLike[str],
        order: int,
        weave: bool,
    ) -> None:
        self.n_tele = n_tele
        self.n_strip = n_strip
        self.order = order
        self.coefficients = [
            [Coefficients() for _ in range(n_strip)] for _ in range(n_tele)
        ]

        with open(path, encoding="utf-8") as handle:
            tokens = handle.read().split()

        width = 4 + (order >= 2) + (order == 3)
        for start in range(0, len(tokens) - width + 1, width):
            record = tokens[start:start + width]
            itele, istrip = int(record[0]), int(record[1])
            slope, intercept = float(record[2]), float(record[3])
            a2 = float(record[4]) if order >= 2 else 0.0
            a3 = float(record[5]) if order == 3 else 0.0
            chan = self._channel(istrip) if weave else istrip
            if not (0 <= itele < n_tele and 0 <= chan < n_strip):
                raise ValueError(
                    f"calibration entry tele {itele} strip {istrip} is out of range"
                )
            self.coefficients[itele][chan] = Coefficients(slope, intercept, a2, a3)

    @staticmethod
    def _channel(istrip: int) -> int:
        board = istrip // 16 + 1
        if board % 2 == 0:
            return (istrip - 16) * 2
        return istrip * 2 + 1

    def get_energy(self, itele: int, istrip: int, channel: float) -> float:
        """Return the calibrated energy for a raw channel."""
        co = self.coefficients[itele][istrip]
        energy = channel * co.slope + co.intercept
        if self.order == 1:
            return energy
        energy += channel ** 2 * co.a2
        if self.order == 2:
            return energy
        if self.order == 3:
            return channel ** 3 * co.a3 + energy
        raise ValueError(f"unsupported calibration order {self.order}")

    def get_time(self, itele: int, istrip: int, channel: float) -> float:
        """Return the time shifted by the strip's offset."""
        return channel + self.coefficients[itele][istrip].intercept

    def reverse_cal(self, itele: int, istrip: int, energy: float) -> float:
        """Return the raw channel giving an energy under the linear calibration."""
        co = self.coefficients[itele][istrip]
        return (energy - co.intercept) / co.slope