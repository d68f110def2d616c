"""Energy-ordered lists of fired detector strips."""

from __future__ import annotations

from dataclasses import dataclass, field

CAPACITY = 60


@dataclass
class Strip:
    """One fired strip."""

    strip: int = 0
    energy: float = 0.0
    energy_r: float = 0.0
    energy_r_low: float = 0.0
    energy_low: float = 0.0
    energy_max: float = 0.0
    neighbours: int = 0
    time: float = 0.0


@dataclass
class EnergyList:
    """Strips of one detector face, kept in descending energy order."""

    order: list[Strip] = field(default_factory=list)
    mult: int = 0
    threshold0: float = 0.0

    def __len__(self) -> int:
        return len(self.order)

    @property
    def nstore(self) -> int:
        return len(self.order)

    def add(
        self, strip: int, energy: float, energy_r_low: float, energy_r: float, time: float
    ) -> None:
        """Insert a strip at its place in descending energy order.

        When the calibrated energy is not positive the raw energy orders it.
        A strip that would fall past the end of a full list is dropped.
        """

        def ahead(entry: Strip) -> bool:
            if energy > 0:
                return energy > entry.energy
            return energy_r > entry.energy_r

        i = next((k for k, e in enumerate(self.order) if ahead(e)), len(self.order))
        if i == CAPACITY:
            return
        self.order.insert(
            i,
            Strip(strip=strip, energy=energy, energy_r=energy_r,
                  energy_r_low=energy_r_low, time=time),
        )
        del self.order[CAPACITY:]
        self.mult = len(self.order)

    def add_unsorted(self, strip: int, energy: float, raw_energy: float, time: float) -> None:
        """Append a strip at the end without ordering."""
        if len(self.order) >= CAPACITY:
            raise IndexError("energy list is full")
        self.order.append(Strip(strip=strip, energy=energy, energy_r=raw_energy, time=time))

    def remove(self, entry: int) -> None:
        """Remove the entry at a position."""
        if not 0 <= entry < len(self.order):
            raise IndexError("entry does not exist")
        del self.order[entry]

    def reduce(self, face: str) -> int:
        """Drop strips that look like cross talk from a stronger neighbour.

        face is "F" for front or "B" for back. Returns the new length.
        """
        fraction = {"F": 0.044, "B": 0.30}.get(face[:1])
        for ii in range(len(self.order) - 1, 0, -1):
            if len(self.order) <= 1 or fraction is None:
                break
            weak = self.order[ii]
            if any(
                abs(weak.strip - strong.strip) == 1
                and weak.energy < strong.energy * fraction
                and strong.energy > 10.0
                for strong in self.order[:ii]
            ):
                del self.order[ii]
        return len(self.order)

    def reset(self) -> None:
        """Empty the list."""
        self.order.clear()
        self.mult = 0

    def neighbours(self) -> None:
        """Add the energy of adjacent strips into the earlier strip of the pair."""
        i = 0
        while i < len(self.order):
            current = self.order[i]
            current.energy_max = current.energy
            current.neighbours = 0
            j = i + 1
            while j < len(self.order):
                if abs(current.strip - self.order[j].strip) == 1:
                    current.energy += self.order[j].energy
                    current.neighbours += 1
                    del self.order[j]
                else:
                    j += 1
            i += 1

    def threshold(self, threshold: float) -> None:
        """Remove strips whose energy is below the threshold."""
        if self.order:
            self.threshold0 = threshold
        self.order = [s for s in self.order if not s.energy < threshold]