"""Running totals of scaler buffers."""

from __future__ import annotations

from os import PathLike
from typing import Sequence

_HEADER_WORDS = 8
_LIVE_CHANNEL = 4


class ScalerTotals:
    """Sums 32-bit scaler counts over many buffers."""

    def __init__(self, n_channels: int, titles: Sequence[str] | None = None) -> None:
        self.n_channels = n_channels
        names = list(titles or [])[:n_channels]
        self.titles = names + [""] * (n_channels - len(names))
        self.totals = [0] * n_channels
        self.nbuffers = 0

    @classmethod
    def from_names_file(
        cls, n_channels: int, path: str | PathLike[str] = "scalerNames.dat"
    ) -> ScalerTotals:
        """Create totals titled by the lines of a file; a missing file gives no titles."""
        try:
            with open(path, encoding="utf-8") as handle:
                titles = [line.rstrip("\r\n") for line in handle]
        except FileNotFoundError:
            titles = []
        return cls(n_channels, titles)

    def increment(self, words: Sequence[int]) -> None:
        """Add one scaler buffer of 16-bit words to the totals."""
        needed = _HEADER_WORDS + 2 * self.n_channels
        if len(words) < needed:
            raise ValueError(f"scaler buffer has {len(words)} words, needs {needed}")
        body = words[_HEADER_WORDS:needed]
        for i, (low, high) in enumerate(zip(body[0::2], body[1::2])):
            count = ((low & 0xFFFF) + ((high & 0xFFFF) << 16)) & 0xFFFFFFFF
            self.totals[i] += count
        self.nbuffers += 1

    def live_fraction(self) -> float | None:
        """Return the live-time fraction, or None when it cannot be formed."""
        if self.n_channels <= _LIVE_CHANNEL or self.totals[0] == 0:
            return None
        return self.totals[_LIVE_CHANNEL] / self.totals[0]

    def report(self) -> str:
        """Return a text summary of all totals."""
        lines = [f"{self.nbuffers} Scaler buffers"]
        lines += [
            f" {i} {title} {total}"
            for i, (title, total) in enumerate(zip(self.titles, self.totals))
        ]
        lines.append("")
        live = self.live_fraction()
        if live is not None:
            lines.append(f"live fraction = {live} ,dead fraction = {1.0 - live}")
        return "\n".join(lines)