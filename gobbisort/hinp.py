"""Unpacking of the HINP4 chip-board silicon readout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

MARKER = 0x1FF0
MAX_STRIPS = 162
_MAX_WORDS = 2048
_MAX_READ = 512


class HinpFormatError(ValueError):
    """Raised for a malformed HINP packet; offset is where reading resumes."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


@dataclass(frozen=True)
class StripHit:
    """One strip read out by a chip board."""

    board: int
    chan: int
    high: int
    low: int
    time: int


def unpack_hinp4(words: Sequence[int], offset: int = 0) -> tuple[list[StripHit], int]:
    """Decode a HINP4 packet starting at offset.

    Returns the strip hits and the offset just past the last strip.
    """

    def word(i: int) -> int:
        if i >= len(words):
            raise HinpFormatError("HINP packet is truncated", len(words))
        return words[i] & 0xFFFF

    word(offset)  # packet length, not used for navigation
    marker = word(offset + 1)
    if marker != MARKER:
        raise HinpFormatError(
            f"did not read the proper XLM marker: was {marker:#x}, expected {MARKER:#x}",
            offset + 2,
        )

    if word(offset + 2) > _MAX_WORDS:
        raise HinpFormatError("HINP word count too large", offset + 12)

    n_read = word(offset + 4)
    if n_read % 4 != 0:
        raise HinpFormatError("number of strips read is not divisible by 4", offset + 12)
    n_read //= 4
    if n_read > _MAX_READ:
        raise HinpFormatError("number of strips read too large", offset + 12)
    if n_read > MAX_STRIPS:
        raise HinpFormatError(
            f"{n_read} strips exceed the limit of {MAX_STRIPS}", offset + 4
        )

    pos = offset + 9
    hits = []
    for _ in range(n_read):
        ident, high, low, time = (word(pos + k) for k in range(4))
        pos += 4
        chip = (ident & 0x1FE0) >> 5
        chan = ident & 0x1F
        if chip % 2 == 0:
            chan, board = 2 * chan, chip // 2
        else:
            chan, board = 2 * chan + 1, chip // 2 + 1
        hits.append(StripHit(board, chan, high, low, time))
    return hits, pos