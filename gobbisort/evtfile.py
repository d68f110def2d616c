"""Reading ring-buffer event files and sorting runs listed in a run file."""

from __future__ import annotations

import argparse
import struct
import sys
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike
from pathlib import Path
from typing import BinaryIO, Sequence

from gobbisort.scaler import ScalerTotals

_HEADER = struct.Struct("<4H")
_MAX_SPLIT_FILES = 3


class ItemType(IntEnum):
    """Ring item types found in an event file."""

    BEGIN_RUN = 1
    END_RUN = 2
    PAUSE = 3
    RESUME = 4
    SCALER = 20
    PHYSICS = 30
    PHYSICS_COUNT = 31


@dataclass(frozen=True)
class RingItem:
    """One item: its type and its body as little-endian 16-bit words."""

    type: int
    words: tuple[int, ...]

    @property
    def kind(self) -> ItemType | None:
        try:
            return ItemType(self.type)
        except ValueError:
            return None


@dataclass
class RunSummary:
    """Counts of the items seen in one or more event files."""

    physics_events: int = 0
    scaler_buffers: int = 0
    scaler_counters: int = 0
    pauses: int = 0
    resumes: int = 0
    run_number: int | None = None
    ended: bool = False
    unknown_type: int | None = None

    def __add__(self, other: RunSummary) -> RunSummary:
        return RunSummary(
            physics_events=self.physics_events + other.physics_events,
            scaler_buffers=self.scaler_buffers + other.scaler_buffers,
            scaler_counters=self.scaler_counters + other.scaler_counters,
            pauses=self.pauses + other.pauses,
            resumes=self.resumes + other.resumes,
            run_number=other.run_number if other.run_number is not None else self.run_number,
            ended=other.ended,
            unknown_type=other.unknown_type,
        )


def read_ring_items(stream: BinaryIO) -> Iterator[RingItem]:
    """Yield the ring items of a binary stream until it ends."""
    while True:
        header = stream.read(_HEADER.size)
        if len(header) < _HEADER.size:
            return
        nbytes, _, item_type, _ = _HEADER.unpack(header)
        size = nbytes - _HEADER.size
        if size < 0:
            raise ValueError(f"ring item claims {nbytes} bytes, less than its header")
        body = stream.read(size)
        count = len(body) // 2
        yield RingItem(item_type, struct.unpack(f"<{count}H", body[: 2 * count]))


def run_file_paths(directory: str | PathLike[str], run_number: int) -> list[Path]:
    """Return the possible split event files of a run, in reading order."""
    run_dir = Path(directory) / f"run{run_number}"
    return [
        run_dir / f"run-{run_number:04d}-{part:02d}.evt"
        for part in range(_MAX_SPLIT_FILES)
    ]


def summarize(
    stream: BinaryIO,
    scalers: ScalerTotals | None = None,
    on_physics: Callable[[tuple[int, ...]], object] | None = None,
) -> RunSummary:
    """Read a stream, count its items and hand physics events to on_physics.

    Reading stops at the end-of-run item or at an item of unknown type.
    """
    summary = RunSummary()
    for item in read_ring_items(stream):
        kind = item.kind
        if kind is ItemType.PHYSICS:
            summary.physics_events += 1
            if on_physics is not None:
                on_physics(item.words)
        elif kind is ItemType.SCALER:
            if scalers is not None:
                scalers.increment(item.words)
            summary.scaler_buffers += 1
        elif kind is ItemType.PHYSICS_COUNT:
            summary.scaler_counters += 1
        elif kind is ItemType.BEGIN_RUN:
            if item.words:
                summary.run_number = item.words[0]
        elif kind is ItemType.END_RUN:
            summary.ended = True
            break
        elif kind is ItemType.PAUSE:
            summary.pauses += 1
        elif kind is ItemType.RESUME:
            summary.resumes += 1
        else:
            summary.unknown_type = item.type
            break
    return summary


def _read_run_numbers(path: Path) -> list[int]:
    numbers = []
    for token in path.read_text(encoding="utf-8").split():
        try:
            numbers.append(int(token))
        except ValueError:
            break
    return numbers


def main(argv: Sequence[str] | None = None) -> int:
    """Sort every run listed in the run file and print the totals."""
    parser = argparse.ArgumentParser(
        prog="gobbisort", description="Count and sort ring-buffer event files."
    )
    parser.add_argument("--directory", default="/data2/li7_may2022/",
                        help="directory holding the runNNN sub-directories")
    parser.add_argument("--runs", default="numbers.beam",
                        help="file listing the run numbers to read")
    parser.add_argument("--scaler-names", default="scalerNames.dat",
                        help="file with one scaler title per line")
    parser.add_argument("--channels", type=int, default=14,
                        help="number of scaler channels")
    args = parser.parse_args(argv)

    start = time.process_time()
    scalers = ScalerTotals.from_names_file(args.channels, args.scaler_names)
    try:
        runs = _read_run_numbers(Path(args.runs))
    except OSError as exc:
        print(f"could not open run file {args.runs}: {exc}", file=sys.stderr)
        return 1

    total = RunSummary()
    for run in runs:
        for part, path in enumerate(run_file_paths(args.directory, run)):
            if not path.is_file():
                if part > 0:
                    break
                print("could not open event file", file=sys.stderr)
                print(path, file=sys.stderr)
                return 1
            print(f"reading file: {path}")
            with open(path, "rb") as stream:
                summary = summarize(stream, scalers)
            if summary.run_number is not None:
                print(f"run number = {summary.run_number}, should match {run}")
            if summary.ended:
                print("got type == 2, flag for end of run")
            if summary.unknown_type is not None:
                print(f" unknown event type {summary.unknown_type} found")
            total = total + summary

    print(f"physics Event Counters = {total.physics_events}")
    print(f"scaler buffers = {total.scaler_buffers}")
    print(f"confirm number of scalers = {total.scaler_counters}")
    print(f"Numbers of pauses = {total.pauses}")
    print(f"Number of resumes = {total.resumes}")
    print(scalers.report())
    print(f"run time: {(time.process_time() - start) / 60} min")
    return 0


if __name__ == "__main__":
    sys.exit(main())