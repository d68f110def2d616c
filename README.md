# gobbisort

Building blocks for reading and reconstructing events recorded with an
array of four silicon ΔE–E telescopes, together with a command that
reads ring-buffer event files and counts what they hold.

The package uses only the standard library.

## Modules

- `gobbisort.evtfile`: `read_ring_items` yields `RingItem`s (a type and
  the body as 16-bit words) from a binary stream; `summarize` counts
  physics, scaler, pause and resume items into a `RunSummary`, adds
  scaler buffers to a `ScalerTotals` and hands each physics body to an
  optional callback; `run_file_paths` gives the split-file names of a
  run; `main` is the command described below.
- `gobbisort.hinp`: `unpack_hinp4` decodes one chip-board readout block
  into `StripHit`s (board, channel, high and low gain, time) and raises
  `HinpFormatError` for a malformed block.
- `gobbisort.calibrate`: `Calibration` reads linear, quadratic or cubic
  strip coefficients from a file and gives `get_energy`, `get_time` and
  `reverse_cal`.
- `gobbisort.elist`: `EnergyList` keeps `Strip`s in descending energy
  order, with cross-talk removal (`reduce`), neighbour add-back
  (`neighbours`) and a `threshold` cut.
- `gobbisort.silicon`: `Telescope` matches front, back and ΔE strips
  into particle hits (`simple_front`, `multi_hit`), places them
  (`position`, `position_center`), identifies them (`get_pid`) and
  corrects their energies for target losses (`calc_eloss`).
- `gobbisort.pid`: `ParticleIdentifier` reads banana gates from a file
  and returns an `Identification` for a point inside one of them.
- `gobbisort.loss`: `LossTable` and `EnergyLosses` integrate tabulated
  stopping powers through an absorber (`get_ein`, `get_eout`).
- `gobbisort.solution`: `Solution` holds one detected particle: strip
  energies, identity, angles, momentum and energies.
- `gobbisort.correl`: `Correlator` files solutions by isotope and gives
  the relative energy (`find_erel`), `missing_mass`, `q_value`,
  `q_value2`, `target_ex` and Jacobi angles (`get_jacobi`).
- `gobbisort.kinematics`: relativistic `Einstein` and Newtonian
  `Newton` kinematics.
- `gobbisort.masses`: mass constants and `mass_amu(z, a)`.
- `gobbisort.scaler`: `ScalerTotals` sums 32-bit scaler counts and
  reports totals and the live-time fraction.

## Installation

```
pip install .
```

With the test extra:

```
pip install ".[test]"
pytest
```

## Command line

```
gobbisort [--directory DIR] [--runs FILE] [--scaler-names FILE] [--channels N]
```

It reads run numbers from `--runs` (default `numbers.beam`), opens each
run's split event files `runNNN/run-NNNN-PP.evt` under `--directory`
(default `/data2/li7_may2022/`), counts the ring items, totals the
scalers (`--channels`, default 14, titled from `--scaler-names`, default
`scalerNames.dat`) and prints a summary with the live-time fraction. A
missing first file of a run stops the command with exit status 1.

## Library use

```python
from gobbisort.kinematics import Einstein

kin = Einstein()
pc = kin.get_momentum(10.0, 938.8)   # MeV kinetic energy, MeV mass
ke = kin.get_ke(pc, 938.8)           # 10.0 MeV again
```

```python
from gobbisort.masses import mass_amu

alpha = mass_amu(2, 4)   # helium-4 in amu; unknown isotopes raise ValueError
```

```python
from gobbisort.elist import EnergyList

front = EnergyList()
front.add(13, 5.6, 0, 2100, 800.0)
front.add(14, 0.2, 0, 80, 805.0)
front.neighbours()   # strip 14's energy is added to strip 13
```

```python
from gobbisort.evtfile import summarize
from gobbisort.scaler import ScalerTotals

scalers = ScalerTotals(14)
with open("run-1033-00.evt", "rb") as stream:
    summary = summarize(stream, scalers, on_physics=print)
print(summary.physics_events, scalers.report())
```

## What it does not do

The command only counts physics items; it does not unpack them into
telescope hits, and nothing in the package joins `unpack_hinp4`,
`Calibration`, `Telescope` and `Correlator` into a full event builder.
No histograms or output files are written.