"""Nuclear mass constants and per-isotope masses used in the analysis."""

from __future__ import annotations

import math

M0 = 931.478
"""Atomic mass unit in MeV."""

C = 30.0
"""Speed of light in cm/ns."""

VFACT = C / math.sqrt(M0)
"""Velocity (cm/ns) = VFACT * sqrt(2 * E[MeV] / A[amu])."""

# Mass excesses in MeV (AME2016) and the mass number of each nucleus.
_NUCLIDES: dict[str, tuple[int, float]] = {
    "n": (1, 8.07132),
    "p": (1, 7.28897),
    "d": (2, 13.13572),
    "t": (3, 14.9498),
    "3He": (3, 14.93121),
    "alpha": (4, 2.42491),
    "6He": (6, 17.5921),
    "8He": (8, 31.6096),
    "5Li": (5, 11.678886),
    "6Li": (6, 14.0868),
    "7Li": (7, 14.9071),
    "8Li": (8, 20.9458),
    "9Li": (9, 24.9549),
    "6Be": (6, 18.375033),
    "7Be": (7, 15.768999),
    "8Be": (8, 4.9416),
    "9Be": (9, 11.3484),
    "10Be": (10, 12.6074),
    "11Be": (11, 20.1771),
    "8B": (8, 22.9215),
    "9B": (9, 12.416488),
    "10B": (10, 12.0506),
    "11B": (11, 8.6677),
    "9C": (9, 28.910972),
    "10C": (10, 15.698672),
    "11C": (11, 10.649396),
    "12C": (12, 0.0),
    "13C": (13, 3.12500888),
    "14C": (14, 3.019892),
    "11N": (11, 24.303559),
    "12N": (12, 17.338068),
    "13N": (13, 5.345481),
    "14N": (14, 2.863416),
    "15N": (15, 0.101438),
    "13O": (13, 23.115432),
    "14O": (14, 8.007781),
    "15O": (15, 2.855605),
    "16O": (16, -4.737001),
    "17O": (17, -0.808763),
    "14F": (14, 31.964402),
    "15F": (15, 16.566751),
    "17F": (17, 1.951702),
    "18F": (18, 0.873113),
    "17Ne": (17, 16.500447),
    "18Ne": (18, 5.317614),
}

MASS_EXCESS: dict[str, float] = {name: excess for name, (_, excess) in _NUCLIDES.items()}
"""Mass excess of each nucleus in MeV."""

TOTAL_MASS: dict[str, float] = {
    name: a * M0 + excess for name, (a, excess) in _NUCLIDES.items()
}
"""Total rest mass of each nucleus in MeV."""

# Mass excesses (MeV) used for particle identification, keyed by (Z, A).
_PID_EXCESS: dict[tuple[int, int], float] = {
    (1, 1): 7.2889,
    (1, 2): 13.135,
    (1, 3): 14.949,
    (2, 3): 14.931,
    (2, 4): 2.424,
    (2, 6): 17.592,
    (2, 8): 31.609,
    (3, 6): 14.086,
    (3, 7): 14.907,
    (3, 8): 20.945,
    (3, 9): 24.954,
    (4, 7): 15.768,
    (4, 8): 4.941,
    (4, 9): 11.348,
    (4, 10): 12.607,
    (4, 11): 20.177,
    (5, 8): 22.921,
    (5, 10): 12.050,
    (5, 11): 8.667,
    (6, 9): 28.910,
    (6, 10): 15.698,
    (6, 11): 10.649,
    (6, 12): 0.0,
    (6, 13): 3.125,
    (6, 14): 3.019,
}


def mass_amu(z: int, a: int) -> float:
    """Return the mass in amu of the isotope with proton number z and mass number a."""
    try:
        excess = _PID_EXCESS[(z, a)]
    except KeyError:
        raise ValueError(f"No mass info for Z = {z} A = {a}") from None
    return a + excess / M0