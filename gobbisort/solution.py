"""A particle reconstructed from one telescope's strip data."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from gobbisort.kinematics import Einstein, Newton, Vector

_ZERO: Vector = (0.0, 0.0, 0.0)


@dataclass
class Solution:
    """Detected particle: strip energies, identity, position and momentum."""

    kinematics: Einstein | Newton = field(default_factory=Einstein)
    dist_target: float = 0.0

    energy: float = -1.0
    energy_r: float = -1.0
    benergy: float = -1.0
    benergy_r: float = -1.0
    denergy: float = -1.0
    denergy_r: float = -1.0
    time: float = -1.0
    time_r: float = -1.0
    btime: float = -1.0
    btime_r: float = -1.0
    dtime: float = -1.0
    dtime_r: float = -1.0
    ifront: int = -1
    iback: int = -1
    ide: int = -1
    itele: int = -1
    timediff: float = -100000.0

    ipid: int = 0
    iz: int = 0
    ia: int = 0
    mass: float = 0.0

    xpos: float = -1.0
    ypos: float = -1.0
    theta: float = -1.0
    phi: float = -1.0
    energy_tot: float = -1.0
    ekin: float = -1.0
    velocity: float = -1.0

    momentum: float = 0.0
    mvect: Vector = _ZERO
    mom_cm: Vector = _ZERO
    momentum_cm: float = 0.0
    energy_cm: float = 0.0

    def reset(self) -> None:
        """Clear the per-event values, keeping kinematics and target distance."""
        self.energy = self.energy_r = -1.0
        self.benergy = self.benergy_r = -1.0
        self.denergy = self.denergy_r = -1.0
        self.time = self.time_r = -1.0
        self.btime = self.btime_r = -1.0
        self.dtime = self.dtime_r = -1.0
        self.ifront = self.iback = self.ide = self.itele = -1
        self.timediff = -100000.0
        self.ipid = self.iz = self.ia = 0
        self.mass = 0.0
        self.xpos = self.ypos = -1.0
        self.theta = self.phi = -1.0
        self.energy_tot = self.ekin = self.velocity = -1.0

    def angle(self) -> float:
        """Set theta and phi from the hit position and return theta."""
        r = math.sqrt(self.xpos ** 2 + self.ypos ** 2 + self.dist_target ** 2)
        self.theta = math.acos(self.dist_target / r)
        self.phi = math.atan2(self.ypos, self.xpos)
        return self.theta

    def compute_momentum(self) -> None:
        """Set momentum, its vector, total energy and velocity from ekin and angles."""
        kin = self.kinematics
        self.momentum = kin.get_momentum(self.ekin, self.mass)
        sin_t = math.sin(self.theta)
        self.mvect = (
            self.momentum * sin_t * math.cos(self.phi),
            self.momentum * sin_t * math.sin(self.phi),
            self.momentum * math.cos(self.theta),
        )
        self.energy_tot = self.ekin * kin.scale + self.mass
        self.velocity = self.momentum / self.energy_tot