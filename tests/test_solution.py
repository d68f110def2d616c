import math

import pytest

from gobbisort.kinematics import Einstein, Newton
from gobbisort.solution import Solution


def test_reset_restores_defaults():
    sol = Solution(dist_target=35.0)
    sol.energy = 12.0
    sol.ifront = 7
    sol.iz = 2
    sol.timediff = 3.0
    sol.reset()
    assert sol.energy == -1
    assert sol.ifront == -1
    assert sol.iz == 0
    assert sol.timediff == -100000.0
    assert sol.dist_target == 35.0


def test_angle_on_axis_is_zero():
    sol = Solution(dist_target=20.0, xpos=0.0, ypos=0.0)
    assert sol.angle() == pytest.approx(0.0)
    assert sol.theta == pytest.approx(0.0)


def test_angle_sets_phi_and_theta():
    sol = Solution(dist_target=5.0, xpos=0.0, ypos=5.0)
    theta = sol.angle()
    assert theta == pytest.approx(math.pi / 4)
    assert sol.phi == pytest.approx(math.pi / 2)


def test_relativistic_momentum():
    sol = Solution(dist_target=10.0, xpos=3.0, ypos=-4.0, ekin=20.0, mass=938.0)
    sol.angle()
    sol.compute_momentum()
    kin = Einstein()
    assert sol.momentum == pytest.approx(kin.get_momentum(20.0, 938.0))
    assert math.hypot(*sol.mvect) == pytest.approx(sol.momentum)
    assert sol.energy_tot == pytest.approx(958.0)
    assert 0 < sol.velocity < 1


def test_momentum_vector_points_along_hit():
    sol = Solution(dist_target=10.0, xpos=2.0, ypos=1.0, ekin=5.0, mass=3727.0)
    sol.angle()
    sol.compute_momentum()
    px, py, pz = sol.mvect
    assert px / pz == pytest.approx(2.0 / 10.0)
    assert py / pz == pytest.approx(1.0 / 10.0)


def test_newtonian_total_energy_is_mass():
    sol = Solution(kinematics=Newton(), dist_target=10.0, xpos=0.0, ypos=0.0,
                   ekin=8.0, mass=4.0)
    sol.angle()
    sol.compute_momentum()
    assert sol.energy_tot == 4.0
    assert sol.momentum == pytest.approx(Newton().get_momentum(8.0, 4.0))
    assert sol.mvect[2] == pytest.approx(sol.momentum)