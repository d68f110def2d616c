import math

import pytest

from gobbisort.masses import M0, mass_amu
from gobbisort.pid import BananaGate, ParticleIdentifier
from gobbisort.silicon import Telescope


class FakeLosses:
    def __init__(self, shift=0.5):
        self.shift = shift
        self.calls = []

    def get_ein(self, energy, thick, z, a):
        self.calls.append((energy, thick, z, a))
        return energy + self.shift


class FixedRandom:
    def random(self):
        return 0.5


def square_gate(z, a, lo=0.0, hi=100.0):
    return BananaGate(z, a, [lo, hi, hi, lo], [lo, lo, hi, hi])


def make(telescope_id=0, gates=(), losses=None, rng=None, thickness=2.0):
    t = Telescope(thickness, losses or FakeLosses(), ParticleIdentifier(list(gates)),
                  telescope_id, rng)
    t.set_target_distance(20.0)
    return t


def fill_worked_example(t):
    t.front.add(13, 5.61734, 0, 0, 0.0)
    t.front.add(15, 3.29919, 0, 0, 0.0)
    t.back.add(17, 5.87104, 0, 0, 0.0)
    t.back.add(23, 3.60316, 0, 0, 0.0)
    t.delta.add(15, 2.14099, 0, 0, 0.0)
    t.delta.add(12, 0.913967, 0, 0, 0.0)


def test_invalid_telescope_id():
    with pytest.raises(ValueError):
        make(telescope_id=4)


def test_multi_hit_worked_example():
    t = make()
    fill_worked_example(t)
    assert t.multi_hit() == 2
    s0, s1 = t.solutions[0], t.solutions[1]
    assert (s0.ifront, s0.iback, s0.ide) == (13, 17, 12)
    assert s0.energy == pytest.approx(5.61734)
    assert s0.denergy == pytest.approx(0.913967)
    assert (s1.ifront, s1.iback, s1.ide) == (15, 23, 15)
    assert s1.denergy == pytest.approx(2.14099)
    assert s0.itele == 0


def test_multi_hit_falls_back_to_lower_multiplicity():
    t = make()
    t.front.add(13, 5.6, 0, 0, 0.0)
    t.front.add(15, 3.3, 0, 0, 0.0)
    t.back.add(17, 5.7, 0, 0, 0.0)
    t.back.add(23, 0.5, 0, 0, 0.0)
    t.delta.add(14, 2.0, 0, 0, 0.0)
    t.delta.add(30, 1.0, 0, 0, 0.0)
    assert t.multi_hit() == 1
    assert t.nsolution == 1
    assert (t.solutions[0].ifront, t.solutions[0].iback, t.solutions[0].ide) == (13, 17, 14)


def test_multi_hit_empty():
    t = make()
    t.front.add(3, 5.0, 0, 0, 0.0)
    assert t.multi_hit() == 0


def test_simple_front_accepts_and_rejects():
    t = make(telescope_id=2)
    t.front.add(4, 6.0, 0, 100, 50.0)
    t.back.add(9, 6.5, 0, 110, 40.0)
    t.delta.add(5, 1.5, 0, 30, 20.0)
    assert t.simple_front() == 1
    s = t.solutions[0]
    assert (s.ifront, s.iback, s.ide, s.itele) == (4, 9, 5, 2)
    assert s.timediff == pytest.approx(50.0 - 20.0)

    t.reset()
    assert t.nsolution == 0
    assert t.solutions[0].ifront == -1
    t.front.add(4, 6.0, 0, 0, 0.0)
    t.back.add(9, 9.0, 0, 0, 0.0)
    t.delta.add(5, 1.5, 0, 0, 0.0)
    assert t.simple_front() == 0


def test_reduce_removes_front_crosstalk():
    t = make()
    t.front.add(10, 20.0, 0, 0, 0.0)
    t.front.add(11, 0.5, 0, 0, 0.0)
    t.back.add(3, 20.0, 0, 0, 0.0)
    t.reduce()
    assert t.mult_front == 1
    assert t.mult_back == 1
    assert t.front.order[0].strip == 10


def test_position_center_symmetry():
    t = make(telescope_id=1)
    t.solutions[0].ifront, t.solutions[0].iback = 0, 0
    t.solutions[1].ifront, t.solutions[1].iback = 31, 31
    t.position_center(0)
    t.position_center(1)
    a, b = t.solutions[0], t.solutions[1]
    assert (a.xpos + b.xpos) / 2 == pytest.approx(t.x_center)
    assert (a.ypos + b.ypos) / 2 == pytest.approx(t.y_center)


def test_position_with_midpoint_random_matches_center():
    for tid in range(4):
        t = make(telescope_id=tid, rng=FixedRandom())
        for s in t.solutions[:2]:
            s.ifront, s.iback = 7, 20
        theta_r = t.position(0)
        theta_c = t.position_center(1)
        assert t.solutions[0].xpos == pytest.approx(t.solutions[1].xpos)
        assert t.solutions[0].ypos == pytest.approx(t.solutions[1].ypos)
        assert theta_r == pytest.approx(theta_c)


def test_position_stays_on_detector():
    t = make(telescope_id=3)
    s = t.solutions[0]
    s.ifront, s.iback = 12, 25
    theta = t.position(0)
    assert abs(s.xpos - t.x_center) <= t.si_width / 2
    assert abs(s.ypos - t.y_center) <= t.si_width / 2
    r = math.hypot(s.xpos, s.ypos)
    assert theta == pytest.approx(math.atan2(r, 20.0))


def test_get_pid_sets_identity_and_mass():
    t = make(gates=[square_gate(1, 1)])
    t.nsolution = 1
    s = t.solutions[0]
    s.energy, s.denergy, s.theta = 5.0, 1.0, 0.0
    assert t.get_pid() == 1
    assert (s.ipid, s.iz, s.ia) == (1, 1, 1)
    assert s.mass == pytest.approx(mass_amu(1, 1) * M0)


def test_get_pid_outside_gates():
    t = make(gates=[square_gate(2, 4, 50.0, 60.0)])
    t.nsolution = 1
    s = t.solutions[0]
    s.energy, s.denergy, s.theta = 5.0, 1.0, 0.0
    assert t.get_pid() == 0
    assert s.ipid == 0


def test_calc_eloss_uses_losses_and_sets_momentum():
    losses = FakeLosses(shift=0.5)
    t = make(gates=[square_gate(2, 4)], losses=losses, thickness=2.0)
    t.nsolution = 1
    s = t.solutions[0]
    s.energy, s.denergy, s.theta, s.phi = 10.0, 2.0, 0.0, 0.0
    t.get_pid()
    assert t.calc_eloss() == 1
    assert s.ekin == pytest.approx(12.5)
    energy, thick, z, a = losses.calls[0]
    assert energy == pytest.approx(12.0)
    assert thick == pytest.approx(1.0)
    assert z == 2
    assert a == pytest.approx(mass_amu(2, 4))
    assert s.energy_tot == pytest.approx(s.ekin + s.mass)
    assert s.mvect[2] == pytest.approx(s.momentum)


def test_calc_eloss_proton_punch_through():
    t = make(gates=[square_gate(1, 1)])
    t.nsolution = 1
    s = t.solutions[0]
    s.energy, s.denergy, s.theta, s.phi = 15.0, 2.0, 0.0, 0.0
    t.get_pid()
    assert t.calc_eloss() == 0
    assert (s.iz, s.ia, s.ekin) == (0, 0, 0.0)


def test_calc_eloss_requires_pid():
    t = make()
    t.nsolution = 1
    t.solutions[0].ipid = 0
    assert t.calc_eloss() == 0
    assert t.solutions[0].ekin == 0.0


def test_set_target_distance_applies_to_all():
    t = make()
    t.set_target_distance(12.5)
    assert {s.dist_target for s in t.solutions} == {12.5}