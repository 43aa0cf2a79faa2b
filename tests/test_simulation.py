import numpy as np
import pytest
from chain_sim.chain import ChainModel
from chain_sim.simulation import ChainSimulation, zigzag_layout, side_axis
from chain_sim.core.invariants import rod_lengths


def make_sim(**kwargs):
    chain = ChainModel(gravity=(0, 9.8, 0), segments=[(0.3, 1.0)] * 4, substeps=64)
    return ChainSimulation(chain=chain, **kwargs)


def test_zigzag_layout():
    points = zigzag_layout((0, 0, 0), [0.3, 0.3, 0.3, 0.3], angle_deg=30.0)

    np.testing.assert_allclose(rod_lengths(np.zeros(3), points), [0.3] * 4)
    assert np.all(np.diff(points[:, 1]) < 0)
    assert points[0, 0] > 0 and points[1, 0] == pytest.approx(0.0, abs=1e-15)
    np.testing.assert_allclose(points[:, 2], 0.0)


def test_side_axis_is_perpendicular():
    for up in ([0, 1, 0], [0, 0, -1], [1, 1, 1] / np.sqrt(3)):
        s = side_axis(np.array(up, dtype=float))
        assert np.dot(s, up) == pytest.approx(0.0, abs=1e-14)
        assert np.linalg.norm(s) == pytest.approx(1.0)


def test_default_session_hangs_below_root():
    sim = ChainSimulation.default(root_position=(0.0, 1.0, 0.0))
    assert sim.positions.shape == (4, 3)
    assert np.all(sim.positions[:, 1] < 1.0)
    np.testing.assert_array_equal(sim.velocities, np.zeros((4, 3)))
    assert sim.max_rod_error() < 1e-12


def test_first_tick_only_records_time():
    sim = make_sim()
    p0 = sim.positions.copy()

    assert sim.tick(5.0) == 5.0
    assert sim.last_tick == 5.0
    np.testing.assert_array_equal(sim.positions, p0)

    # Same timestamp again: still nothing
    assert sim.tick(5.0) == 5.0
    np.testing.assert_array_equal(sim.positions, p0)


def test_earlier_timestamp_is_ignored():
    sim = make_sim()
    sim.tick(1.0)
    p0 = sim.positions.copy()
    assert sim.tick(0.5) == 1.0
    assert sim.last_tick == 1.0
    np.testing.assert_array_equal(sim.positions, p0)


def test_ticks_advance_and_keep_rods():
    sim = make_sim()
    sim.tick(0.0)
    for k in range(1, 6):
        t = sim.tick(k / 60)
        assert t == pytest.approx(k / 60)
        assert sim.max_rod_error() < 1e-9
    assert sim.kinetic_energy() > 0.0
    np.testing.assert_array_equal(sim.root_position, np.zeros(3))


def test_drag_moves_root_to_target_continuously():
    sim = make_sim()
    sim.tick(0.0)
    target = np.array([0.01, 0.005, 0.0])

    sim.tick(1 / 60, root_target=target)
    np.testing.assert_allclose(sim.root_position, target, atol=1e-12)
    v_after_first = sim.root_velocity.copy()
    assert np.linalg.norm(v_after_first) > 0.0

    # Next tick starts from the velocity the root had at the junction
    sim.tick(2 / 60, root_target=target)
    np.testing.assert_allclose(sim.root_position, target, atol=1e-12)
    assert sim.max_rod_error() < 1e-9
    np.testing.assert_allclose(
        rod_lengths(sim.root_position, sim.positions), sim.chain.rod_lengths, rtol=1e-9
    )


def test_energy_accessors():
    sim = make_sim()
    assert sim.unit_energy() == pytest.approx(sim.chain.unit_energy())
    assert sim.total_energy() == pytest.approx(sim.potential_energy() + sim.kinetic_energy())


def test_explicit_state_must_match_chain():
    chain = ChainModel(gravity=(0, 9.8, 0), segments=[(0.3, 1.0)] * 4, substeps=64)
    with pytest.raises(ValueError):
        ChainSimulation(chain=chain, positions=np.zeros((3, 3)))
