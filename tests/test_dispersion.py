import dataclasses

import numpy as np
import pytest

from ballistics6dof.config import IntegrateOpts
from ballistics6dof.dispersion import (
    DispersionConfig, DispersionResults, DispersionRun, run_dispersion,
)


@pytest.fixture
def opts():
    return IntegrateOpts(dt=0.005, max_time=1.0, ground_z=0.0)


def run(projectile, drag_only_aero, opts, **config):
    return run_dispersion(projectile, 800.0, muzzle_position=(0.0, 0.0, 1.5),
                          config=DispersionConfig(**config), aero=drag_only_aero, opts=opts)


def test_campaign_collects_every_run(projectile, drag_only_aero, opts):
    results = run(projectile, drag_only_aero, opts, n_runs=4, seed=7)
    assert results.n_runs == 4
    assert [r.run_index for r in results.runs] == [0, 1, 2, 3]
    assert all(r.success for r in results.runs)
    assert all(r.final_reason == "ground impact" for r in results.runs)
    stats = results.get_statistic('impact_x')
    assert 300.0 < stats['mean'] < 450.0
    assert stats['std'] > 0.0
    assert results.impact_points().shape == (4, 2)


def test_same_seed_same_results(projectile, drag_only_aero, opts):
    a = run(projectile, drag_only_aero, opts, n_runs=3, seed=11)
    b = run(projectile, drag_only_aero, opts, n_runs=3, seed=11)
    assert [r.impact_x for r in a.runs] == [r.impact_x for r in b.runs]
    assert [r.dispersions_applied for r in a.runs] == [r.dispersions_applied for r in b.runs]


def test_zero_sigmas_reproduce_nominal(projectile, drag_only_aero, opts):
    results = run(projectile, drag_only_aero, opts, n_runs=2, muzzle_speed_sigma=0.0,
                  elevation_sigma=0.0, azimuth_sigma=0.0, mass_sigma=0.0)
    assert results.runs[0].impact_x == results.runs[1].impact_x
    assert results.cep() == 0.0


def test_config_validation():
    with pytest.raises(ValueError):
        DispersionConfig(n_runs=0)
    with pytest.raises(ValueError):
        DispersionConfig(mass_sigma=-0.1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        DispersionConfig().n_runs = 3


def test_failed_runs_are_excluded_from_statistics():
    good = DispersionRun(0, 10.0, 0.0, 0.0, 0.5, 700.0, 3900.0, 100, "ground impact")
    bad = DispersionRun(1, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0, "ERROR: boom")
    results = DispersionResults(runs=[good, bad])
    assert not bad.success
    assert results.get_statistic('impact_x')['mean'] == 10.0
    assert "Dispersion Results: 2 runs" in results.summary()


def test_bad_shot_reported_not_raised(projectile, drag_only_aero, opts):
    """A dispersed mass that goes non-positive fails only that run."""
    results = run(projectile, drag_only_aero, opts, n_runs=20, mass_sigma=1e6)
    assert results.n_runs == 20
    assert any(r.final_reason.startswith("ERROR") for r in results.runs)


@pytest.mark.slow
def test_parallel_matches_serial(projectile, drag_only_aero, opts):
    serial = run(projectile, drag_only_aero, opts, n_runs=4, seed=3, n_workers=0)
    parallel = run(projectile, drag_only_aero, opts, n_runs=4, seed=3, n_workers=2)
    np.testing.assert_array_equal(serial.impact_points(), parallel.impact_points())
