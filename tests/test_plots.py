"""
Unit tests for plot generation.

Plots are rendered from a short drag-only flight into a temporary
directory with the Agg backend.
"""

import os
import tempfile
import unittest

import numpy as np

from ballistics6dof import (
    Environment, Gravity, create_test_opts, integrate_6dof,
    initial_state_from_muzzle, projectile_cylindrical, standard_atmosphere,
)
from ballistics6dof.plotting import (
    PLOT_FUNCTIONS, TrajectoryData, extract_sample_data, generate_all_plots,
)
from conftest import make_drag_only_aero


class TestPlotGeneration(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        projectile = projectile_cylindrical(0.01, 0.00782, 0.035, 4000.0)
        initial = initial_state_from_muzzle(np.array([0.0, 0.0, 1.5]), 800.0, 0.0, 0.0,
                                            projectile.spin)
        cls.samples = integrate_6dof(projectile, Environment(), Gravity(),
                                     standard_atmosphere(), make_drag_only_aero(),
                                     initial, create_test_opts(dt=0.01, max_time=0.2))

    def test_extract_sample_data(self):
        data = extract_sample_data(self.samples)
        self.assertIsInstance(data, TrajectoryData)
        n = len(self.samples)
        self.assertEqual(data.position.shape, (n, 3))
        self.assertEqual(data.quaternion.shape, (n, 4))
        np.testing.assert_allclose(data.quaternion_norm, np.ones(n), atol=1e-9)
        self.assertAlmostEqual(data.speed[0], 800.0)

    def test_bore_elevation_from_attitude(self):
        data = extract_sample_data(self.samples)
        np.testing.assert_allclose(data.bore_elevation_deg, 0.0, atol=1e-9)

        projectile = projectile_cylindrical(0.01, 0.00782, 0.035, 0.0)
        initial = initial_state_from_muzzle(np.zeros(3), 800.0, np.radians(5.0), np.radians(30.0),
                                            0.0)
        samples = integrate_6dof(projectile, Environment(), Gravity(), standard_atmosphere(),
                                 make_drag_only_aero(), initial,
                                 create_test_opts(dt=0.01, max_time=0.0))
        elevated = extract_sample_data(samples)
        self.assertAlmostEqual(elevated.bore_elevation_deg[0], 5.0, places=9)

    def test_extract_rejects_empty(self):
        with self.assertRaises(ValueError):
            extract_sample_data([])

    def test_generate_all_plots(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out = os.path.join(tmpdir, "plots")
            files = generate_all_plots(self.samples, out)
            self.assertEqual(len(files), len(PLOT_FUNCTIONS))
            for path in files:
                self.assertTrue(os.path.exists(path))
                self.assertTrue(path.endswith(".png"))
                self.assertGreater(os.path.getsize(path), 0)


if __name__ == "__main__":
    unittest.main()
