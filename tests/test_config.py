"""Tests for IntegrateOpts and its factories."""

import dataclasses
import unittest

from ballistics6dof import constants as C
from ballistics6dof.config import IntegrateOpts, create_default_opts, create_test_opts


class TestIntegrateOpts(unittest.TestCase):

    def test_defaults_match_constants(self):
        opts = create_default_opts()
        self.assertEqual(opts.dt, C.DT)
        self.assertEqual(opts.max_time, C.MAX_TIME)
        self.assertEqual(opts.max_steps, C.MAX_STEPS)
        self.assertEqual(opts.ground_z, C.GROUND_Z)
        self.assertEqual(opts.method, 'rk4')

    def test_test_opts_overrides(self):
        opts = create_test_opts(max_time=1.0, ground_z=-5.0, method='euler')
        self.assertEqual(opts.dt, 0.01)
        self.assertEqual(opts.max_time, 1.0)
        self.assertEqual(opts.ground_z, -5.0)
        self.assertEqual(opts.method, 'euler')

    def test_frozen(self):
        opts = create_default_opts()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            opts.dt = 0.1
        self.assertEqual(dataclasses.replace(opts, dt=0.1).dt, 0.1)

    def test_zero_max_time_allowed(self):
        self.assertEqual(IntegrateOpts(max_time=0.0).max_time, 0.0)

    def test_invalid_values(self):
        bad = [
            dict(dt=0.0),
            dict(dt=-0.001),
            dict(dt=float('nan')),
            dict(max_time=-1.0),
            dict(max_time=float('inf')),
            dict(max_steps=0),
            dict(max_steps=2.5),
            dict(method='leapfrog'),
        ]
        for kwargs in bad:
            with self.subTest(**kwargs):
                with self.assertRaises(ValueError):
                    IntegrateOpts(**kwargs)


if __name__ == "__main__":
    unittest.main()
