"""
Ballistics 6DoF - Shot Dispersion Analysis

Framework for running parametric dispersions around a nominal shot to
assess group size. Supports muzzle speed, elevation, azimuth, mass and
crosswind variations. Each run is an independent solve with its own
immutable inputs, so runs may execute serially or across worker processes.
"""

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

import numpy as np

from .aero import AeroModel, DefaultAeroApprox
from .atmosphere import Atmosphere, standard_atmosphere
from .config import IntegrateOpts, create_default_opts
from .environment import Environment, Gravity
from .projectile import Projectile
from .state import initial_state_from_muzzle
from .trajectory import run_trajectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispersionConfig:
    """
    1-sigma Gaussian dispersions applied around the nominal shot.

    Attributes:
        n_runs: Number of shots
        seed: Master random seed (None for nondeterministic)
        muzzle_speed_sigma: Muzzle speed spread (m/s)
        elevation_sigma: Bore elevation spread (rad)
        azimuth_sigma: Bore azimuth spread (rad)
        mass_sigma: Relative mass spread (fraction of nominal)
        crosswind_sigma: Constant crosswind along inertial y (m/s)
        n_workers: Worker processes; 0 or 1 runs serially
    """
    n_runs: int = 20
    seed: Optional[int] = 42
    muzzle_speed_sigma: float = 3.0
    elevation_sigma: float = 1.0e-4
    azimuth_sigma: float = 1.0e-4
    mass_sigma: float = 0.002
    crosswind_sigma: float = 0.0
    n_workers: int = 0

    def __post_init__(self):
        if self.n_runs <= 0:
            raise ValueError(f"n_runs must be positive, got {self.n_runs}")
        sigmas = (self.muzzle_speed_sigma, self.elevation_sigma, self.azimuth_sigma,
                  self.mass_sigma, self.crosswind_sigma)
        if any(s < 0 for s in sigmas):
            raise ValueError("Dispersion sigmas must be non-negative")


@dataclass
class DispersionRun:
    """Result from a single dispersed shot."""
    run_index: int
    impact_x: float
    impact_y: float
    impact_z: float
    time_of_flight: float
    final_speed: float
    final_spin: float
    n_samples: int
    final_reason: str
    dispersions_applied: Dict[str, float] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.final_reason.startswith("ERROR")


@dataclass
class DispersionResults:
    """Aggregated results from a dispersion campaign."""
    runs: List[DispersionRun] = field(default_factory=list)
    config: Optional[DispersionConfig] = None
    wall_time_s: float = 0.0

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    @property
    def successful_runs(self) -> List[DispersionRun]:
        return [r for r in self.runs if r.success]

    def impact_points(self) -> np.ndarray:
        """(N, 2) array of final (x, y) for successful runs."""
        pts = [(r.impact_x, r.impact_y) for r in self.successful_runs]
        return np.array(pts, dtype=np.float64).reshape(-1, 2)

    def get_statistic(self, attr: str) -> dict:
        """Compute mean/std/min/max for a scalar attribute across runs."""
        values = [getattr(r, attr) for r in self.successful_runs if hasattr(r, attr)]
        if not values:
            return {'mean': 0, 'std': 0, 'min': 0, 'max': 0}
        arr = np.array(values)
        return {
            'mean': float(np.mean(arr)),
            'std': float(np.std(arr)),
            'min': float(np.min(arr)),
            'max': float(np.max(arr)),
        }

    def cep(self) -> float:
        """Circular error probable of the impact points about their mean."""
        pts = self.impact_points()
        if len(pts) == 0:
            return 0.0
        distances = np.sqrt(np.sum((pts - pts.mean(axis=0)) ** 2, axis=1))
        return float(np.percentile(distances, 50))

    def summary(self) -> str:
        """Return a formatted summary string."""
        lines = [f"Dispersion Results: {self.n_runs} runs in {self.wall_time_s:.1f}s"]
        for attr in ['impact_x', 'impact_y', 'impact_z', 'time_of_flight',
                     'final_speed']:
            stats = self.get_statistic(attr)
            lines.append(f"  {attr:16s}: mean={stats['mean']:.3f} std={stats['std']:.3f} "
                         f"min={stats['min']:.3f} max={stats['max']:.3f}")
        lines.append(f"  {'cep':16s}: {self.cep():.4f} m")
        return '\n'.join(lines)


def _generate_perturbations(config: DispersionConfig,
                            rng: np.random.Generator) -> Dict[str, float]:
    return {
        'muzzle_speed_offset': float(rng.normal(0.0, config.muzzle_speed_sigma)),
        'elevation_offset': float(rng.normal(0.0, config.elevation_sigma)),
        'azimuth_offset': float(rng.normal(0.0, config.azimuth_sigma)),
        'mass_scale': float(1.0 + rng.normal(0.0, config.mass_sigma)),
        'crosswind': float(rng.normal(0.0, config.crosswind_sigma)),
    }


def _run_single_shot(args: tuple) -> DispersionRun:
    """
    Run one dispersed shot.

    Runs in a worker process when the campaign is parallel, so everything
    arrives through the picklable args tuple.
    """
    (run_index, projectile, muzzle_position, muzzle_speed, elevation, azimuth,
     env, gravity, atmosphere, aero, opts, pert) = args

    try:
        shot = replace(projectile, mass=projectile.mass * pert['mass_scale'])
        wind = np.array(env.wind, dtype=np.float64)
        wind[1] += pert['crosswind']
        shot_env = replace(env, wind=wind)

        initial = initial_state_from_muzzle(
            muzzle_position,
            muzzle_speed + pert['muzzle_speed_offset'],
            elevation + pert['elevation_offset'],
            azimuth + pert['azimuth_offset'],
            shot.spin,
        )
        result = run_trajectory(shot, shot_env, gravity, atmosphere, aero, initial, opts)
        final = result.final

        return DispersionRun(
            run_index=run_index,
            impact_x=float(final.state.r[0]),
            impact_y=float(final.state.r[1]),
            impact_z=float(final.state.r[2]),
            time_of_flight=float(final.t),
            final_speed=final.state.speed,
            final_spin=final.state.spin_rate,
            n_samples=len(result.samples),
            final_reason=result.reason.value,
            dispersions_applied=pert,
        )
    except Exception as e:
        logger.warning(f"Dispersion run {run_index} failed: {e}")
        return DispersionRun(
            run_index=run_index,
            impact_x=0.0, impact_y=0.0, impact_z=0.0,
            time_of_flight=0.0, final_speed=0.0, final_spin=0.0, n_samples=0,
            final_reason=f"ERROR: {e}",
            dispersions_applied=pert,
        )


def run_dispersion(projectile: Projectile, muzzle_speed: float,
                   elevation: float = 0.0, azimuth: float = 0.0,
                   muzzle_position=(0.0, 0.0, 0.0),
                   config: Optional[DispersionConfig] = None,
                   env: Optional[Environment] = None,
                   gravity: Optional[Gravity] = None,
                   atmosphere: Optional[Atmosphere] = None,
                   aero: Optional[AeroModel] = None,
                   opts: Optional[IntegrateOpts] = None) -> DispersionResults:
    """
    Run a dispersion campaign around a nominal shot.

    All perturbations are drawn up front from one generator, so results
    for a given seed do not depend on the worker count.

    Args:
        projectile: Nominal projectile
        muzzle_speed: Nominal muzzle speed (m/s)
        elevation: Nominal bore elevation (rad)
        azimuth: Nominal bore azimuth (rad)
        muzzle_position: Inertial muzzle position (m)
        config: Dispersion settings (defaults to DispersionConfig())
        env, gravity, atmosphere, aero, opts: Shared solve inputs

    Returns:
        DispersionResults ordered by run index
    """
    config = config if config is not None else DispersionConfig()
    env = env if env is not None else Environment()
    gravity = gravity if gravity is not None else Gravity()
    atmosphere = atmosphere if atmosphere is not None else standard_atmosphere()
    aero = aero if aero is not None else DefaultAeroApprox()
    opts = opts if opts is not None else create_default_opts()

    rng = np.random.default_rng(config.seed)
    args_list = [
        (i, projectile, tuple(muzzle_position), muzzle_speed, elevation, azimuth,
         env, gravity, atmosphere, aero, opts, _generate_perturbations(config, rng))
        for i in range(config.n_runs)
    ]

    logger.info(f"Starting dispersion campaign: {config.n_runs} runs, "
                f"{config.n_workers or 1} worker(s)")
    start = time.time()
    runs: List[DispersionRun] = []

    if config.n_workers <= 1:
        for args in args_list:
            runs.append(_run_single_shot(args))
    else:
        with ProcessPoolExecutor(max_workers=config.n_workers) as executor:
            futures = [executor.submit(_run_single_shot, args) for args in args_list]
            for future in as_completed(futures):
                runs.append(future.result())

    runs.sort(key=lambda r: r.run_index)
    results = DispersionResults(runs=runs, config=config,
                                wall_time_s=time.time() - start)

    failed = results.n_runs - len(results.successful_runs)
    if failed:
        logger.warning(f"{failed} of {results.n_runs} dispersion runs failed")
    logger.info(results.summary())

    return results
