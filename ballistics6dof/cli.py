"""
Ballistics 6DoF - CLI

Single entry point for running one shot (or a dispersion campaign),
printing a summary, and optionally exporting samples and plots.
"""

import argparse
import logging
import os
import sys

import numpy as np

from .aero import DefaultAeroApprox
from .atmosphere import Atmosphere
from .config import INTEGRATION_METHODS, IntegrateOpts
from .dynamics import compute_loads
from .environment import Environment, Gravity
from .projectile import projectile_cylindrical
from .state import initial_state_from_muzzle
from .trajectory import run_trajectory
from .units import m_to_yards, mps_to_fps, rps_to_rad_s

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="ballistics6dof",
        description="6DoF spin-stabilized projectile trajectory",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    shot = parser.add_argument_group("projectile and muzzle")
    shot.add_argument("--mass", type=float, default=0.01, help="Mass (kg)")
    shot.add_argument("--diameter", type=float, default=0.00782, help="Caliber (m)")
    shot.add_argument("--length", type=float, default=0.035, help="Overall length (m)")
    shot.add_argument("--spin-rps", type=float, default=636.62,
                      help="Initial spin (rev/s)")
    shot.add_argument("--muzzle-speed", type=float, default=800.0, help="Muzzle speed (m/s)")
    shot.add_argument("--elevation-deg", type=float, default=0.0, help="Bore elevation (deg)")
    shot.add_argument("--azimuth-deg", type=float, default=0.0, help="Bore azimuth (deg)")
    shot.add_argument("--height", type=float, default=0.0, help="Muzzle height z (m)")

    air = parser.add_argument_group("environment")
    air.add_argument("--temperature", type=float, default=15.0, help="Temperature (°C)")
    air.add_argument("--pressure", type=float, default=1013.25, help="Pressure (hPa)")
    air.add_argument("--humidity", type=float, default=50.0, help="Relative humidity (%%)")
    air.add_argument("--altitude", type=float, default=0.0, help="Launch-site elevation (m)")
    air.add_argument("--wind", type=float, nargs=3, default=[0.0, 0.0, 0.0],
                     metavar=("WX", "WY", "WZ"), help="Constant wind (m/s)")
    air.add_argument("--humid-air", action="store_true",
                     help="Include water vapour in the density")

    run = parser.add_argument_group("integration")
    run.add_argument("--dt", type=float, default=0.002, help="Time step (s)")
    run.add_argument("--max-time", type=float, default=2.0, help="Time budget (s)")
    run.add_argument("--max-steps", type=int, default=10000, help="Step budget")
    run.add_argument("--ground-z", type=float, default=0.0, help="Ground height (m)")
    run.add_argument("--method", choices=INTEGRATION_METHODS, default="rk4")
    run.add_argument("--dispersion", type=int, default=0, metavar="N",
                     help="Run N dispersed shots instead of one")
    run.add_argument("--workers", type=int, default=0,
                     help="Worker processes for dispersion runs")

    out = parser.add_argument_group("output")
    out.add_argument("--csv", type=str, default=None, help="Write samples to this CSV file")
    out.add_argument("--full-csv", action="store_true",
                     help="Include attitude, rates and flow columns in the CSV")
    out.add_argument("--output-dir", "-o", type=str, default="plots",
                     help="Directory to save output plots")
    out.add_argument("--no-plots", action="store_true", help="Skip plot generation")
    out.add_argument("--quiet", "-q", action="store_true", help="Suppress verbose output")

    return parser.parse_args(argv)


def configure_logging(quiet: bool = False) -> None:
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def print_summary(result, muzzle_loads=None) -> None:
    final = result.final.state
    print("\n" + "=" * 60)
    print("TRAJECTORY SUMMARY")
    print("=" * 60)
    print(f"Termination reason: {result.reason.value}")
    print(f"Samples:            {len(result.samples)}")
    print(f"Time of flight:     {result.time_of_flight:.4f} s")
    print(f"Downrange:          {final.r[0]:.3f} m ({m_to_yards(final.r[0]):.2f} yd)")
    print(f"Lateral drift:      {final.r[1]:.4f} m")
    print(f"Final height:       {final.r[2]:.4f} m")
    print(f"Final speed:        {final.speed:.2f} m/s ({mps_to_fps(final.speed):.1f} ft/s)")
    print(f"Final Mach:         {result.final.mach:.3f}")
    print(f"Final spin:         {final.spin_rate:.1f} rad/s")
    if muzzle_loads is not None:
        drag = -muzzle_loads['drag'][0]
        magnus = np.linalg.norm(muzzle_loads['magnus'])
        print(f"Muzzle drag:        {drag:.3f} N")
        print(f"Muzzle Magnus:      {magnus:.4e} N")
    print("=" * 60 + "\n")


def main(argv=None):
    """Main execution flow."""
    args = parse_args(argv)
    configure_logging(args.quiet)

    try:
        projectile = projectile_cylindrical(
            args.mass, args.diameter, args.length, rps_to_rad_s(args.spin_rps)
        )
        env = Environment(
            temperature_c=args.temperature,
            pressure_hpa=args.pressure,
            humidity_pct=args.humidity,
            altitude_m=args.altitude,
            wind=np.array(args.wind),
        )
        atmosphere = Atmosphere(include_humidity=args.humid_air)
        gravity = Gravity()
        aero = DefaultAeroApprox()
        opts = IntegrateOpts(dt=args.dt, max_time=args.max_time,
                             max_steps=args.max_steps, ground_z=args.ground_z,
                             method=args.method)
        elevation = np.radians(args.elevation_deg)
        azimuth = np.radians(args.azimuth_deg)
        muzzle = np.array([0.0, 0.0, args.height])

        if args.dispersion > 0:
            from .dispersion import DispersionConfig, run_dispersion
            results = run_dispersion(
                projectile, args.muzzle_speed, elevation, azimuth, muzzle,
                config=DispersionConfig(n_runs=args.dispersion, n_workers=args.workers),
                env=env, gravity=gravity, atmosphere=atmosphere, aero=aero, opts=opts,
            )
            print(results.summary())
            return 0

        initial = initial_state_from_muzzle(
            muzzle, args.muzzle_speed, elevation, azimuth, projectile.spin
        )
        result = run_trajectory(projectile, env, gravity, atmosphere, aero, initial, opts)
        print_summary(result, compute_loads(initial, projectile, aero, atmosphere, env))

        if args.csv:
            from .export import write_samples_csv
            write_samples_csv(result.samples, args.csv, full=args.full_csv)
            print(f">> Samples written to: {args.csv}")

        if not args.no_plots:
            from .plotting import generate_all_plots
            plot_dir = os.path.abspath(args.output_dir)
            logger.info(f"Generating plots in {plot_dir}")
            saved = generate_all_plots(result.samples, plot_dir)
            print(f">> {len(saved)} plots saved in: {plot_dir}")

    except Exception as e:
        logger.error(f"Trajectory run failed: {e}", exc_info=True)
        print(f"\n[ERROR] Trajectory run failed: {e}")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    sys.exit(main())
