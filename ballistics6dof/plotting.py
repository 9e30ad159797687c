"""
Ballistics 6DoF - Trajectory Visualization

Batch plotting of a sample sequence: flight path, ground track, speed and
Mach, dynamic pressure, aerodynamic angles, body rates and the quaternion
norm check. Figures are written as PNG files with the non-interactive Agg
backend.
"""

import logging
import os
from dataclasses import dataclass
from typing import List

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt
import numpy as np

from .export import samples_to_arrays
from .frames import quaternion_to_rotation_matrix

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass
class TrajectoryData:
    """Container for processed trajectory data used in plotting.

    Attributes:
        time: Time array (s)
        position: Inertial position [n x 3] (m)
        velocity: Inertial velocity [n x 3] (m/s)
        speed: Inertial speed (m/s)
        quaternion: Attitude quaternion [n x 4]
        omega: Body rates [n x 3] (rad/s)
        mach: Mach number
        qbar: Dynamic pressure (Pa)
        alpha_deg: Angle of attack (deg)
        beta_deg: Sideslip (deg)
        bore_elevation_deg: Elevation of the body x-axis above the horizon (deg)
    """
    time: np.ndarray
    position: np.ndarray
    velocity: np.ndarray
    speed: np.ndarray
    quaternion: np.ndarray
    omega: np.ndarray
    mach: np.ndarray
    qbar: np.ndarray
    alpha_deg: np.ndarray
    beta_deg: np.ndarray
    bore_elevation_deg: np.ndarray

    @property
    def quaternion_norm(self) -> np.ndarray:
        return np.linalg.norm(self.quaternion, axis=1)


# =============================================================================
# Configuration
# =============================================================================

def configure_plot_style() -> None:
    """Configure matplotlib defaults for technical plots."""
    plt.rcParams.update({
        'figure.figsize': (10, 6),
        'figure.dpi': 100,
        'savefig.dpi': 150,
        'axes.grid': True,
        'axes.axisbelow': True,
        'grid.alpha': 0.3,
        'grid.linestyle': '-',
        'grid.linewidth': 0.5,
        'font.size': 11,
        'axes.titlesize': 13,
        'axes.labelsize': 12,
        'legend.fontsize': 10,
        'lines.linewidth': 1.8,
        'xtick.direction': 'in',
        'ytick.direction': 'in',
    })


# =============================================================================
# Data Processing
# =============================================================================

def extract_sample_data(samples: List) -> TrajectoryData:
    """Extract plotting arrays from a sample list.

    Raises:
        ValueError: If samples is empty
    """
    if not samples:
        raise ValueError("No samples to plot")

    d = samples_to_arrays(samples)
    position = np.column_stack([d['x'], d['y'], d['z']])
    velocity = np.column_stack([d['vx'], d['vy'], d['vz']])
    quaternion = np.column_stack([d['qw'], d['qx'], d['qy'], d['qz']])
    # Body x-axis in the inertial frame is the first column of R(q)
    bore = np.array([quaternion_to_rotation_matrix(q)[:, 0] for q in quaternion])

    return TrajectoryData(
        time=d['t'],
        position=position,
        velocity=velocity,
        speed=np.linalg.norm(velocity, axis=1),
        quaternion=quaternion,
        omega=np.column_stack([d['p'], d['q'], d['r']]),
        mach=d['mach'],
        qbar=d['qbar'],
        alpha_deg=np.degrees(d['alpha']),
        beta_deg=np.degrees(d['beta']),
        bore_elevation_deg=np.degrees(np.arctan2(bore[:, 2], np.hypot(bore[:, 0], bore[:, 1]))),
    )


def _save(fig, output_dir: str, name: str) -> str:
    plt.tight_layout()
    path = os.path.join(output_dir, name)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


# =============================================================================
# Plots
# =============================================================================

def plot_flight_path(data: TrajectoryData, output_dir: str) -> str:
    """Height vs downrange (side view)."""
    fig, ax = plt.subplots()
    ax.plot(data.position[:, 0], data.position[:, 2], 'b-', label='Trajectory')
    ax.scatter([data.position[0, 0]], [data.position[0, 2]],
               c='green', s=60, marker='o', zorder=5, label='Muzzle')
    ax.scatter([data.position[-1, 0]], [data.position[-1, 2]],
               c='red', s=60, marker='x', zorder=5,
               label=f'Final ({data.position[-1, 0]:.1f} m)')
    ax.set_xlabel('Downrange x (m)')
    ax.set_ylabel('Height z (m)')
    ax.set_title('Flight Path', fontweight='bold')
    ax.legend(loc='best')
    return _save(fig, output_dir, '01_flight_path.png')


def plot_ground_track(data: TrajectoryData, output_dir: str) -> str:
    """Lateral drift vs downrange (top view)."""
    fig, ax = plt.subplots()
    ax.plot(data.position[:, 0], data.position[:, 1], 'g-')
    ax.set_xlabel('Downrange x (m)')
    ax.set_ylabel('Lateral y (m)')
    ax.set_title('Ground Track', fontweight='bold')
    return _save(fig, output_dir, '02_ground_track.png')


def plot_speed_and_mach(data: TrajectoryData, output_dir: str) -> str:
    fig, ax = plt.subplots()
    ax.plot(data.time, data.speed, 'b-', label='Speed')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Speed (m/s)', color='b')
    ax2 = ax.twinx()
    ax2.plot(data.time, data.mach, 'r--', label='Mach')
    ax2.set_ylabel('Mach', color='r')
    ax2.grid(False)
    ax.set_title('Speed and Mach Number', fontweight='bold')
    return _save(fig, output_dir, '03_speed_mach.png')


def plot_dynamic_pressure(data: TrajectoryData, output_dir: str) -> str:
    fig, ax = plt.subplots()
    ax.plot(data.time, data.qbar / 1000.0, 'm-')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Dynamic pressure (kPa)')
    ax.set_title('Dynamic Pressure', fontweight='bold')
    return _save(fig, output_dir, '04_dynamic_pressure.png')


def plot_aero_angles(data: TrajectoryData, output_dir: str) -> str:
    """Flow angles above; bore elevation against the flight-path angle below."""
    v = data.velocity
    gamma_deg = np.degrees(np.arctan2(v[:, 2], np.hypot(v[:, 0], v[:, 1])))

    fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True)
    ax1.plot(data.time, data.alpha_deg, 'b-', label='Angle of attack α')
    ax1.plot(data.time, data.beta_deg, 'r-', label='Sideslip β')
    ax1.set_ylabel('Angle (deg)')
    ax1.set_title('Aerodynamic Angles', fontweight='bold')
    ax1.legend(loc='best')

    ax2.plot(data.time, data.bore_elevation_deg, 'k-', label='Bore elevation')
    ax2.plot(data.time, gamma_deg, 'g--', label='Flight-path angle')
    ax2.set_xlabel('Time (s)')
    ax2.set_ylabel('Angle (deg)')
    ax2.legend(loc='best')
    return _save(fig, output_dir, '05_aero_angles.png')


def plot_body_rates(data: TrajectoryData, output_dir: str) -> str:
    """Spin on its own axis; pitch/yaw rates share the lower panel."""
    fig, (ax1, ax2) = plt.subplots(2, 1, sharex=True)
    ax1.plot(data.time, data.omega[:, 0], 'k-')
    ax1.set_ylabel('Spin p (rad/s)')
    ax1.set_title('Body Angular Rates', fontweight='bold')
    ax2.plot(data.time, data.omega[:, 1], 'b-', label='q (pitch)')
    ax2.plot(data.time, data.omega[:, 2], 'r-', label='r (yaw)')
    ax2.set_xlabel('Time (s)')
    ax2.set_ylabel('Rate (rad/s)')
    ax2.legend(loc='best')
    return _save(fig, output_dir, '06_body_rates.png')


def plot_quaternion_norm(data: TrajectoryData, output_dir: str) -> str:
    fig, ax = plt.subplots()
    ax.plot(data.time, data.quaternion_norm - 1.0, 'k-')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('|q| - 1')
    ax.set_title('Quaternion Norm Error', fontweight='bold')
    ax.ticklabel_format(axis='y', style='sci', scilimits=(0, 0))
    return _save(fig, output_dir, '07_quaternion_norm.png')


PLOT_FUNCTIONS = [
    plot_flight_path,
    plot_ground_track,
    plot_speed_and_mach,
    plot_dynamic_pressure,
    plot_aero_angles,
    plot_body_rates,
    plot_quaternion_norm,
]


def generate_all_plots(samples: List, output_dir: str = "plots") -> List[str]:
    """Generate all trajectory plots.

    Args:
        samples: Output of integrate_6dof
        output_dir: Directory to save plots (created if missing)

    Returns:
        List of paths to saved plot files
    """
    os.makedirs(output_dir, exist_ok=True)
    configure_plot_style()
    data = extract_sample_data(samples)

    saved_files = []
    for plot_func in PLOT_FUNCTIONS:
        try:
            saved_files.append(plot_func(data, output_dir))
        except Exception as e:
            logger.warning(f"Failed to generate {plot_func.__name__}: {e}")
            plt.close('all')

    logger.info(f"Saved {len(saved_files)} plots to {output_dir}")
    return saved_files
