"""
Ballistics 6DoF - Sample Export

Column-oriented arrays and CSV output for offline analysis.
"""

import csv
import logging
import os
from typing import Dict, List

import numpy as np

logger = logging.getLogger(__name__)

POSITION_FIELDS = ['t', 'x', 'y', 'z', 'vx', 'vy', 'vz']

FULL_FIELDS = POSITION_FIELDS + [
    'qw', 'qx', 'qy', 'qz', 'p', 'q', 'r',
    'mach', 'qbar', 'rho', 'alpha', 'beta',
]


def samples_to_arrays(samples: List) -> Dict[str, np.ndarray]:
    """
    Convert a sample list to a dict of equal-length numpy arrays.

    Keys are FULL_FIELDS; an empty list yields empty arrays.
    """
    n = len(samples)
    data = {name: np.zeros(n) for name in FULL_FIELDS}

    for i, s in enumerate(samples):
        st = s.state
        data['t'][i] = s.t
        data['x'][i], data['y'][i], data['z'][i] = st.r
        data['vx'][i], data['vy'][i], data['vz'][i] = st.v
        data['qw'][i], data['qx'][i], data['qy'][i], data['qz'][i] = st.q
        data['p'][i], data['q'][i], data['r'][i] = st.omega
        data['mach'][i] = s.mach
        data['qbar'][i] = s.qbar
        data['rho'][i] = s.rho
        data['alpha'][i] = s.alpha
        data['beta'][i] = s.beta

    return data


def write_samples_csv(samples: List, filename: str, full: bool = False) -> str:
    """
    Write samples to CSV with a header row.

    Args:
        samples: Output of integrate_6dof
        filename: Destination path; parent directories are created
        full: Include attitude, rates and flow columns

    Returns:
        The filename written
    """
    os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
    header = FULL_FIELDS if full else POSITION_FIELDS
    data = samples_to_arrays(samples)

    with open(filename, 'w', newline='') as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        for i in range(len(samples)):
            writer.writerow([repr(float(data[name][i])) for name in header])

    logger.info(f"Wrote {len(samples)} samples to {filename}")
    return filename


def read_samples_csv(filename: str) -> Dict[str, np.ndarray]:
    """Read a CSV written by write_samples_csv back into column arrays."""
    with open(filename, newline='') as fh:
        reader = csv.DictReader(fh)
        rows = list(reader)
        fields = reader.fieldnames or []

    return {name: np.array([float(row[name]) for row in rows]) for name in fields}
