"""Demo script: muzzle-level shot plus a drag-only range table."""

from ballistics6dof import (
    TabulatedAeroModel, create_default_opts,
    projectile_cylindrical, simulate_shot,
)
from ballistics6dof.units import drop_to_mil, m_to_yards

projectile = projectile_cylindrical(mass=0.01, diameter=0.00782, length=0.035, spin=4000.0)

result = simulate_shot(projectile, muzzle_speed=800.0)
print("\n===== MUZZLE-LEVEL SHOT (default aerodynamics) =====")
print(f"Samples: {len(result.samples)} | Reason: {result.reason.value}")
print(f"Final: t={result.final.t:.4f}s | {result.final.state}")

# Drag curve only; lateral coefficients zeroed
drag_only = TabulatedAeroModel(
    mach=[0.0, 0.8, 1.2, 2.0, 3.0],
    c_d=[0.25, 0.25, 0.40, 0.30, 0.25],
    tables={key: [0.0] * 5 for key in
            ('c_l_alpha', 'c_y_beta', 'c_m_alpha', 'c_m_q', 'c_magnus')},
)

result = simulate_shot(projectile, muzzle_speed=800.0, muzzle_position=(0.0, 0.0, 1.5),
                       aero=drag_only, opts=create_default_opts())

print("\n===== RANGE TABLE (drag only, muzzle at 1.5 m) =====")
print(f"{'t (s)':>8} {'x (m)':>9} {'x (yd)':>9} {'drop (m)':>9} {'drop (mil)':>10} "
      f"{'drift (m)':>10} {'v (m/s)':>8} {'Mach':>6}")
for sample in result.samples[::25] + [result.final]:
    r = sample.state.r
    drop = r[2] - 1.5
    mil = drop_to_mil(drop, r[0]) if r[0] > 0 else 0.0
    print(f"{sample.t:8.3f} {r[0]:9.2f} {m_to_yards(r[0]):9.2f} {drop:9.3f} {mil:10.2f} "
          f"{r[1]:10.3f} {sample.state.speed:8.1f} {sample.mach:6.3f}")
print(f"\nTermination: {result.reason.value} after {result.time_of_flight:.3f} s")
