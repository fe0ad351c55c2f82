"""
Basic Example: Orbit Determination and Keplerian Propagation

This example computes the orbital elements of a few spacecraft states and
propagates them analytically.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import numpy as np

from orbit_sim.dynamics import (KeplerPropagator, orbit_path_points,
                                state_to_elements)
from orbit_sim.simulation import CentralBody


def main():
    """Main example function."""
    print("=== Orbital Simulation Core - Basic Example ===\n")

    earth = CentralBody()

    # 7000 km polar orbit at roughly circular speed
    print("1. Orbit determination for a 7000 km polar orbit:")
    position = np.array([7.0e6, 0.0, 0.0])
    velocity = np.array([0.0, 0.0, 7546.0])
    elements = state_to_elements(position, velocity, earth.mass)

    print(f"  Semi-major axis: {elements.semi_major_axis/1000:.1f} km")
    print(f"  Eccentricity: {elements.eccentricity:.6f}")
    print(f"  Inclination: {np.degrees(elements.inclination):.1f}°")
    print(f"  Orbital period: {elements.orbital_period/60:.1f} min")
    print(f"  Altitude: {earth.altitude(position)/1000:.1f} km")
    print(f"  Circular speed: {earth.circular_orbit_velocity(7.0e6):.1f} m/s")
    print(f"  Escape speed: {earth.escape_velocity(7.0e6):.1f} m/s")

    # Analytic propagation
    print("\n2. Keplerian propagation:")
    propagator = KeplerPropagator()
    for dt in [60.0, 600.0, elements.orbital_period / 2, elements.orbital_period]:
        state = propagator.propagate(elements, earth.mass, dt)
        print(f"  t = {dt:7.1f} s: r = {np.linalg.norm(state.position)/1000:.3f} km, "
              f"f = {np.degrees(state.true_anomaly):6.1f}°")

    # Different orbit types from the same position
    print("\n3. Orbit classification by speed at 7000 km:")
    v_esc = earth.escape_velocity(7.0e6)
    for label, speed in [("elliptical", 8500.0), ("parabolic", v_esc), ("hyperbolic", 12000.0)]:
        orbit = state_to_elements(position, np.array([0.0, speed, 0.0]), earth.mass)
        applicable = propagator.is_applicable(orbit)
        print(f"  {label:10s}: e = {orbit.eccentricity:.4f}, "
              f"periapsis = {orbit.periapsis/1000:.1f} km, Keplerian = {applicable}")

    # Sampled orbit path for display
    print("\n4. Orbit path:")
    eccentric = state_to_elements(position, np.array([0.0, 8500.0, 1000.0]), earth.mass)
    path = orbit_path_points(eccentric, num_points=100)
    radii = np.linalg.norm(path, axis=1)
    print(f"  {len(path)} points, r from {radii.min()/1000:.1f} to {radii.max()/1000:.1f} km")
    print(f"  Periapsis: {eccentric.periapsis/1000:.1f} km, apoapsis: {eccentric.apoapsis/1000:.1f} km")

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
