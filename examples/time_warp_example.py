"""
Time Warp Example: Interactive Propagation Loop

Drives the propagation controller at 60 frames per second through a
periapsis burn, a time-accelerated coast and a plot of the result.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import logging

import numpy as np

from orbit_sim.simulation import (CentralBody, PropagationController,
                                  Spacecraft, TrajectoryRecorder,
                                  TrajectoryVisualizer,
                                  create_default_propagation_config)
from orbit_sim.utils import ScaleConverter

FRAME_TIME = 1.0 / 60.0


def main():
    """Main example function."""
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    print("=== Orbital Simulation Core - Time Warp Example ===\n")

    earth = CentralBody()
    config = create_default_propagation_config()
    scale = ScaleConverter(config.display_scale_factor)

    # e = 0.5 orbit, starting at a 7000 km periapsis
    r_p, e = 7.0e6, 0.5
    v_p = np.sqrt(earth.mu * (1 + e) / r_p)
    spacecraft = Spacecraft([r_p, 0.0, 0.0], [0.0, v_p, 0.0],
                            mass=20000.0, thrust=200000.0,
                            direction=[0.0, 1.0, 0.0])
    controller = PropagationController(spacecraft, earth, scale, config)
    recorder = TrajectoryRecorder()

    print(f"Initial eccentricity: {controller.orbit_summary()['eccentricity']:.4f}")

    # One second prograde burn at real time
    controller.set_thrust(True)
    for _ in range(60):
        recorder.record(controller.tick(FRAME_TIME))
    controller.set_thrust(False)
    print(f"After burn eccentricity: {controller.orbit_summary()['eccentricity']:.4f}")

    # Coast at increasing warp
    for _ in range(len(config.time_acceleration_levels) - 1):
        warp = controller.increase_time_acceleration()
        for _ in range(120):
            recorder.record(controller.tick(FRAME_TIME))
        print(f"  {warp:5g}x: mode = {controller.mode.value}, "
              f"altitude = {controller.altitude()/1000:.1f} km, "
              f"display position = {np.round(controller.display_position(), 1)}")

    summary = controller.orbit_summary()
    print(f"\nFinal orbit: e = {summary['eccentricity']:.4f}, "
          f"a = {summary['semi_major_axis']/1000:.1f} km, "
          f"period = {summary['orbital_period']/60:.1f} min")
    print(f"Simulated time: {controller.elapsed_time/3600:.2f} h")

    trajectory = recorder.to_trajectory()
    visualizer = TrajectoryVisualizer()
    visualizer.plot_trajectory_3d(trajectory, earth, controller.orbital_elements(),
                                  save_path="time_warp_trajectory.png")
    visualizer.plot_orbit_history(trajectory, earth, save_path="time_warp_history.png")

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
