"""
Trajectory Recording and Visualization Module

Collects per-tick results from the propagation controller and produces
static matplotlib plots of the trajectory, the osculating orbit and the
orbit history.

Author: Arthur Allex Feliphe Barbosa Moreno
Institution: IME - Instituto Militar de Engenharia - 2025
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from ..dynamics.orbital_elements import (OrbitalElements, orbit_path_points,
                                         state_to_elements)
from .bodies import CentralBody
from .controller import PropagationController, TickResult

logger = logging.getLogger(__name__)


@dataclass
class TrajectoryData:
    """Container for trajectory data."""

    time: np.ndarray
    position: np.ndarray  # Shape: (N, 3)
    velocity: np.ndarray  # Shape: (N, 3)
    modes: List[str] = field(default_factory=list)
    collisions: int = 0

    def __post_init__(self):
        """Validate trajectory data."""
        if self.position.shape[0] != len(self.time):
            raise ValueError("Position and time arrays must have same length")
        if self.velocity.shape[0] != len(self.time):
            raise ValueError("Velocity and time arrays must have same length")

    def radius(self, center: Optional[np.ndarray] = None) -> np.ndarray:
        """Distance from ``center`` (origin by default) for each sample [m]."""
        center = np.zeros(3) if center is None else np.asarray(center, dtype=float)
        return np.linalg.norm(self.position - center, axis=1)

    def eccentricity_history(self, central_body: CentralBody) -> np.ndarray:
        """Osculating eccentricity for each sample."""
        return np.array([
            state_to_elements(r - central_body.position, v, central_body.mass).eccentricity
            for r, v in zip(self.position, self.velocity)
        ])


class TrajectoryRecorder:
    """Accumulates tick results into a TrajectoryData."""

    def __init__(self):
        self._time: List[float] = []
        self._position: List[np.ndarray] = []
        self._velocity: List[np.ndarray] = []
        self._modes: List[str] = []
        self._collisions = 0

    def __len__(self) -> int:
        return len(self._time)

    def record(self, result: TickResult) -> None:
        self._time.append(result.elapsed_time)
        self._position.append(result.position)
        self._velocity.append(result.velocity)
        self._modes.append(result.mode.value)
        if result.collided:
            self._collisions += 1

    def to_trajectory(self) -> TrajectoryData:
        return TrajectoryData(
            time=np.array(self._time),
            position=np.array(self._position).reshape(-1, 3),
            velocity=np.array(self._velocity).reshape(-1, 3),
            modes=list(self._modes),
            collisions=self._collisions
        )


def run_simulation(controller: PropagationController, duration: float,
                   frame_time: float = 1.0 / 60.0) -> TrajectoryData:
    """
    Drive the controller with fixed frame times.

    Args:
        controller: Propagation controller
        duration: Wall-clock duration to simulate [s]
        frame_time: Frame delta time [s]

    Returns:
        Recorded trajectory (one sample per frame)
    """
    if frame_time <= 0:
        raise ValueError("frame_time must be positive")
    if duration < 0:
        raise ValueError("duration must be non-negative")

    recorder = TrajectoryRecorder()
    num_frames = int(round(duration / frame_time))
    for _ in range(num_frames):
        recorder.record(controller.tick(frame_time))

    logger.info("Simulated %d frames (%.1f s of orbit time)",
                num_frames, controller.elapsed_time)
    return recorder.to_trajectory()


class TrajectoryVisualizer:
    """Static plots of simulated orbits."""

    def __init__(self, figsize: Tuple[int, int] = (12, 8)):
        """Initialize visualizer."""
        self.figsize = figsize
        self.fig = None
        self.ax = None

    def plot_trajectory_3d(self, trajectory: TrajectoryData,
                           central_body: Optional[CentralBody] = None,
                           elements: Optional[OrbitalElements] = None,
                           save_path: Optional[str] = None) -> plt.Figure:
        """Plot 3D trajectory with the central body and osculating orbit."""

        self.fig = plt.figure(figsize=self.figsize)
        self.ax = self.fig.add_subplot(111, projection='3d')

        self.ax.plot(trajectory.position[:, 0],
                     trajectory.position[:, 1],
                     trajectory.position[:, 2],
                     'b-', linewidth=2, label='Spacecraft trajectory')

        if len(trajectory.time) > 0:
            self.ax.scatter([trajectory.position[-1, 0]],
                            [trajectory.position[-1, 1]],
                            [trajectory.position[-1, 2]],
                            color='orange', s=60, label='Final position', marker='s')

        if central_body is not None:
            self._plot_body(central_body)

            if elements is not None:
                path = orbit_path_points(elements)
                if len(path) > 0:
                    path = path + central_body.position
                    self.ax.plot(path[:, 0], path[:, 1], path[:, 2],
                                 'c--', linewidth=1, label='Osculating orbit')

        self.ax.set_xlabel('X [m]')
        self.ax.set_ylabel('Y [m]')
        self.ax.set_zlabel('Z [m]')
        self.ax.set_title('Spacecraft Orbit')
        self.ax.legend()
        self._set_equal_aspect_3d()

        if save_path:
            self.fig.savefig(save_path, dpi=150, bbox_inches='tight')
            logger.info("3D trajectory plot saved to %s", save_path)

        return self.fig

    def plot_orbit_history(self, trajectory: TrajectoryData,
                           central_body: CentralBody,
                           save_path: Optional[str] = None) -> plt.Figure:
        """Plot altitude and eccentricity against simulated time."""

        self.fig, axes = plt.subplots(2, 1, figsize=self.figsize, sharex=True)

        altitude = trajectory.radius(central_body.position) - central_body.radius
        axes[0].plot(trajectory.time, altitude / 1e3, 'b-')
        axes[0].set_ylabel('Altitude [km]')
        axes[0].grid(True, alpha=0.3)

        axes[1].plot(trajectory.time, trajectory.eccentricity_history(central_body), 'r-')
        axes[1].set_ylabel('Eccentricity [-]')
        axes[1].set_xlabel('Time [s]')
        axes[1].grid(True, alpha=0.3)

        if save_path:
            self.fig.savefig(save_path, dpi=150, bbox_inches='tight')
            logger.info("Orbit history plot saved to %s", save_path)

        return self.fig

    def _plot_body(self, central_body: CentralBody) -> None:
        u = np.linspace(0, 2 * np.pi, 30)
        v = np.linspace(0, np.pi, 15)
        x = central_body.radius * np.outer(np.cos(u), np.sin(v)) + central_body.position[0]
        y = central_body.radius * np.outer(np.sin(u), np.sin(v)) + central_body.position[1]
        z = central_body.radius * np.outer(np.ones_like(u), np.cos(v)) + central_body.position[2]
        self.ax.plot_wireframe(x, y, z, color='tab:blue', alpha=0.2, linewidth=0.5)

    def _set_equal_aspect_3d(self) -> None:
        """Set equal aspect ratio for 3D plot."""
        limits = np.array([self.ax.get_xlim3d(), self.ax.get_ylim3d(), self.ax.get_zlim3d()])
        center = limits.mean(axis=1)
        half_range = (limits[:, 1] - limits[:, 0]).max() / 2
        self.ax.set_xlim3d(center[0] - half_range, center[0] + half_range)
        self.ax.set_ylim3d(center[1] - half_range, center[1] + half_range)
        self.ax.set_zlim3d(center[2] - half_range, center[2] + half_range)
