"""
Camera state and perspective projection.
Projects 3D world coordinates to 2D screen coordinates plus a depth value
used for back-to-front ordering.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

import config


@dataclass
class CameraState:
    """Rotation in degrees, pan offset in pixels, zoom scale."""
    pitch: float = config.DEFAULT_PITCH
    yaw: float = config.DEFAULT_YAW
    roll: float = config.DEFAULT_ROLL
    pan_x: float = 0.0
    pan_y: float = 0.0
    scale: float = 1.0

    def reset(self) -> None:
        """Restore the default "fit to screen" view."""
        self.pitch = config.DEFAULT_PITCH
        self.yaw = config.DEFAULT_YAW
        self.roll = config.DEFAULT_ROLL
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.scale = 1.0

    @property
    def rotation(self) -> tuple[float, float, float]:
        return (self.pitch, self.yaw, self.roll)

    @property
    def pan(self) -> tuple[float, float]:
        return (self.pan_x, self.pan_y)


class ProjectedPoint(NamedTuple):
    screen_x: float
    screen_y: float
    depth: float
    scale: float


def rotation_matrix(pitch: float, yaw: float, roll: float = 0.0) -> np.ndarray:
    """
    View rotation for the given camera angles (degrees).

    Rotates about X by pitch, then about Y by yaw, then about Z by roll.
    The angles turn the world, so the camera itself orbits the opposite way:
    positive yaw swings points on the +z axis toward screen right.
    Points are multiplied as column vectors: `rotated = R @ point`.
    """
    p, w, r = (math.radians(a) for a in (pitch, yaw, roll))

    rot_x = np.array([
        [1.0, 0.0, 0.0],
        [0.0, math.cos(p), -math.sin(p)],
        [0.0, math.sin(p), math.cos(p)],
    ])
    rot_y = np.array([
        [math.cos(w), 0.0, math.sin(w)],
        [0.0, 1.0, 0.0],
        [-math.sin(w), 0.0, math.cos(w)],
    ])
    rot_z = np.array([
        [math.cos(r), -math.sin(r), 0.0],
        [math.sin(r), math.cos(r), 0.0],
        [0.0, 0.0, 1.0],
    ])
    return rot_z @ rot_y @ rot_x


class CameraProjector:
    """
    Perspective projection of world points onto a viewport.

    Features:
    - Pitch/yaw/roll view rotation
    - Perspective divide with a fixed focal length, clamped to a scale range
    - Pan and zoom in screen space
    - Vectorized projection of many points at once
    """

    def __init__(
        self,
        width: float = config.PLOT_WIDTH,
        height: float = config.PLOT_HEIGHT,
        focal_length: float = config.FOCAL_LENGTH,
        min_factor: float = config.PERSPECTIVE_MIN,
        max_factor: float = config.PERSPECTIVE_MAX,
    ):
        """
        Initialize the projector.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
            focal_length: Focal distance F (default: 2000)
            min_factor: Lower clamp of F / (z + F) (default: 0.2)
            max_factor: Upper clamp of F / (z + F) (default: 3)
        """
        self.width = width
        self.height = height
        self.focal_length = focal_length
        self.min_factor = min_factor
        self.max_factor = max_factor

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)

    def project_many(self, points: np.ndarray, camera: CameraState) -> np.ndarray:
        """
        Project points to the screen.

        Args:
            points: Array of shape (n, 3) with world coordinates
            camera: Current camera state

        Returns:
            Array of shape (n, 4): screen_x, screen_y, depth, perspective scale
        """
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(points) == 0:
            return np.zeros((0, 4))

        rotated = points @ rotation_matrix(camera.pitch, camera.yaw, camera.roll).T
        depth = rotated[:, 2] + self.focal_length

        # A point exactly on the camera plane takes the maximum factor;
        # points behind it go negative and clamp to the minimum.
        safe_depth = np.where(depth == 0, 1.0, depth)
        factor = np.where(depth == 0, self.max_factor, self.focal_length / safe_depth)
        factor = np.clip(factor, self.min_factor, self.max_factor)

        cx, cy = self.center
        screen_x = cx + rotated[:, 0] * factor * camera.scale + camera.pan_x
        screen_y = cy + rotated[:, 1] * factor * camera.scale + camera.pan_y

        return np.column_stack([screen_x, screen_y, depth, factor])

    def project(self, point, camera: CameraState) -> ProjectedPoint:
        """Project a single (x, y, z) point."""
        row = self.project_many(np.asarray(point, dtype=np.float64), camera)[0]
        return ProjectedPoint(*(float(v) for v in row))
