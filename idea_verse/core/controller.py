"""
InteractionController: pointer, wheel and button input -> camera state.
Also forwards idea creation and bookmark toggling to the IdeaMap.
"""

import math
from enum import Enum
from typing import TYPE_CHECKING, Optional

import config
from idea_verse.core.camera import CameraState
from idea_verse.core.layout import id_hash

if TYPE_CHECKING:
    from idea_verse.core.idea_map import IdeaMap
    from idea_verse.core.models import Idea, IdeaDraft


class DragMode(str, Enum):
    IDLE = "idle"
    ROTATE = "rotate"
    PAN = "pan"


class PointerButton(int, Enum):
    PRIMARY = 0
    SECONDARY = 2


class InteractionController:
    """
    State machine over the camera.

    Features:
    - Primary-button drag rotates (pitch/yaw), secondary-button drag pans
    - Wheel zoom clamped to [0.3, 2], zoom buttons clamped to [0.5, 3]
    - Fit to screen restores the default camera
    - Frame counter for the idle floating animation (paused while dragging)
    """

    def __init__(
        self,
        camera: Optional[CameraState] = None,
        idea_map: Optional["IdeaMap"] = None,
        rotate_sensitivity: float = config.ROTATE_SENSITIVITY,
    ):
        """
        Initialize the controller.

        Args:
            camera: Camera state to drive (a default one is created if omitted)
            idea_map: Orchestrator that idea edits are forwarded to
            rotate_sensitivity: Degrees of rotation per pixel of drag
        """
        self.camera = camera or CameraState()
        self.idea_map = idea_map
        self.rotate_sensitivity = rotate_sensitivity

        self.mode = DragMode.IDLE
        self.frame = 0
        self._last_pointer: Optional[tuple[float, float]] = None

    @property
    def is_dragging(self) -> bool:
        return self.mode is not DragMode.IDLE

    # -------------------------------------------------------------------------
    # Pointer input
    # -------------------------------------------------------------------------

    def pointer_down(self, button: int, x: float, y: float) -> None:
        """Start a rotate (primary) or pan (secondary) drag."""
        if button == PointerButton.PRIMARY:
            self.mode = DragMode.ROTATE
        elif button == PointerButton.SECONDARY:
            self.mode = DragMode.PAN
        else:
            return
        self._last_pointer = (x, y)

    def pointer_move(self, x: float, y: float) -> None:
        """Apply the drag delta since the last pointer position."""
        if not self.is_dragging or self._last_pointer is None:
            return
        last_x, last_y = self._last_pointer
        self._last_pointer = (x, y)
        self.drag_by(x - last_x, y - last_y)

    def pointer_up(self) -> None:
        self.mode = DragMode.IDLE
        self._last_pointer = None

    def drag_by(self, dx: float, dy: float, mode: Optional[DragMode] = None) -> None:
        """
        Apply a drag delta in pixels.

        Args:
            dx: Horizontal delta
            dy: Vertical delta
            mode: Drag mode to apply (defaults to the current mode)
        """
        mode = mode or self.mode
        if mode is DragMode.ROTATE:
            self.camera.yaw += dx * self.rotate_sensitivity
            self.camera.pitch += dy * self.rotate_sensitivity
        elif mode is DragMode.PAN:
            self.camera.pan_x += dx
            self.camera.pan_y += dy

    # -------------------------------------------------------------------------
    # Zoom
    # -------------------------------------------------------------------------

    def wheel(self, delta_y: float) -> float:
        """Continuous zoom; positive delta zooms out. Returns the new scale."""
        low, high = config.WHEEL_ZOOM_RANGE
        scale = self.camera.scale - delta_y * config.WHEEL_ZOOM_SENSITIVITY
        self.camera.scale = min(high, max(low, scale))
        return self.camera.scale

    def zoom_in(self) -> float:
        return self._zoom_step(config.BUTTON_ZOOM_STEP)

    def zoom_out(self) -> float:
        return self._zoom_step(-config.BUTTON_ZOOM_STEP)

    def _zoom_step(self, step: float) -> float:
        low, high = config.BUTTON_ZOOM_RANGE
        self.camera.scale = min(high, max(low, round(self.camera.scale + step, 6)))
        return self.camera.scale

    def fit_to_screen(self) -> None:
        """Reset pan, zoom and rotation to the default view."""
        self.camera.reset()

    # -------------------------------------------------------------------------
    # Idle animation
    # -------------------------------------------------------------------------

    def tick(self) -> int:
        """Advance the animation frame unless a drag is in progress."""
        if not self.is_dragging:
            self.frame += 1
        return self.frame

    def float_offset(self, node_id: str) -> float:
        """Vertical screen offset of a node for the current frame."""
        phase = id_hash(node_id) * config.FLOAT_PHASE_STEP
        return config.FLOAT_AMPLITUDE * math.sin(self.frame * config.FLOAT_SPEED + phase)

    # -------------------------------------------------------------------------
    # Idea edits (forwarded to the IdeaMap)
    # -------------------------------------------------------------------------

    def create_idea(self, draft: "IdeaDraft") -> "Idea":
        if self.idea_map is None:
            raise RuntimeError("No IdeaMap attached to the controller.")
        return self.idea_map.create_idea(draft)

    def toggle_bookmark(self, idea_id: str) -> bool:
        if self.idea_map is None:
            raise RuntimeError("No IdeaMap attached to the controller.")
        return self.idea_map.toggle_bookmark(idea_id)
