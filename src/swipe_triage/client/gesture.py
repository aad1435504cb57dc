"""Drag gesture state machine for a single draft card."""

from enum import Enum
from typing import Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 100


class Direction(str, Enum):
    RIGHT = "right"
    LEFT = "left"


class GestureState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED_RIGHT = "committed_right"
    COMMITTED_LEFT = "committed_left"
    RETURNING = "returning"


class InvalidTransition(RuntimeError):
    """Raised when an event does not apply to the current state."""


class CardGesture:
    """Interprets horizontal drags on a card.

    idle -> dragging -> committed_right | committed_left | returning,
    and returning -> idle once the card is back at center. Committed
    states are terminal for the card.
    """

    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        if threshold <= 0:
            raise ValueError("threshold must be positive")
        self.threshold = threshold
        self.state = GestureState.IDLE
        self.offset = 0.0

    @property
    def committed(self) -> Optional[Direction]:
        if self.state is GestureState.COMMITTED_RIGHT:
            return Direction.RIGHT
        if self.state is GestureState.COMMITTED_LEFT:
            return Direction.LEFT
        return None

    @property
    def indicator(self) -> Optional[Direction]:
        """Which swipe hint the current offset leans toward."""
        if self.offset > 0:
            return Direction.RIGHT
        if self.offset < 0:
            return Direction.LEFT
        return None

    def start_drag(self, disabled: bool = False) -> bool:
        """Begin a drag; refused while the card is disabled."""
        if disabled:
            return False
        if self.state is not GestureState.IDLE:
            raise InvalidTransition(f"cannot start drag from {self.state.value}")
        self.state = GestureState.DRAGGING
        self.offset = 0.0
        return True

    def move(self, offset: float) -> None:
        if self.state is not GestureState.DRAGGING:
            raise InvalidTransition(f"cannot move while {self.state.value}")
        self.offset = offset

    def release(self, offset: Optional[float] = None) -> GestureState:
        """End the drag and decide whether it commits."""
        if self.state is not GestureState.DRAGGING:
            raise InvalidTransition(f"cannot release while {self.state.value}")
        if offset is not None:
            self.offset = offset

        if self.offset > self.threshold:
            self.state = GestureState.COMMITTED_RIGHT
        elif self.offset < -self.threshold:
            self.state = GestureState.COMMITTED_LEFT
        else:
            self.state = GestureState.RETURNING

        logger.debug(f"Drag released at {self.offset:.0f}: {self.state.value}")
        return self.state

    def settle(self) -> None:
        """The card finished springing back to center."""
        if self.state is not GestureState.RETURNING:
            raise InvalidTransition(f"cannot settle while {self.state.value}")
        self.state = GestureState.IDLE
        self.offset = 0.0
