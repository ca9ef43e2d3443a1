"""
Type definitions for hand gesture recognition system.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np


Landmark = Tuple[float, float]
# (21, 2) float array of normalized (x, y) coordinates, wrist first
LandmarkSet = np.ndarray

NONE_LABEL = "___"


class MalformedInputError(ValueError):
    """Raised when a frame does not carry a usable landmark set."""


class _Symbol(Enum):
    """Base for the fixed output vocabularies."""

    @property
    def label(self) -> str:
        """Display text, with the NONE sentinel rendered as a placeholder."""
        if self.name == "NONE":
            return NONE_LABEL
        return self.value

    def __str__(self) -> str:
        return self.label


class FingerState(Enum):
    UNKNOWN = "unknown"
    OPEN = "open"
    CLOSED = "closed"


class Finger(Enum):
    THUMB = "thumb"
    INDEX = "index"
    MIDDLE = "middle"
    RING = "ring"
    PINKY = "pinky"


class StaticGesture(_Symbol):
    """Static hand poses, in rule-table order."""
    FIVE = "FIVE"
    FOUR = "FOUR"
    THREE = "THREE"
    TWO = "TWO"
    ONE = "ONE"
    YEAH = "YEAH"
    ROCK = "ROCK"
    SPIDERMAN = "SPIDERMAN"
    FIST = "FIST"
    OK = "OK"
    NONE = "none"


class ScrollDirection(_Symbol):
    RIGHT = "right"
    UP = "up"
    LEFT = "left"
    DOWN = "down"
    NONE = "none"


class ZoomDirection(_Symbol):
    ZOOM_IN = "zoom in"
    ZOOM_OUT = "zoom out"
    NONE = "none"


class SlideDirection(_Symbol):
    SLIDE_LEFT = "slide left"
    SLIDE_RIGHT = "slide right"
    NONE = "none"


FingerStates = Tuple[FingerState, FingerState, FingerState, FingerState, FingerState]


@dataclass(frozen=True)
class BoundingRect:
    """Tracked hand region, normalized to the camera frame."""
    x_center: float
    y_center: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x_center, self.y_center)


@dataclass
class MovementHistory:
    """
    Cross-frame state for one tracked hand.

    The ``previous_*`` fields are either all unset (fresh session) or all
    set; ``frame_count`` counts every processed frame.
    """
    previous_center: Optional[Tuple[float, float]] = None
    previous_rect_height: Optional[float] = None
    previous_wrist_angle: Optional[float] = None
    frame_count: int = 0

    @property
    def is_established(self) -> bool:
        return (self.previous_center is not None
                and self.previous_rect_height is not None
                and self.previous_wrist_angle is not None)

    def reset(self) -> None:
        """Return to the no-history state."""
        self.previous_center = None
        self.previous_rect_height = None
        self.previous_wrist_angle = None
        self.frame_count = 0


@dataclass(frozen=True)
class MovementResult:
    """Motion classifications for a single frame."""
    scroll: ScrollDirection = ScrollDirection.NONE
    zoom: ZoomDirection = ZoomDirection.NONE
    slide: SlideDirection = SlideDirection.NONE


@dataclass(frozen=True)
class GestureResult:
    """Everything recognized for one hand in one frame."""
    static_gesture: StaticGesture = StaticGesture.NONE
    scroll: ScrollDirection = ScrollDirection.NONE
    zoom: ZoomDirection = ZoomDirection.NONE
    slide: SlideDirection = SlideDirection.NONE

    def as_dict(self) -> Dict[str, str]:
        return {
            "gesture": self.static_gesture.label,
            "scroll": self.scroll.label,
            "zoom": self.zoom.label,
            "slide": self.slide.label,
        }
