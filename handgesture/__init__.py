"""
Hand Gesture Recognition

Turns per-frame hand landmarks and a tracked hand rectangle into a static
gesture name (FIST, OK, FIVE, ...) and scroll, zoom and slide movements.
"""

__version__ = "0.1.0"

from .types import (
    BoundingRect,
    FingerState,
    GestureResult,
    MalformedInputError,
    MovementHistory,
    MovementResult,
    ScrollDirection,
    SlideDirection,
    StaticGesture,
    ZoomDirection,
)
from .config import load_config, Cfg
from .geometry import distance, signed_angle_degrees
from .landmarks import as_landmark_set, finger_states, is_thumb_near_index_tip
from .gestures import (
    GestureProcessor,
    HandSessions,
    MovementTracker,
    classify_static_gesture,
    is_hand_present,
    recognize_static_gesture,
)

__all__ = [
    "BoundingRect",
    "FingerState",
    "GestureResult",
    "MalformedInputError",
    "MovementHistory",
    "MovementResult",
    "ScrollDirection",
    "SlideDirection",
    "StaticGesture",
    "ZoomDirection",
    "load_config",
    "Cfg",
    "distance",
    "signed_angle_degrees",
    "as_landmark_set",
    "finger_states",
    "is_thumb_near_index_tip",
    "GestureProcessor",
    "HandSessions",
    "MovementTracker",
    "classify_static_gesture",
    "is_hand_present",
    "recognize_static_gesture",
]
