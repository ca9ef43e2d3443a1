"""
Hand landmark validation and per-finger state estimation.
"""
import logging
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from .geometry import distance
from .types import Finger, FingerState, FingerStates, LandmarkSet, MalformedInputError

logger = logging.getLogger(__name__)

NUM_LANDMARKS = 21

WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_MCP = 9

# Minimum step between consecutive joints, in normalized units
FINGER_THRESHOLD = 0.01

AXIS_X = 0
AXIS_Y = 1


@dataclass(frozen=True)
class FingerSpec:
    """Where to look for one finger's flexion."""
    finger: Finger
    axis: int
    pivot: int
    middle: int
    tip: int
    open_sign: int = -1  # coordinate change along pivot->tip when extended


# Thumb flexes across the palm, so it is read on x; the others on y
FINGER_SPECS: Tuple[FingerSpec, ...] = (
    FingerSpec(Finger.THUMB, AXIS_X, 2, 3, 4),
    FingerSpec(Finger.INDEX, AXIS_Y, 6, 7, 8),
    FingerSpec(Finger.MIDDLE, AXIS_Y, 10, 11, 12),
    FingerSpec(Finger.RING, AXIS_Y, 14, 15, 16),
    FingerSpec(Finger.PINKY, AXIS_Y, 18, 19, 20),
)


def as_landmark_set(points: Any) -> LandmarkSet:
    """
    Coerce landmark input into a (21, 2) float array.

    Accepts a sequence of (x, y[, z]) pairs, an array of shape (N, 2+), a
    sequence of objects exposing ``.x`` and ``.y``, or a list object with a
    ``.landmark`` field holding such objects.

    Args:
        points: Landmarks for a single hand

    Returns:
        Array of the first 21 landmarks' (x, y) coordinates

    Raises:
        MalformedInputError: if fewer than 21 usable landmarks are given
    """
    if points is None:
        raise MalformedInputError("No landmarks supplied")

    if hasattr(points, "landmark"):
        points = points.landmark

    if isinstance(points, np.ndarray):
        rows = points
    else:
        try:
            rows = [(p.x, p.y) if hasattr(p, "x") else p for p in points]
        except TypeError as e:
            raise MalformedInputError(f"Landmarks are not iterable: {e}") from e

    try:
        landmarks = np.asarray(rows, dtype=float)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Landmarks are not numeric pairs: {e}") from e

    count = landmarks.shape[0] if landmarks.ndim else 0
    if count < NUM_LANDMARKS:
        raise MalformedInputError(
            f"Expected {NUM_LANDMARKS} landmarks, got {count}"
        )

    if landmarks.ndim != 2 or landmarks.shape[1] < 2:
        raise MalformedInputError(
            f"Landmarks must have shape (N, 2), got {landmarks.shape}"
        )

    return landmarks[:NUM_LANDMARKS, :2]


def finger_state(landmarks: LandmarkSet, spec: FingerSpec) -> FingerState:
    """
    Classify one finger from its pivot, middle and tip joints.

    Args:
        landmarks: Validated landmark set
        spec: Which joints and axis to compare

    Returns:
        OPEN if the chain moves strictly in the open direction, CLOSED if it
        moves strictly the other way, UNKNOWN otherwise
    """
    sign = -spec.open_sign
    pivot = sign * landmarks[spec.pivot][spec.axis]
    middle = sign * landmarks[spec.middle][spec.axis]
    tip = sign * landmarks[spec.tip][spec.axis]

    if middle + FINGER_THRESHOLD < pivot and tip + FINGER_THRESHOLD < middle:
        return FingerState.OPEN
    if pivot + FINGER_THRESHOLD < middle and middle + FINGER_THRESHOLD < tip:
        return FingerState.CLOSED
    return FingerState.UNKNOWN


def finger_states(landmarks: LandmarkSet) -> FingerStates:
    """
    Classify all five fingers.

    Args:
        landmarks: Validated landmark set

    Returns:
        States in thumb, index, middle, ring, pinky order
    """
    states = tuple(finger_state(landmarks, spec) for spec in FINGER_SPECS)
    logger.debug("Finger states: %s", [s.value for s in states])
    return states


def is_thumb_near_index_tip(landmarks: LandmarkSet, max_distance: float = 0.1) -> bool:
    """Check whether the thumb tip touches the index finger tip."""
    return distance(landmarks[THUMB_TIP], landmarks[INDEX_TIP]) < max_distance
