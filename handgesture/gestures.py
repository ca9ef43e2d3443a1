"""
Gesture recognition classes that turn per-frame hand geometry into symbols.
"""
import logging
from typing import Any, Dict, Hashable, Optional, Tuple

from .config import Cfg, load_config
from .geometry import distance, offset, signed_angle_degrees
from .landmarks import (
    MIDDLE_MCP,
    WRIST,
    as_landmark_set,
    finger_states,
    is_thumb_near_index_tip,
)
from .types import (
    BoundingRect,
    FingerState,
    FingerStates,
    GestureResult,
    LandmarkSet,
    MalformedInputError,
    MovementHistory,
    MovementResult,
    ScrollDirection,
    SlideDirection,
    StaticGesture,
    ZoomDirection,
)

logger = logging.getLogger(__name__)

# Length of the synthetic horizontal ray used as the 0 degree reference
_HORIZONTAL_RAY = 0.1

_O = FingerState.OPEN
_C = FingerState.CLOSED

# (gesture, thumb/index/middle/ring/pinky pattern, needs thumb touching index)
# None in a pattern matches any state. First match wins.
GESTURE_RULES: Tuple[Tuple[StaticGesture, Tuple[Optional[FingerState], ...], bool], ...] = (
    (StaticGesture.FIVE, (_O, _O, _O, _O, _O), False),
    (StaticGesture.FOUR, (_C, _O, _O, _O, _O), False),
    (StaticGesture.THREE, (_O, _O, _O, _C, _C), False),
    (StaticGesture.TWO, (_O, _O, _C, _C, _C), False),
    (StaticGesture.ONE, (_C, _O, _C, _C, _C), False),
    (StaticGesture.YEAH, (_C, _O, _O, _C, _C), False),
    (StaticGesture.ROCK, (_C, _O, _C, _C, _O), False),
    (StaticGesture.SPIDERMAN, (_O, _O, _C, _C, _O), False),
    (StaticGesture.FIST, (_C, _C, _C, _C, _C), False),
    # A thumb pressed onto the index tip rarely reads as CLOSED, so the
    # OK sign uses the touch test instead of the thumb state.
    (StaticGesture.OK, (None, _C, _O, _O, _O), True),
)


def is_hand_present(rect: BoundingRect, min_size: float = 0.01) -> bool:
    """Check whether the tracked rectangle is large enough to hold a hand."""
    return not (rect.width < min_size or rect.height < min_size)


def classify_static_gesture(states: FingerStates, thumb_near_index_tip: bool = False) -> StaticGesture:
    """
    Map five finger states to a static gesture.

    Args:
        states: Finger states in thumb, index, middle, ring, pinky order
        thumb_near_index_tip: Whether the thumb tip touches the index tip

    Returns:
        The first matching gesture from GESTURE_RULES, or StaticGesture.NONE
    """
    for gesture, pattern, needs_touch in GESTURE_RULES:
        if needs_touch and not thumb_near_index_tip:
            continue
        if all(want is None or want == got for want, got in zip(pattern, states)):
            return gesture
    return StaticGesture.NONE


def recognize_static_gesture(rect: BoundingRect, landmarks: Any, cfg: Cfg) -> StaticGesture:
    """
    Recognize the static gesture for one frame.

    Landmarks are not read when the rectangle fails the presence gate.

    Raises:
        MalformedInputError: if the hand is present but landmarks are unusable
    """
    if not is_hand_present(rect, cfg.presence.min_rect_size):
        return StaticGesture.NONE

    landmarks = as_landmark_set(landmarks)
    return _static_gesture(landmarks, cfg)


def _static_gesture(landmarks: LandmarkSet, cfg: Cfg) -> StaticGesture:
    states = finger_states(landmarks)
    touching = is_thumb_near_index_tip(landmarks, cfg.static.thumb_index_touch_distance)
    return classify_static_gesture(states, touching)


def scroll_direction(angle: float) -> ScrollDirection:
    """Bucket a motion angle (degrees, counter-clockwise from +x) into a quadrant."""
    if -45 <= angle < 45:
        return ScrollDirection.RIGHT
    if 45 <= angle < 135:
        return ScrollDirection.UP
    if angle >= 135 or angle < -135:
        return ScrollDirection.LEFT
    if -135 <= angle < -45:
        return ScrollDirection.DOWN
    return ScrollDirection.NONE


class MovementTracker:
    """
    Detects scroll, zoom and slide movements of a single tracked hand.

    Features:
    - Scroll from rectangle center displacement, scaled by hand size
    - Zoom from rectangle height change
    - Slide from wrist rotation, sampled every ``frame_stride`` frames and
      only starting from an upright hand

    History is written once per frame, after all three checks ran.
    """

    def __init__(self, cfg: Cfg, history: Optional[MovementHistory] = None):
        """Initialize movement tracker, optionally resuming a session."""
        self.cfg = cfg
        self.history = history if history is not None else MovementHistory()

    def update(self, rect: BoundingRect, landmarks: Any, require_landmarks: bool = True) -> MovementResult:
        """
        Classify the movement since the previous frame and record this one.

        Args:
            rect: Current tracked hand rectangle
            landmarks: Current hand landmarks (read on sampled frames only)
            require_landmarks: If False, unusable landmarks skip the wrist
                sample instead of failing the frame

        Returns:
            Scroll, zoom and slide classifications for this frame

        Raises:
            MalformedInputError: if landmarks are needed and unusable. History
                is left untouched in that case.
        """
        center = rect.center
        height = rect.height

        scroll = self._scroll(center, height)
        zoom = self._zoom(height)
        slide, wrist_angle = self._slide(landmarks, require_landmarks)

        history = self.history
        history.previous_center = center
        history.previous_rect_height = height
        if wrist_angle is not None:
            history.previous_wrist_angle = wrist_angle
        history.frame_count += 1

        return MovementResult(scroll=scroll, zoom=zoom, slide=slide)

    def _scroll(self, center: Tuple[float, float], height: float) -> ScrollDirection:
        previous = self.history.previous_center
        if previous is None:
            return ScrollDirection.NONE

        moved = distance(center, previous)
        threshold = self.cfg.movement.scroll.distance_factor * height
        logger.debug("Center moved %.4f (threshold %.4f)", moved, threshold)
        if not moved > threshold:
            return ScrollDirection.NONE

        angle = signed_angle_degrees(previous, center, offset(previous, _HORIZONTAL_RAY))
        return scroll_direction(angle)

    def _zoom(self, height: float) -> ZoomDirection:
        previous = self.history.previous_rect_height
        if previous is None:
            return ZoomDirection.NONE

        threshold = self.cfg.movement.zoom.height_factor * height
        if height < previous - threshold:
            return ZoomDirection.ZOOM_OUT
        if height > previous + threshold:
            return ZoomDirection.ZOOM_IN
        return ZoomDirection.NONE

    def _slide(self, landmarks: Any, require_landmarks: bool = True) -> Tuple[SlideDirection, Optional[float]]:
        slide_cfg = self.cfg.movement.slide
        if self.history.frame_count % slide_cfg.frame_stride != 0:
            return SlideDirection.NONE, None

        try:
            landmarks = as_landmark_set(landmarks)
        except MalformedInputError:
            if require_landmarks:
                raise
            return SlideDirection.NONE, None
        wrist = landmarks[WRIST]
        angle = signed_angle_degrees(wrist, landmarks[MIDDLE_MCP], offset(wrist, _HORIZONTAL_RAY))

        previous = self.history.previous_wrist_angle
        if previous is None:
            return SlideDirection.NONE, angle
        if not slide_cfg.vertical_min_deg <= previous <= slide_cfg.vertical_max_deg:
            return SlideDirection.NONE, angle

        slide = SlideDirection.NONE
        if angle > previous + slide_cfg.angle_threshold_deg:
            slide = SlideDirection.SLIDE_LEFT
        elif angle < previous - slide_cfg.angle_threshold_deg:
            slide = SlideDirection.SLIDE_RIGHT

        if slide is not SlideDirection.NONE:
            logger.info("%s (wrist angle %s -> %s)", slide.label, previous, angle)
        return slide, angle

    def reset(self) -> None:
        """Forget all history, as for a newly tracked hand."""
        self.history.reset()

    new_session = reset


class GestureProcessor:
    """
    Main gesture processor for one tracked hand.

    Applies the presence gate, then recognizes the static gesture and the
    movement gestures from the same frame.
    """

    def __init__(self, cfg: Optional[Cfg] = None, history: Optional[MovementHistory] = None):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg if cfg is not None else load_config()
        self.movement = MovementTracker(self.cfg, history)

    @property
    def history(self) -> MovementHistory:
        return self.movement.history

    def process_frame(self, rect: BoundingRect, landmarks: Any) -> GestureResult:
        """
        Process a frame and return everything recognized in it.

        Movement is tracked on every frame. When no hand is present the static
        gesture is NONE and landmarks are only used if they happen to be valid.

        Args:
            rect: Tracked hand rectangle for this frame
            landmarks: 21 hand landmarks; optional when no hand is present

        Returns:
            Static gesture plus scroll, zoom and slide classifications

        Raises:
            MalformedInputError: if a hand is present but landmarks are unusable
        """
        if not is_hand_present(rect, self.cfg.presence.min_rect_size):
            logger.debug("No hand in rect %s", rect)
            movement = self.movement.update(rect, landmarks, require_landmarks=False)
            return GestureResult(
                scroll=movement.scroll,
                zoom=movement.zoom,
                slide=movement.slide
            )

        landmarks = as_landmark_set(landmarks)
        static_gesture = _static_gesture(landmarks, self.cfg)
        movement = self.movement.update(rect, landmarks)

        return GestureResult(
            static_gesture=static_gesture,
            scroll=movement.scroll,
            zoom=movement.zoom,
            slide=movement.slide
        )

    def reset(self) -> None:
        """Start a new session for this hand."""
        self.movement.reset()

    new_session = reset


class HandSessions:
    """
    Keeps one isolated GestureProcessor per tracked hand.
    """

    def __init__(self, cfg: Optional[Cfg] = None):
        """Initialize with configuration shared (read-only) by all sessions."""
        self.cfg = cfg if cfg is not None else load_config()
        self._sessions: Dict[Hashable, GestureProcessor] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, hand_id: Hashable) -> bool:
        return hand_id in self._sessions

    def session(self, hand_id: Hashable) -> GestureProcessor:
        """Return the processor for ``hand_id``, starting a session if needed."""
        processor = self._sessions.get(hand_id)
        if processor is None:
            processor = GestureProcessor(self.cfg)
            self._sessions[hand_id] = processor
            logger.info("Started session for hand %r", hand_id)
        return processor

    def process_frame(self, hand_id: Hashable, rect: BoundingRect, landmarks: Any) -> GestureResult:
        """Process one frame for the given hand."""
        return self.session(hand_id).process_frame(rect, landmarks)

    def drop(self, hand_id: Hashable) -> None:
        """End the session of a hand that is no longer tracked."""
        if self._sessions.pop(hand_id, None) is not None:
            logger.info("Ended session for hand %r", hand_id)

    def reset(self) -> None:
        """End every session."""
        self._sessions.clear()
        logger.info("Reset all hand sessions")
