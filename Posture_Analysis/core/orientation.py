"""
Orientation Gate Module
Decides from shoulder and ear visibility whether the subject is side-on to
the camera, which every posture check assumes.

A side profile shows one shoulder clearly and hides the other; both
shoulders visible means the subject faces toward or away from the camera,
and the ears tell those apart.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .clinical_thresholds import CLINICAL_THRESHOLDS
from .keypoints import JointId, KeypointFrame

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Enums & Data Classes
# -----------------------------------------------------------------------------

class Orientation(Enum):
    """Subject orientation relative to the camera."""
    SIDEWAYS_LEFT = "sideways_left"
    SIDEWAYS_RIGHT = "sideways_right"
    FRONT = "front"
    BACK = "back"
    UNKNOWN = "unknown"

    @property
    def is_sideways(self) -> bool:
        return self in (Orientation.SIDEWAYS_LEFT, Orientation.SIDEWAYS_RIGHT)

    @property
    def description(self) -> str:
        return {
            Orientation.SIDEWAYS_LEFT: "Left Profile",
            Orientation.SIDEWAYS_RIGHT: "Right Profile",
            Orientation.FRONT: "Facing Front",
            Orientation.BACK: "Facing Back",
            Orientation.UNKNOWN: "Unknown",
        }[self]


@dataclass(frozen=True)
class OrientationVerdict:
    """Orientation of one frame plus the strength of its side-view signal."""
    orientation: Orientation
    side_confidence: float

    @property
    def is_sideways(self) -> bool:
        return self.orientation.is_sideways

    def to_dict(self) -> Dict[str, Any]:
        return {
            'orientation': self.orientation.value,
            'description': self.orientation.description,
            'side_confidence': self.side_confidence,
            'is_sideways': self.is_sideways
        }


# -----------------------------------------------------------------------------
# Gate
# -----------------------------------------------------------------------------

class OrientationGate:
    """Shoulder/ear visibility classifier. Stateless apart from its thresholds."""

    VISIBILITY_THRESHOLD = CLINICAL_THRESHOLDS['visibility'].VISIBLE
    OCCLUSION_THRESHOLD = CLINICAL_THRESHOLDS['visibility'].OCCLUDED

    def __init__(self, visibility_threshold: Optional[float] = None,
                 occlusion_threshold: Optional[float] = None):
        self.visibility_threshold = (self.VISIBILITY_THRESHOLD if visibility_threshold is None
                                     else visibility_threshold)
        self.occlusion_threshold = (self.OCCLUSION_THRESHOLD if occlusion_threshold is None
                                    else occlusion_threshold)

    def _visible(self, confidence: float) -> bool:
        return confidence > self.visibility_threshold

    def _occluded(self, confidence: float) -> bool:
        return confidence < self.occlusion_threshold

    def detect_orientation(self, frame: KeypointFrame) -> Orientation:
        """Classify the frame as left/right profile, front, back or unknown."""
        left_shoulder = frame.get(JointId.LEFT_SHOULDER)
        right_shoulder = frame.get(JointId.RIGHT_SHOULDER)
        if left_shoulder is None or right_shoulder is None:
            return Orientation.UNKNOWN

        left_visible = self._visible(left_shoulder.confidence)
        right_visible = self._visible(right_shoulder.confidence)

        if left_visible and self._occluded(right_shoulder.confidence):
            return Orientation.SIDEWAYS_LEFT
        elif right_visible and self._occluded(left_shoulder.confidence):
            return Orientation.SIDEWAYS_RIGHT
        elif left_visible and right_visible:
            left_ear = frame.get(JointId.LEFT_EAR)
            right_ear = frame.get(JointId.RIGHT_EAR)
            if (left_ear is not None and right_ear is not None
                    and self._visible(left_ear.confidence) and self._visible(right_ear.confidence)):
                return Orientation.FRONT
            return Orientation.BACK
        return Orientation.UNKNOWN

    def side_confidence(self, frame: KeypointFrame) -> float:
        """Shoulder confidence gap, or 0 unless one is visible and the other hidden."""
        left_shoulder = frame.get(JointId.LEFT_SHOULDER)
        right_shoulder = frame.get(JointId.RIGHT_SHOULDER)
        if left_shoulder is None or right_shoulder is None:
            return 0.0

        left, right = left_shoulder.confidence, right_shoulder.confidence
        if self._visible(max(left, right)) and self._occluded(min(left, right)):
            return abs(left - right)
        return 0.0

    def is_person_sideways(self, frame: KeypointFrame) -> bool:
        return self.detect_orientation(frame).is_sideways

    def analyze(self, frame: KeypointFrame) -> OrientationVerdict:
        return OrientationVerdict(
            orientation=self.detect_orientation(frame),
            side_confidence=self.side_confidence(frame)
        )

    def log_debug(self, frame: KeypointFrame) -> None:
        """Log the verdict with the shoulder and ear confidences behind it."""
        if not logger.isEnabledFor(logging.DEBUG):
            return
        verdict = self.analyze(frame)
        logger.debug("Orientation: %s (sideways=%s, confidence=%.2f)",
                     verdict.orientation.description, verdict.is_sideways,
                     verdict.side_confidence)
        for joint in (JointId.LEFT_SHOULDER, JointId.RIGHT_SHOULDER,
                      JointId.LEFT_EAR, JointId.RIGHT_EAR):
            kp = frame.get(joint)
            if kp is not None:
                logger.debug("  %s: %.2f", joint.value, kp.confidence)
