"""
Posture Classifier Module
Side-view posture checks from a single keypoint frame.

Each check computes one angle from its required joints, grades it against
its clinical threshold table and attaches a recommendation:

- Forward head: craniovertebral angle (ear midpoint over shoulder midpoint)
- Rounded shoulders: forward shoulder angle (shoulder midpoint over hip midpoint)
- Back slouch: thoracic kyphosis (neck, shoulder midpoint, hip midpoint)

Frames missing a required joint, or carrying one at or below the minimum
confidence, are rejected with InsufficientDataError rather than estimated.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..utils.geometry import (
    craniovertebral_angle, forward_shoulder_angle, mean_confidence, midpoint,
    thoracic_kyphosis_angle,
)
from .clinical_thresholds import CLINICAL_THRESHOLDS, Severity, get_recommendation
from .keypoints import JointId, Keypoint, KeypointFrame

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Enums & Data Classes
# -----------------------------------------------------------------------------

class PostureCheckKind(Enum):
    """Posture checks supported by the classifier."""
    FORWARD_HEAD = "forward_head"
    ROUNDED_SHOULDERS = "rounded_shoulders"
    BACK_SLOUCH = "back_slouch"

    @property
    def label(self) -> str:
        return {
            PostureCheckKind.FORWARD_HEAD: "Forward Head Posture",
            PostureCheckKind.ROUNDED_SHOULDERS: "Rounded Shoulders",
            PostureCheckKind.BACK_SLOUCH: "Back Slouch",
        }[self]


class InsufficientDataError(ValueError):
    """A required joint is missing or not confident enough for the check."""

    def __init__(self, kind: PostureCheckKind, joints: Tuple[JointId, ...], reason: str = ""):
        self.kind = kind
        self.joints = joints
        names = ", ".join(j.value for j in joints) or "none"
        message = f"Insufficient data for {kind.value}: {names}"
        super().__init__(f"{message} ({reason})" if reason else message)


@dataclass(frozen=True)
class AnalysisResult:
    """Posture verdict for one check on one frame."""
    kind: PostureCheckKind
    angle_degrees: float
    is_normal: bool
    severity: Severity
    confidence: float
    recommendation: str
    keypoints: Mapping[JointId, Keypoint] = field(default_factory=dict, compare=False)

    @property
    def needs_correction(self) -> bool:
        return not self.is_normal

    @property
    def severity_score(self) -> int:
        """Get severity score (0-2)."""
        return {Severity.NORMAL: 0, Severity.MILD: 1,
                Severity.MODERATE_TO_SEVERE: 2}[self.severity]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'label': self.kind.label,
            'angle_degrees': self.angle_degrees,
            'is_normal': self.is_normal,
            'severity': self.severity.value,
            'confidence': self.confidence,
            'recommendation': self.recommendation,
            'needs_correction': self.needs_correction,
            'severity_score': self.severity_score
        }


@dataclass(frozen=True)
class _CheckDefinition:
    required: Tuple[JointId, ...]
    # Joints averaged into the result confidence; neck and root are presence-only.
    confidence_joints: Tuple[JointId, ...]
    threshold_key: str
    angle: Callable[[Mapping[JointId, Keypoint]], float]


def _mid(points: Mapping[JointId, Keypoint], a: JointId, b: JointId) -> Tuple[float, float]:
    return midpoint(points[a].location, points[b].location)


def _forward_head_angle(points: Mapping[JointId, Keypoint]) -> float:
    return craniovertebral_angle(
        _mid(points, JointId.LEFT_EAR, JointId.RIGHT_EAR),
        _mid(points, JointId.LEFT_SHOULDER, JointId.RIGHT_SHOULDER)
    )


def _rounded_shoulders_angle(points: Mapping[JointId, Keypoint]) -> float:
    return forward_shoulder_angle(
        _mid(points, JointId.LEFT_SHOULDER, JointId.RIGHT_SHOULDER),
        _mid(points, JointId.LEFT_HIP, JointId.RIGHT_HIP)
    )


def _back_slouch_angle(points: Mapping[JointId, Keypoint]) -> float:
    return thoracic_kyphosis_angle(
        points[JointId.NECK].location,
        _mid(points, JointId.LEFT_SHOULDER, JointId.RIGHT_SHOULDER),
        _mid(points, JointId.LEFT_HIP, JointId.RIGHT_HIP)
    )


_SHOULDERS = (JointId.LEFT_SHOULDER, JointId.RIGHT_SHOULDER)
_HIPS = (JointId.LEFT_HIP, JointId.RIGHT_HIP)
_EARS = (JointId.LEFT_EAR, JointId.RIGHT_EAR)

CHECKS: Dict[PostureCheckKind, _CheckDefinition] = {
    PostureCheckKind.FORWARD_HEAD: _CheckDefinition(
        required=_EARS + _SHOULDERS + (JointId.NECK,),
        confidence_joints=_EARS + _SHOULDERS,
        threshold_key='cva',
        angle=_forward_head_angle,
    ),
    PostureCheckKind.ROUNDED_SHOULDERS: _CheckDefinition(
        required=_SHOULDERS + _HIPS + (JointId.NECK,),
        confidence_joints=_SHOULDERS + _HIPS,
        threshold_key='fsa',
        angle=_rounded_shoulders_angle,
    ),
    PostureCheckKind.BACK_SLOUCH: _CheckDefinition(
        required=(JointId.NECK,) + _SHOULDERS + _HIPS + (JointId.ROOT,),
        confidence_joints=_SHOULDERS + _HIPS,
        threshold_key='kyphosis',
        angle=_back_slouch_angle,
    ),
}


# -----------------------------------------------------------------------------
# Classifier
# -----------------------------------------------------------------------------

class PostureClassifier:
    """
    Rule-based side-view posture classifier.

    Holds only configuration, so one instance can be shared across threads.
    Results depend on nothing but the frame and the requested check.
    """

    MIN_CONFIDENCE = CLINICAL_THRESHOLDS['visibility'].MIN_ANALYSIS

    def __init__(self, min_confidence: Optional[float] = None,
                 thresholds: Optional[Mapping[str, Any]] = None):
        self.min_confidence = self.MIN_CONFIDENCE if min_confidence is None else min_confidence
        self.thresholds = {**CLINICAL_THRESHOLDS, **(thresholds or {})}

    def _collect(self, frame: KeypointFrame, kind: PostureCheckKind) -> Dict[JointId, Keypoint]:
        """Required joints of a check, or InsufficientDataError naming the rejects."""
        check = CHECKS[kind]
        points, rejected = {}, []
        for joint in check.required:
            kp = frame.get(joint)
            if kp is None or not kp.confidence > self.min_confidence:
                rejected.append(joint)
            else:
                points[joint] = kp
        if rejected:
            logger.debug("Rejecting %s: low confidence or missing %s",
                         kind.value, [j.value for j in rejected])
            raise InsufficientDataError(kind, tuple(rejected), "missing or low confidence")
        return points

    def analyze(self, frame: KeypointFrame, kind: PostureCheckKind) -> AnalysisResult:
        """Run one posture check on a frame."""
        kind = PostureCheckKind(kind)
        check = CHECKS[kind]
        points = self._collect(frame, kind)

        angle = check.angle(points)
        confidence = mean_confidence(points[j].confidence for j in check.confidence_joints)
        if not (math.isfinite(angle) and math.isfinite(confidence)):
            raise InsufficientDataError(kind, check.required, "non-finite geometry")

        severity = self.thresholds[check.threshold_key].severity(angle)
        return AnalysisResult(
            kind=kind,
            angle_degrees=angle,
            is_normal=severity is Severity.NORMAL,
            severity=severity,
            confidence=confidence,
            recommendation=get_recommendation(kind.value, severity, angle),
            keypoints=points
        )

    def analyze_all(self, frame: KeypointFrame) -> Dict[PostureCheckKind, AnalysisResult]:
        """Run every check; checks lacking data are left out."""
        results = {}
        for kind in PostureCheckKind:
            try:
                results[kind] = self.analyze(frame, kind)
            except InsufficientDataError:
                continue
        return results


# -----------------------------------------------------------------------------
# Aggregate metrics
# -----------------------------------------------------------------------------

@dataclass
class PostureMetrics:
    """Angles of all three checks for one frame; None where unavailable."""
    craniovertebral_angle: Optional[float] = None
    shoulder_flexion_angle: Optional[float] = None
    thoracic_kyphosis_angle: Optional[float] = None

    @property
    def has_fhp(self) -> bool:
        angle = self.craniovertebral_angle
        return angle is not None and angle < CLINICAL_THRESHOLDS['cva'].NORMAL

    @property
    def has_rounded_shoulders(self) -> bool:
        angle = self.shoulder_flexion_angle
        return angle is not None and angle > CLINICAL_THRESHOLDS['fsa'].NORMAL

    @property
    def has_back_slouch(self) -> bool:
        angle = self.thoracic_kyphosis_angle
        return angle is not None and angle > CLINICAL_THRESHOLDS['kyphosis'].NORMAL

    @classmethod
    def from_results(cls, results: Mapping[PostureCheckKind, AnalysisResult]) -> "PostureMetrics":
        def angle(kind):
            result = results.get(kind)
            return result.angle_degrees if result is not None else None

        return cls(
            craniovertebral_angle=angle(PostureCheckKind.FORWARD_HEAD),
            shoulder_flexion_angle=angle(PostureCheckKind.ROUNDED_SHOULDERS),
            thoracic_kyphosis_angle=angle(PostureCheckKind.BACK_SLOUCH)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'craniovertebral_angle': self.craniovertebral_angle,
            'shoulder_flexion_angle': self.shoulder_flexion_angle,
            'thoracic_kyphosis_angle': self.thoracic_kyphosis_angle,
            'has_fhp': self.has_fhp,
            'has_rounded_shoulders': self.has_rounded_shoulders,
            'has_back_slouch': self.has_back_slouch
        }
