"""
Clinical Thresholds & Reference Values
Side-view posture cutoffs for the three posture checks.

Each table owns its comparison direction: the craniovertebral angle is
better when larger, the shoulder and kyphosis angles are better when
smaller. Boundaries are part of the policy and must not be reordered.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Severity(Enum):
    """Severity tier of a single posture check."""
    NORMAL = "normal"
    MILD = "mild"
    MODERATE_TO_SEVERE = "moderate to severe"


# -----------------------------------------------------------------------------
# Detection confidence
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class VisibilityThresholds:
    """
    Joint confidence cutoffs (detector confidence units).

    All comparisons are strict: a joint exactly at a cutoff is neither
    visible nor occluded, which keeps the verdict stable at the boundary.
    """
    VISIBLE: float = 0.5       # > 0.5 = joint clearly visible
    OCCLUDED: float = 0.1      # < 0.1 = joint clearly hidden
    MIN_ANALYSIS: float = 0.5  # every required joint must exceed this


# -----------------------------------------------------------------------------
# Posture angles
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CVAThresholds:
    """
    Craniovertebral Angle (CVA) Thresholds

    Angle between the horizontal through the shoulder and the line to the
    ear, in side view. Larger is better.

    Classification:
        >= 50°      normal
        45° - 50°   mild forward head posture
        < 45°       moderate to severe
    """
    NORMAL: float = 50.0
    MILD: float = 45.0

    def severity(self, angle: float) -> Severity:
        if angle >= self.NORMAL:
            return Severity.NORMAL
        elif angle >= self.MILD:
            return Severity.MILD
        return Severity.MODERATE_TO_SEVERE


@dataclass(frozen=True)
class FSAThresholds:
    """
    Forward Shoulder Angle (FSA) Thresholds

    Linear estimate from the horizontal shoulder-over-hip offset. Smaller
    is better.

    Classification:
        <= 30°      normal
        30° - 40°   mild shoulder rounding
        >= 40°      moderate to severe
    """
    NORMAL: float = 30.0
    MILD: float = 40.0

    def severity(self, angle: float) -> Severity:
        if angle <= self.NORMAL:
            return Severity.NORMAL
        elif angle < self.MILD:
            return Severity.MILD
        return Severity.MODERATE_TO_SEVERE


@dataclass(frozen=True)
class KyphosisThresholds:
    """
    Thoracic Kyphosis Thresholds

    Deviation from a straight neck-shoulder-hip line. Smaller is better.

    Classification:
        <= 50°      normal
        50° - 60°   mild slouch (60° inclusive)
        > 60°       moderate to severe
    """
    NORMAL: float = 50.0
    MILD: float = 60.0

    def severity(self, angle: float) -> Severity:
        if angle <= self.NORMAL:
            return Severity.NORMAL
        elif angle <= self.MILD:
            return Severity.MILD
        return Severity.MODERATE_TO_SEVERE


# Aggregate all thresholds
CLINICAL_THRESHOLDS = {
    'visibility': VisibilityThresholds(),
    'cva': CVAThresholds(),
    'fsa': FSAThresholds(),
    'kyphosis': KyphosisThresholds(),
}


# -----------------------------------------------------------------------------
# Recommendations
# -----------------------------------------------------------------------------

# Keyed by check name, then severity. Abnormal tiers receive the angle.
RECOMMENDATIONS: Dict[str, Dict[Severity, str]] = {
    'forward_head': {
        Severity.NORMAL: "Good head position! Maintain this alignment.",
        Severity.MILD: ("Mild forward head detected (CVA: {angle:.1f}°). "
                        "Try chin tucks and ensure your screen is at eye level."),
        Severity.MODERATE_TO_SEVERE: ("Significant forward head posture (CVA: {angle:.1f}°). "
                                      "Focus on strengthening neck muscles with chin tucks "
                                      "and adjust your workstation ergonomics."),
    },
    'rounded_shoulders': {
        Severity.NORMAL: "Shoulders are well aligned! Keep up the good posture.",
        Severity.MILD: ("Mild shoulder rounding detected (FSA: {angle:.1f}°). "
                        "Practice shoulder blade squeezes and doorway stretches."),
        Severity.MODERATE_TO_SEVERE: ("Significant shoulder rounding (FSA: {angle:.1f}°). "
                                      "Focus on chest stretches and upper back "
                                      "strengthening exercises."),
    },
    'back_slouch': {
        Severity.NORMAL: "Good back posture! Maintain this position.",
        Severity.MILD: ("Mild slouching detected ({angle:.1f}°). "
                        "Engage your core and sit up straight."),
        Severity.MODERATE_TO_SEVERE: ("Significant slouching detected ({angle:.1f}°). "
                                      "Strengthen your core and consider lumbar support."),
    },
}


def get_recommendation(check: str, severity: Severity, angle: float) -> str:
    """
    Render the recommendation for a check at a given severity.

    Args:
        check: Check name ('forward_head', 'rounded_shoulders', 'back_slouch')
        severity: Severity tier from the check's threshold table
        angle: Measured angle in degrees

    Returns:
        Recommendation text
    """
    return RECOMMENDATIONS[check][severity].format(angle=angle)
