"""Entry points for the capture/UI layer."""

from typing import Union

from .core.keypoints import KeypointFrame
from .core.orientation import OrientationGate, OrientationVerdict
from .core.posture_classifier import AnalysisResult, PostureCheckKind, PostureClassifier

_gate = OrientationGate()
_classifier = PostureClassifier()


def analyze_orientation(frame: KeypointFrame) -> OrientationVerdict:
    """Orientation of the subject and strength of the side-view signal."""
    return _gate.analyze(frame)


def analyze_posture(frame: KeypointFrame, kind: Union[PostureCheckKind, str]) -> AnalysisResult:
    """Run one posture check. Raises InsufficientDataError on unusable frames."""
    return _classifier.analyze(frame, kind)
