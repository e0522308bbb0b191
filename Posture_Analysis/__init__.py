"""
Posture Analysis Module
Side-view posture checks and orientation gating over body keypoints.
"""

from .api import analyze_orientation, analyze_posture
from .core.keypoints import JointId, Keypoint, KeypointFrame
from .core.clinical_thresholds import Severity
from .core.orientation import Orientation, OrientationGate, OrientationVerdict
from .core.posture_classifier import (
    AnalysisResult, InsufficientDataError, PostureCheckKind, PostureClassifier, PostureMetrics,
)
from .detectors.landmark_adapter import frame_from_landmarks
