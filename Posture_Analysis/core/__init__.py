"""Core analysis algorithms."""
from .keypoints import JointId, Keypoint, KeypointFrame
from .clinical_thresholds import CLINICAL_THRESHOLDS, Severity, get_recommendation
from .orientation import Orientation, OrientationGate, OrientationVerdict
from .posture_classifier import (
    AnalysisResult, InsufficientDataError, PostureCheckKind, PostureClassifier, PostureMetrics,
)
