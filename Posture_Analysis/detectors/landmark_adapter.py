"""
Landmark Adapter
Converts MediaPipe Pose landmarks into a KeypointFrame.

MediaPipe reports 33 landmarks in y-down normalized image coordinates with
a per-landmark visibility. It has no neck or pelvis landmark, so those are
synthesized: the pelvis at the hip midpoint, the neck NECK_BLEND of the way
from the shoulder midpoint toward the ear midpoint. The neck must sit off
the shoulder midpoint or the back-slouch angle degenerates to zero.
"""

import numpy as np
from typing import Any, Dict, Sequence, Tuple

from ..core.keypoints import JointId, Keypoint, KeypointFrame

# Landmark indices (MediaPipe Pose Landmarker)
LEFT_EAR = 7
RIGHT_EAR = 8
LEFT_SHOULDER = 11
RIGHT_SHOULDER = 12
LEFT_HIP = 23
RIGHT_HIP = 24

LANDMARK_JOINTS: Dict[JointId, int] = {
    JointId.LEFT_EAR: LEFT_EAR,
    JointId.RIGHT_EAR: RIGHT_EAR,
    JointId.LEFT_SHOULDER: LEFT_SHOULDER,
    JointId.RIGHT_SHOULDER: RIGHT_SHOULDER,
    JointId.LEFT_HIP: LEFT_HIP,
    JointId.RIGHT_HIP: RIGHT_HIP,
}

_SHOULDERS = (JointId.LEFT_SHOULDER, JointId.RIGHT_SHOULDER)
_EARS = (JointId.LEFT_EAR, JointId.RIGHT_EAR)
_HIPS = (JointId.LEFT_HIP, JointId.RIGHT_HIP)

# Fraction of the shoulder-to-ear span where the neck is placed
NECK_BLEND = 0.3

DEFAULT_VISIBILITY = 0.9


def _extract(joint: JointId, lm: Any) -> Keypoint:
    # Tasks API landmarks may lack 'visibility'
    visibility = getattr(lm, 'visibility', None)
    if visibility is None:
        visibility = DEFAULT_VISIBILITY
    x = float(np.clip(lm.x, 0.0, 1.0))
    y = float(np.clip(1.0 - lm.y, 0.0, 1.0))
    return Keypoint(joint, x, y, float(visibility))


def _pair(keypoints: Dict[JointId, Keypoint], pair: Tuple[JointId, JointId]) -> Tuple[float, float, float]:
    """Midpoint of a left/right pair and the weaker of the two confidences."""
    a, b = keypoints[pair[0]], keypoints[pair[1]]
    return (a.x + b.x) / 2, (a.y + b.y) / 2, min(a.confidence, b.confidence)


def frame_from_landmarks(landmarks: Sequence[Any]) -> KeypointFrame:
    """Build a y-up KeypointFrame from one person's MediaPipe pose landmarks."""
    if len(landmarks) <= RIGHT_HIP:
        raise ValueError(f"Expected at least {RIGHT_HIP + 1} pose landmarks, got {len(landmarks)}")

    keypoints = {joint: _extract(joint, landmarks[idx]) for joint, idx in LANDMARK_JOINTS.items()}
    shoulder_x, shoulder_y, shoulder_conf = _pair(keypoints, _SHOULDERS)
    ear_x, ear_y, ear_conf = _pair(keypoints, _EARS)
    hip_x, hip_y, hip_conf = _pair(keypoints, _HIPS)

    keypoints[JointId.NECK] = Keypoint(
        JointId.NECK,
        shoulder_x + NECK_BLEND * (ear_x - shoulder_x),
        shoulder_y + NECK_BLEND * (ear_y - shoulder_y),
        min(shoulder_conf, ear_conf)
    )
    keypoints[JointId.ROOT] = Keypoint(JointId.ROOT, hip_x, hip_y, hip_conf)
    return KeypointFrame(keypoints)
