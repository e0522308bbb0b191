"""
Keypoint Data Model
Per-frame body-joint observations handed in by the pose-detection layer.

Coordinates are normalized to the image extent with x increasing to the
right and y increasing upward. Callers working in y-down image space must
flip y before building a frame (see detectors.landmark_adapter).
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple


# -----------------------------------------------------------------------------
# Enums & Data Classes
# -----------------------------------------------------------------------------

class JointId(Enum):
    """Named landmarks used by the posture checks."""
    NECK = "neck"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    ROOT = "root"


@dataclass(frozen=True)
class Keypoint:
    """A single detected joint: normalized (x, y) plus detector confidence."""
    name: JointId
    x: float
    y: float
    confidence: float

    @property
    def location(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class KeypointFrame:
    """All joints detected in one frame. Absent joints are simply missing."""
    keypoints: Mapping[JointId, Keypoint] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only snapshot; later changes to the caller's dict are not seen.
        object.__setattr__(self, 'keypoints', MappingProxyType(dict(self.keypoints)))

    def __hash__(self) -> int:
        return hash(frozenset(self.keypoints.items()))

    def get(self, joint: JointId) -> Optional[Keypoint]:
        return self.keypoints.get(joint)

    def __contains__(self, joint: JointId) -> bool:
        return joint in self.keypoints

    def __len__(self) -> int:
        return len(self.keypoints)

    @classmethod
    def from_keypoints(cls, keypoints: Iterable[Keypoint]) -> "KeypointFrame":
        return cls({kp.name: kp for kp in keypoints})

    @classmethod
    def from_dict(cls, data: Mapping[str, Tuple[float, float, float]]) -> "KeypointFrame":
        """Build from {joint_name: (x, y, confidence)}. Unknown names are skipped."""
        known = {j.value: j for j in JointId}
        keypoints = {}
        for name, (x, y, confidence) in data.items():
            joint = known.get(name)
            if joint is None:
                continue
            keypoints[joint] = Keypoint(joint, float(x), float(y), float(confidence))
        return cls(keypoints)

    def to_dict(self) -> Dict[str, Tuple[float, float, float]]:
        return {j.value: (kp.x, kp.y, kp.confidence) for j, kp in self.keypoints.items()}
