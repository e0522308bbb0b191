"""2D angle geometry for normalized keypoints (x right, y up)."""

import numpy as np
from typing import Iterable, Tuple

Point = Tuple[float, float]


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def flip_y(point: Point) -> Point:
    """Convert between y-up and y-down normalized coordinates."""
    return (point[0], 1.0 - point[1])


def craniovertebral_angle(ear: Point, shoulder: Point) -> float:
    """CVA in degrees: 90 minus the ear-shoulder line's deviation from vertical."""
    ear_down, shoulder_down = flip_y(ear), flip_y(shoulder)
    horizontal = abs(ear_down[0] - shoulder_down[0])
    vertical = abs(ear_down[1] - shoulder_down[1])
    return float(90.0 - np.degrees(np.arctan2(horizontal, vertical)))


def forward_shoulder_angle(shoulder: Point, hip: Point) -> float:
    """Horizontal shoulder-over-hip offset scaled to degrees, capped at 90."""
    return float(min(abs(shoulder[0] - hip[0]) * 180.0, 90.0))


def angle_between(v1: Point, v2: Point) -> float:
    """Angle between two vectors in degrees; 0 if either has zero length."""
    a, b = np.asarray(v1, dtype=float), np.asarray(v2, dtype=float)
    norm_a, norm_b = np.linalg.norm(a), np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    cos_angle = np.dot(a, b) / (norm_a * norm_b)
    return float(np.degrees(np.arccos(np.clip(cos_angle, -1.0, 1.0))))


def thoracic_kyphosis_angle(neck: Point, mid_spine: Point, lower_spine: Point) -> float:
    """Deviation from a straight neck-mid-lower spine line, in degrees [0, 180]."""
    v1 = (neck[0] - mid_spine[0], neck[1] - mid_spine[1])
    v2 = (lower_spine[0] - mid_spine[0], lower_spine[1] - mid_spine[1])
    if np.hypot(*v1) == 0 or np.hypot(*v2) == 0:
        return 0.0
    return float(abs(180.0 - angle_between(v1, v2)))


def mean_confidence(confidences: Iterable[float]) -> float:
    values = list(confidences)
    return float(sum(values) / len(values)) if values else 0.0
