"""Geometry helpers for keypoint angles."""
from .geometry import (
    angle_between, craniovertebral_angle, flip_y, forward_shoulder_angle, mean_confidence,
    midpoint, thoracic_kyphosis_angle,
)
