"""Adapters from pose-detector output to keypoint frames."""
from .landmark_adapter import frame_from_landmarks
