"""Shared frame builders. Coordinates are y-up normalized."""

import pytest

from Posture_Analysis import JointId, Keypoint, KeypointFrame


def build_frame(points, confidence=0.9, overrides=None, drop=()):
    """points: {JointId: (x, y)}; overrides: {JointId: confidence}."""
    overrides = overrides or {}
    return KeypointFrame({
        joint: Keypoint(joint, x, y, overrides.get(joint, confidence))
        for joint, (x, y) in points.items() if joint not in drop
    })


UPRIGHT = {
    JointId.LEFT_EAR: (0.5, 0.8),
    JointId.RIGHT_EAR: (0.5, 0.8),
    JointId.NECK: (0.5, 0.7),
    JointId.LEFT_SHOULDER: (0.5, 0.6),
    JointId.RIGHT_SHOULDER: (0.5, 0.6),
    JointId.LEFT_HIP: (0.5, 0.3),
    JointId.RIGHT_HIP: (0.5, 0.3),
    JointId.ROOT: (0.5, 0.3),
}


@pytest.fixture
def upright_frame():
    return build_frame(UPRIGHT)


@pytest.fixture
def frame_factory():
    def factory(points=None, confidence=0.9, overrides=None, drop=()):
        merged = {**UPRIGHT, **(points or {})}
        return build_frame(merged, confidence, overrides, drop)
    return factory
