from types import SimpleNamespace

import pytest

from Posture_Analysis import (
    JointId, Orientation, PostureCheckKind, Severity, analyze_orientation, analyze_posture,
)
from Posture_Analysis.detectors.landmark_adapter import (
    LEFT_EAR, LEFT_HIP, LEFT_SHOULDER, RIGHT_EAR, RIGHT_HIP, RIGHT_SHOULDER, frame_from_landmarks,
)


def _landmarks(points, count=33):
    """points: {index: (x, y_down, visibility)}"""
    landmarks = [SimpleNamespace(x=0.5, y=0.5, visibility=0.0) for _ in range(count)]
    for idx, (x, y, vis) in points.items():
        landmarks[idx] = SimpleNamespace(x=x, y=y, visibility=vis)
    return landmarks


SIDE_ON = {
    LEFT_EAR: (0.5, 0.2, 0.9),
    RIGHT_EAR: (0.5, 0.2, 0.8),
    LEFT_SHOULDER: (0.5, 0.4, 0.9),
    RIGHT_SHOULDER: (0.5, 0.4, 0.7),
    LEFT_HIP: (0.5, 0.7, 0.8),
    RIGHT_HIP: (0.5, 0.7, 0.6),
}


def test_flips_y_and_synthesizes_neck_and_root():
    frame = frame_from_landmarks(_landmarks(SIDE_ON))
    assert frame.get(JointId.LEFT_EAR).y == pytest.approx(0.8)
    neck = frame.get(JointId.NECK)
    assert neck.location == pytest.approx((0.5, 0.66))
    assert neck.confidence == pytest.approx(0.7)
    root = frame.get(JointId.ROOT)
    assert root.location == pytest.approx((0.5, 0.3))
    assert root.confidence == pytest.approx(0.6)


def test_adapted_frame_feeds_the_classifier():
    frame = frame_from_landmarks(_landmarks(SIDE_ON))
    assert analyze_posture(frame, PostureCheckKind.FORWARD_HEAD).angle_degrees == pytest.approx(90.0)
    assert analyze_posture(frame, PostureCheckKind.BACK_SLOUCH).angle_degrees == pytest.approx(0.0, abs=1e-5)
    assert analyze_orientation(frame).orientation is Orientation.FRONT


def _hunched(ear, shoulder, hip):
    """Side-on pose with both sides of each pair at the same (x, y_down)."""
    return {
        LEFT_EAR: ear + (0.9,), RIGHT_EAR: ear + (0.9,),
        LEFT_SHOULDER: shoulder + (0.9,), RIGHT_SHOULDER: shoulder + (0.9,),
        LEFT_HIP: hip + (0.9,), RIGHT_HIP: hip + (0.9,),
    }


@pytest.mark.parametrize("ear, shoulder, hip, angle, severity", [
    ((0.9, 0.2), (0.75, 0.4), (0.4, 0.7), 12.53, Severity.NORMAL),
    ((0.95, 0.45), (0.7, 0.4), (0.4, 0.7), 56.31, Severity.MILD),
])
def test_hunched_pose_registers_back_slouch(ear, shoulder, hip, angle, severity):
    frame = frame_from_landmarks(_landmarks(_hunched(ear, shoulder, hip)))
    result = analyze_posture(frame, PostureCheckKind.BACK_SLOUCH)
    assert result.angle_degrees == pytest.approx(angle, abs=0.01)
    assert result.severity is severity


def test_clips_out_of_frame_coordinates():
    frame = frame_from_landmarks(_landmarks({LEFT_HIP: (1.2, 1.1, 0.3)}))
    hip = frame.get(JointId.LEFT_HIP)
    assert hip.location == (1.0, 0.0)


def test_missing_visibility_defaults():
    landmarks = _landmarks(SIDE_ON)
    landmarks[LEFT_EAR] = SimpleNamespace(x=0.5, y=0.2)
    assert frame_from_landmarks(landmarks).get(JointId.LEFT_EAR).confidence == pytest.approx(0.9)


def test_rejects_short_landmark_list():
    with pytest.raises(ValueError):
        frame_from_landmarks(_landmarks({}, count=13))
