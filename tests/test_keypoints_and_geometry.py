import math

import pytest

from Posture_Analysis import JointId, Keypoint, KeypointFrame
from Posture_Analysis.utils import (
    angle_between, craniovertebral_angle, flip_y, forward_shoulder_angle, mean_confidence,
    midpoint, thoracic_kyphosis_angle,
)


def test_frame_lookup_returns_none_for_absent_joint():
    frame = KeypointFrame.from_keypoints([Keypoint(JointId.NECK, 0.5, 0.7, 0.9)])
    assert frame.get(JointId.NECK).location == (0.5, 0.7)
    assert frame.get(JointId.ROOT) is None
    assert JointId.NECK in frame
    assert len(frame) == 1


def test_from_dict_skips_unknown_names():
    frame = KeypointFrame.from_dict({
        'neck': (0.5, 0.7, 0.9),
        'left_wrist': (0.1, 0.1, 0.9),
    })
    assert len(frame) == 1
    assert frame.to_dict() == {'neck': (0.5, 0.7, 0.9)}


def test_midpoint_and_flip():
    assert midpoint((0.2, 0.4), (0.4, 0.8)) == pytest.approx((0.3, 0.6))
    assert flip_y((0.3, 0.25)) == (0.3, 0.75)


def test_craniovertebral_angle_at_45():
    assert craniovertebral_angle((0.7, 0.8), (0.5, 0.6)) == pytest.approx(45.0)


def test_craniovertebral_angle_coincident_points():
    assert craniovertebral_angle((0.5, 0.5), (0.5, 0.5)) == 90.0


def test_forward_shoulder_angle():
    assert forward_shoulder_angle((0.6, 0.6), (0.5, 0.3)) == pytest.approx(18.0)
    assert forward_shoulder_angle((1.0, 0.6), (0.0, 0.3)) == 90.0


@pytest.mark.parametrize("v1, v2, expected", [
    ((1.0, 0.0), (0.0, 1.0), 90.0),
    ((1.0, 0.0), (-1.0, 0.0), 180.0),
    ((1.0, 1.0), (2.0, 2.0), 0.0),
    ((0.0, 0.0), (1.0, 0.0), 0.0),
])
def test_angle_between(v1, v2, expected):
    assert angle_between(v1, v2) == pytest.approx(expected, abs=1e-5)


def test_thoracic_kyphosis_right_angle():
    assert thoracic_kyphosis_angle((0.6, 0.6), (0.5, 0.6), (0.5, 0.3)) == pytest.approx(90.0)


def test_angle_between_propagates_nan():
    assert math.isnan(angle_between((float('nan'), 1.0), (0.0, 1.0)))


def test_mean_confidence():
    assert mean_confidence([0.6, 0.8]) == pytest.approx(0.7)
    assert mean_confidence([]) == 0.0


def test_frame_is_a_read_only_snapshot():
    source = {JointId.NECK: Keypoint(JointId.NECK, 0.5, 0.7, 0.9)}
    frame = KeypointFrame(source)
    source[JointId.ROOT] = Keypoint(JointId.ROOT, 0.5, 0.3, 0.9)
    assert JointId.ROOT not in frame
    with pytest.raises(TypeError):
        frame.keypoints[JointId.ROOT] = source[JointId.ROOT]


def test_equal_frames_hash_equal():
    a = KeypointFrame.from_dict({'neck': (0.5, 0.7, 0.9), 'root': (0.5, 0.3, 0.8)})
    b = KeypointFrame.from_dict({'root': (0.5, 0.3, 0.8), 'neck': (0.5, 0.7, 0.9)})
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
