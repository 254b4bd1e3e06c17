import math

import pytest

from qbreakout.geometry import (
    AaBB,
    Circle,
    Vec2,
    contact_circle_aabb,
    reflected_vector,
    vector_angle,
)

BOX = AaBB(Vec2(110.0, 90.0), Vec2(130.0, 110.0))


def test_vector_arithmetic_round_trip():
    a = Vec2(3.0, -4.0)
    b = Vec2(1.5, 2.0)
    assert (a + b) - b == a
    assert -(-a) == a
    assert (a * 2.0) / 2.0 == a


def test_normalized_has_unit_length():
    assert Vec2(3.0, -4.0).normalized().length() == pytest.approx(1.0)
    assert Vec2(0.0, 0.0).normalized() == Vec2(0.0, 0.0)


def test_dot_of_orthogonal_is_zero():
    assert Vec2(2.0, 0.0).dot(Vec2(0.0, 7.0)) == 0.0


def test_aabb_center_and_translate():
    box = AaBB(Vec2(0.0, 0.0), Vec2(4.0, 2.0))
    moved = box.translate(Vec2(1.0, 1.0))
    assert moved.center() == box.center() + Vec2(1.0, 1.0)
    assert moved.max - moved.min == box.max - box.min


def test_reflection_flips_normal_component():
    v = Vec2(1.0, -1.0)
    r = reflected_vector(v, Vec2(0.0, 1.0))
    assert r == Vec2(1.0, 1.0)


def test_reflection_twice_is_identity_and_keeps_length():
    v = Vec2(2.5, -0.7)
    n = Vec2(1.0, 1.0).normalized()
    r = reflected_vector(v, n)
    assert r.length() == pytest.approx(v.length())
    back = reflected_vector(r, n)
    assert back.x == pytest.approx(v.x)
    assert back.y == pytest.approx(v.y)


def test_vector_angle():
    assert vector_angle(Vec2(1.0, 1.0), Vec2(2.0, 2.0)) == pytest.approx(0.0, abs=1e-6)
    assert vector_angle(Vec2(1.0, 0.0), Vec2(-3.0, 0.0)) == pytest.approx(math.pi)
    assert vector_angle(Vec2(1.0, 0.0), Vec2(0.0, 5.0)) == pytest.approx(math.pi / 2)


def test_far_circle_has_no_contact():
    assert contact_circle_aabb(Circle(Vec2(50.0, 100.0), 5.0), BOX, 0.8) is None


def test_touching_circle_from_left():
    contact = contact_circle_aabb(Circle(Vec2(105.0, 100.0), 5.0), BOX, 0.8)
    assert contact.dist == pytest.approx(0.0)
    assert contact.normal2 == Vec2(-1.0, 0.0)
    assert contact.normal1 == -contact.normal2
    assert contact.point2 == Vec2(BOX.min.x, 100.0)


def test_contact_within_prediction_only():
    circle = Circle(Vec2(104.5, 100.0), 5.0)
    near = contact_circle_aabb(circle, BOX, 0.8)
    assert near.dist == pytest.approx(0.5)
    assert contact_circle_aabb(circle, BOX, 0.1) is None


def test_penetrating_circle_has_negative_distance():
    contact = contact_circle_aabb(Circle(Vec2(108.0, 100.0), 5.0), BOX, 0.8)
    assert contact.dist < 0.0
    assert contact.normal2.length() == pytest.approx(1.0)
    assert contact.normal1 == -contact.normal2


def test_circle_center_inside_box_uses_nearest_face():
    contact = contact_circle_aabb(Circle(Vec2(112.0, 100.0), 5.0), BOX, 0.8)
    assert contact.normal2 == Vec2(-1.0, 0.0)
    assert contact.dist < -5.0


def test_corner_contact_normal_points_diagonally():
    box = AaBB(Vec2(80.0, 80.0), Vec2(95.0, 95.0))
    contact = contact_circle_aabb(Circle(Vec2(98.0, 98.0), 5.0), box, 0.8)
    assert contact.normal2.x == pytest.approx(contact.normal2.y)
    assert contact.normal2.length() == pytest.approx(1.0)
    assert contact.point2 == box.max