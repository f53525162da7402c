import pygame
import pytest

from planegame.primitives import (
    Camera2D,
    Color,
    Rectangle,
    Vector2,
    Vector2Int,
    WHITE,
)


def test_rectangle_to_pygame_keeps_integer_values():
    rect = Rectangle(1, 2, 3, 4).to_pygame()
    assert rect == pygame.Rect(1, 2, 3, 4)


def test_rectangle_to_pygame_truncates_floats():
    rect = Rectangle(1.9, 2.2, 3.7, 4.1).to_pygame()
    assert (rect.x, rect.y, rect.width, rect.height) == (1, 2, 3, 4)


def test_rectangle_iterates_in_field_order():
    assert tuple(Rectangle(5.0, 6.0, 7.0, 8.0)) == (5.0, 6.0, 7.0, 8.0)


def test_color_with_alpha_changes_only_alpha():
    base = Color(10, 20, 30)
    faded = base.with_alpha(0)
    assert tuple(faded) == (10, 20, 30, 0)
    assert base.a == 255


def test_color_rejects_out_of_range_channel():
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    with pytest.raises(ValueError):
        WHITE.with_alpha(-1)


def test_color_is_hashable_and_comparable():
    assert Color(1, 2, 3) == Color(1, 2, 3, 255)
    assert len({Color(1, 2, 3), Color(1, 2, 3)}) == 1


def test_vector2_is_mutable():
    vec = Vector2(1.5, 2.5)
    vec.x += 1.0
    assert tuple(vec) == (2.5, 2.5)


def test_vector2int_is_value_type():
    assert Vector2Int(3, 4) == Vector2Int(3, 4)
    assert tuple(Vector2Int(3, 4)) == (3, 4)


def test_camera_defaults_do_not_share_vectors():
    first = Camera2D()
    second = Camera2D()
    first.offset.x = 9.0
    assert second.offset.x == 0.0
    assert first.zoom == 1.0