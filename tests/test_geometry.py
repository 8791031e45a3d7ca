"""Tests for drag, move and resize arithmetic."""

import pytest

from rectangles_over_image.core.geometry import (
    clamp,
    clamp_point,
    clamp_position,
    clamp_size,
    is_near_far_edge,
    normalize_drag,
)


class TestClamp:
    """Tests for clamp."""

    def test_value_inside_range(self):
        assert clamp(5, 0, 10) == 5

    def test_value_below_range(self):
        assert clamp(-3, 0, 10) == 0

    def test_value_above_range(self):
        assert clamp(12, 0, 10) == 10

    def test_inverted_range_upper_wins(self):
        """Test that an impossible range resolves to the upper bound."""
        assert clamp(1, 5, 3) == 3
        assert clamp(9, 5, 3) == 3


class TestClampPoint:
    """Tests for clamp_point."""

    def test_point_inside(self):
        assert clamp_point(20, 30, 100, 50) == (20, 30)

    def test_point_outside_every_edge(self):
        assert clamp_point(-5, -5, 100, 50) == (0, 0)
        assert clamp_point(150, 80, 100, 50) == (100, 50)


class TestNormalizeDrag:
    """Tests for normalize_drag."""

    def test_drag_down_right(self):
        assert normalize_drag(10, 10, 60, 40) == (10, 10, 50, 30)

    def test_drag_up_left_moves_origin(self):
        """Test dragging towards the top-left corner."""
        assert normalize_drag(60, 40, 10, 10) == (10, 10, 50, 30)

    def test_drag_mixed_direction(self):
        assert normalize_drag(50, 10, 20, 30) == (20, 10, 30, 20)

    def test_no_movement(self):
        assert normalize_drag(15, 15, 15, 15) == (15, 15, 0, 0)


class TestIsNearFarEdge:
    """Tests for is_near_far_edge."""

    def test_inside(self):
        assert is_near_far_edge(50, 50, 100, 100, 2) is False

    @pytest.mark.parametrize("x, y", [(98, 10), (10, 98), (120, 10), (10, 100)])
    def test_reaching_right_or_bottom(self, x, y):
        assert is_near_far_edge(x, y, 100, 100, 2) is True

    def test_left_and_top_edges_do_not_count(self):
        assert is_near_far_edge(0, 0, 100, 100, 2) is False


class TestClampPosition:
    """Tests for moving within a container."""

    def test_inside(self):
        assert clamp_position(30, 20, 100) == 30

    def test_negative_snaps_to_zero(self):
        assert clamp_position(-10, 20, 100) == 0

    def test_past_far_edge(self):
        """Test that the element's far edge stops at the container edge."""
        assert clamp_position(95, 20, 100) == 80


class TestClampSize:
    """Tests for resizing within a container."""

    def test_inside(self):
        assert clamp_size(40, 10, 100, 5) == 40

    def test_below_minimum(self):
        assert clamp_size(2, 10, 100, 5) == 5

    def test_past_container(self):
        assert clamp_size(120, 10, 100, 5) == 90

    def test_container_smaller_than_minimum(self):
        assert clamp_size(2, 97, 100, 5) == 3
