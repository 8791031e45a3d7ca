"""Coordinate arithmetic for drawing, moving and resizing rectangles."""

from __future__ import annotations

from typing import Tuple


def clamp(value: float, lower: float, upper: float) -> float:
    """
    Clamp a value into [lower, upper].

    When the range is inverted the upper bound wins, so an element
    never ends up past the far edge of its container.
    """
    return min(max(value, lower), upper)


def clamp_point(
    x: float,
    y: float,
    container_width: float,
    container_height: float
) -> Tuple[float, float]:
    """Clamp a point into [0, width] x [0, height]."""
    return (
        clamp(x, 0.0, container_width),
        clamp(y, 0.0, container_height),
    )


def normalize_drag(
    start_x: float,
    start_y: float,
    current_x: float,
    current_y: float
) -> Tuple[float, float, float, float]:
    """
    Convert a press point and the current drag point into a rectangle.

    The drag may go in any direction, so the top-left corner moves
    whenever the pointer crosses the start point.

    Returns:
        Tuple of (left, top, width, height)
    """
    left = min(start_x, current_x)
    top = min(start_y, current_y)
    width = max(start_x, current_x) - left
    height = max(start_y, current_y) - top
    return (left, top, width, height)


def is_near_far_edge(
    x: float,
    y: float,
    container_width: float,
    container_height: float,
    margin: float
) -> bool:
    """True when the point is within `margin` of the right or bottom edge."""
    return x >= container_width - margin or y >= container_height - margin


def clamp_position(
    position: float,
    element_extent: float,
    container_extent: float
) -> float:
    """Clamp a drag position to [0, container_extent - element_extent]."""
    return clamp(position, 0.0, container_extent - element_extent)


def clamp_size(
    size: float,
    element_offset: float,
    container_extent: float,
    minimum: float
) -> float:
    """Clamp a resize to [minimum, container_extent - element_offset]."""
    return clamp(size, minimum, container_extent - element_offset)
