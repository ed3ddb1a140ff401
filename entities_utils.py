# entities_utils.py

from collections import namedtuple

Rect = namedtuple("Rect", "x y width height")


def rect_intersect(a, b):
    """Return True if the axis-aligned boxes a and b overlap.

    Both arguments only need ``x``, ``y``, ``width`` and ``height``.
    Touching edges count as an overlap.
    """
    return not (
        b.x > a.x + a.width
        or b.x + b.width < a.x
        or b.y > a.y + a.height
        or b.y + b.height < a.y
    )


def center_of(box):
    return (box.x + box.width / 2, box.y + box.height / 2)


def ship_polygon(x, y, w, h, notch=5):
    """Arrowhead ship outline: nose, right wing, notch, left wing."""
    return [
        (x + w / 2, y),
        (x + w, y + h),
        (x + w / 2, y + h - notch),
        (x, y + h),
    ]
