"""
Side and angle bookkeeping for rotated tile variants.
Provides mappings for how sides and angle labels change under rotation.
"""

from typing import Literal

Side = Literal['up', 'right', 'down', 'left']
SIDES: list[Side] = ['up', 'right', 'down', 'left']

ANGLES: tuple[int, ...] = (0, 90, 180, 270)

# Grid offset (dx, dy) of the neighbour lying on each side; y grows downwards.
SIDE_OFFSETS: dict[Side, tuple[int, int]] = {
    'up': (0, -1),
    'right': (1, 0),
    'down': (0, 1),
    'left': (-1, 0),
}

_OPPOSITES = {'up': 'down', 'down': 'up', 'left': 'right', 'right': 'left'}


def get_opposite_side(side: Side) -> Side:
    """Get the opposite side (up<->down, left<->right)."""
    return _OPPOSITES[side]


# --- Side Rotation ---

def rotate_side(side: Side, degrees: int) -> Side:
    """Get the new position of a side after clockwise rotation."""
    degrees = degrees % 360
    if degrees not in ANGLES:
        raise ValueError(f"Invalid rotation: {degrees}. Must be 0, 90, 180, or 270.")
    return SIDES[(SIDES.index(side) + degrees // 90) % 4]


def source_side(side: Side, degrees: int) -> Side:
    """
    Compute which pre-rotation side ends up on `side` after rotating
    `degrees` clockwise. This is the inverse of rotate_side.
    """
    degrees = degrees % 360
    if degrees not in ANGLES:
        raise ValueError(f"Invalid rotation: {degrees}. Must be 0, 90, 180, or 270.")
    return SIDES[(SIDES.index(side) - degrees // 90) % 4]


# --- Angle Labels ---

def symmetry_angles(symmetry: int) -> tuple[int, ...]:
    """Distinct rotation angles for a symmetry class (1, 2 or 4)."""
    if symmetry == 4:
        return (0, 90, 180, 270)
    if symmetry == 2:
        return (0, 90)
    return (0,)


def reduce_angle(angle: int, symmetry: int) -> int:
    """
    Fold an angle onto the distinct rotations of a symmetry class.

    A class 2 tile looks the same after 180 degrees, so 180 becomes 0 and
    270 becomes 90. A class 1 tile only has the base orientation.
    """
    if symmetry == 4:
        return angle % 360
    if symmetry == 2:
        return angle % 180
    return 0


def rotate_angle(angle: int, rotation: int, symmetry: int) -> int:
    """Add a clockwise rotation to an angle and fold it by symmetry."""
    return reduce_angle(angle + rotation, symmetry)
