"""
Export an output grid to a PNG preview image.
"""

import colorsys
import zlib
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw

from ..core.transform import rotate_side
from ..models import TileVariant

BACKGROUND = (200, 200, 200)
MARKER = (30, 30, 30)


def family_color(family: str) -> Tuple[int, int, int]:
    """Stable colour for a tile family."""
    hue = (zlib.crc32(family.encode('utf-8')) % 360) / 360.0
    r, g, b = colorsys.hsv_to_rgb(hue, 0.55, 0.85)
    return int(r * 255), int(g * 255), int(b * 255)


def export_grid_to_png(
    filepath: Union[str, Path],
    grid: Sequence[Sequence[Optional[TileVariant]]],
    tile_size: int = 32
) -> bool:
    """
    Draw a grid of variants as coloured squares.

    Each square gets a dark bar on the side its rotation faces (up for
    angle 0, right for 90, and so on). Unresolved cells stay grey.

    Args:
        filepath: Output PNG file path
        grid: Rows of TileVariant (or None)
        tile_size: Size of each tile in pixels

    Returns:
        True if export successful, False for an empty grid
    """
    if not grid or not grid[0]:
        return False

    height = len(grid)
    width = max(len(row) for row in grid)
    image = Image.new('RGB', (width * tile_size, height * tile_size), BACKGROUND)
    draw = ImageDraw.Draw(image)
    bar = max(1, tile_size // 6)

    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if tile is None:
                continue
            left, top = x * tile_size, y * tile_size
            right, bottom = left + tile_size - 1, top + tile_size - 1
            draw.rectangle([left, top, right, bottom], fill=family_color(tile.family))

            facing = rotate_side('up', tile.angle)
            if facing == 'up':
                box = [left, top, right, top + bar - 1]
            elif facing == 'right':
                box = [right - bar + 1, top, right, bottom]
            elif facing == 'down':
                box = [left, bottom - bar + 1, right, bottom]
            else:
                box = [left, top, left + bar - 1, bottom]
            draw.rectangle(box, fill=MARKER)

    image.save(str(Path(filepath)), 'PNG')
    return True
