from dataclasses import dataclass

from ..errors import InvalidRule


@dataclass(frozen=True, order=True)
class TileVariant:
    """
    A tile family in one orientation, the unit the solver places.
    Two variants are the same only if both family and angle match.
    """
    family: str                       # e.g. "bowl-side"
    angle: int = 0                    # 0, 90, 180 or 270 degrees clockwise

    @property
    def label(self) -> str:
        """The "<family> <angle>" form used in rule files and output grids."""
        return f"{self.family} {self.angle}"

    @classmethod
    def parse(cls, label: str) -> 'TileVariant':
        """Parse a "<family> <angle>" label."""
        if not isinstance(label, str):
            raise InvalidRule(f"Tile reference must be a string, got {label!r}")
        parts = label.strip().rsplit(' ', 1)
        if len(parts) != 2 or not parts[0]:
            raise InvalidRule(f"Tile reference '{label}' is not of the form '<family> <angle>'")
        name, angle_text = parts
        try:
            angle = int(angle_text)
        except ValueError:
            raise InvalidRule(f"Tile reference '{label}' has a non-integer angle")
        if angle not in (0, 90, 180, 270):
            raise InvalidRule(f"Tile reference '{label}' has angle {angle}. Must be 0, 90, 180 or 270.")
        return cls(family=name.strip(), angle=angle)

    def __str__(self) -> str:
        return self.label
