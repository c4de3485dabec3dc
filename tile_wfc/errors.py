"""
Error types raised for malformed rules and solver input.
"""


class WFCError(ValueError):
    """Base class for configuration errors."""


class InvalidRule(WFCError):
    """A rule specification is malformed or references an unknown family."""


class InvalidSymmetry(InvalidRule):
    """A tile family declares a symmetry class other than 1, 2 or 4."""

    def __init__(self, family: str, symmetry):
        super().__init__(
            f"Family '{family}' has invalid symmetry {symmetry!r}. Must be 1, 2 or 4."
        )
        self.family = family
        self.symmetry = symmetry


class InvalidConstraint(WFCError):
    """An initial cell constraint is out of bounds or names an unknown variant."""
