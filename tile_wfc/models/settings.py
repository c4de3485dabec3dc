from dataclasses import dataclass
from typing import Optional


@dataclass
class SolverSettings:
    """
    Run settings for the command line and the timer runner.
    """
    width: int = 15                   # grid columns
    height: int = 15                  # grid rows
    seed: Optional[int] = None        # random seed, None for a fresh one
    step_delay_ms: int = 1            # timer interval between animated steps
    max_steps: Optional[int] = None   # give up after this many steps

    def to_dict(self) -> dict:
        return {
            'width': self.width,
            'height': self.height,
            'seed': self.seed,
            'step_delay_ms': self.step_delay_ms,
            'max_steps': self.max_steps
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SolverSettings':
        """
        Raises:
            ValueError: If data is not a mapping or a field is not an integer
        """
        if not isinstance(data, dict):
            raise ValueError(f"Settings must be an object, got {type(data).__name__}")
        for key in ('width', 'height', 'seed', 'step_delay_ms', 'max_steps'):
            value = data.get(key)
            if key not in data or (value is None and key in ('seed', 'max_steps')):
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Setting '{key}' must be an integer, got {value!r}")
        return cls(
            width=data.get('width', 15),
            height=data.get('height', 15),
            seed=data.get('seed'),
            step_delay_ms=data.get('step_delay_ms', 1),
            max_steps=data.get('max_steps')
        )
