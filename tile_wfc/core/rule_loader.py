"""
Load rule specifications from JSON files.
"""

import json
from pathlib import Path
from typing import Union

from ..errors import InvalidRule
from .compiler import compile_rules
from .rule_table import CompiledRuleTable


def load_rule_spec(filepath: Union[str, Path]) -> dict:
    """
    Read a rule specification file.

    Args:
        filepath: Path to a JSON file mapping family names to their rules

    Returns:
        The raw specification, not yet compiled

    Raises:
        FileNotFoundError: If file doesn't exist
        InvalidRule: If the file is not valid JSON or not a JSON object
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidRule(f"Invalid rule file {path.name}: {e}")

    if not isinstance(data, dict):
        raise InvalidRule(f"Invalid rule file {path.name}: top level must be an object")
    return data


def load_rules(filepath: Union[str, Path]) -> CompiledRuleTable:
    """Read and compile a rule specification file."""
    return compile_rules(load_rule_spec(filepath))
