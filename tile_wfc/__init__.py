"""
Wave Function Collapse solver for rotation-aware tile rules.
"""

from .errors import WFCError, InvalidRule, InvalidSymmetry, InvalidConstraint
from .models import TileVariant, TileFamily, CompiledRule, SolverSettings
from .core import (
    CompiledRuleTable, compile_rules, load_rules, load_rule_spec,
    WFCSolver, StepResult, SolverStatus,
    validate_grid, validate_rule_table
)

__version__ = "1.0.0"

__all__ = [
    'WFCError', 'InvalidRule', 'InvalidSymmetry', 'InvalidConstraint',
    'TileVariant', 'TileFamily', 'CompiledRule', 'SolverSettings',
    'CompiledRuleTable', 'compile_rules', 'load_rules', 'load_rule_spec',
    'WFCSolver', 'StepResult', 'SolverStatus',
    'validate_grid', 'validate_rule_table'
]
