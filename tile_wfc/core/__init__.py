from .transform import SIDES, get_opposite_side, rotate_side, source_side
from .rule_table import CompiledRuleTable
from .compiler import compile_rules, parse_families
from .wave import Wave
from .propagation import propagate
from .search import SearchController, SolverStatus, BacktrackFrame
from .solver import WFCSolver, StepResult
from .validation import validate_rule_table, validate_grid
from .rule_loader import load_rule_spec, load_rules

__all__ = [
    'SIDES', 'get_opposite_side', 'rotate_side', 'source_side',
    'CompiledRuleTable', 'compile_rules', 'parse_families',
    'Wave', 'propagate',
    'SearchController', 'SolverStatus', 'BacktrackFrame',
    'WFCSolver', 'StepResult',
    'validate_rule_table', 'validate_grid',
    'load_rule_spec', 'load_rules'
]
