from .variant import TileVariant
from .family import TileFamily
from .rule import CompiledRule
from .settings import SolverSettings

__all__ = ['TileVariant', 'TileFamily', 'CompiledRule', 'SolverSettings']
