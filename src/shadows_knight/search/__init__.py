"""Search window bookkeeping and decision strategies."""

from .state import SearchState
from .strategy import BinarySearchStrategy, Strategy, create_strategy

__all__ = ["BinarySearchStrategy", "SearchState", "Strategy", "create_strategy"]
