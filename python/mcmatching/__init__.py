"""
Algorithm for finding a maximum cardinality matching in general graphs.
"""

__all__ = ["maximum_cardinality_matching",
           "find_maximum_matching",
           "augment",
           "Graph",
           "MatchingStats",
           "MatchingError",
           "EnumerableDisjointSet"]

from .algorithm import (maximum_cardinality_matching,
                        find_maximum_matching,
                        augment,
                        Graph,
                        MatchingStats,
                        MatchingError)
from .datastruct import EnumerableDisjointSet
