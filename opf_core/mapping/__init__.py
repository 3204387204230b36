"""
Refinement Mapping Module
=========================

Pre-computed (target id, property) -> refining element lookup.
"""

from opf_core.mapping.refinement_index import (
    RefinementIndex,
    RefinementStats,
)

__all__ = [
    "RefinementIndex",
    "RefinementStats",
]
