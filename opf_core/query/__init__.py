"""
Query Surface
=============

Field-by-field resolution of selections against the package model.
"""

from opf_core.query.resolver import (
    Selection,
    execute_query,
    resolve_field,
    resolve_selection,
    to_snake_case,
)

__all__ = [
    "Selection",
    "execute_query",
    "resolve_field",
    "resolve_selection",
    "to_snake_case",
]
