"""
Field Selection Resolver
========================

Evaluates a nested field selection against the package model, the way a
schema-driven query layer would: only selected fields are computed, and
each field maps onto one entity method.

A selection is a dict of camelCase field names. ``True`` selects a scalar
(or an entity as its id); a dict selects sub-fields and may carry arguments
under ``"__args"``:

    {
        "version": True,
        "metadata": {
            "title": {
                "__args": {"id": "t1"},
                "value": True,
                "lang": True,
                "alternateScript": {"value": True, "lang": True},
            },
        },
        "manifest": {
            "item": {"__args": {"allProperties": ["nav"]}, "href": True},
        },
    }
"""

import inspect
import re
from typing import Any, Dict, Union
import logging

from opf_core.errors import QueryError
from opf_core.model.node import Node, exposed_fields
from opf_core.model.package import Package

logger = logging.getLogger(__name__)

ARGS_KEY = '__args'
TYPENAME_FIELD = '__typename'

Selection = Dict[str, Union[bool, dict]]

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])([A-Z])')


def to_snake_case(name: str) -> str:
    """'mediaType' -> 'media_type'."""
    return _CAMEL_BOUNDARY.sub(r'_\1', name).lower()


def resolve_field(entity: Node, field_name: str, args: Dict[str, Any] = None) -> Any:
    """
    Compute one field of an entity.

    Args:
        entity: Model entity
        field_name: camelCase field name from the entity's FIELDS
        args: camelCase keyword arguments for the field

    Returns:
        Raw field value (entity, list, scalar or None)

    Raises:
        QueryError: Unknown field or invalid arguments
    """
    if field_name not in exposed_fields(type(entity)):
        raise QueryError(f"Unknown field '{field_name}' on {entity.typename}")

    if field_name == TYPENAME_FIELD:
        return entity.typename

    method = getattr(entity, to_snake_case(field_name))
    kwargs = {to_snake_case(key): value for key, value in (args or {}).items()}
    try:
        inspect.signature(method).bind(**kwargs)
    except TypeError as e:
        raise QueryError(f"Invalid arguments for {entity.typename}.{field_name}: {e}") from e
    return method(**kwargs)


def _resolve_value(value: Any, selection: Union[bool, dict], path: str) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [_resolve_value(item, selection, path) for item in value]
    if isinstance(value, Node):
        if isinstance(selection, dict):
            return resolve_selection(value, selection, path)
        return value.id()
    if isinstance(selection, dict) and any(key != ARGS_KEY for key in selection):
        raise QueryError(f"Field '{path}' is a scalar and takes no sub-selection")
    return value


def resolve_selection(entity: Node, selection: Selection, path: str = '') -> Dict[str, Any]:
    """
    Resolve a selection against an entity.

    Args:
        entity: Model entity to start from
        selection: Field selection (see module docstring)
        path: Dotted path of the entity, used in error messages

    Returns:
        Dict mapping each selected field to its resolved value

    Raises:
        QueryError: Unknown fields, bad arguments or malformed selections
    """
    if not isinstance(selection, dict):
        raise QueryError(f"Selection for '{path or 'package'}' must be an object")

    result: Dict[str, Any] = {}
    for field_name, sub_selection in selection.items():
        if field_name == ARGS_KEY:
            continue
        field_path = f"{path}.{field_name}" if path else field_name

        args = None
        if isinstance(sub_selection, dict):
            args = sub_selection.get(ARGS_KEY)
            if args is not None and not isinstance(args, dict):
                raise QueryError(f"Arguments of '{field_path}' must be an object")
        elif sub_selection is not True:
            continue

        value = resolve_field(entity, field_name, args)
        result[field_name] = _resolve_value(value, sub_selection, field_path)

    return result


def execute_query(document: Any, selection: Selection) -> Dict[str, Any]:
    """
    Run a selection against a fresh Package for ``document``.

    Args:
        document: Parsed package document (ElementTree or element)
        selection: Field selection rooted at the package

    Returns:
        Resolved data
    """
    package = Package(document)
    logger.debug(f"Executing query with root fields: {list(selection)}")
    return resolve_selection(package, selection)
