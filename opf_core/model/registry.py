"""
Element type registry.

Maps an element's (namespace prefix, local name) pair to the entity class
that wraps it. Used to resolve references whose target type is only known
once the target element is found (``refines``).

Entity modules register their classes at import time with
``@register_type``; the table is not modified afterwards. Pairs that are
not registered (e.g. ``opf:collection``) resolve to None.
"""

from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar


T = TypeVar('T', bound=type)

_REGISTRY: Dict[Tuple[str, str], type] = {}


def register_type(prefix: str, name: str) -> Callable[[T], T]:
    """
    Class decorator registering an entity for a (prefix, local name) pair.

    Example:
        @register_type('dc', 'title')
        class Title(ValueMixin, Node):
            ...
    """
    def decorator(cls: T) -> T:
        key = (prefix, name)
        if key in _REGISTRY and _REGISTRY[key] is not cls:
            raise ValueError(f"Element type {prefix}:{name} already registered "
                             f"to {_REGISTRY[key].__name__}")
        _REGISTRY[key] = cls
        return cls
    return decorator


def lookup(prefix: Optional[str], name: str) -> Optional[Type]:
    """Get the entity class for (prefix, name), or None if unregistered."""
    if prefix is None:
        return None
    return _REGISTRY.get((prefix, name))


def registered_types() -> Mapping[Tuple[str, str], type]:
    """Read-only view of the registry."""
    return MappingProxyType(_REGISTRY)
