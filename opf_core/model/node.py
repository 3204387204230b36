"""
Node wrapper and capability mixins.

Every entity of the package model wraps exactly one lxml element plus a
reference to the owning ``Package`` (the document context). The element's
tree belongs to whoever parsed it; entities only read from it.

Behaviour shared between entities is split into small mixins which each
entity combines as needed, e.g.::

    class Title(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
        ...

Each class lists the fields it exposes to the query surface in ``FIELDS``;
the exposed set of an entity is the union over its MRO.
"""

from typing import Any, List, Optional, Type, TypeVar
import logging

from opf_core.model import registry
from opf_core.xml.filters import xpath_literal
from opf_core.xml.utils import (
    XPATH_NAMESPACES,
    local_name,
    namespace_prefix,
    qualified_name,
    split_tokens,
    strip_fragment,
)

logger = logging.getLogger(__name__)

N = TypeVar('N', bound='Node')


class Node:
    """Base wrapper around one element of the package document."""

    FIELDS = ('__typename', 'id')

    def __init__(self, element: Any, context: Any):
        self.element = element
        self.context = context

    def __repr__(self) -> str:
        return f"<{self.typename} id={self.id()!r}>"

    @property
    def typename(self) -> str:
        return type(self).__name__

    def select(self, expression: str) -> Optional[Any]:
        """Evaluate an XPath relative to the element, return the first match."""
        results = self.select_all(expression)
        if not results:
            return None
        return results[0]

    def select_all(self, expression: str) -> List[Any]:
        """Evaluate an XPath relative to the element, return all matches."""
        return self.element.xpath(expression, namespaces=XPATH_NAMESPACES)

    def read_attribute(self, expression: str) -> Optional[str]:
        """
        Read a single attribute (or text) value.

        Args:
            expression: XPath selecting an attribute, e.g. './@href'

        Returns:
            The string value, or None when nothing matches
        """
        value = self.select(expression)
        if value is None:
            return None
        return str(value)

    def read_one(self, expression: str, cls: Type[N]) -> Optional[N]:
        """Wrap the first element matching ``expression`` in ``cls``."""
        element = self.select(expression)
        if element is None:
            return None
        return cls(element, self.context)

    def read_many(self, expression: str, cls: Type[N]) -> List[N]:
        """Wrap every element matching ``expression`` in ``cls``."""
        return [cls(element, self.context) for element in self.select_all(expression)]

    def id(self) -> Optional[str]:
        return self.read_attribute('./@id')


class ValueMixin:
    """Text content of the element."""

    FIELDS = ('value',)

    def value(self) -> Optional[str]:
        text = self.select('./text()')
        if text is None:
            return None
        return str(text)


class I18nMixin:
    """
    Text direction and language.

    Both fall back from the element to its parent and finally to the package
    element, so document-level values act as the default.
    """

    FIELDS = ('dir', 'lang')

    def dir(self) -> Optional[str]:
        return (
            self.read_attribute('./@dir')
            or self.read_attribute('../@dir')
            or self.context.read_attribute('./@dir')
        )

    def lang(self) -> Optional[str]:
        return (
            self.read_attribute('./@xml:lang')
            or self.read_attribute('../@xml:lang')
            or self.context.read_attribute('./@xml:lang')
        )


class ResourceMixin:
    """Publication resource reference (manifest items and links)."""

    FIELDS = ('href', 'mediaType')

    def href(self) -> Optional[str]:
        return self.read_attribute('./@href')

    def media_type(self) -> Optional[str]:
        return self.read_attribute('./@media-type')


class PropertiesListMixin:
    FIELDS = ('properties',)

    def properties(self) -> Optional[List[str]]:
        """Tokens of the space separated @properties attribute."""
        return split_tokens(self.read_attribute('./@properties'))


class RefinesMixin:
    """Follow @refines to the element it refines, whatever its type."""

    FIELDS = ('refines',)

    def refines(self) -> Optional['Node']:
        """
        Resolve the refined element.

        The target is looked up by id over the whole document, then wrapped
        in the entity class registered for its (prefix, local name).

        Returns:
            Wrapped entity, or None when @refines is absent, the id doesn't
            exist or the target element type is not registered
        """
        refines = self.read_attribute('./@refines')
        if not refines:
            return None

        target_id = strip_fragment(refines)
        element = self.context.select(f"//*[@id={xpath_literal(target_id)}]")
        if element is None:
            logger.debug(f"Unresolved refines reference: #{target_id}")
            return None

        cls = registry.lookup(namespace_prefix(element), local_name(element))
        if cls is None:
            logger.debug(f"No entity type registered for <{qualified_name(element) or element.tag}> "
                         f"(refined by #{target_id})")
            return None

        return cls(element, self.context)


class MetaAttributesMixin:
    FIELDS = ('property', 'scheme')

    def scheme(self) -> Optional[str]:
        return self.read_attribute('./@scheme')

    def property(self) -> Optional[str]:
        return self.read_attribute('./@property')


class MetaPropertiesMixin:
    """
    Refinements of this element, looked up in the metadata refinement index
    by the element's own id.
    """

    FIELDS = ('alternateScript', 'displaySeq', 'fileAs', 'groupPosition', 'metaAuth')

    def resolve_meta_property(self, prop: str, cls: Optional[type] = None):
        metadata = self.context.metadata()
        if metadata is None:
            return None
        return metadata.resolve_meta_property(self.id(), prop, cls)

    def resolve_meta_property_all(self, prop: str, cls: Optional[type] = None):
        metadata = self.context.metadata()
        if metadata is None:
            return None
        return metadata.resolve_meta_property_all(self.id(), prop, cls)

    def alternate_script(self):
        # may be repeated, once per script
        return self.resolve_meta_property_all('alternate-script')

    def display_seq(self):
        return self.resolve_meta_property('display-seq')

    def file_as(self):
        return self.resolve_meta_property('file-as')

    def group_position(self):
        return self.resolve_meta_property('group-position')

    def meta_auth(self):
        return self.resolve_meta_property('meta-auth')


def exposed_fields(cls: type) -> List[str]:
    """Fields an entity class exposes to the query surface (MRO order)."""
    fields: List[str] = []
    for klass in cls.__mro__:
        for name in klass.__dict__.get('FIELDS', ()):
            if name not in fields:
                fields.append(name)
    return fields
