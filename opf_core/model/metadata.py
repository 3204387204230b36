"""
Package metadata: Dublin Core elements, <meta> and <link>.

``Metadata`` owns the refinement index of the document, built once when the
metadata block is first wrapped. Every refinement lookup of every entity goes
through it.
"""

from typing import Any, List, Optional
import logging

from opf_core.mapping.refinement_index import RefinementIndex
from opf_core.model.node import (
    I18nMixin,
    MetaAttributesMixin,
    MetaPropertiesMixin,
    Node,
    PropertiesListMixin,
    RefinesMixin,
    ResourceMixin,
    ValueMixin,
)
from opf_core.model.registry import register_type
from opf_core.xml.filters import (
    Criteria,
    all_properties_filter,
    all_rel_filter,
    any_properties_filter,
    any_rel_filter,
    attribute_filter,
    id_filter,
    to_list,
)
from opf_core.xml.utils import split_tokens

logger = logging.getLogger(__name__)

MODIFIED_PROPERTY = 'dcterms:modified'
BELONGS_TO_COLLECTION_PROPERTY = 'belongs-to-collection'


@register_type('opf', 'meta')
class Meta(ValueMixin, I18nMixin, RefinesMixin, MetaAttributesMixin, MetaPropertiesMixin, Node):
    pass


class BelongsToCollection(Meta):
    """A ``belongs-to-collection`` meta, possibly nested in other collections."""

    FIELDS = ('identifier', 'collectionType', 'belongsToCollection')

    def identifier(self) -> Optional[Meta]:
        return self.resolve_meta_property('dcterms:identifier')

    def collection_type(self) -> Optional[Meta]:
        return self.resolve_meta_property('collection-type')

    def belongs_to_collection(self) -> Optional[List['BelongsToCollection']]:
        return self.resolve_meta_property_all(BELONGS_TO_COLLECTION_PROPERTY, BelongsToCollection)


@register_type('opf', 'link')
class Link(ResourceMixin, PropertiesListMixin, RefinesMixin, Node):
    FIELDS = ('rel',)

    def rel(self) -> Optional[List[str]]:
        return split_tokens(self.read_attribute('./@rel'))


# Dublin Core elements

@register_type('dc', 'identifier')
class Identifier(ValueMixin, MetaPropertiesMixin, Node):
    FIELDS = ('identifierType',)

    def identifier_type(self) -> Optional[Meta]:
        return self.resolve_meta_property('identifier-type')


@register_type('dc', 'title')
class Title(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    FIELDS = ('titleType',)

    def title_type(self) -> Optional[Meta]:
        return self.resolve_meta_property('title-type')


@register_type('dc', 'language')
class Language(ValueMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'contributor')
class Contributor(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    FIELDS = ('role',)

    def role(self) -> Optional[Meta]:
        return self.resolve_meta_property('role')


@register_type('dc', 'coverage')
class Coverage(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'creator')
class Creator(Contributor):
    pass


@register_type('dc', 'date')
class Date(ValueMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'description')
class Description(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'format')
class Format(ValueMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'publisher')
class Publisher(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'relation')
class Relation(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'rights')
class Rights(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    pass


@register_type('dc', 'source')
class Source(Identifier):
    FIELDS = ('sourceOf',)

    def source_of(self) -> Optional[Meta]:
        return self.resolve_meta_property('source-of')


@register_type('dc', 'subject')
class Subject(ValueMixin, I18nMixin, MetaPropertiesMixin, Node):
    FIELDS = ('authority', 'term')

    def authority(self) -> Optional[Meta]:
        return self.resolve_meta_property('authority')

    def term(self) -> Optional[Meta]:
        return self.resolve_meta_property('term')


@register_type('dc', 'type')
class Type(ValueMixin, MetaPropertiesMixin, Node):
    pass


@register_type('opf', 'metadata')
class Metadata(Node):
    """
    The <metadata> block.

    Dublin Core accessors take an optional ``id`` (one id or a list; any of
    them matches) and always return a list.
    """

    FIELDS = (
        'identifier', 'title', 'language', 'contributor', 'coverage',
        'creator', 'date', 'description', 'format', 'publisher', 'relation',
        'rights', 'source', 'subject', 'type', 'modified',
        'belongsToCollection', 'meta', 'link',
    )

    def __init__(self, element: Any, context: Any):
        super().__init__(element, context)
        self.refinements = RefinementIndex.build(element)

    def resolve_meta_property(self, target_id: Optional[str], prop: str,
                              cls: Optional[type] = None) -> Optional[Node]:
        """
        Wrap the first refinement of ``target_id`` with property ``prop``.

        Args:
            target_id: Id of the refined element
            prop: Refinement property, e.g. 'file-as'
            cls: Entity class to wrap with (default Meta)

        Returns:
            Wrapped refinement or None
        """
        element = self.refinements.resolve_one(target_id, prop)
        if element is None:
            return None
        return (cls or Meta)(element, self.context)

    def resolve_meta_property_all(self, target_id: Optional[str], prop: str,
                                  cls: Optional[type] = None) -> Optional[List[Node]]:
        """Like resolve_meta_property, but every refinement in document order."""
        elements = self.refinements.resolve_all(target_id, prop)
        if elements is None:
            return None
        return [(cls or Meta)(element, self.context) for element in elements]

    def identifier(self, id: Criteria = None) -> List[Identifier]:
        return self.read_many(f"./dc:identifier{id_filter(id)}", Identifier)

    def title(self, id: Criteria = None) -> List[Title]:
        return self.read_many(f"./dc:title{id_filter(id)}", Title)

    def language(self, id: Criteria = None) -> List[Language]:
        return self.read_many(f"./dc:language{id_filter(id)}", Language)

    def contributor(self, id: Criteria = None) -> List[Contributor]:
        return self.read_many(f"./dc:contributor{id_filter(id)}", Contributor)

    def coverage(self, id: Criteria = None) -> List[Coverage]:
        return self.read_many(f"./dc:coverage{id_filter(id)}", Coverage)

    def creator(self, id: Criteria = None) -> List[Creator]:
        return self.read_many(f"./dc:creator{id_filter(id)}", Creator)

    def date(self, id: Criteria = None) -> List[Date]:
        return self.read_many(f"./dc:date{id_filter(id)}", Date)

    def description(self, id: Criteria = None) -> List[Description]:
        return self.read_many(f"./dc:description{id_filter(id)}", Description)

    def format(self, id: Criteria = None) -> List[Format]:
        return self.read_many(f"./dc:format{id_filter(id)}", Format)

    def publisher(self, id: Criteria = None) -> List[Publisher]:
        return self.read_many(f"./dc:publisher{id_filter(id)}", Publisher)

    def relation(self, id: Criteria = None) -> List[Relation]:
        return self.read_many(f"./dc:relation{id_filter(id)}", Relation)

    def rights(self, id: Criteria = None) -> List[Rights]:
        return self.read_many(f"./dc:rights{id_filter(id)}", Rights)

    def source(self, id: Criteria = None) -> List[Source]:
        return self.read_many(f"./dc:source{id_filter(id)}", Source)

    def subject(self, id: Criteria = None) -> List[Subject]:
        return self.read_many(f"./dc:subject{id_filter(id)}", Subject)

    def type(self, id: Criteria = None) -> List[Type]:
        return self.read_many(f"./dc:type{id_filter(id)}", Type)

    def modified(self) -> Optional[Meta]:
        """The package's last modification date (a non-refining meta)."""
        return self.read_one(
            f"./opf:meta[@property='{MODIFIED_PROPERTY}' and not(@refines)]", Meta
        )

    def belongs_to_collection(self, id: Criteria = None) -> List[BelongsToCollection]:
        return self.read_many(
            f"./opf:meta{id_filter(id)}"
            f"[@property='{BELONGS_TO_COLLECTION_PROPERTY}' and not(@refines)]",
            BelongsToCollection,
        )

    def meta(self, id: Criteria = None, property: Criteria = None,
             refines: Optional[str] = None) -> List[Meta]:
        """
        Query <meta> elements.

        Args:
            id: Id or ids (any matches)
            property: Property value(s); all of them must match
            refines: Id of the refined element, without the '#'

        Returns:
            Matching Meta entities in document order
        """
        refines_value = f"#{refines}" if refines else None
        expression = (
            f"./opf:meta{id_filter(id)}"
            f"{attribute_filter('@property', property, 'and')}"
            f"{attribute_filter('@refines', refines_value)}"
        )
        return self.read_many(expression, Meta)

    def link(self, id: Criteria = None, href: Criteria = None,
             any_properties: Criteria = None, all_properties: Criteria = None,
             only_properties: Criteria = None, any_rel: Criteria = None,
             all_rel: Criteria = None, only_rel: Criteria = None) -> List[Link]:
        """
        Query <link> elements.

        The ``only_*`` filters run the matching ``all_*`` query and then keep
        links whose token count equals the number of requested tokens.
        Membership beyond the ``all_*`` match is not compared. An empty list
        keeps links without the attribute.

        Returns:
            Matching Link entities in document order
        """
        if only_properties is not None:
            only_properties = to_list(only_properties)
            links = self.link(id=id, href=href, any_properties=any_properties,
                              all_properties=only_properties, any_rel=any_rel,
                              all_rel=all_rel, only_rel=only_rel)
            return [link for link in links
                    if len(link.properties() or []) == len(only_properties)]

        if only_rel is not None:
            only_rel = to_list(only_rel)
            links = self.link(id=id, href=href, any_properties=any_properties,
                              all_properties=all_properties, any_rel=any_rel,
                              all_rel=only_rel)
            return [link for link in links if len(link.rel() or []) == len(only_rel)]

        expression = (
            f"./opf:link{id_filter(id)}"
            f"{attribute_filter('@href', href)}"
            f"{any_properties_filter(any_properties)}"
            f"{all_properties_filter(all_properties)}"
            f"{any_rel_filter(any_rel)}"
            f"{all_rel_filter(all_rel)}"
        )
        return self.read_many(expression, Link)
