"""Manifest of publication resources."""

from typing import List, Optional
import logging

from opf_core.model.node import Node, PropertiesListMixin, ResourceMixin
from opf_core.model.registry import register_type
from opf_core.xml.filters import (
    Criteria,
    all_properties_filter,
    any_properties_filter,
    attribute_filter,
    id_filter,
    to_list,
)

logger = logging.getLogger(__name__)


@register_type('opf', 'item')
class ManifestItem(ResourceMixin, PropertiesListMixin, Node):
    """
    One publication resource.

    ``fallback()`` and ``media_overlay()`` follow id references within the
    manifest. Chains are not checked for cycles; callers walking them
    repeatedly must stop on their own.
    """

    FIELDS = ('mediaOverlay', 'fallback')

    def _manifest_item(self, attribute: str) -> Optional['ManifestItem']:
        idref = self.read_attribute(f'./@{attribute}')
        if not idref:
            return None
        manifest = self.context.manifest()
        if manifest is None:
            return None
        items = manifest.item(id=idref)
        if not items:
            logger.debug(f"Unresolved {attribute} reference '{idref}' on item {self.id()!r}")
            return None
        return items[0]

    def media_overlay(self) -> Optional['ManifestItem']:
        return self._manifest_item('media-overlay')

    def fallback(self) -> Optional['ManifestItem']:
        return self._manifest_item('fallback')


@register_type('opf', 'manifest')
class Manifest(Node):
    FIELDS = ('item',)

    def item(self, id: Criteria = None, href: Criteria = None,
             any_properties: Criteria = None, all_properties: Criteria = None,
             only_properties: Criteria = None) -> List[ManifestItem]:
        """
        Query manifest items.

        Args:
            id: Id or ids (any matches)
            href: Href or hrefs (any matches)
            any_properties: Items having at least one of these property tokens
            all_properties: Items having all of these property tokens
            only_properties: Items having all of these tokens and exactly as
                many tokens as given (a count check, not a set comparison);
                an empty list keeps items without @properties

        Returns:
            Matching items in document order (possibly empty)
        """
        if only_properties is not None:
            only_properties = to_list(only_properties)
            items = self.item(id=id, href=href, any_properties=any_properties,
                              all_properties=only_properties)
            return [item for item in items
                    if len(item.properties() or []) == len(only_properties)]

        expression = (
            f"./opf:item{id_filter(id)}"
            f"{attribute_filter('@href', href)}"
            f"{any_properties_filter(any_properties)}"
            f"{all_properties_filter(all_properties)}"
        )
        return self.read_many(expression, ManifestItem)
