"""Spine: the default reading order."""

from typing import List, Optional
import logging

from opf_core.model.manifest import ManifestItem
from opf_core.model.node import Node, PropertiesListMixin
from opf_core.model.registry import register_type
from opf_core.xml.filters import (
    Criteria,
    all_properties_filter,
    any_properties_filter,
    id_filter,
    to_list,
)

logger = logging.getLogger(__name__)


def _resolve_manifest_item(context, idref: Optional[str]) -> Optional[ManifestItem]:
    if not idref:
        return None
    manifest = context.manifest()
    if manifest is None:
        return None
    items = manifest.item(id=idref)
    if not items:
        logger.debug(f"No manifest item with id '{idref}'")
        return None
    return items[0]


@register_type('opf', 'itemref')
class SpineItem(PropertiesListMixin, Node):
    FIELDS = ('idref', 'linear')

    def idref(self) -> Optional[ManifestItem]:
        """The referenced manifest item, or None if it doesn't exist."""
        return _resolve_manifest_item(self.context, self.read_attribute('./@idref'))

    def linear(self) -> bool:
        # Only an explicit "no" makes an itemref non-linear
        return self.read_attribute('./@linear') != 'no'


@register_type('opf', 'spine')
class Spine(Node):
    FIELDS = ('pageProgressionDirection', 'toc', 'itemref')

    def page_progression_direction(self) -> Optional[str]:
        return self.read_attribute('./@page-progression-direction')

    def toc(self) -> Optional[ManifestItem]:
        """The NCX manifest item referenced by @toc (EPUB 2)."""
        return _resolve_manifest_item(self.context, self.read_attribute('./@toc'))

    def itemref(self, id: Criteria = None, any_properties: Criteria = None,
                all_properties: Criteria = None, only_properties: Criteria = None,
                linear: Optional[bool] = None) -> List[SpineItem]:
        """
        Query spine itemrefs.

        Takes the same id and property filters as ``Manifest.item``; when
        ``linear`` is given, only itemrefs with that linearity are kept.

        Returns:
            Matching itemrefs in reading order (possibly empty)
        """
        if linear is not None:
            items = self.itemref(id=id, any_properties=any_properties,
                                 all_properties=all_properties,
                                 only_properties=only_properties)
            return [item for item in items if item.linear() == linear]

        if only_properties is not None:
            only_properties = to_list(only_properties)
            items = self.itemref(id=id, any_properties=any_properties,
                                 all_properties=only_properties)
            return [item for item in items
                    if len(item.properties() or []) == len(only_properties)]

        expression = (
            f"./opf:itemref{id_filter(id)}"
            f"{any_properties_filter(any_properties)}"
            f"{all_properties_filter(all_properties)}"
        )
        return self.read_many(expression, SpineItem)
