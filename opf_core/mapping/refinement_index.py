"""
Refinement Index
================

Pre-computed lookup of metadata refinements for one package document.

An EPUB 3 ``<meta refines="#creator01" property="role">aut</meta>`` element
adds information to the element whose id is ``creator01``. This module
scans the metadata block once and records every such element under
(target id, property) so that entities can look up their refinements
without re-walking the tree.

Multiple refinements for the same (id, property) pair are kept in document
order, e.g. several ``alternate-script`` titles.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional
import logging

from opf_core.xml.utils import XPATH_NAMESPACES, strip_fragment

logger = logging.getLogger(__name__)

# Every element under <metadata> that refines something with a property
REFINING_ELEMENTS_XPATH = './/*[@refines and @property]'


@dataclass
class RefinementStats:
    """Counters collected while building the index."""

    refining_elements: int = 0
    refined_ids: int = 0
    properties: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class RefinementIndex:
    """
    Maps target id -> property name -> ordered list of refining elements.

    The index is immutable once built; lookups never touch the tree.

    Example usage:
        index = RefinementIndex.build(metadata_element)
        role = index.resolve_one("creator01", "role")
        scripts = index.resolve_all("title01", "alternate-script")
    """

    def __init__(self):
        """Initialize empty index."""
        self._map: Dict[str, Dict[str, List[Any]]] = {}
        self.stats = RefinementStats()

    @classmethod
    def build(cls, metadata_element: Any) -> 'RefinementIndex':
        """
        Scan a <metadata> element and index all refining elements.

        Args:
            metadata_element: lxml element of the metadata block

        Returns:
            Populated RefinementIndex
        """
        index = cls()
        for element in metadata_element.xpath(REFINING_ELEMENTS_XPATH,
                                              namespaces=XPATH_NAMESPACES):
            index._add(element)

        index.stats.refined_ids = len(index._map)
        logger.debug(
            f"Built refinement index: {index.stats.refining_elements} refinements "
            f"for {index.stats.refined_ids} ids"
        )
        return index

    def _add(self, element: Any) -> None:
        refines = element.get('refines')
        prop = element.get('property')
        if not refines or not prop:
            return

        target_id = strip_fragment(refines)
        self._map.setdefault(target_id, {}).setdefault(prop, []).append(element)

        self.stats.refining_elements += 1
        self.stats.properties[prop] = self.stats.properties.get(prop, 0) + 1

    def resolve_one(self, target_id: Optional[str], prop: str) -> Optional[Any]:
        """
        Get the first refining element for (target_id, prop).

        Returns:
            lxml element, or None when there is no such refinement
        """
        elements = self.resolve_all(target_id, prop)
        if not elements:
            return None
        return elements[0]

    def resolve_all(self, target_id: Optional[str], prop: str) -> Optional[List[Any]]:
        """
        Get all refining elements for (target_id, prop) in document order.

        Returns:
            List of lxml elements, or None if the id has no refinements
            or none for this property
        """
        if target_id is None:
            return None

        properties = self._map.get(target_id)
        if properties is None:
            return None

        elements = properties.get(prop)
        if elements is None:
            return None

        return list(elements)

    def refined_ids(self) -> List[str]:
        """Ids that have at least one refinement, in first-seen order."""
        return list(self._map)

    def __contains__(self, target_id: str) -> bool:
        return target_id in self._map

    def __len__(self) -> int:
        return self.stats.refining_elements

    def export_mapping(self) -> dict:
        """Export index as plain data: {id: {property: [text, ...]}}."""
        return {
            target_id: {
                prop: [element.text for element in elements]
                for prop, elements in properties.items()
            }
            for target_id, properties in self._map.items()
        }

    def get_statistics(self) -> dict:
        """Get index statistics."""
        return self.stats.to_dict()
