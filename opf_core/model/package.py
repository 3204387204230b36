"""
Package document root.

A ``Package`` is the document context every other entity refers back to.
Create one per request; it memoizes its Metadata, Manifest and Spine so
repeated access returns the same objects (and the refinement index is built
only once).
"""

from typing import Any, List, Optional
import logging

from lxml import etree

from opf_core.errors import PackageDocumentError
from opf_core.model.manifest import Manifest
from opf_core.model.metadata import Identifier, Metadata
from opf_core.model.node import I18nMixin, Node
from opf_core.model.registry import register_type
from opf_core.model.spine import Spine
from opf_core.xml.utils import OPF_NS

logger = logging.getLogger(__name__)

PACKAGE_TAG = f"{{{OPF_NS}}}package"

# Marks a singleton that hasn't been looked up yet (None means "absent")
_UNRESOLVED: Any = object()


def _package_element(document: Any) -> Any:
    if isinstance(document, etree._ElementTree):
        element = document.getroot()
    else:
        element = document.getroottree().getroot()
        if element.tag != PACKAGE_TAG and document.tag == PACKAGE_TAG:
            element = document

    if element is None or element.tag != PACKAGE_TAG:
        tag = None if element is None else element.tag
        raise PackageDocumentError(f"Not an OPF package document (root element: {tag})")
    return element


@register_type('opf', 'package')
class Package(I18nMixin, Node):
    """
    Root of the package document.

    Args:
        document: Parsed ElementTree, or any element of the document
        context: Ignored; a package is always its own context. Accepted so
            the registry can construct packages like any other entity.
    """

    FIELDS = ('version', 'uniqueIdentifier', 'releaseIdentifier',
              'metadata', 'manifest', 'spine')

    def __init__(self, document: Any, context: Any = None):
        super().__init__(_package_element(document), None)
        self.context = self
        self._metadata: Optional[Metadata] = _UNRESOLVED
        self._manifest: Optional[Manifest] = _UNRESOLVED
        self._spine: Optional[Spine] = _UNRESOLVED

    def version(self) -> Optional[str]:
        return self.read_attribute('./@version')

    def metadata(self) -> Optional[Metadata]:
        if self._metadata is _UNRESOLVED:
            self._metadata = self.read_one('./opf:metadata', Metadata)
        return self._metadata

    def manifest(self) -> Optional[Manifest]:
        if self._manifest is _UNRESOLVED:
            self._manifest = self.read_one('./opf:manifest', Manifest)
        return self._manifest

    def spine(self) -> Optional[Spine]:
        if self._spine is _UNRESOLVED:
            self._spine = self.read_one('./opf:spine', Spine)
        return self._spine

    def unique_identifier(self) -> Optional[Identifier]:
        """The dc:identifier designated by @unique-identifier."""
        idref = self.read_attribute('./@unique-identifier')
        if not idref:
            return None
        metadata = self.metadata()
        if metadata is None:
            return None
        identifiers: List[Identifier] = metadata.identifier(id=idref)
        if not identifiers:
            logger.debug(f"unique-identifier '{idref}' matches no dc:identifier")
            return None
        return identifiers[0]

    def release_identifier(self) -> Optional[str]:
        """
        Release identifier: '<unique identifier>@<dcterms:modified>'.

        Returns:
            Composite string, or None if either part is missing
        """
        unique_identifier = self.unique_identifier()
        if unique_identifier is None:
            return None
        modified = self.metadata().modified()
        if modified is None:
            return None

        identifier_value = unique_identifier.value()
        modified_value = modified.value()
        if not identifier_value or not modified_value:
            return None
        return f"{identifier_value}@{modified_value}"
