"""
XML Utility Functions
=====================

Namespace constants and lxml helpers shared by the package-document model.
These functions work with lxml elements and provide consistent handling
of namespaces, token lists and document parsing.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Union
import logging

from lxml import etree

from opf_core.config.settings import ParserConfig
from opf_core.errors import PackageDocumentError

logger = logging.getLogger(__name__)


XML_NS = "http://www.w3.org/XML/1998/namespace"
OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"

NAMESPACES: Mapping[str, str] = MappingProxyType({
    'xml': XML_NS,
    'opf': OPF_NS,
    'dc': DC_NS,
})

# Inverse of NAMESPACES: {'http://www.idpf.org/2007/opf': 'opf', ...}
PREFIX_MAP: Mapping[str, str] = MappingProxyType({
    namespace: prefix for prefix, namespace in NAMESPACES.items()
})

# The xml prefix is always bound in XPath and must not be re-registered
XPATH_NAMESPACES = {
    prefix: namespace for prefix, namespace in NAMESPACES.items()
    if prefix != 'xml'
}


def local_name(element: Any) -> str:
    """
    Extract local name from element tag, stripping any namespace.

    Args:
        element: XML element

    Returns:
        Local tag name without namespace

    Example:
        >>> elem = etree.Element("{http://www.idpf.org/2007/opf}item")
        >>> local_name(elem)
        'item'
    """
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def namespace_prefix(element: Any) -> Optional[str]:
    """
    Get the registered prefix ('opf', 'dc', ...) for an element's namespace.

    Args:
        element: XML element

    Returns:
        Prefix from PREFIX_MAP, or None for unknown or missing namespaces
    """
    tag = element.tag
    if not isinstance(tag, str):
        return None
    namespace = etree.QName(tag).namespace
    if namespace is None:
        return None
    return PREFIX_MAP.get(namespace)


def qualified_name(element: Any) -> Optional[str]:
    """Return 'prefix:local' for registered namespaces, e.g. 'dc:title'."""
    prefix = namespace_prefix(element)
    if prefix is None:
        return None
    return f"{prefix}:{local_name(element)}"


def normalize_whitespace(text: str) -> str:
    """
    Normalize whitespace in text (collapse runs of whitespace, trim).

    Args:
        text: Input text

    Returns:
        Normalized text
    """
    if not text:
        return ""
    return ' '.join(text.split())


def split_tokens(value: Optional[str]) -> Optional[List[str]]:
    """
    Split a space separated attribute value (properties, rel) into tokens.

    Args:
        value: Raw attribute value

    Returns:
        List of tokens, or None when the attribute is absent or blank
    """
    normalized = normalize_whitespace(value or "")
    if not normalized:
        return None
    return normalized.split(' ')


def strip_fragment(reference: str) -> str:
    """Drop the leading '#' of an IDREF-style reference."""
    if reference.startswith('#'):
        return reference[1:]
    return reference


def make_parser(config: Optional[ParserConfig] = None) -> etree.XMLParser:
    """Build an lxml parser from parser configuration."""
    config = config or ParserConfig()
    return etree.XMLParser(
        recover=config.recover,
        remove_blank_text=config.remove_blank_text,
        resolve_entities=config.resolve_entities,
        no_network=config.no_network,
        huge_tree=config.huge_tree,
    )


def parse_package_document(source: Union[Path, str, bytes],
                           config: Optional[ParserConfig] = None) -> etree._ElementTree:
    """
    Parse a package document into an lxml ElementTree.

    Args:
        source: Path to an .opf file, or the document itself as str/bytes
        config: Parser options (defaults to strict parsing)

    Returns:
        Parsed ElementTree

    Raises:
        FileNotFoundError: If a path is given and doesn't exist
        etree.XMLSyntaxError: If the document is not well-formed
        PackageDocumentError: If a recovering parser salvaged nothing
    """
    parser = make_parser(config)

    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"Package document not found: {source}")
        logger.info(f"Parsing package document: {source}")
        return etree.parse(str(source), parser)

    if isinstance(source, str):
        source = source.encode('utf-8')
    root = etree.fromstring(source, parser)
    if root is None:
        # recovering parsers return None when nothing could be salvaged
        raise PackageDocumentError("Package document is empty")
    return root.getroottree()
