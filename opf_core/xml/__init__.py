"""
XML Processing Utilities
========================

Namespace constants, parsing and XPath filter helpers used by the
package-document model.
"""

from opf_core.xml.utils import (
    XML_NS,
    OPF_NS,
    DC_NS,
    NAMESPACES,
    PREFIX_MAP,
    XPATH_NAMESPACES,
    local_name,
    namespace_prefix,
    qualified_name,
    normalize_whitespace,
    split_tokens,
    strip_fragment,
    make_parser,
    parse_package_document,
)
from opf_core.xml.filters import (
    to_list,
    xpath_literal,
    attribute_filter,
    attribute_contains_word_filter,
    id_filter,
    any_properties_filter,
    all_properties_filter,
    any_rel_filter,
    all_rel_filter,
)

__all__ = [
    "XML_NS",
    "OPF_NS",
    "DC_NS",
    "NAMESPACES",
    "PREFIX_MAP",
    "XPATH_NAMESPACES",
    "local_name",
    "namespace_prefix",
    "qualified_name",
    "normalize_whitespace",
    "split_tokens",
    "strip_fragment",
    "make_parser",
    "parse_package_document",
    "to_list",
    "xpath_literal",
    "attribute_filter",
    "attribute_contains_word_filter",
    "id_filter",
    "any_properties_filter",
    "all_properties_filter",
    "any_rel_filter",
    "all_rel_filter",
]
