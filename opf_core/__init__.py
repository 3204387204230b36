"""
OPF Core Library
================

A package-document resolver for EPUB publications. It wraps a parsed OPF
package document in typed, cross-referencing objects which are evaluated
lazily, field by field:

- XML utilities and XPath filter builders
- Metadata refinement index (``refines`` lookups)
- Package model: metadata, manifest, spine, Dublin Core elements
- Field-selection query surface
- Configuration management

Architecture
------------

    opf_core/
    ├── xml/           - Namespaces, parsing, XPath filter builders
    ├── mapping/       - Refinement index
    ├── model/         - Package document entities and type registry
    ├── query/         - Field selection resolver
    └── config/        - Configuration management

Usage
-----

    from opf_core import Package, parse_package_document

    tree = parse_package_document(Path("OEBPS/content.opf"))
    package = Package(tree)

    package.release_identifier()
    for title in package.metadata().title():
        print(title.value(), title.lang())

    nav = package.manifest().item(all_properties="nav")

A Package holds no state beyond its own lazily built singletons, so create
one per request and share only the parsed tree.
"""

__version__ = "1.0.0"

from opf_core.errors import PackageDocumentError, QueryError

from opf_core.config.settings import (
    ResolverConfig,
    ParserConfig,
    ServerConfig,
    load_config,
    save_config,
)

from opf_core.xml.utils import (
    NAMESPACES,
    PREFIX_MAP,
    parse_package_document,
)

from opf_core.mapping.refinement_index import RefinementIndex

from opf_core.model import (
    Package,
    Metadata,
    Manifest,
    ManifestItem,
    Spine,
    SpineItem,
    Meta,
    Link,
)

from opf_core.query.resolver import execute_query, resolve_selection

__all__ = [
    # Version
    "__version__",
    # Errors
    "PackageDocumentError",
    "QueryError",
    # Config
    "ResolverConfig",
    "ParserConfig",
    "ServerConfig",
    "load_config",
    "save_config",
    # XML
    "NAMESPACES",
    "PREFIX_MAP",
    "parse_package_document",
    # Mapping
    "RefinementIndex",
    # Model
    "Package",
    "Metadata",
    "Manifest",
    "ManifestItem",
    "Spine",
    "SpineItem",
    "Meta",
    "Link",
    # Query
    "execute_query",
    "resolve_selection",
]
