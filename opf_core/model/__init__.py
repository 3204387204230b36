"""
Package Document Model
======================

Typed, lazily evaluated wrappers over an OPF package document. Importing
this package registers every entity type with the element type registry.
"""

from opf_core.model.node import (
    Node,
    ValueMixin,
    I18nMixin,
    ResourceMixin,
    PropertiesListMixin,
    RefinesMixin,
    MetaAttributesMixin,
    MetaPropertiesMixin,
    exposed_fields,
)
from opf_core.model.metadata import (
    Metadata,
    Meta,
    BelongsToCollection,
    Link,
    Identifier,
    Title,
    Language,
    Contributor,
    Coverage,
    Creator,
    Date,
    Description,
    Format,
    Publisher,
    Relation,
    Rights,
    Source,
    Subject,
    Type,
)
from opf_core.model.manifest import Manifest, ManifestItem
from opf_core.model.spine import Spine, SpineItem
from opf_core.model.package import Package
from opf_core.model.registry import lookup, register_type, registered_types

__all__ = [
    "Node",
    "ValueMixin",
    "I18nMixin",
    "ResourceMixin",
    "PropertiesListMixin",
    "RefinesMixin",
    "MetaAttributesMixin",
    "MetaPropertiesMixin",
    "exposed_fields",
    "Package",
    "Metadata",
    "Manifest",
    "ManifestItem",
    "Spine",
    "SpineItem",
    "Meta",
    "BelongsToCollection",
    "Link",
    "Identifier",
    "Title",
    "Language",
    "Contributor",
    "Coverage",
    "Creator",
    "Date",
    "Description",
    "Format",
    "Publisher",
    "Relation",
    "Rights",
    "Source",
    "Subject",
    "Type",
    "lookup",
    "register_type",
    "registered_types",
]
