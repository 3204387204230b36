#!/usr/bin/env python3
"""
Package Document Query REST API

This module provides a FastAPI-based REST API over an EPUB package document
(OPF). It supports:

- Field-selection queries against the full package model
- Convenience endpoints for the package summary, manifest and spine
- Querying an inline document instead of the configured one

API Flow:
1. Configure the document: OPF_DOCUMENT_PATH=/path/to/content.opf
2. POST /api/v1/query with a selection, e.g.
   {"selection": {"releaseIdentifier": true, "metadata": {"title": {"value": true}}}}

The document is parsed once; every request gets its own Package, so lazily
built state (refinement index, metadata/manifest/spine) is never shared.

Usage:
    # Start the API server
    uvicorn api:app --host 0.0.0.0 --port 8000

    # Or programmatically
    from api import create_app
    app = create_app()
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from lxml import etree
from pydantic import BaseModel, Field

from opf_core import __version__
from opf_core.config.settings import ResolverConfig, get_default_config, load_config
from opf_core.errors import PackageDocumentError, QueryError
from opf_core.model import ManifestItem, Package, SpineItem, registered_types
from opf_core.query.resolver import execute_query
from opf_core.xml.utils import parse_package_document

logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION
# ============================================================================

class APIConfig:
    """API Configuration settings."""

    # Optional JSON/YAML config file (see opf_core.config)
    CONFIG_PATH: str = os.environ.get("OPF_CONFIG", "")

    # Package document served by default
    DOCUMENT_PATH: str = os.environ.get("OPF_DOCUMENT_PATH", "")

    HOST: str = os.environ.get("OPF_API_HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("OPF_API_PORT", "8000"))

    @classmethod
    def load(cls) -> ResolverConfig:
        """Build resolver configuration from the config file and environment."""
        if cls.CONFIG_PATH:
            config = load_config(Path(cls.CONFIG_PATH))
        else:
            config = get_default_config()

        if cls.DOCUMENT_PATH:
            config.server.document_path = cls.DOCUMENT_PATH
        if "OPF_API_HOST" in os.environ:
            config.server.host = cls.HOST
        if "OPF_API_PORT" in os.environ:
            config.server.port = cls.PORT

        if config.document_path is None:
            logger.warning("No package document configured; only inline queries will work")
        return config


# ============================================================================
# MODELS
# ============================================================================

class QueryRequest(BaseModel):
    """Field selection query."""
    selection: Dict[str, Any] = Field(..., description="Field selection rooted at the package")
    document: Optional[str] = Field(default=None, description="Inline OPF document to query instead of the configured one")


class QueryResponse(BaseModel):
    """Resolved query data."""
    data: Dict[str, Any]


class PackageSummary(BaseModel):
    """Package-level fields."""
    version: Optional[str] = None
    unique_identifier: Optional[str] = None
    release_identifier: Optional[str] = None
    modified: Optional[str] = None
    dir: Optional[str] = None
    lang: Optional[str] = None
    titles: List[str] = Field(default_factory=list)
    manifest_items: int = 0
    spine_items: int = 0


class ManifestItemInfo(BaseModel):
    """A manifest item."""
    id: Optional[str] = None
    href: Optional[str] = None
    media_type: Optional[str] = None
    properties: List[str] = Field(default_factory=list)
    fallback: Optional[str] = None
    media_overlay: Optional[str] = None


class SpineItemInfo(BaseModel):
    """A spine itemref."""
    id: Optional[str] = None
    idref: Optional[str] = None
    href: Optional[str] = None
    linear: bool = True
    properties: List[str] = Field(default_factory=list)


class HealthStatus(BaseModel):
    status: str
    document_loaded: bool


# ============================================================================
# DOCUMENT STORE
# ============================================================================

class DocumentStore:
    """
    Holds the parsed configured document.

    The tree is parsed on first use and read-only afterwards; loading is
    guarded so concurrent first requests parse it only once.
    """

    def __init__(self, config: ResolverConfig):
        self.config = config
        self._tree: Optional[etree._ElementTree] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._tree is not None

    def get(self) -> etree._ElementTree:
        if self._tree is not None:
            return self._tree

        with self._lock:
            if self._tree is None:
                path = self.config.document_path
                if path is None:
                    raise HTTPException(status_code=503, detail="No package document configured")
                try:
                    self._tree = parse_package_document(path, self.config.parser)
                except FileNotFoundError as e:
                    logger.error(f"Package document unavailable: {e}")
                    raise HTTPException(status_code=503, detail=str(e)) from e
                logger.info(f"Loaded package document: {path}")
        return self._tree

    def package(self) -> Package:
        """A fresh Package over the configured document."""
        try:
            return Package(self.get())
        except PackageDocumentError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e


# ============================================================================
# SERIALIZATION HELPERS
# ============================================================================

def _manifest_item_info(item: ManifestItem) -> ManifestItemInfo:
    fallback = item.fallback()
    media_overlay = item.media_overlay()
    return ManifestItemInfo(
        id=item.id(),
        href=item.href(),
        media_type=item.media_type(),
        properties=item.properties() or [],
        fallback=fallback.id() if fallback else None,
        media_overlay=media_overlay.id() if media_overlay else None,
    )


def _spine_item_info(itemref: SpineItem) -> SpineItemInfo:
    target = itemref.idref()
    return SpineItemInfo(
        id=itemref.id(),
        idref=itemref.read_attribute('./@idref'),
        href=target.href() if target else None,
        linear=itemref.linear(),
        properties=itemref.properties() or [],
    )


def _package_summary(package: Package) -> PackageSummary:
    metadata = package.metadata()
    manifest = package.manifest()
    spine = package.spine()

    unique_identifier = package.unique_identifier()
    modified = metadata.modified() if metadata else None

    return PackageSummary(
        version=package.version(),
        unique_identifier=unique_identifier.value() if unique_identifier else None,
        release_identifier=package.release_identifier(),
        modified=modified.value() if modified else None,
        dir=package.dir(),
        lang=package.lang(),
        titles=[title.value() for title in metadata.title() if title.value()] if metadata else [],
        manifest_items=len(manifest.item()) if manifest else 0,
        spine_items=len(spine.itemref()) if spine else 0,
    )


# ============================================================================
# API ENDPOINTS
# ============================================================================

def create_app(config: Optional[ResolverConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    config = config or APIConfig.load()
    store = DocumentStore(config)

    app = FastAPI(
        title="OPF Package Document API",
        description="""
Query API over an EPUB package document.

## Queries

`POST /api/v1/query` takes a field selection. Fields are camelCase; a
nested object selects sub-fields and may pass arguments under `__args`:

```json
{"selection": {"manifest": {"item": {"__args": {"allProperties": ["nav"]}, "href": true}}}}
```

Only the selected fields are evaluated.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # STATUS ENDPOINTS
    # ========================================================================

    @app.get("/api/v1/health", response_model=HealthStatus, tags=["Status"])
    def health():
        """Service health. Degraded when the configured document can't be loaded."""
        if config.document_path is None:
            return HealthStatus(status="healthy", document_loaded=False)
        try:
            store.get()
        except HTTPException:
            return HealthStatus(status="degraded", document_loaded=False)
        except etree.XMLSyntaxError as e:
            logger.error(f"Configured package document is malformed: {e}")
            return HealthStatus(status="degraded", document_loaded=False)
        return HealthStatus(status="healthy", document_loaded=True)

    @app.get("/api/v1/info", tags=["Status"])
    def info():
        """Service information."""
        return {
            "name": "opf-core",
            "version": __version__,
            "document_path": config.server.document_path or None,
            "registered_types": sorted(f"{prefix}:{name}" for prefix, name in registered_types()),
        }

    # ========================================================================
    # PACKAGE ENDPOINTS
    # ========================================================================

    def _configured_package() -> Package:
        try:
            return store.package()
        except etree.XMLSyntaxError as e:
            raise HTTPException(status_code=400, detail=f"Malformed package document: {e}") from e

    @app.get("/api/v1/package", response_model=PackageSummary, tags=["Package"])
    def get_package():
        """Summary of the configured package document."""
        return _package_summary(_configured_package())

    @app.get("/api/v1/manifest/items", response_model=List[ManifestItemInfo], tags=["Package"])
    def get_manifest_items(
        id: Optional[List[str]] = Query(default=None),
        href: Optional[List[str]] = Query(default=None),
        any_properties: Optional[List[str]] = Query(default=None, alias="anyProperties"),
        all_properties: Optional[List[str]] = Query(default=None, alias="allProperties"),
        only_properties: Optional[List[str]] = Query(default=None, alias="onlyProperties"),
    ):
        """Manifest items, filtered like the `item` query field."""
        manifest = _configured_package().manifest()
        if manifest is None:
            return []
        items = manifest.item(id=id, href=href, any_properties=any_properties,
                              all_properties=all_properties, only_properties=only_properties)
        return [_manifest_item_info(item) for item in items]

    @app.get("/api/v1/spine/itemrefs", response_model=List[SpineItemInfo], tags=["Package"])
    def get_spine_itemrefs(
        id: Optional[List[str]] = Query(default=None),
        any_properties: Optional[List[str]] = Query(default=None, alias="anyProperties"),
        all_properties: Optional[List[str]] = Query(default=None, alias="allProperties"),
        only_properties: Optional[List[str]] = Query(default=None, alias="onlyProperties"),
        linear: Optional[bool] = Query(default=None),
    ):
        """Spine itemrefs in reading order, filtered like the `itemref` query field."""
        spine = _configured_package().spine()
        if spine is None:
            return []
        itemrefs = spine.itemref(id=id, any_properties=any_properties,
                                 all_properties=all_properties,
                                 only_properties=only_properties, linear=linear)
        return [_spine_item_info(itemref) for itemref in itemrefs]

    # ========================================================================
    # QUERY ENDPOINT
    # ========================================================================

    @app.post("/api/v1/query", response_model=QueryResponse, tags=["Query"])
    def run_query(request: QueryRequest):
        """
        Resolve a field selection.

        Uses the inline `document` when given, otherwise the configured one.
        """
        try:
            if request.document is not None:
                document = parse_package_document(request.document, config.parser)
            else:
                document = store.get()
            data = execute_query(document, request.selection)
        except etree.XMLSyntaxError as e:
            raise HTTPException(status_code=400, detail=f"Malformed package document: {e}") from e
        except (PackageDocumentError, QueryError) as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return QueryResponse(data=data)

    return app


# Create default app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _config = APIConfig.load()
    logging.basicConfig(
        level=getattr(logging, _config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    uvicorn.run(app, host=_config.server.host, port=_config.server.port)
