#!/usr/bin/env python3
"""
Query an EPUB Package Document

Resolves fields of an OPF package document from the command line and prints
the result as JSON.

Usage:
    python query_opf.py <opf_file> [--query <json_file>] [--summary] [--refinements]

Examples:
    # Package summary (identifiers, titles, counts)
    python query_opf.py OEBPS/content.opf --summary

    # Run a field selection stored in a JSON file
    python query_opf.py OEBPS/content.opf --query selection.json

    # Dump the metadata refinement index
    python query_opf.py OEBPS/content.opf --refinements
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from lxml import etree

from opf_core.config.settings import ResolverConfig, get_default_config, load_config
from opf_core.errors import PackageDocumentError, QueryError
from opf_core.model import Package
from opf_core.query.resolver import execute_query
from opf_core.xml.utils import parse_package_document

logger = logging.getLogger(__name__)

SUMMARY_SELECTION: Dict[str, Any] = {
    "version": True,
    "uniqueIdentifier": {"value": True},
    "releaseIdentifier": True,
    "lang": True,
    "dir": True,
    "metadata": {
        "title": {"value": True, "lang": True},
        "creator": {"value": True, "role": {"value": True}, "fileAs": {"value": True}},
        "language": {"value": True},
        "modified": {"value": True},
    },
    "spine": {
        "pageProgressionDirection": True,
        "itemref": {"linear": True, "idref": {"href": True}},
    },
}


def refinement_report(package: Package) -> Dict[str, Any]:
    """Refinement index contents and statistics."""
    metadata = package.metadata()
    if metadata is None:
        return {"refinements": {}, "statistics": {}}
    return {
        "refinements": metadata.refinements.export_mapping(),
        "statistics": metadata.refinements.get_statistics(),
    }


def run(opf_path: Path, config: ResolverConfig, query_path: Optional[Path] = None,
        refinements: bool = False) -> Dict[str, Any]:
    """
    Load the document and resolve the requested output.

    Args:
        opf_path: Path to the package document
        config: Resolver configuration (parser options)
        query_path: JSON file holding a field selection
        refinements: Dump the refinement index instead of querying

    Returns:
        JSON-serializable result
    """
    tree = parse_package_document(opf_path, config.parser)

    if refinements:
        return refinement_report(Package(tree))

    if query_path is not None:
        with open(query_path, 'r', encoding='utf-8') as f:
            selection = json.load(f)
    else:
        selection = SUMMARY_SELECTION

    return execute_query(tree, selection)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Resolve fields of an EPUB package document (OPF) as JSON"
    )
    parser.add_argument("opf_file", type=Path, help="Path to the package document")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--query", type=Path, help="JSON file with a field selection")
    mode.add_argument("--summary", action="store_true", help="Print a package summary (default)")
    mode.add_argument("--refinements", action="store_true", help="Dump the refinement index")
    parser.add_argument("--config", type=Path, help="JSON/YAML resolver configuration")
    parser.add_argument("--log-level", default=None, help="Logging level (overrides config)")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else get_default_config()
    log_level = (args.log_level or config.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        result = run(args.opf_file, config, query_path=args.query,
                     refinements=args.refinements)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except etree.XMLSyntaxError as e:
        logger.error(f"Malformed package document: {e}")
        return 1
    except (PackageDocumentError, QueryError) as e:
        logger.error(str(e))
        return 2

    json.dump(result, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
