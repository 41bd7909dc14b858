"""Source scanning: extract top-level dependencies from integration sources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

# Ensure inspectors are registered before any scan runs.
import camel_inspect.scanner.inspectors  # noqa: F401
from camel_inspect.models.dependency import DependencySet
from camel_inspect.models.source import SourceDocument
from camel_inspect.scanner.collector import DependencyCollector
from camel_inspect.scanner.registry import inspector_for

if TYPE_CHECKING:
    from camel_inspect.catalog import Catalog

logger = logging.getLogger(__name__)


def scan(doc: SourceDocument, catalog: Catalog) -> DependencySet:
    """Return every dependency *doc* references explicitly.

    Pure: the document and the catalog are only read. Sources in an
    unknown language contribute nothing; compressed content that cannot be
    decoded contributes only the language loader.
    """
    language = doc.language
    inspector = inspector_for(language)
    if inspector is None:
        logger.debug("No inspector for %s (language=%s)", doc.name, language)
        return DependencySet()

    collector = DependencyCollector(catalog)

    loader = catalog.get_loader(language)
    if loader is not None:
        collector.add(loader.dependency_id())
        for dep in loader.dependencies:
            collector.add(dep.dependency_id())

    try:
        content = doc.text()
    except ValueError as e:
        logger.warning("Skipping undecodable source %s: %s", doc.name, e)
        return collector.dependencies

    inspector.inspect(content, collector)
    logger.debug(
        "Scanned %s with %s: %d dependencies",
        doc.name,
        inspector.name,
        len(collector.dependencies),
    )
    return collector.dependencies


def scan_all(docs: list[SourceDocument], catalog: Catalog) -> DependencySet:
    """Union of ``scan`` over *docs*."""
    result = DependencySet()
    for doc in docs:
        result = result | scan(doc, catalog)
    return result
