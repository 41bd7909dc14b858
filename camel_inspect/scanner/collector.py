"""Collector that turns DSL references into catalog dependency identifiers."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from camel_inspect.models.dependency import DependencyIdentifier, DependencySet

if TYPE_CHECKING:
    from camel_inspect.catalog import Catalog

logger = logging.getLogger(__name__)

CAPABILITY_PLATFORM_HTTP = "platform-http"
CAPABILITY_REST = "rest"

_CAMEL_CASE_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _dashed(name: str) -> str:
    """jacksonXml -> jackson-xml"""
    return _CAMEL_CASE_RE.sub(r"-\1", name).lower()


class DependencyCollector:
    """Accumulates the dependencies referenced by one source document.

    Every ``add_*`` method silently ignores references the catalog does not
    know about.
    """

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.dependencies = DependencySet()

    def add(self, dependency_id: str) -> None:
        self.dependencies.add(DependencyIdentifier.parse(dependency_id))

    def add_endpoint(self, uri: str, consumer: bool = False) -> None:
        """Add the component behind an endpoint URI such as ``timer:tick``."""
        scheme = uri.strip().split(":", 1)[0]
        artifact = self.catalog.get_artifact_by_scheme(scheme)
        if artifact is None:
            logger.debug("No catalog artifact for scheme %r", scheme)
            return
        self.add(artifact.dependency_id())

        if consumer:
            scheme_meta = self.catalog.get_scheme(scheme)
            if scheme_meta is not None and scheme_meta.http:
                self.add_capability(CAPABILITY_PLATFORM_HTTP)

    def add_language(self, language: str) -> None:
        for candidate in (language, language.lower(), _dashed(language)):
            artifact = self.catalog.get_artifact_by_language(candidate)
            if artifact is not None:
                self.add(artifact.dependency_id())
                return

    def add_dataformat(self, dataformat: str, library: str | None = None) -> None:
        candidates = [dataformat, dataformat.lower(), _dashed(dataformat)]
        if library:
            # json + Jackson -> json-jackson
            candidates.insert(0, f"{dataformat.lower()}-{library.lower()}")
        for candidate in candidates:
            artifact = self.catalog.get_artifact_by_dataformat(candidate)
            if artifact is not None:
                self.add(artifact.dependency_id())
                return

    def add_java_type(self, java_type: str) -> None:
        """Add the component shipping an imported class such as ``...kafka.KafkaConstants``."""
        artifact = self.catalog.get_artifact_by_java_type(java_type)
        if artifact is None:
            return
        self.add(artifact.dependency_id())

    def add_capability(self, capability: str) -> None:
        for dependency_id in self.catalog.capability_dependencies(capability):
            self.add(dependency_id)
