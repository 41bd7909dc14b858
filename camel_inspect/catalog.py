"""Runtime catalog: lookup indexes, loading, generation, and the cached provider."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Iterable

import structlog
import yaml
from pydantic import ValidationError

from camel_inspect.build.maven import MavenContext, run_maven, workspace
from camel_inspect.build.project import generator_project
from camel_inspect.constants import CATALOG_FILE_NAME
from camel_inspect.exceptions import BuildFailureError, CatalogUnavailableError
from camel_inspect.models.catalog import (
    CamelArtifact,
    CamelCatalogDocument,
    CamelCatalogSpec,
    CamelLoader,
    CamelScheme,
    MavenArtifact,
)
from camel_inspect.settings import InspectSettings

log = structlog.get_logger("camel_inspect.catalog")


class Catalog:
    """Read-only view over a CamelCatalog spec with lookup indexes.

    When several artifacts declare the same scheme, language, data format or Java type,
    the one whose catalog key sorts first wins.
    """

    def __init__(self, spec: CamelCatalogSpec) -> None:
        self._spec = spec
        self._artifact_by_scheme: dict[str, CamelArtifact] = {}
        self._scheme_by_id: dict[str, CamelScheme] = {}
        self._artifact_by_language: dict[str, CamelArtifact] = {}
        self._artifact_by_dataformat: dict[str, CamelArtifact] = {}
        self._artifact_by_ga: dict[tuple[str, str], CamelArtifact] = {}
        self._artifact_by_java_type: dict[str, CamelArtifact] = {}

        for key in sorted(spec.artifacts):
            artifact = spec.artifacts[key]
            self._artifact_by_ga.setdefault((artifact.group_id, artifact.artifact_id), artifact)
            for scheme in artifact.schemes:
                self._artifact_by_scheme.setdefault(scheme.id, artifact)
                self._scheme_by_id.setdefault(scheme.id, scheme)
            for language in artifact.languages:
                self._artifact_by_language.setdefault(language, artifact)
            for dataformat in artifact.dataformats:
                self._artifact_by_dataformat.setdefault(dataformat, artifact)
            for java_type in artifact.java_types:
                self._artifact_by_java_type.setdefault(java_type, artifact)

    @property
    def spec(self) -> CamelCatalogSpec:
        return self._spec

    @property
    def runtime_version(self) -> str:
        return self._spec.runtime.version

    @property
    def runtime_provider(self) -> str:
        return self._spec.runtime.provider

    @property
    def runtime_dependencies(self) -> list[MavenArtifact]:
        return list(self._spec.runtime.dependencies)

    @property
    def languages(self) -> frozenset[str]:
        return frozenset(self._artifact_by_language)

    @property
    def dataformats(self) -> frozenset[str]:
        return frozenset(self._artifact_by_dataformat)

    def get_artifact_by_scheme(self, scheme: str) -> CamelArtifact | None:
        return self._artifact_by_scheme.get(scheme)

    def get_scheme(self, scheme: str) -> CamelScheme | None:
        return self._scheme_by_id.get(scheme)

    def get_artifact_by_language(self, language: str) -> CamelArtifact | None:
        return self._artifact_by_language.get(language)

    def get_artifact_by_dataformat(self, dataformat: str) -> CamelArtifact | None:
        return self._artifact_by_dataformat.get(dataformat)

    def get_artifact_by_java_type(self, java_type: str) -> CamelArtifact | None:
        return self._artifact_by_java_type.get(java_type)

    def get_artifact(self, group_id: str, artifact_id: str) -> CamelArtifact | None:
        return self._artifact_by_ga.get((group_id, artifact_id))

    def get_loader(self, language: str) -> CamelLoader | None:
        return self._spec.loaders.get(language)

    def capability_dependencies(self, capability: str) -> list[str]:
        """Dependency identifiers required by a runtime capability ([] if unknown)."""
        cap = self._spec.runtime.capabilities.get(capability)
        if cap is None:
            return []
        return [d.dependency_id() for d in cap.dependencies]

    def to_yaml(self) -> str:
        doc = CamelCatalogDocument(spec=self._spec)
        return yaml.safe_dump(
            doc.model_dump(by_alias=True, exclude_none=True), sort_keys=False
        )


def parse_catalog(content: str, source: str = "<string>") -> Catalog:
    """Parse catalog YAML, either a full CamelCatalog document or a bare spec.

    Raises:
        CatalogUnavailableError: invalid YAML or a document that fails validation.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise CatalogUnavailableError(f"Invalid catalog YAML in {source}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogUnavailableError(f"Catalog {source} must contain a YAML mapping")

    try:
        if "spec" in data:
            spec = CamelCatalogDocument.model_validate(data).spec
        else:
            spec = CamelCatalogSpec.model_validate(data)
    except ValidationError as e:
        raise CatalogUnavailableError(f"Invalid catalog {source}: {e}") from e

    return Catalog(spec)


def load_catalog(path: str | Path) -> Catalog:
    """Load a previously generated catalog file."""
    p = Path(path)
    try:
        content = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogUnavailableError(f"Cannot read catalog {p}: {e}") from e
    return parse_catalog(content, source=str(p))


def generate_catalog(
    settings: InspectSettings,
    provider_dependencies: Iterable[MavenArtifact] = (),
) -> Catalog:
    """Generate the catalog for the configured runtime by running Maven.

    The generator project binds camel-k-maven-plugin:generate-catalog to the
    generate-resources phase; the plugin writes catalog.yaml into the
    workspace, which is read before the workspace is removed.
    """
    project = generator_project(
        settings.runtime_version,
        provider_dependencies,
        project_version=settings.project_version,
    )
    log.info(
        "catalog.generate",
        runtime_version=settings.runtime_version,
        provider=settings.runtime_provider,
    )
    with workspace(prefix="camel-catalog-") as path:
        try:
            ctx = MavenContext.from_settings(path, project, settings)
            ctx.add_system_property("catalog.path", str(path))
            ctx.add_system_property("catalog.file", CATALOG_FILE_NAME)
            ctx.add_system_property("catalog.runtime", settings.runtime_provider)
            ctx.add_arguments("generate-resources")
            run_maven(ctx)
        except BuildFailureError as e:
            raise CatalogUnavailableError(f"Catalog generation failed: {e}") from e

        catalog_file = path / CATALOG_FILE_NAME
        if not catalog_file.is_file():
            raise CatalogUnavailableError(
                f"Catalog generation did not produce {CATALOG_FILE_NAME}"
            )
        try:
            content = catalog_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogUnavailableError(f"Cannot read generated {CATALOG_FILE_NAME}: {e}") from e
        return parse_catalog(content, source=CATALOG_FILE_NAME)


class CatalogProvider:
    """Builds the catalog at most once and hands out the cached instance.

    Created by the caller and passed to whatever needs a catalog. The first
    ``get()`` loads ``settings.catalog_path`` when set, otherwise generates
    the catalog; concurrent first calls wait on a lock and share the result.
    A failed build is not cached, so a later call tries again.
    """

    def __init__(
        self,
        settings: InspectSettings,
        generator: Callable[[InspectSettings], Catalog] = generate_catalog,
    ) -> None:
        self._settings = settings
        self._generator = generator
        self._catalog: Catalog | None = None
        self._lock = threading.Lock()

    @property
    def cached(self) -> bool:
        return self._catalog is not None

    def get(self) -> Catalog:
        catalog = self._catalog
        if catalog is not None:
            return catalog
        with self._lock:
            if self._catalog is None:
                self._catalog = self._build()
            return self._catalog

    def _build(self) -> Catalog:
        if self._settings.catalog_path:
            log.info("catalog.load", path=self._settings.catalog_path)
            catalog = load_catalog(self._settings.catalog_path)
        else:
            catalog = self._generator(self._settings)

        if catalog.runtime_version != self._settings.runtime_version:
            log.warning(
                "catalog.version_mismatch",
                catalog_version=catalog.runtime_version,
                requested_version=self._settings.runtime_version,
            )
        return catalog
