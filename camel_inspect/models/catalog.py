"""CamelCatalog document schema.

The Maven plugin emits the catalog as YAML with camelCase keys; these models
accept both the camelCase aliases and the snake_case field names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from camel_inspect.constants import (
    CAMEL_GROUP_ID,
    CAMEL_K_GROUP_ID,
    CAMEL_QUARKUS_GROUP_ID,
    RUNTIME_PROVIDER_MAIN,
)


class _CatalogModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class MavenArtifact(_CatalogModel):
    group_id: str
    artifact_id: str
    version: str | None = None

    def dependency_id(self) -> str:
        """Short dependency identifier following the Camel naming convention."""
        for group_id, prefix, dep_type in (
            (CAMEL_GROUP_ID, "camel-", "camel"),
            (CAMEL_QUARKUS_GROUP_ID, "camel-quarkus-", "camel-quarkus"),
            (CAMEL_K_GROUP_ID, "camel-k-", "camel-k"),
        ):
            if self.group_id == group_id and self.artifact_id.startswith(prefix):
                return f"{dep_type}:{self.artifact_id[len(prefix):]}"
        if self.version:
            return f"mvn:{self.group_id}:{self.artifact_id}:{self.version}"
        return f"mvn:{self.group_id}:{self.artifact_id}"


class CamelScheme(_CatalogModel):
    id: str
    passive: bool = False
    http: bool = False


class CamelArtifact(MavenArtifact):
    schemes: list[CamelScheme] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    dataformats: list[str] = Field(default_factory=list)
    dependencies: list[MavenArtifact] = Field(default_factory=list)
    exclusions: list[MavenArtifact] = Field(default_factory=list)
    java_types: list[str] = Field(default_factory=list)


class CamelLoader(MavenArtifact):
    languages: list[str] = Field(default_factory=list)
    dependencies: list[MavenArtifact] = Field(default_factory=list)


class Capability(_CatalogModel):
    dependencies: list[MavenArtifact] = Field(default_factory=list)


class RuntimeSpec(_CatalogModel):
    version: str
    provider: str = RUNTIME_PROVIDER_MAIN
    application_class: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    dependencies: list[MavenArtifact] = Field(default_factory=list)
    capabilities: dict[str, Capability] = Field(default_factory=dict)


class CamelCatalogSpec(_CatalogModel):
    runtime: RuntimeSpec
    artifacts: dict[str, CamelArtifact] = Field(default_factory=dict)
    loaders: dict[str, CamelLoader] = Field(default_factory=dict)


class CamelCatalogDocument(_CatalogModel):
    api_version: str = "camel.apache.org/v1"
    kind: str = "CamelCatalog"
    metadata: dict[str, Any] = Field(default_factory=dict)
    spec: CamelCatalogSpec
