"""Project synthesis — dependency identifiers → synthetic Maven project.

Each identifier type has an expansion rule:

    bom:g/a/v            -> <dependencyManagement> import (type=pom, scope=import)
    camel:X              -> org.apache.camel:camel-X
                            (quarkus runtime: org.apache.camel.quarkus:camel-quarkus-X)
    camel-k:X            -> org.apache.camel.k:camel-k-X
    camel-quarkus:X      -> org.apache.camel.quarkus:camel-quarkus-X
    mvn:g:a[:t[:c]]:v    -> literal coordinate ('/' accepted as separator)
    github:owner/repo[/v]-> com.github.owner:repo:v via JitPack (default master-SNAPSHOT)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

import structlog

from camel_inspect.constants import (
    CAMEL_GROUP_ID,
    CAMEL_K_GROUP_ID,
    CAMEL_QUARKUS_GROUP_ID,
    CATALOG_GENERATOR_ARTIFACT_ID,
    DEFAULT_PROJECT_VERSION,
    INTEGRATION_ARTIFACT_ID,
    INTEGRATION_GROUP_ID,
    JITPACK_DEFAULT_VERSION,
    JITPACK_REPOSITORY_URL,
    MAVEN_PLUGIN_ARTIFACT_ID,
    RUNTIME_BOM_ARTIFACT_ID,
    RUNTIME_PROVIDER_MAIN,
    RUNTIME_PROVIDER_QUARKUS,
)
from camel_inspect.exceptions import MalformedDependencyError, UnsupportedDependencyTypeError
from camel_inspect.models.catalog import MavenArtifact
from camel_inspect.models.dependency import DependencyIdentifier
from camel_inspect.models.maven import (
    MavenDependency,
    Plugin,
    PluginExecution,
    Project,
    Repository,
    parse_gav,
)

if TYPE_CHECKING:
    from camel_inspect.catalog import Catalog

log = structlog.get_logger("camel_inspect.project")


def _runtime_bom(runtime_version: str) -> MavenDependency:
    return MavenDependency(
        group_id=CAMEL_K_GROUP_ID,
        artifact_id=RUNTIME_BOM_ARTIFACT_ID,
        version=runtime_version,
        type="pom",
        scope="import",
    )


def base_project(runtime_version: str, project_version: str = DEFAULT_PROJECT_VERSION) -> Project:
    """Integration project with the Camel K runtime BOM imported."""
    project = Project(
        group_id=INTEGRATION_GROUP_ID,
        artifact_id=INTEGRATION_ARTIFACT_ID,
        version=project_version,
        runtime_version=runtime_version,
    )
    project.add_managed_dependency(_runtime_bom(runtime_version))
    return project


def generator_project(
    runtime_version: str,
    provider_dependencies: Iterable[MavenArtifact] = (),
    project_version: str = DEFAULT_PROJECT_VERSION,
) -> Project:
    """Project whose only job is running camel-k-maven-plugin:generate-catalog."""
    project = Project(
        group_id=INTEGRATION_GROUP_ID,
        artifact_id=CATALOG_GENERATOR_ARTIFACT_ID,
        version=project_version,
        runtime_version=runtime_version,
    )
    project.add_managed_dependency(_runtime_bom(runtime_version))
    project.plugins.append(
        Plugin(
            group_id=CAMEL_K_GROUP_ID,
            artifact_id=MAVEN_PLUGIN_ARTIFACT_ID,
            version=runtime_version,
            executions=[
                PluginExecution(
                    id="generate-catalog",
                    phase="generate-resources",
                    goals=["generate-catalog"],
                )
            ],
            dependencies=[
                MavenDependency(
                    group_id=d.group_id,
                    artifact_id=d.artifact_id,
                    version=d.version or "",
                )
                for d in provider_dependencies
            ],
        )
    )
    return project


# ── expansion rules ──────────────────────────────────────────────────────


def _parse_coordinate(dep: DependencyIdentifier, gav: str) -> MavenDependency:
    try:
        return parse_gav(gav.replace("/", ":"))
    except ValueError as e:
        raise MalformedDependencyError(str(dep), str(e)) from e


def _expand_bom(project: Project, dep: DependencyIdentifier, provider: str) -> None:
    managed = _parse_coordinate(dep, dep.name)
    if not managed.version:
        raise MalformedDependencyError(str(dep), "a BOM import needs groupId/artifactId/version")
    managed.type = "pom"
    managed.scope = "import"
    project.add_managed_dependency(managed)


def _expand_camel(project: Project, dep: DependencyIdentifier, provider: str) -> None:
    if provider == RUNTIME_PROVIDER_QUARKUS:
        project.add_dependency_gav(CAMEL_QUARKUS_GROUP_ID, f"camel-quarkus-{dep.name}")
    else:
        project.add_dependency_gav(CAMEL_GROUP_ID, f"camel-{dep.name}")


def _expand_prefixed(group_id: str, prefix: str) -> Callable[[Project, DependencyIdentifier, str], None]:
    def expand(project: Project, dep: DependencyIdentifier, provider: str) -> None:
        artifact_id = dep.name if dep.name.startswith(prefix) else prefix + dep.name
        project.add_dependency_gav(group_id, artifact_id)

    return expand


def _expand_mvn(project: Project, dep: DependencyIdentifier, provider: str) -> None:
    project.add_dependency(_parse_coordinate(dep, dep.name))


def _expand_github(project: Project, dep: DependencyIdentifier, provider: str) -> None:
    parts = dep.name.replace(":", "/").split("/")
    if len(parts) not in (2, 3) or not all(parts):
        raise MalformedDependencyError(str(dep), "expected github:<owner>/<repo>[/<version>]")
    owner, repo = parts[0], parts[1]
    version = parts[2] if len(parts) == 3 else JITPACK_DEFAULT_VERSION
    project.add_dependency_gav(f"com.github.{owner}", repo, version)
    project.add_repository(Repository(id="jitpack.io", url=JITPACK_REPOSITORY_URL))


EXPANSION_RULES: dict[str, Callable[[Project, DependencyIdentifier, str], None]] = {
    "bom": _expand_bom,
    "camel": _expand_camel,
    "camel-k": _expand_prefixed(CAMEL_K_GROUP_ID, "camel-k-"),
    "camel-quarkus": _expand_prefixed(CAMEL_QUARKUS_GROUP_ID, "camel-quarkus-"),
    "mvn": _expand_mvn,
    "github": _expand_github,
}


def _as_identifier(value: DependencyIdentifier | str) -> DependencyIdentifier:
    if isinstance(value, DependencyIdentifier):
        return value
    return DependencyIdentifier.parse(value)


def synthesize(
    ids: Iterable[DependencyIdentifier | str],
    runtime_version: str,
    catalog: Catalog | None = None,
    project_version: str = DEFAULT_PROJECT_VERSION,
) -> Project:
    """Build the integration project for *ids*.

    Fail-fast: the first unsupported or malformed identifier aborts the
    whole batch and no project is returned.

    Raises:
        UnsupportedDependencyTypeError: identifier type without a rule.
        MalformedDependencyError: unparsable coordinate for a known type.
    """
    provider = catalog.runtime_provider if catalog is not None else RUNTIME_PROVIDER_MAIN
    project = base_project(runtime_version, project_version)

    if catalog is not None:
        for runtime_dep in catalog.runtime_dependencies:
            project.add_dependency_gav(runtime_dep.group_id, runtime_dep.artifact_id)

    for value in ids:
        dep = _as_identifier(value)
        rule = EXPANSION_RULES.get(dep.type)
        if rule is None:
            raise UnsupportedDependencyTypeError(str(dep), dep.type)
        rule(project, dep, provider)

    if catalog is not None:
        _apply_catalog_metadata(project, catalog)

    log.debug(
        "project.synthesized",
        dependencies=len(project.dependencies),
        managed=len(project.dependency_management),
    )
    return project


def _apply_catalog_metadata(project: Project, catalog: Catalog) -> None:
    """Add the extra dependencies and exclusions the catalog declares for known artifacts."""
    for dependency in list(project.dependencies):
        artifact = catalog.get_artifact(dependency.group_id, dependency.artifact_id)
        if artifact is None:
            continue
        for extra in artifact.dependencies:
            project.add_dependency_gav(extra.group_id, extra.artifact_id, extra.version or "")
        for exclusion in artifact.exclusions:
            dependency.add_exclusion(exclusion.group_id, exclusion.artifact_id)
