"""Transitive dependency resolution through camel-k-maven-plugin."""

from __future__ import annotations

import structlog

from camel_inspect.build.maven import MavenContext, run_maven, workspace
from camel_inspect.constants import CAMEL_K_GROUP_ID, DEPENDENCY_LIST_PATH, MAVEN_PLUGIN_ARTIFACT_ID
from camel_inspect.exceptions import BuildFailureError
from camel_inspect.models.maven import Project
from camel_inspect.settings import InspectSettings

log = structlog.get_logger("camel_inspect.resolver")


def dependency_list_goal(runtime_version: str) -> str:
    return f"{CAMEL_K_GROUP_ID}:{MAVEN_PLUGIN_ARTIFACT_ID}:{runtime_version}:generate-dependency-list"


def resolve(project: Project, settings: InspectSettings) -> str:
    """Compute the transitive closure of *project* and return the raw listing.

    Maven runs in a fresh workspace that is removed before this function
    returns or raises. The listing is the YAML the plugin writes to
    ``target/dependencies.yaml``: ``{dependencies: [{id, location, checksum}]}``.

    Raises:
        BuildFailureError: Maven failed, timed out, or wrote no listing.
    """
    with workspace(prefix="maven-") as path:
        ctx = MavenContext.from_settings(path, project, settings)
        ctx.add_arguments(dependency_list_goal(project.runtime_version))
        result = run_maven(ctx)

        listing = path / DEPENDENCY_LIST_PATH
        if not listing.is_file():
            raise BuildFailureError(
                f"Maven completed but {DEPENDENCY_LIST_PATH} was not produced",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        try:
            content = listing.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise BuildFailureError(
                f"Cannot read {DEPENDENCY_LIST_PATH}: {e}",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            ) from e

    log.info("resolver.resolved", duration=result.duration, bytes=len(content))
    return content
