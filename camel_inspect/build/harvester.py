"""Artifact harvesting: parse the resolved listing and copy the jars out."""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog
import yaml

from camel_inspect.exceptions import ArtifactCopyError, BuildFailureError
from camel_inspect.models.build import ResolvedArtifact

log = structlog.get_logger("camel_inspect.harvester")


def parse_dependency_list(content: str, target_dir: str | Path) -> list[ResolvedArtifact]:
    """Turn the plugin's dependencies.yaml into artifacts bound for *target_dir*.

    The target file name is ``<groupId>.<original file name>`` so jars with
    the same name from different groups do not overwrite each other.

    Raises:
        BuildFailureError: the listing is not valid YAML or an entry lacks
            its id or location.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise BuildFailureError(f"Invalid dependency list: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict) or not isinstance(data.get("dependencies") or [], list):
        raise BuildFailureError("Dependency list must be a mapping with a 'dependencies' list")

    target_root = Path(target_dir)
    artifacts: list[ResolvedArtifact] = []
    for entry in data.get("dependencies") or []:
        if not isinstance(entry, dict) or not entry.get("id") or not entry.get("location"):
            raise BuildFailureError(f"Malformed dependency list entry: {entry!r}")
        artifact_id = str(entry["id"])
        location = str(entry["location"])
        group_id = artifact_id.split(":", 1)[0]
        artifacts.append(
            ResolvedArtifact(
                id=artifact_id,
                location=location,
                target=str(target_root / f"{group_id}.{Path(location).name}"),
                checksum=entry.get("checksum"),
            )
        )
    return artifacts


def copy_artifacts(artifacts: list[ResolvedArtifact]) -> list[str]:
    """Copy each artifact to its target, stopping at the first failure.

    Files copied before a failure are left in place.

    Raises:
        ArtifactCopyError: a source is missing or a target cannot be written.
    """
    copied: list[str] = []
    seen: set[str] = set()
    for artifact in artifacts:
        if artifact.target in seen:
            log.debug("harvest.duplicate_skipped", id=artifact.id, target=artifact.target)
            continue
        try:
            shutil.copyfile(artifact.location, artifact.target)
        except OSError as e:
            raise ArtifactCopyError(artifact.location, artifact.target, str(e)) from e
        seen.add(artifact.target)
        copied.append(artifact.target)
        log.debug("harvest.copied", id=artifact.id, target=artifact.target)
    return copied


def harvest(graph: str, target_dir: str | Path) -> list[str]:
    """Parse *graph* and copy every artifact into *target_dir* (created if needed)."""
    artifacts = parse_dependency_list(graph, target_dir)
    try:
        Path(target_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArtifactCopyError("", str(target_dir), str(e)) from e
    copied = copy_artifacts(artifacts)
    log.info("harvest.completed", count=len(copied), target_dir=str(target_dir))
    return copied
