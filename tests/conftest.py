"""Shared pytest fixtures for camel-inspect tests."""

from __future__ import annotations

import copy
import stat
from pathlib import Path
from typing import Callable

import pytest
import yaml

from camel_inspect.catalog import Catalog
from camel_inspect.models.catalog import CamelCatalogSpec
from camel_inspect.settings import InspectSettings

CATALOG_SPEC = {
    "runtime": {
        "version": "1.9.0",
        "provider": "main",
        "applicationClass": "org.apache.camel.k.main.Application",
        "dependencies": [
            {"groupId": "org.apache.camel.k", "artifactId": "camel-k-runtime-main"},
        ],
        "capabilities": {
            "platform-http": {
                "dependencies": [
                    {"groupId": "org.apache.camel.k", "artifactId": "camel-k-runtime-http"},
                ]
            },
            "rest": {
                "dependencies": [
                    {"groupId": "org.apache.camel", "artifactId": "camel-rest"},
                    {"groupId": "org.apache.camel.k", "artifactId": "camel-k-runtime-http"},
                ]
            },
        },
    },
    "artifacts": {
        "camel-timer": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-timer",
            "schemes": [{"id": "timer"}],
        },
        "camel-log": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-log",
            "schemes": [{"id": "log"}],
        },
        "camel-platform-http": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-platform-http",
            "schemes": [{"id": "platform-http", "http": True}],
        },
        "camel-http": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-http",
            "schemes": [{"id": "http", "http": True}, {"id": "https", "http": True}],
            "dependencies": [{"groupId": "org.apache.camel", "artifactId": "camel-file"}],
            "exclusions": [{"groupId": "commons-logging", "artifactId": "commons-logging"}],
        },
        "camel-jackson": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-jackson",
            "dataformats": ["json-jackson"],
        },
        "camel-base64": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-base64",
            "dataformats": ["base64"],
        },
        "camel-jsonpath": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-jsonpath",
            "languages": ["jsonpath"],
        },
        "camel-groovy": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-groovy",
            "languages": ["groovy"],
        },
        "camel-resilience4j": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-resilience4j",
        },
        "camel-kafka": {
            "groupId": "org.apache.camel",
            "artifactId": "camel-kafka",
            "schemes": [{"id": "kafka"}],
            "javaTypes": ["org.apache.camel.component.kafka.KafkaConstants"],
        },
    },
    "loaders": {
        "yaml": {
            "groupId": "org.apache.camel.k",
            "artifactId": "camel-k-loader-yaml",
            "languages": ["yaml"],
            "dependencies": [
                {"groupId": "org.apache.camel", "artifactId": "camel-yaml-dsl"},
            ],
        },
    },
}


@pytest.fixture
def catalog_spec() -> dict:
    return copy.deepcopy(CATALOG_SPEC)


@pytest.fixture
def catalog(catalog_spec) -> Catalog:
    return Catalog(CamelCatalogSpec.model_validate(catalog_spec))


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_spec) -> Path:
    """A full CamelCatalog document on disk."""
    path = tmp_path / "catalog.yaml"
    document = {
        "apiVersion": "camel.apache.org/v1",
        "kind": "CamelCatalog",
        "metadata": {"name": "camel-catalog-1.9.0-main"},
        "spec": catalog_spec,
    }
    path.write_text(yaml.safe_dump(document))
    return path


@pytest.fixture
def artifact_repo(tmp_path: Path) -> dict[str, Path]:
    """Fake local Maven repository: artifact id -> jar path."""
    repo = tmp_path / "m2"
    jars = {
        "org.apache.camel:camel-timer:3.14.0": "org/apache/camel/camel-timer/3.14.0/camel-timer-3.14.0.jar",
        "org.apache.camel:camel-log:3.14.0": "org/apache/camel/camel-log/3.14.0/camel-log-3.14.0.jar",
        "org.apache.camel:camel-core-engine:3.14.0": "org/apache/camel/camel-core-engine/3.14.0/camel-core-engine-3.14.0.jar",
        "org.slf4j:slf4j-api:1.7.32": "org/slf4j/slf4j-api/1.7.32/slf4j-api-1.7.32.jar",
    }
    result: dict[str, Path] = {}
    for artifact_id, relative in jars.items():
        path = repo / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(f"PK\x03\x04 {artifact_id}".encode())
        result[artifact_id] = path
    return result


def dependency_listing(artifacts: dict[str, Path]) -> str:
    """The YAML camel-k-maven-plugin writes to target/dependencies.yaml."""
    return yaml.safe_dump(
        {
            "dependencies": [
                {"id": artifact_id, "location": str(path), "checksum": "sha1:0000"}
                for artifact_id, path in artifacts.items()
            ]
        }
    )


@pytest.fixture
def fake_maven(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an executable stand-in for ``mvn``.

    Each run appends its working directory to ``mvn-cwd.log`` and its
    arguments to ``mvn-args.log`` in tmp_path. With *listing* the script
    writes target/dependencies.yaml; with *catalog* it writes catalog.yaml.
    With *sleep* the script only sleeps.
    """

    def make(
        listing: str | None = None,
        catalog: str | None = None,
        returncode: int = 0,
        sleep: float = 0,
        stdout: str = "[INFO] BUILD SUCCESS",
    ) -> Path:
        lines = [
            "#!/bin/sh",
            f'pwd >> "{tmp_path / "mvn-cwd.log"}"',
            f'echo "$@" >> "{tmp_path / "mvn-args.log"}"',
        ]
        if sleep:
            lines.append(f"exec sleep {sleep}")
        if listing is not None:
            source = tmp_path / "listing.yaml"
            source.write_text(listing)
            lines.append("mkdir -p target")
            lines.append(f'cp "{source}" target/dependencies.yaml')
        if catalog is not None:
            source = tmp_path / "generated-catalog.yaml"
            source.write_text(catalog)
            lines.append(f'cp "{source}" catalog.yaml')
        lines.append(f"echo '{stdout}'")
        lines.append(f"exit {returncode}")

        script = tmp_path / "mvn"
        script.write_text("\n".join(lines) + "\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return make


@pytest.fixture
def maven_cwds(tmp_path: Path) -> Callable[[], list[Path]]:
    """Working directories the fake Maven ran in, in order."""

    def read() -> list[Path]:
        log = tmp_path / "mvn-cwd.log"
        if not log.exists():
            return []
        return [Path(line) for line in log.read_text().splitlines() if line]

    return read


def settings_for(maven_cmd: Path, **overrides) -> InspectSettings:
    values = {"maven_cmd": str(maven_cmd), "maven_timeout": 30.0}
    values.update(overrides)
    return InspectSettings(**values)


@pytest.fixture
def listing_for() -> Callable[[dict[str, Path]], str]:
    return dependency_listing


@pytest.fixture
def make_settings() -> Callable[..., InspectSettings]:
    return settings_for
