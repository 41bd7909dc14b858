"""Data models for Maven runs and resolved artifacts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MavenResult:
    """Captured output of one Maven invocation."""

    returncode: int
    stdout: str
    stderr: str
    duration: float  # seconds


@dataclass
class ResolvedArtifact:
    """One transitive dependency as listed by generate-dependency-list."""

    id: str  # e.g. org.apache.camel:camel-core:3.11.1
    location: str  # file inside the local Maven repository
    target: str  # destination inside the dependencies directory
    checksum: str | None = None  # e.g. "sha1:..."
