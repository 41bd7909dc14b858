"""Maven invocation inside an ephemeral workspace.

The workspace holds the synthesized pom.xml (plus settings.xml when Maven
settings are configured) and Maven's own working state; it is removed when
the enclosing ``workspace()`` block exits, whatever the outcome.
"""

from __future__ import annotations

import os
import subprocess
import tempfile
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

import structlog

from camel_inspect.exceptions import BuildFailureError
from camel_inspect.models.build import MavenResult
from camel_inspect.models.maven import Project
from camel_inspect.settings import InspectSettings

log = structlog.get_logger("camel_inspect.maven")

# How much captured output goes into an exception message
_DIAGNOSTIC_TAIL = 2000


@contextmanager
def workspace(prefix: str = "maven-") -> Iterator[Path]:
    """Yield a fresh, uniquely named directory and remove it on exit."""
    with tempfile.TemporaryDirectory(prefix=prefix) as tmpdir:
        log.debug("maven.workspace_created", path=tmpdir)
        try:
            yield Path(tmpdir)
        finally:
            log.debug("maven.workspace_removed", path=tmpdir)


@dataclass
class MavenContext:
    """Everything needed to run Maven once against a synthesized project."""

    path: Path
    project: Project
    maven_cmd: str = "mvn"
    timeout: float = 300.0
    local_repository: str | None = None
    settings_content: str | None = None
    system_properties: dict[str, str] = field(default_factory=dict)
    arguments: list[str] = field(default_factory=list)

    @classmethod
    def from_settings(cls, path: Path, project: Project, settings: InspectSettings) -> MavenContext:
        try:
            settings_content = settings.maven_settings_content()
        except (OSError, UnicodeDecodeError) as e:
            raise BuildFailureError(
                f"Cannot read Maven settings {settings.maven_settings_path}: {e}"
            ) from e
        return cls(
            path=path,
            project=project,
            maven_cmd=settings.maven_cmd,
            timeout=settings.maven_timeout,
            local_repository=settings.local_repository,
            settings_content=settings_content,
        )

    def add_system_property(self, key: str, value: str) -> None:
        self.system_properties[key] = value

    def add_arguments(self, *args: str) -> None:
        self.arguments.extend(args)

    def build_command(self) -> list[str]:
        cmd = [self.maven_cmd, "--batch-mode"]
        if self.local_repository:
            if os.path.isdir(self.local_repository):
                cmd.append(f"-Dmaven.repo.local={self.local_repository}")
            else:
                log.warning(
                    "maven.local_repository_missing",
                    local_repository=self.local_repository,
                )
        if self.settings_content is not None:
            cmd.extend(["--settings", str(self.path / "settings.xml")])
        for key, value in sorted(self.system_properties.items()):
            cmd.append(f"-D{key}={value}")
        cmd.extend(self.arguments)
        return cmd


def _to_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def generate_project_structure(ctx: MavenContext) -> None:
    """Write pom.xml (and settings.xml) into the context directory.

    Raises:
        BuildFailureError: the project files could not be written.
    """
    try:
        ctx.path.mkdir(parents=True, exist_ok=True)
        (ctx.path / "pom.xml").write_text(ctx.project.to_pom_xml(), encoding="utf-8")
        if ctx.settings_content is not None:
            (ctx.path / "settings.xml").write_text(ctx.settings_content, encoding="utf-8")
    except OSError as e:
        raise BuildFailureError(f"Cannot write Maven project into {ctx.path}: {e}") from e


def run_maven(ctx: MavenContext) -> MavenResult:
    """Stage the project and run Maven with the context's goals.

    Raises:
        BuildFailureError: Maven could not be started, exited non-zero,
            or exceeded ``ctx.timeout``. Not retried.
    """
    generate_project_structure(ctx)
    cmd = ctx.build_command()

    log.info("maven.run", cmd=" ".join(cmd), cwd=str(ctx.path), timeout=ctx.timeout)
    start = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            cwd=ctx.path,
            capture_output=True,
            text=True,
            timeout=ctx.timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise BuildFailureError(
            f"Maven timed out after {ctx.timeout}s",
            stdout=_to_text(e.stdout),
            stderr=_to_text(e.stderr),
            timed_out=True,
        ) from e
    except OSError as e:
        raise BuildFailureError(f"Cannot execute Maven command '{ctx.maven_cmd}': {e}") from e
    duration = round(time.monotonic() - start, 2)

    if proc.returncode != 0:
        # Maven reports build errors on stdout
        tail = (proc.stdout or proc.stderr)[-_DIAGNOSTIC_TAIL:]
        log.warning("maven.failed", returncode=proc.returncode, duration=duration)
        raise BuildFailureError(
            f"Maven failed (rc={proc.returncode}): {tail}",
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )

    log.info("maven.completed", duration=duration)
    return MavenResult(
        returncode=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
        duration=duration,
    )
