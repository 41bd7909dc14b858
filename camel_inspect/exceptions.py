"""Custom exceptions for camel-inspect."""

from __future__ import annotations

from camel_inspect.constants import ACCEPTED_DEPENDENCY_TYPES


class InspectorError(Exception):
    """Base exception for all inspector errors."""


class CatalogUnavailableError(InspectorError):
    """Raised when the runtime catalog can neither be loaded nor generated."""


class DependencyError(InspectorError):
    """Base for errors about a single dependency identifier."""

    def __init__(self, dependency: str, message: str):
        self.dependency = dependency
        super().__init__(message)


class UnsupportedDependencyTypeError(DependencyError):
    """Raised when a dependency type is outside the accepted vocabulary."""

    def __init__(self, dependency: str, dependency_type: str):
        self.dependency_type = dependency_type
        super().__init__(
            dependency,
            f"Unexpected type for dependency: {dependency}, "
            f"expected <type>:<name> where <type> is one of "
            f"{{{'|'.join(ACCEPTED_DEPENDENCY_TYPES)}}}",
        )


class MalformedDependencyError(DependencyError):
    """Raised when a dependency of a supported type has an unparsable coordinate."""

    def __init__(self, dependency: str, reason: str):
        self.reason = reason
        super().__init__(dependency, f"Malformed dependency '{dependency}': {reason}")


class BuildFailureError(InspectorError):
    """Raised when the Maven run fails, times out, or produces no output."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        timed_out: bool = False,
    ):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.timed_out = timed_out
        super().__init__(message)

    @property
    def diagnostics(self) -> str:
        """Captured build output, stdout first."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


class ArtifactCopyError(InspectorError):
    """Raised when a resolved artifact cannot be copied to the target directory."""

    def __init__(self, source: str, target: str, reason: str = ""):
        self.source = source
        self.target = target
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to copy {source} to {target}{detail}")
