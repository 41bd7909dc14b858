"""Runtime settings, read from the environment and overridable from the CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from camel_inspect.constants import (
    DEFAULT_MAVEN_TIMEOUT,
    DEFAULT_PROJECT_VERSION,
    DEFAULT_RUNTIME_VERSION,
    RUNTIME_PROVIDER_MAIN,
    RUNTIME_PROVIDERS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InspectSettings:
    runtime_version: str = DEFAULT_RUNTIME_VERSION
    runtime_provider: str = RUNTIME_PROVIDER_MAIN
    project_version: str = DEFAULT_PROJECT_VERSION
    maven_cmd: str = "mvn"
    maven_timeout: float = DEFAULT_MAVEN_TIMEOUT
    local_repository: str | None = None
    maven_settings_path: str | None = None
    catalog_path: str | None = None

    def __post_init__(self) -> None:
        if self.runtime_provider not in RUNTIME_PROVIDERS:
            raise ValueError(
                f"Unknown runtime provider '{self.runtime_provider}', "
                f"expected one of {', '.join(RUNTIME_PROVIDERS)}"
            )
        if self.maven_timeout <= 0:
            raise ValueError("maven_timeout must be positive")

    @classmethod
    def from_env(cls) -> InspectSettings:
        """Build settings from environment variables.

        Supported variables:
            CAMEL_INSPECT_RUNTIME_VERSION   — Camel K runtime version
            CAMEL_INSPECT_RUNTIME_PROVIDER  — main | quarkus
            CAMEL_INSPECT_PROJECT_VERSION   — version of the synthetic project
            CAMEL_INSPECT_MAVEN_CMD         — Maven executable (fallback: MAVEN_CMD, mvn)
            CAMEL_INSPECT_MAVEN_TIMEOUT     — seconds per Maven run
            CAMEL_INSPECT_LOCAL_REPOSITORY  — local Maven repository override
            CAMEL_INSPECT_MAVEN_SETTINGS    — path to a Maven settings.xml
            CAMEL_INSPECT_CATALOG           — pre-generated catalog YAML
        """
        env = os.environ
        timeout = DEFAULT_MAVEN_TIMEOUT
        raw_timeout = env.get("CAMEL_INSPECT_MAVEN_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "CAMEL_INSPECT_MAVEN_TIMEOUT=%r is not a number, using %ss",
                    raw_timeout,
                    DEFAULT_MAVEN_TIMEOUT,
                )
        return cls(
            runtime_version=env.get("CAMEL_INSPECT_RUNTIME_VERSION", DEFAULT_RUNTIME_VERSION),
            runtime_provider=env.get("CAMEL_INSPECT_RUNTIME_PROVIDER", RUNTIME_PROVIDER_MAIN),
            project_version=env.get("CAMEL_INSPECT_PROJECT_VERSION", DEFAULT_PROJECT_VERSION),
            maven_cmd=env.get("CAMEL_INSPECT_MAVEN_CMD") or env.get("MAVEN_CMD") or "mvn",
            maven_timeout=timeout,
            local_repository=env.get("CAMEL_INSPECT_LOCAL_REPOSITORY") or None,
            maven_settings_path=env.get("CAMEL_INSPECT_MAVEN_SETTINGS") or None,
            catalog_path=env.get("CAMEL_INSPECT_CATALOG") or None,
        )

    def with_overrides(self, **overrides: object) -> InspectSettings:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def maven_settings_content(self) -> str | None:
        if not self.maven_settings_path:
            return None
        return Path(self.maven_settings_path).read_text(encoding="utf-8")
