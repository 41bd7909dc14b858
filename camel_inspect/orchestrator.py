"""Inspect orchestrator: sources in, dependencies (or harvested jars) out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import structlog

from camel_inspect.build.harvester import harvest
from camel_inspect.build.project import synthesize
from camel_inspect.build.resolver import resolve
from camel_inspect.catalog import CatalogProvider
from camel_inspect.models.dependency import DependencyIdentifier, DependencySet
from camel_inspect.models.source import SourceDocument
from camel_inspect.progress import InspectState, PhaseProgress, ProgressTracker
from camel_inspect.scanner import scan
from camel_inspect.settings import InspectSettings

logger = logging.getLogger(__name__)
log = structlog.get_logger("camel_inspect.orchestrator")

_TRANSITIVE_PHASES = ("synthesize", "resolve", "harvest")


@dataclass
class InspectOutput:
    dependencies: list[str]
    transitive: bool = False
    top_level: list[str] = field(default_factory=list)


class InspectOrchestrator:
    """
    Run one inspection.

    Phase 1: validate extra identifiers
    Phase 2: obtain the catalog (once per provider)
    Phase 3: scan every source and merge the extras
    Phase 4: (transitive only) synthesize the project and resolve it with Maven
    Phase 5: (transitive only) copy the resolved artifacts into the target directory

    A failure in any phase aborts the run: the state becomes ERROR and the
    exception propagates. No partial result is returned.
    """

    def __init__(self, catalog_provider: CatalogProvider, settings: InspectSettings) -> None:
        self.catalog_provider = catalog_provider
        self.settings = settings
        self.progress = ProgressTracker()

    @property
    def state(self) -> InspectState:
        return self.progress.state

    def _new_progress(self) -> ProgressTracker:
        tracker = ProgressTracker()
        tracker.callbacks.append(self._log_phase_callback)
        return tracker

    def _log_phase_callback(self, phase: PhaseProgress) -> None:
        log.debug(
            "inspect.phase",
            phase=phase.phase,
            status=phase.status,
            duration=phase.duration,
            detail=phase.detail or None,
            error=phase.error,
        )

    def run(
        self,
        documents: Iterable[SourceDocument],
        extra_identifiers: Iterable[str] = (),
        transitive: bool = False,
        target_dir: str | Path | None = None,
    ) -> list[str]:
        """Inspect *documents* and return the result of the selected mode.

        Top-level mode returns the sorted dependency identifiers. Transitive
        mode returns the paths of the artifacts copied into *target_dir*, in
        resolution order.

        Raises:
            UnsupportedDependencyTypeError: an extra identifier is invalid;
                raised before any source is read.
            CatalogUnavailableError: the catalog could not be built.
            MalformedDependencyError: an identifier cannot become a coordinate.
            BuildFailureError: Maven failed or produced an unusable listing.
            ArtifactCopyError: an artifact could not be copied.
        """
        return self.run_detailed(documents, extra_identifiers, transitive, target_dir).dependencies

    def run_detailed(
        self,
        documents: Iterable[SourceDocument],
        extra_identifiers: Iterable[str] = (),
        transitive: bool = False,
        target_dir: str | Path | None = None,
    ) -> InspectOutput:
        progress = self._new_progress()
        self.progress = progress  # expose last run's progress for callers
        phase = "validate"

        try:
            progress.start_phase(phase)
            extras = DependencySet(DependencyIdentifier.parse(v) for v in extra_identifiers)
            if transitive and target_dir is None:
                raise ValueError("target_dir is required for transitive resolution")
            progress.complete_phase(phase, detail=f"{len(extras)} extra dependencies")

            progress.transition(InspectState.SCANNING_SOURCES)

            phase = "catalog"
            progress.start_phase(phase)
            catalog = self.catalog_provider.get()
            progress.complete_phase(phase, detail=f"runtime {catalog.runtime_version}")

            phase = "scan"
            progress.start_phase(phase)
            found = DependencySet()
            docs = list(documents)
            for doc in docs:
                found = found | scan(doc, catalog)
            merged = found | extras
            progress.complete_phase(
                phase, detail=f"{len(docs)} sources, {len(merged)} dependencies"
            )
            top_level = merged.to_list()

            if not transitive:
                progress.transition(InspectState.TOP_LEVEL_ONLY)
                for skipped in _TRANSITIVE_PHASES:
                    progress.skip_phase(skipped, "top-level only")
                progress.transition(InspectState.DONE)
                log.info("inspect.top_level", count=len(top_level))
                return InspectOutput(dependencies=top_level, top_level=top_level)

            progress.transition(InspectState.RESOLVING_TRANSITIVE)

            phase = "synthesize"
            progress.start_phase(phase)
            project = synthesize(
                merged,
                self.settings.runtime_version,
                catalog=catalog,
                project_version=self.settings.project_version,
            )
            progress.complete_phase(phase, detail=f"{len(project.dependencies)} dependencies")

            phase = "resolve"
            progress.start_phase(phase)
            graph = resolve(project, self.settings)
            progress.complete_phase(phase)

            progress.transition(InspectState.HARVESTING_ARTIFACTS)

            phase = "harvest"
            progress.start_phase(phase)
            copied = harvest(graph, target_dir)
            progress.complete_phase(phase, detail=f"{len(copied)} artifacts")

            progress.transition(InspectState.DONE)
            log.info("inspect.transitive", count=len(copied), target_dir=str(target_dir))
            return InspectOutput(dependencies=copied, transitive=True, top_level=top_level)

        except Exception as e:
            progress.fail_phase(phase, str(e))
            if not progress.state.terminal:
                progress.transition(InspectState.ERROR)
            logger.debug("Inspect run failed in phase %s", phase, exc_info=True)
            raise
