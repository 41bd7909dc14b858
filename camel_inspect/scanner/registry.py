"""Inspector registry: map source languages to the inspector that reads them."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from camel_inspect.scanner.collector import DependencyCollector


@runtime_checkable
class SourceInspector(Protocol):
    """Interface that every DSL inspector must satisfy."""

    name: str
    languages: tuple[str, ...]

    def inspect(self, content: str, collector: DependencyCollector) -> None: ...


INSPECTOR_REGISTRY: dict[str, SourceInspector] = {}


def register_inspector(inspector: SourceInspector) -> None:
    """Register an inspector instance for each language it reads."""
    for language in inspector.languages:
        INSPECTOR_REGISTRY[language] = inspector


def inspector_for(language: str | None) -> SourceInspector | None:
    if language is None:
        return None
    return INSPECTOR_REGISTRY.get(language)
