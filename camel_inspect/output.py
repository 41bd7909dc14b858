"""Rendering of dependency listings for stdout."""

from __future__ import annotations

import json

import yaml

OUTPUT_FORMATS = ("json", "yaml")


def format_dependencies(dependencies: list[str], output_format: str | None = None) -> str:
    """Render *dependencies* as ``{"dependencies": [...]}`` JSON or YAML.

    Without a format the identifiers are written one per line.
    """
    if output_format is None:
        return "\n".join(dependencies)

    document = {"dependencies": list(dependencies)}
    if output_format == "json":
        return json.dumps(document, indent=2)
    if output_format == "yaml":
        return yaml.safe_dump(document, default_flow_style=False, sort_keys=False).rstrip("\n")
    raise ValueError(f"Unsupported output format '{output_format}', expected one of {OUTPUT_FORMATS}")
