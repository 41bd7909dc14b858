"""Inspector for the YAML route DSL."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from camel_inspect.scanner.collector import CAPABILITY_REST, DependencyCollector
from camel_inspect.scanner.registry import register_inspector

logger = logging.getLogger(__name__)

_ENDPOINT_KEYS = {
    "from",
    "to",
    "to-d",
    "toD",
    "wire-tap",
    "wireTap",
    "enrich",
    "poll-enrich",
    "pollEnrich",
}
_REST_KEYS = {"rest", "rest-configuration", "restConfiguration"}
_DATAFORMAT_KEYS = {"marshal", "unmarshal"}


def _endpoint_uri(value: Any) -> str | None:
    """``to: "log:info"`` or ``to: {uri: "log:info"}``."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("uri"), str):
        return value["uri"]
    return None


class YamlDslInspector:
    name = "yaml-dsl"
    languages = ("yaml",)

    def inspect(self, content: str, collector: DependencyCollector) -> None:
        try:
            documents = list(yaml.safe_load_all(content))
        except yaml.YAMLError as e:
            logger.warning("Skipping unparsable YAML source: %s", e)
            return

        for doc in documents:
            self._walk(doc, collector)

    def _walk(self, node: Any, collector: DependencyCollector) -> None:
        if isinstance(node, list):
            for item in node:
                self._walk(item, collector)
            return
        if not isinstance(node, dict):
            return

        languages = collector.catalog.languages
        for key, value in node.items():
            key = str(key)
            if key in _ENDPOINT_KEYS:
                uri = _endpoint_uri(value)
                if uri:
                    collector.add_endpoint(uri, consumer=key == "from")
            elif key in _REST_KEYS:
                collector.add_capability(CAPABILITY_REST)
            elif key in _DATAFORMAT_KEYS and isinstance(value, dict):
                for name, options in value.items():
                    library = options.get("library") if isinstance(options, dict) else None
                    collector.add_dataformat(str(name), library=library)
            elif key in languages:
                collector.add_language(key)
            self._walk(value, collector)


register_inspector(YamlDslInspector())
