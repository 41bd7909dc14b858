"""Inspector for the XML route DSL."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from camel_inspect.scanner.collector import CAPABILITY_REST, DependencyCollector
from camel_inspect.scanner.registry import register_inspector

logger = logging.getLogger(__name__)

_ENDPOINT_TAGS = {"from", "to", "toD", "wireTap", "enrich", "pollEnrich"}
_REST_TAGS = {"rest", "restConfiguration"}
_DATAFORMAT_PARENTS = {"marshal", "unmarshal", "dataFormats"}


def _local(tag: str) -> str:
    """Strip the namespace from an element tag."""
    return tag.split("}")[-1] if "}" in tag else tag


class XmlDslInspector:
    name = "xml-dsl"
    languages = ("xml",)

    def inspect(self, content: str, collector: DependencyCollector) -> None:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.warning("Skipping unparsable XML source: %s", e)
            return

        languages = collector.catalog.languages
        for el in root.iter():
            if not isinstance(el.tag, str):
                continue
            tag = _local(el.tag)

            if tag in _ENDPOINT_TAGS:
                uri = el.get("uri")
                if uri:
                    collector.add_endpoint(uri, consumer=tag == "from")
            elif tag in _REST_TAGS:
                collector.add_capability(CAPABILITY_REST)
            elif tag in _DATAFORMAT_PARENTS:
                for child in el:
                    if isinstance(child.tag, str):
                        collector.add_dataformat(_local(child.tag), library=child.get("library"))
            elif tag in languages:
                collector.add_language(tag)


register_inspector(XmlDslInspector())
