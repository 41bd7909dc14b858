"""Inspector for the Java, Groovy, JavaScript, and Kotlin route DSLs."""

from __future__ import annotations

import re

from camel_inspect.scanner.collector import CAPABILITY_REST, DependencyCollector
from camel_inspect.scanner.registry import register_inspector

_URI = r"""["']([a-zA-Z0-9-]+:[^"']+)["']"""

# Consumer endpoints: from("timer:tick"), fromF("file:%s", dir)
_FROM_RE = re.compile(rf"""(?<![\w.])fromF?\s*\(\s*{_URI}""")

# Producer endpoints: .to("log:info"), .toD(...), and the dotless to(...) of closure DSLs
_TO_RE = re.compile(rf"""(?<!\w)(?:to|toD|toF|wireTap|enrich|pollEnrich)\s*\(\s*{_URI}""")

# Expression languages used as builder calls: .jsonpath("$.x"), .xpath("/a")
_LANGUAGE_CALLS: dict[str, str] = {
    "jsonpath": "jsonpath",
    "jsonpathWriteAsString": "jsonpath",
    "xpath": "xpath",
    "xquery": "xquery",
    "xtokenize": "xtokenize",
    "groovy": "groovy",
    "ognl": "ognl",
    "mvel": "mvel",
    "spel": "spel",
    "jq": "jq",
    "joor": "joor",
    "datasonnet": "datasonnet",
}
_LANGUAGE_RE = re.compile(r"\.(" + "|".join(_LANGUAGE_CALLS) + r")\s*\(")

# .marshal().json(...), .unmarshal().base64()
_DATAFORMAT_CALL_RE = re.compile(r"\.(?:un)?marshal\s*\(\s*\)\s*\.\s*(\w+)\s*\(")
# .marshal("json-jackson")
_DATAFORMAT_NAME_RE = re.compile(r"""\.(?:un)?marshal\s*\(\s*["']([\w-]+)["']""")
# JsonLibrary.Jackson -> json-jackson
_JSON_LIBRARY_RE = re.compile(r"JsonLibrary\.(\w+)")

# import org.apache.camel.component.kafka.KafkaConstants;
# import static org.apache.camel.component.kafka.KafkaConstants.KEY
_IMPORT_RE = re.compile(r"^\s*import\s+(static\s+)?([\w.]+)", re.MULTILINE)

_REST_RE = re.compile(r"(?<![\w.])(?:rest|restConfiguration)\s*(?:\(|\{)")
_CIRCUIT_BREAKER_RE = re.compile(r"\.circuitBreaker\s*\(")


class JvmDslInspector:
    name = "jvm-dsl"
    languages = ("java", "groovy", "js", "kotlin")

    def inspect(self, content: str, collector: DependencyCollector) -> None:
        for m in _IMPORT_RE.finditer(content):
            name = m.group(2)
            java_type = name.rstrip(".")
            # a static import names a member unless it is a wildcard
            if m.group(1) and not name.endswith("."):
                java_type = java_type.rpartition(".")[0]
            collector.add_java_type(java_type)

        for m in _FROM_RE.finditer(content):
            collector.add_endpoint(m.group(1), consumer=True)
        for m in _TO_RE.finditer(content):
            collector.add_endpoint(m.group(1))

        for m in _LANGUAGE_RE.finditer(content):
            collector.add_language(_LANGUAGE_CALLS[m.group(1)])

        for m in _DATAFORMAT_CALL_RE.finditer(content):
            collector.add_dataformat(m.group(1))
        for m in _DATAFORMAT_NAME_RE.finditer(content):
            collector.add_dataformat(m.group(1))
        for m in _JSON_LIBRARY_RE.finditer(content):
            collector.add_dataformat("json", library=m.group(1))

        if _REST_RE.search(content):
            collector.add_capability(CAPABILITY_REST)
        if _CIRCUIT_BREAKER_RE.search(content):
            collector.add("camel:resilience4j")


register_inspector(JvmDslInspector())
