"""Tests for the source scanner and the DSL inspectors."""

from __future__ import annotations

import logging

import pytest

from camel_inspect.models.source import SourceDocument
from camel_inspect.scanner import DependencyCollector, scan, scan_all
from camel_inspect.scanner.registry import INSPECTOR_REGISTRY, inspector_for


def _doc(name: str, content: str) -> SourceDocument:
    return SourceDocument(name=name, content=content.encode())


JAVA_ROUTE = """
import org.apache.camel.builder.RouteBuilder;
import org.apache.camel.model.dataformat.JsonLibrary;

public class Sample extends RouteBuilder {
    @Override
    public void configure() throws Exception {
        from("timer:tick?period=1000")
            .setBody().jsonpath("$.name")
            .marshal().json(JsonLibrary.Jackson)
            .to("log:info");
    }
}
"""

XML_ROUTE = """<?xml version="1.0" encoding="UTF-8"?>
<routes xmlns="http://camel.apache.org/schema/spring">
  <route>
    <from uri="platform-http:/hello"/>
    <setBody><jsonpath>$.name</jsonpath></setBody>
    <marshal><json library="Jackson"/></marshal>
    <to uri="log:info"/>
  </route>
</routes>
"""

YAML_ROUTE = """
- from:
    uri: "timer:tick"
    steps:
      - set-body:
          jsonpath: "$.name"
      - marshal:
          json:
            library: Jackson
      - to: "log:info"
- rest:
    get:
      - to: "direct:hello"
"""


class TestRegistry:
    def test_every_language_has_an_inspector(self):
        for language in ("java", "groovy", "js", "kotlin", "xml", "yaml"):
            assert language in INSPECTOR_REGISTRY

    def test_unknown_language(self):
        assert inspector_for(None) is None
        assert inspector_for("cobol") is None


class TestJvmDsl:
    def test_java_route(self, catalog):
        result = scan(_doc("Sample.java", JAVA_ROUTE), catalog)
        assert result.to_list() == ["camel:jackson", "camel:jsonpath", "camel:log", "camel:timer"]

    def test_repetition_and_order_do_not_matter(self, catalog):
        reordered = """
        from("log:in").to("timer:t").to("log:again").to("timer:again");
        from("timer:x").to("log:x");
        """
        assert scan(_doc("R.java", reordered), catalog).to_list() == ["camel:log", "camel:timer"]

    def test_groovy_single_quotes_and_language(self, catalog):
        route = "from('timer:tick').filter().groovy('body != null').to('log:info')"
        result = scan(_doc("route.groovy", route), catalog)
        assert result.to_list() == ["camel:groovy", "camel:log", "camel:timer"]

    def test_kotlin_closure_producer(self, catalog):
        route = 'from("timer:tick") {\n  steps {\n    to("log:info")\n  }\n}'
        result = scan(_doc("route.kts", route), catalog)
        assert result.to_list() == ["camel:log", "camel:timer"]

    def test_http_consumer_adds_platform_http_capability(self, catalog):
        route = 'from("platform-http:/hello").to("log:info");'
        result = scan(_doc("Http.java", route), catalog)
        assert "camel:platform-http" in result
        assert "camel-k:runtime-http" in result

    def test_http_producer_does_not_add_capability(self, catalog):
        route = 'from("timer:tick").to("https://example.com/api");'
        result = scan(_doc("Client.java", route), catalog)
        assert "camel:http" in result
        assert "camel-k:runtime-http" not in result

    def test_rest_dsl(self, catalog):
        route = 'rest("/api").get("/hello").to("direct:hello");'
        result = scan(_doc("Rest.java", route), catalog)
        assert result.to_list() == ["camel-k:runtime-http", "camel:rest"]

    def test_circuit_breaker(self, catalog):
        route = 'from("timer:t").circuitBreaker().to("log:x").end();'
        assert "camel:resilience4j" in scan(_doc("Cb.java", route), catalog)

    def test_dataformat_by_name(self, catalog):
        route = 'from("timer:t").marshal("base64").to("log:x");'
        assert "camel:base64" in scan(_doc("Df.js", route), catalog)

    def test_imported_component_type(self, catalog):
        route = (
            "import org.apache.camel.component.kafka.KafkaConstants;\n"
            'from("timer:tick").setHeader(KafkaConstants.KEY, constant("k")).to("log:info");\n'
        )
        result = scan(_doc("Kafka.java", route), catalog)
        assert result.to_list() == ["camel:kafka", "camel:log", "camel:timer"]

    @pytest.mark.parametrize(
        "line",
        [
            "import static org.apache.camel.component.kafka.KafkaConstants.KEY;",
            "import static org.apache.camel.component.kafka.KafkaConstants.*;",
            "import org.apache.camel.component.kafka.KafkaConstants as KC",
        ],
    )
    def test_import_forms(self, catalog, line):
        result = scan(_doc("route.groovy", line + "\nfrom('timer:t')\n"), catalog)
        assert "camel:kafka" in result

    def test_unrelated_imports_ignored(self, catalog):
        route = "import java.util.List;\nimport org.apache.camel.component.kafka.*;\n"
        assert len(scan(_doc("R.java", route), catalog)) == 0

    def test_unknown_schemes_ignored(self, catalog):
        route = 'from("jms:queue").to("seda:next");'
        assert len(scan(_doc("Unknown.java", route), catalog)) == 0


class TestXmlDsl:
    def test_xml_route(self, catalog):
        result = scan(_doc("routes.xml", XML_ROUTE), catalog)
        assert set(result.to_list()) == {
            "camel:jackson",
            "camel:jsonpath",
            "camel:log",
            "camel:platform-http",
            "camel-k:runtime-http",
        }

    def test_rest_element(self, catalog):
        xml = '<rests><rest path="/api"><get uri="/hello"><to uri="log:x"/></get></rest></rests>'
        result = scan(_doc("rest.xml", xml), catalog)
        assert set(result.to_list()) == {"camel:log", "camel:rest", "camel-k:runtime-http"}

    def test_malformed_xml(self, catalog, caplog):
        with caplog.at_level(logging.WARNING):
            result = scan(_doc("broken.xml", "<routes><route>"), catalog)
        assert len(result) == 0
        assert "unparsable XML" in caplog.text


class TestYamlDsl:
    def test_yaml_route_with_loader(self, catalog):
        result = scan(_doc("routes.yaml", YAML_ROUTE), catalog)
        assert set(result.to_list()) == {
            "camel-k:loader-yaml",
            "camel:yaml-dsl",
            "camel:timer",
            "camel:jsonpath",
            "camel:jackson",
            "camel:log",
            "camel:rest",
            "camel-k:runtime-http",
        }

    def test_dashed_endpoint_keys(self, catalog):
        route = "- from:\n    uri: timer:t\n    steps:\n      - wire-tap: log:tap\n"
        result = scan(_doc("r.yml", route), catalog)
        assert "camel:log" in result
        assert "camel:timer" in result

    def test_malformed_yaml_keeps_only_loader(self, catalog, caplog):
        with caplog.at_level(logging.WARNING):
            result = scan(_doc("broken.yaml", "- from: [unclosed"), catalog)
        assert set(result.to_list()) == {"camel-k:loader-yaml", "camel:yaml-dsl"}
        assert "unparsable YAML" in caplog.text


class TestScan:
    def test_unknown_language_yields_nothing(self, catalog):
        assert len(scan(_doc("README.md", 'from("timer:tick")'), catalog)) == 0

    def test_compressed_source(self, catalog):
        import base64
        import gzip

        packed = base64.b64encode(gzip.compress(b'from("timer:tick").to("log:info");'))
        doc = SourceDocument(name="Route.java", content=packed, compressed=True)
        assert scan(doc, catalog).to_list() == ["camel:log", "camel:timer"]

    @pytest.mark.parametrize("content", [b"not base64!", b"aGVsbG8gd29ybGQ="])
    def test_undecodable_compressed_source_keeps_only_loader(self, catalog, caplog, content):
        doc = SourceDocument(name="routes.yaml", content=content, compressed=True)
        with caplog.at_level(logging.WARNING):
            result = scan(doc, catalog)
        assert set(result.to_list()) == {"camel-k:loader-yaml", "camel:yaml-dsl"}
        assert "Skipping undecodable source routes.yaml" in caplog.text

    def test_scan_is_pure(self, catalog):
        doc = _doc("Sample.java", JAVA_ROUTE)
        assert scan(doc, catalog) == scan(doc, catalog)

    def test_scan_all_unions(self, catalog):
        docs = [_doc("A.java", 'from("timer:a");'), _doc("B.java", 'from("log:b");')]
        assert scan_all(docs, catalog).to_list() == ["camel:log", "camel:timer"]


class TestDependencyCollector:
    @pytest.mark.parametrize("name", ["jsonpath", "JsonPath"])
    def test_language_candidates(self, catalog, name):
        collector = DependencyCollector(catalog)
        collector.add_language(name)
        assert collector.dependencies.to_list() == ["camel:jsonpath"]

    def test_dataformat_with_library(self, catalog):
        collector = DependencyCollector(catalog)
        collector.add_dataformat("json", library="Jackson")
        assert collector.dependencies.to_list() == ["camel:jackson"]

    def test_java_type(self, catalog):
        collector = DependencyCollector(catalog)
        collector.add_java_type("org.apache.camel.component.kafka.KafkaConstants")
        collector.add_java_type("java.util.List")
        assert collector.dependencies.to_list() == ["camel:kafka"]

    def test_unknown_capability(self, catalog):
        collector = DependencyCollector(catalog)
        collector.add_capability("master")
        assert len(collector.dependencies) == 0
