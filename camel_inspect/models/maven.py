"""Data models for synthetic Maven projects and their pom.xml rendering."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

_POM_NS = "http://maven.apache.org/POM/4.0.0"
_XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
_POM_XSD = "http://maven.apache.org/xsd/maven-4.0.0.xsd"
_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass
class Exclusion:
    group_id: str
    artifact_id: str


@dataclass
class MavenDependency:
    """One <dependency> entry."""

    group_id: str
    artifact_id: str
    version: str = ""
    type: str = ""  # "" means the Maven default (jar)
    classifier: str = ""
    scope: str = ""
    exclusions: list[Exclusion] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str, str, str, str, str]:
        return (
            self.group_id,
            self.artifact_id,
            self.version,
            self.type,
            self.classifier,
            self.scope,
        )

    @property
    def gav(self) -> str:
        parts = [self.group_id, self.artifact_id]
        if self.type:
            parts.append(self.type)
            if self.classifier:
                parts.append(self.classifier)
        if self.version:
            parts.append(self.version)
        return ":".join(parts)

    def add_exclusion(self, group_id: str, artifact_id: str) -> None:
        for e in self.exclusions:
            if e.group_id == group_id and e.artifact_id == artifact_id:
                return
        self.exclusions.append(Exclusion(group_id, artifact_id))


def parse_gav(gav: str) -> MavenDependency:
    """Parse ``groupId:artifactId[:type[:classifier]][:version]``.

    Two segments mean no version; three mean ``g:a:v``; four ``g:a:type:v``;
    five ``g:a:type:classifier:v``.

    Raises:
        ValueError: wrong number of segments or an empty group/artifact id.
    """
    parts = gav.split(":")
    if not 2 <= len(parts) <= 5 or not parts[0] or not parts[1]:
        raise ValueError(f"expected groupId:artifactId[:type[:classifier]]:version, got '{gav}'")

    dep = MavenDependency(group_id=parts[0], artifact_id=parts[1])
    if len(parts) == 3:
        dep.version = parts[2]
    elif len(parts) == 4:
        dep.type, dep.version = parts[2], parts[3]
    elif len(parts) == 5:
        dep.type, dep.classifier, dep.version = parts[2], parts[3], parts[4]
    return dep


@dataclass
class Repository:
    id: str
    url: str
    snapshots_enabled: bool = True
    releases_enabled: bool = True


@dataclass
class PluginExecution:
    id: str
    phase: str
    goals: list[str] = field(default_factory=list)


@dataclass
class Plugin:
    group_id: str
    artifact_id: str
    version: str
    executions: list[PluginExecution] = field(default_factory=list)
    dependencies: list[MavenDependency] = field(default_factory=list)


@dataclass
class Project:
    """Synthetic build descriptor handed to Maven."""

    group_id: str
    artifact_id: str
    version: str
    runtime_version: str
    dependencies: list[MavenDependency] = field(default_factory=list)
    dependency_management: list[MavenDependency] = field(default_factory=list)
    repositories: list[Repository] = field(default_factory=list)
    plugins: list[Plugin] = field(default_factory=list)
    properties: dict[str, str] = field(
        default_factory=lambda: {"project.build.sourceEncoding": "UTF-8"}
    )

    # ── mutation helpers (first insertion wins, order preserved) ──

    def add_dependency(self, dep: MavenDependency) -> MavenDependency:
        for existing in self.dependencies:
            if existing.key == dep.key:
                return existing
        self.dependencies.append(dep)
        return dep

    def add_dependency_gav(self, group_id: str, artifact_id: str, version: str = "") -> MavenDependency:
        return self.add_dependency(
            MavenDependency(group_id=group_id, artifact_id=artifact_id, version=version)
        )

    def add_managed_dependency(self, dep: MavenDependency) -> None:
        if all(existing.key != dep.key for existing in self.dependency_management):
            self.dependency_management.append(dep)

    def add_repository(self, repo: Repository) -> None:
        if all(existing.url != repo.url for existing in self.repositories):
            self.repositories.append(repo)

    # ── rendering ──

    def to_pom_xml(self) -> str:
        root = ET.Element(
            "project",
            {
                "xmlns": _POM_NS,
                "xmlns:xsi": _XSI_NS,
                "xsi:schemaLocation": f"{_POM_NS} {_POM_XSD}",
            },
        )
        _sub(root, "modelVersion", "4.0.0")
        _sub(root, "groupId", self.group_id)
        _sub(root, "artifactId", self.artifact_id)
        _sub(root, "version", self.version)

        if self.properties:
            props = ET.SubElement(root, "properties")
            for key, value in self.properties.items():
                _sub(props, key, value)

        if self.dependency_management:
            dm = ET.SubElement(ET.SubElement(root, "dependencyManagement"), "dependencies")
            for dep in self.dependency_management:
                _dependency_element(dm, dep)

        if self.dependencies:
            deps = ET.SubElement(root, "dependencies")
            for dep in self.dependencies:
                _dependency_element(deps, dep)

        if self.repositories:
            repos = ET.SubElement(root, "repositories")
            plugin_repos = ET.SubElement(root, "pluginRepositories")
            for repo in self.repositories:
                _repository_element(repos, "repository", repo)
                _repository_element(plugin_repos, "pluginRepository", repo)

        if self.plugins:
            plugins = ET.SubElement(ET.SubElement(root, "build"), "plugins")
            for plugin in self.plugins:
                _plugin_element(plugins, plugin)

        ET.indent(root)
        return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def _sub(parent: ET.Element, tag: str, text: str) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = text
    return el


def _dependency_element(parent: ET.Element, dep: MavenDependency) -> None:
    el = ET.SubElement(parent, "dependency")
    _sub(el, "groupId", dep.group_id)
    _sub(el, "artifactId", dep.artifact_id)
    if dep.version:
        _sub(el, "version", dep.version)
    if dep.type:
        _sub(el, "type", dep.type)
    if dep.classifier:
        _sub(el, "classifier", dep.classifier)
    if dep.scope:
        _sub(el, "scope", dep.scope)
    if dep.exclusions:
        excl = ET.SubElement(el, "exclusions")
        for e in dep.exclusions:
            e_el = ET.SubElement(excl, "exclusion")
            _sub(e_el, "groupId", e.group_id)
            _sub(e_el, "artifactId", e.artifact_id)


def _repository_element(parent: ET.Element, tag: str, repo: Repository) -> None:
    el = ET.SubElement(parent, tag)
    _sub(el, "id", repo.id)
    _sub(el, "url", repo.url)
    _sub(ET.SubElement(el, "snapshots"), "enabled", str(repo.snapshots_enabled).lower())
    _sub(ET.SubElement(el, "releases"), "enabled", str(repo.releases_enabled).lower())


def _plugin_element(parent: ET.Element, plugin: Plugin) -> None:
    el = ET.SubElement(parent, "plugin")
    _sub(el, "groupId", plugin.group_id)
    _sub(el, "artifactId", plugin.artifact_id)
    _sub(el, "version", plugin.version)
    if plugin.executions:
        execs = ET.SubElement(el, "executions")
        for execution in plugin.executions:
            ex_el = ET.SubElement(execs, "execution")
            _sub(ex_el, "id", execution.id)
            _sub(ex_el, "phase", execution.phase)
            goals = ET.SubElement(ex_el, "goals")
            for goal in execution.goals:
                _sub(goals, "goal", goal)
    if plugin.dependencies:
        deps = ET.SubElement(el, "dependencies")
        for dep in plugin.dependencies:
            _dependency_element(deps, dep)
