"""Shared constants: dependency vocabulary, Maven coordinates, runtime defaults."""

# Accepted dependency types, in the order shown to users
ACCEPTED_DEPENDENCY_TYPES: tuple[str, ...] = (
    "bom",
    "camel",
    "camel-k",
    "camel-quarkus",
    "mvn",
    "github",
)

# Runtime defaults
DEFAULT_RUNTIME_VERSION = "1.9.0"
DEFAULT_PROJECT_VERSION = "1.6.0"
DEFAULT_MAVEN_TIMEOUT = 300.0  # seconds
DEFAULT_DEPENDENCIES_DIRECTORY = "dependencies"

RUNTIME_PROVIDER_MAIN = "main"
RUNTIME_PROVIDER_QUARKUS = "quarkus"
RUNTIME_PROVIDERS = (RUNTIME_PROVIDER_MAIN, RUNTIME_PROVIDER_QUARKUS)

# Maven group ids of the Camel family
CAMEL_GROUP_ID = "org.apache.camel"
CAMEL_K_GROUP_ID = "org.apache.camel.k"
CAMEL_QUARKUS_GROUP_ID = "org.apache.camel.quarkus"

# Synthetic projects
INTEGRATION_GROUP_ID = "org.apache.camel.k.integration"
INTEGRATION_ARTIFACT_ID = "camel-k-integration"
CATALOG_GENERATOR_ARTIFACT_ID = "camel-k-catalog-generator"
RUNTIME_BOM_ARTIFACT_ID = "camel-k-runtime-bom"
MAVEN_PLUGIN_ARTIFACT_ID = "camel-k-maven-plugin"

# JitPack hosting for github: dependencies
JITPACK_REPOSITORY_URL = "https://jitpack.io"
JITPACK_DEFAULT_VERSION = "master-SNAPSHOT"

# Files exchanged with the Maven plugin
CATALOG_FILE_NAME = "catalog.yaml"
DEPENDENCY_LIST_PATH = "target/dependencies.yaml"
