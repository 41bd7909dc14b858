"""camel-inspect: detect and resolve the dependencies of Camel K integrations."""

from camel_inspect.catalog import Catalog, CatalogProvider
from camel_inspect.models.dependency import DependencyIdentifier, DependencySet
from camel_inspect.models.source import SourceDocument
from camel_inspect.orchestrator import InspectOrchestrator
from camel_inspect.settings import InspectSettings

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CatalogProvider",
    "DependencyIdentifier",
    "DependencySet",
    "InspectOrchestrator",
    "InspectSettings",
    "SourceDocument",
]
