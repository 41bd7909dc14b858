"""Source scanner: detect top-level dependencies from integration sources."""

from camel_inspect.scanner.collector import DependencyCollector
from camel_inspect.scanner.scanner import scan, scan_all

__all__ = ["DependencyCollector", "scan", "scan_all"]
