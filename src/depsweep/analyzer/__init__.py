"""Source scanning and usage analysis."""
from .collector import FileCollector
from .dependencies import DependencyUsageAnalyzer
from .extractor import SpecifierExtractor, SpecifierIndex
from .manifest import DependencyManifest
from .usage import UsageResolver

__all__ = [
    "DependencyManifest",
    "DependencyUsageAnalyzer",
    "FileCollector",
    "SpecifierExtractor",
    "SpecifierIndex",
    "UsageResolver",
]
