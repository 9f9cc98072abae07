"""Unused dependency detection - declared packages no file imports."""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from ..config import AuditConfig
from ..errors import ManifestError
from ..models import DependencyRecord, UnusedDependencyEntry
from .manifest import DependencyManifest

logger = logging.getLogger(__name__)


def is_package_specifier(specifier: str) -> bool:
    return bool(specifier) and not specifier.startswith(('.', '/'))


def package_name(specifier: str) -> Optional[str]:
    """Get the package a specifier refers to.

    Scoped packages keep their scope: '@scope/name/sub' -> '@scope/name',
    while 'lodash/map' -> 'lodash'.

    Args:
        specifier: Raw specifier string

    Returns:
        Package name, or None for relative and rooted specifiers
    """
    if not is_package_specifier(specifier):
        return None
    segments = specifier.split('/')
    if specifier.startswith('@') and len(segments) > 1:
        return '/'.join(segments[:2])
    return segments[0]


class DependencyUsageAnalyzer:
    """Cross-reference declared dependencies against extracted specifiers."""

    def __init__(self, config: AuditConfig):
        """Initialize dependency usage analyzer.

        Args:
            config: Audit settings (manifest location, allowlist predicates)
        """
        self.manifest_path = config.manifest_path
        self.allowlist_prefixes = tuple(config.allowlist_prefixes)
        self.allowlist_substrings = tuple(config.allowlist_substrings)

    def is_allowlisted(self, name: str) -> bool:
        """Check if a dependency is consumed through tooling config rather than imports.

        Covers type declaration packages, linters, bundlers, transpilers and
        the host framework.
        """
        return (
            name.startswith(self.allowlist_prefixes)
            or any(part in name for part in self.allowlist_substrings)
        )

    @staticmethod
    def referenced_packages(specifiers: Iterable[str]) -> Set[str]:
        names = set()
        for specifier in specifiers:
            name = package_name(specifier)
            if name:
                names.add(name)
        return names

    def find_unused(self, declared: Iterable[DependencyRecord], specifiers: Iterable[str]) -> List[UnusedDependencyEntry]:
        """Find declared dependencies that no specifier references.

        Args:
            declared: Dependencies from the manifest
            specifiers: Union of all files' specifier sets

        Returns:
            Unused dependency entries in manifest order
        """
        referenced = self.referenced_packages(specifiers)
        return [
            UnusedDependencyEntry(name=dep.name, version_range=dep.version_range)
            for dep in declared
            if dep.name not in referenced and not self.is_allowlisted(dep.name)
        ]

    def find_unused_from_manifest(self, specifiers: Iterable[str], manifest_path: Optional[str | Path] = None) -> List[UnusedDependencyEntry]:
        """Load the manifest and find unused dependencies.

        Fails closed: a manifest problem is logged and yields no unused
        dependencies, so the file half of the report is still produced.

        Args:
            specifiers: Union of all files' specifier sets
            manifest_path: Manifest to read (defaults to the configured one)

        Returns:
            Unused dependency entries, empty if the manifest can't be used
        """
        path = Path(manifest_path) if manifest_path else self.manifest_path
        try:
            manifest = DependencyManifest.load(path)
        except ManifestError as e:
            logger.error("Skipping dependency analysis: %s", e)
            return []

        logger.debug("Loaded %d declared dependencies from %s", len(manifest.declared), path)
        return self.find_unused(manifest.records, specifiers)
