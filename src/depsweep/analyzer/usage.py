"""Unused file detection - files that no other file references."""
import logging
from typing import Dict, Iterator, List, Set

import networkx as nx

from ..config import AuditConfig
from ..models import FileRecord, UnusedFileEntry
from .extractor import SpecifierIndex

logger = logging.getLogger(__name__)


def candidate_keys(specifier: str) -> Iterator[str]:
    """Yield every module key a specifier can refer to.

    A specifier matches a key when it is equal to the key, equal to './' or
    '../' plus the key, or ends with '/' plus the key. The last rule subsumes
    the two prefixed forms, so the candidates are the specifier itself and
    every tail that follows a '/'.

    Args:
        specifier: Raw specifier string, e.g. '../components/Button'

    Yields:
        Module keys, e.g. '../components/Button', 'components/Button', 'Button'
    """
    yield specifier
    start = specifier.find('/')
    while start != -1:
        tail = specifier[start + 1:]
        if tail:
            yield tail
        start = specifier.find('/', start + 1)


class UsageResolver:
    """Decide which collected files have no direct incoming reference."""

    def __init__(self, config: AuditConfig):
        """Initialize usage resolver.

        Args:
            config: Audit settings (exemption patterns, reachability mode)
        """
        self.exempt_patterns = tuple(config.exempt_patterns)
        self.reachability = config.reachability

    def is_exempt(self, record: FileRecord) -> bool:
        """Check if a file is an entry point or shared declaration file.

        Exempt files are never reported as unused, regardless of how many
        files reference them.
        """
        return any(pattern in record.relative_path for pattern in self.exempt_patterns)

    def build_graph(self, records: List[FileRecord], index: SpecifierIndex) -> nx.DiGraph:
        """Build the direct reference graph.

        Creates directed graph where edge (A, B) means "a specifier in A
        matches B's module key". Self references are dropped.

        Args:
            records: Collected files
            index: Specifier sets for those files

        Returns:
            NetworkX DiGraph keyed by relative path
        """
        graph = nx.DiGraph()
        by_key: Dict[str, List[FileRecord]] = {}
        for record in records:
            graph.add_node(record.relative_path, record=record)
            by_key.setdefault(record.module_key, []).append(record)

        for importer in records:
            for specifier in index.specifiers_for(importer):
                for key in candidate_keys(specifier):
                    for target in by_key.get(key, ()):
                        if target.relative_path != importer.relative_path:
                            graph.add_edge(importer.relative_path, target.relative_path)

        logger.debug(
            "Reference graph: %d files, %d edges",
            graph.number_of_nodes(), graph.number_of_edges()
        )
        return graph

    def find_unused(self, records: List[FileRecord], index: SpecifierIndex) -> List[UnusedFileEntry]:
        """Find non-exempt files with zero direct incoming references.

        A file imported only by another unused file still counts as used.
        With reachability enabled, files are instead required to be
        reachable from an exempt file.

        Args:
            records: Collected files
            index: Specifier sets for those files

        Returns:
            Unused file entries, largest first
        """
        graph = self.build_graph(records, index)

        if self.reachability:
            used = self._reachable_from_entry_points(records, graph)
        else:
            used = {path for path in graph.nodes if graph.in_degree(path) > 0}

        unused = [
            UnusedFileEntry(relative_path=record.relative_path, byte_size=record.byte_size)
            for record in records
            if not self.is_exempt(record) and record.relative_path not in used
        ]
        unused.sort(key=lambda entry: (-entry.byte_size, entry.relative_path))
        return unused

    def _reachable_from_entry_points(self, records: List[FileRecord], graph: nx.DiGraph) -> Set[str]:
        reachable: Set[str] = set()
        for record in records:
            if self.is_exempt(record) and record.relative_path not in reachable:
                reachable.add(record.relative_path)
                reachable |= nx.descendants(graph, record.relative_path)
        return reachable
