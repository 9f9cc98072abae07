"""Data records shared by the collector, analyzers and report generator."""
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List


SpecifierSet = FrozenSet[str]


@dataclass(frozen=True)
class FileRecord:
    """A source file found by the collector.

    Identity is the absolute path; relative_path is POSIX-style and relative
    to the scan root.
    """
    absolute_path: Path
    relative_path: str
    byte_size: int

    @property
    def module_key(self) -> str:
        """Relative path with its last extension removed."""
        return posixpath.splitext(self.relative_path)[0]


@dataclass(frozen=True)
class UnusedFileEntry:
    relative_path: str
    byte_size: int

    def to_dict(self) -> Dict[str, Any]:
        return {'file': self.relative_path, 'size': self.byte_size}


@dataclass(frozen=True)
class DependencyRecord:
    name: str
    version_range: str


@dataclass(frozen=True)
class UnusedDependencyEntry:
    name: str
    version_range: str

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'version': self.version_range}


@dataclass
class Report:
    """Result of one audit run.

    Serialized with the camelCase keys consumers of the JSON report expect.
    """
    timestamp: str
    unused_files: List[UnusedFileEntry] = field(default_factory=list)
    unused_dependencies: List[UnusedDependencyEntry] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def total_unused_size(self) -> int:
        return sum(entry.byte_size for entry in self.unused_files)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'unusedFiles': {
                'count': len(self.unused_files),
                'totalSize': self.total_unused_size,
                'files': [entry.to_dict() for entry in self.unused_files],
            },
            'unusedDependencies': {
                'count': len(self.unused_dependencies),
                'dependencies': [entry.to_dict() for entry in self.unused_dependencies],
            },
            'recommendations': list(self.recommendations),
        }
