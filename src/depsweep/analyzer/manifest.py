"""Dependency manifest (package.json) loading."""
import json
from pathlib import Path
from typing import Dict, List

from ..errors import ManifestError
from ..models import DependencyRecord

# Later sections override earlier ones on name collision
DEPENDENCY_SECTIONS = ('dependencies', 'devDependencies')


class DependencyManifest:
    """Declared runtime and development dependencies of a project."""

    def __init__(self, path: str | Path, declared: Dict[str, str]):
        self.path = Path(path)
        self.declared = declared

    @classmethod
    def load(cls, path: str | Path) -> "DependencyManifest":
        """Read a package.json and merge its dependency sections.

        Args:
            path: Path to the manifest

        Returns:
            DependencyManifest with development entries taking precedence

        Raises:
            ManifestError: If the file is missing, unreadable or malformed
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Cannot read manifest {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in manifest {path}: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError(f"Manifest {path} must contain a JSON object")

        declared: Dict[str, str] = {}
        for section in DEPENDENCY_SECTIONS:
            entries = data.get(section) or {}
            if not isinstance(entries, dict):
                raise ManifestError(f"'{section}' in {path} must be an object")
            for name, version in entries.items():
                declared[name] = str(version)

        return cls(path, declared)

    @property
    def records(self) -> List[DependencyRecord]:
        return [DependencyRecord(name, version) for name, version in self.declared.items()]
