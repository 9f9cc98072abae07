"""Configuration management for depsweep.

Loads environment variables (and an optional .env file in the audited
project) and produces an explicit AuditConfig value that every component
receives at construction.
"""
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

__version__ = "1.0.0"


DEFAULT_SOURCE_DIR = "src"
DEFAULT_REPORT_FILE = "unused-code-report.json"
DEFAULT_MANIFEST_FILE = "package.json"
DEFAULT_EXTENSIONS = ('.ts', '.tsx', '.js', '.jsx')
DEFAULT_EXCLUDE_DIRS = ('node_modules', 'dist', '.git')

# Entry points and shared declaration files are never reported as unused
DEFAULT_EXEMPT_PATTERNS = ('app.', 'index.', 'main.', 'types.', 'constants.')

# Dependencies consumed through build configuration rather than source imports
DEFAULT_ALLOWLIST_PREFIXES = ('@types/', 'eslint')
DEFAULT_ALLOWLIST_SUBSTRINGS = ('webpack', 'babel', 'taro')


@dataclass(frozen=True)
class AuditConfig:
    """Settings for a single audit run."""
    project_root: Path
    source_dir: str = DEFAULT_SOURCE_DIR
    report_file: str = DEFAULT_REPORT_FILE
    manifest_file: str = DEFAULT_MANIFEST_FILE
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    exempt_patterns: Tuple[str, ...] = DEFAULT_EXEMPT_PATTERNS
    allowlist_prefixes: Tuple[str, ...] = DEFAULT_ALLOWLIST_PREFIXES
    allowlist_substrings: Tuple[str, ...] = DEFAULT_ALLOWLIST_SUBSTRINGS
    reachability: bool = False

    @property
    def source_root(self) -> Path:
        return self.project_root / self.source_dir

    @property
    def report_path(self) -> Path:
        return self.project_root / self.report_file

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.manifest_file


class Config:
    """Environment-backed settings with a .env file in the project root."""

    def __init__(self, project_root: str | Path = "."):
        """Initialize config by loading the project's .env file.

        Args:
            project_root: Root directory of the project being audited
        """
        self.project_root = Path(project_root).resolve()
        env_path = self.project_root / ".env"
        if env_path.is_file():
            load_dotenv(env_path)

    @property
    def source_dir(self) -> str:
        """Source directory to scan, relative to the project root."""
        return os.getenv("DEPSWEEP_SOURCE_DIR", DEFAULT_SOURCE_DIR)

    @property
    def report_file(self) -> str:
        """Report location, relative to the project root."""
        return os.getenv("DEPSWEEP_REPORT_FILE", DEFAULT_REPORT_FILE)

    @property
    def manifest_file(self) -> str:
        """Dependency manifest location, relative to the project root."""
        return os.getenv("DEPSWEEP_MANIFEST", DEFAULT_MANIFEST_FILE)

    @property
    def extensions(self) -> Tuple[str, ...]:
        """File suffixes to scan.

        Returns:
            Tuple of suffixes, each with a leading dot
        """
        values = _env_list("DEPSWEEP_EXTENSIONS", DEFAULT_EXTENSIONS)
        return tuple(v if v.startswith('.') else f'.{v}' for v in values)

    @property
    def exclude_dirs(self) -> Tuple[str, ...]:
        return _env_list("DEPSWEEP_EXCLUDE_DIRS", DEFAULT_EXCLUDE_DIRS)

    @property
    def exempt_patterns(self) -> Tuple[str, ...]:
        return _env_list("DEPSWEEP_EXEMPT_PATTERNS", DEFAULT_EXEMPT_PATTERNS)

    def to_audit_config(self) -> AuditConfig:
        return AuditConfig(
            project_root=self.project_root,
            source_dir=self.source_dir,
            report_file=self.report_file,
            manifest_file=self.manifest_file,
            extensions=self.extensions,
            exclude_dirs=self.exclude_dirs,
            exempt_patterns=self.exempt_patterns,
        )


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(',') if item.strip())


def load_config(project_root: str | Path = ".", **overrides: Optional[object]) -> AuditConfig:
    """Build the AuditConfig for a project.

    Priority:
    1. Explicit keyword overrides (None values are ignored)
    2. DEPSWEEP_* environment variables, including the project's .env
    3. Built-in defaults

    Args:
        project_root: Root directory of the project being audited
        **overrides: AuditConfig field values, usually from the CLI

    Returns:
        AuditConfig instance
    """
    config = Config(project_root).to_audit_config()
    explicit = {key: value for key, value in overrides.items() if value is not None}
    if explicit:
        config = replace(config, **explicit)
    return config
