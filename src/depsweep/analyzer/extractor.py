"""Textual extraction of module specifiers from JavaScript/TypeScript source.

Extraction is pattern matching over raw text, not parsing. Declarations that
appear inside comments or string literals are matched too; that imprecision
is accepted in exchange for not needing a language parser.
"""
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..errors import FileReadFailure
from ..models import FileRecord, SpecifierSet

logger = logging.getLogger(__name__)


# import X from 'm' / import { a } from 'm' / import X, { a } from 'm'
# import * as ns from 'm' / import type { T } from 'm' / export { a } from 'm' / export * from 'm'
FROM_PATTERN = re.compile(
    r"""(?:import|export)\s+(?:type\s+)?"""
    r"""(?:[\w$]+\s*,\s*)?"""
    r"""(?:\{[^}]*\}|\*(?:\s+as\s+[\w$]+)?|[\w$]+)"""
    r"""\s+from\s+['"]([^'"]+)['"]"""
)

# import 'm'
BARE_IMPORT_PATTERN = re.compile(r"""import\s+['"]([^'"]+)['"]""")

# require('m') / import('m')
CALL_PATTERN = re.compile(r"""(?:require|import)\s*\(\s*['"]([^'"]+)['"]\s*\)""")

SPECIFIER_PATTERNS = (FROM_PATTERN, BARE_IMPORT_PATTERN, CALL_PATTERN)


class SpecifierExtractor:
    """Extract the set of raw module specifiers a file declares.

    Uses re.findall, which keeps no scan position between calls, so the
    result depends only on the text passed in.
    """

    def __init__(self, patterns: Iterable[re.Pattern] = SPECIFIER_PATTERNS):
        self.patterns = tuple(patterns)

    def extract(self, text: str) -> SpecifierSet:
        specifiers = set()
        for pattern in self.patterns:
            specifiers.update(pattern.findall(text))
        return frozenset(specifiers)

    def extract_file(self, path: Path) -> SpecifierSet:
        """Read a file and extract its specifiers.

        Args:
            path: File to read

        Returns:
            Specifier set

        Raises:
            FileReadFailure: If the file can't be read or decoded as UTF-8
        """
        try:
            text = Path(path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadFailure(path, str(e)) from e
        return self.extract(text)


class SpecifierIndex:
    """Specifier sets for every collected file, extracted exactly once.

    All reference checks consult this map instead of re-reading files.
    """

    def __init__(self, specifiers: Dict[str, SpecifierSet]):
        self._specifiers = specifiers

    @classmethod
    def build(cls, records: List[FileRecord], extractor: Optional[SpecifierExtractor] = None) -> "SpecifierIndex":
        """Extract every record's specifiers.

        A file that can't be read is logged and treated as declaring no
        specifiers; it is still a candidate for the unused-file check.
        """
        extractor = extractor or SpecifierExtractor()
        specifiers: Dict[str, SpecifierSet] = {}
        for record in records:
            try:
                specifiers[record.relative_path] = extractor.extract_file(record.absolute_path)
            except FileReadFailure as e:
                logger.warning("%s; treating it as declaring no imports", e)
                specifiers[record.relative_path] = frozenset()
        logger.debug(
            "Extracted %d specifiers from %d files",
            sum(len(s) for s in specifiers.values()), len(specifiers)
        )
        return cls(specifiers)

    def specifiers_for(self, record: FileRecord) -> SpecifierSet:
        return self._specifiers.get(record.relative_path, frozenset())

    def all_specifiers(self) -> SpecifierSet:
        """Union of every file's specifier set."""
        union = set()
        for specifiers in self._specifiers.values():
            union.update(specifiers)
        return frozenset(union)

    def __len__(self) -> int:
        return len(self._specifiers)
