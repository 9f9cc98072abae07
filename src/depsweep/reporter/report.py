"""Report assembly, persistence and console summary."""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import AuditConfig
from ..errors import ReportWriteError
from ..models import Report, UnusedDependencyEntry, UnusedFileEntry

logger = logging.getLogger(__name__)

FILE_PREVIEW_LIMIT = 5
DEPENDENCY_PREVIEW_LIMIT = 10

UNUSED_FILE_RECOMMENDATIONS = (
    'Consider removing unused files to reduce bundle size.',
    'Verify that these files are truly unused before removing them.',
)
UNUSED_DEPENDENCY_RECOMMENDATIONS = (
    'Consider removing unused dependencies to reduce node_modules size.',
    'Some dependencies might be used indirectly, verify before removing.',
)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f'{now.microsecond // 1000:03d}Z'


def format_size(byte_size: int) -> str:
    return f"{round(byte_size / 1024, 2)} KB"


class ReportGenerator:
    """Combine both analyses into a Report, write it, and summarize it."""

    def __init__(self, config: AuditConfig):
        self.report_path = config.report_path

    def build(self, unused_files: List[UnusedFileEntry], unused_dependencies: List[UnusedDependencyEntry]) -> Report:
        """Assemble the report.

        Files are ordered largest first; recommendations are added only for
        sections that have findings.

        Args:
            unused_files: Unused file entries
            unused_dependencies: Unused dependency entries

        Returns:
            Report stamped with the current UTC time
        """
        files = sorted(unused_files, key=lambda entry: (-entry.byte_size, entry.relative_path))
        recommendations: List[str] = []
        if files:
            recommendations.extend(UNUSED_FILE_RECOMMENDATIONS)
        if unused_dependencies:
            recommendations.extend(UNUSED_DEPENDENCY_RECOMMENDATIONS)

        return Report(
            timestamp=utc_timestamp(),
            unused_files=files,
            unused_dependencies=list(unused_dependencies),
            recommendations=recommendations,
        )

    def write(self, report: Report) -> Path:
        """Write the full report as JSON, atomically.

        Args:
            report: Report to persist

        Returns:
            Path the report was written to

        Raises:
            ReportWriteError: If the report can't be written
        """
        temp_path = self.report_path.with_name(self.report_path.name + '.tmp')
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
                f.write('\n')
            temp_path.replace(self.report_path)
        except OSError as e:
            logger.error("Failed to write report to %s: %s", self.report_path, e)
            temp_path.unlink(missing_ok=True)
            raise ReportWriteError(f"Cannot write report to {self.report_path}: {e}") from e

        logger.debug("Report written to %s", self.report_path)
        return self.report_path

    def print_summary(self, report: Report, console: Console) -> None:
        """Print a truncated, human-readable view of the report.

        Args:
            report: Report to summarize
            console: Console to print to
        """
        console.print("\n[bold]--- Unused Code Analysis Summary ---[/bold]")
        console.print(f"Unused files: {len(report.unused_files)}")
        console.print(f"Total unused file size: {format_size(report.total_unused_size)}")
        console.print(f"Unused dependencies: {len(report.unused_dependencies)}")
        console.print(f"Report saved to: {escape(str(self.report_path))}")

        if report.unused_files:
            table = Table(title=f"Top {FILE_PREVIEW_LIMIT} unused files by size")
            table.add_column("File Path", style="cyan", no_wrap=False)
            table.add_column("Size", justify="right", style="magenta")
            for entry in report.unused_files[:FILE_PREVIEW_LIMIT]:
                table.add_row(escape(entry.relative_path), format_size(entry.byte_size))
            console.print()
            console.print(table)

        if report.unused_dependencies:
            console.print("\n[bold yellow]Unused dependencies:[/bold yellow]")
            for entry in report.unused_dependencies[:DEPENDENCY_PREVIEW_LIMIT]:
                console.print(f"- {escape(entry.name)}@{escape(entry.version_range)}")
            remaining = len(report.unused_dependencies) - DEPENDENCY_PREVIEW_LIMIT
            if remaining > 0:
                console.print(f"[dim]  … and {remaining} more (see report)[/dim]")

        console.print("\n[bold green]✓ Analysis complete![/bold green]")
