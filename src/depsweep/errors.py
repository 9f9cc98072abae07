"""Error taxonomy for depsweep.

Fatal errors (RootNotFound, ReportWriteError) propagate to the CLI, which
prints a diagnostic and exits non-zero. Recovered errors (FileReadFailure,
ManifestError) are logged by the component that hits them.
"""


class DepsweepError(Exception):
    """Base class for all depsweep errors."""


class RootNotFound(DepsweepError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, root):
        self.root = root
        super().__init__(f"Source root does not exist or is not a directory: {root}")


class FileReadFailure(DepsweepError):
    """A single source file could not be read or scanned."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")


class ManifestError(DepsweepError):
    """The dependency manifest is missing, unreadable or malformed."""


class ReportWriteError(DepsweepError):
    """The report artifact could not be persisted."""
