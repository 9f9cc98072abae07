"""depsweep - find unreferenced source files and unused package dependencies."""
from .config import __version__

__all__ = ["__version__"]
