"""findstr: concurrent line search over a directory tree."""

from findstr.shared.constants import CLIDefaults

__version__ = CLIDefaults.VERSION

__all__ = ["__version__"]
