"""findstr Shared Module.

This package contains shared constants, error handling and logging used across findstr.
"""

__all__ = ["constants", "errors", "logging"]
