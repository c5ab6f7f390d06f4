"""
Provides nntpstore version information.
"""

# This file is auto-generated! Do not edit!
# Use `python -m incremental.update nntpstore` to change this file.

from incremental import Version

__version__ = Version("nntpstore", 0, 1, 0)
__all__ = ["__version__"]
