"""
Commands package - Exports all command modules
"""

from . import scaffold

__all__ = ["scaffold"]
