"""
📅 fycal - terminal calendar with quarter and fiscal year support.
"""

from fycal.fyc_core import __version__, get_version

__all__ = ["__version__", "get_version"]
