"""Extension layer - plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from bulkctl.plugins.hookspecs import hookimpl
from bulkctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
