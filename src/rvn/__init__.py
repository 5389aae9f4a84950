"""rvn — a hierarchical Ravenfile command dispatcher.

Discovers commands defined in ``Ravenfile`` / ``Ravenfile.*`` files
between a root directory and the working directory, overlays them
root-first, and routes ``rvn <command>`` to the merged definition.
"""

from rvn.version import __version__

__all__: list[str] = ["__version__"]
