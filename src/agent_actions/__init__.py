"""
agent-actions - semantic action catalog

Loads namespaced action definitions from layered YAML sources (built-in,
user, project, environment, custom paths), merges them by load order and
serves lookups and ranked search over the merged catalog.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
