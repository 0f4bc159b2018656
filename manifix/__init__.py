"""
manifix: manifest preparation for Android build graphs.

Derives the command lines of the manifest fixer and manifest merger tools from a
module's SDK constraints, library dependencies and packaging flags, and registers
those invocations as nodes in a build dependency graph.
"""

__version__ = "1.0.0"
__author__ = "manifix Team"
