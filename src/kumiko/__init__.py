"""Kumiko lattice cutter.

Converts a grid drawing of kumiko lattice lines into notched strips,
packs them onto stock boards and emits cut paths for a cutting machine.
"""

__version__ = "0.1.0"
