"""graphlens: canonical graph store and result encoding for graph visualizers."""

__version__ = "0.1.0"
