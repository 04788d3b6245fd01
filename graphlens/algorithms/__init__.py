"""Graph-algorithm collaborators."""

from graphlens.algorithms.facade import AlgorithmsFacade, PathPair

__all__ = ["AlgorithmsFacade", "PathPair"]
