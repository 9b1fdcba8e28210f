"""
Simulation module - sesja eksploracji (pętla ticków).
"""

from .exploration import ExplorationSession

__all__ = ["ExplorationSession"]
